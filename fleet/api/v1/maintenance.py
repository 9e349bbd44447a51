from fastapi import APIRouter, Depends, Query, status
from typing import Optional

from fleet.data.facade import DataAccessFacade
from fleet.dependencies import get_facade, get_admin_user
from fleet.schemas.auth import SessionIdentity
from fleet.schemas.common import success_response, paginated_response, facade_response, paginate
from fleet.schemas.maintenance import MaintenanceCreateRequest, MaintenanceUpdateRequest
from fleet.services.maintenance_service import maintenance_service

router = APIRouter(prefix="/maintenance-records")


@router.get("", summary="List maintenance records (Admin)")
def list_records(
    page:      int           = Query(1, ge=1),
    limit:     int           = Query(20, ge=1, le=100),
    vehicleId: Optional[str] = Query(None),
    status:    Optional[str] = Query(None, description="scheduled | in-progress | completed | cancelled"),
    type:      Optional[str] = Query(None, description="routine | repair | emergency | inspection"),
    facade:    DataAccessFacade = Depends(get_facade),
    _:         SessionIdentity  = Depends(get_admin_user),
):
    result = maintenance_service.list_records(facade, vehicleId, status, type)
    return paginated_response("Maintenance records retrieved", paginate(result.data, page, limit),
                              len(result.data), page, limit, demoMode=result.source.value == "sample")


@router.get("/{record_id}", summary="Get maintenance record (Admin)")
def get_record(
    record_id: str,
    facade: DataAccessFacade = Depends(get_facade),
    _:      SessionIdentity  = Depends(get_admin_user),
):
    return success_response("Maintenance record retrieved", maintenance_service.get_record(facade, record_id),
                            demoMode=facade.is_using_sample_data())


@router.post("", status_code=status.HTTP_201_CREATED, summary="Log maintenance (Admin)")
def create_record(
    body:   MaintenanceCreateRequest,
    facade: DataAccessFacade = Depends(get_facade),
    _:      SessionIdentity  = Depends(get_admin_user),
):
    return facade_response("Maintenance record created", maintenance_service.create_record(facade, body))


@router.put("/{record_id}", summary="Update maintenance record (Admin)")
def update_record(
    record_id: str,
    body:   MaintenanceUpdateRequest,
    facade: DataAccessFacade = Depends(get_facade),
    _:      SessionIdentity  = Depends(get_admin_user),
):
    return facade_response("Maintenance record updated", maintenance_service.update_record(facade, record_id, body))
