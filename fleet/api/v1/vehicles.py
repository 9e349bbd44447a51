from fastapi import APIRouter, Depends, Query, status
from typing import Optional

from fleet.data.facade import DataAccessFacade
from fleet.dependencies import get_facade, get_admin_user, get_any_authenticated
from fleet.schemas.auth import SessionIdentity
from fleet.schemas.common import success_response, paginated_response, facade_response, paginate
from fleet.schemas.vehicle import VehicleCreateRequest, VehicleUpdateRequest, VehicleStatusRequest
from fleet.services.vehicle_service import vehicle_service

router = APIRouter(prefix="/vehicles")


@router.get("", summary="List vehicles")
def list_vehicles(
    page:   int           = Query(1, ge=1),
    limit:  int           = Query(20, ge=1, le=100),
    search: Optional[str] = Query(None),
    status: Optional[str] = Query(None, description="active | maintenance | retired"),
    facade: DataAccessFacade = Depends(get_facade),
    _:      SessionIdentity  = Depends(get_any_authenticated),
):
    result = vehicle_service.list_vehicles(facade, search, status)
    return paginated_response("Vehicles retrieved successfully", paginate(result.data, page, limit),
                              len(result.data), page, limit, demoMode=result.source.value == "sample")


@router.get("/{vehicle_id}", summary="Get vehicle detail")
def get_vehicle(
    vehicle_id: str,
    facade: DataAccessFacade = Depends(get_facade),
    _:      SessionIdentity  = Depends(get_any_authenticated),
):
    return success_response("Vehicle retrieved", vehicle_service.get_vehicle(facade, vehicle_id),
                            demoMode=facade.is_using_sample_data())


@router.post("", status_code=status.HTTP_201_CREATED, summary="Create vehicle (Admin)")
def create_vehicle(
    body:   VehicleCreateRequest,
    facade: DataAccessFacade = Depends(get_facade),
    _:      SessionIdentity  = Depends(get_admin_user),
):
    return facade_response("Vehicle created successfully", vehicle_service.create_vehicle(facade, body))


@router.put("/{vehicle_id}", summary="Update vehicle (Admin)")
def update_vehicle(
    vehicle_id: str,
    body:   VehicleUpdateRequest,
    facade: DataAccessFacade = Depends(get_facade),
    _:      SessionIdentity  = Depends(get_admin_user),
):
    return facade_response("Vehicle updated successfully", vehicle_service.update_vehicle(facade, vehicle_id, body))


@router.patch("/{vehicle_id}/status", summary="Change vehicle status (Admin)")
def update_status(
    vehicle_id: str,
    body:   VehicleStatusRequest,
    facade: DataAccessFacade = Depends(get_facade),
    _:      SessionIdentity  = Depends(get_admin_user),
):
    return facade_response("Vehicle status updated", vehicle_service.update_status(facade, vehicle_id, body))
