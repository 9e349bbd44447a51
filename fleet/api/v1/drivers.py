from fastapi import APIRouter, Depends, Query, status
from typing import Optional

from fleet.data.facade import DataAccessFacade
from fleet.dependencies import get_facade, get_admin_user, get_any_authenticated
from fleet.schemas.auth import SessionIdentity
from fleet.schemas.common import success_response, paginated_response, facade_response, paginate
from fleet.schemas.driver import DriverCreateRequest, DriverUpdateRequest
from fleet.services.driver_service import driver_service

router = APIRouter(prefix="/drivers")


@router.get("", summary="List drivers (Admin)")
def list_drivers(
    page:   int           = Query(1, ge=1),
    limit:  int           = Query(20, ge=1, le=100),
    search: Optional[str] = Query(None),
    status: Optional[str] = Query(None, description="active | inactive | suspended"),
    facade: DataAccessFacade = Depends(get_facade),
    _:      SessionIdentity  = Depends(get_admin_user),
):
    result = driver_service.list_drivers(facade, search, status)
    return paginated_response("Drivers retrieved successfully", paginate(result.data, page, limit),
                              len(result.data), page, limit, demoMode=result.source.value == "sample")


@router.get("/{driver_id}", summary="Get driver (Admin, or the driver themself)")
def get_driver(
    driver_id: str,
    facade:       DataAccessFacade = Depends(get_facade),
    current_user: SessionIdentity  = Depends(get_any_authenticated),
):
    return success_response("Driver retrieved", driver_service.get_driver(facade, driver_id, current_user),
                            demoMode=facade.is_using_sample_data())


@router.post("", status_code=status.HTTP_201_CREATED, summary="Register driver (Admin)")
def create_driver(
    body:   DriverCreateRequest,
    facade: DataAccessFacade = Depends(get_facade),
    _:      SessionIdentity  = Depends(get_admin_user),
):
    return facade_response("Driver registered successfully", driver_service.create_driver(facade, body))


@router.put("/{driver_id}", summary="Update driver (Admin)")
def update_driver(
    driver_id: str,
    body:   DriverUpdateRequest,
    facade: DataAccessFacade = Depends(get_facade),
    _:      SessionIdentity  = Depends(get_admin_user),
):
    return facade_response("Driver updated successfully", driver_service.update_driver(facade, driver_id, body))
