from fastapi import APIRouter, Depends, Query, status
from typing import Optional

from fleet.data.facade import DataAccessFacade
from fleet.dependencies import get_facade, get_admin_user
from fleet.schemas.auth import SessionIdentity
from fleet.schemas.common import success_response, paginated_response, facade_response, paginate
from fleet.schemas.component import (
    ComponentCreateRequest, ComponentUpdateRequest, ComponentRemovalRequest,
)
from fleet.services.component_service import component_service

router = APIRouter(prefix="/components")


@router.get("", summary="List tires and batteries (Admin)")
def list_components(
    page:      int           = Query(1, ge=1),
    limit:     int           = Query(20, ge=1, le=100),
    vehicleId: Optional[str] = Query(None),
    type:      Optional[str] = Query(None, description="tire | battery"),
    status:    Optional[str] = Query(None, description="active | removed | replaced"),
    facade:    DataAccessFacade = Depends(get_facade),
    _:         SessionIdentity  = Depends(get_admin_user),
):
    result = component_service.list_components(facade, vehicleId, type, status)
    return paginated_response("Components retrieved", paginate(result.data, page, limit),
                              len(result.data), page, limit, demoMode=result.source.value == "sample")


@router.get("/{component_id}", summary="Get component (Admin)")
def get_component(
    component_id: str,
    facade: DataAccessFacade = Depends(get_facade),
    _:      SessionIdentity  = Depends(get_admin_user),
):
    return success_response("Component retrieved", component_service.get_component(facade, component_id),
                            demoMode=facade.is_using_sample_data())


@router.post("", status_code=status.HTTP_201_CREATED, summary="Install a component (Admin)")
def create_component(
    body:   ComponentCreateRequest,
    facade: DataAccessFacade = Depends(get_facade),
    _:      SessionIdentity  = Depends(get_admin_user),
):
    return facade_response("Component installed", component_service.create_component(facade, body))


@router.put("/{component_id}", summary="Update component details (Admin)")
def update_component(
    component_id: str,
    body:   ComponentUpdateRequest,
    facade: DataAccessFacade = Depends(get_facade),
    _:      SessionIdentity  = Depends(get_admin_user),
):
    return facade_response("Component updated", component_service.update_component(facade, component_id, body))


@router.patch("/{component_id}/remove", summary="Remove or replace a component (Admin)")
def remove_component(
    component_id: str,
    body:   ComponentRemovalRequest = ComponentRemovalRequest(),
    facade: DataAccessFacade = Depends(get_facade),
    _:      SessionIdentity  = Depends(get_admin_user),
):
    return facade_response("Component removed", component_service.remove_component(facade, component_id, body))
