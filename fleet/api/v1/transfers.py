from fastapi import APIRouter, Depends, Query, status
from typing import Optional

from fleet.data.facade import DataAccessFacade
from fleet.dependencies import get_facade, get_admin_user
from fleet.schemas.auth import SessionIdentity
from fleet.schemas.common import success_response, paginated_response, paginate
from fleet.schemas.transfer import TransferCreateRequest
from fleet.services.transfer_service import transfer_service

router = APIRouter(prefix="/transfers")


@router.get("", summary="List vehicle transfers (Admin)")
def list_transfers(
    page:      int           = Query(1, ge=1),
    limit:     int           = Query(20, ge=1, le=100),
    vehicleId: Optional[str] = Query(None),
    facade:    DataAccessFacade = Depends(get_facade),
    _:         SessionIdentity  = Depends(get_admin_user),
):
    result = transfer_service.list_transfers(facade, vehicleId)
    return paginated_response("Transfers retrieved", paginate(result.data, page, limit),
                              len(result.data), page, limit, demoMode=result.source.value == "sample")


@router.get("/{transfer_id}", summary="Get vehicle transfer (Admin)")
def get_transfer(
    transfer_id: str,
    facade: DataAccessFacade = Depends(get_facade),
    _:      SessionIdentity  = Depends(get_admin_user),
):
    return success_response("Transfer retrieved", transfer_service.get_transfer(facade, transfer_id),
                            demoMode=facade.is_using_sample_data())


@router.post("", status_code=status.HTTP_201_CREATED, summary="Transfer a vehicle (Admin)")
def create_transfer(
    body:   TransferCreateRequest,
    facade: DataAccessFacade = Depends(get_facade),
    _:      SessionIdentity  = Depends(get_admin_user),
):
    """Records the transfer and moves the vehicle to the new department and location."""
    transfer, vehicle = transfer_service.create_transfer(facade, body)
    return success_response(
        "Vehicle transferred",
        {"transfer": transfer.data, "vehicle": vehicle.data},
        demoMode=transfer.source.value == "sample",
        durable=transfer.durable and vehicle.durable,
    )
