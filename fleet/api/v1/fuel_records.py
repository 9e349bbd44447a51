from fastapi import APIRouter, Depends, Query, status
from typing import Optional

from fleet.data.facade import DataAccessFacade
from fleet.dependencies import get_facade, get_admin_user, get_any_authenticated
from fleet.schemas.auth import SessionIdentity
from fleet.schemas.common import paginated_response, facade_response, paginate
from fleet.schemas.fuel_record import FuelRecordCreateRequest
from fleet.services.fuel_service import fuel_service

router = APIRouter(prefix="/fuel-records")


@router.get("", summary="List fuel records (drivers see their own)")
def list_records(
    page:          int           = Query(1, ge=1),
    limit:         int           = Query(20, ge=1, le=100),
    vehicleId:     Optional[str] = Query(None),
    paymentMethod: Optional[str] = Query(None, description="cash | bulk-account | credit"),
    facade:       DataAccessFacade = Depends(get_facade),
    current_user: SessionIdentity  = Depends(get_any_authenticated),
):
    result = fuel_service.list_records(facade, current_user, vehicleId, paymentMethod)
    return paginated_response("Fuel records retrieved successfully", paginate(result.data, page, limit),
                              len(result.data), page, limit, demoMode=result.source.value == "sample")


@router.post("", status_code=status.HTTP_201_CREATED, summary="Record a refuel (Admin)")
def create_record(
    body:   FuelRecordCreateRequest,
    facade: DataAccessFacade = Depends(get_facade),
    _:      SessionIdentity  = Depends(get_admin_user),
):
    """
    Bulk-account payments debit the account in the same atomic step.
    Returns 409 when the balance is insufficient or changed concurrently (retryable).
    """
    result = fuel_service.create_record(facade, body)
    account = None
    if body.bulk_account_id and result.durable:
        account = fuel_service.get_account(facade, body.bulk_account_id)
    return facade_response("Fuel record created successfully", result,
                           data={"record": result.data, "bulkAccount": account})
