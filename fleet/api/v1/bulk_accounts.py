from fastapi import APIRouter, Depends, Query, status
from typing import Optional

from fleet.data.facade import DataAccessFacade
from fleet.dependencies import get_facade, get_admin_user
from fleet.schemas.auth import SessionIdentity
from fleet.schemas.common import success_response, facade_response
from fleet.schemas.fuel_record import BulkAccountCreateRequest, DepositRequest
from fleet.services.fuel_service import fuel_service

router = APIRouter(prefix="/bulk-accounts")


@router.get("", summary="List bulk fuel accounts (Admin)")
def list_accounts(
    status: Optional[str] = Query(None, description="active | inactive | suspended"),
    facade: DataAccessFacade = Depends(get_facade),
    _:      SessionIdentity  = Depends(get_admin_user),
):
    return facade_response("Bulk accounts retrieved", fuel_service.list_accounts(facade, status))


@router.get("/{account_id}", summary="Get bulk account (Admin)")
def get_account(
    account_id: str,
    facade: DataAccessFacade = Depends(get_facade),
    _:      SessionIdentity  = Depends(get_admin_user),
):
    return success_response("Bulk account retrieved", fuel_service.get_account(facade, account_id),
                            demoMode=facade.is_using_sample_data())


@router.post("", status_code=status.HTTP_201_CREATED, summary="Open bulk account (Admin)")
def create_account(
    body:   BulkAccountCreateRequest,
    facade: DataAccessFacade = Depends(get_facade),
    _:      SessionIdentity  = Depends(get_admin_user),
):
    return facade_response("Bulk account created successfully", fuel_service.create_account(facade, body))


@router.post("/{account_id}/deposit", summary="Deposit to bulk account (Admin)")
def deposit(
    account_id: str,
    body:   DepositRequest,
    facade: DataAccessFacade = Depends(get_facade),
    _:      SessionIdentity  = Depends(get_admin_user),
):
    return facade_response("Deposit recorded", fuel_service.deposit(facade, account_id, body))
