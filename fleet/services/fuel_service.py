import logging

from fleet.data.collections import Collection
from fleet.data.facade import DataAccessFacade, FacadeResult, BulkDebit
from fleet.models.bulk_account import BulkAccountStatus
from fleet.models.fuel_record import PaymentMethod
from fleet.schemas.auth import SessionIdentity
from fleet.schemas.fuel_record import FuelRecordCreateRequest, BulkAccountCreateRequest, DepositRequest
from fleet.utils.exceptions import (
    NotFoundException, DuplicateEntryException, ValidationFailedException,
    InvalidTransitionException, InsufficientBalanceException,
)

logger = logging.getLogger(__name__)


class FuelService:

    # ─── Fuel Records ─────────────────────────────────────────────────────────
    def list_records(
        self, facade: DataAccessFacade, identity: SessionIdentity,
        vehicle_id: str | None = None, payment_method: str | None = None,
    ) -> FacadeResult:
        result = facade.list(Collection.FUEL_RECORDS)
        items = result.data
        if not identity.is_admin:
            items = [r for r in items if identity.driverId and r.get("driver_id") == identity.driverId]
        if vehicle_id:
            items = [r for r in items if r.get("vehicle_id") == vehicle_id]
        if payment_method:
            items = [r for r in items if r.get("payment_method") == payment_method]
        result.data = items
        return result

    def create_record(self, facade: DataAccessFacade, data: FuelRecordCreateRequest) -> FacadeResult:
        """
        Record a refuel. Bulk-account payments debit the account exactly once,
        atomically with the insert, against the balance read here.
        """
        if not facade.get(Collection.VEHICLES, data.vehicle_id).data:
            raise ValidationFailedException("Vehicle does not exist", field="vehicle_id")
        if data.driver_id and not facade.get(Collection.DRIVERS, data.driver_id).data:
            raise ValidationFailedException("Driver does not exist", field="driver_id")

        total_cost = data.total_cost
        record = {**data.model_dump(mode="json"), "total_cost": total_cost}

        if data.payment_method != PaymentMethod.BULK_ACCOUNT:
            result = facade.create_fuel_record(record)
            logger.info(f"Fuel record {result.data['id']} for {data.vehicle_id}: {total_cost} ({data.payment_method.value})")
            return result

        account = facade.get(Collection.BULK_ACCOUNTS, data.bulk_account_id).data
        if not account:
            raise ValidationFailedException("Bulk account does not exist", field="bulk_account_id")
        if account.get("status") != BulkAccountStatus.ACTIVE.value:
            raise InvalidTransitionException(f"Bulk account is '{account.get('status')}', only active accounts can be charged")

        balance = float(account["current_balance"])
        if balance < total_cost:
            raise InsufficientBalanceException(balance, total_cost)

        result = facade.create_fuel_record(record, BulkDebit(account["id"], total_cost, balance))
        logger.info(
            f"Fuel record {result.data['id']} for {data.vehicle_id}: debited {total_cost} "
            f"from bulk account {account['id']} (balance was {balance})"
        )
        return result

    # ─── Bulk Accounts ────────────────────────────────────────────────────────
    def list_accounts(self, facade: DataAccessFacade, status: str | None = None) -> FacadeResult:
        result = facade.list(Collection.BULK_ACCOUNTS)
        if status:
            result.data = [a for a in result.data if a.get("status") == status]
        return result

    def get_account(self, facade: DataAccessFacade, account_id: str) -> dict:
        account = facade.get(Collection.BULK_ACCOUNTS, account_id).data
        if not account:
            raise NotFoundException("Bulk account")
        return account

    def create_account(self, facade: DataAccessFacade, data: BulkAccountCreateRequest) -> FacadeResult:
        for a in facade.list(Collection.BULK_ACCOUNTS).data:
            if a.get("account_number") == data.account_number:
                raise DuplicateEntryException("Account number already registered", field="account_number")

        record = data.model_dump(mode="json")
        record["current_balance"] = data.initial_balance
        result = facade.create(Collection.BULK_ACCOUNTS, record)
        logger.info(f"Created bulk account {data.account_number} ({data.supplier_name}) with {data.initial_balance}")
        return result

    def deposit(self, facade: DataAccessFacade, account_id: str, data: DepositRequest) -> FacadeResult:
        account = self.get_account(facade, account_id)
        balance = float(account["current_balance"])
        result = facade.credit_bulk_account(account_id, data.amount, balance)
        logger.info(
            f"Deposited {data.amount} to bulk account {account_id} (balance was {balance})"
            + (f" | Note: {data.note}" if data.note else "")
        )
        return result


fuel_service = FuelService()
