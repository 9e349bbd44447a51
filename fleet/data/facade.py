"""
Data Access Facade: the single place that knows where data lives right now.

At startup the facade probes the remote database once and latches either
remote mode or sample-data mode for the rest of the process. Callers never
branch on the mode; they get a FacadeResult of the same shape either way.

Failure policy for backend unavailability:
  * reads (list/get) fall back to sample data for that one call, the latch
    is left alone; get_current, used before a transition, does not fall back;
  * writes raise BackendUnavailableException, unless RESILIENT_WRITES is on,
    in which case a synthesized result with durable=False is returned and
    nothing is written anywhere. A "success" from this facade therefore does
    not guarantee durability in resilient mode.
Invalid transitions and compare-and-set conflicts are always raised.
"""

import enum
import logging
import threading
from dataclasses import dataclass
from typing import Any, Callable

from sqlalchemy.exc import SQLAlchemyError

from fleet.data.collections import Collection, SINGULAR_NAMES, stamp_new_record, utc_now_iso
from fleet.data.fallback_store import PersistenceFallbackStore
from fleet.data.remote_gateway import RemoteDataGateway
from fleet.data.sample_data import SampleDataProvider
from fleet.database import build_engine
from fleet.models.work_ticket import WorkTicketStatus
from fleet.utils.exceptions import (
    BackendUnavailableException, BalanceChangedException,
    InvalidTransitionException, NotFoundException,
)

logger = logging.getLogger(__name__)


class DataSource(str, enum.Enum):
    REMOTE = "remote"
    SAMPLE = "sample"


@dataclass
class FacadeResult:
    data: Any
    source: DataSource
    durable: bool = True


@dataclass
class BulkDebit:
    account_id: str
    amount: float
    expected_balance: float


class DataAccessFacade:

    def __init__(
        self,
        sample: SampleDataProvider,
        gateway: RemoteDataGateway | None = None,
        force_sample_data: bool = False,
        resilient_writes: bool = False,
        init_timeout: float = 10.0,
    ):
        self._sample = sample
        self._gateway = gateway
        self._force_sample_data = force_sample_data
        self._resilient_writes = resilient_writes
        self._init_timeout = init_timeout

        self._initialized = threading.Event()
        self._init_lock = threading.Lock()
        self._init_started = False
        self._use_sample_data = True

    @classmethod
    def from_settings(cls, settings) -> "DataAccessFacade":
        store = PersistenceFallbackStore(settings.FALLBACK_STORE_DIR, settings.FALLBACK_DATA_VERSION)
        gateway = None
        if settings.DATABASE_URL and not settings.FORCE_SAMPLE_DATA:
            try:
                gateway = RemoteDataGateway(build_engine(settings.DATABASE_URL))
            except (SQLAlchemyError, ImportError) as e:
                logger.error(f"Could not configure remote database: {e}")
        return cls(
            SampleDataProvider(store),
            gateway,
            force_sample_data=settings.FORCE_SAMPLE_DATA,
            resilient_writes=settings.RESILIENT_WRITES,
            init_timeout=settings.INIT_TIMEOUT_SECONDS,
        )

    @property
    def sample(self) -> SampleDataProvider:
        return self._sample

    # ═══════════════════════════════════════════════════════════════════════════
    # Mode latch
    # ═══════════════════════════════════════════════════════════════════════════
    def initialize(self) -> None:
        """Decide remote vs sample mode once. Later calls are no-ops."""
        with self._init_lock:
            if self._init_started:
                return
            self._init_started = True

        use_sample = True
        try:
            if self._force_sample_data:
                logger.info("FORCE_SAMPLE_DATA set, using sample data")
            elif self._gateway is None:
                logger.info("No remote database configured, using sample data")
            else:
                self._gateway.probe()
                use_sample = False
                logger.info("✅ Remote database reachable, using remote data")
        except BackendUnavailableException:
            logger.warning("❌ Remote database probe failed, switching to sample data (demo mode)")
        finally:
            self._use_sample_data = use_sample
            self._initialized.set()

    def start_initialization(self) -> threading.Thread:
        """Run initialize() on a background thread so startup is not blocked by the probe."""
        thread = threading.Thread(target=self.initialize, name="facade-init", daemon=True)
        thread.start()
        return thread

    def is_using_sample_data(self) -> bool:
        return self._use_sample_data

    def wait_for_initialization(self, timeout: float | None = None) -> bool:
        """
        Block until the mode is latched. Returns False on timeout and never
        raises; callers treat a timeout as "not connected yet".
        """
        return self._initialized.wait(self._init_timeout if timeout is None else timeout)

    def _remote_active(self) -> bool:
        if not self.wait_for_initialization():
            logger.warning("Data facade not initialized in time, serving sample data")
            return False
        return not self._use_sample_data and self._gateway is not None

    # ═══════════════════════════════════════════════════════════════════════════
    # Routing helpers
    # ═══════════════════════════════════════════════════════════════════════════
    def _read(self, what: str, remote: Callable[[], Any], sample: Callable[[], Any]) -> FacadeResult:
        if self._remote_active():
            try:
                return FacadeResult(remote(), DataSource.REMOTE)
            except BackendUnavailableException:
                logger.warning(f"Remote read of {what} failed, serving sample data for this call")
        return FacadeResult(sample(), DataSource.SAMPLE)

    def _write(
        self, what: str,
        remote: Callable[[], Any], sample: Callable[[], Any], synthesize: Callable[[], Any],
    ) -> FacadeResult:
        if not self._remote_active():
            return FacadeResult(sample(), DataSource.SAMPLE)
        try:
            return FacadeResult(remote(), DataSource.REMOTE)
        except BackendUnavailableException:
            if not self._resilient_writes:
                raise
            logger.warning(f"Remote write of {what} failed, reporting non-durable success")
            return FacadeResult(synthesize(), DataSource.REMOTE, durable=False)

    def _backend(self):
        return self._gateway if self._remote_active() else self._sample

    # ═══════════════════════════════════════════════════════════════════════════
    # Generic CRUD
    # ═══════════════════════════════════════════════════════════════════════════
    def list(self, collection: Collection) -> FacadeResult:
        return self._read(
            collection.value,
            lambda: self._gateway.list_all(collection),
            lambda: self._sample.list(collection),
        )

    def get(self, collection: Collection, record_id: str) -> FacadeResult:
        return self._read(
            f"{collection.value}/{record_id}",
            lambda: self._gateway.get(collection, record_id),
            lambda: self._sample.get(collection, record_id),
        )

    def get_current(self, collection: Collection, record_id: str) -> FacadeResult:
        """
        Read that decides a state transition. No per-call fallback: in remote
        mode an outage raises BackendUnavailableException instead of looking
        like a missing record.
        """
        if not self._remote_active():
            return FacadeResult(self._sample.get(collection, record_id), DataSource.SAMPLE)
        return FacadeResult(self._gateway.get(collection, record_id), DataSource.REMOTE)

    def create(self, collection: Collection, record: dict) -> FacadeResult:
        return self._write(
            collection.value,
            lambda: self._gateway.insert(collection, record),
            lambda: self._sample.insert(collection, record),
            lambda: stamp_new_record(collection, record),
        )

    def update(
        self, collection: Collection, record_id: str, changes: dict, current: dict | None = None,
    ) -> FacadeResult:
        result = self._write(
            f"{collection.value}/{record_id}",
            lambda: self._gateway.update(collection, record_id, changes),
            lambda: self._sample.update(collection, record_id, changes),
            lambda: {**(current or {"id": record_id}), **changes, "updated_at": utc_now_iso()},
        )
        if result.data is None:
            raise NotFoundException(SINGULAR_NAMES[collection])
        return result

    # ═══════════════════════════════════════════════════════════════════════════
    # Work-ticket transitions
    # ═══════════════════════════════════════════════════════════════════════════
    def _transition_ticket(self, ticket_id: str, changes: dict, current: dict | None) -> FacadeResult:
        expected = {"status": WorkTicketStatus.PENDING.value}
        result = self._write(
            f"work_tickets/{ticket_id}",
            lambda: self._gateway.conditional_update(Collection.WORK_TICKETS, ticket_id, expected, changes),
            lambda: self._sample.conditional_update(Collection.WORK_TICKETS, ticket_id, expected, changes),
            lambda: {**(current or {"id": ticket_id}), **changes, "updated_at": utc_now_iso()},
        )
        if result.data is not None:
            return result

        latest = self._backend().get(Collection.WORK_TICKETS, ticket_id)
        if latest is None:
            raise NotFoundException("Work ticket")
        raise InvalidTransitionException(
            f"Work ticket is '{latest['status']}', only pending tickets can be actioned"
        )

    def approve_work_ticket(self, ticket_id: str, changes: dict, current: dict | None = None) -> FacadeResult:
        return self._transition_ticket(ticket_id, changes, current)

    def reject_work_ticket(self, ticket_id: str, changes: dict, current: dict | None = None) -> FacadeResult:
        return self._transition_ticket(ticket_id, changes, current)

    # ═══════════════════════════════════════════════════════════════════════════
    # Fuel records & bulk accounts
    # ═══════════════════════════════════════════════════════════════════════════
    def _balance_conflict(self, account_id: str):
        if self._backend().get(Collection.BULK_ACCOUNTS, account_id) is None:
            return NotFoundException("Bulk account")
        return BalanceChangedException()

    def create_fuel_record(self, record: dict, debit: BulkDebit | None = None) -> FacadeResult:
        """Insert a fuel record; with a debit, charge the bulk account in the same atomic step."""
        if debit is None:
            return self.create(Collection.FUEL_RECORDS, record)

        def run(backend):
            outcome = backend.insert_with_debit(
                Collection.FUEL_RECORDS, record,
                debit.account_id, debit.amount, debit.expected_balance,
            )
            if outcome is None:
                raise self._balance_conflict(debit.account_id)
            return outcome[0]

        return self._write(
            f"fuel_records (debit {debit.account_id})",
            lambda: run(self._gateway),
            lambda: run(self._sample),
            lambda: stamp_new_record(Collection.FUEL_RECORDS, record),
        )

    def credit_bulk_account(self, account_id: str, amount: float, expected_balance: float) -> FacadeResult:
        def run(backend):
            account = backend.change_balance(account_id, amount, expected_balance)
            if account is None:
                raise self._balance_conflict(account_id)
            return account

        return self._write(
            f"bulk_accounts/{account_id} (credit)",
            lambda: run(self._gateway),
            lambda: run(self._sample),
            lambda: {"id": account_id, "current_balance": round(expected_balance + amount, 2)},
        )
