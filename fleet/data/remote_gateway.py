"""
Remote Data Gateway: CRUD against the hosted relational database.

One table per collection. Rows leave the gateway as JSON-ready dicts with the
same shape the Sample Data Provider produces. Driver-level failures surface as
BackendUnavailableException; constraint violations (IntegrityError) propagate
untouched because they are not availability problems.
"""

import logging
from contextlib import contextmanager
from datetime import date, datetime, timezone

from sqlalchemy import Date, DateTime, select, update
from sqlalchemy.engine import Engine
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from fleet.data.collections import Collection, stamp_new_record
from fleet.database import Base, build_session_factory
from fleet.models import (
    Vehicle, Driver, WorkTicket, FuelRecord, BulkAccount, MaintenanceRecord,
    Component, VehicleTransfer,
)
from fleet.utils.exceptions import BackendUnavailableException

logger = logging.getLogger(__name__)


TABLES = {
    Collection.VEHICLES:            Vehicle,
    Collection.DRIVERS:             Driver,
    Collection.WORK_TICKETS:        WorkTicket,
    Collection.FUEL_RECORDS:        FuelRecord,
    Collection.BULK_ACCOUNTS:       BulkAccount,
    Collection.MAINTENANCE_RECORDS: MaintenanceRecord,
    Collection.COMPONENTS:          Component,
    Collection.TRANSFERS:           VehicleTransfer,
}


def _to_json(value):
    if isinstance(value, datetime):
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return value.isoformat()
    if isinstance(value, date):
        return value.isoformat()
    return value


def _serialize(row) -> dict:
    return {col.name: _to_json(getattr(row, col.key)) for col in row.__table__.columns}


def _coerce(model, values: dict) -> dict:
    """Keep only real columns and parse ISO strings for date/timestamp columns."""
    columns = model.__table__.columns
    coerced = {}
    for key, value in values.items():
        if key not in columns:
            logger.debug(f"Dropping unknown field '{key}' for table {model.__tablename__}")
            continue
        col_type = columns[key].type
        if isinstance(value, str) and value:
            if isinstance(col_type, DateTime):
                value = datetime.fromisoformat(value)
            elif isinstance(col_type, Date):
                value = date.fromisoformat(value[:10])
        coerced[key] = value
    return coerced


class RemoteDataGateway:

    def __init__(self, engine: Engine):
        self._engine = engine
        self._session_factory = build_session_factory(engine)

    @contextmanager
    def _session(self):
        db: Session = self._session_factory()
        try:
            yield db
        except IntegrityError:
            db.rollback()
            raise
        except SQLAlchemyError as e:
            db.rollback()
            logger.warning(f"Remote data service error: {e}")
            raise BackendUnavailableException() from e
        finally:
            db.close()

    def create_schema(self) -> None:
        """Create every table (tests and first-run setups; production uses Alembic)."""
        import fleet.models  # noqa: F401, registers models on Base.metadata
        Base.metadata.create_all(self._engine)

    # ─── Connectivity ─────────────────────────────────────────────────────────
    def probe(self) -> bool:
        """Cheap read against one table. Raises BackendUnavailableException on failure."""
        with self._session() as db:
            db.execute(select(Vehicle.id).limit(1)).all()
        return True

    # ─── Reads ────────────────────────────────────────────────────────────────
    def list_all(self, collection: Collection) -> list[dict]:
        model = TABLES[collection]
        with self._session() as db:
            rows = db.execute(select(model).order_by(model.created_at.desc())).scalars().all()
            return [_serialize(r) for r in rows]

    def get(self, collection: Collection, record_id: str) -> dict | None:
        with self._session() as db:
            row = db.get(TABLES[collection], record_id)
            return _serialize(row) if row else None

    # ─── Writes ───────────────────────────────────────────────────────────────
    def insert(self, collection: Collection, record: dict) -> dict:
        model = TABLES[collection]
        with self._session() as db:
            row = model(**_coerce(model, stamp_new_record(collection, record)))
            db.add(row)
            db.commit()
            db.refresh(row)
            return _serialize(row)

    def update(self, collection: Collection, record_id: str, changes: dict) -> dict | None:
        return self.conditional_update(collection, record_id, {}, changes)

    def conditional_update(
        self, collection: Collection, record_id: str, expected: dict, changes: dict,
    ) -> dict | None:
        """
        UPDATE ... WHERE id = :id AND <expected>. Returns the updated row, or
        None when no row matched (missing record or condition no longer holds).
        """
        model = TABLES[collection]
        values = _coerce(model, {**changes, "updated_at": datetime.now(timezone.utc).isoformat()})
        values.pop("id", None)
        conditions = [model.id == record_id]
        conditions += [getattr(model, k) == v for k, v in _coerce(model, expected).items()]

        with self._session() as db:
            result = db.execute(
                update(model).where(*conditions).values(**values)
                .execution_options(synchronize_session=False)
            )
            if result.rowcount == 0:
                db.rollback()
                return None
            db.commit()
            return _serialize(db.get(model, record_id))

    def _compare_and_set_balance(self, db: Session, account_id: str, delta: float, expected_balance: float) -> bool:
        result = db.execute(
            update(BulkAccount)
            .where(
                BulkAccount.id == account_id,
                BulkAccount.current_balance == round(float(expected_balance), 2),
            )
            .values(
                current_balance=round(float(expected_balance) + delta, 2),
                updated_at=datetime.now(timezone.utc),
            )
            .execution_options(synchronize_session=False)
        )
        return result.rowcount == 1

    def change_balance(self, account_id: str, delta: float, expected_balance: float) -> dict | None:
        """Compare-and-set on current_balance. None when missing or the balance moved."""
        with self._session() as db:
            if not self._compare_and_set_balance(db, account_id, delta, expected_balance):
                db.rollback()
                return None
            db.commit()
            return _serialize(db.get(BulkAccount, account_id))

    def insert_with_debit(
        self, collection: Collection, record: dict,
        account_id: str, amount: float, expected_balance: float,
    ) -> tuple[dict, dict] | None:
        """Debit the account and insert the record in one transaction."""
        model = TABLES[collection]
        with self._session() as db:
            if not self._compare_and_set_balance(db, account_id, -amount, expected_balance):
                db.rollback()
                return None
            row = model(**_coerce(model, stamp_new_record(collection, record)))
            db.add(row)
            db.commit()
            db.refresh(row)
            return _serialize(row), _serialize(db.get(BulkAccount, account_id))
