import enum
import uuid
from datetime import datetime, timezone


class Collection(str, enum.Enum):
    VEHICLES            = "vehicles"
    DRIVERS             = "drivers"
    WORK_TICKETS        = "work_tickets"
    FUEL_RECORDS        = "fuel_records"
    BULK_ACCOUNTS       = "bulk_accounts"
    MAINTENANCE_RECORDS = "maintenance_records"
    COMPONENTS          = "components"
    TRANSFERS           = "transfers"


# Keys used by the local fallback store, one per collection
STORAGE_KEYS: dict[Collection, str] = {
    Collection.VEHICLES:            "fleet_vehicles",
    Collection.DRIVERS:             "fleet_drivers",
    Collection.WORK_TICKETS:        "fleet_work_tickets",
    Collection.FUEL_RECORDS:        "fleet_fuel_records",
    Collection.BULK_ACCOUNTS:       "fleet_bulk_accounts",
    Collection.MAINTENANCE_RECORDS: "fleet_maintenance_records",
    Collection.COMPONENTS:          "fleet_components",
    Collection.TRANSFERS:           "fleet_transfers",
}

ID_PREFIXES: dict[Collection, str] = {
    Collection.VEHICLES:            "vehicle",
    Collection.DRIVERS:             "driver",
    Collection.WORK_TICKETS:        "ticket",
    Collection.FUEL_RECORDS:        "fuel",
    Collection.BULK_ACCOUNTS:       "bulk",
    Collection.MAINTENANCE_RECORDS: "maint",
    Collection.COMPONENTS:          "component",
    Collection.TRANSFERS:           "transfer",
}

SINGULAR_NAMES: dict[Collection, str] = {
    Collection.VEHICLES:            "Vehicle",
    Collection.DRIVERS:             "Driver",
    Collection.WORK_TICKETS:        "Work ticket",
    Collection.FUEL_RECORDS:        "Fuel record",
    Collection.BULK_ACCOUNTS:       "Bulk account",
    Collection.MAINTENANCE_RECORDS: "Maintenance record",
    Collection.COMPONENTS:          "Component",
    Collection.TRANSFERS:           "Vehicle transfer",
}


def utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def new_record_id(collection: Collection) -> str:
    return f"{ID_PREFIXES[collection]}-{uuid.uuid4().hex[:12]}"


def stamp_new_record(collection: Collection, record: dict) -> dict:
    """Return a copy of `record` with a generated id and fresh timestamps."""
    now = utc_now_iso()
    stamped = dict(record)
    stamped["id"] = new_record_id(collection)
    stamped["created_at"] = now
    stamped["updated_at"] = now
    return stamped


def sort_by_recency(records: list[dict]) -> list[dict]:
    return sorted(records, key=lambda r: r.get("created_at") or "", reverse=True)
