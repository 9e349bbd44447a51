"""
Sample Data Provider: seed records served when no remote backend is reachable.

Every seeded work ticket, fuel record, maintenance record, component and
transfer references a seeded driver/vehicle/bulk account. Each collection
starts from whatever the fallback store already holds; the seed is only the
default.
"""

import copy
import logging
from functools import lru_cache
from threading import RLock

from fleet.data.collections import (
    Collection, STORAGE_KEYS, stamp_new_record, sort_by_recency, utc_now_iso,
)
from fleet.data.fallback_store import PersistenceFallbackStore
from fleet.utils.security import hash_password

logger = logging.getLogger(__name__)

SEED_DRIVER_PASSWORD = "driver123"


@lru_cache(maxsize=1)
def _seed_password_hash() -> str:
    return hash_password(SEED_DRIVER_PASSWORD)


# ─── Seed Records ─────────────────────────────────────────────────────────────
def _seed_vehicles() -> list[dict]:
    return [
        {
            "id": "vehicle-1",
            "registration_number": "GK 001 A",
            "make": "Toyota",
            "model": "Hilux",
            "year": 2023,
            "engine_number": "ENG123456",
            "chassis_number": "CHS789012",
            "acquisition_date": "2023-01-15",
            "status": "active",
            "department": "State Department for Energy",
            "location": "Nairobi HQ",
            "color": "White",
            "fuel_type": "diesel",
            "seating_capacity": 5,
            "equipment": ["Fire extinguisher", "First aid kit", "Toolkit", "Spare tire"],
            "notes": "Primary field work vehicle",
            "created_at": "2023-01-15T10:00:00+00:00",
            "updated_at": "2024-01-15T10:00:00+00:00",
        },
        {
            "id": "vehicle-2",
            "registration_number": "GK 002 B",
            "make": "Mitsubishi",
            "model": "Pajero",
            "year": 2022,
            "engine_number": "ENG789012",
            "chassis_number": "CHS345678",
            "acquisition_date": "2022-08-20",
            "status": "active",
            "department": "State Department for Energy",
            "location": "Mombasa Office",
            "color": "Silver",
            "fuel_type": "diesel",
            "seating_capacity": 7,
            "equipment": ["Fire extinguisher", "First aid kit", "GPS tracker", "Emergency kit"],
            "notes": "Coastal region assignments",
            "created_at": "2022-08-20T11:30:00+00:00",
            "updated_at": "2024-01-10T11:30:00+00:00",
        },
        {
            "id": "vehicle-3",
            "registration_number": "GK 003 C",
            "make": "Toyota",
            "model": "Land Cruiser",
            "year": 2024,
            "engine_number": "ENG345678",
            "chassis_number": "CHS901234",
            "acquisition_date": "2024-02-10",
            "status": "active",
            "department": "State Department for Energy",
            "location": "Kisumu Office",
            "color": "Blue",
            "fuel_type": "diesel",
            "seating_capacity": 8,
            "equipment": ["Fire extinguisher", "First aid kit", "Winch", "Off-road kit", "Satellite phone"],
            "notes": "Heavy-duty assignments and remote areas",
            "created_at": "2024-02-10T13:45:00+00:00",
            "updated_at": "2024-02-10T13:45:00+00:00",
        },
    ]


def _seed_drivers() -> list[dict]:
    password_hash = _seed_password_hash()
    return [
        {
            "id": "driver-1",
            "name": "John Smith",
            "employee_id": "EMP001",
            "license_number": "DL123456",
            "license_class": "B",
            "license_expiry_date": "2025-12-31",
            "phone": "+254 700 123 456",
            "email": "john.smith@energy.go.ke",
            "department": "State Department for Energy",
            "status": "active",
            "username": "jsmith",
            "password_hash": password_hash,
            "date_joined": "2023-01-15",
            "notes": "Experienced driver with clean record",
            "created_at": "2023-01-15T10:00:00+00:00",
            "updated_at": "2024-01-15T10:00:00+00:00",
        },
        {
            "id": "driver-2",
            "name": "Mary Wanjiku",
            "employee_id": "EMP002",
            "license_number": "DL654321",
            "license_class": "C",
            "license_expiry_date": "2025-08-15",
            "phone": "+254 701 234 567",
            "email": "mary.wanjiku@energy.go.ke",
            "department": "State Department for Energy",
            "status": "active",
            "username": "mwanjiku",
            "password_hash": password_hash,
            "date_joined": "2023-03-10",
            "notes": "Certified for heavy vehicles",
            "created_at": "2023-03-10T09:30:00+00:00",
            "updated_at": "2024-01-10T09:30:00+00:00",
        },
        {
            "id": "driver-3",
            "name": "Peter Kipchoge",
            "employee_id": "EMP003",
            "license_number": "DL789012",
            "license_class": "B",
            "license_expiry_date": "2025-06-20",
            "phone": "+254 702 345 678",
            "email": "peter.kipchoge@energy.go.ke",
            "department": "State Department for Energy",
            "status": "active",
            "username": "pkipchoge",
            "password_hash": password_hash,
            "date_joined": "2023-06-01",
            "notes": "Specialized in long-distance travel",
            "created_at": "2023-06-01T14:20:00+00:00",
            "updated_at": "2024-01-01T14:20:00+00:00",
        },
    ]


def _ticket(ticket_id, driver, vehicle, **fields) -> dict:
    base = {
        "id": ticket_id,
        "driver_id": driver[0],
        "driver_name": driver[1],
        "driver_license": driver[2],
        "driver_email": driver[3],
        "vehicle_id": vehicle[0],
        "vehicle_registration": vehicle[1],
        "approved_by": None,
        "approved_at": None,
        "rejected_by": None,
        "rejected_at": None,
        "rejection_reason": None,
    }
    base.update(fields)
    base.setdefault("updated_at", base["created_at"])
    return base


def _seed_work_tickets() -> list[dict]:
    smith = ("driver-1", "John Smith", "DL123456", "john.smith@energy.go.ke")
    wanjiku = ("driver-2", "Mary Wanjiku", "DL654321", "mary.wanjiku@energy.go.ke")
    kipchoge = ("driver-3", "Peter Kipchoge", "DL789012", "peter.kipchoge@energy.go.ke")
    return [
        _ticket(
            "ticket-1", smith, ("vehicle-1", "GK 001 A"),
            destination="Nakuru Geothermal Plant",
            purpose="Routine inspection and data collection",
            fuel_required=80.0, estimated_distance=320.0,
            departure_date="2024-01-20", return_date="2024-01-21",
            additional_notes="Overnight stay required for comprehensive inspection",
            status="approved",
            created_at="2024-01-18T09:00:00+00:00",
            approved_by="System Administrator",
            approved_at="2024-01-18T14:30:00+00:00",
            updated_at="2024-01-18T14:30:00+00:00",
        ),
        _ticket(
            "ticket-2", wanjiku, ("vehicle-2", "GK 002 B"),
            destination="Mombasa Port Authority",
            purpose="Equipment delivery and coordination meeting",
            fuel_required=120.0, estimated_distance=480.0,
            departure_date="2024-01-22", return_date="2024-01-23",
            additional_notes="Transporting sensitive equipment - extra care required",
            status="pending",
            created_at="2024-01-19T11:15:00+00:00",
        ),
        _ticket(
            "ticket-3", kipchoge, ("vehicle-3", "GK 003 C"),
            destination="Eldoret Regional Office",
            purpose="Monthly regional meeting and report submission",
            fuel_required=100.0, estimated_distance=420.0,
            departure_date="2024-01-25", return_date="2024-01-25",
            additional_notes="Same day return expected",
            status="approved",
            created_at="2024-01-17T16:20:00+00:00",
            approved_by="System Administrator",
            approved_at="2024-01-18T08:45:00+00:00",
            updated_at="2024-01-18T08:45:00+00:00",
        ),
        _ticket(
            "ticket-4", smith, ("vehicle-1", "GK 001 A"),
            destination="Kiambu County Office",
            purpose="Community outreach and energy consultation",
            fuel_required=40.0, estimated_distance=80.0,
            departure_date="2024-01-24", return_date="2024-01-24",
            additional_notes="Half-day assignment",
            status="pending",
            created_at="2024-01-20T10:30:00+00:00",
        ),
    ]


def _seed_fuel_records() -> list[dict]:
    def record(record_id, vehicle_id, driver_id, quantity, price, odometer, station, receipt, date, notes, created):
        return {
            "id": record_id,
            "vehicle_id": vehicle_id,
            "driver_id": driver_id,
            "fuel_type": "diesel",
            "quantity": quantity,
            "cost_per_liter": price,
            "total_cost": round(quantity * price, 2),
            "odometer_reading": odometer,
            "date": date,
            "fuel_station": station,
            "receipt_number": receipt,
            "payment_method": "bulk-account",
            "bulk_account_id": "bulk-1",
            "notes": notes,
            "created_at": created,
            "updated_at": created,
        }

    return [
        record("fuel-1", "vehicle-1", "driver-1", 75.5, 165.50, 45230,
               "Shell Station - Nairobi CBD", "RCP001234", "2024-01-18",
               "Pre-trip fueling for Nakuru assignment", "2024-01-18T07:30:00+00:00"),
        record("fuel-2", "vehicle-2", "driver-2", 90.0, 164.80, 38750,
               "Total Station - Mombasa Road", "RCP002145", "2024-01-19",
               "Fuel for Mombasa trip", "2024-01-19T08:15:00+00:00"),
        record("fuel-3", "vehicle-3", "driver-3", 85.2, 166.20, 22100,
               "Kenol Station - Nakuru Highway", "RCP003456", "2024-01-17",
               "Regular fueling for regional duties", "2024-01-17T15:45:00+00:00"),
    ]


def _seed_bulk_accounts() -> list[dict]:
    return [
        {
            "id": "bulk-1",
            "account_name": "Ministry Fleet Account - Shell",
            "supplier_name": "Shell Kenya Limited",
            "account_number": "MEN-SHELL-2024-001",
            "current_balance": 750000.00,
            "initial_balance": 1000000.00,
            "credit_limit": 500000.00,
            "status": "active",
            "contact_person": "James Mwangi",
            "contact_phone": "+254 722 345 678",
            "contact_email": "fleet.support@shell.co.ke",
            "fuel_types": "diesel,petrol",
            "created_at": "2024-01-01T10:00:00+00:00",
            "updated_at": "2024-01-20T14:30:00+00:00",
        },
        {
            "id": "bulk-2",
            "account_name": "Ministry Fleet Account - Total",
            "supplier_name": "Total Kenya Limited",
            "account_number": "MEN-TOTAL-2024-001",
            "current_balance": 425000.00,
            "initial_balance": 500000.00,
            "credit_limit": 300000.00,
            "status": "active",
            "contact_person": "Sarah Njeru",
            "contact_phone": "+254 733 456 789",
            "contact_email": "corporate@total.co.ke",
            "fuel_types": "diesel,petrol",
            "created_at": "2024-01-01T11:00:00+00:00",
            "updated_at": "2024-01-19T16:20:00+00:00",
        },
    ]


def _seed_maintenance_records() -> list[dict]:
    def record(record_id, vehicle_id, mtype, description, labor, parts, service_date,
               next_date, provider, odometer, parts_replaced, notes, created, updated):
        return {
            "id": record_id,
            "vehicle_id": vehicle_id,
            "maintenance_type": mtype,
            "service_provider": provider,
            "description": description,
            "parts_replaced": parts_replaced,
            "labor_cost": labor,
            "parts_cost": parts,
            "cost": round(labor + parts, 2),
            "odometer_reading": odometer,
            "service_date": service_date,
            "next_service_date": next_date,
            "next_service_mileage": None,
            "status": "completed",
            "priority": "medium",
            "warranty_info": None,
            "notes": notes,
            "created_at": created,
            "updated_at": updated,
        }

    return [
        record("maint-1", "vehicle-1", "routine", "Routine service - oil change, filter replacement",
               5500.00, 10000.00, "2024-01-15", "2024-04-15", "Toyota Kenya Service Center", 45000,
               ["Engine oil filter", "Air filter", "Oil"], "All systems functioning normally",
               "2024-01-15T13:00:00+00:00", "2024-01-15T16:30:00+00:00"),
        record("maint-2", "vehicle-2", "repair", "Brake pad replacement and brake system check",
               8000.00, 14000.00, "2024-01-12", "2024-07-12", "Mitsubishi Authorized Service", 38500,
               ["Front brake pads", "Rear brake pads", "Brake fluid"],
               "Brake system fully restored to optimal performance",
               "2024-01-12T09:00:00+00:00", "2024-01-12T17:45:00+00:00"),
        record("maint-3", "vehicle-3", "inspection", "Comprehensive inspection and tire rotation",
               6750.00, 12000.00, "2024-01-10", "2024-04-10", "Toyota Kenya Service Center", 22000,
               ["Cabin filter", "Transmission fluid"], "Vehicle in excellent condition for heavy-duty use",
               "2024-01-10T10:30:00+00:00", "2024-01-10T15:20:00+00:00"),
    ]


def _seed_components() -> list[dict]:
    def component(component_id, vehicle_id, ctype, make, model, serial, position,
                  installed, mileage, warranty, cost, supplier, created):
        return {
            "id": component_id,
            "vehicle_id": vehicle_id,
            "component_type": ctype,
            "make": make,
            "model": model,
            "serial_number": serial,
            "position": position,
            "installation_date": installed,
            "installation_mileage": mileage,
            "removal_date": None,
            "removal_mileage": None,
            "status": "active",
            "warranty_months": warranty,
            "purchase_cost": cost,
            "supplier": supplier,
            "notes": "",
            "created_at": created,
            "updated_at": created,
        }

    return [
        component("component-1", "vehicle-1", "tire", "Bridgestone", "Dueler A/T", "BS-2023-88121",
                  "front-left", "2023-11-02", 40100, 24, 18500.00, "Tyre Centre Nairobi",
                  "2023-11-02T09:00:00+00:00"),
        component("component-2", "vehicle-1", "battery", "Chloride Exide", "N70", "CE-N70-55102",
                  None, "2023-08-14", 36250, 12, 14200.00, "Chloride Exide Kenya",
                  "2023-08-14T11:30:00+00:00"),
    ]


def _seed_transfers() -> list[dict]:
    return [
        {
            "id": "transfer-1",
            "vehicle_id": "vehicle-2",
            "from_department": "State Department for Energy",
            "to_department": "State Department for Energy",
            "from_location": "Nairobi HQ",
            "to_location": "Mombasa Office",
            "transfer_date": "2023-12-04",
            "mileage": 37200,
            "authorized_by": "Principal Secretary",
            "received_by": "Coast Regional Coordinator",
            "reason": "Reassigned to coast region field operations",
            "notes": "",
            "created_at": "2023-12-04T08:00:00+00:00",
            "updated_at": "2023-12-04T08:00:00+00:00",
        },
    ]


SEEDS = {
    Collection.VEHICLES:            _seed_vehicles,
    Collection.DRIVERS:             _seed_drivers,
    Collection.WORK_TICKETS:        _seed_work_tickets,
    Collection.FUEL_RECORDS:        _seed_fuel_records,
    Collection.BULK_ACCOUNTS:       _seed_bulk_accounts,
    Collection.MAINTENANCE_RECORDS: _seed_maintenance_records,
    Collection.COMPONENTS:          _seed_components,
    Collection.TRANSFERS:           _seed_transfers,
}


# ─── Provider ─────────────────────────────────────────────────────────────────
class SampleDataProvider:
    """
    In-memory collections backed by the fallback store.

    Mutations hold `_lock` for the whole read-modify-persist sequence and
    write the full collection back before returning.
    """

    def __init__(self, store: PersistenceFallbackStore):
        self._store = store
        self._lock = RLock()
        self._data: dict[Collection, list[dict]] = {
            collection: store.load(STORAGE_KEYS[collection], seed())
            for collection, seed in SEEDS.items()
        }

    @property
    def store(self) -> PersistenceFallbackStore:
        return self._store

    def reload(self) -> None:
        """Re-read every collection from the store (after an import)."""
        with self._lock:
            for collection, seed in SEEDS.items():
                self._data[collection] = self._store.load(STORAGE_KEYS[collection], seed())
        logger.info("Sample data reloaded from fallback store")

    def _persist(self, collection: Collection) -> None:
        self._store.save(STORAGE_KEYS[collection], self._data[collection])

    def _find(self, collection: Collection, record_id: str) -> dict | None:
        for record in self._data[collection]:
            if record.get("id") == record_id:
                return record
        return None

    # ─── Reads ────────────────────────────────────────────────────────────────
    def list(self, collection: Collection) -> list[dict]:
        with self._lock:
            return copy.deepcopy(sort_by_recency(self._data[collection]))

    def get(self, collection: Collection, record_id: str) -> dict | None:
        with self._lock:
            record = self._find(collection, record_id)
            return copy.deepcopy(record) if record else None

    # ─── Writes ───────────────────────────────────────────────────────────────
    def insert(self, collection: Collection, record: dict) -> dict:
        with self._lock:
            stored = stamp_new_record(collection, record)
            self._data[collection].append(stored)
            self._persist(collection)
            return copy.deepcopy(stored)

    def update(self, collection: Collection, record_id: str, changes: dict) -> dict | None:
        return self.conditional_update(collection, record_id, {}, changes)

    def conditional_update(
        self, collection: Collection, record_id: str, expected: dict, changes: dict,
    ) -> dict | None:
        """
        Apply `changes` only if every field in `expected` still holds.
        Returns the updated record, or None when missing or the condition failed.
        """
        with self._lock:
            record = self._find(collection, record_id)
            if record is None:
                return None
            if any(record.get(k) != v for k, v in expected.items()):
                return None
            record.update(changes)
            record["updated_at"] = utc_now_iso()
            self._persist(collection)
            return copy.deepcopy(record)

    def change_balance(self, account_id: str, delta: float, expected_balance: float) -> dict | None:
        """Compare-and-set on current_balance. None when missing or the balance moved."""
        with self._lock:
            account = self._find(Collection.BULK_ACCOUNTS, account_id)
            if account is None or float(account["current_balance"]) != float(expected_balance):
                return None
            account["current_balance"] = round(float(expected_balance) + delta, 2)
            account["updated_at"] = utc_now_iso()
            self._persist(Collection.BULK_ACCOUNTS)
            return copy.deepcopy(account)

    def insert_with_debit(
        self, collection: Collection, record: dict,
        account_id: str, amount: float, expected_balance: float,
    ) -> tuple[dict, dict] | None:
        """Debit the account and insert the record as one step. None if the debit lost the race."""
        with self._lock:
            account = self.change_balance(account_id, -amount, expected_balance)
            if account is None:
                return None
            return self.insert(collection, record), account
