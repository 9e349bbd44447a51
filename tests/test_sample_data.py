"""Sample data provider: seed integrity, persistence and atomic mutations."""

import threading

from fleet.data.collections import Collection
from fleet.data.sample_data import SampleDataProvider, SEED_DRIVER_PASSWORD
from fleet.utils.security import verify_password


def test_seed_counts(sample):
    assert len(sample.list(Collection.VEHICLES)) == 3
    assert len(sample.list(Collection.DRIVERS)) == 3
    assert len(sample.list(Collection.WORK_TICKETS)) == 4
    assert len(sample.list(Collection.FUEL_RECORDS)) == 3
    assert len(sample.list(Collection.BULK_ACCOUNTS)) == 2
    assert len(sample.list(Collection.MAINTENANCE_RECORDS)) == 3
    assert len(sample.list(Collection.COMPONENTS)) == 2
    assert len(sample.list(Collection.TRANSFERS)) == 1


def test_seed_references_resolve(sample):
    vehicles = {v["id"] for v in sample.list(Collection.VEHICLES)}
    drivers = {d["id"] for d in sample.list(Collection.DRIVERS)}
    accounts = {a["id"] for a in sample.list(Collection.BULK_ACCOUNTS)}

    for t in sample.list(Collection.WORK_TICKETS):
        assert t["vehicle_id"] in vehicles
        assert t["driver_id"] in drivers
    for r in sample.list(Collection.FUEL_RECORDS):
        assert r["vehicle_id"] in vehicles
        assert r["bulk_account_id"] in accounts
    for m in sample.list(Collection.MAINTENANCE_RECORDS):
        assert m["vehicle_id"] in vehicles
        assert m["cost"] == round(m["labor_cost"] + m["parts_cost"], 2)
    for c in sample.list(Collection.COMPONENTS):
        assert c["vehicle_id"] in vehicles
    for t in sample.list(Collection.TRANSFERS):
        assert t["vehicle_id"] in vehicles


def test_seed_driver_passwords_are_hashed(sample):
    driver = sample.get(Collection.DRIVERS, "driver-1")
    assert driver["password_hash"] != SEED_DRIVER_PASSWORD
    assert verify_password(SEED_DRIVER_PASSWORD, driver["password_hash"])


def test_list_is_sorted_newest_first(sample):
    created = [t["created_at"] for t in sample.list(Collection.WORK_TICKETS)]
    assert created == sorted(created, reverse=True)


def test_insert_assigns_id_and_persists(sample, store):
    record = sample.insert(Collection.VEHICLES, {"registration_number": "GK 100 Z", "make": "Isuzu"})
    assert record["id"].startswith("vehicle-")
    assert record["created_at"] == record["updated_at"]

    sample.conditional_update(Collection.WORK_TICKETS, "ticket-2", {"status": "pending"}, {"status": "approved"})
    sample.insert(Collection.TRANSFERS, {"vehicle_id": record["id"], "to_department": "Treasury"})

    reloaded = SampleDataProvider(store)
    for collection in Collection:
        assert reloaded.list(collection) == sample.list(collection)


def test_returned_records_are_copies(sample):
    v = sample.get(Collection.VEHICLES, "vehicle-1")
    v["make"] = "Changed"
    assert sample.get(Collection.VEHICLES, "vehicle-1")["make"] == "Toyota"


def test_conditional_update_requires_expected_fields(sample):
    assert sample.conditional_update(Collection.WORK_TICKETS, "ticket-1", {"status": "pending"},
                                     {"status": "rejected"}) is None
    assert sample.get(Collection.WORK_TICKETS, "ticket-1")["status"] == "approved"

    updated = sample.conditional_update(Collection.WORK_TICKETS, "ticket-2", {"status": "pending"},
                                        {"status": "approved"})
    assert updated["status"] == "approved"


def test_update_missing_record_returns_none(sample):
    assert sample.update(Collection.VEHICLES, "vehicle-missing", {"make": "x"}) is None


def test_change_balance_compare_and_set(sample):
    assert sample.change_balance("bulk-2", 1000, 1.0) is None
    account = sample.change_balance("bulk-2", 1000, 425000.0)
    assert account["current_balance"] == 426000.0


def test_concurrent_debits_only_one_succeeds(sample):
    """Two debits read the same balance; exactly one wins the compare-and-set."""
    sample.update(Collection.BULK_ACCOUNTS, "bulk-2", {"current_balance": 1000.0})
    results = []
    barrier = threading.Barrier(2)

    def debit():
        barrier.wait()
        results.append(sample.insert_with_debit(
            Collection.FUEL_RECORDS, {"vehicle_id": "vehicle-1", "total_cost": 800.0},
            "bulk-2", 800.0, 1000.0,
        ))

    threads = [threading.Thread(target=debit) for _ in range(2)]
    for t in threads: t.start()
    for t in threads: t.join()

    assert sum(r is not None for r in results) == 1
    assert sample.get(Collection.BULK_ACCOUNTS, "bulk-2")["current_balance"] == 200.0
    assert len(sample.list(Collection.FUEL_RECORDS)) == 4


def test_reload_reads_imported_data(sample):
    sample.store.import_data({"vehicles": [{"id": "vehicle-x", "created_at": "2025-01-01T00:00:00+00:00"}]})
    sample.reload()
    assert [v["id"] for v in sample.list(Collection.VEHICLES)] == ["vehicle-x"]


def test_malformed_store_file_falls_back_to_seed(store):
    (store.directory / "fleet_vehicles.json").write_text('{"oops": 1}', encoding="utf-8")
    provider = SampleDataProvider(store)
    assert [v["id"] for v in provider.list(Collection.VEHICLES)] == ["vehicle-3", "vehicle-1", "vehicle-2"]
