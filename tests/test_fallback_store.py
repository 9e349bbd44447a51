"""Persistence fallback store: save/load, version gate, backup/restore."""

from fleet.data.collections import Collection, STORAGE_KEYS
from fleet.data.fallback_store import PersistenceFallbackStore, invalid_collections


def test_load_returns_default_when_nothing_stored(store):
    default = [{"id": "x"}]
    assert store.load("fleet_vehicles", default) is default


def test_save_then_load(store):
    records = [{"id": "vehicle-9", "make": "Isuzu"}]
    assert store.save("fleet_vehicles", records) is True
    assert store.load("fleet_vehicles", []) == records


def test_save_failure_is_swallowed_and_reported(store):
    assert store.save("fleet_vehicles", [{"id": "bad", "value": object()}]) is False
    assert store.load("fleet_vehicles", "default") == "default"


def test_unparseable_file_loads_default(store):
    (store.directory / "fleet_drivers.json").write_text("{not json", encoding="utf-8")
    assert store.load("fleet_drivers", []) == []


def test_version_marker_written_on_first_use(tmp_path):
    store = PersistenceFallbackStore(tmp_path, "1.0")
    assert store.stored_version == "1.0"


def test_version_mismatch_discards_stored_collections(tmp_path):
    old = PersistenceFallbackStore(tmp_path, "0.9")
    old.save("fleet_vehicles", [{"id": "stale"}])

    new = PersistenceFallbackStore(tmp_path, "1.0")
    assert new.load("fleet_vehicles", None) is None
    assert new.stored_version == "1.0"


def test_same_version_keeps_stored_collections(tmp_path):
    PersistenceFallbackStore(tmp_path, "1.0").save("fleet_vehicles", [{"id": "kept"}])
    assert PersistenceFallbackStore(tmp_path, "1.0").load("fleet_vehicles", None) == [{"id": "kept"}]


def test_export_and_import(tmp_path, store):
    store.save(STORAGE_KEYS[Collection.VEHICLES], [{"id": "vehicle-1"}])
    store.save(STORAGE_KEYS[Collection.DRIVERS], [{"id": "driver-1"}])
    snapshot = store.export_data()
    assert set(snapshot) == {"vehicles", "drivers"}

    other = PersistenceFallbackStore(tmp_path / "other")
    assert other.import_data({**snapshot, "unknown_collection": [{"id": "x"}]}) is True
    assert other.export_data() == snapshot


def test_import_rejects_non_list_collections(store):
    assert store.import_data({"vehicles": {"id": "not-a-list"}}) is False
    assert store.load(STORAGE_KEYS[Collection.VEHICLES], None) is None


def test_clear_all_removes_collections(store):
    store.save(STORAGE_KEYS[Collection.WORK_TICKETS], [{"id": "ticket-1"}])
    store.clear_all()
    assert store.export_data() == {}


def test_object_file_loads_default(store):
    (store.directory / "fleet_vehicles.json").write_text('{"oops": 1}', encoding="utf-8")
    assert store.load("fleet_vehicles", []) == []


def test_list_of_non_records_loads_default(store):
    (store.directory / "fleet_vehicles.json").write_text("[1, 2]", encoding="utf-8")
    default = [{"id": "seed"}]
    assert store.load("fleet_vehicles", default) is default


def test_import_rejects_lists_of_non_records(store):
    assert store.import_data({"vehicles": [1, 2], "drivers": [{"id": "driver-1"}]}) is False
    assert store.load(STORAGE_KEYS[Collection.VEHICLES], None) is None
    assert store.load(STORAGE_KEYS[Collection.DRIVERS], None) == [{"id": "driver-1"}]


def test_invalid_collections_names_only_known_bad_entries():
    payload = {
        "vehicles":  [1, 2],
        "drivers":   {"id": "driver-1"},
        "transfers": [{"id": "transfer-1"}],
        "unknown":   "ignored",
    }
    assert invalid_collections(payload) == ["drivers", "vehicles"]
