"""Vehicle, driver and maintenance services."""

import pytest

from fleet.data.collections import Collection
from fleet.schemas.driver import DriverCreateRequest, DriverUpdateRequest
from fleet.schemas.maintenance import MaintenanceCreateRequest, MaintenanceUpdateRequest
from fleet.schemas.vehicle import VehicleCreateRequest, VehicleUpdateRequest, VehicleStatusRequest
from fleet.services.driver_service import driver_service
from fleet.services.maintenance_service import maintenance_service
from fleet.services.vehicle_service import vehicle_service
from fleet.utils.exceptions import (
    DuplicateEntryException, ForbiddenException, NotFoundException, ValidationFailedException,
)
from fleet.utils.security import verify_password


# ─── Vehicles ─────────────────────────────────────────────────────────────────
def test_create_vehicle_normalizes_registration(facade):
    v = vehicle_service.create_vehicle(facade, VehicleCreateRequest(
        registration_number=" gk 004 d ", make="Nissan", model="Patrol", year=2024,
    )).data
    assert v["registration_number"] == "GK 004 D"
    assert v["status"] == "active"


def test_duplicate_registration_rejected(facade):
    with pytest.raises(DuplicateEntryException):
        vehicle_service.create_vehicle(facade, VehicleCreateRequest(
            registration_number="GK 001 A", make="Toyota", model="Hilux", year=2023,
        ))
    with pytest.raises(DuplicateEntryException):
        vehicle_service.update_vehicle(facade, "vehicle-2", VehicleUpdateRequest(registration_number="gk 001 a"))


def test_update_and_retire_vehicle(facade):
    updated = vehicle_service.update_vehicle(facade, "vehicle-2", VehicleUpdateRequest(location="Nairobi HQ")).data
    assert updated["location"] == "Nairobi HQ"
    assert updated["make"] == "Mitsubishi"

    retired = vehicle_service.update_status(facade, "vehicle-2",
                                            VehicleStatusRequest(status="retired", reason="End of life")).data
    assert retired["status"] == "retired"


def test_search_and_status_filter(facade):
    assert [v["id"] for v in vehicle_service.list_vehicles(facade, search="land cruiser").data] == ["vehicle-3"]
    assert vehicle_service.list_vehicles(facade, status="retired").data == []


def test_missing_vehicle(facade):
    with pytest.raises(NotFoundException):
        vehicle_service.get_vehicle(facade, "vehicle-404")


# ─── Drivers ──────────────────────────────────────────────────────────────────
def _new_driver(**overrides) -> DriverCreateRequest:
    fields = dict(name="Grace Achieng", employee_id="EMP004", license_number="DL555",
                  username="gachieng", password="secret1", email="grace.achieng@energy.go.ke")
    fields.update(overrides)
    return DriverCreateRequest(**fields)


def test_create_driver_hashes_password_and_hides_it(facade):
    d = driver_service.create_driver(facade, _new_driver()).data
    assert "password_hash" not in d
    stored = facade.get(Collection.DRIVERS, d["id"]).data
    assert verify_password("secret1", stored["password_hash"])


def test_duplicate_username_or_employee_id(facade):
    with pytest.raises(DuplicateEntryException):
        driver_service.create_driver(facade, _new_driver(username="jsmith"))
    with pytest.raises(DuplicateEntryException):
        driver_service.create_driver(facade, _new_driver(employee_id="EMP001"))


def test_update_driver_password(facade):
    driver_service.update_driver(facade, "driver-2", DriverUpdateRequest(password="newpass1"))
    assert verify_password("newpass1", facade.get(Collection.DRIVERS, "driver-2").data["password_hash"])


def test_driver_reads_only_own_profile(facade, smith_identity, admin_identity):
    assert driver_service.get_driver(facade, "driver-1", smith_identity)["username"] == "jsmith"
    with pytest.raises(ForbiddenException):
        driver_service.get_driver(facade, "driver-2", smith_identity)
    assert "password_hash" not in driver_service.get_driver(facade, "driver-2", admin_identity)


def test_list_drivers_strips_credentials(facade):
    assert all("password_hash" not in d for d in driver_service.list_drivers(facade).data)


# ─── Maintenance ──────────────────────────────────────────────────────────────
def test_maintenance_cost_is_labor_plus_parts(facade):
    m = maintenance_service.create_record(facade, MaintenanceCreateRequest(
        vehicle_id="vehicle-1", maintenance_type="repair", description="Replace alternator",
        labor_cost=3000, parts_cost=12500.5, service_date="2024-03-01",
    )).data
    assert m["cost"] == 15500.5
    assert m["status"] == "scheduled"


def test_maintenance_update_recomputes_cost(facade):
    updated = maintenance_service.update_record(facade, "maint-1", MaintenanceUpdateRequest(parts_cost=2000)).data
    assert updated["labor_cost"] == 5500.0
    assert updated["cost"] == 7500.0


def test_maintenance_for_unknown_vehicle(facade):
    with pytest.raises(ValidationFailedException):
        maintenance_service.create_record(facade, MaintenanceCreateRequest(
            vehicle_id="vehicle-404", maintenance_type="routine", description="Oil", service_date="2024-03-01",
        ))


def test_maintenance_filters(facade):
    assert [m["id"] for m in maintenance_service.list_records(facade, vehicle_id="vehicle-2").data] == ["maint-2"]
    assert [m["id"] for m in maintenance_service.list_records(facade, maintenance_type="inspection").data] == ["maint-3"]
