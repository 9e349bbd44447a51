"""Component tracking and vehicle transfers."""

import pytest
from pydantic import ValidationError

from fleet.data.collections import Collection
from fleet.schemas.component import (
    ComponentCreateRequest, ComponentUpdateRequest, ComponentRemovalRequest,
)
from fleet.schemas.transfer import TransferCreateRequest
from fleet.services.component_service import component_service
from fleet.services.transfer_service import transfer_service
from fleet.utils.exceptions import (
    DuplicateEntryException, InvalidTransitionException, NotFoundException, ValidationFailedException,
)


def _tire(**overrides) -> ComponentCreateRequest:
    fields = dict(vehicle_id="vehicle-2", component_type="tire", make="Michelin", model="LTX",
                  serial_number="MI-7781", position="rear-left", installation_date="2024-02-01",
                  installation_mileage=38000, purchase_cost=21000)
    fields.update(overrides)
    return ComponentCreateRequest(**fields)


# ─── Components ───────────────────────────────────────────────────────────────
def test_install_component(facade):
    c = component_service.create_component(facade, _tire()).data
    assert c["status"] == "active"
    assert c["removal_date"] is None
    assert c["position"] == "rear-left"


def test_install_on_unknown_vehicle(facade):
    with pytest.raises(ValidationFailedException):
        component_service.create_component(facade, _tire(vehicle_id="vehicle-404"))


def test_active_serial_number_is_unique(facade):
    with pytest.raises(DuplicateEntryException):
        component_service.create_component(facade, _tire(serial_number="BS-2023-88121"))


def test_battery_has_no_position():
    with pytest.raises(ValidationError):
        _tire(component_type="battery", position="spare")
    with pytest.raises(ValidationError):
        _tire(serial_number="  ")


def test_list_filters(facade):
    component_service.create_component(facade, _tire())
    tires = component_service.list_components(facade, component_type="tire").data
    assert {c["serial_number"] for c in tires} == {"BS-2023-88121", "MI-7781"}

    on_vehicle_1 = component_service.list_components(facade, vehicle_id="vehicle-1").data
    assert [c["id"] for c in on_vehicle_1] == ["component-1", "component-2"]


def test_update_position_only_for_tires(facade):
    updated = component_service.update_component(facade, "component-1", ComponentUpdateRequest(position="spare")).data
    assert updated["position"] == "spare"
    with pytest.raises(ValidationFailedException):
        component_service.update_component(facade, "component-2", ComponentUpdateRequest(position="spare"))


def test_remove_component_once(facade):
    removed = component_service.remove_component(facade, "component-2", ComponentRemovalRequest(
        status="replaced", removal_date="2024-06-30", removal_mileage=47000,
    )).data
    assert removed["status"] == "replaced"
    assert removed["removal_date"] == "2024-06-30"

    with pytest.raises(InvalidTransitionException):
        component_service.remove_component(facade, "component-2", ComponentRemovalRequest())

    # serial number is free again once the old part is off the vehicle
    component_service.create_component(facade, _tire(
        component_type="battery", position=None, serial_number="CE-N70-55102",
    ))


def test_removal_mileage_not_below_installation(facade):
    with pytest.raises(ValidationFailedException):
        component_service.remove_component(facade, "component-1", ComponentRemovalRequest(removal_mileage=100))
    assert facade.get(Collection.COMPONENTS, "component-1").data["status"] == "active"


def test_removal_cannot_reactivate():
    with pytest.raises(ValidationError):
        ComponentRemovalRequest(status="active")


def test_unknown_component(facade):
    with pytest.raises(NotFoundException):
        component_service.get_component(facade, "component-404")


# ─── Transfers ────────────────────────────────────────────────────────────────
def test_transfer_moves_vehicle(facade):
    transfer, vehicle = transfer_service.create_transfer(facade, TransferCreateRequest(
        vehicle_id="vehicle-1", to_department="Ministry of Roads", to_location="Eldoret Office",
        transfer_date="2024-03-15", mileage=46100, authorized_by="Principal Secretary",
        received_by="Regional Coordinator", reason="Regional reassignment",
    ))
    t = transfer.data
    assert t["from_department"] == "State Department for Energy"
    assert t["from_location"] == "Nairobi HQ"
    assert t["to_location"] == "Eldoret Office"

    assert vehicle.data["department"] == "Ministry of Roads"
    stored = facade.get(Collection.VEHICLES, "vehicle-1").data
    assert stored["location"] == "Eldoret Office"
    assert stored["make"] == "Toyota"


def test_transfer_keeps_explicit_origin_and_defaults_date(facade):
    transfer, _ = transfer_service.create_transfer(facade, TransferCreateRequest(
        vehicle_id="vehicle-3", from_location="Kisumu Yard", to_department="Energy",
        to_location="Nakuru", authorized_by="PS",
    ))
    assert transfer.data["from_location"] == "Kisumu Yard"
    assert transfer.data["transfer_date"]


def test_transfer_unknown_vehicle_writes_nothing(facade):
    with pytest.raises(ValidationFailedException):
        transfer_service.create_transfer(facade, TransferCreateRequest(
            vehicle_id="vehicle-404", to_department="X", to_location="Y", authorized_by="PS",
        ))
    assert len(facade.list(Collection.TRANSFERS).data) == 1


def test_transfer_requires_destination_and_authorizer():
    with pytest.raises(ValidationError):
        TransferCreateRequest(vehicle_id="vehicle-1", to_department=" ", to_location="Y", authorized_by="PS")
    with pytest.raises(ValidationError):
        TransferCreateRequest(vehicle_id="vehicle-1", to_department="X", to_location="Y", authorized_by="")


def test_transfers_newest_first_and_filtered(facade):
    transfer_service.create_transfer(facade, TransferCreateRequest(
        vehicle_id="vehicle-2", to_department="Energy", to_location="Malindi",
        transfer_date="2024-04-01", authorized_by="PS",
    ))
    items = transfer_service.list_transfers(facade, vehicle_id="vehicle-2").data
    assert [t["transfer_date"] for t in items] == ["2024-04-01", "2023-12-04"]
    assert transfer_service.list_transfers(facade, vehicle_id="vehicle-3").data == []
