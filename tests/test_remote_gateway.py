"""Remote data gateway against in-memory SQLite."""

import pytest
from sqlalchemy.exc import IntegrityError

from fleet.data.collections import Collection
from fleet.data.facade import DataSource
from fleet.schemas.transfer import TransferCreateRequest
from fleet.schemas.work_ticket import WorkTicketCreateRequest, ApproveRequest
from fleet.services.transfer_service import transfer_service
from fleet.services.work_ticket_service import work_ticket_service
from fleet.utils.exceptions import InvalidTransitionException


def _vehicle(gateway, registration="GK 900 R"):
    return gateway.insert(Collection.VEHICLES, {
        "registration_number": registration, "make": "Toyota", "model": "Hilux", "year": 2023,
        "status": "active", "fuel_type": "diesel", "equipment": ["Toolkit"],
        "acquisition_date": "2023-01-15",
    })


def _driver(gateway, username="rdriver"):
    return gateway.insert(Collection.DRIVERS, {
        "name": "Remote Driver", "employee_id": f"EMP-{username}", "license_number": "DL000",
        "license_class": "B", "status": "active", "username": username,
        "email": f"{username}@energy.go.ke",
    })


def _account(gateway, balance=1000.0):
    return gateway.insert(Collection.BULK_ACCOUNTS, {
        "account_name": "Test", "supplier_name": "Shell", "account_number": "ACC-1",
        "current_balance": balance, "initial_balance": balance, "credit_limit": 0, "status": "active",
    })


def test_probe(gateway):
    assert gateway.probe() is True


def test_insert_returns_json_ready_row(gateway):
    v = _vehicle(gateway)
    assert v["id"].startswith("vehicle-")
    assert v["acquisition_date"] == "2023-01-15"
    assert v["equipment"] == ["Toolkit"]
    assert isinstance(v["created_at"], str)
    assert gateway.get(Collection.VEHICLES, v["id"])["registration_number"] == "GK 900 R"


def test_unknown_fields_are_dropped(gateway):
    v = gateway.insert(Collection.VEHICLES, {
        "registration_number": "GK 901 R", "make": "Isuzu", "model": "D-Max", "year": 2021,
        "status": "active", "fuel_type": "diesel", "equipment": [], "not_a_column": 1,
    })
    assert "not_a_column" not in v


def test_list_all_newest_first(gateway):
    first = _vehicle(gateway, "GK 1")
    second = _vehicle(gateway, "GK 2")
    ids = [v["id"] for v in gateway.list_all(Collection.VEHICLES)]
    assert ids.index(second["id"]) < ids.index(first["id"])


def test_duplicate_registration_raises_integrity_error(gateway):
    _vehicle(gateway, "GK DUP")
    with pytest.raises(IntegrityError):
        _vehicle(gateway, "GK DUP")


def test_update_and_missing_update(gateway):
    v = _vehicle(gateway)
    assert gateway.update(Collection.VEHICLES, v["id"], {"color": "Red"})["color"] == "Red"
    assert gateway.update(Collection.VEHICLES, "vehicle-missing", {"color": "Red"}) is None


def test_conditional_update_guards_on_status(gateway):
    v, d = _vehicle(gateway), _driver(gateway)
    t = gateway.insert(Collection.WORK_TICKETS, {
        "driver_id": d["id"], "vehicle_id": v["id"], "destination": "Nakuru", "purpose": "Inspection",
        "fuel_required": 80, "estimated_distance": 0, "departure_date": "2024-01-20",
        "return_date": "2024-01-20", "status": "pending",
    })
    expected = {"status": "pending"}
    assert gateway.conditional_update(Collection.WORK_TICKETS, t["id"], expected, {"status": "approved"})["status"] == "approved"
    assert gateway.conditional_update(Collection.WORK_TICKETS, t["id"], expected, {"status": "rejected"}) is None
    assert gateway.get(Collection.WORK_TICKETS, t["id"])["status"] == "approved"


def test_balance_compare_and_set(gateway):
    a = _account(gateway, 1000.0)
    assert gateway.change_balance(a["id"], 500.0, 999.0) is None
    assert gateway.change_balance(a["id"], 500.0, 1000.0)["current_balance"] == 1500.0


def test_insert_with_debit_is_one_transaction(gateway):
    v, a = _vehicle(gateway), _account(gateway, 1000.0)
    record = {"vehicle_id": v["id"], "fuel_type": "diesel", "quantity": 5, "cost_per_liter": 160,
              "total_cost": 800.0, "date": "2024-02-01", "payment_method": "bulk-account",
              "bulk_account_id": a["id"]}

    fuel, account = gateway.insert_with_debit(Collection.FUEL_RECORDS, record, a["id"], 800.0, 1000.0)
    assert account["current_balance"] == 200.0
    assert fuel["bulk_account_id"] == a["id"]

    # Same expected balance again: the CAS fails and no second record is written
    assert gateway.insert_with_debit(Collection.FUEL_RECORDS, record, a["id"], 800.0, 1000.0) is None
    assert len(gateway.list_all(Collection.FUEL_RECORDS)) == 1
    assert gateway.get(Collection.BULK_ACCOUNTS, a["id"])["current_balance"] == 200.0


def test_ticket_lifecycle_through_remote_facade(remote_facade, gateway, admin_identity):
    v, d = _vehicle(gateway), _driver(gateway)
    submitted = work_ticket_service.submit_ticket(remote_facade, WorkTicketCreateRequest(
        driver_id=d["id"], vehicle_id=v["id"], destination="Nakuru", purpose="Inspection", fuel_required=80,
    ), admin_identity)
    assert submitted.source == DataSource.REMOTE
    assert submitted.data["driver_name"] == "Remote Driver"

    ticket_id = submitted.data["id"]
    approved = work_ticket_service.approve_ticket(remote_facade, ticket_id, ApproveRequest(approved_by="Admin"),
                                                  admin_identity)
    assert approved.data["status"] == "approved"
    assert approved.data["approved_at"] is not None

    with pytest.raises(InvalidTransitionException):
        work_ticket_service.approve_ticket(remote_facade, ticket_id, ApproveRequest(), admin_identity)


def test_component_dates_round_trip(gateway):
    v = _vehicle(gateway)
    c = gateway.insert(Collection.COMPONENTS, {
        "vehicle_id": v["id"], "component_type": "tire", "make": "Bridgestone",
        "serial_number": "BS-1", "position": "spare", "installation_date": "2024-03-01",
        "installation_mileage": 1200, "status": "active", "purchase_cost": 18500.0,
    })
    assert c["id"].startswith("component-")
    assert c["installation_date"] == "2024-03-01"
    assert c["removal_date"] is None

    removed = gateway.update(Collection.COMPONENTS, c["id"], {"status": "removed", "removal_date": "2024-09-01"})
    assert removed["removal_date"] == "2024-09-01"


def test_transfer_moves_remote_vehicle(remote_facade, gateway):
    v = _vehicle(gateway)
    gateway.update(Collection.VEHICLES, v["id"], {"department": "Energy", "location": "Nairobi HQ"})

    transfer, moved = transfer_service.create_transfer(remote_facade, TransferCreateRequest(
        vehicle_id=v["id"], to_department="Treasury", to_location="Kisumu Office",
        transfer_date="2024-05-02", authorized_by="PS Energy",
    ))
    assert transfer.source == DataSource.REMOTE
    assert transfer.data["from_location"] == "Nairobi HQ"
    assert gateway.get(Collection.VEHICLES, v["id"])["location"] == "Kisumu Office"
    assert moved.data["department"] == "Treasury"
