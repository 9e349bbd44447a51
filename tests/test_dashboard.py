"""Dashboard aggregation."""

from fleet.data.collections import Collection
from fleet.schemas.work_ticket import ApproveRequest
from fleet.services.dashboard_service import dashboard_service
from fleet.services.work_ticket_service import work_ticket_service


def test_counts_from_seed(facade):
    stats = dashboard_service.compute(facade)
    assert stats["totalVehicles"] == 3
    assert stats["totalDrivers"] == 3
    assert stats["totalFuelRecords"] == 3
    assert stats["totalMaintenanceRecords"] == 3
    assert stats["totalWorkTickets"] == 4
    assert stats["pendingWorkTickets"] == 2
    assert stats["unavailable"] == []
    assert stats["demoMode"] is True
    assert stats["lastUpdated"]


def test_counts_follow_transitions(facade, admin_identity):
    work_ticket_service.approve_ticket(facade, "ticket-2", ApproveRequest(), admin_identity)
    assert dashboard_service.compute(facade)["pendingWorkTickets"] == 1


def test_failed_read_leaves_count_unavailable(facade, monkeypatch):
    original_list = facade.list

    def list_or_fail(collection):
        if collection == Collection.MAINTENANCE_RECORDS:
            raise RuntimeError("read failed")
        return original_list(collection)

    monkeypatch.setattr(facade, "list", list_or_fail)
    stats = dashboard_service.compute(facade)
    assert stats["totalMaintenanceRecords"] is None
    assert stats["unavailable"] == ["maintenance_records"]
    assert stats["totalVehicles"] == 3
    assert stats["pendingWorkTickets"] == 2
