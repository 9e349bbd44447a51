"""Data access facade: mode latch, read fallback and write resilience policy."""

import pytest

from fleet.data.collections import Collection
from fleet.data.facade import DataAccessFacade, DataSource, BulkDebit
from fleet.utils.exceptions import (
    BackendUnavailableException, BalanceChangedException,
    InvalidTransitionException, NotFoundException,
)


# ─── Mode Latch ───────────────────────────────────────────────────────────────
def test_no_gateway_latches_sample_mode(sample):
    f = DataAccessFacade(sample)
    f.initialize()
    assert f.is_using_sample_data()
    assert f.wait_for_initialization(0) is True


def test_force_sample_data_skips_probe(sample, flaky_gateway):
    gw = flaky_gateway()
    f = DataAccessFacade(sample, gw, force_sample_data=True)
    f.initialize()
    assert f.is_using_sample_data()
    assert gw.probes == 0


def test_probe_failure_latches_sample_mode(sample, flaky_gateway):
    f = DataAccessFacade(sample, flaky_gateway(probe_ok=False))
    f.initialize()
    assert f.is_using_sample_data()
    assert f.list(Collection.VEHICLES).source == DataSource.SAMPLE


def test_probe_success_latches_remote_mode(remote_facade):
    assert not remote_facade.is_using_sample_data()
    assert remote_facade.list(Collection.VEHICLES).source == DataSource.REMOTE


def test_initialize_runs_once(sample, flaky_gateway):
    gw = flaky_gateway()
    f = DataAccessFacade(sample, gw)
    f.initialize()
    f.initialize()
    assert gw.probes == 1


def test_background_initialization(sample, flaky_gateway):
    f = DataAccessFacade(sample, flaky_gateway())
    thread = f.start_initialization()
    assert f.wait_for_initialization(5) is True
    thread.join(5)
    assert not f.is_using_sample_data()


def test_wait_times_out_without_raising(sample, flaky_gateway):
    f = DataAccessFacade(sample, flaky_gateway(), init_timeout=0.05)
    assert f.wait_for_initialization(0.01) is False
    # A call before the latch is set is served from sample data
    assert f.list(Collection.DRIVERS).source == DataSource.SAMPLE


# ─── Read Fallback ────────────────────────────────────────────────────────────
def test_remote_read_failure_falls_back_for_that_call_only(sample, flaky_gateway):
    f = DataAccessFacade(sample, flaky_gateway())
    f.initialize()
    assert not f.is_using_sample_data()

    result = f.list(Collection.VEHICLES)
    assert result.source == DataSource.SAMPLE
    assert len(result.data) == 3
    assert f.get(Collection.VEHICLES, "vehicle-1").data["make"] == "Toyota"
    # latch unchanged
    assert not f.is_using_sample_data()


# ─── Write Policy ─────────────────────────────────────────────────────────────
def test_remote_write_failure_raises_by_default(sample, flaky_gateway):
    f = DataAccessFacade(sample, flaky_gateway())
    f.initialize()
    with pytest.raises(BackendUnavailableException):
        f.create(Collection.VEHICLES, {"registration_number": "GK 555 X"})
    # nothing written to sample data either
    assert len(sample.list(Collection.VEHICLES)) == 3


def test_remote_write_failure_in_resilient_mode_is_not_durable(sample, flaky_gateway):
    f = DataAccessFacade(sample, flaky_gateway(), resilient_writes=True)
    f.initialize()
    result = f.create(Collection.VEHICLES, {"registration_number": "GK 555 X"})
    assert result.durable is False
    assert result.data["id"].startswith("vehicle-")
    assert len(sample.list(Collection.VEHICLES)) == 3


def test_resilient_update_echoes_changes(sample, flaky_gateway):
    f = DataAccessFacade(sample, flaky_gateway(), resilient_writes=True)
    f.initialize()
    current = sample.get(Collection.VEHICLES, "vehicle-1")
    result = f.update(Collection.VEHICLES, "vehicle-1", {"color": "Red"}, current=current)
    assert result.durable is False
    assert result.data["color"] == "Red"
    assert sample.get(Collection.VEHICLES, "vehicle-1")["color"] == "White"


def test_sample_writes_are_durable(facade):
    result = facade.create(Collection.VEHICLES, {"registration_number": "GK 777 Y"})
    assert result.source == DataSource.SAMPLE
    assert result.durable is True
    assert facade.get(Collection.VEHICLES, result.data["id"]).data is not None


def test_update_missing_record_raises_not_found(facade):
    with pytest.raises(NotFoundException):
        facade.update(Collection.VEHICLES, "vehicle-missing", {"color": "Red"})


# ─── Transitions ──────────────────────────────────────────────────────────────
def test_transition_on_non_pending_ticket_is_invalid(facade):
    with pytest.raises(InvalidTransitionException):
        facade.approve_work_ticket("ticket-1", {"status": "approved"})


def test_transition_on_missing_ticket_is_not_found(facade):
    with pytest.raises(NotFoundException):
        facade.reject_work_ticket("ticket-missing", {"status": "rejected"})


def test_credit_bulk_account(facade):
    result = facade.credit_bulk_account("bulk-2", 5000, 425000.0)
    assert result.data["current_balance"] == 430000.0


def test_fuel_debit_with_stale_balance_is_rejected(facade):
    with pytest.raises(BalanceChangedException):
        facade.create_fuel_record({"vehicle_id": "vehicle-1", "total_cost": 100.0},
                                  BulkDebit("bulk-2", 100.0, 1.0))


def test_get_current_does_not_fall_back(sample, flaky_gateway):
    f = DataAccessFacade(sample, flaky_gateway())
    f.initialize()
    with pytest.raises(BackendUnavailableException):
        f.get_current(Collection.WORK_TICKETS, "ticket-2")


def test_get_current_in_sample_mode(facade):
    result = facade.get_current(Collection.WORK_TICKETS, "ticket-2")
    assert result.source == DataSource.SAMPLE
    assert result.data["status"] == "pending"
