from fastapi import APIRouter, Depends, Query
from typing import Optional

from fleet.data.facade import DataAccessFacade
from fleet.dependencies import get_facade, get_admin_user
from fleet.schemas.auth import SessionIdentity
from fleet.schemas.common import success_response
from fleet.services.reports_service import reports_service

router = APIRouter(prefix="/reports")

PERIOD_HELP = "week | month | quarter | year | all"


# ─── Overview ─────────────────────────────────────────────────────────────────
@router.get("/overview", summary="KPIs, efficiency, cost by vehicle and monthly trends (Admin)")
def report_overview(
    period:    str           = Query("all", description=PERIOD_HELP),
    vehicleId: Optional[str] = Query(None),
    facade:    DataAccessFacade = Depends(get_facade),
    _:         SessionIdentity  = Depends(get_admin_user),
):
    report = reports_service.overview(facade, period, vehicleId)
    return success_response("Overview report generated", report, demoMode=report["demoMode"])


# ─── Fuel Expenses ────────────────────────────────────────────────────────────
@router.get("/fuel-expenses", summary="Fuel expense and efficiency report (Admin)")
def report_fuel_expenses(
    period:    str           = Query("all", description=PERIOD_HELP),
    vehicleId: Optional[str] = Query(None),
    facade:    DataAccessFacade = Depends(get_facade),
    _:         SessionIdentity  = Depends(get_admin_user),
):
    report = reports_service.fuel_expenses(facade, period, vehicleId)
    return success_response("Fuel expense report generated", report, demoMode=report["demoMode"])


# ─── Maintenance Cost ─────────────────────────────────────────────────────────
@router.get("/maintenance-cost", summary="Maintenance cost report (Admin)")
def report_maintenance_cost(
    period:    str           = Query("all", description=PERIOD_HELP),
    vehicleId: Optional[str] = Query(None),
    facade:    DataAccessFacade = Depends(get_facade),
    _:         SessionIdentity  = Depends(get_admin_user),
):
    report = reports_service.maintenance_cost(facade, period, vehicleId)
    return success_response("Maintenance cost report generated", report, demoMode=report["demoMode"])
