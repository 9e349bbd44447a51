from fastapi import APIRouter, Depends

from fleet.data.facade import DataAccessFacade
from fleet.dependencies import get_facade, get_any_authenticated
from fleet.schemas.auth import SessionIdentity
from fleet.schemas.common import success_response
from fleet.services.dashboard_service import dashboard_service

router = APIRouter(prefix="/dashboard")


@router.get("", summary="Fleet summary counts")
def get_dashboard(
    facade: DataAccessFacade = Depends(get_facade),
    _:      SessionIdentity  = Depends(get_any_authenticated),
):
    stats = dashboard_service.compute(facade)
    return success_response("Dashboard retrieved", stats, demoMode=stats["demoMode"])
