import logging
from fastapi import APIRouter, Body, Depends

from fleet.config import settings
from fleet.data.collections import Collection, utc_now_iso
from fleet.data.fallback_store import invalid_collections
from fleet.data.facade import DataAccessFacade
from fleet.dependencies import get_facade, get_admin_user
from fleet.schemas.auth import SessionIdentity
from fleet.schemas.common import success_response
from fleet.services.driver_service import public_driver
from fleet.utils.exceptions import InvalidTransitionException, ValidationFailedException

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/system")


# ─── GET /system/export ───────────────────────────────────────────────────────
@router.get("/export", summary="Export every collection (Admin)")
def export_data(
    facade: DataAccessFacade = Depends(get_facade),
    _:      SessionIdentity  = Depends(get_admin_user),
):
    """Backup of all collections as currently served; driver credentials are left out."""
    collections = {}
    for c in Collection:
        records = facade.list(c).data
        if c == Collection.DRIVERS:
            records = [public_driver(d) for d in records]
        collections[c.value] = records

    return success_response("Data exported", {
        "version":     settings.FALLBACK_DATA_VERSION,
        "exportedAt":  utc_now_iso(),
        "collections": collections,
    }, demoMode=facade.is_using_sample_data())


# ─── POST /system/import ──────────────────────────────────────────────────────
@router.post("/import", summary="Restore sample data from an export (Admin, demo mode only)")
def import_data(
    payload:      dict = Body(...),
    facade:       DataAccessFacade = Depends(get_facade),
    current_user: SessionIdentity  = Depends(get_admin_user),
):
    if not facade.is_using_sample_data():
        raise InvalidTransitionException("Import is only available while serving sample data")

    collections = payload.get("collections", payload)
    if not isinstance(collections, dict):
        raise ValidationFailedException("Expected an object of collections", field="collections")
    malformed = invalid_collections(collections)
    if malformed:
        raise ValidationFailedException(
            f"Collections must be lists of record objects: {', '.join(malformed)}", field="collections",
        )

    ok = facade.sample.store.import_data(collections)
    facade.sample.reload()
    logger.info(f"Sample data imported by {current_user.id}: {sorted(collections)} (complete={ok})")
    return success_response("Data imported", {"imported": sorted(k for k in collections
                                                                 if k in {c.value for c in Collection}),
                                              "complete": ok}, demoMode=True)
