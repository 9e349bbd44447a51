"""
Dashboard aggregation.

Counts are re-derived from the collections on every call, never cached or
incremented. The five reads run concurrently; one failing read leaves its
count as None and the rest of the dashboard is still returned.
"""

import logging
from concurrent.futures import ThreadPoolExecutor

from fleet.data.collections import Collection, utc_now_iso
from fleet.data.facade import DataAccessFacade, DataSource
from fleet.models.work_ticket import WorkTicketStatus

logger = logging.getLogger(__name__)


COUNTED = {
    "totalVehicles":           Collection.VEHICLES,
    "totalDrivers":            Collection.DRIVERS,
    "totalFuelRecords":        Collection.FUEL_RECORDS,
    "totalMaintenanceRecords": Collection.MAINTENANCE_RECORDS,
    "totalWorkTickets":        Collection.WORK_TICKETS,
}


class DashboardService:

    def __init__(self, max_workers: int = len(COUNTED)):
        self._max_workers = max_workers

    def compute(self, facade: DataAccessFacade) -> dict:
        with ThreadPoolExecutor(max_workers=self._max_workers, thread_name_prefix="dashboard") as pool:
            futures = {key: pool.submit(facade.list, c) for key, c in COUNTED.items()}

        stats: dict = {}
        unavailable: list[str] = []
        sample_sources = False
        tickets = None

        for key, future in futures.items():
            try:
                result = future.result()
            except Exception as e:
                logger.warning(f"Dashboard read for {COUNTED[key].value} failed: {e}", exc_info=True)
                stats[key] = None
                unavailable.append(COUNTED[key].value)
                continue
            stats[key] = len(result.data)
            sample_sources = sample_sources or result.source == DataSource.SAMPLE
            if COUNTED[key] == Collection.WORK_TICKETS:
                tickets = result.data

        stats["pendingWorkTickets"] = (
            sum(1 for t in tickets if t.get("status") == WorkTicketStatus.PENDING.value)
            if tickets is not None else None
        )
        stats["lastUpdated"] = utc_now_iso()
        stats["unavailable"] = unavailable
        stats["demoMode"] = sample_sources or facade.is_using_sample_data()
        return stats


dashboard_service = DashboardService()
