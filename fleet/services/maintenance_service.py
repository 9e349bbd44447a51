import logging

from fleet.data.collections import Collection
from fleet.data.facade import DataAccessFacade, FacadeResult
from fleet.schemas.maintenance import MaintenanceCreateRequest, MaintenanceUpdateRequest
from fleet.utils.exceptions import NotFoundException, ValidationFailedException

logger = logging.getLogger(__name__)


def _total_cost(labor, parts) -> float:
    return round(float(labor or 0) + float(parts or 0), 2)


class MaintenanceService:

    def list_records(
        self, facade: DataAccessFacade,
        vehicle_id: str | None = None, status: str | None = None, maintenance_type: str | None = None,
    ) -> FacadeResult:
        result = facade.list(Collection.MAINTENANCE_RECORDS)
        items = result.data
        if vehicle_id:       items = [m for m in items if m.get("vehicle_id") == vehicle_id]
        if status:           items = [m for m in items if m.get("status") == status]
        if maintenance_type: items = [m for m in items if m.get("maintenance_type") == maintenance_type]
        result.data = items
        return result

    def get_record(self, facade: DataAccessFacade, record_id: str) -> dict:
        m = facade.get(Collection.MAINTENANCE_RECORDS, record_id).data
        if not m:
            raise NotFoundException("Maintenance record")
        return m

    def create_record(self, facade: DataAccessFacade, data: MaintenanceCreateRequest) -> FacadeResult:
        if not facade.get(Collection.VEHICLES, data.vehicle_id).data:
            raise ValidationFailedException("Vehicle does not exist", field="vehicle_id")

        record = data.model_dump(mode="json")
        record["cost"] = _total_cost(data.labor_cost, data.parts_cost)
        result = facade.create(Collection.MAINTENANCE_RECORDS, record)
        logger.info(f"Maintenance {result.data['id']} ({data.maintenance_type.value}) logged for {data.vehicle_id}: {record['cost']}")
        return result

    def update_record(self, facade: DataAccessFacade, record_id: str, data: MaintenanceUpdateRequest) -> FacadeResult:
        current = self.get_record(facade, record_id)
        changes = data.model_dump(mode="json", exclude_none=True)

        # cost always equals labor + parts of the merged record
        labor = changes.get("labor_cost", current.get("labor_cost"))
        parts = changes.get("parts_cost", current.get("parts_cost"))
        changes["cost"] = _total_cost(labor, parts)

        result = facade.update(Collection.MAINTENANCE_RECORDS, record_id, changes, current=current)
        logger.info(f"Updated maintenance {record_id}: {sorted(changes)}")
        return result


maintenance_service = MaintenanceService()
