import logging

from fleet.data.collections import Collection
from fleet.data.facade import DataAccessFacade, FacadeResult
from fleet.schemas.vehicle import VehicleCreateRequest, VehicleUpdateRequest, VehicleStatusRequest
from fleet.utils.exceptions import NotFoundException, DuplicateEntryException

logger = logging.getLogger(__name__)


def _matches(v: dict, search: str) -> bool:
    kw = search.lower()
    return any(kw in (v.get(f) or "").lower() for f in ("registration_number", "make", "model", "department"))


class VehicleService:

    def list_vehicles(
        self, facade: DataAccessFacade, search: str | None = None, status: str | None = None,
    ) -> FacadeResult:
        result = facade.list(Collection.VEHICLES)
        items = result.data
        if search:
            items = [v for v in items if _matches(v, search)]
        if status:
            items = [v for v in items if v.get("status") == status]
        result.data = items
        return result

    def get_vehicle(self, facade: DataAccessFacade, vehicle_id: str) -> dict:
        v = facade.get(Collection.VEHICLES, vehicle_id).data
        if not v:
            raise NotFoundException("Vehicle")
        return v

    def _check_registration(self, facade: DataAccessFacade, registration: str, exclude_id: str | None = None):
        for v in facade.list(Collection.VEHICLES).data:
            if v.get("registration_number") == registration and v.get("id") != exclude_id:
                raise DuplicateEntryException("Registration number already registered", field="registration_number")

    def create_vehicle(self, facade: DataAccessFacade, data: VehicleCreateRequest) -> FacadeResult:
        self._check_registration(facade, data.registration_number)
        result = facade.create(Collection.VEHICLES, data.model_dump(mode="json"))
        logger.info(f"Created vehicle {data.registration_number} ({data.make} {data.model})")
        return result

    def update_vehicle(self, facade: DataAccessFacade, vehicle_id: str, data: VehicleUpdateRequest) -> FacadeResult:
        current = self.get_vehicle(facade, vehicle_id)
        changes = data.model_dump(mode="json", exclude_none=True)
        if changes.get("registration_number") and changes["registration_number"] != current.get("registration_number"):
            self._check_registration(facade, changes["registration_number"], exclude_id=vehicle_id)

        result = facade.update(Collection.VEHICLES, vehicle_id, changes, current=current)
        logger.info(f"Updated vehicle {vehicle_id}: {sorted(changes)}")
        return result

    def update_status(self, facade: DataAccessFacade, vehicle_id: str, data: VehicleStatusRequest) -> FacadeResult:
        current = self.get_vehicle(facade, vehicle_id)
        result = facade.update(Collection.VEHICLES, vehicle_id, {"status": data.status.value}, current=current)
        logger.info(
            f"Vehicle {vehicle_id} status changed {current.get('status')} -> {data.status.value}"
            + (f" | Reason: {data.reason}" if data.reason else "")
        )
        return result


vehicle_service = VehicleService()
