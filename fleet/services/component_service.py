"""
Tire and battery tracking.

A component is installed on one vehicle and stays `active` until it is
removed or replaced; both of those are terminal. Serial numbers are unique
among active components.
"""

import logging
from datetime import date

from fleet.data.collections import Collection
from fleet.data.facade import DataAccessFacade, FacadeResult
from fleet.models.component import ComponentType, ComponentStatus
from fleet.schemas.component import (
    ComponentCreateRequest, ComponentUpdateRequest, ComponentRemovalRequest,
)
from fleet.utils.exceptions import (
    NotFoundException, DuplicateEntryException,
    ValidationFailedException, InvalidTransitionException,
)

logger = logging.getLogger(__name__)


class ComponentService:

    def list_components(
        self, facade: DataAccessFacade,
        vehicle_id: str | None = None, component_type: str | None = None, status: str | None = None,
    ) -> FacadeResult:
        result = facade.list(Collection.COMPONENTS)
        items = result.data
        if vehicle_id:     items = [c for c in items if c.get("vehicle_id") == vehicle_id]
        if component_type: items = [c for c in items if c.get("component_type") == component_type]
        if status:         items = [c for c in items if c.get("status") == status]
        result.data = sorted(items, key=lambda c: c.get("installation_date") or "", reverse=True)
        return result

    def get_component(self, facade: DataAccessFacade, component_id: str) -> dict:
        c = facade.get(Collection.COMPONENTS, component_id).data
        if not c:
            raise NotFoundException("Component")
        return c

    def _check_serial(self, facade: DataAccessFacade, serial_number: str) -> None:
        for c in facade.list(Collection.COMPONENTS).data:
            if c.get("serial_number") == serial_number and c.get("status") == ComponentStatus.ACTIVE.value:
                raise DuplicateEntryException("Serial number is already fitted to a vehicle", field="serial_number")

    def create_component(self, facade: DataAccessFacade, data: ComponentCreateRequest) -> FacadeResult:
        if not facade.get(Collection.VEHICLES, data.vehicle_id).data:
            raise ValidationFailedException("Vehicle does not exist", field="vehicle_id")
        self._check_serial(facade, data.serial_number)

        record = {
            **data.model_dump(mode="json"),
            "removal_date":    None,
            "removal_mileage": None,
            "status":          ComponentStatus.ACTIVE.value,
        }
        result = facade.create(Collection.COMPONENTS, record)
        logger.info(
            f"Installed {data.component_type.value} {data.serial_number} on {data.vehicle_id} "
            f"as {result.data['id']}"
        )
        return result

    def update_component(self, facade: DataAccessFacade, component_id: str, data: ComponentUpdateRequest) -> FacadeResult:
        current = self.get_component(facade, component_id)
        changes = data.model_dump(mode="json", exclude_none=True)
        if "position" in changes and current.get("component_type") != ComponentType.TIRE.value:
            raise ValidationFailedException("Only tires have a position", field="position")
        if "purchase_cost" in changes and changes["purchase_cost"] < 0:
            raise ValidationFailedException("Cost cannot be negative", field="purchase_cost")

        result = facade.update(Collection.COMPONENTS, component_id, changes, current=current)
        logger.info(f"Updated component {component_id}: {sorted(changes)}")
        return result

    def remove_component(self, facade: DataAccessFacade, component_id: str, data: ComponentRemovalRequest) -> FacadeResult:
        current = self.get_component(facade, component_id)
        if current.get("status") != ComponentStatus.ACTIVE.value:
            raise InvalidTransitionException(f"Component is already '{current.get('status')}'")

        installed_at = current.get("installation_mileage") or 0
        if data.removal_mileage is not None and data.removal_mileage < installed_at:
            raise ValidationFailedException(
                f"Removal mileage cannot be below installation mileage ({installed_at})",
                field="removal_mileage",
            )

        changes = {
            "status":          data.status.value,
            "removal_date":    (data.removal_date or date.today()).isoformat(),
            "removal_mileage": data.removal_mileage,
        }
        if data.notes is not None:
            changes["notes"] = data.notes

        result = facade.update(Collection.COMPONENTS, component_id, changes, current=current)
        logger.info(f"Component {component_id} {data.status.value} on {changes['removal_date']}")
        return result


component_service = ComponentService()
