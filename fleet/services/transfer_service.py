"""
Vehicle transfers between departments and locations.

Recording a transfer also moves the vehicle: its department and location are
set to the transfer's destination. The transfer row keeps where it came from.
"""

import logging
from datetime import date

from fleet.data.collections import Collection
from fleet.data.facade import DataAccessFacade, FacadeResult
from fleet.schemas.transfer import TransferCreateRequest
from fleet.utils.exceptions import NotFoundException, ValidationFailedException

logger = logging.getLogger(__name__)


class TransferService:

    def list_transfers(self, facade: DataAccessFacade, vehicle_id: str | None = None) -> FacadeResult:
        result = facade.list(Collection.TRANSFERS)
        items = result.data
        if vehicle_id:
            items = [t for t in items if t.get("vehicle_id") == vehicle_id]
        result.data = sorted(items, key=lambda t: t.get("transfer_date") or "", reverse=True)
        return result

    def get_transfer(self, facade: DataAccessFacade, transfer_id: str) -> dict:
        t = facade.get(Collection.TRANSFERS, transfer_id).data
        if not t:
            raise NotFoundException("Vehicle transfer")
        return t

    def create_transfer(
        self, facade: DataAccessFacade, data: TransferCreateRequest,
    ) -> tuple[FacadeResult, FacadeResult]:
        """Returns (transfer, vehicle) results; the vehicle carries its new department/location."""
        vehicle = facade.get(Collection.VEHICLES, data.vehicle_id).data
        if not vehicle:
            raise ValidationFailedException("Vehicle does not exist", field="vehicle_id")

        fields = data.model_dump(mode="json")
        record = {
            **fields,
            "from_department": fields["from_department"] or vehicle.get("department"),
            "from_location":   fields["from_location"] or vehicle.get("location"),
            "transfer_date":   fields["transfer_date"] or date.today().isoformat(),
        }
        transfer = facade.create(Collection.TRANSFERS, record)

        moved = facade.update(
            Collection.VEHICLES, data.vehicle_id,
            {"department": data.to_department, "location": data.to_location},
            current=vehicle,
        )
        logger.info(
            f"Transfer {transfer.data['id']}: vehicle {data.vehicle_id} moved from "
            f"{record['from_department']} / {record['from_location']} to "
            f"{data.to_department} / {data.to_location}, authorized by {data.authorized_by}"
        )
        return transfer, moved


transfer_service = TransferService()
