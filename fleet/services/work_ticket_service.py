"""
Work-ticket lifecycle.

    pending ──approve──▶ approved
       │
       └────reject───▶ rejected

Both targets are terminal. `completed` exists in the data model but nothing
transitions into it. Admin and driver views are read projections over this
single lifecycle; only the transitions below mutate a ticket.
"""

import enum
import logging
from datetime import date

from fleet.data.collections import Collection, utc_now_iso
from fleet.data.facade import DataAccessFacade, FacadeResult
from fleet.models.work_ticket import WorkTicketStatus
from fleet.schemas.auth import SessionIdentity
from fleet.schemas.work_ticket import WorkTicketCreateRequest, ApproveRequest
from fleet.utils.exceptions import (
    NotFoundException, ForbiddenException,
    ValidationFailedException, InvalidTransitionException,
)

logger = logging.getLogger(__name__)


# ═══════════════════════════════════════════════════════════════════════════════
# Role-scoped visibility
# ═══════════════════════════════════════════════════════════════════════════════
class OwnershipMatch(str, enum.Enum):
    DRIVER_ID    = "driver_id"
    NAME         = "name"
    EMAIL        = "email"
    EMAIL_PREFIX = "email_prefix"   # legacy fuzzy fallback, data-quality issue


def match_ticket_owner(ticket: dict, identity: SessionIdentity) -> OwnershipMatch | None:
    """
    Resolve whether `ticket` belongs to the driver `identity`; first rule wins.

    EMAIL_PREFIX only exists for tickets created before driver ids were linked
    and is not an identity check: callers must report it, not trust it.
    """
    driver_id = identity.driverId or identity.id
    if driver_id and ticket.get("driver_id") == driver_id:
        return OwnershipMatch.DRIVER_ID

    name = (identity.name or "").strip()
    if name and ticket.get("driver_name") == name:
        return OwnershipMatch.NAME

    email = (identity.email or "").strip()
    if email and ticket.get("driver_email") == email:
        return OwnershipMatch.EMAIL

    prefix = email.split("@")[0].strip().lower()
    if prefix and prefix in (ticket.get("driver_name") or "").lower():
        return OwnershipMatch.EMAIL_PREFIX

    return None


def visible_tickets(tickets: list[dict], identity: SessionIdentity) -> tuple[list[dict], list[str]]:
    """
    Filter tickets for the identity. Returns (visible, legacy_match_ids) where
    legacy_match_ids lists tickets admitted only through the email-prefix rule.
    """
    if identity.is_admin:
        return list(tickets), []

    visible, legacy = [], []
    for ticket in tickets:
        match = match_ticket_owner(ticket, identity)
        if match is None:
            continue
        if match == OwnershipMatch.EMAIL_PREFIX:
            logger.warning(
                f"Data quality: ticket {ticket.get('id')} matched driver {identity.id} "
                f"only by email prefix (driver_name={ticket.get('driver_name')!r})"
            )
            legacy.append(ticket.get("id"))
        visible.append(ticket)
    return visible, legacy


# ═══════════════════════════════════════════════════════════════════════════════
# Lifecycle
# ═══════════════════════════════════════════════════════════════════════════════
class WorkTicketService:

    def list_tickets(
        self, facade: DataAccessFacade, identity: SessionIdentity, status: str | None = None,
    ) -> tuple[list[dict], list[str]]:
        tickets = facade.list(Collection.WORK_TICKETS).data
        if status:
            tickets = [t for t in tickets if t.get("status") == status]
        return visible_tickets(tickets, identity)

    def _get_or_404(self, facade: DataAccessFacade, ticket_id: str, for_transition: bool = False) -> dict:
        read = facade.get_current if for_transition else facade.get
        ticket = read(Collection.WORK_TICKETS, ticket_id).data
        if not ticket:
            raise NotFoundException("Work ticket")
        return ticket

    def get_ticket(self, facade: DataAccessFacade, ticket_id: str, identity: SessionIdentity) -> dict:
        ticket = self._get_or_404(facade, ticket_id)
        if not identity.is_admin and match_ticket_owner(ticket, identity) is None:
            raise ForbiddenException("You can only view your own work tickets")
        return ticket

    def submit_ticket(
        self, facade: DataAccessFacade, data: WorkTicketCreateRequest, identity: SessionIdentity,
    ) -> FacadeResult:
        if not identity.is_admin and data.driver_id != identity.driverId:
            raise ForbiddenException("Drivers can only submit work tickets for themselves")

        driver = facade.get(Collection.DRIVERS, data.driver_id).data
        if not driver:
            raise ValidationFailedException("Driver does not exist", field="driver_id")
        vehicle = facade.get(Collection.VEHICLES, data.vehicle_id).data
        if not vehicle:
            raise ValidationFailedException("Vehicle does not exist", field="vehicle_id")

        today = date.today().isoformat()
        fields = data.model_dump(mode="json")
        ticket = {
            **fields,
            "departure_date":       fields["departure_date"] or today,
            "return_date":          fields["return_date"] or fields["departure_date"] or today,
            # Snapshot: copied now, never re-synced with later driver/vehicle edits
            "driver_name":          driver.get("name"),
            "driver_license":       driver.get("license_number"),
            "driver_email":         driver.get("email"),
            "vehicle_registration": vehicle.get("registration_number"),
            "status":               WorkTicketStatus.PENDING.value,
            "approved_by":          None,
            "approved_at":          None,
            "rejected_by":          None,
            "rejected_at":          None,
            "rejection_reason":     None,
        }
        result = facade.create(Collection.WORK_TICKETS, ticket)
        logger.info(
            f"Work ticket {result.data['id']} submitted for driver {data.driver_id} "
            f"to {data.destination} by {identity.id}"
        )
        return result

    def _require_pending(self, ticket: dict, action: str) -> None:
        if ticket.get("status") != WorkTicketStatus.PENDING.value:
            raise InvalidTransitionException(
                f"Cannot {action} a work ticket that is '{ticket.get('status')}'; "
                f"only pending tickets can be actioned"
            )

    def approve_ticket(
        self, facade: DataAccessFacade, ticket_id: str, data: ApproveRequest, identity: SessionIdentity,
    ) -> FacadeResult:
        ticket = self._get_or_404(facade, ticket_id, for_transition=True)
        self._require_pending(ticket, "approve")

        changes = {
            "status":      WorkTicketStatus.APPROVED.value,
            "approved_by": (data.approved_by or "").strip() or identity.name or identity.email or identity.id,
            "approved_at": utc_now_iso(),
        }
        result = facade.approve_work_ticket(ticket_id, changes, current=ticket)
        logger.info(f"Work ticket {ticket_id} approved by {changes['approved_by']}")
        return result

    def reject_ticket(
        self, facade: DataAccessFacade, ticket_id: str, reason: str, identity: SessionIdentity,
    ) -> FacadeResult:
        if not reason or not reason.strip():
            raise ValidationFailedException("Rejection reason is required", field="reason")

        ticket = self._get_or_404(facade, ticket_id, for_transition=True)
        self._require_pending(ticket, "reject")

        changes = {
            "status":           WorkTicketStatus.REJECTED.value,
            "rejected_by":      identity.name or identity.email or identity.id,
            "rejected_at":      utc_now_iso(),
            "rejection_reason": reason.strip(),
        }
        result = facade.reject_work_ticket(ticket_id, changes, current=ticket)
        logger.info(f"Work ticket {ticket_id} rejected by {changes['rejected_by']}: {changes['rejection_reason']}")
        return result

    # ─── Printable authorization ──────────────────────────────────────────────
    def authorization_document(
        self, facade: DataAccessFacade, ticket_id: str, identity: SessionIdentity,
    ) -> dict:
        """Read-only projection of an approved ticket for the printed authorization."""
        ticket = self.get_ticket(facade, ticket_id, identity)
        if ticket.get("status") != WorkTicketStatus.APPROVED.value:
            raise InvalidTransitionException("Only approved work tickets have an authorization document")

        return {
            "ticketNumber": ticket["id"],
            "driver": {
                "id":      ticket.get("driver_id"),
                "name":    ticket.get("driver_name"),
                "license": ticket.get("driver_license"),
                "email":   ticket.get("driver_email"),
            },
            "vehicle": {
                "id":           ticket.get("vehicle_id"),
                "registration": ticket.get("vehicle_registration"),
            },
            "destination":       ticket.get("destination"),
            "purpose":           ticket.get("purpose"),
            "fuelRequired":      ticket.get("fuel_required"),
            "estimatedDistance": ticket.get("estimated_distance"),
            "departureDate":     ticket.get("departure_date"),
            "returnDate":        ticket.get("return_date"),
            "notes":             ticket.get("additional_notes"),
            "approvedBy":        ticket.get("approved_by"),
            "approvedAt":        ticket.get("approved_at"),
            "issuedAt":          ticket.get("created_at"),
        }


work_ticket_service = WorkTicketService()
