from fastapi import APIRouter, Depends, Query, status
from typing import Optional

from fleet.data.facade import DataAccessFacade
from fleet.dependencies import get_facade, get_admin_user, get_any_authenticated
from fleet.schemas.auth import SessionIdentity
from fleet.schemas.common import success_response, paginated_response, facade_response, paginate
from fleet.schemas.work_ticket import WorkTicketCreateRequest, ApproveRequest, RejectRequest
from fleet.services.dashboard_service import dashboard_service
from fleet.services.work_ticket_service import work_ticket_service

router = APIRouter(prefix="/work-tickets")


@router.get("", summary="List work tickets (role-filtered)")
def list_tickets(
    page:   int           = Query(1, ge=1),
    limit:  int           = Query(20, ge=1, le=100),
    status: Optional[str] = Query(None, description="pending | approved | rejected | completed"),
    facade:       DataAccessFacade = Depends(get_facade),
    current_user: SessionIdentity  = Depends(get_any_authenticated),
):
    tickets, legacy = work_ticket_service.list_tickets(facade, current_user, status)
    response = paginated_response("Work tickets retrieved successfully", paginate(tickets, page, limit),
                                  len(tickets), page, limit, demoMode=facade.is_using_sample_data())
    response["meta"]["legacyMatches"] = legacy
    return response


@router.get("/{ticket_id}", summary="Get work ticket detail")
def get_ticket(
    ticket_id: str,
    facade:       DataAccessFacade = Depends(get_facade),
    current_user: SessionIdentity  = Depends(get_any_authenticated),
):
    return success_response("Work ticket retrieved",
                            work_ticket_service.get_ticket(facade, ticket_id, current_user),
                            demoMode=facade.is_using_sample_data())


@router.get("/{ticket_id}/authorization", summary="Printable authorization for an approved ticket")
def authorization_document(
    ticket_id: str,
    facade:       DataAccessFacade = Depends(get_facade),
    current_user: SessionIdentity  = Depends(get_any_authenticated),
):
    return success_response("Authorization document generated",
                            work_ticket_service.authorization_document(facade, ticket_id, current_user))


@router.post("", status_code=status.HTTP_201_CREATED, summary="Submit work ticket")
def submit_ticket(
    body:         WorkTicketCreateRequest,
    facade:       DataAccessFacade = Depends(get_facade),
    current_user: SessionIdentity  = Depends(get_any_authenticated),
):
    return facade_response("Work ticket submitted successfully",
                           work_ticket_service.submit_ticket(facade, body, current_user))


@router.post("/{ticket_id}/approve", summary="Approve work ticket (Admin only)")
def approve_ticket(
    ticket_id:    str,
    body:         ApproveRequest = ApproveRequest(),
    facade:       DataAccessFacade = Depends(get_facade),
    current_user: SessionIdentity  = Depends(get_admin_user),
):
    result = work_ticket_service.approve_ticket(facade, ticket_id, body, current_user)
    return facade_response("Work ticket approved", result,
                           data={"ticket": result.data, "dashboard": dashboard_service.compute(facade)})


@router.post("/{ticket_id}/reject", summary="Reject work ticket (Admin only)")
def reject_ticket(
    ticket_id:    str,
    body:         RejectRequest,
    facade:       DataAccessFacade = Depends(get_facade),
    current_user: SessionIdentity  = Depends(get_admin_user),
):
    result = work_ticket_service.reject_ticket(facade, ticket_id, body.reason, current_user)
    return facade_response("Work ticket rejected", result,
                           data={"ticket": result.data, "dashboard": dashboard_service.compute(facade)})
