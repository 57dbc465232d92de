from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, status
from pydantic import ValidationError

from recolour.api.errors import INVALID_QUERY, unwrap
from recolour.api.schemas import (
    RejectRequest,
    TicketCreateRequest,
    TicketListQuery,
    TicketListResponse,
    TicketResponse,
    TicketUpdateRequest,
)
from recolour.dependencies.auth import CurrentRole, action_required
from recolour.dependencies.tickets import StaffRole, TicketServiceDep
from recolour.tickets.models import RequestRole, Ticket
from recolour.tickets.state import TicketStateMachine, TicketStatus, WorkflowAction

router = APIRouter(prefix="/api/tickets", tags=["tickets"])


def _to_response(ticket: Ticket) -> TicketResponse:
    return TicketResponse.model_validate(ticket)


def get_list_query(
    status_filter: Annotated[str | None, Query(alias="status")] = None,
    priority: Annotated[str | None, Query()] = None,
    partner: Annotated[str | None, Query()] = None,
    sort_by: Annotated[str | None, Query(alias="sortBy")] = None,
    sort_order: Annotated[str | None, Query(alias="sortOrder")] = None,
) -> TicketListQuery:
    """Parse list query parameters, treating blank values as absent."""

    try:
        return TicketListQuery.model_validate(
            {
                "status": status_filter,
                "priority": priority,
                "partner": partner,
                "sortBy": sort_by,
                "sortOrder": sort_order,
            }
        )
    except ValidationError as exc:
        raise HTTPException(status_code=400, detail=INVALID_QUERY) from exc


ListQuery = Annotated[TicketListQuery, Depends(get_list_query)]


@router.get("", response_model=TicketListResponse)
def list_tickets(service: TicketServiceDep, role: CurrentRole, query: ListQuery) -> TicketListResponse:
    response = service.list_tickets(query.filters(), query.sort(), role)
    return TicketListResponse.model_validate(response)


@router.get("/{ticket_id}", response_model=TicketResponse)
def get_ticket(ticket_id: str, service: TicketServiceDep, role: CurrentRole) -> TicketResponse:
    ticket = service.find_by_id(ticket_id, role)
    if ticket is None:
        raise HTTPException(status_code=404, detail="Ticket not found")
    return _to_response(ticket)


@router.post("", response_model=TicketResponse, status_code=status.HTTP_201_CREATED)
def create_ticket(payload: TicketCreateRequest, service: TicketServiceDep, role: StaffRole) -> TicketResponse:
    ticket = service.create(payload.to_domain(), role.actor)
    return _to_response(ticket)


@router.put("/{ticket_id}", response_model=TicketResponse)
def update_ticket(
    ticket_id: str,
    payload: TicketUpdateRequest,
    service: TicketServiceDep,
    role: StaffRole,
) -> TicketResponse:
    if not payload.has_changes():
        raise HTTPException(status_code=400, detail="At least one editable field is required")
    result = service.update_ticket(ticket_id, payload.to_domain(), role.actor)
    return _to_response(unwrap(result))


def _register_transition(path: str, action: WorkflowAction) -> None:
    target = TicketStateMachine.target_for(action)
    ActionRole = Annotated[RequestRole, Depends(action_required(action))]

    def transition(ticket_id: str, service: TicketServiceDep, role: ActionRole) -> TicketResponse:
        result = service.change_status(ticket_id, target, role.actor, role=role)
        return _to_response(unwrap(result))

    router.add_api_route(
        f"/{{ticket_id}}/{path}",
        transition,
        methods=["POST"],
        response_model=TicketResponse,
        name=f"{action.value}_ticket",
    )


_register_transition("send", WorkflowAction.SEND)
_register_transition("receipt", WorkflowAction.RECEIVE)
_register_transition("start", WorkflowAction.START)
_register_transition("complete", WorkflowAction.COMPLETE)
_register_transition("approve", WorkflowAction.APPROVE)

RejectRole = Annotated[RequestRole, Depends(action_required(WorkflowAction.REJECT))]


@router.post("/{ticket_id}/reject", response_model=TicketResponse)
def reject_ticket(
    ticket_id: str,
    payload: RejectRequest,
    service: TicketServiceDep,
    role: RejectRole,
) -> TicketResponse:
    result = service.change_status(
        ticket_id, TicketStatus.PENDING, role.actor, reason=payload.reason, role=role
    )
    return _to_response(unwrap(result))
