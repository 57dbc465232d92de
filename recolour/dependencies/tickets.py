from __future__ import annotations

from typing import Annotated

from fastapi import Depends, HTTPException, Request

from recolour.api.errors import PHOTOS_LOCKED_DETAIL
from recolour.dependencies.auth import role_required
from recolour.photos.service import PhotoService
from recolour.reporting.dashboard import DashboardService
from recolour.tickets.models import RequestRole, Ticket
from recolour.tickets.service import TicketService
from recolour.tickets.state import Role, TicketStatus

require_manager = role_required(Role.MANAGER)
require_staff = role_required(Role.MANAGER, Role.OPERATOR)
require_partner = role_required(Role.PARTNER)

ManagerRole = Annotated[RequestRole, Depends(require_manager)]
StaffRole = Annotated[RequestRole, Depends(require_staff)]
PartnerRole = Annotated[RequestRole, Depends(require_partner)]


async def get_ticket_service(request: Request) -> TicketService:
    service = getattr(request.app.state, "ticket_service", None)
    if service is None:
        raise HTTPException(status_code=503, detail="Ticket service is not configured")
    return service


async def get_photo_service(request: Request) -> PhotoService:
    service = getattr(request.app.state, "photo_service", None)
    if service is None:
        raise HTTPException(status_code=503, detail="Photo service is not configured")
    return service


async def get_dashboard_service(request: Request) -> DashboardService:
    service = getattr(request.app.state, "dashboard_service", None)
    if service is None:
        raise HTTPException(status_code=503, detail="Dashboard service is not configured")
    return service


TicketServiceDep = Annotated[TicketService, Depends(get_ticket_service)]
PhotoServiceDep = Annotated[PhotoService, Depends(get_photo_service)]
DashboardServiceDep = Annotated[DashboardService, Depends(get_dashboard_service)]


async def require_photo_access(
    ticket_id: str,
    service: TicketServiceDep,
    role: PartnerRole,
) -> Ticket:
    """Resolve a ticket whose photos the calling partner may manage.

    The ticket must be visible to the partner and currently In Progress.
    """

    ticket = service.find_by_id(ticket_id, role)
    if ticket is None:
        raise HTTPException(status_code=404, detail="Ticket not found")
    if ticket.status is not TicketStatus.IN_PROGRESS:
        raise HTTPException(status_code=409, detail=PHOTOS_LOCKED_DETAIL)
    return ticket


PhotoTicket = Annotated[Ticket, Depends(require_photo_access)]
