from fastapi import APIRouter

from recolour.api.schemas import (
    DashboardStatsResponse,
    MetaOptionsResponse,
    PartnerOverviewResponse,
    TicketListResponse,
)
from recolour.dependencies.auth import CurrentRole
from recolour.dependencies.tickets import DashboardServiceDep, ManagerRole, StaffRole, TicketServiceDep

router = APIRouter(prefix="/api", tags=["views"])


@router.get("/meta/options", response_model=MetaOptionsResponse)
def get_meta_options(service: TicketServiceDep) -> MetaOptionsResponse:
    return MetaOptionsResponse.model_validate(service.meta_options())


@router.get("/approved", response_model=TicketListResponse)
def list_approved(service: TicketServiceDep, role: CurrentRole) -> TicketListResponse:
    return TicketListResponse.model_validate(service.list_approved(role))


@router.get("/partners/overview", response_model=PartnerOverviewResponse)
def partner_overview(dashboard: DashboardServiceDep, _: StaffRole) -> PartnerOverviewResponse:
    return PartnerOverviewResponse.model_validate(dashboard.partner_overview_response())


@router.get("/dashboard/stats", response_model=DashboardStatsResponse)
def dashboard_stats(dashboard: DashboardServiceDep, _: ManagerRole) -> DashboardStatsResponse:
    return DashboardStatsResponse.model_validate(dashboard.get_dashboard_stats())
