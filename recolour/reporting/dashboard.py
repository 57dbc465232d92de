from __future__ import annotations

import math
from dataclasses import dataclass, field

from recolour.tickets.repository import TicketRepository
from recolour.tickets.state import Priority, TicketStatus

from .view_meta import PARTNER_OVERVIEW_COLUMNS, ColumnDef, ListResponse, build_partner_overview_meta

NO_TOP_PARTNER = "—"

# Breakdown rows are listed most urgent first.
_PRIORITY_ORDER = (Priority.URGENT, Priority.HIGH, Priority.MEDIUM, Priority.LOW)


@dataclass
class PartnerOverviewRow:
    partner: str
    total: int = 0
    awaiting_receipt: int = 0
    in_progress: int = 0
    completed: int = 0


@dataclass(frozen=True)
class KpiCard:
    label: str
    value: int | str
    tone: str | None = None


@dataclass(frozen=True)
class BreakdownRow:
    label: str
    count: int
    pct: int


@dataclass
class DashboardStats:
    kpi_cards: list[KpiCard]
    status_breakdown: list[BreakdownRow]
    priority_breakdown: list[BreakdownRow]
    partner_overview: list[PartnerOverviewRow]
    partner_overview_columns: list[ColumnDef] = field(
        default_factory=lambda: list(PARTNER_OVERVIEW_COLUMNS)
    )


def _percent(count: int, total: int) -> int:
    if not total:
        return 0
    # Half-up rounding rather than Python's round-half-even.
    return math.floor(count * 100 / total + 0.5)


class DashboardService:
    """Aggregate KPIs and per-partner counts from the current store contents."""

    def __init__(self, repository: TicketRepository) -> None:
        self._repository = repository

    def get_dashboard_stats(self) -> DashboardStats:
        by_status: dict[TicketStatus, int] = {}
        by_priority: dict[Priority, int] = {}
        total_approved = 0
        urgent_open = 0

        for ticket in self._repository.list():
            if ticket.status is TicketStatus.APPROVED:
                total_approved += 1
                continue
            by_status[ticket.status] = by_status.get(ticket.status, 0) + 1
            by_priority[ticket.priority] = by_priority.get(ticket.priority, 0) + 1
            if ticket.priority is Priority.URGENT and ticket.status is not TicketStatus.COMPLETED:
                urgent_open += 1

        overview = self.compute_partner_overview()
        total_active = sum(by_status.values())
        top_partner = sorted(overview, key=lambda row: row.total, reverse=True)[0] if overview else None

        kpi_cards = [
            KpiCard("Active Tickets", total_active, "accent"),
            KpiCard("Pending", by_status.get(TicketStatus.PENDING, 0)),
            KpiCard("In Progress", by_status.get(TicketStatus.IN_PROGRESS, 0), "accent"),
            KpiCard("Awaiting Receipt", by_status.get(TicketStatus.SENT, 0), "warning"),
            KpiCard("Awaiting Approval", by_status.get(TicketStatus.COMPLETED, 0), "warning"),
            KpiCard("Approved Total", total_approved, "success"),
            KpiCard("Urgent Open", urgent_open, "error"),
            KpiCard(
                "Top Partner",
                f"{top_partner.partner} ({top_partner.total})" if top_partner else NO_TOP_PARTNER,
            ),
        ]

        status_breakdown = [
            BreakdownRow(label=status.value, count=count, pct=_percent(count, total_active))
            for status, count in sorted(by_status.items(), key=lambda item: item[1], reverse=True)
        ]
        priority_breakdown = [
            BreakdownRow(
                label=priority.value,
                count=by_priority[priority],
                pct=_percent(by_priority[priority], total_active),
            )
            for priority in _PRIORITY_ORDER
            if by_priority.get(priority, 0) > 0
        ]

        return DashboardStats(
            kpi_cards=kpi_cards,
            status_breakdown=status_breakdown,
            priority_breakdown=priority_breakdown,
            partner_overview=overview,
        )

    def partner_overview_response(self) -> ListResponse[PartnerOverviewRow]:
        return ListResponse(data=self.compute_partner_overview(), meta=build_partner_overview_meta())

    def compute_partner_overview(self) -> list[PartnerOverviewRow]:
        rows: dict[str, PartnerOverviewRow] = {}
        for ticket in self._repository.list():
            row = rows.setdefault(ticket.partner, PartnerOverviewRow(partner=ticket.partner))
            row.total += 1
            if ticket.status is TicketStatus.SENT:
                row.awaiting_receipt += 1
            elif ticket.status is TicketStatus.IN_PROGRESS:
                row.in_progress += 1
            elif ticket.status is TicketStatus.COMPLETED:
                row.completed += 1
        return list(rows.values())
