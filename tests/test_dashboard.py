from conftest import make_input

from recolour.reporting.dashboard import NO_TOP_PARTNER, DashboardService, _percent
from recolour.tickets.state import Priority, TicketStatus


def _build(ticket_service, partner, priority, *statuses):
    ticket = ticket_service.create(make_input(partner=partner, priority=priority), "operator")
    for status in statuses:
        ticket_service.change_status(ticket.id, status, "operator")
    return ticket


def _populate(ticket_service):
    _build(ticket_service, "Studio Alpha", Priority.URGENT)
    _build(ticket_service, "Studio Alpha", Priority.LOW, TicketStatus.SENT)
    _build(
        ticket_service,
        "Studio Beta",
        Priority.URGENT,
        TicketStatus.SENT,
        TicketStatus.IN_PROGRESS,
        TicketStatus.COMPLETED,
    )
    _build(
        ticket_service,
        "Studio Gamma",
        Priority.MEDIUM,
        TicketStatus.SENT,
        TicketStatus.IN_PROGRESS,
        TicketStatus.COMPLETED,
        TicketStatus.APPROVED,
    )


def test_percent_rounds_half_up():
    assert _percent(1, 8) == 13
    assert _percent(2, 3) == 67
    assert _percent(1, 3) == 33
    assert _percent(5, 0) == 0


def test_dashboard_stats(repository, ticket_service):
    _populate(ticket_service)

    stats = DashboardService(repository).get_dashboard_stats()

    cards = {card.label: card.value for card in stats.kpi_cards}
    assert cards == {
        "Active Tickets": 3,
        "Pending": 1,
        "In Progress": 0,
        "Awaiting Receipt": 1,
        "Awaiting Approval": 1,
        "Approved Total": 1,
        "Urgent Open": 1,
        "Top Partner": "Studio Alpha (2)",
    }
    assert {row.label: (row.count, row.pct) for row in stats.status_breakdown} == {
        "Pending": (1, 33),
        "Sent": (1, 33),
        "Completed": (1, 33),
    }
    assert [(row.label, row.count, row.pct) for row in stats.priority_breakdown] == [
        ("Urgent", 2, 67),
        ("Low", 1, 33),
    ]
    assert [column.key for column in stats.partner_overview_columns][0] == "partner"


def test_partner_overview_counts_all_tickets(repository, ticket_service):
    _populate(ticket_service)

    rows = {row.partner: row for row in DashboardService(repository).compute_partner_overview()}

    assert rows["Studio Alpha"].total == 2
    assert rows["Studio Alpha"].awaiting_receipt == 1
    assert rows["Studio Beta"].completed == 1
    assert rows["Studio Gamma"].total == 1
    assert rows["Studio Gamma"].completed == 0


def test_empty_dashboard(repository):
    stats = DashboardService(repository).get_dashboard_stats()

    assert stats.kpi_cards[0].value == 0
    assert stats.kpi_cards[-1].value == NO_TOP_PARTNER
    assert stats.status_breakdown == []
    assert stats.priority_breakdown == []
