from __future__ import annotations

from contextlib import contextmanager, nullcontext
from threading import Lock
from typing import Callable, Iterator, Mapping

from .models import RepoTicketFilters, Ticket, TicketSort
from .state import Priority, TicketStatus

DEFAULT_SORT_BY = "createdAt"
DEFAULT_SORT_ORDER = "desc"

_PRIORITY_RANK: Mapping[Priority, int] = {
    Priority.LOW: 1,
    Priority.MEDIUM: 2,
    Priority.HIGH: 3,
    Priority.URGENT: 4,
}

_STATUS_RANK: Mapping[TicketStatus, int] = {
    TicketStatus.PENDING: 1,
    TicketStatus.SENT: 2,
    TicketStatus.RECEIVED: 3,
    TicketStatus.IN_PROGRESS: 4,
    TicketStatus.COMPLETED: 5,
    TicketStatus.APPROVED: 6,
}


def _partner_key(ticket: Ticket) -> tuple[str, str]:
    return (ticket.partner.casefold(), ticket.partner)


SORT_KEYS: Mapping[str, Callable[[Ticket], object]] = {
    "createdAt": lambda ticket: ticket.created_at,
    "priority": lambda ticket: _PRIORITY_RANK[ticket.priority],
    "status": lambda ticket: _STATUS_RANK[ticket.status],
    "partner": _partner_key,
}


class TicketRepository:
    """In-memory store owning the ticket records.

    The repository applies no business rules. Records are handed out by
    reference so the workflow service, the only writer, can mutate them while
    holding :meth:`lock` for the ticket id.
    """

    def __init__(self) -> None:
        self._tickets: list[Ticket] = []
        self._next_id = 1
        self._store_lock = Lock()
        self._ticket_locks: dict[str, Lock] = {}

    def list(self, filters: RepoTicketFilters | None = None, sort: TicketSort | None = None) -> list[Ticket]:
        filters = filters or RepoTicketFilters()
        with self._store_lock:
            snapshot = list(self._tickets)
        matched = [ticket for ticket in snapshot if _matches(ticket, filters)]

        sort_by = (sort.sort_by if sort else None) or DEFAULT_SORT_BY
        sort_order = (sort.sort_order if sort else None) or DEFAULT_SORT_ORDER
        key = SORT_KEYS.get(sort_by, _partner_key)

        ordered = sorted(matched, key=key)
        if sort_order != "asc":
            # Reversing keeps descending order the exact mirror of ascending, ties included.
            ordered.reverse()
        return ordered

    def get_by_id(self, ticket_id: str) -> Ticket | None:
        with self._store_lock:
            for ticket in self._tickets:
                if ticket.id == ticket_id:
                    return ticket
        return None

    def distinct_partners(self) -> list[str]:
        with self._store_lock:
            return sorted({ticket.partner for ticket in self._tickets})

    def add(self, ticket: Ticket) -> None:
        with self._store_lock:
            self._ticket_locks.setdefault(ticket.id, Lock())
            self._tickets.append(ticket)

    def generate_id(self) -> str:
        with self._store_lock:
            ticket_id = str(self._next_id)
            self._next_id += 1
        return ticket_id

    @contextmanager
    def lock(self, ticket_id: str) -> Iterator[None]:
        """Serialise mutations of a single ticket.

        Locks exist only for stored tickets. An unknown id takes no lock, the
        caller then finds no record and reports it missing.
        """

        with self._store_lock:
            ticket_lock = self._ticket_locks.get(ticket_id)
        with ticket_lock or nullcontext():
            yield


def _matches(ticket: Ticket, filters: RepoTicketFilters) -> bool:
    if filters.partner_scope is not None and ticket.partner != filters.partner_scope:
        return False
    if filters.status is not None and ticket.status != filters.status:
        return False
    if filters.priority is not None and ticket.priority != filters.priority:
        return False
    if filters.partner is not None and ticket.partner != filters.partner:
        return False
    if filters.status_in is not None and ticket.status not in filters.status_in:
        return False
    return True
