from __future__ import annotations

import copy
import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Callable, Sequence

from recolour.reporting.view_meta import (
    ListResponse,
    build_approved_meta,
    build_approved_meta_for_partner,
    build_partner_ticket_list_meta,
    build_queue_meta,
)

from .catalog import PHOTO_OPTIONS, STYLE_OPTIONS
from .models import (
    CreateTicketInput,
    HistoryEvent,
    PhotoOption,
    RepoTicketFilters,
    RequestRole,
    StoreError,
    StoreErrorCode,
    StoreResult,
    StoreSuccess,
    Ticket,
    TicketFilters,
    TicketSort,
    UpdateTicketFields,
)
from .repository import TicketRepository
from .state import (
    ALL_PRIORITIES,
    PARTNER_VISIBLE_STATUSES,
    QUEUE_VISIBLE_STATUSES,
    HistoryEventType,
    Priority,
    TicketStateMachine,
    TicketStatus,
)
from .tracking import apply_changes

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class MetaOptions:
    """Snapshot used to populate ticket forms."""

    partners: list[str]
    priorities: list[Priority]
    style_options: list[str]
    photo_options: list[PhotoOption]


class TicketService:
    """Workflow engine for recolour tickets.

    Owns creation, edits with change history, status transitions and
    role-scoped visibility. Every ticket returned is an independent copy of
    the stored record.

    ``change_status`` checks that the transition exists in the workflow and,
    given the caller's role, that the ticket is visible to it. Whether the role
    may perform the matching action is checked by the HTTP layer before the
    call.
    """

    def __init__(
        self,
        repository: TicketRepository,
        *,
        state_machine: type[TicketStateMachine] = TicketStateMachine,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._repository = repository
        self._state_machine = state_machine
        self._clock = clock

    # Listing

    def list_tickets(
        self,
        filters: TicketFilters | None = None,
        sort: TicketSort | None = None,
        role: RequestRole | None = None,
    ) -> ListResponse[Ticket]:
        """Queue list for operators and managers; partners get their scoped list."""

        role = role or RequestRole.manager()
        if role.is_partner:
            return self.list_tickets_for_partner(filters, sort, role)

        repo_filters = self._repo_filters(filters, status_in=QUEUE_VISIBLE_STATUSES)
        tickets = self._repository.list(repo_filters, sort)
        data = [self._with_actions(ticket, role) for ticket in tickets]
        return ListResponse(data=data, meta=build_queue_meta(self._repository.distinct_partners()))

    def list_tickets_for_partner(
        self,
        filters: TicketFilters | None,
        sort: TicketSort | None,
        role: RequestRole,
    ) -> ListResponse[Ticket]:
        repo_filters = self._repo_filters(
            filters,
            status_in=PARTNER_VISIBLE_STATUSES,
            partner_scope=role.partner_name or "",
        )
        tickets = self._repository.list(repo_filters, sort)
        data = [self._with_actions(ticket, role) for ticket in tickets]
        return ListResponse(data=data, meta=build_partner_ticket_list_meta())

    def list_approved(self, role: RequestRole | None = None) -> ListResponse[Ticket]:
        role = role or RequestRole.manager()
        if role.is_partner:
            return self.list_approved_for_partner(role)

        tickets = self._repository.list(RepoTicketFilters(status=TicketStatus.APPROVED))
        data = [self._with_approved_date(ticket) for ticket in tickets]
        return ListResponse(data=data, meta=build_approved_meta())

    def list_approved_for_partner(self, role: RequestRole) -> ListResponse[Ticket]:
        tickets = self._repository.list(
            RepoTicketFilters(status=TicketStatus.APPROVED, partner_scope=role.partner_name or "")
        )
        data = [self._with_approved_date(ticket) for ticket in tickets]
        return ListResponse(data=data, meta=build_approved_meta_for_partner())

    def find_by_id(self, ticket_id: str, role: RequestRole) -> Ticket | None:
        ticket = self._repository.get_by_id(ticket_id)
        if ticket is None:
            return None

        if not self._visible_to(ticket, role):
            return None
        return self._with_actions(ticket, role)

    # Creation

    def create(self, data: CreateTicketInput, actor: str) -> Ticket:
        ticket = self._build_ticket(self._repository.generate_id(), data, self._clock(), actor)
        self._repository.add(copy.deepcopy(ticket))
        logger.info("Ticket %s created for %s by %s", ticket.id, ticket.partner, actor)
        return ticket

    def seed(self, inputs: Sequence[CreateTicketInput], actor: str) -> None:
        """Load demo tickets with strictly increasing creation times."""

        base = self._clock()
        for index, data in enumerate(inputs):
            created_at = base + timedelta(milliseconds=index)
            ticket = self._build_ticket(self._repository.generate_id(), data, created_at, actor)
            self._repository.add(ticket)
        logger.info("Seeded %d tickets", len(inputs))

    # Mutation

    def update_ticket(self, ticket_id: str, fields: UpdateTicketFields, actor: str) -> StoreResult:
        with self._repository.lock(ticket_id):
            return self._update_locked(ticket_id, fields, actor)

    def change_status(
        self,
        ticket_id: str,
        to_status: TicketStatus,
        actor: str,
        reason: str | None = None,
        role: RequestRole | None = None,
    ) -> StoreResult:
        """Move a ticket to ``to_status`` if the workflow allows it.

        When ``role`` is given, a ticket the role cannot see is reported as
        missing.
        """

        with self._repository.lock(ticket_id):
            ticket = self._repository.get_by_id(ticket_id)
            if ticket is None or (role is not None and not self._visible_to(ticket, role)):
                return StoreError(StoreErrorCode.NOT_FOUND)

            if not self._state_machine.can_transition(ticket.status, to_status):
                logger.warning(
                    "Rejected transition %s -> %s on ticket %s by %s",
                    ticket.status.value,
                    to_status.value,
                    ticket_id,
                    actor,
                )
                return StoreError(StoreErrorCode.INVALID_TRANSITION)

            from_status = ticket.status
            now = self._clock()
            ticket.status = to_status
            ticket.updated_at = now
            ticket.history.append(
                HistoryEvent(
                    type=HistoryEventType.STATUS_CHANGED,
                    from_status=from_status,
                    to_status=to_status,
                    actor=actor,
                    at=now,
                    reason=reason,
                )
            )
            logger.info(
                "Ticket %s moved %s -> %s by %s", ticket_id, from_status.value, to_status.value, actor
            )
            return StoreSuccess(copy.deepcopy(ticket))

    def add_partner_photo(self, ticket_id: str, photo: PhotoOption, actor: str) -> StoreResult:
        with self._repository.lock(ticket_id):
            ticket = self._repository.get_by_id(ticket_id)
            if ticket is None:
                return StoreError(StoreErrorCode.NOT_FOUND)
            if ticket.status is not TicketStatus.IN_PROGRESS:
                return StoreError(StoreErrorCode.PHOTOS_LOCKED)
            photos = [*ticket.partner_photos, photo]
            return self._update_locked(ticket_id, UpdateTicketFields(partner_photos=photos), actor)

    def remove_partner_photo(self, ticket_id: str, photo_id: str, actor: str) -> StoreResult:
        with self._repository.lock(ticket_id):
            ticket = self._repository.get_by_id(ticket_id)
            if ticket is None:
                return StoreError(StoreErrorCode.NOT_FOUND)
            if ticket.status is not TicketStatus.IN_PROGRESS:
                return StoreError(StoreErrorCode.PHOTOS_LOCKED)
            remaining = [photo for photo in ticket.partner_photos if photo.id != photo_id]
            if len(remaining) == len(ticket.partner_photos):
                return StoreError(StoreErrorCode.PHOTO_NOT_FOUND)
            return self._update_locked(ticket_id, UpdateTicketFields(partner_photos=remaining), actor)

    # Rules

    def available_actions(self, ticket: Ticket, role: RequestRole) -> list[str]:
        actions: list[str] = []
        for target in self._state_machine.reachable(ticket.status):
            action = self._state_machine.action_for(target)
            if action is not None and self._state_machine.is_allowed(action, role.type):
                actions.append(action.value)
        return actions

    def meta_options(self) -> MetaOptions:
        return MetaOptions(
            partners=self._repository.distinct_partners(),
            priorities=list(ALL_PRIORITIES),
            style_options=list(STYLE_OPTIONS),
            photo_options=copy.deepcopy(list(PHOTO_OPTIONS)),
        )

    # Internals

    def _update_locked(self, ticket_id: str, fields: UpdateTicketFields, actor: str) -> StoreResult:
        ticket = self._repository.get_by_id(ticket_id)
        if ticket is None:
            return StoreError(StoreErrorCode.NOT_FOUND)

        changes = apply_changes(ticket, fields)
        if changes:
            now = self._clock()
            ticket.updated_at = now
            for change in changes:
                ticket.history.append(
                    HistoryEvent(
                        type=HistoryEventType.EDITED,
                        from_status=ticket.status,
                        to_status=ticket.status,
                        actor=actor,
                        at=now,
                        field=change.field,
                        old_value=change.old_value,
                        new_value=change.new_value,
                    )
                )
            logger.debug(
                "Ticket %s edited by %s: %s", ticket_id, actor, ", ".join(c.field for c in changes)
            )
        return StoreSuccess(copy.deepcopy(ticket))

    def _build_ticket(
        self,
        ticket_id: str,
        data: CreateTicketInput,
        created_at: datetime,
        actor: str,
    ) -> Ticket:
        initial = self._state_machine.initial_state()
        return Ticket(
            id=ticket_id,
            style=data.style,
            priority=data.priority,
            partner=data.partner,
            instructions=list(data.instructions),
            reference_photos=copy.deepcopy(list(data.reference_photos)),
            partner_photos=[],
            status=initial,
            created_at=created_at,
            updated_at=created_at,
            history=[
                HistoryEvent(
                    type=HistoryEventType.CREATED,
                    from_status=None,
                    to_status=initial,
                    actor=actor,
                    at=created_at,
                )
            ],
        )

    def _with_actions(self, ticket: Ticket, role: RequestRole) -> Ticket:
        clone = copy.deepcopy(ticket)
        clone.available_actions = self.available_actions(clone, role)
        return clone

    def _with_approved_date(self, ticket: Ticket) -> Ticket:
        clone = copy.deepcopy(ticket)
        for event in reversed(clone.history):
            if event.type is HistoryEventType.STATUS_CHANGED and event.to_status is TicketStatus.APPROVED:
                clone.approved_date = event.at
                break
        return clone

    @staticmethod
    def _visible_to(ticket: Ticket, role: RequestRole) -> bool:
        # Partners see their own tickets once sent.
        if not role.is_partner:
            return True
        return ticket.partner == role.partner_name and ticket.status is not TicketStatus.PENDING

    @staticmethod
    def _repo_filters(
        filters: TicketFilters | None,
        *,
        status_in: tuple[TicketStatus, ...],
        partner_scope: str | None = None,
    ) -> RepoTicketFilters:
        filters = filters or TicketFilters()
        return RepoTicketFilters(
            status=filters.status,
            priority=filters.priority,
            partner=filters.partner,
            partner_scope=partner_scope,
            status_in=status_in,
        )
