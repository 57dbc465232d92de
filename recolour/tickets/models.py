from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Union

from .state import HistoryEventType, Priority, Role, TicketStatus


@dataclass(slots=True)
class PhotoOption:
    """Reference to a catalog photo or a partner upload."""

    id: str
    label: str
    file_name: str
    thumbnail_url: str
    image_url: str


@dataclass(frozen=True)
class HistoryEvent:
    """Immutable audit record appended to a ticket's history."""

    type: HistoryEventType
    from_status: TicketStatus | None
    to_status: TicketStatus | None
    actor: str
    at: datetime
    reason: str | None = None
    field: str | None = None
    old_value: str | None = None
    new_value: str | None = None


@dataclass(slots=True)
class Ticket:
    """Aggregate representing a recolour ticket."""

    id: str
    style: str
    priority: Priority
    partner: str
    instructions: list[str]
    reference_photos: list[PhotoOption]
    partner_photos: list[PhotoOption]
    status: TicketStatus
    created_at: datetime
    updated_at: datetime
    history: list[HistoryEvent] = field(default_factory=list)
    # Derived per request, never stored.
    approved_date: datetime | None = None
    available_actions: list[str] | None = None


@dataclass(slots=True)
class CreateTicketInput:
    style: str
    priority: Priority
    partner: str
    instructions: list[str]
    reference_photos: list[PhotoOption] = field(default_factory=list)


@dataclass(slots=True)
class UpdateTicketFields:
    """Editable fields; ``None`` means "not provided"."""

    style: str | None = None
    priority: Priority | None = None
    partner: str | None = None
    instructions: list[str] | None = None
    reference_photos: list[PhotoOption] | None = None
    partner_photos: list[PhotoOption] | None = None


@dataclass(slots=True)
class TicketFilters:
    status: TicketStatus | None = None
    priority: Priority | None = None
    partner: str | None = None


@dataclass(slots=True)
class RepoTicketFilters(TicketFilters):
    """Filters with access-control scoping on top of the user-facing ones."""

    partner_scope: str | None = None
    status_in: tuple[TicketStatus, ...] | None = None


@dataclass(slots=True)
class TicketSort:
    sort_by: str | None = None
    sort_order: str | None = None


@dataclass(frozen=True)
class RequestRole:
    """Role resolved for a single request."""

    type: Role
    partner_name: str | None = None

    @classmethod
    def manager(cls) -> "RequestRole":
        return cls(Role.MANAGER)

    @classmethod
    def operator(cls) -> "RequestRole":
        return cls(Role.OPERATOR)

    @classmethod
    def partner(cls, name: str) -> "RequestRole":
        return cls(Role.PARTNER, partner_name=name)

    @property
    def is_partner(self) -> bool:
        return self.type is Role.PARTNER

    @property
    def actor(self) -> str:
        """Display label recorded in history events."""

        if self.is_partner and self.partner_name:
            return self.partner_name
        return self.type.value


@dataclass(frozen=True)
class FieldChange:
    field: str
    old_value: str
    new_value: str


class StoreErrorCode(str, Enum):
    NOT_FOUND = "NOT_FOUND"
    INVALID_TRANSITION = "INVALID_TRANSITION"
    PHOTO_NOT_FOUND = "PHOTO_NOT_FOUND"
    PHOTOS_LOCKED = "PHOTOS_LOCKED"


@dataclass(frozen=True)
class StoreSuccess:
    ticket: Ticket


@dataclass(frozen=True)
class StoreError:
    code: StoreErrorCode


StoreResult = Union[StoreSuccess, StoreError]
