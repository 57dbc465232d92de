"""Presentational metadata returned alongside list responses."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Generic, Sequence, TypeVar

from recolour.tickets.repository import DEFAULT_SORT_BY, DEFAULT_SORT_ORDER
from recolour.tickets.state import ALL_PRIORITIES, ALL_STATUSES, PARTNER_VISIBLE_STATUSES

T = TypeVar("T")


@dataclass(frozen=True)
class SelectOption:
    label: str
    value: str


@dataclass(frozen=True)
class ColumnDef:
    key: str
    label: str


@dataclass(frozen=True)
class FilterOptionDef:
    key: str
    label: str
    options: list[SelectOption]
    placeholder: str | None = None


@dataclass(frozen=True)
class ViewMeta:
    filters: list[FilterOptionDef] = field(default_factory=list)
    sort_options: list[SelectOption] = field(default_factory=list)
    columns: list[ColumnDef] = field(default_factory=list)
    default_sort: str | None = None


@dataclass
class ListResponse(Generic[T]):
    data: list[T]
    meta: ViewMeta


QUEUE_COLUMNS = (
    ColumnDef("id", "Ticket ID"),
    ColumnDef("priority", "Priority"),
    ColumnDef("partner", "Partner"),
    ColumnDef("status", "Status"),
    ColumnDef("actions", "Actions"),
)

PARTNER_TICKET_COLUMNS = (
    ColumnDef("id", "Ticket ID"),
    ColumnDef("priority", "Priority"),
    ColumnDef("status", "Status"),
    ColumnDef("actions", "Actions"),
)

APPROVED_COLUMNS = (
    ColumnDef("id", "Ticket ID"),
    ColumnDef("partner", "Partner"),
    ColumnDef("approvedDate", "Approved Date"),
)

APPROVED_COLUMNS_PARTNER = (
    ColumnDef("id", "Ticket ID"),
    ColumnDef("approvedDate", "Approved Date"),
)

PARTNER_OVERVIEW_COLUMNS = (
    ColumnDef("partner", "Partner"),
    ColumnDef("total", "Total"),
    ColumnDef("awaitingReceipt", "Awaiting Receipt"),
    ColumnDef("inProgress", "In Progress"),
    ColumnDef("completed", "Completed"),
)

_SORT_LABELS = (
    ("createdAt", "Created Date"),
    ("priority", "Priority"),
    ("partner", "Partner"),
    ("status", "Status"),
)

SORT_OPTIONS = tuple(
    SelectOption(f"{label} {direction_label}", f"{key}:{direction}")
    for key, label in _SORT_LABELS
    for direction, direction_label in (("asc", "Ascending"), ("desc", "Descending"))
)


def _to_options(values: Sequence[str]) -> list[SelectOption]:
    return [SelectOption(label=value, value=value) for value in values]


def _status_filter(statuses: Sequence[str]) -> FilterOptionDef:
    return FilterOptionDef(
        key="status",
        label="Status",
        options=_to_options(statuses),
        placeholder="All Statuses",
    )


def _priority_filter() -> FilterOptionDef:
    return FilterOptionDef(
        key="priority",
        label="Priority",
        options=_to_options([priority.value for priority in ALL_PRIORITIES]),
        placeholder="All Priorities",
    )


def _list_meta(filters: list[FilterOptionDef], columns: Sequence[ColumnDef]) -> ViewMeta:
    return ViewMeta(
        filters=filters,
        sort_options=list(SORT_OPTIONS),
        columns=list(columns),
        default_sort=f"{DEFAULT_SORT_BY}:{DEFAULT_SORT_ORDER}",
    )


def _columns_only(columns: Sequence[ColumnDef]) -> ViewMeta:
    return ViewMeta(columns=list(columns))


def build_queue_meta(partners: Sequence[str]) -> ViewMeta:
    """Operator/manager queue: status, priority and partner filters."""

    return _list_meta(
        [
            _status_filter([status.value for status in ALL_STATUSES]),
            _priority_filter(),
            FilterOptionDef(
                key="partner",
                label="Partner",
                options=_to_options(partners),
                placeholder="All Partners",
            ),
        ],
        QUEUE_COLUMNS,
    )


def build_partner_ticket_list_meta() -> ViewMeta:
    return _list_meta(
        [_status_filter([status.value for status in PARTNER_VISIBLE_STATUSES]), _priority_filter()],
        PARTNER_TICKET_COLUMNS,
    )


def build_approved_meta() -> ViewMeta:
    return _columns_only(APPROVED_COLUMNS)


def build_approved_meta_for_partner() -> ViewMeta:
    return _columns_only(APPROVED_COLUMNS_PARTNER)


def build_partner_overview_meta() -> ViewMeta:
    return _columns_only(PARTNER_OVERVIEW_COLUMNS)
