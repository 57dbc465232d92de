"""Ticket workflow domain: rules, records and the in-memory store."""

from .models import (
    CreateTicketInput,
    HistoryEvent,
    PhotoOption,
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
from .state import HistoryEventType, Priority, Role, TicketStateMachine, TicketStatus, WorkflowAction

__all__ = [
    "CreateTicketInput",
    "HistoryEvent",
    "HistoryEventType",
    "PhotoOption",
    "Priority",
    "RequestRole",
    "Role",
    "StoreError",
    "StoreErrorCode",
    "StoreResult",
    "StoreSuccess",
    "Ticket",
    "TicketFilters",
    "TicketRepository",
    "TicketSort",
    "TicketStateMachine",
    "TicketStatus",
    "UpdateTicketFields",
    "WorkflowAction",
]
