from __future__ import annotations

from enum import Enum
from typing import Mapping, Sequence


class TicketStatus(str, Enum):
    """Supported states for a recolour ticket."""

    PENDING = "Pending"
    SENT = "Sent"
    RECEIVED = "Received"
    IN_PROGRESS = "In Progress"
    COMPLETED = "Completed"
    APPROVED = "Approved"


class Priority(str, Enum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"
    URGENT = "Urgent"


class HistoryEventType(str, Enum):
    CREATED = "Created"
    EDITED = "Edited"
    STATUS_CHANGED = "StatusChanged"


class Role(str, Enum):
    """Roles a request can act as."""

    MANAGER = "manager"
    OPERATOR = "operator"
    PARTNER = "partner"


class WorkflowAction(str, Enum):
    SEND = "send"
    RECEIVE = "receive"
    START = "start"
    COMPLETE = "complete"
    APPROVE = "approve"
    REJECT = "reject"


ALL_STATUSES: tuple[TicketStatus, ...] = tuple(TicketStatus)
ALL_PRIORITIES: tuple[Priority, ...] = tuple(Priority)

# Statuses shown in the manager/operator queue.
QUEUE_VISIBLE_STATUSES: tuple[TicketStatus, ...] = tuple(
    status for status in ALL_STATUSES if status is not TicketStatus.APPROVED
)

# Pending tickets are not yet the partner's concern, approved ones live in the library.
PARTNER_VISIBLE_STATUSES: tuple[TicketStatus, ...] = tuple(
    status
    for status in ALL_STATUSES
    if status not in (TicketStatus.PENDING, TicketStatus.APPROVED)
)


class TicketStateMachine:
    """Static workflow rules: transitions, action names and role permissions."""

    # Order of the target statuses drives the order of available actions.
    _TRANSITIONS: Mapping[TicketStatus, Sequence[TicketStatus]] = {
        TicketStatus.PENDING: (TicketStatus.SENT,),
        TicketStatus.SENT: (TicketStatus.RECEIVED, TicketStatus.IN_PROGRESS),
        TicketStatus.RECEIVED: (TicketStatus.IN_PROGRESS,),
        TicketStatus.IN_PROGRESS: (TicketStatus.COMPLETED,),
        TicketStatus.COMPLETED: (TicketStatus.APPROVED, TicketStatus.PENDING),
        TicketStatus.APPROVED: (),
    }

    _STATUS_TO_ACTION: Mapping[TicketStatus, WorkflowAction] = {
        TicketStatus.SENT: WorkflowAction.SEND,
        TicketStatus.RECEIVED: WorkflowAction.RECEIVE,
        TicketStatus.IN_PROGRESS: WorkflowAction.START,
        TicketStatus.COMPLETED: WorkflowAction.COMPLETE,
        TicketStatus.APPROVED: WorkflowAction.APPROVE,
        TicketStatus.PENDING: WorkflowAction.REJECT,
    }

    _ACTION_ROLES: Mapping[WorkflowAction, frozenset[Role]] = {
        WorkflowAction.SEND: frozenset({Role.MANAGER, Role.OPERATOR}),
        WorkflowAction.RECEIVE: frozenset({Role.PARTNER}),
        WorkflowAction.START: frozenset({Role.PARTNER}),
        WorkflowAction.COMPLETE: frozenset({Role.PARTNER}),
        WorkflowAction.APPROVE: frozenset({Role.MANAGER}),
        WorkflowAction.REJECT: frozenset({Role.MANAGER}),
    }

    @classmethod
    def initial_state(cls) -> TicketStatus:
        return TicketStatus.PENDING

    @classmethod
    def reachable(cls, current: TicketStatus) -> Sequence[TicketStatus]:
        return cls._TRANSITIONS.get(current, ())

    @classmethod
    def can_transition(cls, current: TicketStatus, new: TicketStatus) -> bool:
        return new in cls.reachable(current)

    @classmethod
    def action_for(cls, target: TicketStatus) -> WorkflowAction | None:
        return cls._STATUS_TO_ACTION.get(target)

    @classmethod
    def target_for(cls, action: WorkflowAction) -> TicketStatus:
        for status, mapped in cls._STATUS_TO_ACTION.items():
            if mapped is action:
                return status
        raise ValueError(f"Unknown workflow action: {action!s}")

    @classmethod
    def roles_for(cls, action: WorkflowAction | str) -> frozenset[Role]:
        """Roles allowed to perform ``action``. Unknown actions allow nobody."""

        try:
            action = WorkflowAction(action)
        except ValueError:
            return frozenset()
        return cls._ACTION_ROLES.get(action, frozenset())

    @classmethod
    def is_allowed(cls, action: WorkflowAction | str, role: Role) -> bool:
        return role in cls.roles_for(action)
