import pytest

from recolour.tickets.state import Role, TicketStateMachine, TicketStatus, WorkflowAction


def test_ticket_state_machine_allows_expected_transitions():
    assert TicketStateMachine.initial_state() is TicketStatus.PENDING
    assert TicketStateMachine.can_transition(TicketStatus.PENDING, TicketStatus.SENT)
    assert TicketStateMachine.can_transition(TicketStatus.SENT, TicketStatus.RECEIVED)
    assert TicketStateMachine.can_transition(TicketStatus.SENT, TicketStatus.IN_PROGRESS)
    assert TicketStateMachine.can_transition(TicketStatus.RECEIVED, TicketStatus.IN_PROGRESS)
    assert TicketStateMachine.can_transition(TicketStatus.IN_PROGRESS, TicketStatus.COMPLETED)
    assert TicketStateMachine.can_transition(TicketStatus.COMPLETED, TicketStatus.APPROVED)
    assert TicketStateMachine.can_transition(TicketStatus.COMPLETED, TicketStatus.PENDING)


def test_ticket_state_machine_blocks_invalid_transitions():
    assert not TicketStateMachine.can_transition(TicketStatus.PENDING, TicketStatus.APPROVED)
    assert not TicketStateMachine.can_transition(TicketStatus.SENT, TicketStatus.SENT)
    assert not TicketStateMachine.can_transition(TicketStatus.IN_PROGRESS, TicketStatus.PENDING)
    assert TicketStateMachine.reachable(TicketStatus.APPROVED) == ()


def test_reachable_order_is_stable():
    assert list(TicketStateMachine.reachable(TicketStatus.SENT)) == [
        TicketStatus.RECEIVED,
        TicketStatus.IN_PROGRESS,
    ]
    assert list(TicketStateMachine.reachable(TicketStatus.COMPLETED)) == [
        TicketStatus.APPROVED,
        TicketStatus.PENDING,
    ]


def test_actions_map_to_target_statuses():
    assert TicketStateMachine.action_for(TicketStatus.PENDING) is WorkflowAction.REJECT
    assert TicketStateMachine.action_for(TicketStatus.IN_PROGRESS) is WorkflowAction.START
    for action in WorkflowAction:
        assert TicketStateMachine.action_for(TicketStateMachine.target_for(action)) is action


@pytest.mark.parametrize(
    ("action", "roles"),
    [
        (WorkflowAction.SEND, {Role.MANAGER, Role.OPERATOR}),
        (WorkflowAction.RECEIVE, {Role.PARTNER}),
        (WorkflowAction.START, {Role.PARTNER}),
        (WorkflowAction.COMPLETE, {Role.PARTNER}),
        (WorkflowAction.APPROVE, {Role.MANAGER}),
        (WorkflowAction.REJECT, {Role.MANAGER}),
    ],
)
def test_roles_for_action(action, roles):
    assert TicketStateMachine.roles_for(action) == roles


def test_unknown_action_allows_nobody():
    assert TicketStateMachine.roles_for("archive") == frozenset()
    assert not TicketStateMachine.is_allowed("archive", Role.MANAGER)
    assert TicketStateMachine.is_allowed("send", Role.OPERATOR)
