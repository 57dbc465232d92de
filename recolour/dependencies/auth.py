from collections.abc import Callable
from typing import Annotated

from fastapi import Depends, HTTPException, Request, Security
from fastapi.security import APIKeyHeader

from recolour.tickets.models import RequestRole
from recolour.tickets.state import Role, TicketStateMachine, WorkflowAction

AUTH_ROLE_MANAGER = "manager"
AUTH_ROLE_OPERATOR = "operator"
AUTH_PARTNER_PREFIX = "partner:"

authorization_header = APIKeyHeader(name="Authorization", auto_error=False)


def parse_role(header: str | None) -> RequestRole | None:
    """Map an ``Authorization`` header value to a request role.

    Accepted values are ``manager``, ``operator`` and ``partner:<name>``,
    optionally prefixed with ``Bearer``. This is a demo convention, not real
    authentication.
    """

    if not header:
        return None

    value = header.strip()
    scheme, _, credentials = value.partition(" ")
    if scheme.lower() == "bearer" and credentials:
        value = credentials.strip()

    if value == AUTH_ROLE_MANAGER:
        return RequestRole.manager()
    if value == AUTH_ROLE_OPERATOR:
        return RequestRole.operator()
    if value.startswith(AUTH_PARTNER_PREFIX):
        partner_name = value[len(AUTH_PARTNER_PREFIX) :].strip()
        if partner_name:
            return RequestRole.partner(partner_name)
    return None


async def get_current_role(
    header: Annotated[str | None, Security(authorization_header)],
    request: Request,
) -> RequestRole:
    cached = getattr(request.state, "role", None)
    if isinstance(cached, RequestRole):
        return cached

    role = parse_role(header)
    if role is None:
        raise HTTPException(status_code=401, detail="Missing or invalid Authorization header")
    request.state.role = role
    return role


def role_required(*roles: Role) -> Callable[[RequestRole], RequestRole]:
    """Dependency factory ensuring the current role is one of ``roles``."""

    allowed = frozenset(roles)

    async def dependency(role: Annotated[RequestRole, Depends(get_current_role)]) -> RequestRole:
        if role.type not in allowed:
            raise HTTPException(status_code=403, detail="Insufficient permissions")
        return role

    return dependency


def action_required(action: WorkflowAction) -> Callable[[RequestRole], RequestRole]:
    """Gate an endpoint on the roles allowed to perform a workflow action."""

    return role_required(*TicketStateMachine.roles_for(action))


CurrentRole = Annotated[RequestRole, Depends(get_current_role)]
