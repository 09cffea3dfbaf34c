"""
Authentication Dependencies
"""
from __future__ import annotations

from typing import Annotated, Callable, Optional

from fastapi import Depends, Header

from shared.infrastructure.observability.logger import add_context
from identity.api.dependencies.context import get_session_gateway
from identity.application.services.session_gateway import SessionGateway
from identity.domain.services.authorization_policy import authorize
from identity.domain.value_objects.identity_context import IdentityContext
from identity.domain.value_objects.role import Role


async def get_current_identity(
    sessions: Annotated[SessionGateway, Depends(get_session_gateway)],
    authorization: Annotated[Optional[str], Header()] = None,
) -> IdentityContext:
    """
    Authenticate the ``Authorization: Bearer`` header.

    Raises the session gateway's typed 401 errors; the exception handlers
    render them.
    """
    context = await sessions.authenticate(authorization)
    add_context(
        identity_id=str(context.identity_id),
        tenant_id=str(context.tenant_id) if context.tenant_id else None,
    )
    return context


async def get_optional_identity(
    sessions: Annotated[SessionGateway, Depends(get_session_gateway)],
    authorization: Annotated[Optional[str], Header()] = None,
) -> Optional[IdentityContext]:
    """For endpoints serving both anonymous and authenticated callers."""
    return await sessions.optional_authenticate(authorization)


CurrentIdentity = Annotated[IdentityContext, Depends(get_current_identity)]
OptionalIdentity = Annotated[Optional[IdentityContext], Depends(get_optional_identity)]


def require_roles(*allowed_roles: Role) -> Callable:
    """
    Dependency factory for role allow-lists.

    Usage:
        @router.get("/admin", dependencies=[Depends(require_roles(Role.SUPER_ADMIN))])
    """
    async def _check(context: CurrentIdentity) -> IdentityContext:
        authorize(context, allowed_roles)
        return context

    return _check
