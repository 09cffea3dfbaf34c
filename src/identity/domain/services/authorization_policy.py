# src/identity/domain/services/authorization_policy.py
"""
Authorization policy.

A (role, action) decision table plus a fixed set of guards. Endpoints and
services never branch on roles themselves; they call ``authorize_action``
and the guards below, in the documented order.
"""
from __future__ import annotations

from enum import StrEnum
from typing import Final, Iterable, Mapping, Optional
from uuid import UUID

from identity.domain.errors import (
    CannotDeactivateAdmin,
    CannotDeactivateSelf,
    CannotManageRole,
    Forbidden,
    TenantScopeViolation,
)
from identity.domain.value_objects.identity_context import IdentityContext
from identity.domain.value_objects.role import Role


class Action(StrEnum):
    MANAGE_PLATFORM = "manage_platform"
    MANAGE_TENANT_MEMBERS = "manage_tenant_members"
    VIEW_OWN_APPLICATIONS = "view_own_applications"
    REQUEST_ACCESS_GRANT = "request_access_grant"
    SYNC_ASSIGNMENTS = "sync_assignments"


_ALL_ROLES: Final[frozenset[Role]] = frozenset(Role)

_ACTION_ROLES: Final[Mapping[Action, frozenset[Role]]] = {
    Action.MANAGE_PLATFORM: frozenset({Role.SUPER_ADMIN}),
    Action.MANAGE_TENANT_MEMBERS: frozenset({Role.SUPER_ADMIN, Role.TENANT_ADMIN}),
    Action.VIEW_OWN_APPLICATIONS: _ALL_ROLES,
    Action.REQUEST_ACCESS_GRANT: _ALL_ROLES,
    Action.SYNC_ASSIGNMENTS: frozenset({Role.SUPER_ADMIN, Role.TENANT_ADMIN}),
}

POLICY_TABLE: Final[Mapping[tuple[Role, Action], bool]] = {
    (role, action): role in roles
    for action, roles in _ACTION_ROLES.items()
    for role in Role
}


def is_allowed(role: Role, action: Action) -> bool:
    return POLICY_TABLE.get((role, action), False)


# ---- Guards -------------------------------------------------------------------

def authorize(context: IdentityContext, roles: Iterable[Role]) -> None:
    """Role allow-list guard."""
    if context.role not in set(roles):
        raise Forbidden()


def authorize_action(context: IdentityContext, action: Action) -> None:
    if not is_allowed(context.role, action):
        raise Forbidden(details={"action": action.value})


def ensure_tenant_scope(context: IdentityContext, resource_tenant_id: Optional[UUID]) -> None:
    """SUPER_ADMIN bypasses; everyone else stays inside their own tenant."""
    if context.is_super_admin:
        return
    if context.tenant_id is None or resource_tenant_id != context.tenant_id:
        raise TenantScopeViolation()


def ensure_can_manage(context: IdentityContext, target_role: Role) -> None:
    """
    Management-capability guard.

    SUPER_ADMIN manages anyone; TENANT_ADMIN only delegable roles; every
    other role manages no one.
    """
    if context.role is Role.SUPER_ADMIN:
        return
    if context.role is Role.TENANT_ADMIN:
        if not target_role.is_delegable():
            raise CannotManageRole(details={"role": target_role.value})
        return
    raise Forbidden()


def ensure_not_self(context: IdentityContext, target_id: UUID) -> None:
    if context.identity_id == target_id:
        raise CannotDeactivateSelf()


def ensure_not_tenant_admin(target_role: Role) -> None:
    if target_role is Role.TENANT_ADMIN:
        raise CannotDeactivateAdmin()


# ---- Composed guards ------------------------------------------------------------

def guard_member_management(
    context: IdentityContext,
    target_tenant_id: Optional[UUID],
    target_role: Role,
) -> None:
    """
    Create/update a member: management capability, then tenant scope.

    An admin role requested by a TENANT_ADMIN fails with CannotManageRole
    whatever tenant it names.
    """
    authorize_action(context, Action.MANAGE_TENANT_MEMBERS)
    ensure_can_manage(context, target_role)
    ensure_tenant_scope(context, target_tenant_id)


def guard_member_deactivation(
    context: IdentityContext,
    target_id: UUID,
    target_tenant_id: Optional[UUID],
    target_role: Role,
) -> None:
    """
    Tenant-scoped deactivation: tenant scope, self protection, admin
    protection, then management capability. A TENANT_ADMIN target always
    fails here, whoever the actor is.
    """
    authorize_action(context, Action.MANAGE_TENANT_MEMBERS)
    ensure_tenant_scope(context, target_tenant_id)
    ensure_not_self(context, target_id)
    ensure_not_tenant_admin(target_role)
    ensure_can_manage(context, target_role)


def guard_platform_deactivation(context: IdentityContext, target_id: UUID) -> None:
    """Platform deactivation path: SUPER_ADMIN only, never itself."""
    authorize_action(context, Action.MANAGE_PLATFORM)
    ensure_not_self(context, target_id)
