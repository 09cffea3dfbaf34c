from uuid import uuid4

import pytest

from identity.domain.errors import (
    CannotDeactivateAdmin,
    CannotDeactivateSelf,
    CannotManageRole,
    Forbidden,
    TenantScopeViolation,
)
from identity.domain.services.authorization_policy import (
    POLICY_TABLE,
    Action,
    authorize,
    authorize_action,
    ensure_can_manage,
    ensure_tenant_scope,
    guard_member_deactivation,
    guard_member_management,
    guard_platform_deactivation,
    is_allowed,
)
from identity.domain.value_objects.identity_context import IdentityContext
from identity.domain.value_objects.role import Role

TENANT = uuid4()
OTHER_TENANT = uuid4()


def ctx(role: Role, tenant_id=TENANT) -> IdentityContext:
    if role is Role.SUPER_ADMIN:
        tenant_id = None
    return IdentityContext(identity_id=uuid4(), email=f"{role.value.lower()}@acme.com", role=role, tenant_id=tenant_id)


def test_policy_table_covers_every_role_and_action():
    assert len(POLICY_TABLE) == len(Role) * len(Action)


@pytest.mark.parametrize(
    "role, action, allowed",
    [
        (Role.SUPER_ADMIN, Action.MANAGE_PLATFORM, True),
        (Role.TENANT_ADMIN, Action.MANAGE_PLATFORM, False),
        (Role.TENANT_ADMIN, Action.MANAGE_TENANT_MEMBERS, True),
        (Role.TENANT_SUPERVISOR, Action.MANAGE_TENANT_MEMBERS, False),
        (Role.TENANT_OPERATOR, Action.VIEW_OWN_APPLICATIONS, True),
        (Role.TENANT_COORDINATOR, Action.REQUEST_ACCESS_GRANT, True),
        (Role.TENANT_OPERATOR, Action.SYNC_ASSIGNMENTS, False),
    ],
)
def test_policy_decisions(role, action, allowed):
    assert is_allowed(role, action) is allowed


def test_authorize_allow_list():
    authorize(ctx(Role.TENANT_ADMIN), [Role.SUPER_ADMIN, Role.TENANT_ADMIN])
    with pytest.raises(Forbidden):
        authorize(ctx(Role.TENANT_OPERATOR), [Role.SUPER_ADMIN, Role.TENANT_ADMIN])


def test_authorize_action_reports_action():
    with pytest.raises(Forbidden) as exc:
        authorize_action(ctx(Role.TENANT_ADMIN), Action.MANAGE_PLATFORM)
    assert exc.value.details == {"action": "manage_platform"}


def test_tenant_scope():
    ensure_tenant_scope(ctx(Role.SUPER_ADMIN), OTHER_TENANT)
    ensure_tenant_scope(ctx(Role.TENANT_ADMIN), TENANT)
    with pytest.raises(TenantScopeViolation):
        ensure_tenant_scope(ctx(Role.TENANT_ADMIN), OTHER_TENANT)
    with pytest.raises(TenantScopeViolation):
        ensure_tenant_scope(ctx(Role.TENANT_ADMIN), None)


def test_management_capability():
    ensure_can_manage(ctx(Role.SUPER_ADMIN), Role.TENANT_ADMIN)
    ensure_can_manage(ctx(Role.TENANT_ADMIN), Role.TENANT_SUPERVISOR)
    with pytest.raises(CannotManageRole):
        ensure_can_manage(ctx(Role.TENANT_ADMIN), Role.TENANT_ADMIN)
    with pytest.raises(CannotManageRole):
        ensure_can_manage(ctx(Role.TENANT_ADMIN), Role.SUPER_ADMIN)
    with pytest.raises(Forbidden):
        ensure_can_manage(ctx(Role.TENANT_SUPERVISOR), Role.TENANT_OPERATOR)


def test_member_management_checks_capability_before_scope():
    with pytest.raises(CannotManageRole):
        guard_member_management(ctx(Role.TENANT_ADMIN), OTHER_TENANT, Role.TENANT_ADMIN)
    with pytest.raises(CannotManageRole):
        guard_member_management(ctx(Role.TENANT_ADMIN), None, Role.SUPER_ADMIN)


def test_member_management_stays_in_own_tenant():
    with pytest.raises(TenantScopeViolation):
        guard_member_management(ctx(Role.TENANT_ADMIN), OTHER_TENANT, Role.TENANT_OPERATOR)
    guard_member_management(ctx(Role.TENANT_ADMIN), TENANT, Role.TENANT_OPERATOR)


def test_member_deactivation_never_targets_self():
    actor = ctx(Role.TENANT_ADMIN)
    with pytest.raises(CannotDeactivateSelf):
        guard_member_deactivation(actor, actor.identity_id, TENANT, Role.TENANT_ADMIN)


@pytest.mark.parametrize("actor_role", [Role.SUPER_ADMIN, Role.TENANT_ADMIN])
def test_member_deactivation_never_targets_tenant_admin(actor_role):
    with pytest.raises(CannotDeactivateAdmin):
        guard_member_deactivation(ctx(actor_role), uuid4(), TENANT, Role.TENANT_ADMIN)


def test_member_deactivation_of_operator_is_allowed():
    guard_member_deactivation(ctx(Role.TENANT_ADMIN), uuid4(), TENANT, Role.TENANT_OPERATOR)


def test_platform_deactivation():
    actor = ctx(Role.SUPER_ADMIN)
    guard_platform_deactivation(actor, uuid4())
    with pytest.raises(CannotDeactivateSelf):
        guard_platform_deactivation(actor, actor.identity_id)
    with pytest.raises(Forbidden):
        guard_platform_deactivation(ctx(Role.TENANT_ADMIN), uuid4())
