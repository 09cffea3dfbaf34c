from datetime import timedelta
from uuid import uuid4

import pytest

from conftest import PASSWORD, context_for
from identity.domain.errors import (
    ApplicationNotFound,
    CannotDeactivateAdmin,
    CannotDeactivateSelf,
    CannotManageRole,
    EmailAlreadyExists,
    ExternalIdAlreadyExists,
    Forbidden,
    IdentityInactiveOrMissing,
    IdentityNotFound,
    InvalidRoleTenantCombination,
    LicenseNotFound,
    RevokedOrUnknown,
    TenantNotFound,
    TenantScopeViolation,
)
from identity.domain.value_objects.role import Role
from identity.infrastructure.adapters.directory_unit_of_work import DirectoryUnitOfWork
from shared.exceptions import ValidationError


@pytest.fixture
async def directory(seed):
    tenant = await seed.tenant("Acme", "REG-1")
    root = await seed.identity("root@platform.io", Role.SUPER_ADMIN)
    admin = await seed.identity("admin@acme.com", Role.TENANT_ADMIN, tenant)
    supervisor = await seed.identity("sup@acme.com", Role.TENANT_SUPERVISOR, tenant)
    operator = await seed.identity("op@acme.com", Role.TENANT_OPERATOR, tenant)
    return tenant, root, admin, supervisor, operator


# ---- Tenant lifecycle -------------------------------------------------------------

async def test_tenant_deactivation_cascades_to_members(services, seed, directory):
    tenant, root, admin, _, operator = directory
    other = await seed.tenant("Globex", "REG-2")
    outsider = await seed.identity("op@globex.com", Role.TENANT_OPERATOR, other)

    operator_pair = await services.tokens.issue(operator)
    admin_pair = await services.tokens.issue(admin)
    outsider_pair = await services.tokens.issue(outsider)

    deactivated = await services.tenants.deactivate(context_for(root), tenant.id)
    assert deactivated.active is False
    assert deactivated.deactivated_by == root.id

    for pair in (operator_pair, admin_pair):
        with pytest.raises(IdentityInactiveOrMissing):
            await services.sessions.authenticate(f"Bearer {pair.access_token}")
        with pytest.raises(RevokedOrUnknown):
            await services.tokens.rotate_access(pair.refresh_token)

    reloaded = await seed.reload_identity(operator.id)
    assert reloaded.active is False and reloaded.deactivated_by == root.id

    context = await services.sessions.authenticate(f"Bearer {outsider_pair.access_token}")
    assert context.identity_id == outsider.id


async def test_tenant_reactivation_leaves_members_inactive(services, seed, directory):
    tenant, root, _, _, operator = directory

    await services.tenants.deactivate(context_for(root), tenant.id)
    tenant = await services.tenants.reactivate(context_for(root), tenant.id)

    assert tenant.active is True
    assert (await seed.reload_identity(operator.id)).active is False

    member = await services.identities.reactivate(context_for(root), operator.id)
    assert member.active is True


async def test_reactivating_member_of_inactive_tenant_fails(services, directory):
    tenant, root, _, _, operator = directory
    await services.tenants.deactivate(context_for(root), tenant.id)

    with pytest.raises(TenantNotFound):
        await services.identities.reactivate(context_for(root), operator.id)


async def test_tenant_create_and_duplicate_registration(services, directory):
    _, root, admin, _, _ = directory

    tenant = await services.tenants.create(context_for(root), " Initech ", "REG-3")
    assert tenant.name == "Initech"
    assert tenant.created_by == root.id

    with pytest.raises(ExternalIdAlreadyExists):
        await services.tenants.create(context_for(root), "Initech again", "REG-3")
    with pytest.raises(Forbidden):
        await services.tenants.create(context_for(admin), "Nope", "REG-4")


async def test_tenant_admin_reads_only_own_tenant(services, seed, directory):
    tenant, _, admin, _, _ = directory
    other = await seed.tenant("Globex", "REG-2")

    assert (await services.tenants.get(context_for(admin), tenant.id)).id == tenant.id
    with pytest.raises(TenantScopeViolation):
        await services.tenants.get(context_for(admin), other.id)


# ---- Licenses -----------------------------------------------------------------------

async def test_link_unlink_and_relink_license(services, seed, directory, clock):
    tenant, root, admin, _, _ = directory
    application = await seed.application()
    actor = context_for(root)

    license = await services.tenants.link_license(actor, tenant.id, application.id)
    assert license.active and license.expires_at is None

    await services.tenants.unlink_license(actor, tenant.id, application.id)
    with pytest.raises(LicenseNotFound):
        await services.tenants.unlink_license(actor, tenant.id, application.id)

    expiry = clock() + timedelta(days=30)
    relinked = await services.tenants.link_license(actor, tenant.id, application.id, expiry)
    assert relinked.id == license.id
    assert relinked.active and relinked.expires_at == expiry

    licenses = await services.tenants.list_licenses(context_for(admin), tenant.id)
    assert [lic.application_id for lic in licenses] == [application.id]


async def test_link_unknown_application(services, directory):
    tenant, root, _, _, _ = directory
    with pytest.raises(ApplicationNotFound):
        await services.tenants.link_license(context_for(root), tenant.id, uuid4())


# ---- Applications -------------------------------------------------------------------

async def test_application_deactivation_drops_it_everywhere(services, seed, directory):
    tenant, root, admin, _, operator = directory
    application = await seed.application()
    await seed.license(tenant, application)
    await seed.assign(operator, application)

    assert len(await services.entitlements.available_applications(context_for(operator))) == 1

    await services.applications.deactivate(context_for(root), application.id)

    assert await services.entitlements.available_applications(context_for(admin)) == []
    assert await services.entitlements.available_applications(context_for(operator)) == []
    licenses = await services.tenants.list_licenses(context_for(root), tenant.id)
    assert [lic.active for lic in licenses] == [False]

    reactivated = await services.applications.reactivate(context_for(root), application.id)
    assert reactivated.active
    assert await services.entitlements.available_applications(context_for(admin)) == []


async def test_application_create_and_key_regeneration(services, directory):
    _, root, admin, _, _ = directory

    application = await services.applications.create(context_for(root), "CRM", "https://crm.acme.com")
    assert application.api_key.startswith("sk_")

    regenerated = await services.applications.regenerate_api_key(context_for(root), application.id)
    assert regenerated.api_key != application.api_key

    with pytest.raises(Forbidden):
        await services.applications.list_all(context_for(admin))


# ---- Identities -----------------------------------------------------------------

async def test_tenant_admin_creates_member_in_own_tenant(services, directory):
    tenant, _, admin, _, _ = directory

    member = await services.identities.create(
        context_for(admin), "New.Op@Acme.com", "New Op", PASSWORD, Role.TENANT_OPERATOR
    )

    assert member.tenant_id == tenant.id
    assert member.email == "new.op@acme.com"
    assert member.created_by == admin.id
    assert member.password_hash != PASSWORD


async def test_create_guards(services, seed, directory):
    tenant, root, admin, supervisor, _ = directory
    other = await seed.tenant("Globex", "REG-2")

    with pytest.raises(CannotManageRole):
        await services.identities.create(context_for(admin), "a2@acme.com", "A2", PASSWORD, Role.TENANT_ADMIN)
    with pytest.raises(CannotManageRole):
        await services.identities.create(context_for(admin), "root2@acme.com", "R2", PASSWORD, Role.SUPER_ADMIN)
    with pytest.raises(TenantScopeViolation):
        await services.identities.create(
            context_for(admin), "x@globex.com", "X", PASSWORD, Role.TENANT_OPERATOR, other.id
        )
    with pytest.raises(Forbidden):
        await services.identities.create(context_for(supervisor), "y@acme.com", "Y", PASSWORD, Role.TENANT_OPERATOR)
    with pytest.raises(EmailAlreadyExists):
        await services.identities.create(context_for(admin), "OP@acme.com", "Dup", PASSWORD, Role.TENANT_OPERATOR)
    with pytest.raises(ValidationError):
        await services.identities.create(context_for(admin), "z@acme.com", "Z", "short", Role.TENANT_OPERATOR)
    with pytest.raises(InvalidRoleTenantCombination):
        await services.identities.create(
            context_for(root), "root2@platform.io", "Root 2", PASSWORD, Role.SUPER_ADMIN, tenant.id
        )


async def test_super_admin_creates_tenant_admin(services, directory):
    tenant, root, _, _, _ = directory

    created = await services.identities.create(
        context_for(root), "admin2@acme.com", "Admin 2", PASSWORD, Role.TENANT_ADMIN, tenant.id
    )
    assert created.role is Role.TENANT_ADMIN


async def test_update_member_details(services, directory):
    _, root, admin, supervisor, operator = directory

    updated = await services.identities.update(
        context_for(admin), operator.id, name=" Op Renamed ", email="Renamed@Acme.com"
    )
    assert updated.name == "Op Renamed"
    assert updated.email == "renamed@acme.com"
    assert updated.updated_by == admin.id

    # keeping one's own email is not a collision
    same = await services.identities.update(context_for(admin), operator.id, email="renamed@acme.com")
    assert same.email == "renamed@acme.com"

    with pytest.raises(EmailAlreadyExists):
        await services.identities.update(context_for(admin), operator.id, email="sup@acme.com")
    with pytest.raises(CannotManageRole):
        await services.identities.update(context_for(admin), admin.id, name="Self")
    with pytest.raises(Forbidden):
        await services.identities.update(context_for(supervisor), operator.id, name="Nope")
    with pytest.raises(IdentityNotFound):
        await services.identities.update(context_for(root), uuid4(), name="Ghost")


async def test_update_member_outside_own_tenant(services, seed, directory):
    _, root, admin, _, _ = directory
    other = await seed.tenant("Globex", "REG-2")
    outsider = await seed.identity("op@globex.com", Role.TENANT_OPERATOR, other)

    with pytest.raises(TenantScopeViolation):
        await services.identities.update(context_for(admin), outsider.id, name="X")

    renamed = await services.identities.update(context_for(root), outsider.id, name="Renamed")
    assert renamed.name == "Renamed"


async def test_self_deactivation_always_fails(services, directory):
    _, root, admin, _, _ = directory

    with pytest.raises(CannotDeactivateSelf):
        await services.identities.deactivate(context_for(root), root.id)
    with pytest.raises(CannotDeactivateSelf):
        await services.identities.deactivate_member(context_for(admin), admin.id)


@pytest.mark.parametrize("actor_index", [1, 2])
async def test_tenant_path_never_deactivates_a_tenant_admin(services, seed, directory, actor_index):
    tenant = directory[0]
    actor = directory[actor_index]
    other_admin = await seed.identity("admin2@acme.com", Role.TENANT_ADMIN, tenant)

    with pytest.raises(CannotDeactivateAdmin):
        await services.identities.deactivate_member(context_for(actor), other_admin.id)


async def test_member_deactivation_revokes_sessions(services, directory):
    _, _, admin, supervisor, _ = directory
    pair = await services.tokens.issue(supervisor)

    deactivated = await services.identities.deactivate_member(context_for(admin), supervisor.id)

    assert deactivated.active is False
    with pytest.raises(RevokedOrUnknown):
        await services.tokens.rotate_access(pair.refresh_token)


async def test_member_listing_is_tenant_scoped(services, seed, directory):
    tenant, root, admin, _, _ = directory
    other = await seed.tenant("Globex", "REG-2")

    members = await services.identities.list_members(context_for(admin))
    assert {m.email for m in members} == {"admin@acme.com", "sup@acme.com", "op@acme.com"}

    with pytest.raises(TenantScopeViolation):
        await services.identities.list_members(context_for(admin), other.id)

    everyone = await services.identities.list_all(context_for(root))
    assert len(everyone) == 4
    admins = await services.identities.list_all(context_for(root), role=Role.TENANT_ADMIN)
    assert [i.email for i in admins] == ["admin@acme.com"]


async def test_audit_names_resolve_actor_ids(services, directory):
    tenant, root, _, _, _ = directory
    created = await services.tenants.create(context_for(root), "Initech", "REG-3")

    names = await services.audit_names.for_entities([created])

    assert names == {root.id: root.name}


async def test_member_deactivation_returns_exactly_the_changed_rows(db, seed, clock, directory):
    tenant, root, admin, supervisor, operator = directory
    already_gone = await seed.identity("gone@acme.com", Role.TENANT_OPERATOR, tenant, active=False)

    async with DirectoryUnitOfWork(db.session_factory) as uow:
        ids = await uow.identities.deactivate_tenant_members(tenant.id, root.id, clock())
        again = await uow.identities.deactivate_tenant_members(tenant.id, root.id, clock())
        await uow.commit()

    assert set(ids) == {admin.id, supervisor.id, operator.id}
    assert already_gone.id not in ids
    assert again == []
    assert (await seed.reload_identity(operator.id)).deactivated_by == root.id
