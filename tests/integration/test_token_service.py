from datetime import timedelta

import pytest

from conftest import context_for
from identity.domain.entities.refresh_token import hash_token
from identity.domain.errors import (
    IdentityInactiveOrMissing,
    InvalidTokenType,
    RevokedOrUnknown,
    TokenExpired,
)
from identity.domain.value_objects.role import Role
from identity.infrastructure.adapters.directory_unit_of_work import DirectoryUnitOfWork


@pytest.fixture
async def operator(seed):
    tenant = await seed.tenant()
    return await seed.identity("op@acme.com", Role.TENANT_OPERATOR, tenant)


async def test_issue_stores_only_the_refresh_digest(services, db, operator, clock):
    pair = await services.tokens.issue(operator)

    async with DirectoryUnitOfWork(db.session_factory) as uow:
        record = await uow.refresh_tokens.get_by_hash(hash_token(pair.refresh_token))

    assert record is not None
    assert record.identity_id == operator.id
    assert record.token_hash != pair.refresh_token
    assert record.expires_at == clock() + timedelta(days=7)
    assert pair.access_expires_at == clock() + timedelta(minutes=15)
    assert pair.token_type == "Bearer"


async def test_rotate_reflects_current_directory_state(services, operator):
    pair = await services.tokens.issue(operator)

    rotated = await services.tokens.rotate_access(pair.refresh_token)

    claims = services.tokens.validate_access(rotated.access_token)
    assert claims.subject_id == operator.id
    assert claims.role is Role.TENANT_OPERATOR
    assert claims.tenant_id == operator.tenant_id


async def test_refresh_token_is_reusable_until_revoked(services, operator):
    pair = await services.tokens.issue(operator)

    await services.tokens.rotate_access(pair.refresh_token)
    await services.tokens.rotate_access(pair.refresh_token)

    assert await services.tokens.revoke(pair.refresh_token) is True
    with pytest.raises(RevokedOrUnknown):
        await services.tokens.rotate_access(pair.refresh_token)


async def test_revoke_is_idempotent(services, operator):
    pair = await services.tokens.issue(operator)

    assert await services.tokens.revoke(pair.refresh_token) is True
    assert await services.tokens.revoke(pair.refresh_token) is False
    assert await services.tokens.revoke("never-issued") is False


async def test_revoke_all_leaves_later_tokens_alone(services, operator):
    first = await services.tokens.issue(operator)
    second = await services.tokens.issue(operator)

    assert await services.tokens.revoke_all(operator.id) == 2

    for pair in (first, second):
        with pytest.raises(RevokedOrUnknown):
            await services.tokens.rotate_access(pair.refresh_token)

    fresh = await services.tokens.issue(operator)
    rotated = await services.tokens.rotate_access(fresh.refresh_token)
    assert rotated.identity_id == operator.id


async def test_access_token_cannot_be_used_as_refresh_token(services, operator):
    pair = await services.tokens.issue(operator)
    with pytest.raises(InvalidTokenType):
        await services.tokens.rotate_access(pair.access_token)


async def test_refresh_token_expires(services, operator, clock):
    pair = await services.tokens.issue(operator)

    clock.advance(days=7)
    await services.tokens.rotate_access(pair.refresh_token)

    clock.advance(seconds=1)
    with pytest.raises(TokenExpired):
        await services.tokens.rotate_access(pair.refresh_token)


async def test_refresh_token_just_past_expiry_reports_expiry(services, operator, clock):
    pair = await services.tokens.issue(operator)

    clock.advance(days=7, milliseconds=200)
    with pytest.raises(TokenExpired):
        await services.tokens.rotate_access(pair.refresh_token)


async def test_access_token_expires_on_the_clock(services, operator, clock):
    pair = await services.tokens.issue(operator)

    clock.advance(minutes=15)
    services.tokens.validate_access(pair.access_token)

    clock.advance(seconds=1)
    with pytest.raises(TokenExpired):
        services.tokens.validate_access(pair.access_token)


async def test_rotation_rejects_inactive_owner(services, seed, operator):
    pair = await services.tokens.issue(operator)
    admin = await seed.identity("root@platform.io", Role.SUPER_ADMIN)

    await services.identities.deactivate(context_for(admin), operator.id)

    # deactivation revokes, so the stored record no longer matches
    with pytest.raises(RevokedOrUnknown):
        await services.tokens.rotate_access(pair.refresh_token)


async def test_rotation_rejects_inactive_owner_with_live_record(services, db, operator, clock):
    pair = await services.tokens.issue(operator)

    async with DirectoryUnitOfWork(db.session_factory) as uow:
        identity = await uow.identities.get_by_id(operator.id)
        identity.deactivate(None, clock())
        await uow.identities.update(identity)
        await uow.commit()

    with pytest.raises(IdentityInactiveOrMissing):
        await services.tokens.rotate_access(pair.refresh_token)


async def test_purge_removes_revoked_and_expired_records(services, db, operator, clock):
    revoked = await services.tokens.issue(operator)
    await services.tokens.revoke(revoked.refresh_token)
    clock.advance(days=3)
    live = await services.tokens.issue(operator)

    assert await services.tokens.purge_expired() == 1

    async with DirectoryUnitOfWork(db.session_factory) as uow:
        assert await uow.refresh_tokens.get_by_hash(hash_token(revoked.refresh_token)) is None
        assert await uow.refresh_tokens.get_by_hash(hash_token(live.refresh_token)) is not None
