from sqlalchemy.exc import OperationalError

from identity.domain.value_objects.role import Role
from workers.token_cleanup_worker import TokenCleanupWorker


async def test_run_once_purges_dead_records(services, seed):
    tenant = await seed.tenant()
    operator = await seed.identity("op@acme.com", Role.TENANT_OPERATOR, tenant)
    pair = await services.tokens.issue(operator)
    await services.tokens.issue(operator)
    await services.tokens.revoke(pair.refresh_token)

    worker = TokenCleanupWorker(services.tokens, interval=1)

    assert await worker.run_once() == 1
    assert await worker.run_once() == 0


class _BrokenTokenService:
    async def purge_expired(self) -> int:
        raise OperationalError("DELETE FROM refresh_tokens", {}, Exception("database is locked"))


async def test_database_errors_do_not_stop_the_worker():
    worker = TokenCleanupWorker(_BrokenTokenService(), interval=1)

    assert await worker.execute() is False
