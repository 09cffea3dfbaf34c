import structlog
from sqlalchemy.exc import SQLAlchemyError

from identity.application.services.token_service import TokenService
from workers.base_worker import BaseWorker

logger = structlog.get_logger(__name__)


class TokenCleanupWorker(BaseWorker):
    """
    Deletes expired or revoked refresh token records.

    Pure garbage collection: running it never, or at any cadence, has no
    effect on which tokens are accepted.
    """

    def __init__(self, token_service: TokenService, interval: int = 3600):
        super().__init__(worker_name="token_cleanup", interval=interval)
        self.token_service = token_service
        self.last_purged = 0

    async def execute(self) -> bool:
        try:
            self.last_purged = await self.token_service.purge_expired()
        except SQLAlchemyError as e:
            logger.error(f"Token cleanup failed: {str(e)}", exc_info=True)
            return False

        logger.info("Token cleanup completed", tokens_purged=self.last_purged)
        return True

    async def run_once(self) -> int:
        """Single sweep (used by tests and cron-style invocations)."""
        await self.execute()
        return self.last_purged
