"""Background workers."""
from workers.base_worker import BaseWorker
from workers.token_cleanup_worker import TokenCleanupWorker

__all__ = ["BaseWorker", "TokenCleanupWorker"]
