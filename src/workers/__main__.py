"""CLI entry point for workers: ``python -m workers [token_cleanup] [--once]``."""

import argparse
import asyncio

from shared.config import get_settings
from shared.infrastructure.database import DatabaseSessionFactory
from shared.infrastructure.observability.logger import configure_logging
from identity.infrastructure.factories import build_identity_services
from workers.token_cleanup_worker import TokenCleanupWorker


async def run_token_cleanup(once: bool) -> None:
    settings = get_settings()
    db = DatabaseSessionFactory(
        database_url=settings.DATABASE_URL,
        echo=settings.DATABASE_ECHO,
        pool_size=settings.DATABASE_POOL_SIZE,
        max_overflow=settings.DATABASE_MAX_OVERFLOW,
    )
    services = build_identity_services(settings, db.session_factory)
    worker = TokenCleanupWorker(services.tokens, interval=settings.TOKEN_CLEANUP_INTERVAL_SECONDS)
    try:
        if once:
            await worker.run_once()
        else:
            await worker.run()
    finally:
        await db.dispose()


def main():
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(description="Access hub workers")
    parser.add_argument("worker", choices=["token_cleanup"], nargs="?", default="token_cleanup")
    parser.add_argument("--once", action="store_true", help="Run a single sweep and exit")
    args = parser.parse_args()

    settings = get_settings()
    configure_logging(settings.LOG_LEVEL, settings.JSON_LOGS)

    asyncio.run(run_token_cleanup(args.once))


if __name__ == "__main__":
    main()
