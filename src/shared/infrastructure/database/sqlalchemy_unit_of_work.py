"""
SQLAlchemy Implementation of Unit of Work
Manages database transactions with async SQLAlchemy sessions
"""
from __future__ import annotations

from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from shared.infrastructure.observability.logger import get_logger

logger = get_logger(__name__)


class SQLAlchemyUnitOfWork:
    """
    SQLAlchemy-based Unit of Work implementation.

    Opens one session per ``async with`` block. Everything done inside the
    block is atomic: it is persisted by ``commit()`` or discarded when the
    block exits without a commit (including on exception).

    Attributes:
        session: Async SQLAlchemy session (only inside the context)
        _committed: Flag tracking if transaction was committed
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        """
        Initialize UoW with a session factory.

        Args:
            session_factory: Factory producing async database sessions
        """
        self._session_factory = session_factory
        self._session: AsyncSession | None = None
        self._committed = False

    @property
    def session(self) -> AsyncSession:
        if self._session is None:
            raise RuntimeError("UnitOfWork used outside of 'async with'")
        return self._session

    async def __aenter__(self) -> SQLAlchemyUnitOfWork:
        """
        Enter async context manager.

        Opens a session and begins a transaction.

        Returns:
            Self (the UoW instance)
        """
        self._session = self._session_factory()
        self._committed = False
        await self._session.begin()

        logger.debug("UnitOfWork transaction started")
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """
        Exit async context manager.

        Rolls back if an exception occurred or nothing was committed, then
        closes the session.
        """
        try:
            if exc_type is not None:
                await self.rollback()
                logger.debug(
                    "UnitOfWork rolled back due to exception",
                    extra={"exception": exc_type.__name__},
                )
            elif not self._committed:
                await self.rollback()
        finally:
            await self.session.close()
            self._session = None
            self._on_close()

    def _on_close(self) -> None:
        """Hook for subclasses to drop session-bound state."""

    async def commit(self) -> None:
        """
        Commit the current transaction.

        Raises:
            Exception: If commit fails (the transaction is rolled back first)
        """
        try:
            await self.session.commit()
            self._committed = True
            logger.debug("UnitOfWork transaction committed")
        except Exception as e:
            await self.rollback()
            logger.error(
                "UnitOfWork commit failed",
                extra={"error": str(e)},
            )
            raise

    async def rollback(self) -> None:
        """
        Rollback the current transaction.

        Discards all changes made within this UoW context.
        """
        try:
            await self.session.rollback()
            self._committed = False
            logger.debug("UnitOfWork transaction rolled back")
        except Exception as e:
            logger.error(
                "UnitOfWork rollback failed",
                extra={"error": str(e)},
            )
            raise
