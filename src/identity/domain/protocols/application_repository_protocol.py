"""
Application Repository Protocol (Interface)
"""
from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence
from uuid import UUID

from identity.domain.entities.application import Application


class IApplicationRepository(Protocol):
    """Application repository interface"""

    async def add(self, application: Application) -> Application:
        ...

    async def get_by_id(self, application_id: UUID) -> Optional[Application]:
        ...

    async def get_by_api_key(self, api_key: str) -> Optional[Application]:
        ...

    async def update(self, application: Application) -> Application:
        ...

    async def list_all(self, active_only: bool = False) -> Sequence[Application]:
        """Applications ordered by name"""
        ...

    async def list_licensed(
        self,
        tenant_id: UUID,
        now: datetime,
        application_ids: Optional[Sequence[UUID]] = None,
    ) -> Sequence[Application]:
        """
        Active applications holding an active, unexpired license for the
        tenant, ordered by name. Optionally restricted to ``application_ids``.
        """
        ...
