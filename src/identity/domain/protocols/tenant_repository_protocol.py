"""
Tenant Repository Protocol (Interface)
"""
from __future__ import annotations

from typing import Optional, Protocol, Sequence
from uuid import UUID

from identity.domain.entities.tenant import Tenant


class ITenantRepository(Protocol):
    """Tenant repository interface"""

    async def add(self, tenant: Tenant) -> Tenant:
        ...

    async def get_by_id(self, tenant_id: UUID) -> Optional[Tenant]:
        ...

    async def get_by_external_id(self, external_id: str) -> Optional[Tenant]:
        ...

    async def update(self, tenant: Tenant) -> Tenant:
        ...

    async def list_all(self) -> Sequence[Tenant]:
        """All tenants ordered by name"""
        ...
