"""
Identity Repository Protocol (Interface)
"""
from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence
from uuid import UUID

from identity.domain.entities.identity import Identity
from identity.domain.value_objects.role import Role


class IIdentityRepository(Protocol):
    """Identity repository interface"""

    async def add(self, identity: Identity) -> Identity:
        ...

    async def get_by_id(self, identity_id: UUID) -> Optional[Identity]:
        ...

    async def get_by_ids(self, identity_ids: Sequence[UUID]) -> Sequence[Identity]:
        ...

    async def get_by_email(self, email: str) -> Optional[Identity]:
        """Lookup by normalized email"""
        ...

    async def update(self, identity: Identity) -> Identity:
        ...

    async def list_all(self, role: Optional[Role] = None) -> Sequence[Identity]:
        """Every identity ordered by name, optionally of one role"""
        ...

    async def list_by_tenant(
        self,
        tenant_id: UUID,
        include_inactive: bool = True,
    ) -> Sequence[Identity]:
        """Tenant members ordered by name"""
        ...

    async def deactivate_tenant_members(
        self,
        tenant_id: UUID,
        actor_id: Optional[UUID],
        now: datetime,
    ) -> Sequence[UUID]:
        """Deactivate every active member of a tenant; return their ids"""
        ...
