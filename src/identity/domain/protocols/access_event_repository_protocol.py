"""
AccessEvent Repository Protocol (Interface)
"""
from __future__ import annotations

from typing import Optional, Protocol, Sequence
from uuid import UUID

from identity.domain.entities.access_event import AccessAction, AccessEvent


class IAccessEventRepository(Protocol):
    """Append-only access audit trail"""

    async def add(self, event: AccessEvent) -> AccessEvent:
        ...

    async def list_for_identity(
        self,
        identity_id: UUID,
        action: Optional[AccessAction] = None,
    ) -> Sequence[AccessEvent]:
        """Events of an identity, oldest first"""
        ...
