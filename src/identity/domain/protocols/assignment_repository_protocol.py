"""
UserAssignment Repository Protocol (Interface)
"""
from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence
from uuid import UUID

from identity.domain.entities.user_assignment import UserAssignment
from identity.domain.value_objects.role import Role


class IAssignmentRepository(Protocol):
    """User assignment repository interface"""

    async def add(self, assignment: UserAssignment) -> UserAssignment:
        ...

    async def get(self, identity_id: UUID, application_id: UUID) -> Optional[UserAssignment]:
        """Lookup by the unique (identity, application) pair, active or not"""
        ...

    async def update(self, assignment: UserAssignment) -> UserAssignment:
        ...

    async def list_for_identity(
        self,
        identity_id: UUID,
        active_only: bool = True,
    ) -> Sequence[UserAssignment]:
        ...

    async def replace_for_identity(
        self,
        identity_id: UUID,
        desired: Sequence[tuple[UUID, Role]],
        now: datetime,
    ) -> Sequence[UserAssignment]:
        """Full-replace of the active assignment set, in the caller's transaction"""
        ...

    async def deactivate_all_for_identity(self, identity_id: UUID, now: datetime) -> int:
        """Deactivate every active assignment of an identity in one statement"""
        ...
