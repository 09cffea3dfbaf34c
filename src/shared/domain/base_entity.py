"""
Base Entity Contract for Domain Layer
Provides UUID-based identity, equality, and audit fields
"""
from __future__ import annotations

from abc import ABC
from datetime import datetime
from uuid import UUID, uuid4

from shared.domain.clock import utcnow


class BaseEntity(ABC):
    """
    Abstract base class for all domain entities.

    Entities are defined by their identity (id), not their attributes.
    Two entities are equal if they have the same id, regardless of other attributes.

    Attributes:
        id: Unique identifier (UUID)
        created_at: Timestamp of creation (timezone-aware UTC)
        updated_at: Timestamp of last update (timezone-aware UTC)
    """

    def __init__(
        self,
        id: UUID | None = None,
        created_at: datetime | None = None,
        updated_at: datetime | None = None,
    ) -> None:
        """
        Initialize entity with identity and audit fields.

        Args:
            id: Entity UUID (generated if None)
            created_at: Creation timestamp (now if None)
            updated_at: Update timestamp (created_at if None)
        """
        self.id: UUID = id or uuid4()
        self.created_at: datetime = created_at or utcnow()
        self.updated_at: datetime = updated_at or self.created_at

    def __eq__(self, other: object) -> bool:
        """Entities are equal if they have the same id and type."""
        if not isinstance(other, self.__class__):
            return False
        return self.id == other.id

    def __hash__(self) -> int:
        """Hash based on id for use in sets/dicts."""
        return hash(self.id)

    def __repr__(self) -> str:
        """String representation showing class name and id."""
        return f"{self.__class__.__name__}(id={self.id})"

    def mark_updated(self, now: datetime | None = None) -> None:
        """Update the updated_at timestamp (defaults to current time)."""
        self.updated_at = now or utcnow()


class LifecycleEntity(BaseEntity):
    """
    Entity that is never hard-deleted.

    Lifecycle state is an ``active`` flag plus who created, last updated and
    deactivated it (identity ids, never names).
    """

    def __init__(
        self,
        id: UUID | None = None,
        active: bool = True,
        created_by: UUID | None = None,
        updated_by: UUID | None = None,
        deactivated_at: datetime | None = None,
        deactivated_by: UUID | None = None,
        created_at: datetime | None = None,
        updated_at: datetime | None = None,
    ) -> None:
        super().__init__(id, created_at, updated_at)
        self.active = active
        self.created_by = created_by
        self.updated_by = updated_by
        self.deactivated_at = deactivated_at
        self.deactivated_by = deactivated_by

    def deactivate(self, actor_id: UUID | None, now: datetime) -> None:
        self.active = False
        self.deactivated_at = now
        self.deactivated_by = actor_id
        self.updated_by = actor_id
        self.mark_updated(now)

    def reactivate(self, actor_id: UUID | None, now: datetime) -> None:
        self.active = True
        self.deactivated_at = None
        self.deactivated_by = None
        self.updated_by = actor_id
        self.mark_updated(now)

    def touch(self, actor_id: UUID | None, now: datetime) -> None:
        self.updated_by = actor_id
        self.mark_updated(now)
