"""
Audit Name Projection
Read-side lookup of audit-field identity ids to display names
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, Optional, Set
from uuid import UUID

from shared.domain.base_entity import LifecycleEntity
from identity.domain.protocols.directory_unit_of_work_protocol import DirectoryUnitOfWorkFactory

AUDIT_FIELDS = ("created_by", "updated_by", "deactivated_by")


def audit_ids(entities: Iterable[LifecycleEntity]) -> Set[UUID]:
    """Every non-null audit id referenced by ``entities``."""
    ids: Set[UUID] = set()
    for entity in entities:
        for attr in AUDIT_FIELDS:
            value: Optional[UUID] = getattr(entity, attr, None)
            if value is not None:
                ids.add(value)
    return ids


@dataclass
class AuditNameProjection:
    """
    One batch query per call. Ids stay the source of truth; unknown ids are
    simply absent from the result.
    """
    uow_factory: DirectoryUnitOfWorkFactory

    async def resolve(self, ids: Iterable[UUID]) -> Dict[UUID, str]:
        wanted = list(set(ids))
        if not wanted:
            return {}
        async with self.uow_factory() as uow:
            identities = await uow.identities.get_by_ids(wanted)
        return {identity.id: identity.name for identity in identities}

    async def for_entities(self, entities: Iterable[LifecycleEntity]) -> Dict[UUID, str]:
        return await self.resolve(audit_ids(entities))
