"""
IdentityContext Value Object
The authenticated caller, resolved from the directory on every request
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional
from uuid import UUID

from identity.domain.value_objects.role import Role


@dataclass(frozen=True)
class IdentityContext:
    identity_id: UUID
    email: str
    role: Role
    tenant_id: Optional[UUID]

    @property
    def is_super_admin(self) -> bool:
        return self.role is Role.SUPER_ADMIN
