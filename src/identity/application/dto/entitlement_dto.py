"""
Entitlement DTOs
"""
from __future__ import annotations

from dataclasses import dataclass
from uuid import UUID

from identity.domain.value_objects.role import Role


@dataclass(frozen=True)
class AccessGrant:
    """Redirect target for an application; credential attachment is the caller's job."""
    url: str
    application_name: str
    application_id: UUID


@dataclass(frozen=True)
class AssignmentRequest:
    """One entry of the desired assignment set."""
    application_id: UUID
    app_role: Role | str
