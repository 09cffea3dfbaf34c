"""
Token claim sets
Minimal signed claims: subject, role, tenant, type and timing only
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional
from uuid import UUID

from identity.domain.value_objects.role import Role


@dataclass(frozen=True)
class AccessClaims:
    """Verified claims of an access token."""

    subject_id: UUID
    role: Role
    tenant_id: Optional[UUID]
    issued_at: int
    expires_at: int

    @property
    def expires_at_datetime(self) -> datetime:
        return datetime.fromtimestamp(self.expires_at, tz=timezone.utc)


@dataclass(frozen=True)
class RefreshClaims:
    """Verified claims of a refresh token (the record id is ``token_id``)."""

    subject_id: UUID
    token_id: UUID
    issued_at: int
    expires_at: int


@dataclass(frozen=True)
class TokenPair:
    access_token: str
    refresh_token: str
    access_expires_at: datetime
    refresh_expires_at: datetime
    token_type: str = "Bearer"
