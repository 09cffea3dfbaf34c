"""
Authentication DTOs
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from identity.domain.entities.identity import Identity
from identity.domain.value_objects.token_claims import TokenPair


@dataclass(frozen=True)
class LoginResult:
    """Token pair plus the authenticated identity (for the response body)."""
    identity: Identity
    tokens: TokenPair


@dataclass(frozen=True)
class RotatedAccess:
    """A freshly minted access token; the refresh token is unchanged."""
    access_token: str
    expires_at: datetime
    identity_id: UUID
