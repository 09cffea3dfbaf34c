"""
RefreshToken Entity - Refresh Token Record
"""
from __future__ import annotations

import hashlib
import secrets
from datetime import datetime
from typing import Optional
from uuid import UUID

from shared.domain.base_entity import BaseEntity


def hash_token(raw_token: str) -> str:
    """SHA-256 hex digest of a raw token string."""
    return hashlib.sha256(raw_token.encode()).hexdigest()


class RefreshToken(BaseEntity):
    """
    Persisted record of an issued refresh token.

    Only the digest is stored; the raw token goes to the client and never
    touches storage. The record id is the token's ``jti`` claim.

    Attributes:
        identity_id: Owner
        token_hash: SHA-256 hex digest of the raw token
        expires_at: Expiration timestamp
        revoked: Revocation flag (never cleared)
        revoked_at: Revocation timestamp
    """

    def __init__(
        self,
        id: UUID,
        identity_id: UUID,
        token_hash: str,
        expires_at: datetime,
        revoked: bool = False,
        revoked_at: Optional[datetime] = None,
        created_at: Optional[datetime] = None,
        updated_at: Optional[datetime] = None,
    ) -> None:
        super().__init__(id, created_at, updated_at)
        self.identity_id = identity_id
        self.token_hash = token_hash
        self.expires_at = expires_at
        self.revoked = revoked
        self.revoked_at = revoked_at

    @classmethod
    def for_raw_token(
        cls,
        token_id: UUID,
        identity_id: UUID,
        raw_token: str,
        expires_at: datetime,
        now: datetime,
    ) -> RefreshToken:
        return cls(
            id=token_id,
            identity_id=identity_id,
            token_hash=hash_token(raw_token),
            expires_at=expires_at,
            created_at=now,
        )

    def matches(self, raw_token: str) -> bool:
        # Constant-time comparison to prevent timing attacks
        return secrets.compare_digest(hash_token(raw_token), self.token_hash)

    def is_expired(self, now: datetime) -> bool:
        return now > self.expires_at

    def is_usable(self, now: datetime) -> bool:
        return not self.revoked and not self.is_expired(now)

    def revoke(self, now: datetime) -> None:
        if not self.revoked:
            self.revoked = True
            self.revoked_at = now
            self.mark_updated(now)
