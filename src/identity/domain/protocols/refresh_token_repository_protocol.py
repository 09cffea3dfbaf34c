"""
RefreshToken Repository Protocol (Interface)
"""
from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence
from uuid import UUID

from identity.domain.entities.refresh_token import RefreshToken


class IRefreshTokenRepository(Protocol):
    """Refresh token repository interface"""

    async def add(self, token: RefreshToken) -> RefreshToken:
        """Add new refresh token"""
        ...

    async def get_by_id(self, token_id: UUID) -> Optional[RefreshToken]:
        ...

    async def get_by_hash(self, token_hash: str) -> Optional[RefreshToken]:
        """Get token by hash"""
        ...

    async def revoke_by_hash(self, token_hash: str, now: datetime) -> int:
        """Revoke the matching token; 0 when unknown or already revoked"""
        ...

    async def revoke_all_for_identity(self, identity_id: UUID, now: datetime) -> int:
        """Revoke all tokens for an identity in one statement"""
        ...

    async def revoke_all_for_identities(self, identity_ids: Sequence[UUID], now: datetime) -> int:
        ...

    async def purge(self, now: datetime) -> int:
        """Delete expired or revoked tokens (housekeeping)"""
        ...
