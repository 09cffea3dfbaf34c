"""
Token Codec Protocol (Interface)
"""
from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol
from uuid import UUID

from identity.domain.services.token_policy import TokenPolicy
from identity.domain.value_objects.role import Role
from identity.domain.value_objects.token_claims import AccessClaims, RefreshClaims


class ITokenCodec(Protocol):
    """Signs and verifies session tokens; raises the domain token errors"""

    policy: TokenPolicy

    def generate_access_token(
        self,
        identity_id: UUID,
        role: Role,
        tenant_id: Optional[UUID],
        now: datetime,
    ) -> tuple[str, int]:
        ...

    def generate_refresh_token(self, identity_id: UUID, token_id: UUID, now: datetime) -> tuple[str, int]:
        ...

    def verify_access_token(self, token: str, now: datetime) -> AccessClaims:
        ...

    def verify_refresh_token(self, token: str, now: datetime) -> RefreshClaims:
        ...
