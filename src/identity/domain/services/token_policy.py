# src/identity/domain/services/token_policy.py

from dataclasses import dataclass, field
from datetime import timedelta
from typing import Any, Dict, FrozenSet

ACCESS_TOKEN_TYPE = "access"
REFRESH_TOKEN_TYPE = "refresh"


@dataclass(frozen=True)
class TokenPolicy:
    """
    Domain rules for session tokens.

    Enforces token lifetimes and the minimal claim sets. Signed claims never
    carry display data: names and tenant names are read from the directory.
    """

    access_token_lifetime: timedelta = timedelta(minutes=15)
    refresh_token_lifetime: timedelta = timedelta(days=7)

    REQUIRED_ACCESS_CLAIMS: FrozenSet[str] = field(
        default=frozenset({
            "sub",        # Subject (identity_id)
            "role",       # Platform role
            "tenant_id",  # Tenant context (null for SUPER_ADMIN)
            "type",       # Token type
            "iat",        # Issued at
            "exp",        # Expiration
        }),
        init=False,
    )

    REQUIRED_REFRESH_CLAIMS: FrozenSet[str] = field(
        default=frozenset({"sub", "jti", "type", "iat", "exp"}),
        init=False,
    )

    def __post_init__(self) -> None:
        if self.access_token_lifetime <= timedelta(0) or self.refresh_token_lifetime <= timedelta(0):
            raise ValueError("Token lifetimes must be positive")

    @staticmethod
    def missing_claims(claims: Dict[str, Any], required: FrozenSet[str]) -> FrozenSet[str]:
        return frozenset(required - set(claims.keys()))

    def validate_access_claims(self, claims: Dict[str, Any]) -> tuple[bool, str | None]:
        """
        Validate access token claims.

        Returns:
            (is_valid, error_message)
        """
        missing = self.missing_claims(claims, self.REQUIRED_ACCESS_CLAIMS)
        if missing:
            return False, f"Missing required claims: {', '.join(sorted(missing))}"
        return True, None

    def validate_refresh_claims(self, claims: Dict[str, Any]) -> tuple[bool, str | None]:
        missing = self.missing_claims(claims, self.REQUIRED_REFRESH_CLAIMS)
        if missing:
            return False, f"Missing required claims: {', '.join(sorted(missing))}"
        return True, None

    @staticmethod
    def is_expired(expires_at: int, now_ts: float) -> bool:
        """A token is valid up to and including the instant ``exp``."""
        return now_ts > expires_at
