"""
JWT Service - Token Generation and Verification
External adapter for JWT operations
"""
from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, Optional
from uuid import UUID

import jwt
from jwt.exceptions import InvalidTokenError

from shared.infrastructure.observability.logger import get_logger
from identity.domain.errors import InvalidToken, InvalidTokenType, TokenExpired
from identity.domain.services.token_policy import (
    ACCESS_TOKEN_TYPE,
    REFRESH_TOKEN_TYPE,
    TokenPolicy,
)
from identity.domain.value_objects.role import Role
from identity.domain.value_objects.token_claims import AccessClaims, RefreshClaims

logger = get_logger(__name__)


class JWTService:
    """
    JWT codec for access and refresh tokens.

    Uses HS256 with a secret key. ``iat``/``exp`` are integer epoch seconds
    taken from the caller's clock; expiry is checked against the same clock,
    so a token is valid up to and including its ``exp`` second.
    """

    def __init__(
        self,
        secret_key: str,
        policy: TokenPolicy,
        algorithm: str = "HS256",
    ) -> None:
        """
        Initialize JWT service.

        Args:
            secret_key: Secret key for signing tokens
            policy: Lifetimes and required claims
            algorithm: JWT algorithm (default: HS256)
        """
        self._secret_key = secret_key
        self._algorithm = algorithm
        self.policy = policy

    def generate_access_token(
        self,
        identity_id: UUID,
        role: Role,
        tenant_id: Optional[UUID],
        now: datetime,
    ) -> tuple[str, int]:
        """
        Generate JWT access token.

        Returns:
            (encoded token, exp as epoch seconds)
        """
        issued_at = int(now.timestamp())
        expires_at = issued_at + int(self.policy.access_token_lifetime.total_seconds())

        payload = {
            "sub": str(identity_id),
            "role": role.value,
            "tenant_id": str(tenant_id) if tenant_id else None,
            "type": ACCESS_TOKEN_TYPE,
            "iat": issued_at,
            "exp": expires_at,
        }

        token = jwt.encode(payload, self._secret_key, algorithm=self._algorithm)

        logger.debug(
            "Generated access token",
            extra={"identity_id": str(identity_id), "exp": expires_at},
        )

        return token, expires_at

    def generate_refresh_token(
        self,
        identity_id: UUID,
        token_id: UUID,
        now: datetime,
    ) -> tuple[str, int]:
        """
        Generate JWT refresh token.

        Args:
            identity_id: Token owner
            token_id: Unique id (``jti``); also the id of the stored record
            now: Issue time

        Returns:
            (encoded token, exp as epoch seconds)
        """
        issued_at = int(now.timestamp())
        expires_at = issued_at + int(self.policy.refresh_token_lifetime.total_seconds())

        payload = {
            "sub": str(identity_id),
            "jti": str(token_id),
            "type": REFRESH_TOKEN_TYPE,
            "iat": issued_at,
            "exp": expires_at,
        }

        return jwt.encode(payload, self._secret_key, algorithm=self._algorithm), expires_at

    def verify_access_token(self, token: str, now: datetime) -> AccessClaims:
        """
        Verify and decode an access token. Never touches storage.

        Raises:
            InvalidToken: Malformed, bad signature or missing claims
            TokenExpired: Past ``exp``
            InvalidTokenType: Not an access token
        """
        payload = self._decode(token, ACCESS_TOKEN_TYPE, now)

        ok, error = self.policy.validate_access_claims(payload)
        if not ok:
            raise InvalidToken(details={"reason": error})

        try:
            tenant_id = UUID(payload["tenant_id"]) if payload["tenant_id"] else None
            return AccessClaims(
                subject_id=UUID(payload["sub"]),
                role=Role(payload["role"]),
                tenant_id=tenant_id,
                issued_at=int(payload["iat"]),
                expires_at=int(payload["exp"]),
            )
        except (TypeError, ValueError) as e:
            raise InvalidToken(details={"reason": "malformed claims"}) from e

    def verify_refresh_token(self, token: str, now: datetime) -> RefreshClaims:
        """
        Verify and decode a refresh token (signature, expiry and type only).

        Raises:
            InvalidToken / TokenExpired / InvalidTokenType
        """
        payload = self._decode(token, REFRESH_TOKEN_TYPE, now)

        ok, error = self.policy.validate_refresh_claims(payload)
        if not ok:
            raise InvalidToken(details={"reason": error})

        try:
            return RefreshClaims(
                subject_id=UUID(payload["sub"]),
                token_id=UUID(payload["jti"]),
                issued_at=int(payload["iat"]),
                expires_at=int(payload["exp"]),
            )
        except (TypeError, ValueError) as e:
            raise InvalidToken(details={"reason": "malformed claims"}) from e

    def _decode(self, token: str, expected_type: str, now: datetime) -> Dict[str, Any]:
        try:
            payload = jwt.decode(
                token,
                self._secret_key,
                algorithms=[self._algorithm],
                options={"verify_exp": False, "verify_iat": False, "verify_nbf": False},
            )
        except InvalidTokenError as e:
            logger.debug("Token signature or format rejected", extra={"error": type(e).__name__})
            raise InvalidToken() from e

        exp = payload.get("exp")
        if not isinstance(exp, int):
            raise InvalidToken(details={"reason": "missing exp"})

        if self.policy.is_expired(exp, now.timestamp()):
            raise TokenExpired()

        if payload.get("type") != expected_type:
            raise InvalidTokenType(details={"expected": expected_type})

        return payload
