"""
Token Service
Issues, rotates, validates and revokes session credentials
"""
from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional
from uuid import UUID, uuid4

from shared.domain.clock import Clock, utcnow
from shared.infrastructure.observability.logger import get_logger
from identity.application.dto.auth_dto import RotatedAccess
from identity.domain.entities.identity import Identity
from identity.domain.entities.refresh_token import RefreshToken, hash_token
from identity.domain.errors import IdentityInactiveOrMissing, RevokedOrUnknown
from identity.domain.protocols.directory_unit_of_work_protocol import (
    DirectoryUnitOfWorkFactory,
    IDirectoryUnitOfWork,
)
from identity.domain.protocols.token_codec_protocol import ITokenCodec
from identity.domain.value_objects.token_claims import AccessClaims, TokenPair

logger = get_logger(__name__)


def _from_timestamp(ts: int) -> datetime:
    return datetime.fromtimestamp(ts, tz=timezone.utc)


class TokenService:
    """
    Two-token session protocol.

    - Access tokens are short-lived and verified by signature and expiry
      alone.
    - Refresh tokens are long-lived; only their SHA-256 digest and expiry are
      stored. A refresh token is reused until logout, password change,
      deactivation or its own expiry; rotation mints access tokens only.

    Every failure is terminal for the presented token.

    Operations that write accept an optional ``uow`` so callers can fold them
    into a larger transaction; without one they commit on their own.
    """

    def __init__(
        self,
        uow_factory: DirectoryUnitOfWorkFactory,
        codec: ITokenCodec,
        clock: Clock = utcnow,
    ) -> None:
        self._uow_factory = uow_factory
        self._codec = codec
        self._clock = clock

    async def issue(self, identity: Identity, uow: Optional[IDirectoryUnitOfWork] = None) -> TokenPair:
        """
        Issue an access/refresh token pair for an identity.

        Args:
            identity: Token subject (role and tenant are signed into the access token)
            uow: Optional enclosing unit of work (caller commits)

        Returns:
            TokenPair with both raw tokens; the refresh token is never stored
        """
        now = self._clock()
        access_token, access_exp = self._codec.generate_access_token(
            identity.id, identity.role, identity.tenant_id, now
        )

        token_id = uuid4()
        refresh_token, refresh_exp = self._codec.generate_refresh_token(identity.id, token_id, now)
        record = RefreshToken.for_raw_token(
            token_id=token_id,
            identity_id=identity.id,
            raw_token=refresh_token,
            expires_at=_from_timestamp(refresh_exp),
            now=now,
        )

        if uow is None:
            async with self._uow_factory() as own_uow:
                await own_uow.refresh_tokens.add(record)
                await own_uow.commit()
        else:
            await uow.refresh_tokens.add(record)

        logger.info(
            "Issued token pair",
            extra={"identity_id": str(identity.id), "refresh_token_id": str(token_id)},
        )

        return TokenPair(
            access_token=access_token,
            refresh_token=refresh_token,
            access_expires_at=_from_timestamp(access_exp),
            refresh_expires_at=_from_timestamp(refresh_exp),
        )

    async def rotate_access(self, refresh_token: str) -> RotatedAccess:
        """
        Mint a new access token from a refresh token.

        The access token reflects the identity's current role and tenant.

        Raises:
            InvalidToken: Malformed, bad signature, or not a refresh token
            TokenExpired: Refresh token past its expiry
            RevokedOrUnknown: No stored, unrevoked, unexpired record matches
            IdentityInactiveOrMissing: Owner deleted or deactivated
        """
        now = self._clock()
        claims = self._codec.verify_refresh_token(refresh_token, now)

        async with self._uow_factory() as uow:
            record = await uow.refresh_tokens.get_by_hash(hash_token(refresh_token))
            if (
                record is None
                or record.id != claims.token_id
                or record.identity_id != claims.subject_id
                or not record.matches(refresh_token)
                or not record.is_usable(now)
            ):
                logger.info(
                    "Refresh token rejected",
                    extra={"identity_id": str(claims.subject_id), "reason": "revoked_or_unknown"},
                )
                raise RevokedOrUnknown()

            identity = await uow.identities.get_by_id(claims.subject_id)
            if identity is None or not identity.active:
                raise IdentityInactiveOrMissing()

        access_token, access_exp = self._codec.generate_access_token(
            identity.id, identity.role, identity.tenant_id, now
        )

        logger.debug("Rotated access token", extra={"identity_id": str(identity.id)})

        return RotatedAccess(
            access_token=access_token,
            expires_at=_from_timestamp(access_exp),
            identity_id=identity.id,
        )

    async def revoke(self, refresh_token: str, uow: Optional[IDirectoryUnitOfWork] = None) -> bool:
        """
        Revoke one refresh token. Idempotent: unknown or already-revoked
        tokens are a no-op.

        Returns:
            True if a record changed state
        """
        now = self._clock()
        token_hash = hash_token(refresh_token)

        if uow is None:
            async with self._uow_factory() as own_uow:
                changed = await own_uow.refresh_tokens.revoke_by_hash(token_hash, now)
                await own_uow.commit()
        else:
            changed = await uow.refresh_tokens.revoke_by_hash(token_hash, now)

        return changed > 0

    async def revoke_all(self, identity_id: UUID, uow: Optional[IDirectoryUnitOfWork] = None) -> int:
        """
        Revoke every refresh token of an identity in one statement.

        Tokens issued afterwards are unaffected.

        Returns:
            Number of records revoked
        """
        now = self._clock()

        if uow is None:
            async with self._uow_factory() as own_uow:
                count = await own_uow.refresh_tokens.revoke_all_for_identity(identity_id, now)
                await own_uow.commit()
        else:
            count = await uow.refresh_tokens.revoke_all_for_identity(identity_id, now)

        logger.info("Revoked all refresh tokens", extra={"identity_id": str(identity_id), "count": count})
        return count

    def validate_access(self, access_token: str) -> AccessClaims:
        """Signature, expiry and type check only; no storage round-trip."""
        return self._codec.verify_access_token(access_token, self._clock())

    async def purge_expired(self) -> int:
        """Delete expired or revoked records. Housekeeping only."""
        async with self._uow_factory() as uow:
            count = await uow.refresh_tokens.purge(self._clock())
            await uow.commit()

        logger.info("Purged refresh token records", extra={"count": count})
        return count
