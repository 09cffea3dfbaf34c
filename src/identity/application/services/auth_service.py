"""
Authentication Service
Orchestrates login, logout, access rotation and password changes
"""
from __future__ import annotations

from typing import Optional

from shared.domain.clock import Clock, utcnow
from shared.infrastructure.observability.logger import get_logger
from identity.application.dto.auth_dto import LoginResult, RotatedAccess
from identity.application.services.token_service import TokenService
from identity.domain.entities.access_event import AccessAction, AccessEvent
from identity.domain.entities.identity import Identity, ensure_password_length
from identity.domain.errors import (
    IdentityInactiveOrMissing,
    InvalidCredentials,
    InvalidCurrentPassword,
)
from identity.domain.protocols.directory_unit_of_work_protocol import DirectoryUnitOfWorkFactory
from identity.domain.protocols.password_hasher_protocol import IPasswordHasher
from identity.domain.value_objects.identity_context import IdentityContext

logger = get_logger(__name__)


class AuthService:
    """
    Authentication service for login and token management.

    Every state change is recorded as an AccessEvent in the same
    transaction as the change itself.
    """

    def __init__(
        self,
        uow_factory: DirectoryUnitOfWorkFactory,
        token_service: TokenService,
        password_hasher: IPasswordHasher,
        clock: Clock = utcnow,
        password_min_length: int = 8,
    ) -> None:
        self._uow_factory = uow_factory
        self._tokens = token_service
        self._hasher = password_hasher
        self._clock = clock
        self._password_min_length = password_min_length

    async def login(
        self,
        email: str,
        password: str,
        ip_address: Optional[str] = None,
        user_agent: Optional[str] = None,
    ) -> LoginResult:
        """
        Authenticate user and return tokens.

        Args:
            email: User email (case-insensitive)
            password: Plain text password
            ip_address: Client IP (for audit)
            user_agent: Client user agent (for audit)

        Raises:
            InvalidCredentials: Unknown email or wrong password
            IdentityInactiveOrMissing: Account deactivated
        """
        async with self._uow_factory() as uow:
            identity = await uow.identities.get_by_email(email)
            if identity is None:
                logger.info("Login failed", extra={"reason": "unknown_email"})
                raise InvalidCredentials()

            if not identity.active:
                logger.info("Login failed", extra={"identity_id": str(identity.id), "reason": "inactive"})
                raise IdentityInactiveOrMissing()

            if not self._hasher.verify(identity.password_hash, password):
                logger.info("Login failed", extra={"identity_id": str(identity.id), "reason": "bad_password"})
                raise InvalidCredentials()

            now = self._clock()
            identity.record_login(now)
            identity = await uow.identities.update(identity)

            tokens = await self._tokens.issue(identity, uow=uow)
            await uow.access_events.add(
                AccessEvent(
                    identity_id=identity.id,
                    action=AccessAction.LOGIN,
                    ip_address=ip_address,
                    user_agent=user_agent,
                    created_at=now,
                )
            )
            await uow.commit()

        logger.info("Login succeeded", extra={"identity_id": str(identity.id)})
        return LoginResult(identity=identity, tokens=tokens)

    async def logout(
        self,
        context: Optional[IdentityContext],
        refresh_token: str,
        ip_address: Optional[str] = None,
        user_agent: Optional[str] = None,
    ) -> None:
        """
        Revoke the session's refresh token. Unknown tokens are ignored.

        ``context`` is None when the access token has already expired; the
        refresh token is still revoked but no logout event is recorded.
        """
        async with self._uow_factory() as uow:
            await self._tokens.revoke(refresh_token, uow=uow)
            if context is not None:
                await uow.access_events.add(
                    AccessEvent(
                        identity_id=context.identity_id,
                        action=AccessAction.LOGOUT,
                        ip_address=ip_address,
                        user_agent=user_agent,
                        created_at=self._clock(),
                    )
                )
            await uow.commit()

        logger.info(
            "Logout",
            extra={"identity_id": str(context.identity_id) if context else None},
        )

    async def refresh(
        self,
        refresh_token: str,
        ip_address: Optional[str] = None,
        user_agent: Optional[str] = None,
    ) -> RotatedAccess:
        """Mint a new access token; the refresh token stays the same."""
        rotated = await self._tokens.rotate_access(refresh_token)

        async with self._uow_factory() as uow:
            await uow.access_events.add(
                AccessEvent(
                    identity_id=rotated.identity_id,
                    action=AccessAction.TOKEN_REFRESH,
                    ip_address=ip_address,
                    user_agent=user_agent,
                    created_at=self._clock(),
                )
            )
            await uow.commit()

        return rotated

    async def me(self, context: IdentityContext) -> Identity:
        async with self._uow_factory() as uow:
            identity = await uow.identities.get_by_id(context.identity_id)
        if identity is None or not identity.active:
            raise IdentityInactiveOrMissing()
        return identity

    async def update_profile(self, context: IdentityContext, name: str) -> Identity:
        """Change the caller's display name."""
        async with self._uow_factory() as uow:
            identity = await uow.identities.get_by_id(context.identity_id)
            if identity is None or not identity.active:
                raise IdentityInactiveOrMissing()

            identity.name = name.strip()
            identity.touch(identity.id, self._clock())
            identity = await uow.identities.update(identity)
            await uow.commit()

        return identity

    async def change_password(self, context: IdentityContext, current_password: str, new_password: str) -> int:
        """
        Replace the caller's password and end every session.

        Raises:
            InvalidCurrentPassword: ``current_password`` does not verify
            ValidationError: ``new_password`` too short

        Returns:
            Number of refresh tokens revoked
        """
        ensure_password_length(new_password, self._password_min_length)

        async with self._uow_factory() as uow:
            identity = await uow.identities.get_by_id(context.identity_id)
            if identity is None or not identity.active:
                raise IdentityInactiveOrMissing()

            if not self._hasher.verify(identity.password_hash, current_password):
                raise InvalidCurrentPassword()

            identity.change_password_hash(self._hasher.hash(new_password), self._clock())
            await uow.identities.update(identity)
            revoked = await self._tokens.revoke_all(identity.id, uow=uow)
            await uow.commit()

        logger.info("Password changed", extra={"identity_id": str(identity.id), "revoked": revoked})
        return revoked
