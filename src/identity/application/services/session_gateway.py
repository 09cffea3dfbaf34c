"""
Session Gateway
Turns an Authorization header value into an authenticated IdentityContext
"""
from __future__ import annotations

from typing import Optional

from shared.exceptions import AuthenticationError
from shared.infrastructure.observability.logger import get_logger
from identity.application.services.token_service import TokenService
from identity.domain.errors import IdentityInactiveOrMissing, NoToken
from identity.domain.protocols.directory_unit_of_work_protocol import DirectoryUnitOfWorkFactory
from identity.domain.value_objects.identity_context import IdentityContext

logger = get_logger(__name__)

BEARER_SCHEME = "bearer"


def extract_bearer_token(bearer_value: Optional[str]) -> str:
    """
    Return the token from a ``Bearer <token>`` value.

    Raises:
        NoToken: Missing, empty or not a bearer value
    """
    if not bearer_value:
        raise NoToken()
    scheme, _, token = bearer_value.strip().partition(" ")
    token = token.strip()
    if scheme.lower() != BEARER_SCHEME or not token:
        raise NoToken()
    return token


class SessionGateway:
    """
    Request authentication.

    The token only proves who the caller is; role, tenant and email are
    re-read from the directory on every call so deactivation and role
    changes take effect before the access token expires.
    """

    def __init__(self, uow_factory: DirectoryUnitOfWorkFactory, token_service: TokenService) -> None:
        self._uow_factory = uow_factory
        self._tokens = token_service

    async def authenticate(self, bearer_value: Optional[str]) -> IdentityContext:
        """
        Authenticate an ``Authorization`` header value.

        Raises:
            NoToken: Header missing or not a bearer value
            InvalidToken / InvalidTokenType / TokenExpired: Token rejected
            IdentityInactiveOrMissing: Subject gone or deactivated
        """
        token = extract_bearer_token(bearer_value)
        claims = self._tokens.validate_access(token)

        async with self._uow_factory() as uow:
            identity = await uow.identities.get_by_id(claims.subject_id)

        if identity is None or not identity.active:
            raise IdentityInactiveOrMissing()

        return IdentityContext(
            identity_id=identity.id,
            email=identity.email,
            role=identity.role,
            tenant_id=identity.tenant_id,
        )

    async def optional_authenticate(self, bearer_value: Optional[str]) -> Optional[IdentityContext]:
        """Like ``authenticate`` but any authentication failure yields None."""
        try:
            return await self.authenticate(bearer_value)
        except AuthenticationError as e:
            logger.debug("Optional authentication failed", extra={"code": e.code})
            return None
