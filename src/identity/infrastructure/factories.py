# src/identity/infrastructure/factories.py
"""
Composition root for the identity services.

Everything is built explicitly from an ``async_sessionmaker``; there is no
module-level connection or service singleton.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta
from typing import Callable

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from shared.config import Settings
from shared.domain.clock import Clock, utcnow
from identity.application.queries.audit_names import AuditNameProjection
from identity.application.services.application_service import ApplicationService
from identity.application.services.auth_service import AuthService
from identity.application.services.entitlement_resolver import EntitlementResolver
from identity.application.services.identity_admin_service import IdentityAdminService
from identity.application.services.session_gateway import SessionGateway
from identity.application.services.tenant_service import TenantService
from identity.application.services.token_service import TokenService
from identity.domain.protocols.password_hasher_protocol import IPasswordHasher
from identity.domain.services.token_policy import TokenPolicy
from identity.infrastructure.adapters.directory_unit_of_work import DirectoryUnitOfWork
from identity.infrastructure.adapters.jwt_service import JWTService
from identity.infrastructure.adapters.password_service import PasswordService


@dataclass(frozen=True)
class IdentityServices:
    """Everything the API layer needs, built once per application."""
    tokens: TokenService
    sessions: SessionGateway
    entitlements: EntitlementResolver
    auth: AuthService
    identities: IdentityAdminService
    tenants: TenantService
    applications: ApplicationService
    audit_names: AuditNameProjection


# ---------- UoW factory -------------------------------------------------------

def make_uow_factory(
    session_factory: async_sessionmaker[AsyncSession],
) -> Callable[[], DirectoryUnitOfWork]:
    """Returns a factory producing a fresh DirectoryUnitOfWork per use-case."""
    def _uow_factory() -> DirectoryUnitOfWork:
        return DirectoryUnitOfWork(session_factory)

    return _uow_factory


# ---------- Security adapters -------------------------------------------------

def make_token_policy(settings: Settings) -> TokenPolicy:
    return TokenPolicy(
        access_token_lifetime=timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES),
        refresh_token_lifetime=timedelta(days=settings.REFRESH_TOKEN_EXPIRE_DAYS),
    )


def make_jwt_service(settings: Settings) -> JWTService:
    return JWTService(
        secret_key=settings.JWT_SECRET,
        policy=make_token_policy(settings),
        algorithm=settings.JWT_ALGORITHM,
    )


# ---------- Services ----------------------------------------------------------

def build_identity_services(
    settings: Settings,
    session_factory: async_sessionmaker[AsyncSession],
    *,
    clock: Clock = utcnow,
    password_hasher: IPasswordHasher | None = None,
) -> IdentityServices:
    """
    Compose every identity service around one session factory.

    ``clock`` and ``password_hasher`` are overridable for tests.
    """
    uow_factory = make_uow_factory(session_factory)
    hasher = password_hasher or PasswordService()

    tokens = TokenService(uow_factory, make_jwt_service(settings), clock=clock)

    return IdentityServices(
        tokens=tokens,
        sessions=SessionGateway(uow_factory, tokens),
        entitlements=EntitlementResolver(uow_factory, clock=clock),
        auth=AuthService(
            uow_factory,
            tokens,
            hasher,
            clock=clock,
            password_min_length=settings.PASSWORD_MIN_LENGTH,
        ),
        identities=IdentityAdminService(
            uow_factory,
            hasher,
            clock=clock,
            password_min_length=settings.PASSWORD_MIN_LENGTH,
        ),
        tenants=TenantService(uow_factory, clock=clock),
        applications=ApplicationService(uow_factory, clock=clock),
        audit_names=AuditNameProjection(uow_factory),
    )
