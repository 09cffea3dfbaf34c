from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Optional
from uuid import UUID

import pytest
from httpx import ASGITransport, AsyncClient

from shared.config import Settings
from shared.infrastructure.database import DatabaseSessionFactory
from identity.domain.entities.application import Application
from identity.domain.entities.identity import Identity
from identity.domain.entities.tenant import Tenant
from identity.domain.entities.tenant_license import TenantLicense
from identity.domain.value_objects.identity_context import IdentityContext
from identity.domain.value_objects.role import Role
from identity.infrastructure.adapters.directory_unit_of_work import DirectoryUnitOfWork
from identity.infrastructure.adapters.password_service import PasswordService
from identity.infrastructure.factories import build_identity_services
from identity.infrastructure.persistence import models  # noqa: F401

PASSWORD = "Passw0rd!"
START = datetime(2030, 1, 1, 12, 0, 0, tzinfo=timezone.utc)


class FixedClock:
    """Controllable clock; always on whole seconds."""

    def __init__(self, now: datetime = START) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> datetime:
        self.now = self.now + timedelta(**kwargs)
        return self.now


class Seeder:
    """Writes directory rows straight through the unit of work."""

    def __init__(self, session_factory, hasher: PasswordService, clock: FixedClock) -> None:
        self._session_factory = session_factory
        self._hasher = hasher
        self._clock = clock

    def _uow(self) -> DirectoryUnitOfWork:
        return DirectoryUnitOfWork(self._session_factory)

    async def tenant(self, name: str = "Acme", external_id: Optional[str] = None) -> Tenant:
        async with self._uow() as uow:
            tenant = await uow.tenants.add(
                Tenant(name=name, external_id=external_id or f"REG-{name}", created_at=self._clock())
            )
            await uow.commit()
        return tenant

    async def application(self, name: str = "Billing", url: str = "https://billing.acme.com") -> Application:
        async with self._uow() as uow:
            application = await uow.applications.add(Application(name=name, url=url, created_at=self._clock()))
            await uow.commit()
        return application

    async def license(
        self,
        tenant: Tenant,
        application: Application,
        expires_at: Optional[datetime] = None,
        active: bool = True,
    ) -> TenantLicense:
        async with self._uow() as uow:
            license = await uow.licenses.add(
                TenantLicense(
                    tenant_id=tenant.id,
                    application_id=application.id,
                    expires_at=expires_at,
                    active=active,
                    created_at=self._clock(),
                )
            )
            await uow.commit()
        return license

    async def identity(
        self,
        email: str,
        role: Role,
        tenant: Optional[Tenant] = None,
        name: Optional[str] = None,
        password: str = PASSWORD,
        active: bool = True,
    ) -> Identity:
        async with self._uow() as uow:
            identity = await uow.identities.add(
                Identity(
                    email=email,
                    name=name or email.split("@")[0],
                    role=role,
                    tenant_id=tenant.id if tenant else None,
                    password_hash=self._hasher.hash(password),
                    active=active,
                    created_at=self._clock(),
                )
            )
            await uow.commit()
        return identity

    async def assign(self, identity: Identity, *applications: Application, app_role: Role = Role.TENANT_OPERATOR) -> None:
        async with self._uow() as uow:
            await uow.assignments.replace_for_identity(
                identity.id,
                [(a.id, app_role) for a in applications],
                self._clock(),
            )
            await uow.commit()

    async def reload_identity(self, identity_id: UUID) -> Optional[Identity]:
        async with self._uow() as uow:
            return await uow.identities.get_by_id(identity_id)


def context_for(identity: Identity) -> IdentityContext:
    return IdentityContext(
        identity_id=identity.id,
        email=identity.email,
        role=identity.role,
        tenant_id=identity.tenant_id,
    )


def bearer(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def settings() -> Settings:
    return Settings(
        DATABASE_URL="sqlite+aiosqlite://",
        JWT_SECRET="test-secret-key-with-enough-length-1234",
        JSON_LOGS=False,
        LOG_LEVEL="WARNING",
        CREATE_TABLES_ON_STARTUP=True,
    )


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock()


@pytest.fixture
def hasher() -> PasswordService:
    # cheap parameters; production defaults are far slower
    return PasswordService(time_cost=1, memory_cost=8, parallelism=1)


@pytest.fixture
async def db(settings):
    factory = DatabaseSessionFactory(database_url=settings.DATABASE_URL)
    await factory.create_tables()
    yield factory
    await factory.dispose()


@pytest.fixture
def services(settings, db, clock, hasher):
    return build_identity_services(settings, db.session_factory, clock=clock, password_hasher=hasher)


@pytest.fixture
def seed(db, hasher, clock) -> Seeder:
    return Seeder(db.session_factory, hasher, clock)


@pytest.fixture
async def app(settings, clock, hasher):
    from identity.main import create_app

    application = create_app(settings, clock=clock, password_hasher=hasher)
    async with application.router.lifespan_context(application):
        yield application


@pytest.fixture
async def client(app):
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac


@pytest.fixture
def app_seed(app, hasher, clock) -> Seeder:
    return Seeder(app.state.db.session_factory, hasher, clock)
