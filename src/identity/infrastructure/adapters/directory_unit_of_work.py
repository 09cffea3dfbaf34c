"""
Directory Unit of Work
Coordinates identity directory repositories within one transaction
"""
from __future__ import annotations

from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from shared.infrastructure.database.sqlalchemy_unit_of_work import SQLAlchemyUnitOfWork
from identity.infrastructure.persistence.repositories.access_event_repository import (
    AccessEventRepository,
)
from identity.infrastructure.persistence.repositories.application_repository import (
    ApplicationRepository,
)
from identity.infrastructure.persistence.repositories.assignment_repository import (
    AssignmentRepository,
)
from identity.infrastructure.persistence.repositories.identity_repository import (
    IdentityRepository,
)
from identity.infrastructure.persistence.repositories.license_repository import (
    LicenseRepository,
)
from identity.infrastructure.persistence.repositories.refresh_token_repository import (
    RefreshTokenRepository,
)
from identity.infrastructure.persistence.repositories.tenant_repository import (
    TenantRepository,
)


class DirectoryUnitOfWork(SQLAlchemyUnitOfWork):
    """
    Unit of Work for the identity directory.

    Repositories are created lazily and bound to the UoW's session, so
    everything touched inside one ``async with`` block commits or rolls back
    together.

    Usage:
        async with DirectoryUnitOfWork(session_factory) as uow:
            identity = await uow.identities.get_by_id(identity_id)
            await uow.refresh_tokens.revoke_all_for_identity(identity.id, now)
            await uow.commit()
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        super().__init__(session_factory)
        self._on_close()

    def _on_close(self) -> None:
        self._identities: Optional[IdentityRepository] = None
        self._tenants: Optional[TenantRepository] = None
        self._applications: Optional[ApplicationRepository] = None
        self._licenses: Optional[LicenseRepository] = None
        self._assignments: Optional[AssignmentRepository] = None
        self._refresh_tokens: Optional[RefreshTokenRepository] = None
        self._access_events: Optional[AccessEventRepository] = None

    async def __aenter__(self) -> "DirectoryUnitOfWork":
        await super().__aenter__()
        return self

    # Repository properties
    @property
    def identities(self) -> IdentityRepository:
        if self._identities is None:
            self._identities = IdentityRepository(self.session)
        return self._identities

    @property
    def tenants(self) -> TenantRepository:
        if self._tenants is None:
            self._tenants = TenantRepository(self.session)
        return self._tenants

    @property
    def applications(self) -> ApplicationRepository:
        if self._applications is None:
            self._applications = ApplicationRepository(self.session)
        return self._applications

    @property
    def licenses(self) -> LicenseRepository:
        if self._licenses is None:
            self._licenses = LicenseRepository(self.session)
        return self._licenses

    @property
    def assignments(self) -> AssignmentRepository:
        if self._assignments is None:
            self._assignments = AssignmentRepository(self.session)
        return self._assignments

    @property
    def refresh_tokens(self) -> RefreshTokenRepository:
        if self._refresh_tokens is None:
            self._refresh_tokens = RefreshTokenRepository(self.session)
        return self._refresh_tokens

    @property
    def access_events(self) -> AccessEventRepository:
        if self._access_events is None:
            self._access_events = AccessEventRepository(self.session)
        return self._access_events
