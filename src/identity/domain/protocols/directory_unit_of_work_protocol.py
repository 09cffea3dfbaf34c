"""
Identity Directory Unit of Work Protocol (Interface)
"""
from __future__ import annotations

from typing import Callable, Protocol

from identity.domain.protocols.access_event_repository_protocol import IAccessEventRepository
from identity.domain.protocols.application_repository_protocol import IApplicationRepository
from identity.domain.protocols.assignment_repository_protocol import IAssignmentRepository
from identity.domain.protocols.identity_repository_protocol import IIdentityRepository
from identity.domain.protocols.license_repository_protocol import ILicenseRepository
from identity.domain.protocols.refresh_token_repository_protocol import IRefreshTokenRepository
from identity.domain.protocols.tenant_repository_protocol import ITenantRepository


class IDirectoryUnitOfWork(Protocol):
    """
    Transactional access to the identity directory.

    Usage:
        async with uow_factory() as uow:
            identity = await uow.identities.get_by_id(identity_id)
            ...
            await uow.commit()
    """

    identities: IIdentityRepository
    tenants: ITenantRepository
    applications: IApplicationRepository
    licenses: ILicenseRepository
    assignments: IAssignmentRepository
    refresh_tokens: IRefreshTokenRepository
    access_events: IAccessEventRepository

    async def __aenter__(self) -> IDirectoryUnitOfWork:
        ...

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        ...

    async def commit(self) -> None:
        ...

    async def rollback(self) -> None:
        ...


DirectoryUnitOfWorkFactory = Callable[[], IDirectoryUnitOfWork]
