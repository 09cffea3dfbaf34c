# src/identity/application/services/tenant_service.py
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional, Sequence
from uuid import UUID

from shared.domain.clock import Clock, utcnow
from shared.infrastructure.observability.logger import get_logger
from identity.domain.entities.tenant import Tenant
from identity.domain.entities.tenant_license import TenantLicense
from identity.domain.errors import (
    ApplicationNotFound,
    ExternalIdAlreadyExists,
    LicenseNotFound,
    TenantNotFound,
)
from identity.domain.protocols.directory_unit_of_work_protocol import (
    DirectoryUnitOfWorkFactory,
    IDirectoryUnitOfWork,
)
from identity.domain.services.authorization_policy import (
    Action,
    authorize_action,
    ensure_tenant_scope,
)
from identity.domain.value_objects.identity_context import IdentityContext

logger = get_logger(__name__)


@dataclass
class TenantService:
    """
    UoW-backed application service for tenant lifecycle and licensing.

    Deactivating a tenant deactivates every member and revokes their refresh
    tokens in one transaction; licenses are left as they are. Reactivating a
    tenant touches the tenant only.
    """
    uow_factory: DirectoryUnitOfWorkFactory
    clock: Clock = field(default=utcnow)

    # ------------ Queries -----------------------------------------------------
    async def list_all(self, actor: IdentityContext) -> Sequence[Tenant]:
        authorize_action(actor, Action.MANAGE_PLATFORM)
        async with self.uow_factory() as uow:
            return await uow.tenants.list_all()

    async def get(self, actor: IdentityContext, tenant_id: UUID) -> Tenant:
        ensure_tenant_scope(actor, tenant_id)
        async with self.uow_factory() as uow:
            return await self._require(uow, tenant_id)

    async def list_licenses(self, actor: IdentityContext, tenant_id: UUID) -> Sequence[TenantLicense]:
        authorize_action(actor, Action.MANAGE_TENANT_MEMBERS)
        ensure_tenant_scope(actor, tenant_id)
        async with self.uow_factory() as uow:
            await self._require(uow, tenant_id)
            return await uow.licenses.list_for_tenant(tenant_id)

    # ------------ Commands ----------------------------------------------------
    async def create(self, actor: IdentityContext, name: str, external_id: str) -> Tenant:
        authorize_action(actor, Action.MANAGE_PLATFORM)

        now = self.clock()
        tenant = Tenant(
            name=name.strip(),
            external_id=external_id,
            created_by=actor.identity_id,
            updated_by=actor.identity_id,
            created_at=now,
        )

        async with self.uow_factory() as uow:
            if await uow.tenants.get_by_external_id(tenant.external_id) is not None:
                raise ExternalIdAlreadyExists(details={"external_id": tenant.external_id})
            tenant = await uow.tenants.add(tenant)
            await uow.commit()

        logger.info("Tenant created", extra={"actor_id": str(actor.identity_id), "tenant_id": str(tenant.id)})
        return tenant

    async def rename(self, actor: IdentityContext, tenant_id: UUID, name: str) -> Tenant:
        authorize_action(actor, Action.MANAGE_PLATFORM)
        async with self.uow_factory() as uow:
            tenant = await self._require(uow, tenant_id)
            tenant.name = name.strip()
            tenant.touch(actor.identity_id, self.clock())
            tenant = await uow.tenants.update(tenant)
            await uow.commit()
        return tenant

    async def deactivate(self, actor: IdentityContext, tenant_id: UUID) -> Tenant:
        """Deactivate the tenant, every member, and every member's refresh tokens."""
        authorize_action(actor, Action.MANAGE_PLATFORM)
        now = self.clock()

        async with self.uow_factory() as uow:
            tenant = await self._require(uow, tenant_id)
            tenant.deactivate(actor.identity_id, now)
            tenant = await uow.tenants.update(tenant)

            member_ids = await uow.identities.deactivate_tenant_members(tenant_id, actor.identity_id, now)
            revoked = await uow.refresh_tokens.revoke_all_for_identities(member_ids, now)
            await uow.commit()

        logger.info(
            "Tenant deactivated",
            extra={
                "actor_id": str(actor.identity_id),
                "tenant_id": str(tenant_id),
                "members": len(member_ids),
                "revoked_tokens": revoked,
            },
        )
        return tenant

    async def reactivate(self, actor: IdentityContext, tenant_id: UUID) -> Tenant:
        authorize_action(actor, Action.MANAGE_PLATFORM)
        async with self.uow_factory() as uow:
            tenant = await self._require(uow, tenant_id)
            tenant.reactivate(actor.identity_id, self.clock())
            tenant = await uow.tenants.update(tenant)
            await uow.commit()

        logger.info("Tenant reactivated", extra={"actor_id": str(actor.identity_id), "tenant_id": str(tenant_id)})
        return tenant

    async def link_license(
        self,
        actor: IdentityContext,
        tenant_id: UUID,
        application_id: UUID,
        expires_at: Optional[datetime] = None,
    ) -> TenantLicense:
        """Create the license, or reactivate an existing one with the new expiry."""
        authorize_action(actor, Action.MANAGE_PLATFORM)
        now = self.clock()

        async with self.uow_factory() as uow:
            await self._require(uow, tenant_id)
            application = await uow.applications.get_by_id(application_id)
            if application is None:
                raise ApplicationNotFound(details={"application_id": str(application_id)})

            license = await uow.licenses.get(tenant_id, application_id)
            if license is None:
                license = await uow.licenses.add(
                    TenantLicense(
                        tenant_id=tenant_id,
                        application_id=application_id,
                        expires_at=expires_at,
                        created_by=actor.identity_id,
                        updated_by=actor.identity_id,
                        created_at=now,
                    )
                )
            else:
                license.renew(expires_at, actor.identity_id, now)
                license = await uow.licenses.update(license)
            await uow.commit()

        logger.info(
            "License linked",
            extra={"tenant_id": str(tenant_id), "application_id": str(application_id)},
        )
        return license

    async def unlink_license(self, actor: IdentityContext, tenant_id: UUID, application_id: UUID) -> TenantLicense:
        authorize_action(actor, Action.MANAGE_PLATFORM)

        async with self.uow_factory() as uow:
            license = await uow.licenses.get(tenant_id, application_id)
            if license is None or not license.active:
                raise LicenseNotFound(
                    details={"tenant_id": str(tenant_id), "application_id": str(application_id)}
                )
            license.deactivate(actor.identity_id, self.clock())
            license = await uow.licenses.update(license)
            await uow.commit()

        logger.info(
            "License unlinked",
            extra={"tenant_id": str(tenant_id), "application_id": str(application_id)},
        )
        return license

    # ------------ Helpers -----------------------------------------------------
    @staticmethod
    async def _require(uow: IDirectoryUnitOfWork, tenant_id: UUID) -> Tenant:
        tenant = await uow.tenants.get_by_id(tenant_id)
        if tenant is None:
            raise TenantNotFound(details={"tenant_id": str(tenant_id)})
        return tenant
