"""
Identity Administration Service
Member creation and lifecycle for platform and tenant administrators
"""
from __future__ import annotations

from typing import Optional, Sequence
from uuid import UUID

from shared.domain.clock import Clock, utcnow
from shared.infrastructure.observability.logger import get_logger
from identity.domain.entities.identity import Identity, ensure_password_length
from identity.domain.errors import EmailAlreadyExists, IdentityNotFound, TenantNotFound
from identity.domain.protocols.directory_unit_of_work_protocol import (
    DirectoryUnitOfWorkFactory,
    IDirectoryUnitOfWork,
)
from identity.domain.protocols.password_hasher_protocol import IPasswordHasher
from identity.domain.services.authorization_policy import (
    Action,
    authorize_action,
    ensure_tenant_scope,
    guard_member_deactivation,
    guard_member_management,
    guard_platform_deactivation,
)
from identity.domain.value_objects.identity_context import IdentityContext
from identity.domain.value_objects.role import Role

logger = get_logger(__name__)


class IdentityAdminService:
    """
    Create, deactivate and reactivate identities.

    Two deactivation paths exist:
    - ``deactivate``: platform path, SUPER_ADMIN only
    - ``deactivate_member``: tenant path, never targets a TENANT_ADMIN

    Both revoke every refresh token of the target in the same transaction.
    Reactivation does not restore revoked tokens.
    """

    def __init__(
        self,
        uow_factory: DirectoryUnitOfWorkFactory,
        password_hasher: IPasswordHasher,
        clock: Clock = utcnow,
        password_min_length: int = 8,
    ) -> None:
        self._uow_factory = uow_factory
        self._hasher = password_hasher
        self._clock = clock
        self._password_min_length = password_min_length

    async def create(
        self,
        actor: IdentityContext,
        email: str,
        name: str,
        password: str,
        role: Role,
        tenant_id: Optional[UUID] = None,
    ) -> Identity:
        """
        Create an identity.

        A TENANT_ADMIN creating without a tenant creates inside its own.

        Raises:
            Forbidden / TenantScopeViolation / CannotManageRole: Guard failures
            InvalidRoleTenantCombination: SUPER_ADMIN with a tenant or vice versa
            TenantNotFound: Unknown or inactive tenant
            EmailAlreadyExists: Email taken
        """
        if tenant_id is None and role.requires_tenant() and not actor.is_super_admin:
            tenant_id = actor.tenant_id

        guard_member_management(actor, tenant_id, role)
        ensure_password_length(password, self._password_min_length)

        now = self._clock()
        identity = Identity(
            email=email,
            name=name.strip(),
            role=role,
            tenant_id=tenant_id,
            password_hash=self._hasher.hash(password),
            created_by=actor.identity_id,
            updated_by=actor.identity_id,
            created_at=now,
        )

        async with self._uow_factory() as uow:
            if tenant_id is not None:
                tenant = await uow.tenants.get_by_id(tenant_id)
                if tenant is None or not tenant.active:
                    raise TenantNotFound(details={"tenant_id": str(tenant_id)})

            if await uow.identities.get_by_email(identity.email) is not None:
                raise EmailAlreadyExists(details={"email": identity.email})

            identity = await uow.identities.add(identity)
            await uow.commit()

        logger.info(
            "Identity created",
            extra={
                "actor_id": str(actor.identity_id),
                "identity_id": str(identity.id),
                "role": role.value,
            },
        )
        return identity

    async def get(self, actor: IdentityContext, identity_id: UUID) -> Identity:
        authorize_action(actor, Action.MANAGE_TENANT_MEMBERS)
        async with self._uow_factory() as uow:
            target = await self._require(uow, identity_id)
        ensure_tenant_scope(actor, target.tenant_id)
        return target

    async def list_members(self, actor: IdentityContext, tenant_id: Optional[UUID] = None) -> Sequence[Identity]:
        """Members of a tenant (the actor's own by default), active or not."""
        authorize_action(actor, Action.MANAGE_TENANT_MEMBERS)
        tenant_id = tenant_id or actor.tenant_id
        if tenant_id is None:
            raise TenantNotFound()
        ensure_tenant_scope(actor, tenant_id)

        async with self._uow_factory() as uow:
            return await uow.identities.list_by_tenant(tenant_id)

    async def list_all(self, actor: IdentityContext, role: Optional[Role] = None) -> Sequence[Identity]:
        """Platform-wide listing."""
        authorize_action(actor, Action.MANAGE_PLATFORM)
        async with self._uow_factory() as uow:
            return await uow.identities.list_all(role=role)

    async def update(
        self,
        actor: IdentityContext,
        identity_id: UUID,
        name: Optional[str] = None,
        email: Optional[str] = None,
    ) -> Identity:
        """
        Change another identity's name and/or email.

        Raises:
            IdentityNotFound: Unknown target
            Forbidden / TenantScopeViolation / CannotManageRole: Guard failures
            EmailAlreadyExists: Email taken by a different identity
        """
        async with self._uow_factory() as uow:
            target = await self._require(uow, identity_id)
            guard_member_management(actor, target.tenant_id, target.role)

            if email is not None:
                holder = await uow.identities.get_by_email(email)
                if holder is not None and holder.id != target.id:
                    raise EmailAlreadyExists(details={"email": holder.email})

            target.update_details(actor.identity_id, self._clock(), name=name, email=email)
            target = await uow.identities.update(target)
            await uow.commit()

        logger.info(
            "Identity updated",
            extra={"actor_id": str(actor.identity_id), "identity_id": str(target.id)},
        )
        return target

    async def deactivate(self, actor: IdentityContext, identity_id: UUID) -> Identity:
        """Platform deactivation path."""
        guard_platform_deactivation(actor, identity_id)

        async with self._uow_factory() as uow:
            target = await self._require(uow, identity_id)
            target = await self._deactivate(uow, actor, target)
            await uow.commit()

        return target

    async def deactivate_member(self, actor: IdentityContext, identity_id: UUID) -> Identity:
        """
        Tenant deactivation path.

        Raises:
            TenantScopeViolation: Target in another tenant
            CannotDeactivateSelf: Target is the actor
            CannotDeactivateAdmin: Target is a TENANT_ADMIN
            CannotManageRole / Forbidden: Actor cannot manage the target role
        """
        async with self._uow_factory() as uow:
            target = await self._require(uow, identity_id)
            guard_member_deactivation(actor, target.id, target.tenant_id, target.role)
            target = await self._deactivate(uow, actor, target)
            await uow.commit()

        return target

    async def reactivate(self, actor: IdentityContext, identity_id: UUID) -> Identity:
        async with self._uow_factory() as uow:
            target = await self._require(uow, identity_id)
            guard_member_management(actor, target.tenant_id, target.role)

            if target.tenant_id is not None:
                tenant = await uow.tenants.get_by_id(target.tenant_id)
                if tenant is None or not tenant.active:
                    raise TenantNotFound(details={"tenant_id": str(target.tenant_id)})

            target.reactivate(actor.identity_id, self._clock())
            target = await uow.identities.update(target)
            await uow.commit()

        logger.info(
            "Identity reactivated",
            extra={"actor_id": str(actor.identity_id), "identity_id": str(target.id)},
        )
        return target

    async def _require(self, uow: IDirectoryUnitOfWork, identity_id: UUID) -> Identity:
        target = await uow.identities.get_by_id(identity_id)
        if target is None:
            raise IdentityNotFound(details={"identity_id": str(identity_id)})
        return target

    async def _deactivate(self, uow: IDirectoryUnitOfWork, actor: IdentityContext, target: Identity) -> Identity:
        now = self._clock()
        target.deactivate(actor.identity_id, now)
        target = await uow.identities.update(target)
        revoked = await uow.refresh_tokens.revoke_all_for_identity(target.id, now)

        logger.info(
            "Identity deactivated",
            extra={
                "actor_id": str(actor.identity_id),
                "identity_id": str(target.id),
                "revoked_tokens": revoked,
            },
        )
        return target
