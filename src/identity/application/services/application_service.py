# src/identity/application/services/application_service.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Sequence
from uuid import UUID

from shared.domain.clock import Clock, utcnow
from shared.infrastructure.observability.logger import get_logger
from identity.domain.entities.application import Application
from identity.domain.errors import ApplicationNotFound
from identity.domain.protocols.directory_unit_of_work_protocol import (
    DirectoryUnitOfWorkFactory,
    IDirectoryUnitOfWork,
)
from identity.domain.services.authorization_policy import Action, authorize_action
from identity.domain.value_objects.identity_context import IdentityContext

logger = get_logger(__name__)


@dataclass
class ApplicationService:
    """
    Platform application catalogue. SUPER_ADMIN only.

    Deactivating an application deactivates every license referencing it, so
    it drops out of every identity's available set at once.
    """
    uow_factory: DirectoryUnitOfWorkFactory
    clock: Clock = field(default=utcnow)

    async def list_all(self, actor: IdentityContext, active_only: bool = False) -> Sequence[Application]:
        authorize_action(actor, Action.MANAGE_PLATFORM)
        async with self.uow_factory() as uow:
            return await uow.applications.list_all(active_only=active_only)

    async def get(self, actor: IdentityContext, application_id: UUID) -> Application:
        authorize_action(actor, Action.MANAGE_PLATFORM)
        async with self.uow_factory() as uow:
            return await self._require(uow, application_id)

    async def create(
        self,
        actor: IdentityContext,
        name: str,
        url: str,
        description: Optional[str] = None,
    ) -> Application:
        authorize_action(actor, Action.MANAGE_PLATFORM)

        application = Application(
            name=name.strip(),
            url=url,
            description=description,
            created_by=actor.identity_id,
            updated_by=actor.identity_id,
            created_at=self.clock(),
        )
        async with self.uow_factory() as uow:
            application = await uow.applications.add(application)
            await uow.commit()

        logger.info(
            "Application created",
            extra={"actor_id": str(actor.identity_id), "application_id": str(application.id)},
        )
        return application

    async def update(
        self,
        actor: IdentityContext,
        application_id: UUID,
        name: Optional[str] = None,
        url: Optional[str] = None,
        description: Optional[str] = None,
    ) -> Application:
        authorize_action(actor, Action.MANAGE_PLATFORM)
        async with self.uow_factory() as uow:
            application = await self._require(uow, application_id)
            if name is not None:
                application.name = name.strip()
            if url is not None:
                application.url = url
            if description is not None:
                application.description = description
            application.touch(actor.identity_id, self.clock())
            application = await uow.applications.update(application)
            await uow.commit()
        return application

    async def deactivate(self, actor: IdentityContext, application_id: UUID) -> Application:
        authorize_action(actor, Action.MANAGE_PLATFORM)
        now = self.clock()

        async with self.uow_factory() as uow:
            application = await self._require(uow, application_id)
            application.deactivate(actor.identity_id, now)
            application = await uow.applications.update(application)
            licenses = await uow.licenses.deactivate_for_application(application_id, actor.identity_id, now)
            await uow.commit()

        logger.info(
            "Application deactivated",
            extra={
                "actor_id": str(actor.identity_id),
                "application_id": str(application_id),
                "licenses": licenses,
            },
        )
        return application

    async def reactivate(self, actor: IdentityContext, application_id: UUID) -> Application:
        """Licenses stay deactivated; they are re-linked per tenant."""
        authorize_action(actor, Action.MANAGE_PLATFORM)
        async with self.uow_factory() as uow:
            application = await self._require(uow, application_id)
            application.reactivate(actor.identity_id, self.clock())
            application = await uow.applications.update(application)
            await uow.commit()
        return application

    async def regenerate_api_key(self, actor: IdentityContext, application_id: UUID) -> Application:
        authorize_action(actor, Action.MANAGE_PLATFORM)
        async with self.uow_factory() as uow:
            application = await self._require(uow, application_id)
            application.regenerate_api_key(actor.identity_id, self.clock())
            application = await uow.applications.update(application)
            await uow.commit()

        logger.info("Application API key regenerated", extra={"application_id": str(application_id)})
        return application

    @staticmethod
    async def _require(uow: IDirectoryUnitOfWork, application_id: UUID) -> Application:
        application = await uow.applications.get_by_id(application_id)
        if application is None:
            raise ApplicationNotFound(details={"application_id": str(application_id)})
        return application
