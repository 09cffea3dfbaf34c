"""
Application Repository Implementation
"""
from __future__ import annotations

from datetime import datetime
from typing import Optional, Sequence
from uuid import UUID

from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from shared.infrastructure.database.sqlalchemy_repository import SQLAlchemyRepository
from identity.domain.entities.application import Application
from identity.infrastructure.persistence.models.application_model import ApplicationModel
from identity.infrastructure.persistence.models.tenant_license_model import TenantLicenseModel


class ApplicationRepository(SQLAlchemyRepository[Application, ApplicationModel]):
    """Application repository implementation."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session=session, model_class=ApplicationModel, entity_class=Application)

    def _to_entity(self, model: ApplicationModel) -> Application:
        return Application(
            id=model.id,
            name=model.name,
            url=model.url,
            api_key=model.api_key,
            description=model.description,
            active=model.active,
            created_by=model.created_by,
            updated_by=model.updated_by,
            deactivated_at=model.deactivated_at,
            deactivated_by=model.deactivated_by,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    def _to_model(self, entity: Application) -> ApplicationModel:
        return ApplicationModel(
            id=entity.id,
            name=entity.name,
            url=entity.url,
            api_key=entity.api_key,
            description=entity.description,
            active=entity.active,
            created_by=entity.created_by,
            updated_by=entity.updated_by,
            deactivated_at=entity.deactivated_at,
            deactivated_by=entity.deactivated_by,
            created_at=entity.created_at,
            updated_at=entity.updated_at,
        )

    async def get_by_api_key(self, api_key: str) -> Optional[Application]:
        stmt = select(ApplicationModel).where(ApplicationModel.api_key == api_key)
        result = await self.session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def list_all(self, active_only: bool = False) -> Sequence[Application]:
        if active_only:
            return await self.find_all(order_by="name", active=True)
        return await self.find_all(order_by="name")

    async def list_licensed(
        self,
        tenant_id: UUID,
        now: datetime,
        application_ids: Optional[Sequence[UUID]] = None,
    ) -> Sequence[Application]:
        """
        Active applications with an active, unexpired license for the tenant.

        Args:
            tenant_id: Licensed tenant
            now: Reference time for license expiry
            application_ids: Optional restriction (e.g. an identity's assignments)

        Returns:
            Applications ordered by name
        """
        stmt = (
            select(ApplicationModel)
            .join(TenantLicenseModel, TenantLicenseModel.application_id == ApplicationModel.id)
            .where(
                TenantLicenseModel.tenant_id == tenant_id,
                TenantLicenseModel.active.is_(True),
                or_(TenantLicenseModel.expires_at.is_(None), TenantLicenseModel.expires_at > now),
                ApplicationModel.active.is_(True),
            )
            .order_by(ApplicationModel.name)
        )
        if application_ids is not None:
            if not application_ids:
                return []
            stmt = stmt.where(ApplicationModel.id.in_(list(application_ids)))

        result = await self.session.execute(stmt)
        return [self._to_entity(model) for model in result.scalars().all()]
