"""
TenantLicense Repository Implementation
"""
from __future__ import annotations

from datetime import datetime
from typing import Optional, Sequence
from uuid import UUID

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from shared.infrastructure.database.sqlalchemy_repository import SQLAlchemyRepository
from identity.domain.entities.tenant_license import TenantLicense
from identity.infrastructure.persistence.models.tenant_license_model import TenantLicenseModel


class LicenseRepository(SQLAlchemyRepository[TenantLicense, TenantLicenseModel]):
    """Tenant license repository implementation."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session=session, model_class=TenantLicenseModel, entity_class=TenantLicense)

    def _to_entity(self, model: TenantLicenseModel) -> TenantLicense:
        return TenantLicense(
            id=model.id,
            tenant_id=model.tenant_id,
            application_id=model.application_id,
            expires_at=model.expires_at,
            active=model.active,
            created_by=model.created_by,
            updated_by=model.updated_by,
            deactivated_at=model.deactivated_at,
            deactivated_by=model.deactivated_by,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    def _to_model(self, entity: TenantLicense) -> TenantLicenseModel:
        return TenantLicenseModel(
            id=entity.id,
            tenant_id=entity.tenant_id,
            application_id=entity.application_id,
            expires_at=entity.expires_at,
            active=entity.active,
            created_by=entity.created_by,
            updated_by=entity.updated_by,
            deactivated_at=entity.deactivated_at,
            deactivated_by=entity.deactivated_by,
            created_at=entity.created_at,
            updated_at=entity.updated_at,
        )

    async def get(self, tenant_id: UUID, application_id: UUID) -> Optional[TenantLicense]:
        stmt = select(TenantLicenseModel).where(
            TenantLicenseModel.tenant_id == tenant_id,
            TenantLicenseModel.application_id == application_id,
        )
        result = await self.session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def list_for_tenant(self, tenant_id: UUID) -> Sequence[TenantLicense]:
        return await self.find_all(order_by="created_at", tenant_id=tenant_id)

    async def deactivate_for_application(
        self,
        application_id: UUID,
        actor_id: Optional[UUID],
        now: datetime,
    ) -> int:
        stmt = (
            update(TenantLicenseModel)
            .where(
                TenantLicenseModel.application_id == application_id,
                TenantLicenseModel.active.is_(True),
            )
            .values(
                active=False,
                deactivated_at=now,
                deactivated_by=actor_id,
                updated_by=actor_id,
                updated_at=now,
            )
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        return result.rowcount
