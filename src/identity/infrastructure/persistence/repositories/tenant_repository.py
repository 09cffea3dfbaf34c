"""
Tenant Repository Implementation
"""
from __future__ import annotations

from typing import Optional, Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from shared.infrastructure.database.sqlalchemy_repository import SQLAlchemyRepository
from identity.domain.entities.tenant import Tenant
from identity.infrastructure.persistence.models.tenant_model import TenantModel


class TenantRepository(SQLAlchemyRepository[Tenant, TenantModel]):
    """Tenant repository implementation."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session=session, model_class=TenantModel, entity_class=Tenant)

    def _to_entity(self, model: TenantModel) -> Tenant:
        return Tenant(
            id=model.id,
            name=model.name,
            external_id=model.external_id,
            active=model.active,
            created_by=model.created_by,
            updated_by=model.updated_by,
            deactivated_at=model.deactivated_at,
            deactivated_by=model.deactivated_by,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    def _to_model(self, entity: Tenant) -> TenantModel:
        return TenantModel(
            id=entity.id,
            name=entity.name,
            external_id=entity.external_id,
            active=entity.active,
            created_by=entity.created_by,
            updated_by=entity.updated_by,
            deactivated_at=entity.deactivated_at,
            deactivated_by=entity.deactivated_by,
            created_at=entity.created_at,
            updated_at=entity.updated_at,
        )

    async def get_by_external_id(self, external_id: str) -> Optional[Tenant]:
        stmt = select(TenantModel).where(TenantModel.external_id == external_id.strip())
        result = await self.session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def list_all(self) -> Sequence[Tenant]:
        return await self.find_all(order_by="name")
