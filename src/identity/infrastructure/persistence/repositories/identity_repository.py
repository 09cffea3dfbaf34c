"""
Identity Repository Implementation
"""
from __future__ import annotations

from datetime import datetime
from typing import Optional, Sequence
from uuid import UUID

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from shared.infrastructure.database.sqlalchemy_repository import SQLAlchemyRepository
from identity.domain.entities.identity import Identity, normalize_email
from identity.domain.value_objects.role import Role
from identity.infrastructure.persistence.models.identity_model import IdentityModel


class IdentityRepository(SQLAlchemyRepository[Identity, IdentityModel]):
    """Identity repository implementation."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(
            session=session,
            model_class=IdentityModel,
            entity_class=Identity,
        )

    def _to_entity(self, model: IdentityModel) -> Identity:
        return Identity(
            id=model.id,
            email=model.email,
            name=model.name,
            role=Role(model.role),
            tenant_id=model.tenant_id,
            password_hash=model.password_hash,
            last_login_at=model.last_login_at,
            active=model.active,
            created_by=model.created_by,
            updated_by=model.updated_by,
            deactivated_at=model.deactivated_at,
            deactivated_by=model.deactivated_by,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    def _to_model(self, entity: Identity) -> IdentityModel:
        return IdentityModel(
            id=entity.id,
            email=entity.email,
            name=entity.name,
            role=entity.role.value,
            tenant_id=entity.tenant_id,
            password_hash=entity.password_hash,
            last_login_at=entity.last_login_at,
            active=entity.active,
            created_by=entity.created_by,
            updated_by=entity.updated_by,
            deactivated_at=entity.deactivated_at,
            deactivated_by=entity.deactivated_by,
            created_at=entity.created_at,
            updated_at=entity.updated_at,
        )

    async def get_by_email(self, email: str) -> Optional[Identity]:
        stmt = select(IdentityModel).where(IdentityModel.email == normalize_email(email))
        result = await self.session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def list_by_tenant(
        self,
        tenant_id: UUID,
        include_inactive: bool = True,
    ) -> Sequence[Identity]:
        stmt = select(IdentityModel).where(IdentityModel.tenant_id == tenant_id)
        if not include_inactive:
            stmt = stmt.where(IdentityModel.active.is_(True))
        stmt = stmt.order_by(IdentityModel.name)

        result = await self.session.execute(stmt)
        return [self._to_entity(model) for model in result.scalars().all()]

    async def deactivate_tenant_members(
        self,
        tenant_id: UUID,
        actor_id: Optional[UUID],
        now: datetime,
    ) -> Sequence[UUID]:
        """
        Deactivate every active member of a tenant in one UPDATE .. RETURNING,
        so the returned ids are exactly the rows that changed.

        Returns:
            Ids of the identities that were deactivated
        """
        stmt = (
            update(IdentityModel)
            .where(IdentityModel.tenant_id == tenant_id, IdentityModel.active.is_(True))
            .values(
                active=False,
                deactivated_at=now,
                deactivated_by=actor_id,
                updated_by=actor_id,
                updated_at=now,
            )
            .returning(IdentityModel.id)
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def list_all(self, role: Optional[Role] = None) -> Sequence[Identity]:
        if role is not None:
            return await self.find_all(order_by="name", role=role.value)
        return await self.find_all(order_by="name")
