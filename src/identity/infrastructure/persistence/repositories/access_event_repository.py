"""
AccessEvent Repository Implementation
"""
from __future__ import annotations

from typing import Optional, Sequence
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from shared.infrastructure.database.sqlalchemy_repository import SQLAlchemyRepository
from identity.domain.entities.access_event import AccessAction, AccessEvent
from identity.infrastructure.persistence.models.access_event_model import AccessEventModel


class AccessEventRepository(SQLAlchemyRepository[AccessEvent, AccessEventModel]):
    """Append-only access audit trail."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session=session, model_class=AccessEventModel, entity_class=AccessEvent)

    def _to_entity(self, model: AccessEventModel) -> AccessEvent:
        return AccessEvent(
            id=model.id,
            identity_id=model.identity_id,
            action=AccessAction(model.action),
            application_id=model.application_id,
            ip_address=model.ip_address,
            user_agent=model.user_agent,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    def _to_model(self, entity: AccessEvent) -> AccessEventModel:
        return AccessEventModel(
            id=entity.id,
            identity_id=entity.identity_id,
            action=entity.action.value,
            application_id=entity.application_id,
            ip_address=entity.ip_address,
            user_agent=entity.user_agent,
            created_at=entity.created_at,
            updated_at=entity.updated_at,
        )

    async def list_for_identity(
        self,
        identity_id: UUID,
        action: Optional[AccessAction] = None,
    ) -> Sequence[AccessEvent]:
        stmt = select(AccessEventModel).where(AccessEventModel.identity_id == identity_id)
        if action is not None:
            stmt = stmt.where(AccessEventModel.action == action.value)
        stmt = stmt.order_by(AccessEventModel.created_at)

        result = await self.session.execute(stmt)
        return [self._to_entity(model) for model in result.scalars().all()]
