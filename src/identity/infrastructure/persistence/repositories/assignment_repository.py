"""
UserAssignment Repository Implementation
"""
from __future__ import annotations

from datetime import datetime
from typing import Optional, Sequence
from uuid import UUID

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from shared.infrastructure.database.sqlalchemy_repository import SQLAlchemyRepository
from identity.domain.entities.user_assignment import UserAssignment
from identity.domain.value_objects.role import Role
from identity.infrastructure.persistence.models.user_assignment_model import UserAssignmentModel


class AssignmentRepository(SQLAlchemyRepository[UserAssignment, UserAssignmentModel]):
    """User assignment repository implementation."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session=session, model_class=UserAssignmentModel, entity_class=UserAssignment)

    def _to_entity(self, model: UserAssignmentModel) -> UserAssignment:
        return UserAssignment(
            id=model.id,
            identity_id=model.identity_id,
            application_id=model.application_id,
            app_role=Role(model.app_role),
            active=model.active,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    def _to_model(self, entity: UserAssignment) -> UserAssignmentModel:
        return UserAssignmentModel(
            id=entity.id,
            identity_id=entity.identity_id,
            application_id=entity.application_id,
            app_role=entity.app_role.value,
            active=entity.active,
            created_at=entity.created_at,
            updated_at=entity.updated_at,
        )

    async def get(self, identity_id: UUID, application_id: UUID) -> Optional[UserAssignment]:
        stmt = select(UserAssignmentModel).where(
            UserAssignmentModel.identity_id == identity_id,
            UserAssignmentModel.application_id == application_id,
        )
        result = await self.session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def list_for_identity(
        self,
        identity_id: UUID,
        active_only: bool = True,
    ) -> Sequence[UserAssignment]:
        stmt = select(UserAssignmentModel).where(UserAssignmentModel.identity_id == identity_id)
        if active_only:
            stmt = stmt.where(UserAssignmentModel.active.is_(True))
        stmt = stmt.order_by(UserAssignmentModel.created_at)

        result = await self.session.execute(stmt)
        return [self._to_entity(model) for model in result.scalars().all()]

    async def replace_for_identity(
        self,
        identity_id: UUID,
        desired: Sequence[tuple[UUID, Role]],
        now: datetime,
    ) -> Sequence[UserAssignment]:
        """
        Make ``desired`` the identity's complete active assignment set.

        Rows are never deleted: assignments missing from ``desired`` are
        deactivated, existing ones are reactivated with the requested role and
        new ones inserted. Everything is flushed in the caller's transaction.

        Returns:
            The resulting active assignments
        """
        stmt = select(UserAssignmentModel).where(UserAssignmentModel.identity_id == identity_id)
        existing = {
            model.application_id: model
            for model in (await self.session.execute(stmt)).scalars().all()
        }
        wanted = dict(desired)

        for application_id, model in existing.items():
            if application_id in wanted:
                model.active = True
                model.app_role = wanted[application_id].value
                model.updated_at = now
            elif model.active:
                model.active = False
                model.updated_at = now

        for application_id, app_role in wanted.items():
            if application_id not in existing:
                self.session.add(
                    UserAssignmentModel(
                        identity_id=identity_id,
                        application_id=application_id,
                        app_role=app_role.value,
                        active=True,
                        created_at=now,
                        updated_at=now,
                    )
                )

        await self.session.flush()
        return await self.list_for_identity(identity_id)

    async def deactivate_all_for_identity(self, identity_id: UUID, now: datetime) -> int:
        stmt = (
            update(UserAssignmentModel)
            .where(
                UserAssignmentModel.identity_id == identity_id,
                UserAssignmentModel.active.is_(True),
            )
            .values(active=False, updated_at=now)
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        return result.rowcount
