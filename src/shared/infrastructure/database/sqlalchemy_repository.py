"""
Generic SQLAlchemy Repository
Maps domain entities to ORM rows inside the caller's session
"""
from __future__ import annotations

from typing import Any, Generic, Sequence, Type, TypeVar
from uuid import UUID

from sqlalchemy import Select, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from shared.domain.base_entity import BaseEntity
from shared.exceptions import ConflictError
from shared.infrastructure.database.base_model import Base
from shared.infrastructure.observability.logger import get_logger

logger = get_logger(__name__)

TEntity = TypeVar("TEntity", bound=BaseEntity)
TModel = TypeVar("TModel", bound=Base)


class SQLAlchemyRepository(Generic[TEntity, TModel]):
    """
    Base for the directory repositories.

    Subclasses supply ``_to_entity`` / ``_to_model``. Nothing is deleted
    through here: lifecycle changes go through ``update`` or dedicated bulk
    statements in the subclass. Writes only flush; the unit of work commits.

    Type Parameters:
        TEntity: Domain entity type
        TModel: SQLAlchemy ORM model type
    """

    def __init__(
        self,
        session: AsyncSession,
        model_class: Type[TModel],
        entity_class: Type[TEntity],
    ) -> None:
        self.session = session
        self.model_class = model_class
        self.entity_class = entity_class

    def _to_entity(self, model: TModel) -> TEntity:
        raise NotImplementedError("Subclass must implement _to_entity")

    def _to_model(self, entity: TEntity) -> TModel:
        raise NotImplementedError("Subclass must implement _to_model")

    async def add(self, entity: TEntity) -> TEntity:
        """
        Insert a new row.

        Raises:
            ConflictError: A unique constraint (email, registration number,
                api key, (tenant, application), ...) rejected the row
        """
        model = self._to_model(entity)
        self.session.add(model)
        await self._flush(entity)
        logger.debug("Row added", extra={"entity": self.entity_class.__name__, "entity_id": str(entity.id)})
        return self._to_entity(model)

    async def update(self, entity: TEntity) -> TEntity:
        """Write the entity's current state over its row."""
        merged = await self.session.merge(self._to_model(entity))
        await self._flush(entity)
        logger.debug("Row updated", extra={"entity": self.entity_class.__name__, "entity_id": str(entity.id)})
        return self._to_entity(merged)

    async def get_by_id(self, entity_id: UUID) -> TEntity | None:
        model = await self.session.get(self.model_class, entity_id)
        return self._to_entity(model) if model is not None else None

    async def get_by_ids(self, entity_ids: Sequence[UUID]) -> Sequence[TEntity]:
        """Batch lookup; missing ids are skipped."""
        if not entity_ids:
            return []
        stmt = select(self.model_class).where(self.model_class.id.in_(list(entity_ids)))
        return await self._all(stmt)

    async def find_all(self, order_by: str | None = None, **filters: Any) -> Sequence[TEntity]:
        """
        Rows matching column equality filters.

        Raises:
            ValueError: A filter or ``order_by`` names no column of the model
        """
        stmt = select(self.model_class)
        for key, value in filters.items():
            stmt = stmt.where(self._column(key) == value)
        if order_by is not None:
            stmt = stmt.order_by(self._column(order_by))
        return await self._all(stmt)

    async def _all(self, stmt: Select) -> list[TEntity]:
        result = await self.session.execute(stmt)
        return [self._to_entity(model) for model in result.scalars().all()]

    def _column(self, name: str) -> Any:
        column = self.model_class.__table__.columns.get(name)
        if column is None:
            raise ValueError(f"{self.model_class.__name__} has no column {name!r}")
        return getattr(self.model_class, name)

    async def _flush(self, entity: TEntity) -> None:
        try:
            await self.session.flush()
        except IntegrityError as e:
            logger.info(
                "Unique constraint rejected write",
                extra={"entity": self.entity_class.__name__, "entity_id": str(entity.id)},
            )
            raise ConflictError(details={"entity": self.entity_class.__name__}) from e
