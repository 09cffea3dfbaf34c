"""
Shared Database Infrastructure
Declarative base, session management, repositories and UoW
"""
from shared.infrastructure.database.base_model import Base, LifecycleMixin, UTCDateTime
from shared.infrastructure.database.session import DatabaseSessionFactory
from shared.infrastructure.database.sqlalchemy_repository import SQLAlchemyRepository
from shared.infrastructure.database.sqlalchemy_unit_of_work import SQLAlchemyUnitOfWork

__all__ = [
    "Base",
    "LifecycleMixin",
    "UTCDateTime",
    "DatabaseSessionFactory",
    "SQLAlchemyRepository",
    "SQLAlchemyUnitOfWork",
]
