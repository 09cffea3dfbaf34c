"""
Application ORM Model
Maps to applications table
"""
from typing import Optional

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column

from shared.infrastructure.database.base_model import Base, LifecycleMixin


class ApplicationModel(LifecycleMixin, Base):
    """SQLAlchemy model for applications table."""

    __tablename__ = "applications"

    name: Mapped[str] = mapped_column(String(200), nullable=False, index=True)
    url: Mapped[str] = mapped_column(String(2048), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    api_key: Mapped[str] = mapped_column(String(64), unique=True, nullable=False)
