"""
Identity ORM Model
Maps to identities table
"""
from datetime import datetime
from typing import Optional
from uuid import UUID

from sqlalchemy import ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from shared.infrastructure.database.base_model import Base, LifecycleMixin


class IdentityModel(LifecycleMixin, Base):
    """SQLAlchemy model for identities table."""

    __tablename__ = "identities"

    email: Mapped[str] = mapped_column(String(320), unique=True, nullable=False)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    role: Mapped[str] = mapped_column(String(32), nullable=False)
    tenant_id: Mapped[Optional[UUID]] = mapped_column(
        ForeignKey("tenants.id"),
        nullable=True,
        index=True,
    )
    password_hash: Mapped[str] = mapped_column(Text, nullable=False)
    last_login_at: Mapped[Optional[datetime]] = mapped_column(nullable=True)

    def __repr__(self) -> str:
        return f"<IdentityModel(id={self.id}, role={self.role})>"
