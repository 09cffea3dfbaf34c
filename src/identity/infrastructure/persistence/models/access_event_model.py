"""
AccessEvent ORM Model
Maps to access_events table (append-only)
"""
from typing import Optional
from uuid import UUID

from sqlalchemy import ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column

from shared.infrastructure.database.base_model import Base


class AccessEventModel(Base):
    """SQLAlchemy model for access_events table."""

    __tablename__ = "access_events"

    identity_id: Mapped[UUID] = mapped_column(ForeignKey("identities.id"), nullable=False, index=True)
    action: Mapped[str] = mapped_column(String(32), nullable=False)
    application_id: Mapped[Optional[UUID]] = mapped_column(
        ForeignKey("applications.id"),
        nullable=True,
    )
    ip_address: Mapped[Optional[str]] = mapped_column(String(64), nullable=True)
    user_agent: Mapped[Optional[str]] = mapped_column(String(512), nullable=True)
