"""
UserAssignment ORM Model
Maps to user_assignments table
"""
from uuid import UUID

from sqlalchemy import ForeignKey, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from shared.infrastructure.database.base_model import Base


class UserAssignmentModel(Base):
    """SQLAlchemy model for user_assignments table."""

    __tablename__ = "user_assignments"
    __table_args__ = (
        UniqueConstraint("identity_id", "application_id", name="uq_user_assignment"),
    )

    identity_id: Mapped[UUID] = mapped_column(ForeignKey("identities.id"), nullable=False, index=True)
    application_id: Mapped[UUID] = mapped_column(
        ForeignKey("applications.id"),
        nullable=False,
        index=True,
    )
    app_role: Mapped[str] = mapped_column(String(32), nullable=False)
    active: Mapped[bool] = mapped_column(default=True, nullable=False)
