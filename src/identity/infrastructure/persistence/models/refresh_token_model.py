"""
RefreshToken ORM Model
Maps to refresh_tokens table
"""
from datetime import datetime
from typing import Optional
from uuid import UUID

from sqlalchemy import ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column

from shared.infrastructure.database.base_model import Base


class RefreshTokenModel(Base):
    """
    SQLAlchemy model for refresh_tokens table.

    Stores only the SHA-256 digest of each refresh token; ``id`` is the
    token's ``jti`` claim.
    """

    __tablename__ = "refresh_tokens"

    identity_id: Mapped[UUID] = mapped_column(
        ForeignKey("identities.id"),
        nullable=False,
        index=True,
    )
    token_hash: Mapped[str] = mapped_column(String(64), unique=True, nullable=False)
    expires_at: Mapped[datetime] = mapped_column(nullable=False, index=True)
    revoked: Mapped[bool] = mapped_column(default=False, nullable=False)
    revoked_at: Mapped[Optional[datetime]] = mapped_column(nullable=True)

    def __repr__(self) -> str:
        return f"<RefreshTokenModel(id={self.id}, identity_id={self.identity_id})>"
