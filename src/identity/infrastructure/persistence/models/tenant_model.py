"""
Tenant ORM Model
Maps to tenants table
"""
from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from shared.infrastructure.database.base_model import Base, LifecycleMixin


class TenantModel(LifecycleMixin, Base):
    """SQLAlchemy model for tenants table."""

    __tablename__ = "tenants"

    name: Mapped[str] = mapped_column(String(200), nullable=False)
    external_id: Mapped[str] = mapped_column(String(64), unique=True, nullable=False)
