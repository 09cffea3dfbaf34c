"""
TenantLicense ORM Model
Maps to tenant_licenses table
"""
from datetime import datetime
from typing import Optional
from uuid import UUID

from sqlalchemy import ForeignKey, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from shared.infrastructure.database.base_model import Base, LifecycleMixin


class TenantLicenseModel(LifecycleMixin, Base):
    """SQLAlchemy model for tenant_licenses table."""

    __tablename__ = "tenant_licenses"
    __table_args__ = (
        UniqueConstraint("tenant_id", "application_id", name="uq_tenant_license"),
    )

    tenant_id: Mapped[UUID] = mapped_column(ForeignKey("tenants.id"), nullable=False, index=True)
    application_id: Mapped[UUID] = mapped_column(
        ForeignKey("applications.id"),
        nullable=False,
        index=True,
    )
    expires_at: Mapped[Optional[datetime]] = mapped_column(nullable=True)
