"""
TenantLicense Entity - Tenant-level, Optionally Time-bounded Application Grant
"""
from __future__ import annotations

from datetime import datetime
from typing import Optional
from uuid import UUID

from shared.domain.base_entity import LifecycleEntity


class TenantLicense(LifecycleEntity):
    """
    Grant of one application to one tenant; unique per (tenant, application).

    Attributes:
        tenant_id: Licensed tenant
        application_id: Licensed application
        expires_at: Optional expiry (None = no expiry)
    """

    def __init__(
        self,
        tenant_id: UUID,
        application_id: UUID,
        expires_at: Optional[datetime] = None,
        **lifecycle,
    ) -> None:
        super().__init__(**lifecycle)
        self.tenant_id = tenant_id
        self.application_id = application_id
        self.expires_at = expires_at

    def is_expired(self, now: datetime) -> bool:
        return self.expires_at is not None and self.expires_at <= now

    def is_current(self, now: datetime) -> bool:
        """Active and unexpired at ``now``."""
        return self.active and not self.is_expired(now)

    def renew(self, expires_at: Optional[datetime], actor_id: Optional[UUID], now: datetime) -> None:
        """Reactivate with a new expiry (re-linking an existing license)."""
        self.expires_at = expires_at
        self.reactivate(actor_id, now)
