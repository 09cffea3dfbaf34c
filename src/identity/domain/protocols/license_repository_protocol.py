"""
TenantLicense Repository Protocol (Interface)
"""
from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence
from uuid import UUID

from identity.domain.entities.tenant_license import TenantLicense


class ILicenseRepository(Protocol):
    """Tenant license repository interface"""

    async def add(self, license: TenantLicense) -> TenantLicense:
        ...

    async def get(self, tenant_id: UUID, application_id: UUID) -> Optional[TenantLicense]:
        """Lookup by the unique (tenant, application) pair"""
        ...

    async def update(self, license: TenantLicense) -> TenantLicense:
        ...

    async def list_for_tenant(self, tenant_id: UUID) -> Sequence[TenantLicense]:
        ...

    async def deactivate_for_application(
        self,
        application_id: UUID,
        actor_id: Optional[UUID],
        now: datetime,
    ) -> int:
        """Deactivate every active license of an application in one statement"""
        ...
