from identity.domain.entities.access_event import AccessAction, AccessEvent
from identity.domain.entities.application import Application
from identity.domain.entities.identity import Identity
from identity.domain.entities.refresh_token import RefreshToken
from identity.domain.entities.tenant import Tenant
from identity.domain.entities.tenant_license import TenantLicense
from identity.domain.entities.user_assignment import UserAssignment

__all__ = [
    "AccessAction",
    "AccessEvent",
    "Application",
    "Identity",
    "RefreshToken",
    "Tenant",
    "TenantLicense",
    "UserAssignment",
]
