"""
Identity Infrastructure - ORM Models
Importing this package registers every table on Base.metadata
"""
from identity.infrastructure.persistence.models.access_event_model import AccessEventModel
from identity.infrastructure.persistence.models.application_model import ApplicationModel
from identity.infrastructure.persistence.models.identity_model import IdentityModel
from identity.infrastructure.persistence.models.refresh_token_model import RefreshTokenModel
from identity.infrastructure.persistence.models.tenant_license_model import TenantLicenseModel
from identity.infrastructure.persistence.models.tenant_model import TenantModel
from identity.infrastructure.persistence.models.user_assignment_model import UserAssignmentModel

__all__ = [
    "AccessEventModel",
    "ApplicationModel",
    "IdentityModel",
    "RefreshTokenModel",
    "TenantLicenseModel",
    "TenantModel",
    "UserAssignmentModel",
]
