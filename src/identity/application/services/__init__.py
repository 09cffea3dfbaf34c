from identity.application.services.application_service import ApplicationService
from identity.application.services.auth_service import AuthService
from identity.application.services.entitlement_resolver import EntitlementResolver
from identity.application.services.identity_admin_service import IdentityAdminService
from identity.application.services.session_gateway import SessionGateway, extract_bearer_token
from identity.application.services.tenant_service import TenantService
from identity.application.services.token_service import TokenService

__all__ = [
    "ApplicationService",
    "AuthService",
    "EntitlementResolver",
    "IdentityAdminService",
    "SessionGateway",
    "TenantService",
    "TokenService",
    "extract_bearer_token",
]
