from identity.api.schemas.application_schemas import (
    AccessGrantResponse,
    ApplicationAdminResponse,
    ApplicationResponse,
    CreateApplicationRequest,
    UpdateApplicationRequest,
)
from identity.api.schemas.assignment_schemas import (
    AssignmentItem,
    AssignmentResponse,
    SyncAssignmentsRequest,
)
from identity.api.schemas.auth_schemas import (
    AccessValidationResponse,
    ChangePasswordRequest,
    IdentityResponse,
    LoginRequest,
    LoginResponse,
    LogoutRequest,
    RefreshTokenRequest,
    RefreshTokenResponse,
    UpdateProfileRequest,
)
from identity.api.schemas.tenant_schemas import (
    CreateTenantRequest,
    LicenseResponse,
    LinkLicenseRequest,
    TenantResponse,
    UpdateTenantRequest,
)
from identity.api.schemas.user_schemas import (
    CreateIdentityRequest,
    IdentityDetailResponse,
    UpdateIdentityRequest,
)

__all__ = [
    "AccessGrantResponse",
    "AccessValidationResponse",
    "ApplicationAdminResponse",
    "ApplicationResponse",
    "AssignmentItem",
    "AssignmentResponse",
    "ChangePasswordRequest",
    "CreateApplicationRequest",
    "CreateIdentityRequest",
    "CreateTenantRequest",
    "IdentityDetailResponse",
    "IdentityResponse",
    "LicenseResponse",
    "LinkLicenseRequest",
    "LoginRequest",
    "LoginResponse",
    "LogoutRequest",
    "RefreshTokenRequest",
    "RefreshTokenResponse",
    "SyncAssignmentsRequest",
    "TenantResponse",
    "UpdateApplicationRequest",
    "UpdateIdentityRequest",
    "UpdateProfileRequest",
]
