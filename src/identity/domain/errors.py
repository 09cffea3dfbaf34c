# src/identity/domain/errors.py
"""
Identity domain error taxonomy.

Every error carries a stable machine ``code`` (see shared.error_codes) and
the HTTP status its family maps to. All authentication and authorization
failures are terminal: callers re-authenticate or give up, never retry.
"""
from __future__ import annotations

from shared.exceptions import (
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    NotFoundError,
    ValidationError,
)


# ─── Authentication (401) ─────────────────────────────────────────────────
class NoToken(AuthenticationError):
    code = "no_token"


class InvalidToken(AuthenticationError):
    """Malformed token, bad signature or missing claims."""
    code = "invalid_token"


class InvalidTokenType(InvalidToken):
    """Well-formed token of the wrong kind (refresh used as access or vice versa)."""
    code = "invalid_token_type"


class TokenExpired(AuthenticationError):
    code = "token_expired"


class RevokedOrUnknown(AuthenticationError):
    """Valid refresh token with no matching stored, unrevoked, unexpired record."""
    code = "revoked_or_unknown"


class IdentityInactiveOrMissing(AuthenticationError):
    code = "identity_inactive_or_missing"


class InvalidCredentials(AuthenticationError):
    code = "invalid_credentials"


class InvalidApiKey(AuthenticationError):
    code = "invalid_api_key"


# ─── Authorization (403) ──────────────────────────────────────────────────
class Forbidden(AuthorizationError):
    code = "forbidden"


class TenantScopeViolation(AuthorizationError):
    code = "tenant_scope_violation"


class CannotManageRole(AuthorizationError):
    code = "cannot_manage_role"


class CannotDeactivateSelf(AuthorizationError):
    code = "cannot_deactivate_self"


class CannotDeactivateAdmin(AuthorizationError):
    code = "cannot_deactivate_admin"


class NoAccess(AuthorizationError):
    code = "no_access"


# ─── Validation (400) ─────────────────────────────────────────────────────
class InvalidRole(ValidationError):
    code = "validation_error"


class InvalidApplications(ValidationError):
    code = "invalid_applications"


class InvalidAppRole(ValidationError):
    code = "invalid_app_role"


class InvalidRoleTenantCombination(ValidationError):
    code = "invalid_role_tenant_combination"


class InvalidAssignmentTarget(ValidationError):
    code = "invalid_assignment_target"


class InvalidCurrentPassword(ValidationError):
    code = "invalid_current_password"


# ─── Not found (404) ──────────────────────────────────────────────────────
class IdentityNotFound(NotFoundError):
    code = "identity_not_found"


class TenantNotFound(NotFoundError):
    code = "tenant_not_found"


class ApplicationNotFound(NotFoundError):
    code = "application_not_found"


class LicenseNotFound(NotFoundError):
    code = "license_not_found"


# ─── Conflict (409) ───────────────────────────────────────────────────────
class EmailAlreadyExists(ConflictError):
    code = "email_already_exists"


class ExternalIdAlreadyExists(ConflictError):
    code = "external_id_already_exists"
