# src/shared/error_codes.py
# Central mapping of stable machine codes to HTTP status and default message.
# Keep keys stable: external applications and the web client rely on these.
ERROR_CODES = {
    # ─── Validation & Requests ──────────────────────────────────────────────
    "validation_error": {
        "http": 400,
        "message": "Validation failed for one or more fields."
    },
    "invalid_applications": {
        "http": 400,
        "message": "One or more applications are not licensed to this tenant."
    },
    "invalid_app_role": {
        "http": 400,
        "message": "Application role is not delegable."
    },
    "invalid_role_tenant_combination": {
        "http": 400,
        "message": "SUPER_ADMIN must not belong to a tenant; every other role requires one."
    },
    "invalid_assignment_target": {
        "http": 400,
        "message": "Applications can only be assigned to supervisors, coordinators and operators."
    },
    "invalid_current_password": {
        "http": 400,
        "message": "Current password is incorrect."
    },

    # ─── Authentication ────────────────────────────────────────────────────
    "unauthorized": {
        "http": 401,
        "message": "Unauthorized. Please provide valid credentials."
    },
    "no_token": {
        "http": 401,
        "message": "Authentication token not provided."
    },
    "invalid_token": {
        "http": 401,
        "message": "Invalid authentication token."
    },
    "invalid_token_type": {
        "http": 401,
        "message": "Invalid token type."
    },
    "token_expired": {
        "http": 401,
        "message": "Token has expired."
    },
    "revoked_or_unknown": {
        "http": 401,
        "message": "Refresh token has been revoked or is unknown."
    },
    "identity_inactive_or_missing": {
        "http": 401,
        "message": "User not found or inactive."
    },
    "invalid_credentials": {
        "http": 401,
        "message": "Invalid email or password."
    },
    "invalid_api_key": {
        "http": 401,
        "message": "Invalid application API key."
    },

    # ─── Authorization ─────────────────────────────────────────────────────
    "forbidden": {
        "http": 403,
        "message": "You are not allowed to perform this action."
    },
    "tenant_scope_violation": {
        "http": 403,
        "message": "Resource belongs to another tenant."
    },
    "cannot_manage_role": {
        "http": 403,
        "message": "You cannot manage users with this role."
    },
    "cannot_deactivate_self": {
        "http": 403,
        "message": "You cannot deactivate your own account."
    },
    "cannot_deactivate_admin": {
        "http": 403,
        "message": "Tenant administrators cannot be deactivated from the tenant team."
    },
    "no_access": {
        "http": 403,
        "message": "You do not have access to this application."
    },

    # ─── Resources ─────────────────────────────────────────────────────────
    "not_found": {
        "http": 404,
        "message": "Resource not found."
    },
    "identity_not_found": {
        "http": 404,
        "message": "User not found."
    },
    "tenant_not_found": {
        "http": 404,
        "message": "Tenant not found."
    },
    "application_not_found": {
        "http": 404,
        "message": "Application not found."
    },
    "license_not_found": {
        "http": 404,
        "message": "License not found."
    },
    "conflict": {
        "http": 409,
        "message": "Resource already exists."
    },
    "email_already_exists": {
        "http": 409,
        "message": "Email already registered."
    },
    "external_id_already_exists": {
        "http": 409,
        "message": "A tenant with this registration number already exists."
    },

    # ─── Server ────────────────────────────────────────────────────────────
    "internal_error": {
        "http": 500,
        "message": "An unexpected error occurred."
    },
}
