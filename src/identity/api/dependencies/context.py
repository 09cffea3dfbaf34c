"""
Context Dependencies
Resolves the application services built at startup (``app.state.services``)
"""
from __future__ import annotations

from typing import Optional

from fastapi import Request

from identity.application.queries.audit_names import AuditNameProjection
from identity.application.services.application_service import ApplicationService
from identity.application.services.auth_service import AuthService
from identity.application.services.entitlement_resolver import EntitlementResolver
from identity.application.services.identity_admin_service import IdentityAdminService
from identity.application.services.session_gateway import SessionGateway
from identity.application.services.tenant_service import TenantService


def _services(request: Request):
    return request.app.state.services


def get_session_gateway(request: Request) -> SessionGateway:
    return _services(request).sessions


def get_auth_service(request: Request) -> AuthService:
    return _services(request).auth


def get_entitlement_resolver(request: Request) -> EntitlementResolver:
    return _services(request).entitlements


def get_identity_admin_service(request: Request) -> IdentityAdminService:
    return _services(request).identities


def get_tenant_service(request: Request) -> TenantService:
    return _services(request).tenants


def get_application_service(request: Request) -> ApplicationService:
    return _services(request).applications


def get_audit_names(request: Request) -> AuditNameProjection:
    return _services(request).audit_names


def client_ip(request: Request) -> Optional[str]:
    return request.client.host if request.client else None


def client_user_agent(request: Request) -> Optional[str]:
    return request.headers.get("user-agent")
