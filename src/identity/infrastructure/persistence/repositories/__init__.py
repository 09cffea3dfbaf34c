"""
Identity Infrastructure - SQLAlchemy Repositories
"""
from identity.infrastructure.persistence.repositories.access_event_repository import AccessEventRepository
from identity.infrastructure.persistence.repositories.application_repository import ApplicationRepository
from identity.infrastructure.persistence.repositories.assignment_repository import AssignmentRepository
from identity.infrastructure.persistence.repositories.identity_repository import IdentityRepository
from identity.infrastructure.persistence.repositories.license_repository import LicenseRepository
from identity.infrastructure.persistence.repositories.refresh_token_repository import RefreshTokenRepository
from identity.infrastructure.persistence.repositories.tenant_repository import TenantRepository

__all__ = [
    "AccessEventRepository",
    "ApplicationRepository",
    "AssignmentRepository",
    "IdentityRepository",
    "LicenseRepository",
    "RefreshTokenRepository",
    "TenantRepository",
]
