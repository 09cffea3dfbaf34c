"""
Entitlement rules.

Access to an application exists iff the application is active, the tenant
license is active and unexpired, and (for non-admin tenant roles) an active
individual assignment exists. The license is always the outer gate.
"""
from __future__ import annotations

from datetime import datetime
from typing import Optional

from identity.domain.entities.application import Application
from identity.domain.entities.tenant_license import TenantLicense
from identity.domain.entities.user_assignment import UserAssignment
from identity.domain.value_objects.role import Role


def license_is_current(license: Optional[TenantLicense], now: datetime) -> bool:
    return license is not None and license.is_current(now)


def requires_assignment(role: Role) -> bool:
    """Non-admin tenant roles need an individual assignment on top of the license."""
    return not role.is_admin()


def grants_access(
    role: Role,
    application: Optional[Application],
    license: Optional[TenantLicense],
    assignment: Optional[UserAssignment],
    now: datetime,
) -> bool:
    if application is None or not application.active:
        return False
    if role is Role.SUPER_ADMIN:
        return True
    if not license_is_current(license, now):
        return False
    if requires_assignment(role):
        return assignment is not None and assignment.active
    return True
