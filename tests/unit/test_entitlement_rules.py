from datetime import datetime, timedelta, timezone
from uuid import uuid4

import pytest

from identity.domain.entities.application import Application
from identity.domain.entities.tenant_license import TenantLicense
from identity.domain.entities.user_assignment import UserAssignment
from identity.domain.services.entitlement_rules import grants_access, license_is_current
from identity.domain.value_objects.role import Role

NOW = datetime(2030, 1, 1, tzinfo=timezone.utc)


@pytest.fixture
def application():
    return Application(name="Billing", url="https://billing.acme.com")


def license_for(application, expires_at=None, active=True):
    return TenantLicense(tenant_id=uuid4(), application_id=application.id, expires_at=expires_at, active=active)


def test_license_expiry_boundary(application):
    assert license_is_current(license_for(application), NOW)
    assert license_is_current(license_for(application, NOW + timedelta(seconds=1)), NOW)
    assert not license_is_current(license_for(application, NOW), NOW)
    assert not license_is_current(license_for(application, active=False), NOW)
    assert not license_is_current(None, NOW)


def test_admin_relies_on_license_alone(application):
    assert grants_access(Role.TENANT_ADMIN, application, license_for(application), None, NOW)


def test_operator_needs_assignment_under_active_license(application):
    license = license_for(application)
    assert not grants_access(Role.TENANT_OPERATOR, application, license, None, NOW)

    assignment = UserAssignment(identity_id=uuid4(), application_id=application.id, app_role=Role.TENANT_OPERATOR)
    assert grants_access(Role.TENANT_OPERATOR, application, license, assignment, NOW)

    assignment.active = False
    assert not grants_access(Role.TENANT_OPERATOR, application, license, assignment, NOW)


def test_license_is_the_outer_gate(application):
    assignment = UserAssignment(identity_id=uuid4(), application_id=application.id, app_role=Role.TENANT_OPERATOR)
    expired = license_for(application, NOW - timedelta(days=1))
    assert not grants_access(Role.TENANT_SUPERVISOR, application, expired, assignment, NOW)


def test_inactive_application_grants_nothing(application):
    application.active = False
    assert not grants_access(Role.SUPER_ADMIN, application, None, None, NOW)
    assert not grants_access(Role.TENANT_ADMIN, application, license_for(application), None, NOW)


def test_super_admin_reaches_every_active_application(application):
    assert grants_access(Role.SUPER_ADMIN, application, None, None, NOW)
