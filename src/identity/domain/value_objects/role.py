# src/identity/domain/value_objects/role.py
"""Role value object."""

from enum import StrEnum
from typing import Self

from identity.domain.errors import InvalidRole


class Role(StrEnum):
    """Platform roles. SUPER_ADMIN is the only role without a tenant."""

    SUPER_ADMIN = "SUPER_ADMIN"
    TENANT_ADMIN = "TENANT_ADMIN"
    TENANT_SUPERVISOR = "TENANT_SUPERVISOR"
    TENANT_COORDINATOR = "TENANT_COORDINATOR"
    TENANT_OPERATOR = "TENANT_OPERATOR"

    def is_admin(self) -> bool:
        """Admin roles reach applications through the tenant license alone."""
        return self in {Role.SUPER_ADMIN, Role.TENANT_ADMIN}

    def is_delegable(self) -> bool:
        """Whether this role can be handed out per application by a tenant admin."""
        return self in DELEGABLE_ROLES

    def requires_tenant(self) -> bool:
        return self is not Role.SUPER_ADMIN

    @classmethod
    def from_string(cls, role_str: str) -> Self:
        """Create a Role from its name (case-insensitive)."""
        try:
            return cls[role_str.strip().upper()]
        except KeyError:
            valid_roles = [role.name for role in cls]
            raise InvalidRole(f"Invalid role: {role_str}. Valid roles: {valid_roles}")


DELEGABLE_ROLES: frozenset[Role] = frozenset({
    Role.TENANT_SUPERVISOR,
    Role.TENANT_COORDINATOR,
    Role.TENANT_OPERATOR,
})
