"""
Identity Entity - Authenticated Principal
"""
from __future__ import annotations

from datetime import datetime
from typing import Optional
from uuid import UUID

from shared.domain.base_entity import LifecycleEntity
from shared.exceptions import ValidationError
from identity.domain.errors import InvalidRoleTenantCombination
from identity.domain.value_objects.role import Role


def normalize_email(value: str) -> str:
    return value.strip().lower()


class Identity(LifecycleEntity):
    """
    A principal that can log in.

    SUPER_ADMIN identities have no tenant; every other role belongs to
    exactly one tenant. The password hash is opaque to the domain.

    Attributes:
        email: Unique, lower-cased login
        name: Display name
        role: Platform role
        tenant_id: Owning tenant (None only for SUPER_ADMIN)
        password_hash: Opaque credential hash
        last_login_at: Last successful login
    """

    def __init__(
        self,
        email: str,
        name: str,
        role: Role,
        password_hash: str,
        tenant_id: Optional[UUID] = None,
        last_login_at: Optional[datetime] = None,
        **lifecycle,
    ) -> None:
        super().__init__(**lifecycle)
        ensure_role_tenant_combination(role, tenant_id)
        self.email = normalize_email(email)
        self.name = name
        self.role = role
        self.tenant_id = tenant_id
        self.password_hash = password_hash
        self.last_login_at = last_login_at

    def record_login(self, now: datetime) -> None:
        self.last_login_at = now
        self.mark_updated(now)

    def change_password_hash(self, password_hash: str, now: datetime) -> None:
        self.password_hash = password_hash
        self.touch(self.id, now)

    def update_details(
        self,
        actor_id: UUID,
        now: datetime,
        name: Optional[str] = None,
        email: Optional[str] = None,
    ) -> None:
        if name is not None:
            self.name = name.strip()
        if email is not None:
            self.email = normalize_email(email)
        self.touch(actor_id, now)


def ensure_role_tenant_combination(role: Role, tenant_id: Optional[UUID]) -> None:
    """SUPER_ADMIN must not have a tenant; every other role must."""
    if role.requires_tenant() and tenant_id is None:
        raise InvalidRoleTenantCombination(f"{role.value} requires a tenant")
    if not role.requires_tenant() and tenant_id is not None:
        raise InvalidRoleTenantCombination("SUPER_ADMIN cannot belong to a tenant")


def ensure_password_length(password: str, min_length: int) -> None:
    if len(password) < min_length:
        raise ValidationError(
            f"Password must be at least {min_length} characters",
            details={"min_length": min_length},
        )
