"""
UserAssignment Entity - Individual Application Grant
"""
from __future__ import annotations

from uuid import UUID

from shared.domain.base_entity import BaseEntity
from identity.domain.value_objects.role import Role


class UserAssignment(BaseEntity):
    """
    Narrows a tenant license to one non-admin identity; unique per
    (identity, application). ``app_role`` is drawn from the delegable roles.
    """

    def __init__(
        self,
        identity_id: UUID,
        application_id: UUID,
        app_role: Role,
        active: bool = True,
        **base,
    ) -> None:
        super().__init__(**base)
        self.identity_id = identity_id
        self.application_id = application_id
        self.app_role = app_role
        self.active = active
