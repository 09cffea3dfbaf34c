"""
AccessEvent Entity - Append-only Access Audit Trail
"""
from __future__ import annotations

from enum import StrEnum
from typing import Optional
from uuid import UUID

from shared.domain.base_entity import BaseEntity


class AccessAction(StrEnum):
    LOGIN = "login"
    LOGOUT = "logout"
    TOKEN_REFRESH = "token_refresh"
    ACCESS_APP = "access_app"


class AccessEvent(BaseEntity):
    """One login/logout/refresh/application-access event. Never updated."""

    def __init__(
        self,
        identity_id: UUID,
        action: AccessAction,
        application_id: Optional[UUID] = None,
        ip_address: Optional[str] = None,
        user_agent: Optional[str] = None,
        **base,
    ) -> None:
        super().__init__(**base)
        self.identity_id = identity_id
        self.action = action
        self.application_id = application_id
        self.ip_address = ip_address
        self.user_agent = user_agent

    @property
    def occurred_at(self):
        return self.created_at
