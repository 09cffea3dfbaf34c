"""
Application Entity - External Application Reachable Through the Platform
"""
from __future__ import annotations

import secrets
import string
from datetime import datetime
from typing import Optional
from uuid import UUID

from shared.domain.base_entity import LifecycleEntity

API_KEY_PREFIX = "sk_"
API_KEY_LENGTH = 32
_API_KEY_ALPHABET = string.ascii_letters + string.digits


def generate_api_key() -> str:
    """``sk_`` followed by 32 random alphanumerics."""
    return API_KEY_PREFIX + "".join(secrets.choice(_API_KEY_ALPHABET) for _ in range(API_KEY_LENGTH))


class Application(LifecycleEntity):
    """
    An external application identities can be granted access to.

    Attributes:
        name: Display name (available sets are ordered by it)
        url: Redirect target handed out by an access grant
        api_key: Secret the application presents when validating users
        description: Optional free text
    """

    def __init__(
        self,
        name: str,
        url: str,
        api_key: Optional[str] = None,
        description: Optional[str] = None,
        **lifecycle,
    ) -> None:
        super().__init__(**lifecycle)
        self.name = name
        self.url = url
        self.api_key = api_key or generate_api_key()
        self.description = description

    def regenerate_api_key(self, actor_id: Optional[UUID], now: datetime) -> str:
        self.api_key = generate_api_key()
        self.touch(actor_id, now)
        return self.api_key
