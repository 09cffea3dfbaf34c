"""
Tenant Entity - Multi-tenancy Boundary
"""
from __future__ import annotations

from shared.domain.base_entity import LifecycleEntity


class Tenant(LifecycleEntity):
    """
    A customer company.

    Attributes:
        name: Display name
        external_id: Unique registration number
    """

    def __init__(self, name: str, external_id: str, **lifecycle) -> None:
        super().__init__(**lifecycle)
        self.name = name
        self.external_id = external_id.strip()
