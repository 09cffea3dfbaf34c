"""
Shared Domain Layer
Pure domain contracts with no framework dependencies
"""
from shared.domain.base_entity import BaseEntity
from shared.domain.clock import Clock, utcnow

__all__ = [
    "BaseEntity",
    "Clock",
    "utcnow",
]
