"""
Password Hasher Protocol (Interface)
"""
from __future__ import annotations

from typing import Protocol


class IPasswordHasher(Protocol):
    def hash(self, password: str) -> str:
        ...

    def verify(self, password_hash: str, password: str) -> bool:
        ...
