"""Identity Infrastructure - External Adapters"""
from identity.infrastructure.adapters.directory_unit_of_work import DirectoryUnitOfWork
from identity.infrastructure.adapters.jwt_service import JWTService
from identity.infrastructure.adapters.password_service import PasswordService

__all__ = [
    "DirectoryUnitOfWork",
    "JWTService",
    "PasswordService",
]
