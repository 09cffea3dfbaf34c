from identity.domain.protocols.access_event_repository_protocol import IAccessEventRepository
from identity.domain.protocols.application_repository_protocol import IApplicationRepository
from identity.domain.protocols.assignment_repository_protocol import IAssignmentRepository
from identity.domain.protocols.directory_unit_of_work_protocol import (
    DirectoryUnitOfWorkFactory,
    IDirectoryUnitOfWork,
)
from identity.domain.protocols.identity_repository_protocol import IIdentityRepository
from identity.domain.protocols.license_repository_protocol import ILicenseRepository
from identity.domain.protocols.password_hasher_protocol import IPasswordHasher
from identity.domain.protocols.refresh_token_repository_protocol import IRefreshTokenRepository
from identity.domain.protocols.tenant_repository_protocol import ITenantRepository
from identity.domain.protocols.token_codec_protocol import ITokenCodec

__all__ = [
    "DirectoryUnitOfWorkFactory",
    "IAccessEventRepository",
    "IApplicationRepository",
    "IAssignmentRepository",
    "IDirectoryUnitOfWork",
    "IIdentityRepository",
    "ILicenseRepository",
    "IPasswordHasher",
    "IRefreshTokenRepository",
    "ITenantRepository",
    "ITokenCodec",
]
