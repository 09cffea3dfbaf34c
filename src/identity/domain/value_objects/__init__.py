from identity.domain.value_objects.identity_context import IdentityContext
from identity.domain.value_objects.role import DELEGABLE_ROLES, Role
from identity.domain.value_objects.token_claims import AccessClaims, RefreshClaims, TokenPair

__all__ = [
    "AccessClaims",
    "DELEGABLE_ROLES",
    "IdentityContext",
    "RefreshClaims",
    "Role",
    "TokenPair",
]
