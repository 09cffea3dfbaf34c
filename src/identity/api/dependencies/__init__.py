from identity.api.dependencies.auth import (
    CurrentIdentity,
    get_current_identity,
    get_optional_identity,
    require_roles,
)

__all__ = ["CurrentIdentity", "get_current_identity", "get_optional_identity", "require_roles"]
