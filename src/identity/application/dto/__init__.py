from identity.application.dto.auth_dto import LoginResult, RotatedAccess
from identity.application.dto.entitlement_dto import AccessGrant, AssignmentRequest

__all__ = ["AccessGrant", "AssignmentRequest", "LoginResult", "RotatedAccess"]
