"""
Authentication API Schemas
"""
from __future__ import annotations

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from identity.domain.value_objects.role import Role


class LoginRequest(BaseModel):
    """Login request schema"""
    model_config = ConfigDict(extra="forbid", str_strip_whitespace=True)

    email: EmailStr = Field(..., description="User email address")
    password: str = Field(..., min_length=1, description="User password")


class IdentityResponse(BaseModel):
    """The authenticated identity (never includes the password hash)"""
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    email: str
    name: str
    role: Role
    tenant_id: Optional[UUID] = None
    active: bool
    last_login_at: Optional[datetime] = None
    created_at: datetime


class LoginResponse(BaseModel):
    """Login response schema"""
    access_token: str = Field(..., description="JWT access token")
    refresh_token: str = Field(..., description="JWT refresh token")
    token_type: str = Field(default="Bearer", description="Token type")
    access_expires_at: datetime
    refresh_expires_at: datetime
    user: IdentityResponse


class RefreshTokenRequest(BaseModel):
    """Refresh token request schema"""
    model_config = ConfigDict(extra="forbid", str_strip_whitespace=True)

    refresh_token: str = Field(..., min_length=1, description="Refresh token")


class RefreshTokenResponse(BaseModel):
    """New access token; the refresh token is reused until logout or expiry"""
    access_token: str
    token_type: str = "Bearer"
    access_expires_at: datetime


class LogoutRequest(RefreshTokenRequest):
    pass


class ChangePasswordRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    current_password: str = Field(..., min_length=1)
    new_password: str = Field(..., min_length=1, description="Minimum length is enforced server-side")


class UpdateProfileRequest(BaseModel):
    model_config = ConfigDict(extra="forbid", str_strip_whitespace=True)

    name: str = Field(..., min_length=1, max_length=200)


class AccessValidationResponse(BaseModel):
    """Answer to an external application checking one of its users"""
    valid: bool = True
    identity_id: UUID
    email: str
    role: Role
    tenant_id: Optional[UUID] = None
    application_id: UUID
