"""
Identity administration API Schemas
"""
from __future__ import annotations

from datetime import datetime
from typing import Dict, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from identity.domain.value_objects.role import Role


class CreateIdentityRequest(BaseModel):
    """Create identity request (tenant defaults to the caller's for tenant admins)"""
    model_config = ConfigDict(extra="forbid", str_strip_whitespace=True)

    email: EmailStr
    name: str = Field(..., min_length=1, max_length=200)
    password: str = Field(..., min_length=1)
    role: Role
    tenant_id: Optional[UUID] = None


class IdentityDetailResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    email: str
    name: str
    role: Role
    tenant_id: Optional[UUID] = None
    active: bool
    last_login_at: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime
    created_by: Optional[UUID] = None
    updated_by: Optional[UUID] = None
    deactivated_at: Optional[datetime] = None
    deactivated_by: Optional[UUID] = None
    audit_names: Dict[UUID, str] = Field(default_factory=dict, description="Display names of audit ids")


class UpdateIdentityRequest(BaseModel):
    """Partial update; omitted fields stay unchanged"""
    model_config = ConfigDict(extra="forbid", str_strip_whitespace=True)

    name: Optional[str] = Field(None, min_length=1, max_length=200)
    email: Optional[EmailStr] = None
