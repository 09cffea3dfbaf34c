"""
Tenant and license API Schemas
"""
from __future__ import annotations

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class CreateTenantRequest(BaseModel):
    model_config = ConfigDict(extra="forbid", str_strip_whitespace=True)

    name: str = Field(..., min_length=1, max_length=200)
    external_id: str = Field(..., min_length=1, max_length=64, description="Registration number")


class UpdateTenantRequest(BaseModel):
    model_config = ConfigDict(extra="forbid", str_strip_whitespace=True)

    name: str = Field(..., min_length=1, max_length=200)


class TenantResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    external_id: str
    active: bool
    created_at: datetime
    updated_at: datetime
    deactivated_at: Optional[datetime] = None
    deactivated_by: Optional[UUID] = None


class LinkLicenseRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    application_id: UUID
    expires_at: Optional[datetime] = Field(default=None, description="None means no expiry")


class LicenseResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    tenant_id: UUID
    application_id: UUID
    active: bool
    expires_at: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime
