"""
Application API Schemas
"""
from __future__ import annotations

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class ApplicationResponse(BaseModel):
    """Public view of an application (no API key)"""
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    url: str
    description: Optional[str] = None


class ApplicationAdminResponse(ApplicationResponse):
    api_key: str
    active: bool
    created_at: datetime
    updated_at: datetime
    deactivated_at: Optional[datetime] = None


class CreateApplicationRequest(BaseModel):
    model_config = ConfigDict(extra="forbid", str_strip_whitespace=True)

    name: str = Field(..., min_length=1, max_length=200)
    url: str = Field(..., min_length=1, max_length=500)
    description: Optional[str] = None


class UpdateApplicationRequest(BaseModel):
    model_config = ConfigDict(extra="forbid", str_strip_whitespace=True)

    name: Optional[str] = Field(default=None, min_length=1, max_length=200)
    url: Optional[str] = Field(default=None, min_length=1, max_length=500)
    description: Optional[str] = None


class AccessGrantResponse(BaseModel):
    url: str
    application_name: str
    application_id: UUID
