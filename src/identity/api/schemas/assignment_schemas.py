"""
User assignment API Schemas
"""
from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from identity.domain.value_objects.role import Role


class AssignmentItem(BaseModel):
    model_config = ConfigDict(extra="forbid", str_strip_whitespace=True)

    application_id: UUID
    app_role: str = Field(default=Role.TENANT_OPERATOR.value, description="Delegable role name")


class SyncAssignmentsRequest(BaseModel):
    """Desired end state; everything not listed is unassigned"""
    model_config = ConfigDict(extra="forbid")

    assignments: list[AssignmentItem] = Field(default_factory=list)


class AssignmentResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    identity_id: UUID
    application_id: UUID
    app_role: Role
    active: bool
    created_at: datetime
    updated_at: datetime
