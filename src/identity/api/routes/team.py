# src/identity/api/routes/team.py
"""Tenant-scoped member management for TENANT_ADMIN (and SUPER_ADMIN)."""
from __future__ import annotations

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, status

from identity.api.dependencies.auth import CurrentIdentity
from identity.api.dependencies.context import get_entitlement_resolver, get_identity_admin_service
from identity.api.schemas import (
    AssignmentResponse,
    CreateIdentityRequest,
    IdentityDetailResponse,
    SyncAssignmentsRequest,
    UpdateIdentityRequest,
)
from identity.application.dto.entitlement_dto import AssignmentRequest
from identity.application.services.entitlement_resolver import EntitlementResolver
from identity.application.services.identity_admin_service import IdentityAdminService

router = APIRouter(prefix="/team", tags=["Team"])

AdminServiceDep = Annotated[IdentityAdminService, Depends(get_identity_admin_service)]
ResolverDep = Annotated[EntitlementResolver, Depends(get_entitlement_resolver)]


@router.get("/members", response_model=list[IdentityDetailResponse])
async def list_members(context: CurrentIdentity, service: AdminServiceDep) -> list[IdentityDetailResponse]:
    members = await service.list_members(context)
    return [IdentityDetailResponse.model_validate(m) for m in members]


@router.post("/members", response_model=IdentityDetailResponse, status_code=status.HTTP_201_CREATED)
async def create_member(
    payload: CreateIdentityRequest,
    context: CurrentIdentity,
    service: AdminServiceDep,
) -> IdentityDetailResponse:
    identity = await service.create(
        context,
        email=payload.email,
        name=payload.name,
        password=payload.password,
        role=payload.role,
        tenant_id=payload.tenant_id,
    )
    return IdentityDetailResponse.model_validate(identity)


@router.patch("/members/{identity_id}", response_model=IdentityDetailResponse)
async def update_member(
    identity_id: UUID,
    payload: UpdateIdentityRequest,
    context: CurrentIdentity,
    service: AdminServiceDep,
) -> IdentityDetailResponse:
    identity = await service.update(context, identity_id, name=payload.name, email=payload.email)
    return IdentityDetailResponse.model_validate(identity)


@router.post("/members/{identity_id}/deactivate", response_model=IdentityDetailResponse)
async def deactivate_member(
    identity_id: UUID,
    context: CurrentIdentity,
    service: AdminServiceDep,
) -> IdentityDetailResponse:
    """Tenant deactivation path: never self, never a TENANT_ADMIN."""
    return IdentityDetailResponse.model_validate(await service.deactivate_member(context, identity_id))


@router.post("/members/{identity_id}/reactivate", response_model=IdentityDetailResponse)
async def reactivate_member(
    identity_id: UUID,
    context: CurrentIdentity,
    service: AdminServiceDep,
) -> IdentityDetailResponse:
    return IdentityDetailResponse.model_validate(await service.reactivate(context, identity_id))


@router.get("/members/{identity_id}/applications", response_model=list[AssignmentResponse])
async def list_member_applications(
    identity_id: UUID,
    context: CurrentIdentity,
    resolver: ResolverDep,
) -> list[AssignmentResponse]:
    assignments = await resolver.list_assignments(context, identity_id)
    return [AssignmentResponse.model_validate(a) for a in assignments]


@router.put("/members/{identity_id}/applications", response_model=list[AssignmentResponse])
async def sync_member_applications(
    identity_id: UUID,
    payload: SyncAssignmentsRequest,
    context: CurrentIdentity,
    resolver: ResolverDep,
) -> list[AssignmentResponse]:
    """Full replace: the body is the desired assignment set."""
    desired = [AssignmentRequest(application_id=i.application_id, app_role=i.app_role) for i in payload.assignments]
    assignments = await resolver.sync_assignments(context, identity_id, desired)
    return [AssignmentResponse.model_validate(a) for a in assignments]
