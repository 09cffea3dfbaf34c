# src/identity/api/routes/admin_users.py
from __future__ import annotations

from typing import Annotated, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, status

from identity.api.dependencies.auth import CurrentIdentity, require_roles
from identity.api.dependencies.context import get_audit_names, get_identity_admin_service
from identity.api.schemas import CreateIdentityRequest, IdentityDetailResponse, UpdateIdentityRequest
from identity.application.queries.audit_names import AuditNameProjection
from identity.application.services.identity_admin_service import IdentityAdminService
from identity.domain.value_objects.role import Role

router = APIRouter(
    prefix="/admin/users",
    tags=["Admin:Users"],
    dependencies=[Depends(require_roles(Role.SUPER_ADMIN))],
)

AdminServiceDep = Annotated[IdentityAdminService, Depends(get_identity_admin_service)]


@router.get("", response_model=list[IdentityDetailResponse])
async def list_users(
    context: CurrentIdentity,
    service: AdminServiceDep,
    audit_names: Annotated[AuditNameProjection, Depends(get_audit_names)],
    role: Optional[Role] = None,
) -> list[IdentityDetailResponse]:
    """Every identity, with audit ids resolved to display names."""
    identities = await service.list_all(context, role=role)
    names = await audit_names.for_entities(identities)
    return [
        IdentityDetailResponse.model_validate(i).model_copy(
            update={
                "audit_names": {
                    uid: names[uid]
                    for uid in (i.created_by, i.updated_by, i.deactivated_by)
                    if uid in names
                }
            }
        )
        for i in identities
    ]


@router.post("", response_model=IdentityDetailResponse, status_code=status.HTTP_201_CREATED)
async def create_user(
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


@router.get("/{identity_id}", response_model=IdentityDetailResponse)
async def get_user(identity_id: UUID, context: CurrentIdentity, service: AdminServiceDep) -> IdentityDetailResponse:
    return IdentityDetailResponse.model_validate(await service.get(context, identity_id))


@router.patch("/{identity_id}", response_model=IdentityDetailResponse)
async def update_user(
    identity_id: UUID,
    payload: UpdateIdentityRequest,
    context: CurrentIdentity,
    service: AdminServiceDep,
) -> IdentityDetailResponse:
    identity = await service.update(context, identity_id, name=payload.name, email=payload.email)
    return IdentityDetailResponse.model_validate(identity)


@router.post("/{identity_id}/deactivate", response_model=IdentityDetailResponse)
async def deactivate_user(identity_id: UUID, context: CurrentIdentity, service: AdminServiceDep) -> IdentityDetailResponse:
    """Platform deactivation path; revokes every refresh token of the user."""
    return IdentityDetailResponse.model_validate(await service.deactivate(context, identity_id))


@router.post("/{identity_id}/reactivate", response_model=IdentityDetailResponse)
async def reactivate_user(identity_id: UUID, context: CurrentIdentity, service: AdminServiceDep) -> IdentityDetailResponse:
    return IdentityDetailResponse.model_validate(await service.reactivate(context, identity_id))
