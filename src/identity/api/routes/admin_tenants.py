# src/identity/api/routes/admin_tenants.py
from __future__ import annotations

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, status

from identity.api.dependencies.auth import CurrentIdentity, require_roles
from identity.api.dependencies.context import get_identity_admin_service, get_tenant_service
from identity.api.schemas import (
    CreateTenantRequest,
    IdentityDetailResponse,
    LicenseResponse,
    LinkLicenseRequest,
    TenantResponse,
    UpdateTenantRequest,
)
from identity.application.services.identity_admin_service import IdentityAdminService
from identity.application.services.tenant_service import TenantService
from identity.domain.value_objects.role import Role

router = APIRouter(
    prefix="/admin/tenants",
    tags=["Admin:Tenants"],
    dependencies=[Depends(require_roles(Role.SUPER_ADMIN))],
)

TenantServiceDep = Annotated[TenantService, Depends(get_tenant_service)]


@router.get("", response_model=list[TenantResponse])
async def list_tenants(context: CurrentIdentity, service: TenantServiceDep) -> list[TenantResponse]:
    return [TenantResponse.model_validate(t) for t in await service.list_all(context)]


@router.post("", response_model=TenantResponse, status_code=status.HTTP_201_CREATED)
async def create_tenant(
    payload: CreateTenantRequest,
    context: CurrentIdentity,
    service: TenantServiceDep,
) -> TenantResponse:
    tenant = await service.create(context, name=payload.name, external_id=payload.external_id)
    return TenantResponse.model_validate(tenant)


@router.get("/{tenant_id}", response_model=TenantResponse)
async def get_tenant(tenant_id: UUID, context: CurrentIdentity, service: TenantServiceDep) -> TenantResponse:
    return TenantResponse.model_validate(await service.get(context, tenant_id))


@router.patch("/{tenant_id}", response_model=TenantResponse)
async def update_tenant(
    tenant_id: UUID,
    payload: UpdateTenantRequest,
    context: CurrentIdentity,
    service: TenantServiceDep,
) -> TenantResponse:
    return TenantResponse.model_validate(await service.rename(context, tenant_id, payload.name))


@router.post("/{tenant_id}/deactivate", response_model=TenantResponse)
async def deactivate_tenant(tenant_id: UUID, context: CurrentIdentity, service: TenantServiceDep) -> TenantResponse:
    """Deactivates every member and revokes their sessions; licenses are kept."""
    return TenantResponse.model_validate(await service.deactivate(context, tenant_id))


@router.post("/{tenant_id}/reactivate", response_model=TenantResponse)
async def reactivate_tenant(tenant_id: UUID, context: CurrentIdentity, service: TenantServiceDep) -> TenantResponse:
    """Members stay deactivated."""
    return TenantResponse.model_validate(await service.reactivate(context, tenant_id))


@router.get("/{tenant_id}/members", response_model=list[IdentityDetailResponse])
async def list_tenant_members(
    tenant_id: UUID,
    context: CurrentIdentity,
    service: Annotated[IdentityAdminService, Depends(get_identity_admin_service)],
) -> list[IdentityDetailResponse]:
    return [IdentityDetailResponse.model_validate(m) for m in await service.list_members(context, tenant_id)]


@router.get("/{tenant_id}/licenses", response_model=list[LicenseResponse])
async def list_licenses(tenant_id: UUID, context: CurrentIdentity, service: TenantServiceDep) -> list[LicenseResponse]:
    return [LicenseResponse.model_validate(lic) for lic in await service.list_licenses(context, tenant_id)]


@router.post("/{tenant_id}/licenses", response_model=LicenseResponse, status_code=status.HTTP_201_CREATED)
async def link_license(
    tenant_id: UUID,
    payload: LinkLicenseRequest,
    context: CurrentIdentity,
    service: TenantServiceDep,
) -> LicenseResponse:
    """Create the license or reactivate it with the new expiry."""
    license = await service.link_license(context, tenant_id, payload.application_id, payload.expires_at)
    return LicenseResponse.model_validate(license)


@router.delete("/{tenant_id}/licenses/{application_id}", response_model=LicenseResponse)
async def unlink_license(
    tenant_id: UUID,
    application_id: UUID,
    context: CurrentIdentity,
    service: TenantServiceDep,
) -> LicenseResponse:
    return LicenseResponse.model_validate(await service.unlink_license(context, tenant_id, application_id))
