# src/identity/api/routes/admin_applications.py
from __future__ import annotations

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, status

from identity.api.dependencies.auth import CurrentIdentity, require_roles
from identity.api.dependencies.context import get_application_service
from identity.api.schemas import (
    ApplicationAdminResponse,
    CreateApplicationRequest,
    UpdateApplicationRequest,
)
from identity.application.services.application_service import ApplicationService
from identity.domain.value_objects.role import Role

router = APIRouter(
    prefix="/admin/applications",
    tags=["Admin:Applications"],
    dependencies=[Depends(require_roles(Role.SUPER_ADMIN))],
)

ApplicationServiceDep = Annotated[ApplicationService, Depends(get_application_service)]


@router.get("", response_model=list[ApplicationAdminResponse])
async def list_applications(
    context: CurrentIdentity,
    service: ApplicationServiceDep,
    active_only: bool = False,
) -> list[ApplicationAdminResponse]:
    applications = await service.list_all(context, active_only=active_only)
    return [ApplicationAdminResponse.model_validate(a) for a in applications]


@router.post("", response_model=ApplicationAdminResponse, status_code=status.HTTP_201_CREATED)
async def create_application(
    payload: CreateApplicationRequest,
    context: CurrentIdentity,
    service: ApplicationServiceDep,
) -> ApplicationAdminResponse:
    application = await service.create(
        context,
        name=payload.name,
        url=payload.url,
        description=payload.description,
    )
    return ApplicationAdminResponse.model_validate(application)


@router.get("/{application_id}", response_model=ApplicationAdminResponse)
async def get_application(
    application_id: UUID,
    context: CurrentIdentity,
    service: ApplicationServiceDep,
) -> ApplicationAdminResponse:
    return ApplicationAdminResponse.model_validate(await service.get(context, application_id))


@router.patch("/{application_id}", response_model=ApplicationAdminResponse)
async def update_application(
    application_id: UUID,
    payload: UpdateApplicationRequest,
    context: CurrentIdentity,
    service: ApplicationServiceDep,
) -> ApplicationAdminResponse:
    application = await service.update(
        context,
        application_id,
        name=payload.name,
        url=payload.url,
        description=payload.description,
    )
    return ApplicationAdminResponse.model_validate(application)


@router.post("/{application_id}/deactivate", response_model=ApplicationAdminResponse)
async def deactivate_application(
    application_id: UUID,
    context: CurrentIdentity,
    service: ApplicationServiceDep,
) -> ApplicationAdminResponse:
    """Also deactivates every tenant license of the application."""
    return ApplicationAdminResponse.model_validate(await service.deactivate(context, application_id))


@router.post("/{application_id}/reactivate", response_model=ApplicationAdminResponse)
async def reactivate_application(
    application_id: UUID,
    context: CurrentIdentity,
    service: ApplicationServiceDep,
) -> ApplicationAdminResponse:
    return ApplicationAdminResponse.model_validate(await service.reactivate(context, application_id))


@router.post("/{application_id}/regenerate-key", response_model=ApplicationAdminResponse)
async def regenerate_api_key(
    application_id: UUID,
    context: CurrentIdentity,
    service: ApplicationServiceDep,
) -> ApplicationAdminResponse:
    return ApplicationAdminResponse.model_validate(await service.regenerate_api_key(context, application_id))
