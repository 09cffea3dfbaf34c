# src/identity/api/routes/apps.py
from __future__ import annotations

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Request

from identity.api.dependencies.auth import CurrentIdentity
from identity.api.dependencies.context import client_ip, client_user_agent, get_entitlement_resolver
from identity.api.schemas import AccessGrantResponse, ApplicationResponse
from identity.application.services.entitlement_resolver import EntitlementResolver

router = APIRouter(prefix="/apps", tags=["Apps"])

ResolverDep = Annotated[EntitlementResolver, Depends(get_entitlement_resolver)]


@router.get("", response_model=list[ApplicationResponse])
async def available_applications(context: CurrentIdentity, resolver: ResolverDep) -> list[ApplicationResponse]:
    """Applications the caller may reach right now, ordered by name."""
    applications = await resolver.available_applications(context)
    return [ApplicationResponse.model_validate(a) for a in applications]


@router.post("/{application_id}/access", response_model=AccessGrantResponse)
async def request_access(
    application_id: UUID,
    request: Request,
    context: CurrentIdentity,
    resolver: ResolverDep,
) -> AccessGrantResponse:
    """
    Re-check entitlement and return the redirect target.

    Raises:
        403: no_access
    """
    grant = await resolver.request_access_grant(
        context,
        application_id,
        ip_address=client_ip(request),
        user_agent=client_user_agent(request),
    )
    return AccessGrantResponse(
        url=grant.url,
        application_name=grant.application_name,
        application_id=grant.application_id,
    )
