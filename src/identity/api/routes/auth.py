# src/identity/api/routes/auth.py
from __future__ import annotations

from typing import Annotated, Optional

import structlog
from fastapi import APIRouter, Depends, Header, Request, status

from identity.api.dependencies.auth import CurrentIdentity, OptionalIdentity
from identity.api.dependencies.context import (
    client_ip,
    client_user_agent,
    get_auth_service,
    get_entitlement_resolver,
)
from identity.api.schemas import (
    AccessValidationResponse,
    ChangePasswordRequest,
    IdentityResponse,
    LoginRequest,
    LoginResponse,
    LogoutRequest,
    RefreshTokenRequest,
    RefreshTokenResponse,
    UpdateProfileRequest,
)
from identity.application.services.auth_service import AuthService
from identity.application.services.entitlement_resolver import EntitlementResolver

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/auth", tags=["Auth"])

AuthServiceDep = Annotated[AuthService, Depends(get_auth_service)]


@router.post("/login", response_model=LoginResponse, status_code=status.HTTP_200_OK)
async def login(payload: LoginRequest, request: Request, auth_service: AuthServiceDep) -> LoginResponse:
    """
    Authenticate with email and password and issue a token pair.

    Raises:
        401: invalid_credentials / identity_inactive_or_missing
    """
    result = await auth_service.login(
        email=payload.email,
        password=payload.password,
        ip_address=client_ip(request),
        user_agent=client_user_agent(request),
    )
    return LoginResponse(
        access_token=result.tokens.access_token,
        refresh_token=result.tokens.refresh_token,
        token_type=result.tokens.token_type,
        access_expires_at=result.tokens.access_expires_at,
        refresh_expires_at=result.tokens.refresh_expires_at,
        user=IdentityResponse.model_validate(result.identity),
    )


@router.post("/refresh", response_model=RefreshTokenResponse)
async def refresh(payload: RefreshTokenRequest, request: Request, auth_service: AuthServiceDep) -> RefreshTokenResponse:
    """Mint a new access token from a refresh token (the refresh token is not rotated)."""
    rotated = await auth_service.refresh(
        payload.refresh_token,
        ip_address=client_ip(request),
        user_agent=client_user_agent(request),
    )
    return RefreshTokenResponse(access_token=rotated.access_token, access_expires_at=rotated.expires_at)


@router.post("/logout", status_code=status.HTTP_204_NO_CONTENT)
async def logout(
    payload: LogoutRequest,
    request: Request,
    context: OptionalIdentity,
    auth_service: AuthServiceDep,
) -> None:
    """Revoke the refresh token; works with an expired or missing access token."""
    await auth_service.logout(
        context,
        payload.refresh_token,
        ip_address=client_ip(request),
        user_agent=client_user_agent(request),
    )


@router.get("/me", response_model=IdentityResponse)
async def me(context: CurrentIdentity, auth_service: AuthServiceDep) -> IdentityResponse:
    return IdentityResponse.model_validate(await auth_service.me(context))


@router.patch("/me", response_model=IdentityResponse)
async def update_me(
    payload: UpdateProfileRequest,
    context: CurrentIdentity,
    auth_service: AuthServiceDep,
) -> IdentityResponse:
    return IdentityResponse.model_validate(await auth_service.update_profile(context, payload.name))


@router.post("/change-password", status_code=status.HTTP_204_NO_CONTENT)
async def change_password(
    payload: ChangePasswordRequest,
    context: CurrentIdentity,
    auth_service: AuthServiceDep,
) -> None:
    """Change the caller's password; every refresh token is revoked."""
    await auth_service.change_password(context, payload.current_password, payload.new_password)


@router.post("/validate", response_model=AccessValidationResponse)
async def validate_access(
    context: CurrentIdentity,
    resolver: Annotated[EntitlementResolver, Depends(get_entitlement_resolver)],
    x_api_key: Annotated[Optional[str], Header()] = None,
) -> AccessValidationResponse:
    """
    Called by an external application with its own ``X-API-Key`` and the
    user's bearer token.

    Raises:
        401: invalid_api_key (or any token error)
        403: no_access
    """
    application = await resolver.verify_application_access(context, x_api_key or "")
    logger.info(
        "External access validated",
        identity_id=str(context.identity_id),
        application_id=str(application.id),
    )
    return AccessValidationResponse(
        identity_id=context.identity_id,
        email=context.email,
        role=context.role,
        tenant_id=context.tenant_id,
        application_id=application.id,
    )
