"""
Auth endpoints: signup, password login, provider login & logout.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, status

from storefront.api.v1.deps import get_auth_service
from storefront.schemas.auth import (
    AuthResponse,
    LoginRequest,
    ProviderLoginRequest,
    SignupRequest,
)
from storefront.schemas.common import OkResponse
from storefront.services.auth import AuthService

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/signup", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
async def signup(
    body: SignupRequest | None = None,
    service: AuthService = Depends(get_auth_service),
) -> AuthResponse:
    """Create a password account and return its first session."""
    body = body or SignupRequest()
    return await service.signup(
        name=body.name,
        email=body.email,
        password=body.password,
        role=body.role,
        access_code=body.access_code,
    )


@router.post("/login", response_model=AuthResponse)
async def login(
    body: LoginRequest | None = None,
    service: AuthService = Depends(get_auth_service),
) -> AuthResponse:
    body = body or LoginRequest()
    return await service.login(email=body.email, password=body.password)


@router.post("/provider", response_model=AuthResponse)
async def provider_login(
    body: ProviderLoginRequest | None = None,
    service: AuthService = Depends(get_auth_service),
) -> AuthResponse:
    """Sign in with an identity asserted by an OAuth provider, creating
    the account on first use."""
    body = body or ProviderLoginRequest()
    return await service.provider_login(email=body.email, name=body.name, provider=body.provider)


@router.post("/logout", response_model=OkResponse)
async def logout(service: AuthService = Depends(get_auth_service)) -> OkResponse:
    """Nothing to invalidate server-side; the client discards its token."""
    await service.logout()
    return OkResponse()
