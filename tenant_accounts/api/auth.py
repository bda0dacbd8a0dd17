"""Authentication API endpoints."""

from typing import Annotated, Any

from fastapi import APIRouter, Body, Depends, status

from tenant_accounts.api.dependencies import get_current_claims, get_identity_service
from tenant_accounts.schemas.auth import (
    AuthResponse,
    ErrorResponse,
    GuestResponse,
    StorageResponse,
)
from tenant_accounts.services.identity import IdentityService
from tenant_accounts.services.tokens import SessionClaims

router = APIRouter(
    prefix="/api/v1/auth",
    tags=["auth"],
    responses={
        status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse},
        status.HTTP_401_UNAUTHORIZED: {"model": ErrorResponse},
        status.HTTP_500_INTERNAL_SERVER_ERROR: {"model": ErrorResponse},
    },
)


# Bodies are taken as raw mappings and validated by the identity service, so
# that missing and malformed fields map onto the service's own error kinds.


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def register(
    data: Annotated[dict[str, Any], Body()],
    service: Annotated[IdentityService, Depends(get_identity_service)],
):
    """Register a new user and provision their storage."""
    result = service.register(data)
    return AuthResponse(email=result.email, access_token=result.access_token)


@router.post("/login", response_model=AuthResponse)
def login(
    data: Annotated[dict[str, Any], Body()],
    service: Annotated[IdentityService, Depends(get_identity_service)],
):
    """Login with email and password."""
    result = service.login(data)
    return AuthResponse(email=result.email, access_token=result.access_token)


@router.post("/guest", response_model=GuestResponse, status_code=status.HTTP_201_CREATED)
def guest_login(
    service: Annotated[IdentityService, Depends(get_identity_service)],
):
    """Start a guest session with its own fresh storage."""
    session = service.guest_login()
    return GuestResponse(guest_name=session.guest_name, access_token=session.access_token)


@router.get("/storage", response_model=StorageResponse)
def resolve_storage(
    claims: Annotated[SessionClaims, Depends(get_current_claims)],
):
    """Get the storage bound to the caller's session token."""
    return StorageResponse(
        tenant=claims.tenant,
        storage_pointer=claims.storage_pointer,
        guest=claims.guest,
    )
