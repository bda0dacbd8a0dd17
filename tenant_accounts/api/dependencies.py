"""FastAPI dependencies for authentication and services."""

from typing import Annotated

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from tenant_accounts.context import ServiceContext
from tenant_accounts.database import get_db
from tenant_accounts.errors import InvalidToken
from tenant_accounts.services.identity import IdentityService
from tenant_accounts.services.tokens import SessionClaims

security = HTTPBearer(auto_error=False)


def get_context(request: Request) -> ServiceContext:
    """Get the service context built at startup."""
    return request.app.state.context


def get_identity_service(
    db: Annotated[Session, Depends(get_db)],
    context: Annotated[ServiceContext, Depends(get_context)],
) -> IdentityService:
    """Get identity service with dependencies."""
    return IdentityService(db, context)


def get_current_claims(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    service: Annotated[IdentityService, Depends(get_identity_service)],
) -> SessionClaims:
    """Get the caller's session claims from the bearer token.

    The credential store is not consulted; the signed token is sufficient.
    """
    if credentials is None:
        raise InvalidToken("Missing bearer token")
    return service.resolve_storage(credentials.credentials)
