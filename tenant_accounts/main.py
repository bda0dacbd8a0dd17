"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from tenant_accounts.api import auth, transactions
from tenant_accounts.config import Settings, get_settings
from tenant_accounts.context import build_context
from tenant_accounts.database import init_db
from tenant_accounts.errors import AccountServiceError, AuthenticationFailed

logger = logging.getLogger(__name__)


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the application and its service context."""
    settings = settings or get_settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    context = build_context(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Create the registry schema on startup, release engines on shutdown."""
        init_db(context.engine)
        yield
        context.close()

    app = FastAPI(
        title="Tenant Accounts API",
        description="User registry, per-tenant storage provisioning and session tokens",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.context = context

    # CORS middleware for development
    if settings.is_development:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=["http://localhost:3000"],
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    @app.exception_handler(AccountServiceError)
    async def account_service_error_handler(request: Request, exc: AccountServiceError):
        if exc.status_code >= 500:
            logger.error(f"{exc.kind} on {request.method} {request.url.path}: {exc.message}")
        headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, AuthenticationFailed) else None
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict(), headers=headers)

    @app.exception_handler(RequestValidationError)
    async def request_validation_error_handler(request: Request, exc: RequestValidationError):
        errors = exc.errors()
        first = errors[0] if errors else {}
        field = ".".join(str(part) for part in first.get("loc", ())) or "body"
        detail = f"{field}: {first.get('msg', 'invalid value')}"
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"kind": "validation_error", "detail": detail},
        )

    # Register routers
    app.include_router(auth.router)
    app.include_router(transactions.router)

    @app.get("/")
    async def root():
        return {"message": "Welcome to the tenant accounts API"}

    @app.get("/health")
    async def health_check():
        """Health check endpoint."""
        return {"status": "healthy", "environment": settings.environment}

    return app


app = create_app()
