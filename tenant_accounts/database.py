"""Database configuration and session management."""

from collections.abc import Generator
from pathlib import Path
from typing import Any

from fastapi import Request
from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker
from sqlalchemy.pool import Pool

# Central registry (users)
Base: Any = declarative_base()

# Schema created inside every tenant's own database
TenantBase: Any = declarative_base()


def build_engine(
    database_url: str, busy_timeout: float = 15.0, poolclass: type[Pool] | None = None
) -> Engine:
    """Create an engine, applying SQLite-specific connection options."""
    if database_url.startswith("sqlite"):
        options: dict[str, Any] = {"poolclass": poolclass} if poolclass else {}
        return create_engine(
            database_url,
            connect_args={"check_same_thread": False, "timeout": busy_timeout},
            **options,
        )
    return create_engine(
        database_url,
        pool_pre_ping=True,
        pool_size=5,
        max_overflow=10,
    )


def build_session_factory(engine: Engine) -> sessionmaker[Session]:
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db(request: Request) -> Generator[Session, None, None]:
    """Dependency that provides a registry database session."""
    db = request.app.state.context.session_factory()
    try:
        yield db
    finally:
        db.close()


def init_db(engine: Engine) -> None:
    """Initialize the registry database by creating all tables."""
    # Import all models here so they are registered with Base.metadata
    from tenant_accounts import models  # noqa: F401

    database = engine.url.database
    if engine.url.get_backend_name() == "sqlite" and database not in (None, "", ":memory:"):
        Path(database).parent.mkdir(parents=True, exist_ok=True)

    Base.metadata.create_all(bind=engine)
