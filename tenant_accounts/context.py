"""Service context shared by every request."""

import logging
from dataclasses import dataclass
from datetime import timedelta

from sqlalchemy import Engine
from sqlalchemy.orm import Session, sessionmaker

from tenant_accounts.config import Settings
from tenant_accounts.database import build_engine, build_session_factory
from tenant_accounts.services.passwords import PasswordHasher
from tenant_accounts.services.provisioning import TenantStorageProvisioner
from tenant_accounts.services.tokens import SessionTokens

logger = logging.getLogger(__name__)


@dataclass
class ServiceContext:
    """Long-lived collaborators, built once at startup and injected."""

    settings: Settings
    engine: Engine
    session_factory: sessionmaker[Session]
    passwords: PasswordHasher
    tokens: SessionTokens
    provisioner: TenantStorageProvisioner

    def close(self) -> None:
        self.engine.dispose()


def build_context(settings: Settings) -> ServiceContext:
    """Build the service context from settings."""
    engine = build_engine(settings.database_url, busy_timeout=settings.database_busy_timeout)
    logger.info(f"Registry at {engine.url.render_as_string(hide_password=True)}")
    return ServiceContext(
        settings=settings,
        engine=engine,
        session_factory=build_session_factory(engine),
        passwords=PasswordHasher(rounds=settings.password_hash_rounds),
        tokens=SessionTokens(
            settings.jwt_secret,
            algorithm=settings.jwt_algorithm,
            ttl=timedelta(minutes=settings.jwt_expiration_minutes),
        ),
        provisioner=TenantStorageProvisioner(
            settings.tenant_storage_dir,
            busy_timeout=settings.database_busy_timeout,
        ),
    )
