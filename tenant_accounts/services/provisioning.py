"""Per-tenant storage provisioning.

Every tenant (registered user or guest) owns one SQLite database file inside
the tenant storage directory. The file name is the tenant's *storage pointer*.
It is derived from the tenant name alone, so provisioning the same tenant
twice always lands on the same file.
"""

import hashlib
import logging
import re
import threading
import uuid
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from sqlalchemy import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from sqlalchemy.pool import NullPool

from tenant_accounts import models  # noqa: F401  (registers tenant tables on TenantBase)
from tenant_accounts.database import TenantBase, build_engine, build_session_factory
from tenant_accounts.errors import ProvisioningFailed

logger = logging.getLogger(__name__)

GUEST_PREFIX = "guest-"
POINTER_SUFFIX = ".db"
LOCK_STRIPES = 64

_POINTER_PATTERN = re.compile(r"^[a-z0-9_-]{0,40}-[0-9a-f]{64}\.db$")


def storage_pointer_for(tenant_name: str) -> str:
    """Derive the storage pointer for a tenant name.

    A short readable slug keeps the files recognisable on disk; the SHA-256
    digest of the exact name keeps distinct names on distinct files.
    """
    slug = re.sub(r"[^a-z0-9]+", "_", tenant_name.lower()).strip("_")[:40]
    digest = hashlib.sha256(tenant_name.encode("utf-8")).hexdigest()
    return f"{slug}-{digest}{POINTER_SUFFIX}"


def new_guest_name() -> str:
    """Generate a random, non-enumerable guest identity."""
    return f"{GUEST_PREFIX}{uuid.uuid4().hex}"


class TenantStorageProvisioner:
    """Creates and locates isolated tenant databases."""

    def __init__(self, storage_dir: str | Path, busy_timeout: float = 15.0):
        self.storage_dir = Path(storage_dir)
        self.busy_timeout = busy_timeout
        self._locks = [threading.Lock() for _ in range(LOCK_STRIPES)]

    def _lock_for(self, pointer: str) -> threading.Lock:
        return self._locks[int(pointer[-11:-3], 16) % LOCK_STRIPES]

    def _path_for(self, pointer: str) -> Path:
        if not _POINTER_PATTERN.match(pointer):
            raise ProvisioningFailed(f"Malformed storage pointer: {pointer!r}")
        return self.storage_dir / pointer

    @contextmanager
    def _engine_for(self, pointer: str) -> Iterator[Engine]:
        """Engine for one tenant database, held only for the duration of one call.

        NullPool closes the SQLite connection as soon as it is released, so no
        file handle outlives the call.
        """
        url = f"sqlite:///{self._path_for(pointer)}"
        engine = build_engine(url, busy_timeout=self.busy_timeout, poolclass=NullPool)
        try:
            yield engine
        finally:
            engine.dispose()

    def provision(self, tenant_name: str) -> str:
        """Create the tenant's database and schema if absent; return its pointer.

        Safe to call repeatedly and concurrently for the same tenant: existing
        data is kept and schema creation is skipped for tables that exist.
        """
        if not tenant_name:
            raise ProvisioningFailed("Tenant name is required")

        pointer = storage_pointer_for(tenant_name)
        with self._lock_for(pointer):
            try:
                self.storage_dir.mkdir(parents=True, exist_ok=True)
                with self._engine_for(pointer) as engine:
                    TenantBase.metadata.create_all(bind=engine)
            except (OSError, SQLAlchemyError) as e:
                logger.error(f"Failed to provision storage for {pointer}: {e}")
                raise ProvisioningFailed() from e

        logger.info(f"Provisioned tenant storage {pointer}")
        return pointer

    def locate(self, tenant_name: str) -> str | None:
        """Return the tenant's pointer if its storage exists, without creating it."""
        pointer = storage_pointer_for(tenant_name)
        if (self.storage_dir / pointer).is_file():
            return pointer
        return None

    @contextmanager
    def session(self, pointer: str) -> Iterator[Session]:
        """Open a session on an already provisioned tenant database."""
        if not self._path_for(pointer).is_file():
            raise ProvisioningFailed("Tenant storage does not exist")

        with self._engine_for(pointer) as engine:
            db = build_session_factory(engine)()
            try:
                yield db
            finally:
                db.close()

