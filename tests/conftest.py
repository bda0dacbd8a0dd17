"""Pytest configuration and fixtures."""

import pytest
from fastapi.testclient import TestClient

from tenant_accounts.config import Settings
from tenant_accounts.context import build_context
from tenant_accounts.database import init_db
from tenant_accounts.main import create_app
from tenant_accounts.services.identity import IdentityService

TEST_SECRET = "test-secret-key-that-is-long-enough-for-hs256"


class AuthHeaders(dict):
    """Dict subclass that also stores the account email."""

    def __init__(self, *args, email: str | None = None, **kwargs):
        super().__init__(*args, **kwargs)
        self.email = email


@pytest.fixture
def settings(tmp_path):
    """Settings pointing at throwaway SQLite files under tmp_path."""
    return Settings(
        _env_file=None,
        database_url=f"sqlite:///{tmp_path / 'registry.db'}",
        tenant_storage_dir=str(tmp_path / "tenants"),
        jwt_secret=TEST_SECRET,
        password_hash_rounds=4,
        environment="test",
    )


@pytest.fixture
def context(settings):
    """Service context with the registry schema created."""
    ctx = build_context(settings)
    init_db(ctx.engine)
    yield ctx
    ctx.close()


@pytest.fixture
def db(context):
    """Registry session for one test."""
    session = context.session_factory()
    yield session
    session.close()


@pytest.fixture
def identity(db, context):
    return IdentityService(db, context)


@pytest.fixture
def client(settings):
    """Create a test client against a fresh application."""
    with TestClient(create_app(settings)) as test_client:
        yield test_client


@pytest.fixture
def auth_headers(client):
    """Register a user and return auth headers with the user's email."""
    response = client.post(
        "/api/v1/auth/register",
        json={
            "firstname": "Test",
            "lastname": "User",
            "email": "test@example.com",
            "password": "testpass123",
        },
    )
    assert response.status_code == 201
    token = response.json()["access_token"]

    return AuthHeaders({"Authorization": f"Bearer {token}"}, email="test@example.com")
