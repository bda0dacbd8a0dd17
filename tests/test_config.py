"""Tests for settings validation."""

import pytest
from pydantic import ValidationError

from tenant_accounts.config import PLACEHOLDER_SECRET, Settings


def test_defaults():
    settings = Settings(_env_file=None)
    assert settings.jwt_expiration_minutes == 60
    assert settings.jwt_algorithm == "HS256"
    assert settings.is_development


def test_production_rejects_placeholder_secret():
    with pytest.raises(ValidationError, match="JWT_SECRET must be changed"):
        Settings(_env_file=None, environment="production", jwt_secret=PLACEHOLDER_SECRET)


def test_production_rejects_short_secret():
    with pytest.raises(ValidationError, match="at least 32"):
        Settings(_env_file=None, environment="production", jwt_secret="short")


def test_production_accepts_strong_secret():
    settings = Settings(_env_file=None, environment="production", jwt_secret="x" * 48)
    assert settings.is_production


def test_settings_from_environment(monkeypatch):
    monkeypatch.setenv("TENANT_STORAGE_DIR", "/srv/tenants")
    monkeypatch.setenv("PASSWORD_HASH_ROUNDS", "10")
    settings = Settings(_env_file=None)
    assert settings.tenant_storage_dir == "/srv/tenants"
    assert settings.password_hash_rounds == 10
