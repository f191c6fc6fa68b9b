"""Pytest configuration and fixtures."""

import os
import pytest

# Ensure auth is disabled during tests by default
os.environ.setdefault("AUTH_ENABLED", "false")


@pytest.fixture
def auth_disabled_env(monkeypatch):
    """Fixture that ensures AUTH_ENABLED is false."""
    from studyloop.auth.config import get_auth_settings

    monkeypatch.setenv("AUTH_ENABLED", "false")
    get_auth_settings.cache_clear()
    yield
    get_auth_settings.cache_clear()


@pytest.fixture
def auth_enabled_env(monkeypatch):
    """Fixture that enables auth with a test signing secret."""
    from studyloop.auth.config import get_auth_settings

    monkeypatch.setenv("AUTH_ENABLED", "true")
    monkeypatch.setenv("JWT_SECRET", "test-secret-for-studyloop-tests-only")
    monkeypatch.setenv("JWT_ALGORITHM", "HS256")
    get_auth_settings.cache_clear()
    yield
    get_auth_settings.cache_clear()
