"""Tests for the authentication module."""

from datetime import datetime, timedelta, timezone

import jwt
import pytest
from fastapi.testclient import TestClient

from studyloop.auth.config import AuthSettings, get_auth_settings
from studyloop.auth.dependencies import CurrentUser
from studyloop.auth.token_validator import TokenValidationError, validate_token

TEST_SECRET = "test-secret-for-studyloop-tests-only"


def make_token(claims: dict, secret: str = TEST_SECRET) -> str:
    return jwt.encode(claims, secret, algorithm="HS256")


def create_token(user_id: str, email: str | None = None, expires_in: timedelta = timedelta(days=7)) -> str:
    """Sign a token the way the auth service issues them."""
    now = datetime.now(timezone.utc)
    claims = {"userId": user_id, "iat": now, "exp": now + expires_in}
    if email:
        claims["email"] = email
    return make_token(claims)


class TestAuthSettings:
    """Tests for AuthSettings configuration."""

    def test_is_configured_with_secret(self):
        assert AuthSettings(jwt_secret="s3cret").is_configured() is True

    def test_is_not_configured_without_secret(self):
        assert AuthSettings().is_configured() is False

    @pytest.mark.parametrize("value", ["false", "0", "no", "off", "FALSE"])
    def test_disabled_values(self, monkeypatch, value):
        monkeypatch.setenv("AUTH_ENABLED", value)
        get_auth_settings.cache_clear()
        try:
            assert get_auth_settings().enabled is False
        finally:
            get_auth_settings.cache_clear()


class TestCurrentUser:
    """Tests for CurrentUser model."""

    def test_from_token_claims(self):
        user = CurrentUser.from_token_claims({"userId": "user-123", "email": "jo@example.com"})
        assert user.user_id == "user-123"
        assert user.email == "jo@example.com"

    def test_from_token_claims_sub_fallback(self):
        assert CurrentUser.from_token_claims({"sub": "user-456"}).user_id == "user-456"


class TestValidateToken:
    """Tests for token validation."""

    def test_valid_token(self, auth_enabled_env):
        token = create_token("user-123", email="jo@example.com")
        claims = validate_token(token)
        assert claims["userId"] == "user-123"
        assert claims["email"] == "jo@example.com"

    def test_expired_token(self, auth_enabled_env):
        token = create_token("user-123", expires_in=timedelta(minutes=-5))
        with pytest.raises(TokenValidationError, match="expired"):
            validate_token(token)

    def test_wrong_secret(self, auth_enabled_env):
        exp = datetime.now(timezone.utc) + timedelta(hours=1)
        token = make_token({"userId": "user-123", "exp": exp}, secret="some-other-secret-value-entirely")
        with pytest.raises(TokenValidationError, match="Invalid token"):
            validate_token(token)

    def test_token_without_exp(self, auth_enabled_env):
        with pytest.raises(TokenValidationError):
            validate_token(make_token({"userId": "user-123"}))

    def test_token_without_user(self, auth_enabled_env):
        exp = datetime.now(timezone.utc) + timedelta(hours=1)
        with pytest.raises(TokenValidationError, match="identify a user"):
            validate_token(make_token({"exp": exp}))

    def test_not_configured(self, monkeypatch):
        monkeypatch.setenv("AUTH_ENABLED", "true")
        monkeypatch.delenv("JWT_SECRET", raising=False)
        get_auth_settings.cache_clear()
        try:
            with pytest.raises(TokenValidationError) as exc_info:
                validate_token("anything")
            assert exc_info.value.status_code == 500
        finally:
            get_auth_settings.cache_clear()


class TestAuthenticatedRequests:
    """End-to-end checks of the dependency through the app."""

    @pytest.fixture
    def client(self):
        from studyloop.main import app

        return TestClient(app)

    def test_missing_token_is_401(self, auth_enabled_env, client):
        resp = client.get("/reviews/due")
        assert resp.status_code == 401
        assert resp.json()["detail"] == "Missing authentication token"

    def test_invalid_token_is_401(self, auth_enabled_env, client):
        resp = client.get("/reviews/due", headers={"Authorization": "Bearer not-a-jwt"})
        assert resp.status_code == 401

    def test_valid_token_reaches_route(self, auth_enabled_env, client, monkeypatch):
        from studyloop.routers import reviews as reviews_router

        seen = {}

        class StubRepo:
            def list_by_user(self, user_id, document_id=None):
                seen["user_id"] = user_id
                return []

        monkeypatch.setattr(reviews_router, "get_flashcard_repository", lambda: StubRepo())

        token = create_token("user-from-token")
        resp = client.get("/reviews/due", headers={"Authorization": f"Bearer {token}"})

        assert resp.status_code == 200
        assert seen["user_id"] == "user-from-token"

    def test_dev_header_fallback(self, auth_disabled_env, client):
        resp = client.get("/reviews/due")
        assert resp.status_code == 401
        assert "X-User-Id" in resp.json()["detail"]
