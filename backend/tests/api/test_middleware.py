"""
Tests for bearer token authentication middleware.
"""

import pytest
from datetime import datetime, timezone
from fastapi.security import HTTPAuthorizationCredentials

from api.middleware.auth import get_current_user, get_user_from_payload
from modules.auth.exceptions import InvalidTokenError, MissingTokenError
from modules.auth.models import TokenPayload

from tests.conftest import create_test_token


def bearer(token: str) -> HTTPAuthorizationCredentials:
    return HTTPAuthorizationCredentials(scheme="Bearer", credentials=token)


class TestGetCurrentUser:
    @pytest.mark.asyncio
    async def test_valid_token(self, token_codec):
        """Valid token should resolve to its subject."""
        user = await get_current_user(bearer(create_test_token()), token_codec)
        assert user.id == "test-user-123"
        assert user.expires_at > datetime.now(timezone.utc)

    @pytest.mark.asyncio
    async def test_missing_credentials(self, token_codec):
        with pytest.raises(MissingTokenError):
            await get_current_user(None, token_codec)

    @pytest.mark.asyncio
    async def test_expired_token(self, token_codec):
        with pytest.raises(InvalidTokenError):
            await get_current_user(bearer(create_test_token(expired=True)), token_codec)

    @pytest.mark.asyncio
    async def test_invalid_token(self, token_codec):
        with pytest.raises(InvalidTokenError):
            await get_current_user(bearer("invalid-token"), token_codec)


class TestTokenPayloadConversion:
    def test_get_user_from_payload(self):
        """Should convert payload to AuthenticatedUser."""
        payload = TokenPayload(sub="user-123", iat=1704067200, exp=1704672000)
        user = get_user_from_payload(payload)
        assert user.id == "user-123"
        assert user.issued_at == datetime(2024, 1, 1, tzinfo=timezone.utc)
        assert user.expires_at == datetime(2024, 1, 8, tzinfo=timezone.utc)


class TestMissingSecret:
    def test_protected_route_without_secret(self, monkeypatch):
        """With no JWT_SECRET configured, /auth/me fails as a server error."""
        from fastapi.testclient import TestClient
        from api.app import create_app

        monkeypatch.delenv("JWT_SECRET", raising=False)
        client = TestClient(create_app())

        response = client.get(
            "/auth/me",
            headers={"Authorization": f"Bearer {create_test_token()}"},
        )

        assert response.status_code == 500
        assert response.json()["error"] == "CONFIGURATION_ERROR"
