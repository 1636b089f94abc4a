"""
Shared test fixtures and utilities.

This module provides common test infrastructure used across all test modules.
"""

import uuid
import pytest
from datetime import datetime, timezone, timedelta
from typing import Optional
import jwt  # PyJWT

from api.app import create_app
from api.dependencies import get_credential_service, get_token_codec, reset_container
from modules.auth.exceptions import DuplicateIdentityError
from modules.auth.models import NewUser, UserRecord
from modules.auth.passwords import PasswordHasher
from modules.auth.service import CredentialService
from modules.auth.tokens import TokenCodec
from shared.config import get_settings
from shared.database import reset_client_cache


# Test JWT secret (only for testing)
TEST_JWT_SECRET = "test-secret-key-for-testing-only"

# Lowest work factor bcrypt accepts, keeps the suite fast
TEST_BCRYPT_ROUNDS = 4


def create_test_token(
    user_id: str = "test-user-123",
    expired: bool = False,
    secret: str = TEST_JWT_SECRET,
) -> str:
    """
    Create a session token the way TokenCodec would.

    Args:
        user_id: Subject to include in the token
        expired: If True, creates an already expired token
        secret: Signing secret

    Returns:
        JWT token string
    """
    now = datetime.now(timezone.utc)
    if expired:
        iat, exp = now - timedelta(days=8), now - timedelta(days=1)
    else:
        iat, exp = now, now + timedelta(days=7)

    payload = {
        "sub": user_id,
        "iat": int(iat.timestamp()),
        "exp": int(exp.timestamp()),
    }
    return jwt.encode(payload, secret, algorithm="HS256")


class InMemoryUserRepository:
    """
    IUserRepository fake backed by a dict.

    ``create`` checks and inserts without yielding, which makes email
    uniqueness atomic under asyncio the same way a unique index is.
    """

    def __init__(self) -> None:
        self.users: dict[str, UserRecord] = {}
        self.create_calls = 0

    def get_by_id(self, user_id: str) -> Optional[UserRecord]:
        return self.users.get(user_id)

    def get_by_email(self, email: str) -> Optional[UserRecord]:
        return self._find(email)

    def _find(self, email: str) -> Optional[UserRecord]:
        for user in self.users.values():
            if user.email == email:
                return user
        return None

    def create(self, user: NewUser) -> UserRecord:
        self.create_calls += 1
        if self._find(user.email) is not None:
            raise DuplicateIdentityError()
        record = UserRecord(
            id=str(uuid.uuid4()),
            email=user.email,
            name=user.name,
            password_hash=user.password_hash,
            phone=user.phone,
            avatar_url=user.avatar_url,
            created_at=datetime.now(timezone.utc),
        )
        self.users[record.id] = record
        return record

    def delete(self, user_id: str) -> None:
        self.users.pop(user_id, None)


@pytest.fixture(autouse=True)
def reset_singletons():
    """Reset cached settings, clients and the service container around each test."""
    get_settings.cache_clear()
    reset_client_cache()
    reset_container()
    yield
    get_settings.cache_clear()
    reset_client_cache()
    reset_container()


@pytest.fixture
def repository() -> InMemoryUserRepository:
    return InMemoryUserRepository()


@pytest.fixture
def hasher() -> PasswordHasher:
    return PasswordHasher(rounds=TEST_BCRYPT_ROUNDS)


@pytest.fixture
def token_codec() -> TokenCodec:
    return TokenCodec(TEST_JWT_SECRET)


@pytest.fixture
def service(repository, hasher, token_codec) -> CredentialService:
    """Credential service wired to the in-memory store."""
    return CredentialService(repository=repository, hasher=hasher, tokens=token_codec)


@pytest.fixture
def app(service, token_codec):
    """Fresh app whose auth dependencies point at the test service."""
    application = create_app()
    application.dependency_overrides[get_credential_service] = lambda: service
    application.dependency_overrides[get_token_codec] = lambda: token_codec
    yield application
    application.dependency_overrides.clear()


@pytest.fixture
def test_user_id() -> str:
    """Provide a consistent test user ID."""
    return "test-user-123"


@pytest.fixture
def auth_token(test_user_id: str) -> str:
    """Create a valid auth token for testing."""
    return create_test_token(user_id=test_user_id)


@pytest.fixture
def auth_headers(auth_token: str) -> dict[str, str]:
    """Create authorization headers with a valid token."""
    return {"Authorization": f"Bearer {auth_token}"}
