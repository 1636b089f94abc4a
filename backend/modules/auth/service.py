"""
Credential service implementation.

Orchestrates registration, login, token verification and current-user
lookup on top of three injected collaborators: the user repository, the
password hasher and the token codec.
"""

import logging
from contextlib import contextmanager
from typing import Iterator, Optional

from shared.exceptions import PassgateError

from .interfaces import ICredentialService, IUserRepository
from .models import (
    AuthResult,
    LoginRequest,
    NewUser,
    SignupRequest,
    UserView,
)
from .exceptions import (
    DuplicateIdentityError,
    InternalAuthError,
    InvalidCredentialsError,
    InvalidInputError,
    InvalidTokenError,
    UserNotFoundError,
    WeakCredentialError,
)
from .passwords import MAX_PASSWORD_BYTES, PasswordHasher
from .tokens import TokenCodec

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 6


def normalise_email(email: Optional[str]) -> str:
    """Strip surrounding whitespace and lower-case an email address."""
    return (email or "").strip().lower()


@contextmanager
def _service_boundary(operation: str) -> Iterator[None]:
    """
    Translate anything outside the auth error taxonomy into InternalAuthError.

    The original error is logged with its traceback and chained, but its
    text never reaches the caller.
    """
    try:
        yield
    except PassgateError:
        raise
    except Exception as e:
        logger.exception(f"Unexpected failure during {operation}")
        raise InternalAuthError(operation) from e


class CredentialService(ICredentialService):
    """
    Credential service backed by an IUserRepository.

    Holds no per-request state; every call reads or writes through the
    repository, so a single instance can serve concurrent requests.
    """

    def __init__(
        self,
        repository: IUserRepository,
        hasher: PasswordHasher,
        tokens: TokenCodec,
    ):
        self._users = repository
        self._hasher = hasher
        self._tokens = tokens
        # Verified against on unknown-email logins so both failure paths cost one bcrypt check
        self._dummy_hash = hasher.hash("passgate-timing-equaliser")

    async def register(self, request: SignupRequest) -> AuthResult:
        """
        Register a new identity.

        Validation and the duplicate pre-check run before anything is
        written. The repository's unique index is the second line of
        defence for concurrent registrations of the same email.
        """
        email = normalise_email(request.email)
        name = (request.name or "").strip()
        password = request.password or ""

        if not email or not password or not name:
            raise InvalidInputError("Email, password, and name are required")
        if len(password) < MIN_PASSWORD_LENGTH:
            raise WeakCredentialError(MIN_PASSWORD_LENGTH)
        if len(password.encode("utf-8")) > MAX_PASSWORD_BYTES:
            raise InvalidInputError(
                f"Password must be at most {MAX_PASSWORD_BYTES} bytes long"
            )

        with _service_boundary("registration"):
            if self._users.get_by_email(email) is not None:
                logger.info("Registration rejected: email already registered")
                raise DuplicateIdentityError()

            password_hash = await self._hasher.hash_async(password)
            record = self._users.create(
                NewUser(email=email, name=name, password_hash=password_hash)
            )
            token = self._tokens.issue(record.id)

        logger.info(f"Registered user {record.id}")
        return AuthResult(
            token=token,
            user=UserView.from_record(record),
            message="User registered successfully",
        )

    async def authenticate(self, request: LoginRequest) -> AuthResult:
        """
        Log in with email and password.

        An unknown email and a wrong password raise the same
        InvalidCredentialsError so callers cannot probe for accounts.
        """
        email = normalise_email(request.email)
        password = request.password or ""

        if not email or not password:
            raise InvalidInputError("Email and password are required")

        with _service_boundary("login"):
            record = self._users.get_by_email(email)
            if record is None:
                await self._hasher.verify_async(password, self._dummy_hash)
                logger.info("Login rejected")
                raise InvalidCredentialsError()

            if not await self._hasher.verify_async(password, record.password_hash):
                logger.info(f"Login rejected for user {record.id}")
                raise InvalidCredentialsError()

            token = self._tokens.issue(record.id)

        logger.info(f"Login: {record.id}")
        return AuthResult(
            token=token,
            user=UserView.from_record(record),
            message="Login successful",
        )

    async def get_current_user(self, user_id: str) -> UserView:
        """Get the identity behind an already validated token subject."""
        with _service_boundary("user lookup"):
            record = self._users.get_by_id(user_id)

        if record is None:
            raise UserNotFoundError(user_id)
        return UserView.from_record(record, include_created_at=True)

    async def verify_token(self, token: Optional[str]) -> UserView:
        """
        Validate a raw token and resolve it to a live identity.

        A token whose subject no longer exists is reported exactly like a
        forged or expired one.
        """
        if not token:
            raise InvalidInputError("Token is required")

        payload = self._tokens.decode(token)

        with _service_boundary("token verification"):
            record = self._users.get_by_id(payload.sub)

        if record is None:
            logger.info(f"Token subject {payload.sub} no longer exists")
            raise InvalidTokenError()
        return UserView.from_record(record)
