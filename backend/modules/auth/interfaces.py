"""
Authentication module interfaces.

The API layer depends on ICredentialService, not the concrete
implementation, and the service depends on IUserRepository rather than
on Supabase. This keeps both sides swappable in tests.
"""

from typing import Protocol, Optional, runtime_checkable

from .models import (
    AuthResult,
    LoginRequest,
    NewUser,
    SignupRequest,
    UserRecord,
    UserView,
)


@runtime_checkable
class IUserRepository(Protocol):
    """
    Persistence contract for identities.

    Implementations must enforce email uniqueness atomically and report
    a violation by raising DuplicateIdentityError from ``create``.
    """

    def get_by_id(self, user_id: str) -> Optional[UserRecord]:
        """Return the identity with this ID, or None."""
        ...

    def get_by_email(self, email: str) -> Optional[UserRecord]:
        """Return the identity with this (normalised) email, or None."""
        ...

    def create(self, user: NewUser) -> UserRecord:
        """
        Insert a new identity.

        Returns:
            The stored record with its generated ID and creation time

        Raises:
            DuplicateIdentityError: If the email is already taken
        """
        ...


@runtime_checkable
class ICredentialService(Protocol):
    """
    Interface for credential operations.

    This protocol defines the contract that the auth module exposes
    to the API layer.
    """

    async def register(self, request: SignupRequest) -> AuthResult:
        """
        Register a new identity and issue a session token.

        Raises:
            InvalidInputError: If email, password or name is missing
            WeakCredentialError: If the password is too short
            DuplicateIdentityError: If the email is already registered
            InternalAuthError: On any unexpected failure
        """
        ...

    async def authenticate(self, request: LoginRequest) -> AuthResult:
        """
        Check an email/password pair and issue a session token.

        Raises:
            InvalidInputError: If email or password is missing
            InvalidCredentialsError: Unknown email or wrong password
            InternalAuthError: On any unexpected failure
        """
        ...

    async def get_current_user(self, user_id: str) -> UserView:
        """
        Look up the identity behind an already validated token subject.

        Raises:
            UserNotFoundError: If the identity no longer exists
            InternalAuthError: On any unexpected failure
        """
        ...

    async def verify_token(self, token: Optional[str]) -> UserView:
        """
        Validate a raw token and resolve it to a live identity.

        Raises:
            InvalidInputError: If the token is empty
            InvalidTokenError: Bad signature, expired, or dangling subject
            InternalAuthError: On any unexpected failure
        """
        ...
