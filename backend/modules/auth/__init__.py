"""
Authentication module.

Handles registration, login, session token issuing/validation and
current-user lookup.

Public API:
- ICredentialService: Interface for credential operations
- IUserRepository: Interface for identity persistence
- UserView: Outward-facing identity projection
- Auth exceptions: InvalidInputError, InvalidCredentialsError, etc.
"""

from .interfaces import ICredentialService, IUserRepository
from .models import (
    AuthResult,
    LoginRequest,
    SignupRequest,
    TokenPayload,
    UserRecord,
    UserView,
    VerifyTokenRequest,
)
from .exceptions import (
    InvalidInputError,
    WeakCredentialError,
    DuplicateIdentityError,
    InvalidCredentialsError,
    InvalidTokenError,
    MissingTokenError,
    UserNotFoundError,
    InternalAuthError,
    SigningSecretMissingError,
)

__all__ = [
    # Interfaces
    "ICredentialService",
    "IUserRepository",
    # Models
    "AuthResult",
    "LoginRequest",
    "SignupRequest",
    "TokenPayload",
    "UserRecord",
    "UserView",
    "VerifyTokenRequest",
    # Exceptions
    "InvalidInputError",
    "WeakCredentialError",
    "DuplicateIdentityError",
    "InvalidCredentialsError",
    "InvalidTokenError",
    "MissingTokenError",
    "UserNotFoundError",
    "InternalAuthError",
    "SigningSecretMissingError",
]
