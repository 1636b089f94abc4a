"""
Authentication module exceptions.

These exceptions are raised by the auth module and caught by the API
error handlers to return appropriate HTTP responses. Login and token
verification deliberately reuse one exception (and one message) for
several distinct causes; keep it that way.
"""

from shared.exceptions import (
    AuthenticationError,
    ConflictError,
    InternalError,
    NotFoundError,
    ValidationError,
)


class InvalidInputError(ValidationError):
    """Raised when a request is missing fields or has the wrong shape."""

    def __init__(self, message: str = "Invalid request"):
        super().__init__(message, code="INVALID_INPUT")


class WeakCredentialError(ValidationError):
    """Raised when a password does not meet the strength policy."""

    def __init__(self, min_length: int):
        super().__init__(
            f"Password must be at least {min_length} characters long",
            code="WEAK_CREDENTIAL",
            details={"min_length": min_length},
        )


class DuplicateIdentityError(ConflictError):
    """Raised when an identity with the same email already exists."""

    def __init__(self):
        super().__init__(
            "User with this email already exists",
            code="DUPLICATE_IDENTITY",
        )


class InvalidCredentialsError(AuthenticationError):
    """Raised for an unknown email or a wrong password, indistinguishably."""

    def __init__(self):
        super().__init__("Invalid email or password", code="INVALID_CREDENTIALS")


class InvalidTokenError(AuthenticationError):
    """Raised when a token is malformed, expired, badly signed or dangling."""

    def __init__(self):
        super().__init__("Invalid token", code="INVALID_TOKEN")


class MissingTokenError(AuthenticationError):
    """Raised when no bearer token is provided."""

    def __init__(self, message: str = "Authentication required"):
        super().__init__(message, code="MISSING_TOKEN")


class UserNotFoundError(NotFoundError):
    """Raised when the authenticated subject has no backing record."""

    def __init__(self, user_id: str):
        super().__init__(
            "User not found",
            code="USER_NOT_FOUND",
            details={"user_id": user_id},
        )


class InternalAuthError(InternalError):
    """Raised for any unexpected collaborator failure during an auth operation."""

    def __init__(self, operation: str):
        super().__init__(
            f"Server error during {operation}",
            code="INTERNAL_ERROR",
            details={"operation": operation},
        )


class SigningSecretMissingError(InternalError):
    """Raised when the token signing secret is not configured."""

    def __init__(self):
        super().__init__(
            "Token signing secret is not configured",
            code="CONFIGURATION_ERROR",
        )
