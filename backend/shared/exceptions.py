"""
Base exception classes for the Passgate backend.

Each module should define its own exceptions that inherit from these bases.
The API layer maps each family to an HTTP status (see api/errors.py).
"""

from typing import Optional, Any


class PassgateError(Exception):
    """
    Base exception for all Passgate errors.

    All custom exceptions should inherit from this class.
    """

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to a dictionary for API responses."""
        return {
            "success": False,
            "error": self.code,
            "message": self.message,
        }


class NotFoundError(PassgateError):
    """Resource not found."""

    pass


class ValidationError(PassgateError):
    """Input validation failed."""

    pass


class ConflictError(PassgateError):
    """Request conflicts with existing state (e.g. a uniqueness constraint)."""

    pass


class AuthenticationError(PassgateError):
    """Authentication failed (invalid or missing credentials)."""

    pass


class InternalError(PassgateError):
    """
    Unexpected failure inside the backend.

    The message is always a fixed, human-readable string. Collaborator
    error text is logged, never returned.
    """

    pass
