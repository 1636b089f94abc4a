"""
Shared infrastructure for Passgate backend.

This package contains cross-cutting concerns that are used by multiple modules:
- config: Centralized settings management
- database: Supabase client factory
- exceptions: Base exception classes
- log_config: Root logging setup

Note: Business logic should NOT go here. This is for infrastructure only.
"""

from .config import Settings, get_settings
from .database import get_supabase_client, is_database_configured, reset_client_cache
from .exceptions import (
    PassgateError,
    NotFoundError,
    ValidationError,
    ConflictError,
    AuthenticationError,
    InternalError,
)
from .models import AuthenticatedUser

__all__ = [
    "Settings",
    "get_settings",
    "get_supabase_client",
    "is_database_configured",
    "reset_client_cache",
    "PassgateError",
    "NotFoundError",
    "ValidationError",
    "ConflictError",
    "AuthenticationError",
    "InternalError",
    "AuthenticatedUser",
]
