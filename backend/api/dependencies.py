"""
Dependency injection setup for FastAPI.

This module provides the "container" that wires together the credential
service and its collaborators. Configuration is read once, here, and
passed into constructors; nothing downstream reads settings mid-request.
"""

from typing import TYPE_CHECKING

from shared.config import get_settings

# Type checking imports for interfaces (avoids circular imports)
if TYPE_CHECKING:
    from modules.auth.interfaces import ICredentialService, IUserRepository
    from modules.auth.passwords import PasswordHasher
    from modules.auth.tokens import TokenCodec


class ServiceContainer:
    """
    Container for all service instances.

    Services are created lazily on first access and cached as singletons
    within the container. Use reset() to clear them for testing.
    """

    def __init__(self) -> None:
        self._token_codec: "TokenCodec | None" = None
        self._password_hasher: "PasswordHasher | None" = None
        self._user_repository: "IUserRepository | None" = None
        self._credential_service: "ICredentialService | None" = None

    @property
    def tokens(self) -> "TokenCodec":
        """
        Get the token codec.

        Raises SigningSecretMissingError if JWT_SECRET is not set.
        """
        if self._token_codec is None:
            from modules.auth.tokens import TokenCodec
            self._token_codec = TokenCodec(get_settings().jwt_secret)
        return self._token_codec

    @property
    def passwords(self) -> "PasswordHasher":
        """Get the password hasher."""
        if self._password_hasher is None:
            from modules.auth.passwords import PasswordHasher
            self._password_hasher = PasswordHasher(rounds=get_settings().bcrypt_rounds)
        return self._password_hasher

    @property
    def user_repository(self) -> "IUserRepository":
        """Get the user repository instance."""
        if self._user_repository is None:
            from modules.auth.repository import UserRepository
            from shared.database import get_supabase_client
            self._user_repository = UserRepository(
                get_supabase_client(),
                table=get_settings().users_table,
            )
        return self._user_repository

    @property
    def credentials(self) -> "ICredentialService":
        """Get the credential service instance."""
        if self._credential_service is None:
            from modules.auth.service import CredentialService
            # Token codec first so a missing secret fails before the store is touched
            tokens = self.tokens
            self._credential_service = CredentialService(
                repository=self.user_repository,
                hasher=self.passwords,
                tokens=tokens,
            )
        return self._credential_service

    def reset(self) -> None:
        """
        Reset all cached services.

        This is primarily for testing - allows tests to get fresh
        service instances with different settings.
        """
        self._token_codec = None
        self._password_hasher = None
        self._user_repository = None
        self._credential_service = None


# Module-level container singleton
_container: ServiceContainer | None = None


def get_container() -> ServiceContainer:
    """Get the singleton service container."""
    global _container
    if _container is None:
        _container = ServiceContainer()
    return _container


def reset_container() -> None:
    """
    Reset the service container.

    The next call to get_container() will create a fresh container.
    Primarily used for testing.
    """
    global _container
    _container = None


# FastAPI dependency functions
# These are the functions that should be used in route Depends() calls


def get_credential_service() -> "ICredentialService":
    """FastAPI dependency for the credential service."""
    return get_container().credentials


def get_token_codec() -> "TokenCodec":
    """FastAPI dependency for the token codec."""
    return get_container().tokens
