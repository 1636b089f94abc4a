"""
Bearer token authentication middleware.

Validates session tokens and exposes the token subject to route handlers.
It does not touch the user store; routes that need the full record look it
up through the credential service.
"""

from datetime import datetime, timezone
from typing import Optional
from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from modules.auth.exceptions import MissingTokenError
from modules.auth.models import TokenPayload
from modules.auth.tokens import TokenCodec
from shared.models import AuthenticatedUser

from ..dependencies import get_token_codec

# Bearer token extractor. auto_error=False so a missing or non-Bearer
# header reaches our own MissingTokenError instead of FastAPI's 403.
bearer_scheme = HTTPBearer(auto_error=False)


def get_user_from_payload(payload: TokenPayload) -> AuthenticatedUser:
    """
    Convert token claims to an AuthenticatedUser.

    Args:
        payload: Decoded token claims

    Returns:
        AuthenticatedUser instance
    """
    return AuthenticatedUser(
        id=payload.sub,
        issued_at=datetime.fromtimestamp(payload.iat, tz=timezone.utc),
        expires_at=datetime.fromtimestamp(payload.exp, tz=timezone.utc),
    )


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    tokens: TokenCodec = Depends(get_token_codec),
) -> AuthenticatedUser:
    """
    Dependency that requires authentication.

    Raises MissingTokenError when the Authorization header is absent or
    malformed, and InvalidTokenError when the token fails validation.

    Usage:
        @router.get("/protected")
        async def protected_route(user: AuthenticatedUser = Depends(get_current_user)):
            return {"user_id": user.id}
    """
    if credentials is None or not credentials.credentials:
        raise MissingTokenError("Missing or malformed authorization header")

    payload = tokens.decode(credentials.credentials)
    return get_user_from_payload(payload)
