"""
Session token issuing and validation.

Tokens are HS256 JWTs carrying the identity ID as ``sub`` plus ``iat``
and ``exp``. They are never stored; a token stops working only when it
expires or the signing secret changes.
"""

import logging
from datetime import datetime, timedelta, timezone

import jwt
from pydantic import ValidationError as PydanticValidationError

from .exceptions import InvalidTokenError, SigningSecretMissingError
from .models import TokenPayload

logger = logging.getLogger(__name__)

TOKEN_ALGORITHM = "HS256"
TOKEN_LIFETIME = timedelta(days=7)


class TokenCodec:
    """
    Signs and validates session tokens with a single shared secret.

    The secret is injected at construction. An empty secret is refused
    immediately so nothing is ever signed with a blank key.
    """

    def __init__(self, secret: str, lifetime: timedelta = TOKEN_LIFETIME):
        if not secret:
            raise SigningSecretMissingError()
        self._secret = secret
        self._lifetime = lifetime

    def issue(self, user_id: str) -> str:
        """Create a signed token for ``user_id`` valid for the configured lifetime."""
        now = datetime.now(timezone.utc)
        payload = {
            "sub": user_id,
            "iat": int(now.timestamp()),
            "exp": int((now + self._lifetime).timestamp()),
        }
        return jwt.encode(payload, self._secret, algorithm=TOKEN_ALGORITHM)

    def decode(self, token: str) -> TokenPayload:
        """
        Validate a token's signature and expiry and return its claims.

        Raises:
            InvalidTokenError: For any malformed, tampered or expired token.
                Expiry is not reported separately.
        """
        try:
            claims = jwt.decode(
                token,
                self._secret,
                algorithms=[TOKEN_ALGORITHM],
                options={"require": ["sub", "iat", "exp"]},
            )
            return TokenPayload(**claims)
        except jwt.ExpiredSignatureError:
            logger.debug("Rejected expired token")
            raise InvalidTokenError()
        except jwt.InvalidTokenError as e:
            logger.debug(f"Rejected invalid token: {e}")
            raise InvalidTokenError()
        except PydanticValidationError:
            logger.debug("Rejected token with malformed claims")
            raise InvalidTokenError()
