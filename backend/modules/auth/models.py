"""
Authentication module data models.

These models define the data structures used by the auth module
and exposed to other modules through the interface.
"""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field, StrictStr
from pydantic.alias_generators import to_camel


# -----------------------------------------------------------------------------
# Request models
# -----------------------------------------------------------------------------
# Fields are optional at the schema level so that a missing field and an
# empty one take the same InvalidInput path in the service. Non-string
# values are still rejected by StrictStr.


class SignupRequest(BaseModel):
    """Registration request body."""

    email: Optional[StrictStr] = None
    password: Optional[StrictStr] = None
    name: Optional[StrictStr] = None

    model_config = ConfigDict(extra="ignore")


class LoginRequest(BaseModel):
    """Login request body."""

    email: Optional[StrictStr] = None
    password: Optional[StrictStr] = None

    model_config = ConfigDict(extra="ignore")


class VerifyTokenRequest(BaseModel):
    """Token verification request body."""

    token: Optional[StrictStr] = None

    model_config = ConfigDict(extra="ignore")


# -----------------------------------------------------------------------------
# Stored identity
# -----------------------------------------------------------------------------


class UserRecord(BaseModel):
    """
    A registered identity as persisted in the user store.

    Internal to the auth module. Anything leaving the module is
    converted to a UserView first, which has no hash field at all.
    """

    id: str = Field(..., description="Identity ID (UUID assigned by the store)")
    email: str = Field(..., description="Normalised login email")
    name: str = Field(..., description="Display name")
    password_hash: str = Field(..., repr=False, description="bcrypt hash")
    phone: str = Field(default="", description="Phone number")
    avatar_url: str = Field(default="", description="Avatar URL")
    created_at: datetime = Field(..., description="Account creation time")

    model_config = {"frozen": True}


class NewUser(BaseModel):
    """Fields supplied by the service when inserting an identity."""

    email: str
    name: str
    password_hash: str = Field(..., repr=False)
    phone: str = ""
    avatar_url: str = ""


# -----------------------------------------------------------------------------
# Outward-facing models
# -----------------------------------------------------------------------------


class UserView(BaseModel):
    """
    Externally safe projection of an identity.

    Serialised with camelCase keys (``avatarUrl``, ``createdAt``).
    ``created_at`` is only populated for the current-user lookup.
    """

    id: str
    email: str
    name: str
    phone: str = ""
    avatar_url: str = ""
    created_at: Optional[datetime] = None

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    @classmethod
    def from_record(cls, record: UserRecord, include_created_at: bool = False) -> "UserView":
        return cls(
            id=record.id,
            email=record.email,
            name=record.name,
            phone=record.phone or "",
            avatar_url=record.avatar_url or "",
            created_at=record.created_at if include_created_at else None,
        )


class TokenPayload(BaseModel):
    """Decoded session token claims."""

    sub: str = Field(..., min_length=1, description="Subject (identity ID)")
    iat: int = Field(..., description="Issued at timestamp")
    exp: int = Field(..., description="Expiration timestamp")


class AuthResult(BaseModel):
    """Outcome of a successful registration or login."""

    token: str
    user: UserView
    message: str = ""


class AuthResponse(BaseModel):
    """Response body for signup and login."""

    success: bool = True
    message: str
    token: str
    user: UserView


class UserResponse(BaseModel):
    """Response body for /me and /verify."""

    success: bool = True
    user: UserView
