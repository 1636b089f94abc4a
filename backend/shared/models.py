"""
Shared data models used across modules.

These models are shared infrastructure, not business logic.
Module-specific models should stay in their respective module directories.
"""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field


class AuthenticatedUser(BaseModel):
    """
    Represents the subject of a validated bearer token.

    Populated by the request-authentication middleware from the token
    claims and handed to route handlers via dependency injection. It only
    proves the token was valid; the backing record may since have gone.
    """

    id: str = Field(..., description="Identity ID (token subject)")
    issued_at: Optional[datetime] = Field(None, description="Token issuance time")
    expires_at: Optional[datetime] = Field(None, description="Token expiry time")

    model_config = {
        "frozen": True,  # Make immutable for safety
        "extra": "ignore",
    }
