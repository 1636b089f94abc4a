"""
User repository for database access.

Encapsulates all Supabase queries and data mapping for the ``users`` table.
The table carries a unique index on ``email`` (migrations/001_create_users.sql);
that index is the final arbiter when two registrations race.
"""

import logging
from typing import Optional, Any

from postgrest.exceptions import APIError
from supabase import Client

from shared.repository import BaseRepository, UNIQUE_VIOLATION
from .exceptions import DuplicateIdentityError
from .models import NewUser, UserRecord

logger = logging.getLogger(__name__)

# Postgres SQLSTATE for a malformed literal, e.g. a non-UUID id
INVALID_TEXT_REPRESENTATION = "22P02"


class UserRepository(BaseRepository[UserRecord]):
    """
    Repository for identity data access.

    All methods return UserRecord models mapped from database rows.
    Any PostgREST error other than the ones handled below propagates.
    """

    def __init__(self, db: Client, table: str = "users") -> None:
        super().__init__(db)
        self._table = table

    def get_by_id(self, user_id: str) -> Optional[UserRecord]:
        """
        Get an identity by ID.

        Args:
            user_id: The identity UUID.

        Returns:
            UserRecord, or None if not found or the ID is not a valid UUID.
        """
        try:
            result = (
                self._db.table(self._table)
                .select("*")
                .eq("id", user_id)
                .limit(1)
                .execute()
            )
        except APIError as e:
            if e.code == INVALID_TEXT_REPRESENTATION:
                return None
            raise

        if not result.data:
            return None
        return self._map_to_record(result.data[0])

    def get_by_email(self, email: str) -> Optional[UserRecord]:
        """
        Get an identity by its normalised email.

        Returns:
            UserRecord, or None if no identity uses this email.
        """
        result = (
            self._db.table(self._table)
            .select("*")
            .eq("email", email)
            .limit(1)
            .execute()
        )
        if not result.data:
            return None
        return self._map_to_record(result.data[0])

    def create(self, user: NewUser) -> UserRecord:
        """
        Insert a new identity record.

        Returns:
            Created UserRecord with generated ID and timestamp.

        Raises:
            DuplicateIdentityError: If the unique email index rejects the row.
        """
        data = {
            "email": user.email,
            "name": user.name,
            "password_hash": user.password_hash,
            "phone": user.phone,
            "avatar_url": user.avatar_url,
        }
        try:
            result = self._db.table(self._table).insert(data).execute()
        except APIError as e:
            if e.code == UNIQUE_VIOLATION:
                logger.info("Unique index rejected duplicate registration")
                raise DuplicateIdentityError() from e
            raise

        return self._map_to_record(result.data[0])

    # -------------------------------------------------------------------------
    # Mapping helpers
    # -------------------------------------------------------------------------

    def _map_to_record(self, data: dict[str, Any]) -> UserRecord:
        """Map database row to UserRecord model."""
        return UserRecord(
            id=str(data["id"]),
            email=data["email"],
            name=data["name"],
            password_hash=data["password_hash"],
            phone=data.get("phone") or "",
            avatar_url=data.get("avatar_url") or "",
            created_at=data["created_at"],
        )
