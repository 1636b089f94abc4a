"""Tests for the Supabase user repository."""

import pytest
from unittest.mock import MagicMock
from datetime import datetime, timezone

from postgrest.exceptions import APIError

from modules.auth.exceptions import DuplicateIdentityError
from modules.auth.models import NewUser
from modules.auth.repository import UserRepository


def create_mock_user_data(
    user_id: str = "5b0f3c1e-0000-4000-8000-000000000001",
    email: str = "a@x.com",
    **overrides,
) -> dict:
    """Helper to create a mock users row."""
    data = {
        "id": user_id,
        "email": email,
        "name": "A",
        "password_hash": "$2b$04$abcdefghijklmnopqrstuu",
        "phone": "",
        "avatar_url": "",
        "created_at": datetime.now(timezone.utc).isoformat(),
    }
    data.update(overrides)
    return data


@pytest.fixture
def mock_db() -> MagicMock:
    return MagicMock()


@pytest.fixture
def repo(mock_db) -> UserRepository:
    return UserRepository(mock_db)


def select_chain(mock_db: MagicMock) -> MagicMock:
    return mock_db.table.return_value.select.return_value.eq.return_value.limit.return_value.execute


class TestGetById:
    def test_found(self, repo, mock_db):
        select_chain(mock_db).return_value.data = [create_mock_user_data()]

        record = repo.get_by_id("5b0f3c1e-0000-4000-8000-000000000001")

        assert record is not None
        assert record.id == "5b0f3c1e-0000-4000-8000-000000000001"
        assert record.email == "a@x.com"
        mock_db.table.assert_called_with("users")
        mock_db.table.return_value.select.return_value.eq.assert_called_with(
            "id", "5b0f3c1e-0000-4000-8000-000000000001"
        )

    def test_not_found(self, repo, mock_db):
        select_chain(mock_db).return_value.data = []
        assert repo.get_by_id("missing") is None

    def test_malformed_id_is_not_found(self, repo, mock_db):
        """Postgres rejects a non-UUID id; that just means no such user."""
        select_chain(mock_db).side_effect = APIError(
            {"code": "22P02", "message": "invalid input syntax for type uuid"}
        )
        assert repo.get_by_id("not-a-uuid") is None

    def test_other_errors_propagate(self, repo, mock_db):
        select_chain(mock_db).side_effect = APIError({"code": "08006", "message": "connection failure"})
        with pytest.raises(APIError):
            repo.get_by_id("5b0f3c1e-0000-4000-8000-000000000001")


class TestGetByEmail:
    def test_found(self, repo, mock_db):
        select_chain(mock_db).return_value.data = [create_mock_user_data()]

        record = repo.get_by_email("a@x.com")

        assert record.email == "a@x.com"
        mock_db.table.return_value.select.return_value.eq.assert_called_with("email", "a@x.com")

    def test_not_found(self, repo, mock_db):
        select_chain(mock_db).return_value.data = []
        assert repo.get_by_email("b@x.com") is None

    def test_null_optional_fields_become_empty(self, repo, mock_db):
        select_chain(mock_db).return_value.data = [
            create_mock_user_data(phone=None, avatar_url=None)
        ]

        record = repo.get_by_email("a@x.com")

        assert record.phone == ""
        assert record.avatar_url == ""


class TestCreate:
    def test_create(self, repo, mock_db):
        mock_db.table.return_value.insert.return_value.execute.return_value.data = [
            create_mock_user_data()
        ]

        record = repo.create(NewUser(email="a@x.com", name="A", password_hash="hash"))

        assert record.id == "5b0f3c1e-0000-4000-8000-000000000001"
        inserted = mock_db.table.return_value.insert.call_args[0][0]
        assert inserted == {
            "email": "a@x.com",
            "name": "A",
            "password_hash": "hash",
            "phone": "",
            "avatar_url": "",
        }
        assert "id" not in inserted
        assert "created_at" not in inserted

    def test_unique_violation_becomes_duplicate(self, repo, mock_db):
        mock_db.table.return_value.insert.return_value.execute.side_effect = APIError(
            {"code": "23505", "message": "duplicate key value violates unique constraint"}
        )

        with pytest.raises(DuplicateIdentityError):
            repo.create(NewUser(email="a@x.com", name="A", password_hash="hash"))

    def test_other_insert_errors_propagate(self, repo, mock_db):
        mock_db.table.return_value.insert.return_value.execute.side_effect = APIError(
            {"code": "42501", "message": "permission denied"}
        )

        with pytest.raises(APIError):
            repo.create(NewUser(email="a@x.com", name="A", password_hash="hash"))

    def test_custom_table_name(self, mock_db):
        repo = UserRepository(mock_db, table="identities")
        mock_db.table.return_value.select.return_value.eq.return_value.limit.return_value.execute.return_value.data = []

        repo.get_by_email("a@x.com")

        mock_db.table.assert_called_with("identities")
