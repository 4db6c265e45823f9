"""Tests for furever.users: the users table."""

import pytest

from furever.data import Database, IntegrityError
from furever.users import User, UserStore


@pytest.fixture
async def users(tmp_path):
    db = Database(f"sqlite:///{tmp_path / 'users.db'}")
    store = UserStore(db)
    await store.create_schema()
    yield store
    await db.disconnect()


class TestUserStore:
    async def test_create_and_find(self, users) -> None:
        user_id = await users.create("a@example.com", "hash-a")
        user = await users.find_by_email("a@example.com")
        assert user == User(id=user_id, email="a@example.com", password_hash="hash-a")

    async def test_find_missing(self, users) -> None:
        assert await users.find_by_email("nobody@example.com") is None

    async def test_duplicate_email_rejected(self, users) -> None:
        await users.create("a@example.com", "hash-a")
        with pytest.raises(IntegrityError):
            await users.create("a@example.com", "hash-b")
        assert await users.count() == 1

    async def test_ids_are_distinct(self, users) -> None:
        first = await users.create("a@example.com", "h")
        second = await users.create("b@example.com", "h")
        assert first != second
        assert await users.count() == 2

    async def test_schema_is_idempotent(self, users) -> None:
        await users.create("a@example.com", "h")
        await users.create_schema()
        assert await users.count() == 1
