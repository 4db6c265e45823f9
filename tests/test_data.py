"""Tests for furever.data: typed async database access."""

from dataclasses import dataclass

import pytest

from furever.data import Database, DataError, IntegrityError, QueryError
from furever.data._mapping import map_row, map_rows
from furever.data.database import parse_sqlite_path

# -- Test models --


@dataclass(frozen=True, slots=True)
class Pet:
    id: int
    name: str


# -- Fixtures --


@pytest.fixture
async def db(tmp_path):
    """Create a fresh SQLite database with a pets table."""
    db = Database(f"sqlite:///{tmp_path / 'test.db'}")
    await db.connect()
    await db.execute(
        "CREATE TABLE pets ("
        "  id INTEGER PRIMARY KEY AUTOINCREMENT,"
        "  name TEXT UNIQUE NOT NULL"
        ")"
    )
    yield db
    await db.disconnect()


# =============================================================================
# URL parsing
# =============================================================================


class TestParseSqlitePath:
    def test_file_path(self) -> None:
        assert parse_sqlite_path("sqlite:///data.sqlite") == "data.sqlite"

    def test_memory(self) -> None:
        assert parse_sqlite_path("sqlite:///:memory:") == ":memory:"

    def test_short_form(self) -> None:
        assert parse_sqlite_path("sqlite://data.sqlite") == "data.sqlite"

    def test_unsupported_scheme(self) -> None:
        with pytest.raises(DataError, match="Unsupported database URL"):
            parse_sqlite_path("postgresql://localhost/furever")


# =============================================================================
# Row mapping
# =============================================================================


class TestMapping:
    def test_map_row_ignores_extra_columns(self) -> None:
        pet = map_row(Pet, {"id": 1, "name": "Rex", "species": 0})
        assert pet == Pet(id=1, name="Rex")

    def test_map_rows(self) -> None:
        pets = map_rows(Pet, [{"id": 1, "name": "Rex"}, {"id": 2, "name": "Tom"}])
        assert [p.name for p in pets] == ["Rex", "Tom"]

    def test_non_dataclass_rejected(self) -> None:
        with pytest.raises(TypeError, match="not a dataclass"):
            map_row(dict, {"id": 1})


# =============================================================================
# Queries
# =============================================================================


class TestQueries:
    async def test_insert_returns_row_id(self, db) -> None:
        first = await db.insert("INSERT INTO pets (name) VALUES (?)", "Rex")
        second = await db.insert("INSERT INTO pets (name) VALUES (?)", "Tom")
        assert second == first + 1

    async def test_fetch_maps_rows(self, db) -> None:
        await db.insert("INSERT INTO pets (name) VALUES (?)", "Rex")
        await db.insert("INSERT INTO pets (name) VALUES (?)", "Tom")
        pets = await db.fetch(Pet, "SELECT * FROM pets ORDER BY id")
        assert [p.name for p in pets] == ["Rex", "Tom"]

    async def test_fetch_one(self, db) -> None:
        await db.insert("INSERT INTO pets (name) VALUES (?)", "Rex")
        pet = await db.fetch_one(Pet, "SELECT * FROM pets WHERE name = ?", "Rex")
        assert pet is not None
        assert pet.name == "Rex"

    async def test_fetch_one_missing(self, db) -> None:
        assert await db.fetch_one(Pet, "SELECT * FROM pets WHERE name = ?", "Nobody") is None

    async def test_fetch_val(self, db) -> None:
        await db.insert("INSERT INTO pets (name) VALUES (?)", "Rex")
        assert await db.fetch_val("SELECT COUNT(*) FROM pets") == 1

    async def test_execute_returns_rowcount(self, db) -> None:
        await db.insert("INSERT INTO pets (name) VALUES (?)", "Rex")
        await db.insert("INSERT INTO pets (name) VALUES (?)", "Tom")
        assert await db.execute("DELETE FROM pets") == 2

    async def test_unique_violation_is_integrity_error(self, db) -> None:
        await db.insert("INSERT INTO pets (name) VALUES (?)", "Rex")
        with pytest.raises(IntegrityError):
            await db.insert("INSERT INTO pets (name) VALUES (?)", "Rex")

    async def test_integrity_error_is_query_error(self, db) -> None:
        await db.insert("INSERT INTO pets (name) VALUES (?)", "Rex")
        with pytest.raises(QueryError):
            await db.execute("INSERT INTO pets (name) VALUES (?)", "Rex")

    async def test_bad_sql_is_query_error(self, db) -> None:
        with pytest.raises(QueryError):
            await db.fetch(Pet, "SELECT * FROM no_such_table")

    async def test_execute_script(self, db) -> None:
        await db.execute_script(
            "CREATE TABLE a (x INTEGER); CREATE TABLE b (y INTEGER); INSERT INTO a VALUES (1);"
        )
        assert await db.fetch_val("SELECT x FROM a") == 1


# =============================================================================
# Lifecycle
# =============================================================================


class TestLifecycle:
    async def test_connects_lazily(self, tmp_path) -> None:
        db = Database(f"sqlite:///{tmp_path / 'lazy.db'}")
        assert db.is_connected is False
        assert await db.fetch_val("SELECT 1") == 1
        assert db.is_connected is True
        await db.disconnect()
        assert db.is_connected is False

    async def test_context_manager(self, tmp_path) -> None:
        async with Database(f"sqlite:///{tmp_path / 'ctx.db'}") as db:
            assert db.is_connected is True
        assert db.is_connected is False

    async def test_disconnect_twice_is_safe(self, tmp_path) -> None:
        db = Database(f"sqlite:///{tmp_path / 'twice.db'}")
        await db.connect()
        await db.disconnect()
        await db.disconnect()

    async def test_unopenable_path_is_data_error(self, tmp_path) -> None:
        db = Database(f"sqlite:///{tmp_path / 'missing-dir' / 'x.db'}")
        with pytest.raises(DataError, match="Could not open"):
            await db.connect()
