"""Row-level access to the ``users`` table.

The unique index on ``email`` is the only thing that prevents duplicate
accounts; ``create`` surfaces a violation as ``IntegrityError``.
"""

from dataclasses import dataclass

from furever.data import Database

SCHEMA = """
CREATE TABLE IF NOT EXISTS users (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    email TEXT UNIQUE NOT NULL,
    passwordHash TEXT NOT NULL
);
"""


@dataclass(frozen=True, slots=True)
class User:
    id: int
    email: str
    password_hash: str


class UserStore:
    """Prepared queries against ``users(id, email, passwordHash)``."""

    __slots__ = ("_db",)

    def __init__(self, db: Database) -> None:
        self._db = db

    async def create_schema(self) -> None:
        await self._db.execute_script(SCHEMA)

    async def create(self, email: str, password_hash: str) -> int:
        """Insert a user and return its id.

        Raises ``IntegrityError`` if *email* is already registered.
        """
        return await self._db.insert(
            "INSERT INTO users (email, passwordHash) VALUES (?, ?)",
            email,
            password_hash,
        )

    async def find_by_email(self, email: str) -> User | None:
        return await self._db.fetch_one(
            User,
            "SELECT id, email, passwordHash AS password_hash FROM users WHERE email = ?",
            email,
        )

    async def count(self) -> int:
        return await self._db.fetch_val("SELECT COUNT(*) FROM users")
