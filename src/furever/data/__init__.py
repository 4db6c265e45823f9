"""Typed async database access for furever.

SQL in, frozen dataclasses out. Not an ORM.

Basic usage::

    from furever.data import Database

    db = Database("sqlite:///data.sqlite")

    @dataclass(frozen=True, slots=True)
    class User:
        id: int
        email: str

    user = await db.fetch_one(User, "SELECT id, email FROM users WHERE email = ?", email)
"""

from furever.data.database import Database
from furever.data.errors import DataError, IntegrityError, QueryError

__all__ = ["DataError", "Database", "IntegrityError", "QueryError"]
