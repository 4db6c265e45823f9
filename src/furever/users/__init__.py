"""User accounts: rows in the ``users`` table."""

from furever.users.store import SCHEMA, User, UserStore

__all__ = ["SCHEMA", "User", "UserStore"]
