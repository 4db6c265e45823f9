"""Typed async database access over SQLite.

Connection URL format::

    sqlite:///path/to/db.sqlite    # SQLite file
    sqlite:///:memory:             # In-memory SQLite

One connection per ``Database``. Statements are serialized through an
``anyio.Lock`` so two requests never drive the connection at once.
"""

from __future__ import annotations

import logging
import sqlite3
import time
from collections.abc import AsyncIterator, Sequence
from contextlib import asynccontextmanager
from typing import Any, TypeVar

import anyio

from furever.data._mapping import map_row, map_rows
from furever.data._sqlite import AsyncConnection, AsyncCursor
from furever.data._sqlite import connect as sqlite_connect
from furever.data.errors import DataError, IntegrityError, QueryError

logger = logging.getLogger("furever.data")

T = TypeVar("T")


def parse_sqlite_path(url: str) -> str:
    """Extract the file path from a sqlite:// URL."""
    # sqlite:///path/to/db  ->  path/to/db
    # sqlite:///:memory:    ->  :memory:
    prefix = "sqlite:///"
    if url.startswith(prefix):
        return url[len(prefix) :]
    prefix_short = "sqlite://"
    if url.startswith(prefix_short):
        return url[len(prefix_short) :]
    msg = f"Unsupported database URL: {url!r}. Supported: sqlite:///path"
    raise DataError(msg)


class Database:
    """Typed async database access.

    Usage::

        db = Database("sqlite:///data.sqlite")
        await db.connect()

        # Fetch one (or None)
        user = await db.fetch_one(User, "SELECT * FROM users WHERE email = ?", email)

        # Execute (INSERT/UPDATE/DELETE): returns rows affected
        await db.execute("INSERT INTO users (email, passwordHash) VALUES (?, ?)", email, h)

        await db.disconnect()
    """

    __slots__ = ("_async_lock", "_conn", "_connect_lock", "_echo", "_path", "url")

    def __init__(self, url: str, /, *, echo: bool = False) -> None:
        self.url = url
        self._path = parse_sqlite_path(url)
        self._echo = echo
        # anyio locks are created lazily: they need a running event loop.
        self._async_lock: anyio.Lock | None = None
        self._connect_lock: anyio.Lock | None = None
        self._conn: AsyncConnection | None = None

    @property
    def is_connected(self) -> bool:
        return self._conn is not None

    # -- Connection management --

    @asynccontextmanager
    async def _connection(self) -> AsyncIterator[AsyncConnection]:
        """Hold the connection for one statement."""
        if self._conn is None:
            await self.connect()
        if self._async_lock is None:
            self._async_lock = anyio.Lock()
        async with self._async_lock:
            assert self._conn is not None
            yield self._conn

    def _log_query(self, sql: str, params: Sequence[Any], elapsed: float) -> None:
        """Log a statement at DEBUG when echo is enabled."""
        if not self._echo:
            return
        ms = elapsed * 1000
        param_str = f"  params={tuple(params)!r}" if params else ""
        logger.debug("%6.1fms  %s%s", ms, sql, param_str)

    @asynccontextmanager
    async def _statement(self, sql: str, params: Sequence[Any]) -> AsyncIterator[AsyncConnection]:
        """Run one statement: translate sqlite3 errors, log when echoing."""
        t0 = time.perf_counter()
        async with self._connection() as conn:
            try:
                yield conn
            except sqlite3.IntegrityError as exc:
                raise IntegrityError(str(exc)) from exc
            except sqlite3.Error as exc:
                raise QueryError(str(exc)) from exc
            finally:
                self._log_query(sql, params, time.perf_counter() - t0)

    # -- Public query API --

    async def fetch(self, cls: type[T], sql: str, /, *params: Any) -> list[T]:
        """Execute a query and return all rows as typed dataclasses."""
        async with self._statement(sql, params) as conn:
            cursor = await conn.execute(sql, params)
            rows = await cursor.fetchall()
        return map_rows(cls, _as_dicts(cursor, rows))

    async def fetch_one(self, cls: type[T], sql: str, /, *params: Any) -> T | None:
        """Execute a query and return the first row, or ``None``."""
        async with self._statement(sql, params) as conn:
            cursor = await conn.execute(sql, params)
            row = await cursor.fetchone()
        if row is None:
            return None
        return map_row(cls, _as_dicts(cursor, [row])[0])

    async def fetch_val(self, sql: str, /, *params: Any) -> Any:
        """Execute a query and return the first column of the first row."""
        async with self._statement(sql, params) as conn:
            cursor = await conn.execute(sql, params)
            row = await cursor.fetchone()
        return None if row is None else row[0]

    async def execute(self, sql: str, /, *params: Any) -> int:
        """Execute a statement and return the number of rows affected.

        Raises ``IntegrityError`` on constraint violations and
        ``QueryError`` for any other SQLite failure.
        """
        async with self._statement(sql, params) as conn:
            cursor = await conn.execute(sql, params)
        return cursor.rowcount

    async def insert(self, sql: str, /, *params: Any) -> int:
        """Execute an INSERT and return the new row id."""
        async with self._statement(sql, params) as conn:
            cursor = await conn.execute(sql, params)
        if cursor.lastrowid is None:
            msg = f"Statement did not insert a row: {sql}"
            raise QueryError(msg)
        return cursor.lastrowid

    async def execute_script(self, sql: str, /) -> None:
        """Execute several statements at once (schema setup)."""
        async with self._statement(sql, ()) as conn:
            await conn.executescript(sql)

    # -- Lifecycle --

    async def connect(self) -> None:
        """Open the connection.

        Called automatically on first query. Call explicitly to fail fast
        at startup.
        """
        if self._conn is not None:
            return
        if self._connect_lock is None:
            self._connect_lock = anyio.Lock()
        async with self._connect_lock:
            if self._conn is not None:
                return
            try:
                conn = await sqlite_connect(self._path)
                await conn.execute("PRAGMA journal_mode=WAL")
                await conn.execute("PRAGMA foreign_keys=ON")
            except sqlite3.Error as exc:
                msg = f"Could not open {self.url!r}: {exc}"
                raise DataError(msg) from exc
            self._conn = conn
        logger.debug("Connected to %s", self.url)

    async def disconnect(self) -> None:
        """Close the connection."""
        if self._conn is None:
            return
        conn, self._conn = self._conn, None
        await conn.close()

    # -- Context manager --

    async def __aenter__(self) -> Database:
        await self.connect()
        return self

    async def __aexit__(self, *_: Any) -> None:
        await self.disconnect()


def _as_dicts(cursor: AsyncCursor, rows: list[Any]) -> list[dict[str, Any]]:
    columns = cursor.columns
    return [dict(zip(columns, row, strict=True)) for row in rows]
