"""sqlite3 driven from anyio worker threads.

Only ``Database`` uses this module. Each blocking sqlite3 call is
handed to ``anyio.to_thread.run_sync``; the connection is opened with
``check_same_thread=False`` since successive calls may land on
different worker threads, and with ``autocommit=True`` so every
statement commits on its own.
"""

import sqlite3
from collections.abc import Sequence
from functools import partial
from typing import Any

import anyio.to_thread


class AsyncCursor:
    """Result of ``AsyncConnection.execute``; row fetching is off-thread."""

    __slots__ = ("_cursor",)

    def __init__(self, cursor: sqlite3.Cursor) -> None:
        self._cursor = cursor

    @property
    def columns(self) -> list[str]:
        """Column names of the result set (empty for non-queries)."""
        return [column[0] for column in self._cursor.description or ()]

    @property
    def rowcount(self) -> int:
        return self._cursor.rowcount

    @property
    def lastrowid(self) -> int | None:
        return self._cursor.lastrowid

    async def fetchall(self) -> list[tuple[Any, ...]]:
        return await anyio.to_thread.run_sync(self._cursor.fetchall)

    async def fetchone(self) -> tuple[Any, ...] | None:
        return await anyio.to_thread.run_sync(self._cursor.fetchone)


class AsyncConnection:
    __slots__ = ("_conn",)

    def __init__(self, conn: sqlite3.Connection) -> None:
        self._conn = conn

    async def execute(self, sql: str, params: Sequence[Any] = ()) -> AsyncCursor:
        cursor = await anyio.to_thread.run_sync(self._conn.execute, sql, tuple(params))
        return AsyncCursor(cursor)

    async def executescript(self, sql: str) -> None:
        await anyio.to_thread.run_sync(self._conn.executescript, sql)

    async def close(self) -> None:
        await anyio.to_thread.run_sync(self._conn.close)


async def connect(path: str) -> AsyncConnection:
    """Open *path* (or ``:memory:``) in a worker thread."""
    opener = partial(sqlite3.connect, path, autocommit=True, check_same_thread=False)
    return AsyncConnection(await anyio.to_thread.run_sync(opener))
