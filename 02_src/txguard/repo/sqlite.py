"""SQLite repository with per-context transaction tracking."""

import asyncio
from collections.abc import AsyncIterator, Iterable
from contextlib import asynccontextmanager
from contextvars import ContextVar
from pathlib import Path
from typing import Any

import aiosqlite

from ..logging_config import get_logger

logger = get_logger(__name__)


class SQLiteRepo:
    """aiosqlite-backed repository usable as a monitored resource manager.

    A transaction is active only for the task that opened it (and tasks
    spawned from inside it), so concurrent work on other tasks is never
    reported as transactional.
    """

    def __init__(self, db_path: str | Path = ":memory:", name: str = "sqlite"):
        self._db_path = db_path
        self.name = name
        self._conn: aiosqlite.Connection | None = None
        self._tx_lock = asyncio.Lock()
        self._active: ContextVar[bool] = ContextVar(f"txguard_repo_{name}", default=False)

    async def init(self) -> None:
        """Open the database connection in autocommit mode."""
        # isolation_level=None: BEGIN/COMMIT are issued explicitly by transaction()
        self._conn = await aiosqlite.connect(self._db_path, isolation_level=None)

    async def close(self) -> None:
        """Close database connection."""
        if self._conn:
            await self._conn.close()
            self._conn = None

    def in_transaction(self) -> bool:
        """Return True if the calling context has an open transaction."""
        return self._active.get()

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[aiosqlite.Connection]:
        """Run the block inside a transaction; nested calls join the outer one."""
        conn = self._require_conn()

        if self._active.get():
            yield conn
            return

        async with self._tx_lock:
            await conn.execute("BEGIN")
            token = self._active.set(True)
            try:
                yield conn
            except BaseException:
                await conn.execute("ROLLBACK")
                logger.debug("Transaction on %s rolled back", self.name)
                raise
            else:
                await conn.execute("COMMIT")
            finally:
                self._active.reset(token)

    async def execute(self, sql: str, params: Iterable[Any] = ()) -> None:
        """Execute a statement."""
        conn = self._require_conn()
        await conn.execute(sql, tuple(params))

    async def fetchall(self, sql: str, params: Iterable[Any] = ()) -> list[tuple]:
        """Execute a query and return all rows."""
        conn = self._require_conn()
        async with conn.execute(sql, tuple(params)) as cursor:
            rows = await cursor.fetchall()
        return [tuple(row) for row in rows]

    def _require_conn(self) -> aiosqlite.Connection:
        if not self._conn:
            raise RuntimeError("Repo not initialized")
        return self._conn

    def __repr__(self) -> str:
        return f"SQLiteRepo(name={self.name!r})"
