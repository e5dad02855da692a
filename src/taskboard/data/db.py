"""SQLite store for the signed-in user's credentials, via aiosqlite.

This is the only client-side state that survives a restart. The schema
version lives in ``PRAGMA user_version``; a mismatch drops the stored
session, which only means the user signs in again.
"""

from __future__ import annotations

import logging
from pathlib import Path
from types import TracebackType
from typing import Any

import aiosqlite

logger = logging.getLogger(__name__)

SCHEMA_VERSION = 1

SCHEMA_SQL = """
CREATE TABLE IF NOT EXISTS auth_session (
    slot TEXT PRIMARY KEY,
    token TEXT NOT NULL,
    user_json TEXT,
    role TEXT NOT NULL DEFAULT '',
    saved_at TEXT NOT NULL
);
"""


class Database:
    """Owns one aiosqlite connection; open it with ``connect()`` or ``async with``."""

    def __init__(self, db_path: Path) -> None:
        self._db_path = db_path
        self._conn: aiosqlite.Connection | None = None

    @property
    def in_memory(self) -> bool:
        return str(self._db_path) == ":memory:"

    async def connect(self) -> Database:
        if not self.in_memory:
            self._db_path.parent.mkdir(parents=True, exist_ok=True)
        self._conn = await aiosqlite.connect(str(self._db_path))
        self._conn.row_factory = aiosqlite.Row
        await self._migrate()
        return self

    async def close(self) -> None:
        if self._conn is None:
            return
        await self._conn.close()
        self._conn = None

    async def __aenter__(self) -> Database:
        return await self.connect()

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        await self.close()

    @property
    def conn(self) -> aiosqlite.Connection:
        if self._conn is None:
            raise RuntimeError(f"Session store {self._db_path} is not open")
        return self._conn

    async def execute(self, sql: str, params: tuple[Any, ...] = ()) -> aiosqlite.Cursor:
        return await self.conn.execute(sql, params)

    async def fetch_one(self, sql: str, params: tuple[Any, ...] = ()) -> aiosqlite.Row | None:
        async with self.conn.execute(sql, params) as cursor:
            return await cursor.fetchone()  # type: ignore[return-value]

    async def commit(self) -> None:
        await self.conn.commit()

    async def schema_version(self) -> int:
        row = await self.fetch_one("PRAGMA user_version")
        return int(row[0]) if row is not None else 0

    async def _migrate(self) -> None:
        found = await self.schema_version()
        if found != SCHEMA_VERSION:
            if found:
                logger.info(
                    "Session store schema %s is outdated (want %s); discarding saved session",
                    found,
                    SCHEMA_VERSION,
                )
            await self.conn.execute("DROP TABLE IF EXISTS auth_session")
            await self.conn.execute(f"PRAGMA user_version = {SCHEMA_VERSION}")
        await self.conn.executescript(SCHEMA_SQL)
        await self.conn.commit()
