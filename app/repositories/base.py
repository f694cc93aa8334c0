"""Base repository class."""

import asyncio
from typing import Any

import duckdb
from loguru import logger


class BaseRepository:
    """Base repository with async access to a shared DuckDB connection.

    Every statement runs in a worker thread on its own cursor, so callers
    suspend at each storage round trip instead of blocking the event loop.
    """

    def __init__(self, conn: duckdb.DuckDBPyConnection):
        self._db = conn
        logger.debug("{} initialized", self.__class__.__name__)

    def _run(self, query: str, params: list | None, fetch: str | None) -> Any:
        cur = self._db.cursor()
        try:
            cur.execute(query, params or [])
            if fetch == "all":
                return cur.fetchall()
            if fetch == "one":
                return cur.fetchone()
            return None
        finally:
            cur.close()

    def _run_batch(self, statements: list[tuple[str, list]]) -> None:
        cur = self._db.cursor()
        try:
            cur.execute("BEGIN TRANSACTION")
            try:
                for query, params in statements:
                    cur.execute(query, params)
                cur.execute("COMMIT")
            except Exception:
                cur.execute("ROLLBACK")
                raise
        finally:
            cur.close()

    async def execute(self, query: str, params: list | None = None) -> None:
        """Execute SQL statement."""
        await asyncio.to_thread(self._run, query, params, None)

    async def fetchall(self, query: str, params: list | None = None) -> list:
        """Execute and fetch all rows."""
        return await asyncio.to_thread(self._run, query, params, "all")

    async def fetchone(self, query: str, params: list | None = None) -> Any:
        """Execute and fetch one row."""
        return await asyncio.to_thread(self._run, query, params, "one")

    async def transaction(self, statements: list[tuple[str, list]]) -> None:
        """Execute statements atomically."""
        await asyncio.to_thread(self._run_batch, statements)
