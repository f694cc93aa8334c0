"""Expiring key-value store backed by the ``kv_store`` table."""

import time
from collections.abc import Callable, Iterable
from datetime import datetime
from typing import Any

import duckdb
from loguru import logger

from app.errors import StoreError
from app.models import CacheEntry, StorageSnapshot
from app.repositories.base import BaseRepository
from app.tasks import DetachedTasks
from settings import CACHE_NAMESPACE, CACHE_TTL_DAYS

DAY = 24 * 60 * 60

_DECODE_ERRORS = (ValueError, KeyError, TypeError)


class ExpiringStore(BaseRepository):
    """Durable JSON values with a fixed time-to-live.

    Every write is stamped with the current wall-clock time and the store's
    ttl. Reads treat missing, undecodable and expired entries alike as absent
    (``None``); expired entries are deleted in the background. Wall-clock
    jumps shift expiry accordingly.
    """

    def __init__(
        self,
        conn: duckdb.DuckDBPyConnection,
        tasks: DetachedTasks,
        ttl: float = CACHE_TTL_DAYS * DAY,
        namespace: str = CACHE_NAMESPACE,
        clock: Callable[[], float] = time.time,
    ):
        super().__init__(conn)
        self._tasks = tasks
        self._clock = clock
        self.ttl = float(ttl)
        self.namespace = namespace

    async def _read_raw(self, key: str) -> str | None:
        row = await self.fetchone("SELECT value FROM kv_store WHERE key = ?", [key])
        return row[0] if row else None

    async def _read_entry(self, key: str) -> tuple[str | None, CacheEntry | None]:
        """Load and decode an entry, absorbing storage and format errors."""
        try:
            raw = await self._read_raw(key)
        except duckdb.Error as e:
            logger.error("Cache read failed for {}: {}", key, e)
            return None, None
        if raw is None:
            return None, None
        try:
            return raw, CacheEntry.loads(raw)
        except _DECODE_ERRORS as e:
            logger.warning("Corrupt cache entry {}: {}", key, e)
            return raw, None

    async def set(self, key: str, value: Any) -> None:
        """Write ``value`` under ``key``, replacing any previous entry."""
        now = self._clock()
        entry = CacheEntry(data=value, written_at=now, ttl=self.ttl)
        try:
            raw = entry.dumps()
        except (TypeError, ValueError) as e:
            raise StoreError(f"Value for {key} is not serializable: {e}", key) from e
        try:
            await self.execute(
                "INSERT OR REPLACE INTO kv_store (key, value, updated_at) VALUES (?, ?, ?)",
                [key, raw, datetime.fromtimestamp(now)],
            )
        except duckdb.Error as e:
            logger.error("Cache write failed for {}: {}", key, e)
            raise StoreError(f"Failed to store {key}: {e}", key) from e
        logger.debug("Cache saved: {} ({} bytes)", key, len(raw.encode()))

    async def get(self, key: str) -> Any | None:
        """Return the live value for ``key`` or ``None``."""
        raw, entry = await self._read_entry(key)
        if entry is None:
            return None
        if entry.is_expired(self._clock()):
            logger.debug("Cache expired: {}", key)
            self._tasks.spawn(self._discard_expired(key, raw), name=f"expire:{key}")
            return None
        logger.debug("Cache hit: {}", key)
        return entry.data

    async def _discard_expired(self, key: str, raw: str) -> None:
        """Delete ``key`` unless it was rewritten since it was read."""
        try:
            await self.execute("DELETE FROM kv_store WHERE key = ? AND value = ?", [key, raw])
        except duckdb.Error as e:
            raise StoreError(f"Failed to remove expired {key}: {e}", key) from e
        logger.debug("Expired entry removed: {}", key)

    async def has_valid(self, key: str) -> bool:
        """True when ``get`` would return a value; never deletes anything."""
        _, entry = await self._read_entry(key)
        if entry is None or entry.data is None:
            return False
        return not entry.is_expired(self._clock())

    async def remove(self, key: str) -> None:
        """Delete ``key``; absent keys are ignored."""
        try:
            await self.execute("DELETE FROM kv_store WHERE key = ?", [key])
        except duckdb.Error as e:
            raise StoreError(f"Failed to remove {key}: {e}", key) from e
        logger.debug("Cache removed: {}", key)

    async def remove_many(self, keys: Iterable[str]) -> None:
        """Delete a batch of keys in one transaction."""
        keys = list(keys)
        if not keys:
            return
        try:
            await self.transaction([("DELETE FROM kv_store WHERE key = ?", [k]) for k in keys])
        except duckdb.Error as e:
            raise StoreError(f"Failed to remove {len(keys)} keys: {e}") from e
        logger.info("Cache cleared: {}", ", ".join(keys))

    async def remaining_ttl(self, key: str) -> float | None:
        """Seconds until ``key`` expires (0 once expired), ``None`` if absent."""
        _, entry = await self._read_entry(key)
        if entry is None:
            return None
        return entry.remaining(self._clock())

    async def keys(self) -> list[str]:
        rows = await self.fetchall("SELECT key FROM kv_store ORDER BY key")
        return [r[0] for r in rows]

    async def snapshot(self) -> StorageSnapshot:
        """Keys under the namespace and their serialized size.

        Unreadable entries are skipped.
        """
        keys = []
        total = 0
        for key in await self.keys():
            if not key.startswith(self.namespace):
                continue
            try:
                raw = await self._read_raw(key)
            except duckdb.Error as e:
                logger.warning("Skipping unreadable cache entry {}: {}", key, e)
                continue
            if raw is None:
                continue
            keys.append(key)
            total += len(raw.encode())
        return StorageSnapshot(keys=keys, total_size_bytes=total)
