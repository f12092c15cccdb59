"""Two-tier documentation cache: in-process dict over a SQLite table.

Reads check the in-process tier first and fall back to SQLite; SQLite hits are
promoted into memory. Entries older than the TTL are evicted from both tiers
when they are read. There is no background sweep.

All durable-tier operations catch ``aiosqlite.Error`` (and corrupt rows)
internally and degrade gracefully: read failures return ``None`` (treated as a
cache miss by callers), write failures are logged and ignored. Infrastructure
errors never cross the TieredCache class boundary. Errors are logged with
``exc_info=True`` so they remain observable via stderr.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import UTC, datetime, timedelta

import aiosqlite
import structlog

from sveltedocs.models.cache import CacheEntry, CacheStats
from sveltedocs.models.scrape import ScrapeResult

log = structlog.get_logger()

_CREATE_TABLE = """
CREATE TABLE IF NOT EXISTS doc_cache (
    key         TEXT PRIMARY KEY,
    payload     TEXT NOT NULL,
    created_at  TEXT NOT NULL
)
"""


def _utcnow() -> datetime:
    return datetime.now(UTC)


class TieredCache:
    """Memory + SQLite cache of ScrapeResult payloads keyed by lookup key."""

    def __init__(
        self,
        db: aiosqlite.Connection,
        ttl_hours: float = 24,
        *,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._db = db
        self._ttl = timedelta(hours=ttl_hours)
        self._clock = clock
        self._memory: dict[str, CacheEntry] = {}

    async def init_db(self) -> None:
        """Create the table and set WAL mode. Called once at startup."""
        await self._db.execute("PRAGMA journal_mode = WAL")
        await self._db.execute(_CREATE_TABLE)
        await self._db.commit()

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    async def get(self, key: str) -> CacheEntry | None:
        """Return a fresh entry for *key*, or ``None`` on miss/expiry/failure."""
        entry = self._memory.get(key)
        if entry is None:
            durable = await self._read_durable(key)
            if durable is None:
                return None
            # A set that landed while the row was being read wins over the row.
            entry = self._memory.setdefault(key, durable)

        if self._is_expired(entry):
            log.debug("cache_entry_expired", key=key, created_at=entry.created_at.isoformat())
            await self._evict(key)
            return None

        return entry

    async def set(self, key: str, payload: ScrapeResult) -> None:
        """Write *payload* to both tiers, replacing any existing entry."""
        entry = CacheEntry(key=key, payload=payload, created_at=self._clock())
        self._memory[key] = entry
        try:
            await self._db.execute(
                "INSERT OR REPLACE INTO doc_cache (key, payload, created_at) VALUES (?, ?, ?)",
                (key, payload.model_dump_json(), entry.created_at.isoformat()),
            )
            await self._db.commit()
        except aiosqlite.Error:
            log.warning("cache_write_error", key=key, exc_info=True)

    # ------------------------------------------------------------------
    # Maintenance
    # ------------------------------------------------------------------

    async def stats(self) -> CacheStats:
        """Count entries per tier. Expired-but-unread entries are included."""
        durable_count = 0
        try:
            cursor = await self._db.execute("SELECT COUNT(*) FROM doc_cache")
            row = await cursor.fetchone()
            if row is not None:
                durable_count = row[0]
        except aiosqlite.Error:
            log.warning("cache_stats_error", exc_info=True)
        return CacheStats(memory_count=len(self._memory), durable_count=durable_count)

    async def clear(self) -> None:
        """Remove every entry from both tiers. Non-fatal on failure."""
        memory_cleared = len(self._memory)
        self._memory.clear()
        try:
            cursor = await self._db.execute("DELETE FROM doc_cache")
            durable_cleared = cursor.rowcount
            await self._db.commit()
        except aiosqlite.Error:
            log.warning("cache_clear_error", exc_info=True)
            return
        log.info("cache_cleared", memory_cleared=memory_cleared, durable_cleared=durable_cleared)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _is_expired(self, entry: CacheEntry) -> bool:
        return self._clock() - entry.created_at > self._ttl

    async def _read_durable(self, key: str) -> CacheEntry | None:
        try:
            cursor = await self._db.execute(
                "SELECT payload, created_at FROM doc_cache WHERE key = ?",
                (key,),
            )
            row = await cursor.fetchone()
        except aiosqlite.Error:
            log.warning("cache_read_error", key=key, exc_info=True)
            return None
        if row is None:
            return None

        try:
            created_at = datetime.fromisoformat(row[1])
            if created_at.tzinfo is None:
                raise ValueError(f"timestamp without timezone: {row[1]!r}")
            return CacheEntry(
                key=key,
                payload=ScrapeResult.model_validate_json(row[0]),
                created_at=created_at,
            )
        except ValueError:
            # Covers pydantic.ValidationError and malformed or naive timestamps.
            log.warning("cache_corrupt_entry", key=key, exc_info=True)
            return None

    async def _evict(self, key: str) -> None:
        self._memory.pop(key, None)
        try:
            await self._db.execute("DELETE FROM doc_cache WHERE key = ?", (key,))
            await self._db.commit()
        except aiosqlite.Error:
            log.warning("cache_evict_error", key=key, exc_info=True)
