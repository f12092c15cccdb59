"""Unit-specific fixtures (no I/O beyond in-memory SQLite)."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

import aiosqlite
import pytest

from sveltedocs.cache import TieredCache
from sveltedocs.models.scrape import ScrapeOptions, ScrapeResult


class FakeClock:
    """Manually advanced clock for TTL tests."""

    def __init__(self) -> None:
        self.now = datetime(2025, 1, 1, 12, 0, tzinfo=UTC)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs: float) -> None:
        self.now += timedelta(**kwargs)


class StubFetcher:
    """Stands in for Fetcher: canned results per path, records every call."""

    def __init__(self) -> None:
        self.responses: dict[str, ScrapeResult] = {}
        self.calls: list[str] = []
        self.options: list[ScrapeOptions | None] = []
        self.raise_with: Exception | None = None

    async def fetch_path(self, path: str, options: ScrapeOptions | None = None) -> ScrapeResult:
        self.calls.append(path)
        self.options.append(options)
        if self.raise_with is not None:
            raise self.raise_with
        if path in self.responses:
            return self.responses[path]
        return ScrapeResult.failure(
            url=f"https://www.shadcn-svelte.com{path}",
            error="Firecrawl API error (404): Not Found",
        )


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def stub_fetcher() -> StubFetcher:
    return StubFetcher()


@pytest.fixture()
async def cache(clock: FakeClock):
    """In-memory SQLite cache with a 24h TTL and a controllable clock."""
    async with aiosqlite.connect(":memory:") as db:
        c = TieredCache(db, ttl_hours=24, clock=clock)
        await c.init_db()
        yield c
