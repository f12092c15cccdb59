"""Application wiring: one place that turns Settings into live components."""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import dataclass
from pathlib import Path

import aiosqlite
import httpx
import structlog

from sveltedocs.cache import TieredCache
from sveltedocs.config import Settings
from sveltedocs.fetcher import Fetcher, build_http_client
from sveltedocs.resolver import CandidateResolver
from sveltedocs.retriever import Retriever

log = structlog.get_logger()


@dataclass
class AppState:
    settings: Settings
    http_client: httpx.AsyncClient
    cache: TieredCache
    fetcher: Fetcher
    retriever: Retriever


@asynccontextmanager
async def open_app_state(settings: Settings) -> AsyncIterator[AppState]:
    """Open the cache database and HTTP client; close both on exit.

    Missing parent directories of ``cache.db_path`` are created. A path that
    cannot be opened is fatal: the error propagates to the caller.
    """
    db_path = Path(settings.cache.db_path).expanduser()
    db_path.parent.mkdir(parents=True, exist_ok=True)

    async with aiosqlite.connect(db_path) as db, build_http_client(settings) as client:
        cache = TieredCache(db, ttl_hours=settings.cache.ttl_hours)
        await cache.init_db()
        fetcher = Fetcher(client, settings)
        retriever = Retriever(cache, CandidateResolver(fetcher))
        log.debug("app_state_ready", db_path=str(db_path), api_url=settings.firecrawl.api_url)
        yield AppState(
            settings=settings,
            http_client=client,
            cache=cache,
            fetcher=fetcher,
            retriever=retriever,
        )
