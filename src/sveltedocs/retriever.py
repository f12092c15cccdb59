"""Cache-first documentation retrieval.

``Retriever.retrieve`` is the single entry point for lookups: it serves from
the tiered cache when it can, otherwise resolves candidate paths against the
remote source and caches results that carry content. Failed and empty results
are never cached, so a transient miss cannot poison later lookups.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from sveltedocs.keys import build_key, parse_kind

if TYPE_CHECKING:
    from sveltedocs.cache import TieredCache
    from sveltedocs.models.scrape import ScrapeResult
    from sveltedocs.models.tools import LookupKind
    from sveltedocs.resolver import CandidateResolver

log = structlog.get_logger()


class Retriever:
    def __init__(self, cache: TieredCache, resolver: CandidateResolver) -> None:
        self._cache = cache
        self._resolver = resolver

    async def retrieve(self, kind: LookupKind | str, name: str) -> ScrapeResult:
        """Return docs for (*kind*, *name*) as a ScrapeResult.

        A cache hit performs no network access. There is no retry beyond the
        ordered candidate fallback; ``success=False`` is returned as-is for the
        caller to present.
        """
        lookup_kind = parse_kind(kind)
        key = build_key(lookup_kind, name)

        entry = await self._cache.get(key)
        if entry is not None:
            log.info("cache_hit", key=key, cached_at=entry.created_at.isoformat())
            return entry.payload

        log.info("cache_miss", key=key)
        result = await self._resolver.resolve(lookup_kind, name)

        if result.has_content:
            await self._cache.set(key, result)
        else:
            log.info("docs_not_found", key=key, success=result.success, error=result.error)
        return result
