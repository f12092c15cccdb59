from __future__ import annotations

from sveltedocs.models.cache import CacheEntry, CacheStats
from sveltedocs.models.scrape import (
    ConnectionCheck,
    MapResult,
    ScrapeOptions,
    ScrapeResult,
    SiteIndex,
)
from sveltedocs.models.tools import GetDocsInput, LookupKind

__all__ = [
    # scrape
    "ScrapeOptions",
    "ScrapeResult",
    "MapResult",
    "ConnectionCheck",
    "SiteIndex",
    # cache
    "CacheEntry",
    "CacheStats",
    # tools
    "LookupKind",
    "GetDocsInput",
]
