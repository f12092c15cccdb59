from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict

from sveltedocs.models.scrape import ScrapeResult


class CacheEntry(BaseModel):
    """A cached scrape result. Replaced wholesale on rewrite, never mutated."""

    model_config = ConfigDict(frozen=True)

    key: str  # "<kind>:<name>"
    payload: ScrapeResult
    created_at: datetime


class CacheStats(BaseModel):
    memory_count: int
    durable_count: int
