"""Shared fixtures for unit and integration tests."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest
import structlog

from sveltedocs.config import Settings

if TYPE_CHECKING:
    from pathlib import Path

FIRECRAWL_URL = "https://firecrawl.test"
SITE_URL = "https://www.shadcn-svelte.com"


@pytest.fixture(autouse=True)
def _reset_structlog():
    """CLI tests configure structlog against a captured stream; undo that."""
    yield
    structlog.reset_defaults()


@pytest.fixture()
def settings(tmp_path: Path) -> Settings:
    return Settings(
        firecrawl={"api_url": FIRECRAWL_URL, "api_key": "fc-test-key"},
        site={"base_url": SITE_URL},
        cache={"db_path": str(tmp_path / "cache.db")},
    )
