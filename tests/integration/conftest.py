"""Integration test fixtures.

Provides a fully wired AppState backed by a real on-disk SQLite file in
tmp_path. Remote calls are mocked with respx in the individual tests.
"""

from __future__ import annotations

import os
from typing import TYPE_CHECKING

import pytest

from sveltedocs.state import AppState, open_app_state

if TYPE_CHECKING:
    from pathlib import Path

    from sveltedocs.config import Settings


@pytest.fixture()
async def app_state(settings: Settings) -> AppState:
    async with open_app_state(settings) as state:
        yield state


@pytest.fixture()
def subprocess_env(tmp_path: Path) -> dict[str, str]:
    """Environment for running ``python -m sveltedocs`` against a scratch cache."""
    env = {k: v for k, v in os.environ.items() if not k.startswith("SVELTEDOCS__")}
    env["SVELTEDOCS__CACHE__DB_PATH"] = str(tmp_path / "cache.db")
    # Nothing listens here; commands under test must not need the network.
    env["SVELTEDOCS__FIRECRAWL__API_URL"] = "http://127.0.0.1:9"
    return env
