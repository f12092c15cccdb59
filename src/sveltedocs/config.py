"""Configuration loading.

Settings are loaded in priority order (highest first):
  1. Environment variables  (SVELTEDOCS__FIRECRAWL__API_URL=http://...)
  2. sveltedocs.yaml        (searched in cwd, then ~/.config/sveltedocs/)
  3. Hardcoded defaults

The config file is optional. Build ``Settings`` once at startup and pass it
down; nothing else in the package reads the environment.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Literal

import platformdirs
from pydantic import BaseModel, ConfigDict, field_validator
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    YamlConfigSettingsSource,
)

_DEFAULT_DATA_DIR = platformdirs.user_data_dir("sveltedocs")
_DEFAULT_DB_PATH = str(Path(_DEFAULT_DATA_DIR) / "cache.db")


def _find_config_file() -> str | None:
    """Return the path of the first sveltedocs.yaml found, or None."""
    candidates = [
        Path("sveltedocs.yaml"),
        Path.home() / ".config" / "sveltedocs" / "sveltedocs.yaml",
    ]
    for path in candidates:
        if path.exists():
            return str(path)
    return None


class _Section(BaseModel):
    # Typos in nested keys fail loudly instead of silently using defaults.
    model_config = ConfigDict(extra="forbid")


class FirecrawlSettings(_Section):
    api_url: str = "http://localhost:3002"
    api_key: str = ""
    timeout_seconds: float = 30.0

    @field_validator("api_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")

    @field_validator("timeout_seconds")
    @classmethod
    def validate_timeout(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("timeout_seconds must be > 0")
        return v


class SiteSettings(_Section):
    base_url: str = "https://www.shadcn-svelte.com"

    @field_validator("base_url")
    @classmethod
    def validate_base_url(cls, v: str) -> str:
        if not v.startswith(("http://", "https://")):
            raise ValueError("base_url must use http or https scheme")
        return v.rstrip("/")


class CacheSettings(_Section):
    ttl_hours: int = 24
    db_path: str = _DEFAULT_DB_PATH

    @field_validator("ttl_hours")
    @classmethod
    def validate_ttl(cls, v: int) -> int:
        if v < 0:
            raise ValueError("ttl_hours must be >= 0")
        return v


class LoggingSettings(_Section):
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    format: Literal["json", "text"] = "text"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        # Double-underscore separates nesting: SVELTEDOCS__CACHE__TTL_HOURS=48
        env_prefix="SVELTEDOCS__",
        env_nested_delimiter="__",
        yaml_file=_find_config_file(),
        yaml_file_encoding="utf-8",
        extra="forbid",
    )

    firecrawl: FirecrawlSettings = FirecrawlSettings()
    site: SiteSettings = SiteSettings()
    cache: CacheSettings = CacheSettings()
    logging: LoggingSettings = LoggingSettings()

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
        **kwargs: Any,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return (
            init_settings,  # Constructor args (highest priority)
            env_settings,  # Environment variables
            YamlConfigSettingsSource(settings_cls),  # YAML file
            # dotenv and file secrets intentionally excluded
        )
