from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator


class ScrapeOptions(BaseModel):
    """Per-request scrape parameters sent to the remote source."""

    model_config = ConfigDict(frozen=True)

    formats: list[str] = Field(default_factory=lambda: ["markdown"])
    only_main_content: bool = True
    include_tags: list[str] | None = None
    exclude_tags: list[str] | None = None
    wait_for: int | None = None  # Milliseconds
    timeout_ms: int | None = None  # None → FirecrawlSettings.timeout_seconds

    def to_request(self, url: str, default_timeout_ms: int) -> dict[str, Any]:
        """Build the JSON body of a ``/v1/scrape`` request."""
        body: dict[str, Any] = {
            "url": url,
            "formats": self.formats,
            "onlyMainContent": self.only_main_content,
            "timeout": self.timeout_ms or default_timeout_ms,
        }
        if self.include_tags is not None:
            body["includeTags"] = self.include_tags
        if self.exclude_tags is not None:
            body["excludeTags"] = self.exclude_tags
        if self.wait_for is not None:
            body["waitFor"] = self.wait_for
        return body


class ScrapeResult(BaseModel):
    """Normalized outcome of one remote scrape.

    ``success=False`` always carries ``error`` and never carries content.
    ``success=True`` without ``markdown`` means the page was reachable but
    had nothing extractable; that is a valid result, not an error.
    """

    model_config = ConfigDict(frozen=True)

    url: str
    markdown: str | None = None
    html: str | None = None
    metadata: dict[str, Any] | None = None
    success: bool
    error: str | None = None

    @model_validator(mode="after")
    def check_failure_shape(self) -> ScrapeResult:
        if not self.success:
            if not self.error:
                raise ValueError("failed results must carry an error message")
            if self.markdown is not None or self.html is not None:
                raise ValueError("failed results must not carry content")
        return self

    @property
    def has_content(self) -> bool:
        return self.success and bool(self.markdown)

    @classmethod
    def failure(cls, url: str, error: str) -> ScrapeResult:
        return cls(url=url, success=False, error=error)


class MapResult(BaseModel):
    """URLs discovered on the documentation site."""

    urls: list[str] = []
    success: bool
    error: str | None = None


class ConnectionCheck(BaseModel):
    success: bool
    message: str


class SiteIndex(BaseModel):
    """Discovered documentation grouped into lookup names per section."""

    components: list[str] = []
    installation: list[str] = []
    dark_mode: list[str] = []
    migration: list[str] = []
    general: list[str] = []

    @property
    def docs_count(self) -> int:
        sections = (self.installation, self.dark_mode, self.migration, self.general)
        return sum(len(names) for names in sections)
