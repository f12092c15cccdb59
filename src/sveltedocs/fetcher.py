"""Firecrawl client for the documentation site.

Every public method returns a result model instead of raising: transport
errors, non-2xx statuses and malformed bodies all come back as
``success=False`` values so callers can treat a failed fetch as data.
"""

from __future__ import annotations

from typing import Any

import httpx
import structlog

from sveltedocs.config import Settings
from sveltedocs.models.scrape import ConnectionCheck, MapResult, ScrapeOptions, ScrapeResult

log = structlog.get_logger()

# Firecrawl enforces the scrape timeout server-side; the HTTP client waits a
# little longer so the server's own timeout error reaches us first.
_CLIENT_TIMEOUT_MARGIN_SECONDS = 5.0
_CONNECTION_CHECK_TIMEOUT_MS = 10_000
_PAYLOAD_FIELDS = ("markdown", "html", "metadata")


def build_http_client(settings: Settings) -> httpx.AsyncClient:
    """Create the shared httpx client for Firecrawl requests."""
    return httpx.AsyncClient(
        timeout=httpx.Timeout(settings.firecrawl.timeout_seconds + _CLIENT_TIMEOUT_MARGIN_SECONDS),
        follow_redirects=True,
    )


def extract_payload(body: dict[str, Any]) -> dict[str, Any]:
    """Pull markdown/html/metadata out of a scrape response envelope.

    Firecrawl versions disagree on where the payload lives. ``data.<field>``
    wins over a top-level ``<field>``; values of the wrong type are dropped.
    """
    data = body.get("data")
    if not isinstance(data, dict):
        data = {}

    payload: dict[str, Any] = {}
    for field in _PAYLOAD_FIELDS:
        value = data.get(field) or body.get(field)
        expected = dict if field == "metadata" else str
        payload[field] = value if isinstance(value, expected) and value else None
    return payload


def _describe(exc: Exception) -> str:
    # httpx timeouts often carry an empty message
    return str(exc) or type(exc).__name__


class Fetcher:
    """Scrapes documentation pages through a Firecrawl instance."""

    def __init__(self, client: httpx.AsyncClient, settings: Settings | None = None) -> None:
        self._client = client
        self._settings = settings or Settings()
        self._headers = {"Content-Type": "application/json"}
        if self._settings.firecrawl.api_key:
            self._headers["Authorization"] = f"Bearer {self._settings.firecrawl.api_key}"

    @property
    def site_url(self) -> str:
        return self._settings.site.base_url

    def url_for(self, path: str) -> str:
        """Join a site-relative path onto the documentation base URL."""
        if not path.startswith("/"):
            path = f"/{path}"
        return f"{self.site_url}{path}"

    async def fetch_path(self, path: str, options: ScrapeOptions | None = None) -> ScrapeResult:
        """Scrape one documentation path, e.g. ``/docs/components/button``."""
        return await self.scrape_url(self.url_for(path), options)

    async def scrape_url(self, url: str, options: ScrapeOptions | None = None) -> ScrapeResult:
        """Scrape *url*. Never raises; failures come back as ``success=False``."""
        options = options or ScrapeOptions()
        default_timeout_ms = int(self._settings.firecrawl.timeout_seconds * 1000)
        request = options.to_request(url, default_timeout_ms)
        timeout = request["timeout"] / 1000 + _CLIENT_TIMEOUT_MARGIN_SECONDS

        body = await self._post("/v1/scrape", request, timeout=timeout)
        if isinstance(body, str):
            log.warning("scrape_failed", url=url, error=body)
            return ScrapeResult.failure(url, body)

        # Firecrawl reports some failures inside a 200 response.
        if body.get("success") is False:
            error = body.get("error") or "Firecrawl reported an unsuccessful scrape"
            log.warning("scrape_failed", url=url, error=error)
            return ScrapeResult.failure(url, str(error))

        payload = extract_payload(body)
        if payload["markdown"] is None:
            log.info("scrape_empty", url=url)
        return ScrapeResult(url=url, success=True, **payload)

    async def map_site(
        self,
        search: str | None = None,
        limit: int = 100,
        include_subdomains: bool = False,
    ) -> MapResult:
        """List URLs on the documentation site, optionally filtered by *search*."""
        request: dict[str, Any] = {
            "url": self.site_url,
            "limit": limit,
            "includeSubdomains": include_subdomains,
        }
        if search:
            request["search"] = search

        body = await self._post("/v1/map", request)
        if isinstance(body, str):
            log.warning("map_failed", url=self.site_url, error=body)
            return MapResult(success=False, error=body)

        links = body.get("links")
        urls: list[str] = []
        for link in links if isinstance(links, list) else []:
            if isinstance(link, dict):
                link = link.get("url")
            if isinstance(link, str) and link:
                urls.append(link)
        return MapResult(urls=urls, success=True)

    async def check_connection(self) -> ConnectionCheck:
        """Scrape the docs landing page to verify Firecrawl is reachable."""
        result = await self.fetch_path(
            "/docs",
            ScrapeOptions(timeout_ms=_CONNECTION_CHECK_TIMEOUT_MS),
        )
        if result.has_content:
            return ConnectionCheck(
                success=True,
                message=f"Connected to Firecrawl at {self._settings.firecrawl.api_url}",
            )
        return ConnectionCheck(success=False, message=result.error or "Failed to scrape test URL")

    async def _post(
        self, endpoint: str, request: dict[str, Any], timeout: float | None = None
    ) -> dict[str, Any] | str:
        """POST to Firecrawl. Returns the decoded JSON object or an error message."""
        url = f"{self._settings.firecrawl.api_url}{endpoint}"
        kwargs: dict[str, Any] = {"json": request, "headers": self._headers}
        if timeout is not None:
            kwargs["timeout"] = timeout
        try:
            response = await self._client.post(url, **kwargs)
        except httpx.HTTPError as exc:
            return f"Firecrawl request failed: {_describe(exc)}"

        if not response.is_success:
            return f"Firecrawl API error ({response.status_code}): {response.text}"

        try:
            body = response.json()
        except ValueError:
            return "Firecrawl returned a malformed response body"
        if not isinstance(body, dict):
            return "Firecrawl returned a malformed response body"
        return body
