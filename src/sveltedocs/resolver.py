"""Ordered fallback over candidate documentation paths.

Some lookups (general documentation sections in particular) have no single
canonical URL, so each kind maps to a list of path templates tried in order.
Adding a documentation section is a change to ``CANDIDATE_TEMPLATES`` only.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import TYPE_CHECKING

import structlog

from sveltedocs.errors import ErrorCode, SvelteDocsError
from sveltedocs.keys import parse_kind
from sveltedocs.models.scrape import ScrapeOptions, ScrapeResult
from sveltedocs.models.tools import LookupKind

if TYPE_CHECKING:
    from sveltedocs.fetcher import Fetcher

log = structlog.get_logger()

# Order is priority: the first candidate with content wins, later ones are
# never consulted.
CANDIDATE_TEMPLATES: dict[LookupKind, tuple[str, ...]] = {
    LookupKind.COMPONENT: ("/docs/components/{name}",),
    LookupKind.DOC: (
        "/docs/{name}",
        "/docs/installation/{name}",
        "/docs/dark-mode/{name}",
        "/docs/migration/{name}",
    ),
    LookupKind.INSTALLATION: (
        "/docs/installation/{name}",
        "/docs/installation",
    ),
    LookupKind.MIGRATION: (
        "/docs/migration/{name}",
        "/docs/migration",
        "/docs/migration/svelte-5",
    ),
    LookupKind.THEMING: (
        "/docs/theming/{name}",
        "/docs/theming",
    ),
}

_DEFAULT_OPTIONS = ScrapeOptions(formats=["markdown"], only_main_content=True)

SCRAPE_OPTIONS: dict[LookupKind, ScrapeOptions] = {
    # Component pages: drop site chrome around the API tables.
    LookupKind.COMPONENT: ScrapeOptions(
        formats=["markdown"],
        only_main_content=True,
        exclude_tags=["nav", "footer", "aside"],
    ),
}


class CandidateResolver:
    """Turns (kind, name) into candidate paths and tries them in order."""

    def __init__(
        self,
        fetcher: Fetcher,
        templates: Mapping[LookupKind, Sequence[str]] | None = None,
    ) -> None:
        self._fetcher = fetcher
        self._templates = CANDIDATE_TEMPLATES if templates is None else templates

    def candidates_for(self, kind: LookupKind, name: str) -> list[str]:
        try:
            templates = self._templates[kind]
        except KeyError:
            raise SvelteDocsError(
                code=ErrorCode.UNKNOWN_LOOKUP_KIND,
                message=f"No candidate paths registered for lookup kind {kind!r}",
            ) from None
        return [template.format(name=name) for template in templates]

    async def resolve(self, kind: LookupKind | str, name: str) -> ScrapeResult:
        """Return the first candidate result with content.

        If no candidate has content, the last attempted result is returned.
        An empty candidate list yields a synthesized not-found failure.
        """
        kind = parse_kind(kind)
        candidates = self.candidates_for(kind, name)
        options = SCRAPE_OPTIONS.get(kind, _DEFAULT_OPTIONS)

        result: ScrapeResult | None = None
        for position, path in enumerate(candidates, start=1):
            result = await self._fetcher.fetch_path(path, options)
            if result.has_content:
                log.debug(
                    "candidate_resolved",
                    kind=kind.value,
                    name=name,
                    path=path,
                    position=position,
                )
                return result
            log.debug(
                "candidate_missed",
                kind=kind.value,
                name=name,
                path=path,
                success=result.success,
                error=result.error,
            )

        if result is None:
            return ScrapeResult.failure(
                url=f"{kind.value}:{name}",
                error=f"No candidate paths for {kind.value} {name!r}",
            )
        return result
