"""Sort URLs found by a site map into components and documentation sections.

Each discovered name is what ``sveltedocs get`` expects for the matching kind:
``/docs/components/button`` lists as component ``button`` and
``/docs/installation/sveltekit`` as doc ``sveltekit``.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING
from urllib.parse import urlsplit

import structlog

from sveltedocs.models.scrape import MapResult, SiteIndex

if TYPE_CHECKING:
    from sveltedocs.fetcher import Fetcher

log = structlog.get_logger()

_DOCS_PREFIX = "/docs/"

# Section prefix (below /docs/) -> SiteIndex field. Anything else is general.
_SECTIONS: dict[str, str] = {
    "components": "components",
    "installation": "installation",
    "dark-mode": "dark_mode",
    "migration": "migration",
}

_DISCOVERY_LIMIT = 500


def categorize_urls(urls: Iterable[str]) -> SiteIndex:
    """Group documentation URLs by section. Non-docs URLs are ignored."""
    groups: dict[str, set[str]] = {field: set() for field in SiteIndex.model_fields}
    for url in urls:
        path = urlsplit(url).path.rstrip("/")
        if not path.startswith(_DOCS_PREFIX):
            continue
        rest = path[len(_DOCS_PREFIX) :]
        section, _, name = rest.partition("/")
        field = _SECTIONS.get(section)
        if field is None:
            groups["general"].add(rest)
        elif name:
            groups[field].add(name)
    return SiteIndex(**{field: sorted(names) for field, names in groups.items()})


async def discover(fetcher: Fetcher, limit: int = _DISCOVERY_LIMIT) -> SiteIndex | MapResult:
    """Map the site and categorize the result.

    Returns the failed MapResult unchanged when the map request fails.
    """
    mapped = await fetcher.map_site(limit=limit)
    if not mapped.success:
        return mapped
    index = categorize_urls(mapped.urls)
    log.info(
        "site_discovered",
        urls=len(mapped.urls),
        components=len(index.components),
        docs=index.docs_count,
    )
    return index
