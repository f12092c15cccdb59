"""Command-line entry point: lookups plus cache and connection maintenance.

Usage:
    sveltedocs get component button
    sveltedocs get doc theming
    sveltedocs stats
    sveltedocs clear
    sveltedocs check
    sveltedocs map --search components --limit 20
    sveltedocs list --type components
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from enum import StrEnum
from typing import TypeVar

import typer
from pydantic import ValidationError

from sveltedocs.config import Settings
from sveltedocs.discovery import discover
from sveltedocs.logging_config import configure_logging
from sveltedocs.models.cache import CacheStats
from sveltedocs.models.scrape import ConnectionCheck, MapResult, ScrapeResult, SiteIndex
from sveltedocs.models.tools import GetDocsInput, LookupKind
from sveltedocs.state import AppState, open_app_state

T = TypeVar("T")


class ListType(StrEnum):
    COMPONENTS = "components"
    DOCS = "docs"
    ALL = "all"


app = typer.Typer(help="Cached shadcn-svelte documentation lookups via Firecrawl.")


def _load_settings() -> Settings:
    settings = Settings()
    configure_logging(settings.logging)
    return settings


async def _with_state(coro_fn: Callable[[AppState], Awaitable[T]], settings: Settings) -> T:
    async with open_app_state(settings) as state:
        return await coro_fn(state)


@app.command()
def get(
    kind: LookupKind = typer.Argument(..., help="What to look up"),
    name: str = typer.Argument(..., help="Component name or documentation section"),
) -> None:
    """Print the markdown for a component or documentation section."""
    try:
        request = GetDocsInput(kind=kind, name=name)
    except ValidationError as exc:
        typer.echo(f"Invalid input: {exc.errors()[0]['msg']}", err=True)
        raise typer.Exit(code=2) from None

    settings = _load_settings()

    async def run(state: AppState) -> ScrapeResult:
        return await state.retriever.retrieve(request.kind, request.name)

    result = asyncio.run(_with_state(run, settings))
    if not result.success:
        typer.echo(f"{request.kind.value} {request.name!r} not found: {result.error}", err=True)
        raise typer.Exit(code=1)
    if not result.markdown:
        typer.echo(f"{request.kind.value} {request.name!r} has no extractable content", err=True)
        raise typer.Exit(code=1)
    typer.echo(result.markdown)


@app.command()
def stats() -> None:
    """Show how many entries each cache tier holds."""
    settings = _load_settings()

    async def run(state: AppState) -> CacheStats:
        return await state.cache.stats()

    cache_stats = asyncio.run(_with_state(run, settings))
    typer.echo(f"Memory cache: {cache_stats.memory_count} entries")
    typer.echo(f"Disk cache: {cache_stats.durable_count} entries")
    typer.echo(f"Database: {settings.cache.db_path}")


@app.command()
def clear() -> None:
    """Remove every cached entry."""
    settings = _load_settings()

    async def run(state: AppState) -> None:
        await state.cache.clear()

    asyncio.run(_with_state(run, settings))
    typer.echo("Cache cleared")


@app.command()
def check() -> None:
    """Verify that the Firecrawl instance can scrape the documentation site."""
    settings = _load_settings()
    key = settings.firecrawl.api_key
    typer.echo(f"API URL: {settings.firecrawl.api_url}")
    typer.echo(f"API key: {'***' + key[-4:] if key else 'NOT SET'}")
    typer.echo(f"Site URL: {settings.site.base_url}")

    async def run(state: AppState) -> ConnectionCheck:
        return await state.fetcher.check_connection()

    outcome = asyncio.run(_with_state(run, settings))
    typer.echo(f"{'SUCCESS' if outcome.success else 'FAILED'}: {outcome.message}")
    if not outcome.success:
        raise typer.Exit(code=1)


@app.command(name="map")
def map_site(
    search: str | None = typer.Option(None, help="Only return URLs matching this term"),
    limit: int = typer.Option(100, min=1, help="Maximum number of URLs"),
) -> None:
    """List documentation URLs discovered on the site."""
    settings = _load_settings()

    async def run(state: AppState) -> MapResult:
        return await state.fetcher.map_site(search=search, limit=limit)

    result = asyncio.run(_with_state(run, settings))
    if not result.success:
        typer.echo(f"Map failed: {result.error}", err=True)
        raise typer.Exit(code=1)
    for url in result.urls:
        typer.echo(url)


@app.command(name="list")
def list_resources(
    type_: ListType = typer.Option(ListType.ALL, "--type", help="What to list"),
    limit: int = typer.Option(500, min=1, help="Maximum number of URLs to discover"),
) -> None:
    """List components and documentation sections found on the live site."""
    settings = _load_settings()

    async def run(state: AppState) -> SiteIndex | MapResult:
        return await discover(state.fetcher, limit=limit)

    index = asyncio.run(_with_state(run, settings))
    if isinstance(index, MapResult):
        typer.echo(f"Discovery failed: {index.error}", err=True)
        raise typer.Exit(code=1)

    if type_ in (ListType.COMPONENTS, ListType.ALL):
        typer.echo(f"Components ({len(index.components)}):")
        for name in index.components:
            typer.echo(f"  {name}")
    if type_ in (ListType.DOCS, ListType.ALL):
        sections = (
            ("Installation", index.installation),
            ("Dark Mode", index.dark_mode),
            ("Migration", index.migration),
            ("General", index.general),
        )
        for title, names in sections:
            typer.echo(f"{title} ({len(names)}):")
            for name in names:
                typer.echo(f"  {name}")


def main() -> None:
    app()


if __name__ == "__main__":
    main()
