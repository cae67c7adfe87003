"""Discover the latest datasets or models."""

import sys

import cyclopts
from dishka import AsyncContainer

from dehug.cli.console import Console, get_console
from dehug.cli.runner import run
from dehug.domain.content.model.record import ContentCategory
from dehug.domain.content.service.discovery import ContentDiscoveryService

app = cyclopts.App(name="discover", help="List the latest datasets or models")


@app.default
def discover(
    category: str,
    /,
    limit: int | None = None,
    max_scan: int | None = None,
) -> None:
    """List the latest active records of one category.

    Args:
        category: 'data' or 'model'
        limit: Maximum number of results (default from config)
        max_scan: Recent registry entries to inspect (default from config)
    """
    try:
        parsed = ContentCategory.parse(category)
    except ValueError as e:
        get_console().error(str(e), hint="Use 'data' or 'model'")
        sys.exit(1)

    async def _discover(container: AsyncContainer, console: Console) -> None:
        service = await container.get(ContentDiscoveryService)
        with console.status(f"Scanning registry for {parsed.name.lower()} records..."):
            results = await service.discover(parsed, limit, max_scan)
        label = "datasets" if parsed is ContentCategory.DATA else "models"
        console.discovery_results(results, label)
        if results:
            console.info("Use 'dehug show <id>' to view details")

    run(_discover)
