"""Show command for viewing record details."""

import cyclopts
from dishka import AsyncContainer

from dehug.cli.console import Console
from dehug.cli.runner import run
from dehug.domain.content.service.discovery import ContentDiscoveryService

app = cyclopts.App(name="show", help="Show record details")


@app.default
def show(record_id: int, /) -> None:
    """Show one registry record with its external metadata.

    Args:
        record_id: Registry identifier of the record
    """

    async def _show(container: AsyncContainer, console: Console) -> None:
        service = await container.get(ContentDiscoveryService)
        result = await service.get(record_id)
        console.record_detail(result)

    run(_show)
