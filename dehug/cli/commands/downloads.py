"""Update the download count of an owned record."""

import cyclopts
from dishka import AsyncContainer

from dehug.cli.console import Console
from dehug.cli.runner import run
from dehug.domain.content.service.mutation import ContentMutationService

app = cyclopts.App(name="downloads", help="Update a record's download count")


@app.default
def downloads(record_id: int, count: int, /) -> None:
    """Set the download count of a record owned by the signer account.

    Args:
        record_id: Registry identifier of the record
        count: New download count
    """

    async def _update(container: AsyncContainer, console: Console) -> None:
        service = await container.get(ContentMutationService)
        outcome = await service.update_download_count(record_id, count)
        console.outcome(outcome)

    run(_update)
