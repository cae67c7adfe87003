"""Create a registry record through the configured signer session."""

import sys

import cyclopts
from dishka import AsyncContainer

from dehug.cli.console import Console, get_console
from dehug.cli.runner import run
from dehug.domain.content.model.record import ContentCategory, RecordDraft
from dehug.domain.content.service.mutation import ContentMutationService

app = cyclopts.App(name="upload", help="Mint a new dataset or model record")


@app.default
def upload(
    title: str,
    storage_hash: str,
    metadata_pointer: str,
    /,
    category: str = "data",
    image_pointer: str = "",
    tags: list[str] | None = None,
) -> None:
    """Mint a record for content already pinned to storage.

    Args:
        title: Record title
        storage_hash: Content address of the payload
        metadata_pointer: Content address of the metadata JSON document
        category: 'data' or 'model'
        image_pointer: Optional content address of a preview image
        tags: Tags to attach
    """
    try:
        parsed = ContentCategory.parse(category)
    except ValueError as e:
        get_console().error(str(e), hint="Use 'data' or 'model'")
        sys.exit(1)

    draft = RecordDraft(
        category=parsed,
        storage_hash=storage_hash,
        metadata_pointer=metadata_pointer,
        image_pointer=image_pointer,
        title=title,
        tags=tuple(tags or ()),
    )

    async def _upload(container: AsyncContainer, console: Console) -> None:
        service = await container.get(ContentMutationService)
        outcome = await service.create_record(draft)
        console.outcome(outcome)

    run(_upload)
