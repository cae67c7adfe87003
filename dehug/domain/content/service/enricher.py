"""MetadataEnricher - merge external metadata into a record view."""

import logging

from dehug.domain.content.model.metadata import DiscoveryResult, ExternalMetadata
from dehug.domain.content.model.record import Record
from dehug.domain.content.port.metadata_store import MetadataStore
from dehug.domain.registry.service.reader import RegistryReader
from dehug.domain.shared.service import Service

logger = logging.getLogger(__name__)


class MetadataEnricher(Service):
    """Best-effort enrichment: a missing or broken document yields defaults, never an error."""

    store: MetadataStore
    registry: RegistryReader

    async def enrich(self, record: Record) -> DiscoveryResult:
        try:
            pointer = record.metadata_pointer or await self.registry.get_metadata_pointer(record.id)
            record = record.model_copy(update={"metadata_pointer": pointer})
            if not pointer:
                raise ValueError("empty metadata pointer")
            document = await self.store.fetch(pointer)
        except Exception as e:  # enrichment must not abort discovery
            logger.warning("Metadata for record %s unavailable: %s", record.id, e)
            return DiscoveryResult(
                record=record,
                metadata=ExternalMetadata.defaults_for(record.category),
                metadata_resolved=False,
            )

        return DiscoveryResult(
            record=record,
            metadata=ExternalMetadata.from_document(document, record.category),
            metadata_resolved=isinstance(document, dict),
        )
