"""ContentDiscoveryService - latest records of one category, enriched for display."""

import asyncio
import logging

import logfire

from dehug.domain.content.model.metadata import DiscoveryResult
from dehug.domain.content.model.record import ContentCategory, Record
from dehug.domain.content.service.enricher import MetadataEnricher
from dehug.domain.registry.service.reader import RegistryReader
from dehug.domain.shared.error import EmptyRegistryError
from dehug.domain.shared.service import Service

logger = logging.getLogger(__name__)


class ContentDiscoveryService(Service):
    """Scans the most recent registry entries and keeps active matches.

    Each call builds its own result list; concurrent calls share nothing.
    An empty registry, or one with no matching entries, is an empty list.
    """

    registry: RegistryReader
    enricher: MetadataEnricher
    default_limit: int = 10
    default_max_scan: int = 50
    batch_prefilter: bool = False

    async def discover(
        self,
        category: ContentCategory,
        limit: int | None = None,
        max_scan: int | None = None,
    ) -> list[DiscoveryResult]:
        """Return at most ``limit`` active records of ``category``, most recent first.

        Args:
            category: Content category to keep.
            limit: Maximum results.
            max_scan: How many recent identifiers to inspect.

        Raises:
            RevertedError / ExternalServiceError: Listing identifiers failed
                for a reason other than an empty registry.
        """
        limit = self.default_limit if limit is None else limit
        max_scan = self.default_max_scan if max_scan is None else max_scan
        if limit <= 0 or max_scan <= 0:
            return []

        with logfire.span("Discover", category=category.name, limit=limit, max_scan=max_scan):
            try:
                ids = await self.registry.list_recent_ids(max_scan)
            except EmptyRegistryError:
                logger.info("No content on the registry yet")
                return []

            logger.debug("Scanning %d recent ids for %s", len(ids), category.name)
            if self.batch_prefilter:
                ids = await self._prefilter(ids, category)

            records = await self._collect(ids, category, limit)
            if not records:
                logger.info("No active %s records among %d scanned", category.name, len(ids))
                return []

            results = await asyncio.gather(*(self.enricher.enrich(r) for r in records))

        logger.info("Discovered %d %s records", len(results), category.name)
        return list(results)

    async def latest_datasets(
        self, limit: int | None = None, max_scan: int | None = None
    ) -> list[DiscoveryResult]:
        return await self.discover(ContentCategory.DATA, limit, max_scan)

    async def latest_models(
        self, limit: int | None = None, max_scan: int | None = None
    ) -> list[DiscoveryResult]:
        return await self.discover(ContentCategory.MODEL, limit, max_scan)

    async def get(self, record_id: int) -> DiscoveryResult:
        """One record, enriched. Errors from the registry propagate."""
        record = await self.registry.get_record(record_id)
        return await self.enricher.enrich(record)

    async def _collect(
        self, ids: list[int], category: ContentCategory, limit: int
    ) -> list[Record]:
        accepted: list[Record] = []
        for record_id in ids:
            try:
                record = await self.registry.get_record(record_id)
            except Exception as e:  # one bad record must not abort the pass
                logger.warning("Skipping record %s: %s", record_id, e)
                continue

            if record.category == category and record.is_active:
                accepted.append(record)
                if len(accepted) >= limit:
                    break
        return accepted

    async def _prefilter(self, ids: list[int], category: ContentCategory) -> list[int]:
        try:
            summaries = await self.registry.get_records_batch(ids)
        except Exception as e:
            logger.warning("Batch prefilter failed, scanning records one by one: %s", e)
            return ids
        return [s.id for s in summaries if s.category == category and s.is_active]
