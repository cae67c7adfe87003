"""RegistryReader - read-only access to registry entries."""

import logging
from datetime import UTC, datetime

from dehug.domain.chain.port.reader import ChainReader
from dehug.domain.content.model.record import ContentCategory, Record, RecordSummary
from dehug.domain.registry import contract
from dehug.domain.shared.error import EmptyRegistryError, RevertedError, ValidationError
from dehug.domain.shared.service import Service

logger = logging.getLogger(__name__)


class RegistryReader(Service):
    """Typed reads against the registry contract.

    Every method is side-effect free and safe to retry or run concurrently.
    """

    chain: ChainReader
    address: str
    empty_reasons: tuple[str, ...] = ()

    async def list_recent_ids(self, max_count: int) -> list[int]:
        """Most-recent-first identifiers, at most ``max_count`` of them.

        Raises:
            EmptyRegistryError: Nothing has been uploaded yet.
            RevertedError: The call reverted for another reason.
            ExternalServiceError: The node could not be reached.
        """
        if max_count <= 0:
            raise ValidationError("max_count must be positive", field="max_count")

        try:
            raw = await self.chain.call(self.address, contract.GET_LATEST_CONTENT.encode_call(max_count))
        except RevertedError as e:
            if self._means_empty(e):
                logger.info("Registry reports no content (%s)", e.reason or "no reason")
                raise EmptyRegistryError() from e
            raise

        if not raw:
            raise EmptyRegistryError()

        (ids,) = contract.GET_LATEST_CONTENT.decode_result(raw)
        if not ids:
            raise EmptyRegistryError()
        return [int(i) for i in ids][:max_count]

    async def get_record(self, record_id: int) -> Record:
        raw = await self.chain.call(self.address, contract.GET_CONTENT.encode_call(record_id))
        (
            owner,
            category,
            storage_hash,
            title,
            quality_tier,
            download_count,
            points,
            created_at,
            is_active,
        ) = contract.GET_CONTENT.decode_result(raw)
        return Record(
            id=record_id,
            category=ContentCategory(category),
            owner=owner,
            storage_hash=storage_hash,
            title=title,
            quality_tier=quality_tier,
            download_count=download_count,
            points=points,
            created_at=datetime.fromtimestamp(created_at, UTC),
            is_active=is_active,
        )

    async def get_records_batch(self, record_ids: list[int]) -> list[RecordSummary]:
        """Bulk path: one call, parallel arrays zipped back into summaries."""
        if not record_ids:
            return []
        raw = await self.chain.call(
            self.address, contract.GET_CONTENT_BATCH.encode_call(list(record_ids))
        )
        owners, categories, hashes, titles, tiers, downloads, active = (
            contract.GET_CONTENT_BATCH.decode_result(raw)
        )
        summaries = []
        for i, record_id in enumerate(record_ids):
            summaries.append(
                RecordSummary(
                    id=record_id,
                    owner=owners[i],
                    category=ContentCategory(categories[i]),
                    storage_hash=hashes[i],
                    title=titles[i],
                    quality_tier=tiers[i],
                    download_count=downloads[i],
                    is_active=active[i],
                )
            )
        return summaries

    async def get_metadata_pointer(self, record_id: int) -> str:
        raw = await self.chain.call(self.address, contract.URI.encode_call(record_id))
        (pointer,) = contract.URI.decode_result(raw)
        return pointer

    async def get_latest_id(self) -> int:
        raw = await self.chain.call(self.address, contract.GET_LATEST_TOKEN_ID.encode_call())
        (latest,) = contract.GET_LATEST_TOKEN_ID.decode_result(raw)
        return int(latest)

    async def total_supply(self) -> int:
        raw = await self.chain.call(self.address, contract.TOTAL_SUPPLY.encode_call())
        (supply,) = contract.TOTAL_SUPPLY.decode_result(raw)
        return int(supply)

    def _means_empty(self, error: RevertedError) -> bool:
        # With a reason, trust it; without one, an empty revert on a fresh registry means empty
        if error.reason:
            reason = error.reason.lower()
            return any(r.lower() in reason for r in self.empty_reasons)
        return not error.data
