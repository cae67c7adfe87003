"""Unit tests for RegistryReader."""

from datetime import UTC, datetime

import pytest
from dehug_testing import CREATED_AT, OWNER, REGISTRY, content_row, encode_result

from dehug.domain.content.model.record import ContentCategory
from dehug.domain.registry import contract
from dehug.domain.shared.error import (
    EmptyRegistryError,
    ExternalServiceError,
    RevertedError,
    ValidationError,
)


def _ids(*ids):
    return lambda count: encode_result(contract.GET_LATEST_CONTENT, list(ids))


class TestListRecentIds:
    @pytest.mark.asyncio
    async def test_returns_ids_most_recent_first(self, registry, fake_chain):
        fake_chain.on(contract.GET_LATEST_CONTENT, _ids(5, 4, 3))

        assert await registry.list_recent_ids(10) == [5, 4, 3]
        assert fake_chain.calls_to(contract.GET_LATEST_CONTENT) == [REGISTRY]

    @pytest.mark.asyncio
    async def test_truncates_to_max_count(self, registry, fake_chain):
        fake_chain.on(contract.GET_LATEST_CONTENT, _ids(5, 4, 3))

        assert await registry.list_recent_ids(2) == [5, 4]

    @pytest.mark.asyncio
    async def test_rejects_non_positive_count(self, registry, fake_chain):
        with pytest.raises(ValidationError):
            await registry.list_recent_ids(0)
        assert fake_chain.calls == []

    @pytest.mark.asyncio
    async def test_known_empty_reason(self, registry, fake_chain):
        fake_chain.on(
            contract.GET_LATEST_CONTENT, lambda count: RevertedError(reason="No content uploaded")
        )

        with pytest.raises(EmptyRegistryError):
            await registry.list_recent_ids(10)

    @pytest.mark.asyncio
    async def test_bare_revert_means_empty(self, registry, fake_chain):
        fake_chain.on(contract.GET_LATEST_CONTENT, lambda count: RevertedError())

        with pytest.raises(EmptyRegistryError):
            await registry.list_recent_ids(10)

    @pytest.mark.asyncio
    async def test_zero_length_result_means_empty(self, registry, fake_chain):
        fake_chain.on(contract.GET_LATEST_CONTENT, lambda count: b"")

        with pytest.raises(EmptyRegistryError):
            await registry.list_recent_ids(10)

    @pytest.mark.asyncio
    async def test_empty_array_means_empty(self, registry, fake_chain):
        fake_chain.on(contract.GET_LATEST_CONTENT, _ids())

        with pytest.raises(EmptyRegistryError):
            await registry.list_recent_ids(10)

    @pytest.mark.asyncio
    async def test_other_revert_reason_propagates(self, registry, fake_chain):
        fake_chain.on(contract.GET_LATEST_CONTENT, lambda count: RevertedError(reason="Paused"))

        with pytest.raises(RevertedError) as exc_info:
            await registry.list_recent_ids(10)
        assert not isinstance(exc_info.value, EmptyRegistryError)
        assert exc_info.value.reason == "Paused"

    @pytest.mark.asyncio
    async def test_revert_with_custom_error_data_propagates(self, registry, fake_chain):
        fake_chain.on(
            contract.GET_LATEST_CONTENT, lambda count: RevertedError(data=bytes.fromhex("deadbeef"))
        )

        with pytest.raises(RevertedError):
            await registry.list_recent_ids(10)

    @pytest.mark.asyncio
    async def test_node_failure_propagates(self, registry, fake_chain):
        fake_chain.on(
            contract.GET_LATEST_CONTENT, lambda count: ExternalServiceError("node down")
        )

        with pytest.raises(ExternalServiceError):
            await registry.list_recent_ids(10)


class TestGetRecord:
    @pytest.mark.asyncio
    async def test_decodes_record(self, registry, fake_chain):
        fake_chain.on(
            contract.GET_CONTENT,
            lambda rid: content_row(
                ContentCategory.MODEL, title="Tiny LM", tier=2, downloads=1500, points=45
            ),
        )

        record = await registry.get_record(7)

        assert record.id == 7
        assert record.category is ContentCategory.MODEL
        assert record.owner.lower() == OWNER.lower()
        assert record.title == "Tiny LM"
        assert record.quality_tier == 2
        assert record.download_count == 1500
        assert record.points == 45
        assert record.created_at == datetime.fromtimestamp(CREATED_AT, UTC)
        assert record.is_active is True
        assert record.metadata_pointer is None

    @pytest.mark.asyncio
    async def test_unknown_category_is_an_error(self, registry, fake_chain):
        fake_chain.on(contract.GET_CONTENT, lambda rid: content_row(7))

        with pytest.raises(ValueError):
            await registry.get_record(1)

    @pytest.mark.asyncio
    async def test_nonexistent_record_reverts(self, registry, fake_chain):
        fake_chain.on(
            contract.GET_CONTENT, lambda rid: RevertedError(reason="Token does not exist")
        )

        with pytest.raises(RevertedError):
            await registry.get_record(99)


class TestOtherReads:
    @pytest.mark.asyncio
    async def test_records_batch(self, registry, fake_chain):
        fake_chain.on(
            contract.GET_CONTENT_BATCH,
            lambda ids: encode_result(
                contract.GET_CONTENT_BATCH,
                [OWNER, OWNER],
                [0, 1],
                ["QmA", "QmB"],
                ["Alpha", "Beta"],
                [0, 3],
                [10, 20],
                [True, False],
            ),
        )

        summaries = await registry.get_records_batch([2, 1])

        assert [s.id for s in summaries] == [2, 1]
        assert summaries[0].category is ContentCategory.DATA
        assert summaries[1].title == "Beta"
        assert summaries[1].is_active is False

    @pytest.mark.asyncio
    async def test_records_batch_empty_input(self, registry, fake_chain):
        assert await registry.get_records_batch([]) == []
        assert fake_chain.calls == []

    @pytest.mark.asyncio
    async def test_metadata_pointer(self, registry, fake_chain):
        fake_chain.on(contract.URI, lambda rid: encode_result(contract.URI, f"ipfs://QmMeta{rid}"))

        assert await registry.get_metadata_pointer(3) == "ipfs://QmMeta3"

    @pytest.mark.asyncio
    async def test_latest_id_and_supply(self, registry, fake_chain):
        fake_chain.on(
            contract.GET_LATEST_TOKEN_ID, lambda: encode_result(contract.GET_LATEST_TOKEN_ID, 9)
        )
        fake_chain.on(contract.TOTAL_SUPPLY, lambda: encode_result(contract.TOTAL_SUPPLY, 12))

        assert await registry.get_latest_id() == 9
        assert await registry.total_supply() == 12
