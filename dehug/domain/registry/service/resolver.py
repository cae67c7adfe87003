"""RecordIdResolver - recover the identifier of a record just created.

The registry does not reliably hand the new identifier back, and event
layouts can differ between contract versions, so resolution walks an
ordered list of independent strategies and stops at the first one that
produces a positive identifier:

1. PRIMARY_EVENT   - ``ContentUploaded`` log from the registry, id in topic 1.
                     Matched on the configured topic0, not a computed hash.
2. TRANSFER_EVENT  - ERC-1155 ``TransferSingle`` mint (from = zero address),
                     id in the first word of the log body.
3. LATEST_ID_READ  - ``getLatestTokenId()`` on the registry.
4. SUPPLY_READ     - ``totalSupply()``; only valid while identifiers are
                     assigned sequentially from a known offset.

A strategy that raises, finds nothing, or yields zero never stops the next
one from running.
"""

import logging
from collections.abc import Sequence
from enum import StrEnum
from typing import NamedTuple, Protocol

import logfire
from eth_abi.exceptions import DecodingError

from dehug.domain.chain.abi import ZERO_ADDRESS_TOPIC, topic_to_int
from dehug.domain.chain.model.receipt import LogEntry, Receipt
from dehug.domain.registry import contract
from dehug.domain.shared.error import UnresolvedIdError

logger = logging.getLogger(__name__)


class ResolutionMethod(StrEnum):
    PRIMARY_EVENT = "primary-event"
    TRANSFER_EVENT = "transfer-event"
    LATEST_ID_READ = "latest-id-read"
    SUPPLY_READ = "supply-read"


class ResolvedId(NamedTuple):
    value: int
    method: ResolutionMethod


class FallbackReader(Protocol):
    """The registry reads the resolver may fall back on."""

    async def get_latest_id(self) -> int: ...

    async def total_supply(self) -> int: ...


class ResolutionStrategy(Protocol):
    method: ResolutionMethod

    async def attempt(
        self, receipt: Receipt, registry_address: str, reader: FallbackReader
    ) -> int | None: ...


def _from_registry(log: LogEntry, registry_address: str) -> bool:
    return log.address == registry_address.lower()


class PrimaryEventStrategy:
    method = ResolutionMethod.PRIMARY_EVENT

    def __init__(self, topic: str = contract.DEPLOYED_CONTENT_UPLOADED_TOPIC) -> None:
        self.topic = topic.lower()

    async def attempt(
        self, receipt: Receipt, registry_address: str, reader: FallbackReader
    ) -> int | None:
        for log in receipt.logs:
            if log.topics and log.topics[0] == self.topic and _from_registry(log, registry_address):
                if len(log.topics) > 1:
                    return topic_to_int(log.topics[1])
        return None


class TransferEventStrategy:
    method = ResolutionMethod.TRANSFER_EVENT

    def __init__(self, topic: str = contract.TRANSFER_SINGLE.topic) -> None:
        self.topic = topic.lower()

    async def attempt(
        self, receipt: Receipt, registry_address: str, reader: FallbackReader
    ) -> int | None:
        for log in receipt.logs:
            if (
                len(log.topics) >= 3
                and log.topics[0] == self.topic
                and log.topics[2] == ZERO_ADDRESS_TOPIC
                and _from_registry(log, registry_address)
            ):
                try:
                    token_id, _amount = contract.TRANSFER_SINGLE.decode_data(log.data)
                except (DecodingError, ValueError) as e:
                    logger.debug("Skipping undecodable TransferSingle log: %s", e)
                    continue
                return int(token_id)
        return None


class LatestIdReadStrategy:
    method = ResolutionMethod.LATEST_ID_READ

    async def attempt(
        self, receipt: Receipt, registry_address: str, reader: FallbackReader
    ) -> int | None:
        return await reader.get_latest_id()


class SupplyReadStrategy:
    """Newest id = supply - 1 + offset. Breaks if the registry ever burns or reassigns ids."""

    method = ResolutionMethod.SUPPLY_READ

    def __init__(self, id_offset: int = 1) -> None:
        self.id_offset = id_offset

    async def attempt(
        self, receipt: Receipt, registry_address: str, reader: FallbackReader
    ) -> int | None:
        supply = await reader.total_supply()
        if supply <= 0:
            return None
        logger.warning(
            "Resolving record id from totalSupply (%s) assuming sequential ids from %s",
            supply,
            self.id_offset,
        )
        return supply - 1 + self.id_offset


def default_strategies(
    id_offset: int = 1,
    content_uploaded_topic: str = contract.DEPLOYED_CONTENT_UPLOADED_TOPIC,
) -> list[ResolutionStrategy]:
    return [
        PrimaryEventStrategy(content_uploaded_topic),
        TransferEventStrategy(),
        LatestIdReadStrategy(),
        SupplyReadStrategy(id_offset),
    ]


class RecordIdResolver:
    """Walks the strategy list in order. Never returns zero."""

    def __init__(self, strategies: Sequence[ResolutionStrategy] | None = None) -> None:
        self.strategies = list(strategies) if strategies is not None else default_strategies()

    async def resolve(
        self, receipt: Receipt, registry_address: str, fallback_reader: FallbackReader
    ) -> ResolvedId:
        with logfire.span("ResolveRecordId", tx_hash=receipt.transaction_hash):
            for strategy in self.strategies:
                try:
                    value = await strategy.attempt(receipt, registry_address, fallback_reader)
                except Exception as e:  # each method is independent of the others
                    logger.warning("Record id via %s failed: %s", strategy.method, e)
                    continue

                if value is None or value <= 0:
                    logger.debug("Record id via %s: nothing usable (%s)", strategy.method, value)
                    continue

                logger.info("Record id %s resolved via %s", value, strategy.method)
                return ResolvedId(value, strategy.method)

        raise UnresolvedIdError(receipt.transaction_hash)

    async def resolve_id(
        self, receipt: Receipt, registry_address: str, fallback_reader: FallbackReader
    ) -> int:
        resolved = await self.resolve(receipt, registry_address, fallback_reader)
        return resolved.value
