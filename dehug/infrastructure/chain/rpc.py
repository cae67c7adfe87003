"""Read-only JSON-RPC connection to the target network (web3.py)."""

import asyncio
import logging
from typing import Any

from web3 import AsyncHTTPProvider, AsyncWeb3, Web3
from web3.exceptions import ContractLogicError, TransactionNotFound, Web3Exception

from dehug.domain.chain.model.receipt import LogEntry, Receipt
from dehug.domain.chain.revert import revert_data_from_exception, revert_reason_from_exception
from dehug.domain.shared.error import ExternalServiceError, RevertedError

logger = logging.getLogger(__name__)


class Web3ChainReader:
    """ChainReader over an HTTP RPC endpoint."""

    def __init__(self, rpc_url: str, poll_interval: float = 1.0) -> None:
        self._rpc_url = rpc_url
        self._poll_interval = poll_interval
        self._w3 = AsyncWeb3(AsyncHTTPProvider(rpc_url))

    async def call(self, to: str, data: bytes) -> bytes:
        try:
            raw = await self._w3.eth.call(
                {"to": Web3.to_checksum_address(to), "data": Web3.to_hex(data)}
            )
        except ContractLogicError as e:
            raise RevertedError(
                reason=revert_reason_from_exception(e),
                data=revert_data_from_exception(e),
            ) from e
        except (Web3Exception, OSError, TimeoutError) as e:
            raise ExternalServiceError(f"RPC call to {self._rpc_url} failed: {e}") from e
        return bytes(raw)

    async def wait_for_receipt(self, tx_hash: str) -> Receipt:
        while True:
            try:
                raw = await self._w3.eth.get_transaction_receipt(tx_hash)
            except TransactionNotFound:
                await asyncio.sleep(self._poll_interval)
                continue
            except (Web3Exception, OSError, TimeoutError) as e:
                raise ExternalServiceError(f"Receipt lookup for {tx_hash} failed: {e}") from e
            return to_receipt(raw)

    async def chain_id(self) -> int:
        try:
            return await self._w3.eth.chain_id
        except (Web3Exception, OSError, TimeoutError) as e:
            raise ExternalServiceError(f"Chain id probe on {self._rpc_url} failed: {e}") from e

    async def close(self) -> None:
        await self._w3.provider.disconnect()


def _hex(value: Any) -> str:
    if isinstance(value, str):
        return value
    return Web3.to_hex(value)


def to_receipt(raw: Any) -> Receipt:
    """Convert a web3 receipt (AttributeDict with HexBytes) to a Receipt."""
    return Receipt(
        transaction_hash=_hex(raw["transactionHash"]),
        status=int(raw.get("status", 1)),
        block_number=raw.get("blockNumber"),
        logs=tuple(
            LogEntry(
                address=log["address"],
                topics=tuple(_hex(t) for t in log.get("topics", ())),
                data=_hex(log.get("data", "0x")),
            )
            for log in raw.get("logs", ())
        ),
    )
