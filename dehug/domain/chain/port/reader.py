"""ChainReader port - read-only connection to the target network."""

from abc import abstractmethod
from typing import Protocol

from dehug.domain.chain.model.receipt import Receipt
from dehug.domain.shared.port import Port


class ChainReader(Port, Protocol):
    @abstractmethod
    async def call(self, to: str, data: bytes) -> bytes:
        """Execute a read-only call.

        Raises:
            RevertedError: The call reverted (reason decoded when available).
            ExternalServiceError: The node could not be reached.
        """
        ...

    @abstractmethod
    async def wait_for_receipt(self, tx_hash: str) -> Receipt:
        """Suspend until the transaction is mined. No internal timeout."""
        ...

    @abstractmethod
    async def chain_id(self) -> int: ...
