"""TransactionSubmitter - send through the wallet session, confirm on the read connection."""

import asyncio
import logging
from collections.abc import Mapping
from dataclasses import field
from typing import Any

import logfire
from eth_utils import encode_hex

from dehug.domain.chain.model.outcome import TransactionOutcome
from dehug.domain.chain.model.receipt import Receipt
from dehug.domain.chain.port.reader import ChainReader
from dehug.domain.chain.port.session import WalletSession
from dehug.domain.chain.revert import classify_send_error
from dehug.domain.shared.error import (
    ConfirmationTimeoutError,
    DehugError,
    NoHashReturnedError,
    NoSessionError,
    RevertedError,
)
from dehug.domain.shared.service import Service

logger = logging.getLogger(__name__)


class TransactionSubmitter(Service):
    """Submits encoded calls and waits for their receipts.

    Sends from one submitter are serialized until each hash is obtained, so a
    second mutation never reaches the wallet while the first is still unsigned.
    Confirmation waits run concurrently and are unbounded unless a timeout is
    given; a timeout only cancels the caller's wait, never the transaction.
    """

    reader: ChainReader
    explorer_url: str
    confirmation_timeout: float | None = None
    _send_lock: asyncio.Lock = field(default_factory=asyncio.Lock, init=False, repr=False)

    async def submit(
        self,
        session: WalletSession | None,
        target: str,
        call_data: bytes,
        *,
        timeout: float | None = None,
    ) -> TransactionOutcome:
        """Send ``call_data`` to ``target`` and wait for confirmation.

        Raises:
            NoSessionError: No connected session.
            SubmissionRejectedError / InsufficientFundsError / RevertedError:
                The wallet refused the transaction.
            NoHashReturnedError: The wallet answered without a hash.
            ConfirmationTimeoutError: ``timeout`` expired before confirmation.
        """
        if session is None or not session.connected:
            raise NoSessionError()

        with logfire.span("SubmitTransaction", to=target):
            tx_hash = await self._send(session, target, call_data)
            logger.info("Transaction sent: %s", tx_hash)
            receipt = await self.wait_for_confirmation(
                tx_hash, timeout=timeout if timeout is not None else self.confirmation_timeout
            )

        return TransactionOutcome(
            success=True,
            transaction_hash=tx_hash,
            explorer_url=self.explorer_link(tx_hash),
            receipt=receipt,
        )

    async def wait_for_confirmation(self, tx_hash: str, timeout: float | None = None) -> Receipt:
        with logfire.span("WaitForConfirmation", tx_hash=tx_hash):
            try:
                if timeout is None:
                    receipt = await self.reader.wait_for_receipt(tx_hash)
                else:
                    receipt = await asyncio.wait_for(self.reader.wait_for_receipt(tx_hash), timeout)
            except TimeoutError as e:
                logger.warning("Stopped waiting for %s after %ss", tx_hash, timeout)
                raise ConfirmationTimeoutError(tx_hash, timeout or 0.0) from e

        if not receipt.succeeded:
            raise RevertedError(message=f"Transaction {tx_hash} reverted")

        logger.info("Transaction confirmed: %s (block %s)", tx_hash, receipt.block_number)
        return receipt

    def explorer_link(self, tx_hash: str) -> str:
        return f"{self.explorer_url.rstrip('/')}/tx/{tx_hash}"

    async def _send(self, session: WalletSession, target: str, call_data: bytes) -> str:
        async with self._send_lock:
            try:
                response = await session.send_transaction(target, encode_hex(call_data))
            except DehugError:
                raise
            except Exception as e:
                error = classify_send_error(e)
                logger.warning("Wallet refused transaction: %s (%s)", e, error.code)
                raise error from e

        tx_hash = _extract_hash(response)
        if not tx_hash:
            raise NoHashReturnedError()
        return tx_hash


def _extract_hash(response: Mapping[str, Any] | None) -> str | None:
    if not response:
        return None
    tx_hash = response.get("hash")
    if isinstance(tx_hash, bytes):
        return encode_hex(tx_hash)
    return tx_hash or None
