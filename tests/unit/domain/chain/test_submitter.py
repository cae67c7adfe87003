"""Unit tests for TransactionSubmitter."""

import asyncio

import pytest
from dehug_testing import REGISTRY, TX_HASH, FakeSession

from dehug.domain.chain.model.receipt import Receipt
from dehug.domain.chain.service.submitter import TransactionSubmitter
from dehug.domain.shared.error import (
    ConfirmationTimeoutError,
    InsufficientFundsError,
    NoHashReturnedError,
    NoSessionError,
    RevertedError,
    SubmissionRejectedError,
)

EXPLORER = "https://donut.push.network"
CALL_DATA = bytes.fromhex("a9059cbb") + b"\x00" * 32


@pytest.fixture
def submitter(fake_chain) -> TransactionSubmitter:
    return TransactionSubmitter(reader=fake_chain, explorer_url=EXPLORER)


class StalledReader:
    """Reader whose receipts never arrive."""

    async def wait_for_receipt(self, tx_hash: str) -> Receipt:
        await asyncio.Event().wait()
        raise AssertionError("unreachable")


class TestSubmit:
    @pytest.mark.asyncio
    async def test_confirmed_transaction(self, submitter, fake_chain):
        fake_chain.receipts[TX_HASH] = Receipt(transaction_hash=TX_HASH, block_number=12)
        session = FakeSession()

        outcome = await submitter.submit(session, REGISTRY, CALL_DATA)

        assert outcome.success is True
        assert outcome.transaction_hash == TX_HASH
        assert outcome.explorer_url == f"{EXPLORER}/tx/{TX_HASH}"
        assert outcome.receipt.block_number == 12
        assert outcome.degraded is False
        assert session.sent == [(REGISTRY, "0x" + CALL_DATA.hex())]

    @pytest.mark.asyncio
    async def test_no_session(self, submitter):
        with pytest.raises(NoSessionError):
            await submitter.submit(None, REGISTRY, CALL_DATA)

    @pytest.mark.asyncio
    async def test_disconnected_session_sends_nothing(self, submitter):
        session = FakeSession(connected=False)

        with pytest.raises(NoSessionError):
            await submitter.submit(session, REGISTRY, CALL_DATA)
        assert session.sent == []

    @pytest.mark.asyncio
    async def test_missing_hash(self, submitter):
        with pytest.raises(NoHashReturnedError):
            await submitter.submit(FakeSession(tx_hash=None), REGISTRY, CALL_DATA)

    @pytest.mark.asyncio
    async def test_rejected_in_wallet(self, submitter):
        session = FakeSession(error=Exception("User rejected the request."))

        with pytest.raises(SubmissionRejectedError):
            await submitter.submit(session, REGISTRY, CALL_DATA)

    @pytest.mark.asyncio
    async def test_insufficient_funds(self, submitter):
        session = FakeSession(error=Exception("insufficient funds for gas"))

        with pytest.raises(InsufficientFundsError):
            await submitter.submit(session, REGISTRY, CALL_DATA)

    @pytest.mark.asyncio
    async def test_revert_on_send(self, submitter):
        session = FakeSession(error=Exception("execution reverted: Not owner"))

        with pytest.raises(RevertedError) as exc_info:
            await submitter.submit(session, REGISTRY, CALL_DATA)
        assert exc_info.value.reason == "Not owner"

    @pytest.mark.asyncio
    async def test_session_errors_pass_through(self, submitter):
        session = FakeSession(error=NoSessionError())

        with pytest.raises(NoSessionError):
            await submitter.submit(session, REGISTRY, CALL_DATA)

    @pytest.mark.asyncio
    async def test_reverted_receipt(self, submitter, fake_chain):
        fake_chain.receipts[TX_HASH] = Receipt(transaction_hash=TX_HASH, status=0)

        with pytest.raises(RevertedError):
            await submitter.submit(FakeSession(), REGISTRY, CALL_DATA)

    @pytest.mark.asyncio
    async def test_confirmation_timeout(self):
        submitter = TransactionSubmitter(
            reader=StalledReader(), explorer_url=EXPLORER, confirmation_timeout=0.01
        )

        with pytest.raises(ConfirmationTimeoutError) as exc_info:
            await submitter.submit(FakeSession(), REGISTRY, CALL_DATA)
        assert exc_info.value.tx_hash == TX_HASH

    @pytest.mark.asyncio
    async def test_per_call_timeout_overrides_default(self):
        submitter = TransactionSubmitter(reader=StalledReader(), explorer_url=EXPLORER)

        with pytest.raises(ConfirmationTimeoutError):
            await submitter.submit(FakeSession(), REGISTRY, CALL_DATA, timeout=0.01)


class TestSendSerialization:
    @pytest.mark.asyncio
    async def test_sends_do_not_overlap(self, fake_chain):
        """A second send waits until the first one has its hash."""
        in_flight = 0
        peak = 0

        class SlowSession(FakeSession):
            async def send_transaction(self, to, data):
                nonlocal in_flight, peak
                in_flight += 1
                peak = max(peak, in_flight)
                await asyncio.sleep(0.01)
                in_flight -= 1
                return await super().send_transaction(to, data)

        submitter = TransactionSubmitter(reader=fake_chain, explorer_url=EXPLORER)
        session = SlowSession()

        await asyncio.gather(
            submitter.submit(session, REGISTRY, CALL_DATA),
            submitter.submit(session, REGISTRY, CALL_DATA),
        )

        assert peak == 1
        assert len(session.sent) == 2

    def test_explorer_link_strips_trailing_slash(self, fake_chain):
        submitter = TransactionSubmitter(reader=fake_chain, explorer_url=EXPLORER + "/")

        assert submitter.explorer_link("0x01") == f"{EXPLORER}/tx/0x01"
