"""Unit tests for NetworkGuard."""

from unittest.mock import AsyncMock

import pytest
from dehug_testing import FakeSession

from dehug.domain.chain.service.network_guard import NetworkGuard


@pytest.fixture
def guard(notifier) -> NetworkGuard:
    return NetworkGuard(notifier=notifier, chain_id=42101, network_name="Donut Testnet")


class TestEnsureCorrectNetwork:
    @pytest.mark.asyncio
    async def test_no_session(self, guard, notifier):
        assert await guard.ensure_correct_network(None) is False
        notifier.warning.assert_called_once_with("Please connect your wallet first")

    @pytest.mark.asyncio
    async def test_disconnected_session(self, guard, notifier):
        assert await guard.ensure_correct_network(FakeSession(connected=False)) is False
        notifier.warning.assert_called_once()

    @pytest.mark.asyncio
    async def test_matching_chain(self, guard, notifier):
        assert await guard.ensure_correct_network(FakeSession(42101)) is True
        notifier.error.assert_not_called()
        notifier.info.assert_not_called()

    @pytest.mark.asyncio
    async def test_wrong_chain_refused(self, guard, notifier):
        assert await guard.ensure_correct_network(FakeSession(1)) is False

        message = notifier.error.call_args[0][0]
        assert "chain id 1" in message
        assert "42101" in message

    @pytest.mark.asyncio
    async def test_unknown_chain_is_advisory(self, guard, notifier):
        """Without a probe result the guard advises the user and lets the call through."""
        assert await guard.ensure_correct_network(FakeSession(None)) is True

        message = notifier.info.call_args[0][0]
        assert "Donut Testnet" in message
        assert "42101" in message

    @pytest.mark.asyncio
    async def test_failing_probe_is_advisory(self, guard, notifier):
        session = FakeSession()
        session.chain_id = AsyncMock(side_effect=RuntimeError("method not supported"))

        assert await guard.ensure_correct_network(session) is True
        notifier.info.assert_called_once()

    @pytest.mark.asyncio
    async def test_unknown_chain_refused_when_strict(self, notifier):
        guard = NetworkGuard(
            notifier=notifier, chain_id=42101, network_name="Donut Testnet", strict=True
        )

        assert await guard.ensure_correct_network(FakeSession(None)) is False
