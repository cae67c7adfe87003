"""Global test fixtures."""

from unittest.mock import AsyncMock, MagicMock

import logfire
import pytest
from dehug_testing import REGISTRY, FakeChain

from dehug.domain.registry.service.reader import RegistryReader
from dehug.domain.shared.port.notifier import Notifier

# Spans stay local during tests
logfire.configure(send_to_logfire=False, console=False)


@pytest.fixture
def fake_chain() -> FakeChain:
    return FakeChain()


@pytest.fixture
def registry(fake_chain: FakeChain) -> RegistryReader:
    return RegistryReader(chain=fake_chain, address=REGISTRY, empty_reasons=("No content",))


@pytest.fixture
def notifier() -> Notifier:
    """Mock Notifier recording every message."""
    return MagicMock(spec=["info", "success", "warning", "error"])


@pytest.fixture
def metadata_store() -> AsyncMock:
    """Mock MetadataStore returning an empty document."""
    store = AsyncMock()
    store.fetch.return_value = {}
    return store
