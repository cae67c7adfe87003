"""Dependency injection provider for chain adapters."""

from collections.abc import AsyncIterator

from dishka import Provider, Scope, provide

from dehug.config import Config
from dehug.domain.chain.port.reader import ChainReader
from dehug.domain.chain.port.session import WalletSession
from dehug.infrastructure.chain.rpc import Web3ChainReader
from dehug.infrastructure.chain.session import DisconnectedSession, NodeSignerSession


class ChainProvider(Provider):
    """Read connection and wallet session. Both are APP-scoped and closed on shutdown."""

    @provide(scope=Scope.APP)
    async def get_chain_reader(self, config: Config) -> AsyncIterator[ChainReader]:
        reader = Web3ChainReader(config.network.rpc_url, poll_interval=config.network.poll_interval)
        yield reader
        await reader.close()

    @provide(scope=Scope.APP)
    async def get_wallet_session(self, config: Config) -> AsyncIterator[WalletSession]:
        if not config.wallet.signer_url:
            yield DisconnectedSession()
            return
        session = await NodeSignerSession.connect(config.wallet.signer_url, config.wallet.account)
        yield session
        await session.close()
