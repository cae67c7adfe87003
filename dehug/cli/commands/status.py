"""Check the RPC node and storage gateway."""

import sys

import cyclopts
from dishka import AsyncContainer

from dehug.cli.console import Console
from dehug.cli.runner import run
from dehug.config import Config
from dehug.domain.chain.port.reader import ChainReader
from dehug.domain.content.port.metadata_store import MetadataStore

app = cyclopts.App(name="status", help="Check network and storage connectivity")


@app.default
def status() -> None:
    """Probe the configured RPC endpoint and storage gateway."""

    async def _status(container: AsyncContainer, console: Console) -> bool:
        config = await container.get(Config)
        reader = await container.get(ChainReader)
        store = await container.get(MetadataStore)

        healthy = True
        chain_id = await reader.chain_id()
        if chain_id == config.network.chain_id:
            console.success(f"RPC {config.network.rpc_url} on chain {chain_id}")
        else:
            healthy = False
            console.error(
                f"RPC {config.network.rpc_url} is on chain {chain_id}, "
                f"expected {config.network.chain_id} ({config.network.name})"
            )

        if await store.health():
            console.success(f"Gateway {config.storage.gateway_url} reachable")
        else:
            healthy = False
            console.error(f"Gateway {config.storage.gateway_url} unreachable")

        if config.registry.address:
            console.success(f"Registry {config.registry.address}")
        else:
            healthy = False
            console.warning("Registry address not configured")
        return healthy

    if not run(_status):
        sys.exit(1)
