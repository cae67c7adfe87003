"""Dependency injection provider for the metadata store."""

from collections.abc import AsyncIterator

from dishka import Provider, Scope, provide

from dehug.config import Config
from dehug.domain.content.port.metadata_store import MetadataStore
from dehug.infrastructure.storage.gateway import GatewayMetadataStore


class StorageProvider(Provider):
    @provide(scope=Scope.APP)
    async def get_metadata_store(self, config: Config) -> AsyncIterator[MetadataStore]:
        store = GatewayMetadataStore(config.storage.gateway_url, timeout=config.storage.timeout)
        yield store
        await store.close()
