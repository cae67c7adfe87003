"""Dependency injection provider for the registry and content services."""

from dishka import Provider, Scope, from_context, provide

from dehug.config import Config
from dehug.domain.chain.port.reader import ChainReader
from dehug.domain.chain.port.session import WalletSession
from dehug.domain.chain.service.network_guard import NetworkGuard
from dehug.domain.chain.service.submitter import TransactionSubmitter
from dehug.domain.content.port.metadata_store import MetadataStore
from dehug.domain.content.service.discovery import ContentDiscoveryService
from dehug.domain.content.service.enricher import MetadataEnricher
from dehug.domain.content.service.mutation import ContentMutationService
from dehug.domain.registry.service.reader import RegistryReader
from dehug.domain.registry.service.resolver import RecordIdResolver, default_strategies
from dehug.domain.shared.error import ConfigurationError
from dehug.domain.shared.port.notifier import Notifier


class ContentProvider(Provider):
    config = from_context(provides=Config, scope=Scope.APP)
    notifier = from_context(provides=Notifier, scope=Scope.APP)

    @provide(scope=Scope.APP)
    def get_registry_reader(self, config: Config, chain: ChainReader) -> RegistryReader:
        if not config.registry.address:
            raise ConfigurationError(
                "Registry address not configured. Set DEHUG_REGISTRY__ADDRESS or registry.address"
            )
        return RegistryReader(
            chain=chain,
            address=config.registry.address,
            empty_reasons=tuple(config.registry.empty_reasons),
        )

    @provide(scope=Scope.APP)
    def get_enricher(self, store: MetadataStore, registry: RegistryReader) -> MetadataEnricher:
        return MetadataEnricher(store=store, registry=registry)

    @provide(scope=Scope.APP)
    def get_discovery(
        self, config: Config, registry: RegistryReader, enricher: MetadataEnricher
    ) -> ContentDiscoveryService:
        return ContentDiscoveryService(
            registry=registry,
            enricher=enricher,
            default_limit=config.discovery.limit,
            default_max_scan=config.discovery.max_scan,
            batch_prefilter=config.discovery.batch_prefilter,
        )

    @provide(scope=Scope.APP)
    def get_guard(self, config: Config, notifier: Notifier) -> NetworkGuard:
        return NetworkGuard(
            notifier=notifier,
            chain_id=config.network.chain_id,
            network_name=config.network.name,
            strict=config.network.strict_chain_check,
        )

    @provide(scope=Scope.APP)
    def get_submitter(self, config: Config, chain: ChainReader) -> TransactionSubmitter:
        return TransactionSubmitter(
            reader=chain,
            explorer_url=config.network.explorer_url,
            confirmation_timeout=config.network.confirmation_timeout,
        )

    @provide(scope=Scope.APP)
    def get_resolver(self, config: Config) -> RecordIdResolver:
        return RecordIdResolver(
            default_strategies(
                config.registry.id_offset,
                content_uploaded_topic=config.registry.content_uploaded_topic,
            )
        )

    @provide(scope=Scope.APP)
    def get_mutation(
        self,
        session: WalletSession,
        guard: NetworkGuard,
        submitter: TransactionSubmitter,
        resolver: RecordIdResolver,
        registry: RegistryReader,
        notifier: Notifier,
    ) -> ContentMutationService:
        return ContentMutationService(
            session=session,
            guard=guard,
            submitter=submitter,
            resolver=resolver,
            registry=registry,
            notifier=notifier,
        )
