import logging
import os
import sys
from pathlib import Path
from typing import Any

import logfire
import yaml
from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource, SettingsConfigDict

from dehug.domain.registry.contract import DEPLOYED_CONTENT_UPLOADED_TOPIC
from dehug.domain.shared.error import ConfigurationError


# =============================================================================
# Registry / Network Configuration
# =============================================================================


class RegistryConfig(BaseModel):
    """Where the content registry lives and how it assigns identifiers."""

    address: str | None = None  # Registry contract address (required for chain calls)
    id_offset: int = 1  # First identifier the registry assigns (used by the supply fallback)
    content_uploaded_topic: str = DEPLOYED_CONTENT_UPLOADED_TOPIC  # topic0 of the creation event
    empty_reasons: list[str] = Field(
        default_factory=lambda: ["No content", "No content uploaded", "Empty registry"]
    )


class NetworkConfig(BaseModel):
    """Target network for reads and state-changing calls."""

    chain_id: int = 42101
    name: str = "Push Chain Donut Testnet"
    rpc_url: str = "https://evm.rpc-testnet-donut-node1.push.org"
    explorer_url: str = "https://donut.push.network"
    strict_chain_check: bool = False  # Refuse sessions whose chain id cannot be probed
    confirmation_timeout: float | None = None  # No bound on confirmation waits by default
    poll_interval: float = 1.0  # Seconds between receipt polls


class StorageConfig(BaseModel):
    """Content-addressed storage gateway used to read metadata documents."""

    gateway_url: str = "https://ipfs.io/ipfs/"
    timeout: float = 15.0


class DiscoveryConfig(BaseModel):
    limit: int = 10  # Results per discovery pass
    max_scan: int = 50  # Recent identifiers scanned per pass
    batch_prefilter: bool = False  # Narrow candidates with getContentBatch first


class WalletConfig(BaseModel):
    """Node-signer wallet session (the signer endpoint holds the keys)."""

    signer_url: str | None = None
    account: str | None = None


class LoggingConfig(BaseModel):
    level: str = "INFO"
    format: str = "%(asctime)s %(levelname)-8s [%(name)s] %(message)s"
    date_format: str = "%Y-%m-%d %H:%M:%S"
    logfire: bool = False  # Export spans when a LOGFIRE_TOKEN is present

    @property
    def file(self) -> str | None:
        """Get log file path from DEHUG_LOG_FILE env var."""
        return os.environ.get("DEHUG_LOG_FILE")


# =============================================================================
# Application Configuration
# =============================================================================


class YamlConfigSettingsSource(PydanticBaseSettingsSource):
    """Settings from the YAML file named by DEHUG_CONFIG_FILE.

    A missing variable or file contributes nothing; a file that is not a
    mapping at the top level is a configuration error.
    """

    CONFIG_FILE_ENV = "DEHUG_CONFIG_FILE"

    def __init__(self, settings_cls: type[BaseSettings]) -> None:
        super().__init__(settings_cls)
        self._data = self._read()

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        return self._data.get(field_name), field_name, False

    def __call__(self) -> dict[str, Any]:
        return {k: v for k, v in self._data.items() if k in self.settings_cls.model_fields}

    def _read(self) -> dict[str, Any]:
        config_file = os.environ.get(self.CONFIG_FILE_ENV)
        if not config_file:
            return {}
        path = Path(config_file).expanduser()
        if not path.is_file():
            return {}
        data = yaml.safe_load(path.read_text()) or {}
        if not isinstance(data, dict):
            raise ConfigurationError(f"{path} must contain a YAML mapping")
        return data


class Config(BaseSettings):
    registry: RegistryConfig = RegistryConfig()
    network: NetworkConfig = NetworkConfig()
    storage: StorageConfig = StorageConfig()
    discovery: DiscoveryConfig = DiscoveryConfig()
    wallet: WalletConfig = WalletConfig()
    logging: LoggingConfig = LoggingConfig()

    model_config = SettingsConfigDict(
        env_prefix="DEHUG_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",  # Allows DEHUG_REGISTRY__ADDRESS override
        extra="ignore",
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Explicit values beat DEHUG_* variables, which beat .env, then the YAML file."""
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            YamlConfigSettingsSource(settings_cls),
            file_secret_settings,
        )


NOISY_LOGGERS = ("httpx", "httpcore", "urllib3", "asyncio", "web3", "aiohttp")


def configure_logging(config: LoggingConfig) -> None:
    """Install one root handler (stderr, or DEHUG_LOG_FILE) and set up logfire spans.

    Call once, before the container is built.
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(config.level)

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    formatter = logging.Formatter(config.format, datefmt=config.date_format)

    if config.file:
        log_path = Path(config.file).expanduser()
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handler: logging.Handler = logging.FileHandler(log_path)
    else:
        handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(config.level)
    handler.setFormatter(formatter)
    root_logger.addHandler(handler)

    # Spans are only exported when a token is configured
    logfire.configure(
        send_to_logfire="if-token-present" if config.logfire else False,
        console=False,
    )
    if config.logfire:
        logfire.instrument_httpx()

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    logging.debug("Logging configured: level=%s, file=%s", config.level, config.file)
