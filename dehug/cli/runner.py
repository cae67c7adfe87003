"""Run an async CLI action inside a DI container."""

import asyncio
import logging
import sys
from collections.abc import Awaitable, Callable
from typing import TypeVar

from dishka import AsyncContainer

from dehug.application.di import create_container
from dehug.cli.console import Console, get_console
from dehug.config import Config, configure_logging
from dehug.domain.shared.error import ConfigurationError, DehugError, ExternalServiceError

T = TypeVar("T")

logger = logging.getLogger(__name__)


def run(action: Callable[[AsyncContainer, Console], Awaitable[T]]) -> T:
    """Build config and container, run ``action``, exit 1 on a DeHug error."""
    console = get_console()

    async def _main(config: Config) -> T:
        container = create_container(config, notifier=console)
        try:
            return await action(container, console)
        finally:
            await container.close()

    try:
        config = Config()
        configure_logging(config.logging)
        return asyncio.run(_main(config))
    except ConfigurationError as e:
        console.error(e.message, hint="Run 'dehug config init' to create a config file")
        sys.exit(1)
    except ExternalServiceError as e:
        console.error(e.message, hint="Check network.rpc_url and storage.gateway_url")
        sys.exit(1)
    except DehugError as e:
        logger.debug("Command failed: %s", e.message)
        console.error(e.user_message)
        sys.exit(1)
