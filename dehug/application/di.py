from dishka import AsyncContainer, make_async_container

from dehug.config import Config
from dehug.domain.content.util.di import ContentProvider
from dehug.domain.shared.port.notifier import Notifier
from dehug.infrastructure.chain.di import ChainProvider
from dehug.infrastructure.notify.notifier import LoggingNotifier
from dehug.infrastructure.storage.di import StorageProvider


def create_container(
    config: Config | None = None, notifier: Notifier | None = None
) -> AsyncContainer:
    config = config or Config()

    return make_async_container(
        ChainProvider(),
        StorageProvider(),
        ContentProvider(),
        context={Config: config, Notifier: notifier or LoggingNotifier()},
    )
