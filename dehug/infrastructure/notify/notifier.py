"""Notifier that routes user-facing messages to the log."""

import logging

logger = logging.getLogger("dehug.notify")


class LoggingNotifier:
    def info(self, message: str) -> None:
        logger.info(message)

    def success(self, message: str) -> None:
        logger.info(message)

    def warning(self, message: str) -> None:
        logger.warning(message)

    def error(self, message: str) -> None:
        logger.error(message)
