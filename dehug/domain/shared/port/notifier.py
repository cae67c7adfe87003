"""Notifier port - user-facing progress and result messages."""

from typing import Protocol

from dehug.domain.shared.port import Port


class Notifier(Port, Protocol):
    """Surface short messages to whoever drives the client (CLI, UI toast layer)."""

    def info(self, message: str) -> None: ...

    def success(self, message: str) -> None: ...

    def warning(self, message: str) -> None: ...

    def error(self, message: str) -> None: ...
