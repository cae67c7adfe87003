"""WalletSession port - the connected wallet's authority to submit transactions."""

from collections.abc import Mapping
from typing import Any, Protocol

from dehug.domain.shared.port import Port


class WalletSession(Port, Protocol):
    """An explicitly passed wallet session handle.

    Implementations sign and broadcast; the client never sees keys.
    """

    @property
    def account(self) -> str | None:
        """Address of the connected account, if any."""
        ...

    @property
    def connected(self) -> bool: ...

    async def chain_id(self) -> int | None:
        """Chain id the session submits to, or None if the session cannot tell."""
        ...

    async def send_transaction(self, to: str, data: str) -> Mapping[str, Any]:
        """Sign and broadcast a call. The response carries the hash under ``hash``."""
        ...
