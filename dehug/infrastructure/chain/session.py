"""Wallet sessions backed by a JSON-RPC signer endpoint."""

import logging
from collections.abc import Mapping
from typing import Any

from web3 import AsyncHTTPProvider, AsyncWeb3, Web3

from dehug.domain.shared.error import NoSessionError

logger = logging.getLogger(__name__)


class NodeSignerSession:
    """Submits through ``eth_sendTransaction`` on an endpoint that holds the account.

    The endpoint (a local dev node, Clef, Frame, ...) does the signing, so
    this client never touches keys. Unlike browser wallet kits it can report
    its chain id, which lets the network guard enforce the target network.
    """

    def __init__(self, signer_url: str, account: str | None = None) -> None:
        self._signer_url = signer_url
        self._w3 = AsyncWeb3(AsyncHTTPProvider(signer_url))
        self._account = Web3.to_checksum_address(account) if account else None

    @classmethod
    async def connect(cls, signer_url: str, account: str | None = None) -> "NodeSignerSession":
        """Open a session, defaulting to the first account the signer manages."""
        session = cls(signer_url, account)
        if session._account is None:
            accounts = await session._w3.eth.accounts
            if accounts:
                session._account = accounts[0]
                logger.info("Using signer account %s", session._account)
            else:
                logger.warning("Signer at %s manages no accounts", signer_url)
        return session

    @property
    def account(self) -> str | None:
        return self._account

    @property
    def connected(self) -> bool:
        return self._account is not None

    async def chain_id(self) -> int | None:
        return await self._w3.eth.chain_id

    async def send_transaction(self, to: str, data: str) -> Mapping[str, Any]:
        if self._account is None:
            raise NoSessionError()
        tx_hash = await self._w3.eth.send_transaction(
            {"from": self._account, "to": Web3.to_checksum_address(to), "data": data}
        )
        return {"hash": Web3.to_hex(tx_hash)}

    async def close(self) -> None:
        await self._w3.provider.disconnect()


class DisconnectedSession:
    """Stand-in session when no signer is configured."""

    account = None
    connected = False

    async def chain_id(self) -> int | None:
        return None

    async def send_transaction(self, to: str, data: str) -> Mapping[str, Any]:
        raise NoSessionError()
