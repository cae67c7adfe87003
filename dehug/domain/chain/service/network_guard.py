"""NetworkGuard - checks the session targets the required network."""

import logging

from dehug.domain.chain.port.session import WalletSession
from dehug.domain.shared.port.notifier import Notifier
from dehug.domain.shared.service import Service

logger = logging.getLogger(__name__)


class NetworkGuard(Service):
    """Gate for state-changing calls.

    When the session exposes its chain id, the id is enforced. When it cannot,
    the guard falls back to an advisory check: it tells the user which network
    is required and answers True ("likely correct network", not a proof) unless
    ``strict`` is set.
    """

    notifier: Notifier
    chain_id: int
    network_name: str
    strict: bool = False

    async def ensure_correct_network(self, session: WalletSession | None) -> bool:
        if session is None or not session.connected:
            self.notifier.warning("Please connect your wallet first")
            return False

        try:
            active = await session.chain_id()
        except Exception as e:  # probe is optional; fall through to advisory mode
            logger.warning("Chain id probe failed: %s", e)
            active = None

        if active == self.chain_id:
            return True

        if active is not None:
            logger.info("Session on chain %s, expected %s", active, self.chain_id)
            self.notifier.error(
                f"Wrong network (chain id {active}). "
                f"Please switch your wallet to {self.network_name} (chain id {self.chain_id})."
            )
            return False

        self.notifier.info(
            f"Please switch your wallet to {self.network_name} "
            f"(chain id {self.chain_id}) and retry."
        )
        if self.strict:
            logger.warning("Session chain id unknown and strict check enabled; refusing")
            return False
        return True
