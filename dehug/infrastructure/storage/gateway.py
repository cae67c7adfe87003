"""Metadata documents through an HTTP gateway to content-addressed storage."""

import logging
from typing import Any

import httpx

from dehug.domain.shared.error import ExternalServiceError

logger = logging.getLogger(__name__)

IPFS_SCHEME = "ipfs://"


class GatewayMetadataStore:
    """MetadataStore that rewrites ``ipfs://`` pointers onto a gateway URL."""

    def __init__(
        self,
        gateway_url: str,
        timeout: float = 15.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._gateway_url = gateway_url if gateway_url.endswith("/") else gateway_url + "/"
        self._client = client or httpx.AsyncClient(timeout=timeout, follow_redirects=True)

    def resolve_url(self, pointer: str) -> str:
        """Map a pointer to a fetchable URL.

        ``ipfs://<cid>/path`` and bare CIDs go through the gateway; http(s)
        URLs are used as-is.
        """
        pointer = pointer.strip()
        if pointer.startswith(IPFS_SCHEME):
            return self._gateway_url + pointer[len(IPFS_SCHEME) :].removeprefix("ipfs/")
        if pointer.startswith(("http://", "https://")):
            return pointer
        return self._gateway_url + pointer.lstrip("/")

    async def fetch(self, pointer: str) -> Any:
        url = self.resolve_url(pointer)
        try:
            resp = await self._client.get(url)
            resp.raise_for_status()
        except httpx.HTTPError as e:
            raise ExternalServiceError(f"Metadata fetch from {url} failed: {e}") from e
        logger.debug("Fetched metadata from %s", url)
        return resp.json()

    async def health(self) -> bool:
        """Check if the gateway is reachable."""
        try:
            resp = await self._client.head(self._gateway_url)
            return resp.status_code < 500
        except httpx.HTTPError:
            return False

    async def close(self) -> None:
        """Close the HTTP client."""
        await self._client.aclose()
