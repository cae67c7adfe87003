"""MetadataStore port - content-addressed metadata documents."""

from abc import abstractmethod
from typing import Any, Protocol

from dehug.domain.shared.port import Port


class MetadataStore(Port, Protocol):
    @abstractmethod
    async def fetch(self, pointer: str) -> Any:
        """Fetch and parse the JSON document a pointer (``ipfs://...`` or URL) names.

        Raises:
            ExternalServiceError: Gateway unreachable or non-2xx response.
            ValueError: Body is not JSON.
        """
        ...

    @abstractmethod
    async def health(self) -> bool:
        """Check if the store is reachable."""
        ...
