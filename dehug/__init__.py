# dehug - client for the DeHug content registry
#
# Records (datasets and models) live as token entries in an on-chain
# registry; their payloads and metadata documents live in content-addressed
# storage.
#
# Core concepts:
# - RegistryReader: typed read-only access to registry entries
# - ContentDiscoveryService: latest active records of a category, enriched
# - ContentMutationService: create records, update download counts
# - RecordIdResolver: recover the id of a record just minted

from dehug.domain.chain.model import LogEntry, Receipt, TransactionOutcome
from dehug.domain.content.model import (
    ContentCategory,
    DiscoveryResult,
    ExternalMetadata,
    Record,
    RecordDraft,
)

__all__ = [
    "ContentCategory",
    "DiscoveryResult",
    "ExternalMetadata",
    "LogEntry",
    "Receipt",
    "Record",
    "RecordDraft",
    "TransactionOutcome",
]

__version__ = "0.1.0"
