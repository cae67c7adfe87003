"""Content domain model."""

from dehug.domain.content.model.metadata import DiscoveryResult, ExternalMetadata
from dehug.domain.content.model.record import (
    ContentCategory,
    Record,
    RecordDraft,
    RecordSummary,
)

__all__ = [
    "ContentCategory",
    "DiscoveryResult",
    "ExternalMetadata",
    "Record",
    "RecordDraft",
    "RecordSummary",
]
