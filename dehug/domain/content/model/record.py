"""Registry records as the client sees them."""

from datetime import UTC, datetime
from enum import IntEnum

from pydantic import Field

from dehug.domain.shared.model.value import ValueObject

VERIFIED_TIER = 2  # Silver tier or higher
TRENDING_DOWNLOADS = 1000


class ContentCategory(IntEnum):
    """On-chain ``contentType`` (uint8)."""

    DATA = 0
    MODEL = 1

    @classmethod
    def parse(cls, value: str) -> "ContentCategory":
        """Accept 'data'/'dataset'/'model' (any case) or the numeric value."""
        normalized = value.strip().lower()
        if normalized in ("data", "dataset", "datasets", "0"):
            return cls.DATA
        if normalized in ("model", "models", "1"):
            return cls.MODEL
        raise ValueError(f"Unknown content category: {value!r}")


class RecordSummary(ValueObject):
    """One row of ``getContentBatch`` (no points or timestamp)."""

    id: int
    owner: str
    category: ContentCategory
    storage_hash: str
    title: str
    quality_tier: int
    download_count: int
    is_active: bool


class Record(ValueObject):
    """One registry entry (dataset or model).

    ``id``, ``storage_hash``, ``metadata_pointer`` and ``created_at`` never
    change once the registry assigned them.
    """

    id: int = Field(ge=0)
    category: ContentCategory
    owner: str
    storage_hash: str
    title: str
    metadata_pointer: str | None = None
    quality_tier: int = 0
    download_count: int = Field(default=0, ge=0)
    points: int = 0
    created_at: datetime = Field(default_factory=lambda: datetime.fromtimestamp(0, UTC))
    is_active: bool = True

    @property
    def short_owner(self) -> str:
        if len(self.owner) <= 10:
            return self.owner
        return f"{self.owner[:6]}...{self.owner[-4:]}"

    @property
    def verified(self) -> bool:
        return self.quality_tier >= VERIFIED_TIER

    @property
    def likes(self) -> int:
        return self.points // 10

    @property
    def trending(self) -> bool:
        return self.download_count > TRENDING_DOWNLOADS

    @property
    def nft_value(self) -> str:
        """Display value of the record token: points / 1000, one decimal."""
        return f"{self.points / 1000:.1f} ETH"

    @property
    def upload_date(self) -> str:
        return self.created_at.date().isoformat()


class RecordDraft(ValueObject):
    """Input for creating a record. Validated by the mutation service."""

    category: ContentCategory
    storage_hash: str
    metadata_pointer: str
    image_pointer: str = ""
    title: str
    tags: tuple[str, ...] = ()
