"""External metadata documents and discovery results."""

from typing import Any

from pydantic import Field

from dehug.domain.content.model.record import ContentCategory, Record
from dehug.domain.shared.model.value import ValueObject

NO_DESCRIPTION = "No description available"

_DEFAULTS: dict[ContentCategory, dict[str, str]] = {
    ContentCategory.DATA: {
        "category": "Data Processing",
        "task": "Dataset",
        "size": "Unknown",
        "format": "CSV",
        "license": "MIT",
        "framework": "",
    },
    ContentCategory.MODEL: {
        "category": "Natural Language Processing",
        "task": "Text Generation",
        "size": "Unknown",
        "format": "PyTorch",
        "license": "MIT",
        "framework": "transformers",
    },
}


class ExternalMetadata(ValueObject):
    description: str = NO_DESCRIPTION
    tags: frozenset[str] = frozenset()
    category: str = ""
    task: str = ""
    size: str = "Unknown"
    format: str = ""
    license: str = "MIT"
    framework: str = ""

    @classmethod
    def defaults_for(cls, category: ContentCategory) -> "ExternalMetadata":
        return cls(**_DEFAULTS[category])

    @classmethod
    def from_document(cls, document: Any, category: ContentCategory) -> "ExternalMetadata":
        """Merge a metadata document over the category defaults.

        Each field falls back independently: a malformed ``size`` does not
        discard a valid ``description``.
        """
        values: dict[str, Any] = dict(_DEFAULTS[category])
        if not isinstance(document, dict):
            return cls(**values)

        description = document.get("description")
        if isinstance(description, str) and description.strip():
            values["description"] = description

        properties = document.get("properties")
        if not isinstance(properties, dict):
            properties = {}

        for key in ("category", "task", "size", "format", "license", "framework"):
            value = properties.get(key)
            if isinstance(value, (str, int, float)) and not isinstance(value, bool) and str(value):
                values[key] = str(value)

        tags = properties.get("tags", document.get("tags"))
        if isinstance(tags, list):
            values["tags"] = frozenset(t for t in tags if isinstance(t, str) and t)

        return cls(**values)


class DiscoveryResult(ValueObject):
    """A record plus its external metadata. Built per discovery call."""

    record: Record
    metadata: ExternalMetadata
    metadata_resolved: bool = Field(default=False)

    @property
    def id(self) -> int:
        return self.record.id

    def to_view(self) -> dict[str, Any]:
        """Flatten into the display shape used by listings."""
        record, meta = self.record, self.metadata
        return {
            "id": str(record.id),
            "title": record.title,
            "description": meta.description,
            "category": meta.category,
            "task": meta.task,
            "author": record.short_owner,
            "upload_date": record.upload_date,
            "downloads": record.download_count,
            "size": meta.size,
            "format": meta.format,
            "tags": sorted(meta.tags),
            "likes": record.likes,
            "verified": record.verified,
            "license": meta.license,
            "framework": meta.framework,
            "trending": record.trending,
            "nft_value": record.nft_value,
        }
