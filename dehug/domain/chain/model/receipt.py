"""Confirmed transaction receipts, reduced to what the client inspects."""

from pydantic import field_validator

from dehug.domain.shared.model.value import ValueObject


class LogEntry(ValueObject):
    """One emitted log. Hex strings are normalized to lowercase."""

    address: str
    topics: tuple[str, ...] = ()
    data: str = "0x"

    @field_validator("address", "data")
    @classmethod
    def _lower(cls, value: str) -> str:
        return value.lower()

    @field_validator("topics")
    @classmethod
    def _lower_topics(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        return tuple(t.lower() for t in value)


class Receipt(ValueObject):
    transaction_hash: str
    status: int = 1  # 0 = reverted
    block_number: int | None = None
    logs: tuple[LogEntry, ...] = ()

    @property
    def succeeded(self) -> bool:
        return self.status != 0
