from pydantic import Field

from dehug.domain.chain.model.receipt import Receipt
from dehug.domain.shared.model.value import ValueObject


class TransactionOutcome(ValueObject):
    """Result of one mutation call. Produced once, never persisted."""

    success: bool
    transaction_hash: str | None = None
    resolved_record_id: int | None = None
    explorer_url: str | None = None
    degraded: bool = False  # Confirmed, but the new record id could not be recovered
    receipt: Receipt | None = Field(default=None, exclude=True, repr=False)
