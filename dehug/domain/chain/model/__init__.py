"""Chain domain model."""

from dehug.domain.chain.model.outcome import TransactionOutcome
from dehug.domain.chain.model.receipt import LogEntry, Receipt

__all__ = ["LogEntry", "Receipt", "TransactionOutcome"]
