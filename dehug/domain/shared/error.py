"""Error hierarchy for DeHug.

Error layers:
- DehugError: Base class for all DeHug errors
- DomainError: Local validation, guard refusals, submission and revert failures
- InfrastructureError: RPC/gateway failures and misconfiguration

Every error carries a ``user_message`` the CLI or a UI can show verbatim.
"""


class DehugError(Exception):
    """Base class for all DeHug errors."""

    default_user_message = "An unexpected error occurred."

    def __init__(self, message: str, code: str | None = None) -> None:
        self.message = message
        self.code = code or self.__class__.__name__
        super().__init__(message)

    @property
    def user_message(self) -> str:
        return self.message or self.default_user_message


# =============================================================================
# Domain Errors
# =============================================================================


class DomainError(DehugError):
    """Base class for domain/business errors."""


class ValidationError(DomainError):
    """Input validation failed before any chain interaction."""

    def __init__(self, message: str, field: str | None = None) -> None:
        super().__init__(message, code="VALIDATION_ERROR")
        self.field = field


class NetworkMismatchError(DomainError):
    """The network guard refused the session; nothing was submitted."""


class EmptyRegistryError(DomainError):
    """The registry has no entries yet. Benign: maps to an empty result."""

    def __init__(self, message: str = "Registry has no content yet") -> None:
        super().__init__(message)


class UnresolvedIdError(DomainError):
    """Transaction succeeded but the new record identifier could not be recovered."""

    def __init__(self, tx_hash: str) -> None:
        super().__init__(f"Could not resolve record id for transaction {tx_hash}")
        self.tx_hash = tx_hash


# -----------------------------------------------------------------------------
# Submission errors (a chain call was attempted)
# -----------------------------------------------------------------------------


class SubmissionError(DomainError):
    """Base class for failures while submitting or confirming a transaction."""


class NoSessionError(SubmissionError):
    def __init__(self, message: str = "Please connect your wallet first.") -> None:
        super().__init__(message)


class SubmissionRejectedError(SubmissionError):
    def __init__(self, message: str = "Transaction was rejected in the wallet.") -> None:
        super().__init__(message)


class InsufficientFundsError(SubmissionError):
    def __init__(
        self, message: str = "Insufficient funds for gas. Please top up your wallet."
    ) -> None:
        super().__init__(message)


class NoHashReturnedError(SubmissionError):
    def __init__(self, message: str = "No transaction hash returned") -> None:
        super().__init__(message)


class ConfirmationTimeoutError(SubmissionError):
    """The caller's confirmation wait expired. The transaction may still confirm."""

    def __init__(self, tx_hash: str, timeout: float) -> None:
        super().__init__(
            f"Transaction {tx_hash} not confirmed within {timeout:g}s; it may still confirm later"
        )
        self.tx_hash = tx_hash
        self.timeout = timeout


class RevertedError(SubmissionError):
    """The registry reverted a call.

    ``reason`` is the decoded ``Error(string)`` message when one was available.
    Subclasses are raised for revert reasons with a specific meaning.
    """

    default_user_message = "The registry rejected the transaction."

    def __init__(
        self,
        reason: str | None = None,
        data: bytes = b"",
        message: str | None = None,
    ) -> None:
        super().__init__(message or (f"Reverted: {reason}" if reason else "Reverted"))
        self.reason = reason
        self.data = data

    @property
    def known(self) -> bool:
        return type(self) is not RevertedError

    @property
    def user_message(self) -> str:
        return self.default_user_message


class ContentNotFoundError(RevertedError):
    default_user_message = "Content not found."


class ContentInactiveError(RevertedError):
    default_user_message = "Content is no longer active."


class NotOwnerError(RevertedError):
    default_user_message = "Only the content owner can update download count."


class DuplicateContentError(RevertedError):
    default_user_message = "This content has already been uploaded."


class MissingFieldError(RevertedError):
    """Registry-side required-field check failed."""

    def __init__(
        self,
        reason: str | None = None,
        data: bytes = b"",
        message: str | None = None,
        user_message: str = "A required field is missing.",
    ) -> None:
        super().__init__(reason, data, message)
        self._user_message = user_message

    @property
    def user_message(self) -> str:
        return self._user_message


# =============================================================================
# Infrastructure Errors
# =============================================================================


class InfrastructureError(DehugError):
    """Base class for infrastructure/system errors."""


class ExternalServiceError(InfrastructureError):
    """RPC node or storage gateway is unavailable or failed."""


class ConfigurationError(InfrastructureError):
    """System misconfiguration detected."""
