"""Extracting revert reasons and classifying wallet failures."""

import re

from eth_utils import decode_hex

from dehug.domain.chain.abi import decode_revert_reason
from dehug.domain.shared.error import (
    InsufficientFundsError,
    RevertedError,
    SubmissionError,
    SubmissionRejectedError,
)

_REVERT_MESSAGE = re.compile(r"(?:execution )?reverted(?: with reason string)?:?\s*'?([^']+?)'?\s*$", re.I)

_REJECTED_MARKERS = ("user rejected", "user denied", "rejected by user")
_INSUFFICIENT_FUNDS_MARKERS = ("insufficient funds",)


def revert_data_from_exception(exc: BaseException) -> bytes:
    data = getattr(exc, "data", None)
    if isinstance(data, bytes):
        return data
    if isinstance(data, str) and data.startswith("0x"):
        try:
            return decode_hex(data)
        except ValueError:
            return b""
    return b""


def revert_reason_from_exception(exc: BaseException) -> str | None:
    """Best-effort revert reason: explicit attribute, encoded data, then message text."""
    reason = getattr(exc, "reason", None)
    if isinstance(reason, str) and reason:
        return reason

    reason = decode_revert_reason(revert_data_from_exception(exc))
    if reason:
        return reason

    message = getattr(exc, "message", None) or str(exc)
    match = _REVERT_MESSAGE.search(message.strip())
    if match and match.group(1).strip():
        return match.group(1).strip()
    return None


def classify_send_error(exc: BaseException) -> SubmissionError:
    """Map a wallet/session failure to a specific submission error kind."""
    text = str(exc).lower()
    if any(marker in text for marker in _REJECTED_MARKERS):
        return SubmissionRejectedError()
    if any(marker in text for marker in _INSUFFICIENT_FUNDS_MARKERS):
        return InsufficientFundsError()

    reason = revert_reason_from_exception(exc)
    if reason is not None or "revert" in text:
        return RevertedError(reason=reason, data=revert_data_from_exception(exc))

    return SubmissionError(str(exc) or exc.__class__.__name__)
