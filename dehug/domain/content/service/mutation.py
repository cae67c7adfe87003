"""ContentMutationService - create records and update download counts."""

import logging

from dehug.domain.chain.model.outcome import TransactionOutcome
from dehug.domain.chain.port.session import WalletSession
from dehug.domain.chain.service.network_guard import NetworkGuard
from dehug.domain.chain.service.submitter import TransactionSubmitter
from dehug.domain.content.model.record import RecordDraft
from dehug.domain.registry import contract
from dehug.domain.registry.service.reader import RegistryReader
from dehug.domain.registry.service.resolver import RecordIdResolver
from dehug.domain.shared.error import (
    ContentInactiveError,
    ContentNotFoundError,
    DehugError,
    DuplicateContentError,
    MissingFieldError,
    NetworkMismatchError,
    NoSessionError,
    NotOwnerError,
    RevertedError,
    UnresolvedIdError,
    ValidationError,
)
from dehug.domain.shared.port.notifier import Notifier
from dehug.domain.shared.service import Service

logger = logging.getLogger(__name__)


def _upload_revert(error: RevertedError) -> RevertedError:
    reason = error.reason
    if reason == "Content already exists":
        return DuplicateContentError(reason, error.data)
    if reason == "IPFS hash cannot be empty":
        return MissingFieldError(reason, error.data, user_message="IPFS hash is required.")
    if reason == "Metadata IPFS hash cannot be empty":
        return MissingFieldError(
            reason, error.data, user_message="Metadata IPFS hash is required."
        )
    if reason == "Title cannot be empty":
        return MissingFieldError(reason, error.data, user_message="Title is required.")
    return error


def _download_count_revert(error: RevertedError) -> RevertedError:
    reason = error.reason
    if reason == "Token does not exist":
        return ContentNotFoundError(reason, error.data)
    if reason == "Content is not active":
        return ContentInactiveError(reason, error.data)
    if reason == "Not owner":
        return NotOwnerError(reason, error.data)
    return error


class ContentMutationService(Service):
    """State-changing registry operations for one wallet session.

    Both operations validate locally first, then require the network guard,
    then submit. Avoid starting a second mutation on the same session before
    the first one's hash is known; the submitter serializes the send step.
    """

    session: WalletSession | None
    guard: NetworkGuard
    submitter: TransactionSubmitter
    resolver: RecordIdResolver
    registry: RegistryReader
    notifier: Notifier

    async def create_record(self, draft: RecordDraft) -> TransactionOutcome:
        """Mint a new record and recover the identifier the registry assigned.

        A confirmed transaction whose identifier cannot be recovered still
        succeeds: the outcome is ``degraded`` and carries the explorer link.

        Raises:
            ValidationError: A required field is blank (no chain call made).
            NetworkMismatchError: The guard refused the session.
            SubmissionError: Any submission failure, with a specific subclass.
        """
        for field_name in ("storage_hash", "metadata_pointer", "title"):
            if not getattr(draft, field_name).strip():
                raise ValidationError(f"{field_name} is required", field=field_name)

        await self._require_network()

        call_data = contract.UPLOAD_CONTENT.encode_call(
            int(draft.category),
            draft.storage_hash,
            draft.metadata_pointer,
            draft.image_pointer,
            draft.title,
            list(draft.tags),
        )

        self.notifier.info("Uploading content... Please confirm in wallet.")
        outcome = await self._submit(call_data, _upload_revert)

        self.notifier.info("Transaction confirmed! Fetching token ID...")
        try:
            record_id = await self.resolver.resolve_id(
                outcome.receipt, self.registry.address, self.registry
            )
        except UnresolvedIdError:
            logger.warning("Could not resolve record id for %s", outcome.transaction_hash)
            self.notifier.warning(f"Content minted! View the transaction: {outcome.explorer_url}")
            return outcome.model_copy(update={"degraded": True})

        self.notifier.success(f"Content uploaded successfully! Token ID: {record_id}")
        return outcome.model_copy(update={"resolved_record_id": record_id})

    async def update_download_count(self, record_id: int, new_count: int) -> TransactionOutcome:
        """Set the download count of a record the session's account owns.

        Raises:
            ValidationError: Non-positive id or count (no chain call made).
            NetworkMismatchError: The guard refused the session.
            ContentNotFoundError / ContentInactiveError / NotOwnerError:
                Known registry refusals.
            SubmissionError: Other submission failures.
        """
        if record_id <= 0 or new_count <= 0:
            raise ValidationError(
                "Invalid token ID or download count.",
                field="record_id" if record_id <= 0 else "new_count",
            )

        await self._require_network()

        call_data = contract.UPDATE_DOWNLOAD_COUNT.encode_call(record_id, new_count)
        self.notifier.info("Updating download count...")
        outcome = await self._submit(call_data, _download_count_revert)
        self.notifier.success("Download count updated successfully!")
        return outcome

    async def _require_network(self) -> None:
        if not await self.guard.ensure_correct_network(self.session):
            if self.session is None or not self.session.connected:
                raise NoSessionError()
            raise NetworkMismatchError("Wallet is not connected to the required network")

    async def _submit(self, call_data: bytes, map_revert) -> TransactionOutcome:
        try:
            return await self.submitter.submit(self.session, self.registry.address, call_data)
        except RevertedError as e:
            error = map_revert(e)
            self.notifier.error(error.user_message)
            if error is e:
                raise
            raise error from e
        except DehugError as e:
            self.notifier.error(e.user_message)
            raise
