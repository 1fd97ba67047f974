"""Transaction lifecycle: creation, review and resubmission.

State machine::

    (new) --create--> pending --approve--> approved   (terminal)
                         |  ^
                  reject |  | update
                         v  |
                       rejected

Every mutation validates the complete entry set before anything is written,
and every write is conditional on the status the validation was done against,
so a concurrent reviewer can never be silently overwritten.
"""

from datetime import date, datetime, UTC
from typing import Any, Callable, Iterable, Optional, Union

from postledger.database.base import Database
from postledger.domain.balance import validate_entry_set
from postledger.domain.entities import (
    Transaction as TransactionEntity,
    TransactionPatch,
    TransactionStatus,
    ValidatedEntry,
)
from postledger.domain.errors import (
    DomainError,
    FutureDate,
    InactiveAccount,
    InvalidTransaction,
    InvalidTransition,
    PostAlreadyLinked,
    TransactionLocked,
    UnknownAccount,
    post_not_found,
    transaction_not_found,
)
from postledger.domain.linker import PostLinker
from postledger.logging_config import get_logger

logger = get_logger(__name__)

DESCRIPTION_MAX_LENGTH = 200


def parse_status(value: Union[TransactionStatus, str]) -> TransactionStatus:
    """Coerce a TransactionStatus or its string value to TransactionStatus."""
    if isinstance(value, TransactionStatus):
        return value
    try:
        return TransactionStatus(str(value).strip().lower())
    except ValueError:
        valid = ", ".join(s.value for s in TransactionStatus)
        raise InvalidTransaction(f"Status must be one of: {valid} (got {value!r})")


class TransactionService:
    """Service for managing transactions and their approval workflow."""

    def __init__(self, db: Database, today: Optional[Callable[[], date]] = None):
        """Initialize transaction service.

        Args:
            db: Database instance
            today: Returns the current date for the future-date check
                (defaults to date.today)
        """
        self.db = db
        self.linker = PostLinker(db)
        self._today = today or date.today

    # Validation helpers

    def _clean_description(self, description: Optional[str]) -> str:
        if description is None or not description.strip():
            raise InvalidTransaction("Transaction description is required")
        description = description.strip()
        if len(description) > DESCRIPTION_MAX_LENGTH:
            raise InvalidTransaction(
                f"Transaction description must be {DESCRIPTION_MAX_LENGTH} characters or less"
            )
        return description

    def _check_date(self, txn_date: Any) -> date:
        if isinstance(txn_date, datetime):
            txn_date = txn_date.date()
        if not isinstance(txn_date, date):
            raise InvalidTransaction("Transaction date is required")
        today = self._today()
        if txn_date > today:
            raise FutureDate(txn_date, today)
        return txn_date

    def _check_accounts(self, entries: Iterable[ValidatedEntry]) -> None:
        """New entries must reference existing, active accounts."""
        for account_id in dict.fromkeys(entry.account_id for entry in entries):
            account = self.db.get_account(account_id)
            if account is None:
                raise UnknownAccount(account_id)
            if not account.is_active:
                raise InactiveAccount(account_id, account.name)

    def _transition_error(self, txn: TransactionEntity, target: TransactionStatus) -> InvalidTransition:
        if txn.is_locked:
            return TransactionLocked(txn.id, target.value)
        return InvalidTransition(txn.id, txn.status.value, target.value)

    def _lost_race(self, transaction_id: int, target: TransactionStatus) -> InvalidTransition:
        """Build the error for a conditional write that matched no row."""
        current = self.get_transaction(transaction_id)
        logger.warning(
            "Transaction %s changed concurrently (now %s); %s not applied",
            transaction_id,
            current.status.value,
            target.value,
        )
        return self._transition_error(current, target)

    # Operations

    def create_transaction(
        self,
        post_id: int,
        description: str,
        date: date,
        created_by: str,
        entries: list,
    ) -> TransactionEntity:
        """Create a pending transaction from a post.

        Args:
            post_id: Originating post; must not already have a transaction
            description: Transaction description
            date: Transaction date, not after today
            created_by: Opaque identifier of the creator
            entries: EntryInput lines; at least two, balanced

        Returns:
            The created transaction with its entries

        Raises:
            InvalidTransaction: If description or creator is missing
            InsufficientEntries, MalformedEntry, Unbalanced: If the entry set is invalid
            FutureDate: If the date is after today
            UnknownAccount, InactiveAccount: If an entry references an unusable account
            NotFound: If the post does not exist
            PostAlreadyLinked: If the post already has a transaction
        """
        try:
            description = self._clean_description(description)
            if not created_by or not created_by.strip():
                raise InvalidTransaction("Transaction creator is required")
            validated = validate_entry_set(entries)
            txn_date = self._check_date(date)
            self._check_accounts(validated)

            post = self.db.get_post(post_id)
            if post is None:
                raise post_not_found(post_id)
            if post.transaction_id is not None:
                raise PostAlreadyLinked(post_id, post.transaction_id)

            transaction_id = self.db.create_transaction(
                post_id=post_id,
                description=description,
                date=txn_date,
                created_by=created_by.strip(),
                entries=validated,
            )
        except DomainError as exc:
            logger.warning("Rejected transaction for post %s: %s [%s]", post_id, exc, exc.code)
            raise

        logger.info(
            "Created transaction %s for post %s with %d entries",
            transaction_id,
            post_id,
            len(validated),
        )
        return self.get_transaction(transaction_id)

    def get_transaction(self, transaction_id: int) -> TransactionEntity:
        """Get the full transaction aggregate.

        Raises:
            NotFound: If the transaction does not exist
        """
        txn = self.db.get_transaction(transaction_id)
        if txn is None:
            raise transaction_not_found(transaction_id)
        return txn

    def get_transaction_for_post(self, post_id: int) -> Optional[TransactionEntity]:
        """Get the transaction a post spawned, or None.

        Raises:
            NotFound: If the post does not exist
        """
        transaction_id = self.linker.lookup(post_id)
        if transaction_id is None:
            return None
        return self.get_transaction(transaction_id)

    def list_transactions(
        self,
        status: Optional[Union[TransactionStatus, str]] = None,
        created_by: Optional[str] = None,
    ) -> list[TransactionEntity]:
        """List transactions, newest first.

        Args:
            status: Optional status filter
            created_by: Optional creator filter
        """
        if status is not None:
            status = parse_status(status)
        return self.db.list_transactions(status=status, created_by=created_by)

    def approve_transaction(self, transaction_id: int, approver_id: str) -> TransactionEntity:
        """Approve a pending transaction. Approval is final.

        Authorization (who may approve) is the caller's concern.

        Raises:
            InvalidTransaction: If no approver is given
            NotFound: If the transaction does not exist
            TransactionLocked: If it is already approved
            InvalidTransition: If it is not pending
        """
        if not approver_id or not approver_id.strip():
            raise InvalidTransaction("Approver ID is required")

        txn = self.get_transaction(transaction_id)
        if txn.status != TransactionStatus.PENDING:
            raise self._transition_error(txn, TransactionStatus.APPROVED)

        if not self.db.transition_transaction_status(
            transaction_id,
            expected=TransactionStatus.PENDING,
            new=TransactionStatus.APPROVED,
            approved_by=approver_id.strip(),
            approved_at=datetime.now(UTC),
        ):
            raise self._lost_race(transaction_id, TransactionStatus.APPROVED)

        logger.info("Transaction %s approved by %s", transaction_id, approver_id)
        return self.get_transaction(transaction_id)

    def reject_transaction(
        self, transaction_id: int, rejected_by: str, reason: Optional[str] = None
    ) -> TransactionEntity:
        """Reject a pending transaction so that it can be edited and resubmitted.

        Raises:
            InvalidTransaction: If no reviewer is given
            NotFound: If the transaction does not exist
            TransactionLocked: If it is already approved
            InvalidTransition: If it is not pending
        """
        if not rejected_by or not rejected_by.strip():
            raise InvalidTransaction("Reviewer ID is required")

        txn = self.get_transaction(transaction_id)
        if txn.status != TransactionStatus.PENDING:
            raise self._transition_error(txn, TransactionStatus.REJECTED)

        reason = reason.strip() if reason and reason.strip() else None
        if not self.db.transition_transaction_status(
            transaction_id,
            expected=TransactionStatus.PENDING,
            new=TransactionStatus.REJECTED,
            rejected_by=rejected_by.strip(),
            rejection_reason=reason,
        ):
            raise self._lost_race(transaction_id, TransactionStatus.REJECTED)

        logger.info("Transaction %s rejected by %s", transaction_id, rejected_by)
        return self.get_transaction(transaction_id)

    def update_transaction(self, transaction_id: int, patch: TransactionPatch) -> TransactionEntity:
        """Edit a pending or rejected transaction; it always re-enters pending.

        The resulting entry set (the patch's entries, or the stored ones) is
        fully revalidated first. On any failure nothing is written.

        Raises:
            InvalidTransaction: If the patch is empty or a field is invalid
            NotFound: If the transaction does not exist
            TransactionLocked: If it is approved
            InsufficientEntries, MalformedEntry, Unbalanced: If the entry set is invalid
            FutureDate: If the new date is after today
            UnknownAccount, InactiveAccount: If a new entry references an unusable account
        """
        if patch.is_empty():
            raise InvalidTransaction("No valid updates provided")

        txn = self.get_transaction(transaction_id)
        if txn.is_locked:
            raise TransactionLocked(transaction_id)

        try:
            description = (
                self._clean_description(patch.description)
                if patch.description is not None
                else txn.description
            )
            txn_date = self._check_date(patch.date) if patch.date is not None else txn.date

            if patch.entries is not None:
                new_entries = validate_entry_set(patch.entries)
                self._check_accounts(new_entries)
            else:
                # Stored entries may reference accounts deactivated since.
                validate_entry_set(txn.entries)
                new_entries = None
        except DomainError as exc:
            logger.warning("Rejected update of transaction %s: %s [%s]", transaction_id, exc, exc.code)
            raise

        if not self.db.replace_transaction(
            transaction_id,
            expected=txn.status,
            description=description,
            date=txn_date,
            entries=new_entries,
        ):
            raise self._lost_race(transaction_id, TransactionStatus.PENDING)

        if txn.status == TransactionStatus.REJECTED:
            logger.info("Transaction %s resubmitted for review", transaction_id)
        else:
            logger.info("Transaction %s updated", transaction_id)
        return self.get_transaction(transaction_id)
