"""Shared domain error types.

Every error carries a machine-readable ``code`` and the structured fields a
caller needs to explain the problem (e.g. the computed delta of an unbalanced
entry set). Validation errors are always raised before anything is written.
"""

from datetime import date
from decimal import Decimal
from typing import Optional


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """

    code = "DOMAIN_ERROR"


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""

    code = "VALIDATION_ERROR"


class NotFoundError(DomainError):
    """Requested domain entity does not exist."""

    code = "NOT_FOUND"


class ConflictError(DomainError):
    """Domain conflict, such as uniqueness violations."""

    code = "CONFLICT"


class DependencyError(DomainError):
    """Operation blocked due to dependent domain data."""

    code = "DEPENDENCY"


class StateError(ConflictError):
    """Operation conflicts with the current persisted state."""

    code = "STATE_CONFLICT"


# Accounts


class InvalidAccount(ValidationError):
    code = "INVALID_ACCOUNT"


class DuplicateAccount(ValidationError, ConflictError):
    """An account with the same name already exists under the type."""

    code = "DUPLICATE_ACCOUNT"

    def __init__(self, name: str, account_type: str):
        self.name = name
        self.account_type = account_type
        super().__init__(f"Account '{name}' already exists in {account_type}")


class UnknownAccount(ValidationError):
    code = "UNKNOWN_ACCOUNT"

    def __init__(self, account_id: int):
        self.account_id = account_id
        super().__init__(f"Account {account_id} does not exist")


class InactiveAccount(ValidationError):
    code = "INACTIVE_ACCOUNT"

    def __init__(self, account_id: int, name: str):
        self.account_id = account_id
        self.name = name
        super().__init__(
            f"Account '{name}' (ID: {account_id}) is inactive and cannot be used in new entries"
        )


class AccountInUse(DependencyError):
    code = "ACCOUNT_IN_USE"

    def __init__(self, account_id: int, usage_count: int):
        self.account_id = account_id
        self.usage_count = usage_count
        super().__init__(
            f"Cannot delete account {account_id}: it is used in "
            f"{usage_count} entr{'ies' if usage_count != 1 else 'y'}. "
            "Consider deactivating it instead."
        )


# Posts


class InvalidPost(ValidationError):
    code = "INVALID_POST"


# Transactions and entries


class InvalidTransaction(ValidationError):
    code = "INVALID_TRANSACTION"


class InsufficientEntries(ValidationError):
    code = "INSUFFICIENT_ENTRIES"

    def __init__(self, entry_count: int, minimum: int):
        self.entry_count = entry_count
        self.minimum = minimum
        super().__init__(
            f"Transaction must have at least {minimum} entries (got {entry_count})"
        )


class MalformedEntry(ValidationError):
    code = "MALFORMED_ENTRY"

    def __init__(self, message: str, entry_index: Optional[int] = None):
        self.entry_index = entry_index
        if entry_index is not None:
            message = f"Entry {entry_index}: {message}"
        super().__init__(message)


class Unbalanced(ValidationError):
    code = "UNBALANCED"

    def __init__(self, total_debits: Decimal, total_credits: Decimal, delta: Decimal):
        self.total_debits = total_debits
        self.total_credits = total_credits
        self.delta = delta
        super().__init__(
            f"Transaction does not balance. Debits: {total_debits:,.2f}, "
            f"Credits: {total_credits:,.2f}, Difference: {delta:,.2f}"
        )


class FutureDate(ValidationError):
    code = "FUTURE_DATE"

    def __init__(self, txn_date: date, today: date):
        self.date = txn_date
        self.today = today
        super().__init__(f"Transaction date {txn_date} cannot be in the future (today is {today})")


class PostAlreadyLinked(ValidationError, ConflictError):
    code = "POST_ALREADY_LINKED"

    def __init__(self, post_id: int, transaction_id: Optional[int] = None):
        self.post_id = post_id
        self.transaction_id = transaction_id
        if transaction_id is not None:
            message = f"Post {post_id} is already linked to transaction {transaction_id}"
        else:
            message = f"Post {post_id} is already linked to a transaction"
        super().__init__(message)


# State errors


class InvalidTransition(StateError):
    code = "INVALID_TRANSITION"

    def __init__(
        self, transaction_id: int, current: str, target: str, message: Optional[str] = None
    ):
        self.transaction_id = transaction_id
        self.current = current
        self.target = target
        super().__init__(
            message or f"Transaction {transaction_id} cannot move from '{current}' to '{target}'"
        )


class TransactionLocked(InvalidTransition):
    """Approved transactions accept no further mutation."""

    code = "TRANSACTION_LOCKED"

    def __init__(self, transaction_id: int, target: str = "pending"):
        super().__init__(
            transaction_id,
            "approved",
            target,
            f"Transaction {transaction_id} is approved and can no longer be changed",
        )


class AlreadyLinked(StateError):
    code = "ALREADY_LINKED"

    def __init__(self, post_id: int, transaction_id: Optional[int]):
        self.post_id = post_id
        self.transaction_id = transaction_id
        super().__init__(f"Post {post_id} is already linked to transaction {transaction_id}")


class NotFound(NotFoundError):
    code = "NOT_FOUND"

    def __init__(self, entity: str, entity_id: int):
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(f"{entity} {entity_id} not found")


def account_not_found(account_id: int) -> NotFound:
    """Return error for missing account."""
    return NotFound("Account", account_id)


def post_not_found(post_id: int) -> NotFound:
    """Return error for missing post."""
    return NotFound("Post", post_id)


def transaction_not_found(transaction_id: int) -> NotFound:
    """Return error for missing transaction."""
    return NotFound("Transaction", transaction_id)
