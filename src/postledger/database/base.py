"""Abstract database interface.

This is the persistence contract the ledger engine relies on: uniqueness
constraints on account (name, type) and on the post <-> transaction link,
all-or-nothing writes of a transaction together with its entries, and
conditional status transitions that only succeed when the stored status still
matches the expected one.
"""

from abc import ABC, abstractmethod
from datetime import date, datetime
from typing import Optional

# Import entities directly to avoid circular import through domain/__init__.py
from postledger.domain.entities import (
    Account,
    AccountType,
    Post,
    Transaction,
    TransactionStatus,
    ValidatedEntry,
)


class Database(ABC):
    """Abstract database interface for postledger."""

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        pass

    # Account operations
    @abstractmethod
    def create_account(
        self, name: str, account_type: AccountType, category: str, is_active: bool = True
    ) -> int:
        """Create a new account. Returns account ID.

        Raises DuplicateAccount if (name, type) already exists, compared
        case-insensitively, including when a concurrent insert wins.
        """
        pass

    @abstractmethod
    def get_account(self, account_id: int) -> Optional[Account]:
        """Get account by ID."""
        pass

    @abstractmethod
    def get_account_by_name(self, name: str, account_type: AccountType) -> Optional[Account]:
        """Get account by exact (case-insensitive) name within a type."""
        pass

    @abstractmethod
    def list_accounts(
        self, account_type: Optional[AccountType] = None, include_inactive: bool = True
    ) -> list[Account]:
        """List accounts ordered by type then name."""
        pass

    @abstractmethod
    def search_accounts(
        self,
        query: str,
        account_type: Optional[AccountType] = None,
        include_inactive: bool = True,
    ) -> list[Account]:
        """Case-insensitive substring search on account names."""
        pass

    @abstractmethod
    def set_account_active(self, account_id: int, is_active: bool) -> None:
        """Set an account's active flag."""
        pass

    @abstractmethod
    def update_account(
        self, account_id: int, name: Optional[str] = None, category: Optional[str] = None
    ) -> None:
        """Update account name and/or category."""
        pass

    @abstractmethod
    def get_account_usage_count(self, account_id: int) -> int:
        """Count transaction entries referencing an account."""
        pass

    @abstractmethod
    def delete_account(self, account_id: int) -> None:
        """Physically delete an account that no entry references."""
        pass

    # Post operations
    @abstractmethod
    def create_post(
        self, author_id: str, author_persona: str, content: str, attachments: list[str]
    ) -> int:
        """Create a post. Returns post ID."""
        pass

    @abstractmethod
    def get_post(self, post_id: int) -> Optional[Post]:
        """Get post by ID."""
        pass

    @abstractmethod
    def list_posts(self) -> list[Post]:
        """List posts, newest first."""
        pass

    @abstractmethod
    def link_post_transaction(self, post_id: int, transaction_id: int) -> bool:
        """Set a post's transaction link if it has none.

        Returns False, without writing, when the post is already linked.
        """
        pass

    # Transaction operations
    @abstractmethod
    def create_transaction(
        self,
        post_id: int,
        description: str,
        date: date,
        created_by: str,
        entries: list[ValidatedEntry],
    ) -> int:
        """Insert a pending transaction, its entries and the post link as one unit.

        Raises PostAlreadyLinked, writing nothing, if the post already has a
        transaction. Returns transaction ID.
        """
        pass

    @abstractmethod
    def get_transaction(self, transaction_id: int) -> Optional[Transaction]:
        """Get transaction aggregate (header and entries) by ID."""
        pass

    @abstractmethod
    def list_transactions(
        self, status: Optional[TransactionStatus] = None, created_by: Optional[str] = None
    ) -> list[Transaction]:
        """List transactions, newest first, with optional filters."""
        pass

    @abstractmethod
    def transition_transaction_status(
        self,
        transaction_id: int,
        expected: TransactionStatus,
        new: TransactionStatus,
        approved_by: Optional[str] = None,
        approved_at: Optional[datetime] = None,
        rejected_by: Optional[str] = None,
        rejection_reason: Optional[str] = None,
    ) -> bool:
        """Change status only if the stored status equals ``expected``.

        Returns False, without writing, when the precondition does not hold.
        """
        pass

    @abstractmethod
    def replace_transaction(
        self,
        transaction_id: int,
        expected: TransactionStatus,
        description: str,
        date: date,
        entries: Optional[list[ValidatedEntry]],
    ) -> bool:
        """Rewrite a transaction and reset it to pending as one unit.

        ``entries`` of None keeps the stored entry set, otherwise the whole
        set is replaced. Approver fields are cleared. Returns False, without
        writing, when the stored status is no longer ``expected``.
        """
        pass
