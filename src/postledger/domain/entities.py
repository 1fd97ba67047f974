"""Domain model entities for postledger.

These are pure data classes representing business concepts, independent of
database schema. The persistence layer converts its rows into these entities
through the mappers in ``postledger.database.mappers``.
"""

from dataclasses import dataclass, field
from datetime import datetime, date
from decimal import Decimal
from enum import Enum
from typing import Optional, Union

AmountInput = Union[Decimal, int, float, str]


class AccountType(str, Enum):
    """The five account types of the chart of accounts."""

    ASSET = "asset"
    LIABILITY = "liability"
    EQUITY = "equity"
    REVENUE = "revenue"
    EXPENSE = "expense"

    @property
    def label(self) -> str:
        return ACCOUNT_TYPE_LABELS[self]


ACCOUNT_TYPE_LABELS = {
    AccountType.ASSET: "Assets",
    AccountType.LIABILITY: "Liabilities",
    AccountType.EQUITY: "Equity",
    AccountType.REVENUE: "Revenue",
    AccountType.EXPENSE: "Expenses",
}

# Suggested categories per type; category stays free text.
ACCOUNT_CATEGORIES = {
    AccountType.ASSET: ("Current Assets", "Fixed Assets", "Investments"),
    AccountType.LIABILITY: ("Current Liabilities", "Long-term Liabilities"),
    AccountType.EQUITY: ("Owner's Equity", "Retained Earnings"),
    AccountType.REVENUE: ("Sales Revenue", "Service Revenue", "Other Income"),
    AccountType.EXPENSE: ("Operating Expenses", "Cost of Goods Sold", "Administrative Expenses"),
}


class TransactionStatus(str, Enum):
    """Approval workflow states. APPROVED is terminal."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


@dataclass(frozen=True)
class Account:
    """Chart of accounts entry."""

    id: int
    name: str
    type: AccountType
    category: str
    is_active: bool
    created_at: datetime


@dataclass(frozen=True)
class Post:
    """Free-text update that may spawn one transaction."""

    id: int
    author_id: str
    author_persona: str
    content: str
    attachments: tuple[str, ...]
    transaction_id: Optional[int]
    created_at: datetime


@dataclass(frozen=True)
class TransactionEntry:
    """A single debit or credit line owned by a transaction."""

    id: int
    transaction_id: int
    account_id: int
    debit_amount: Optional[Decimal]
    credit_amount: Optional[Decimal]

    @property
    def is_debit(self) -> bool:
        return self.debit_amount is not None

    @property
    def amount(self) -> Decimal:
        return self.debit_amount if self.debit_amount is not None else self.credit_amount


@dataclass(frozen=True)
class Transaction:
    """Transaction aggregate: header plus its full entry set."""

    id: int
    post_id: int
    description: str
    date: date
    status: TransactionStatus
    created_by: str
    approved_by: Optional[str]
    approved_at: Optional[datetime]
    rejected_by: Optional[str]
    rejection_reason: Optional[str]
    created_at: datetime
    updated_at: datetime
    version: int
    entries: tuple[TransactionEntry, ...] = ()

    @property
    def is_locked(self) -> bool:
        return self.status == TransactionStatus.APPROVED


@dataclass(frozen=True)
class EntryInput:
    """Caller-supplied entry line, prior to validation.

    Exactly one of ``debit``/``credit`` should be set; the balance validator
    reports anything else as a malformed entry.
    """

    account_id: int
    debit: Optional[AmountInput] = None
    credit: Optional[AmountInput] = None

    @classmethod
    def debit_line(cls, account_id: int, amount: AmountInput) -> "EntryInput":
        return cls(account_id=account_id, debit=amount)

    @classmethod
    def credit_line(cls, account_id: int, amount: AmountInput) -> "EntryInput":
        return cls(account_id=account_id, credit=amount)


@dataclass(frozen=True)
class ValidatedEntry:
    """Entry line whose amount has been checked and rounded to cents."""

    account_id: int
    debit_amount: Optional[Decimal]
    credit_amount: Optional[Decimal]


@dataclass(frozen=True)
class TransactionPatch:
    """Fields to change on a pending or rejected transaction.

    ``None`` means "leave unchanged"; ``entries`` replaces the whole set.
    """

    description: Optional[str] = None
    date: Optional[date] = None
    entries: Optional[list[EntryInput]] = None

    def is_empty(self) -> bool:
        return self.description is None and self.date is None and self.entries is None


@dataclass(frozen=True)
class BalanceTotals:
    """Debit/credit totals of an entry set."""

    total_debits: Decimal
    total_credits: Decimal
    delta: Decimal
    is_balanced: bool


@dataclass(frozen=True)
class FinancialSuggestion:
    """Advisory result of the financial-activity detector for a post."""

    post_id: int
    suggests_financial: bool
    terms_version: int
    matched_terms: tuple[str, ...] = field(default_factory=tuple)
