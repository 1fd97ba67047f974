"""Account registry: the chart of accounts."""

from typing import Optional, Union

from postledger.database.base import Database
from postledger.domain.entities import Account as AccountEntity, AccountType
from postledger.domain.errors import (
    AccountInUse,
    DuplicateAccount,
    InvalidAccount,
    account_not_found,
)
from postledger.logging_config import get_logger

logger = get_logger(__name__)

ACCOUNT_NAME_MAX_LENGTH = 100

# Default chart of accounts for a fresh ledger: (name, type, category).
DEFAULT_ACCOUNTS = [
    ("Cash", AccountType.ASSET, "Current Assets"),
    ("Checking Account", AccountType.ASSET, "Current Assets"),
    ("Savings Account", AccountType.ASSET, "Current Assets"),
    ("Accounts Receivable", AccountType.ASSET, "Current Assets"),
    ("Inventory", AccountType.ASSET, "Current Assets"),
    ("Office Equipment", AccountType.ASSET, "Fixed Assets"),
    ("Computer Equipment", AccountType.ASSET, "Fixed Assets"),
    ("Furniture & Fixtures", AccountType.ASSET, "Fixed Assets"),
    ("Accounts Payable", AccountType.LIABILITY, "Current Liabilities"),
    ("Credit Card Payable", AccountType.LIABILITY, "Current Liabilities"),
    ("Sales Tax Payable", AccountType.LIABILITY, "Current Liabilities"),
    ("Payroll Liabilities", AccountType.LIABILITY, "Current Liabilities"),
    ("Bank Loan", AccountType.LIABILITY, "Long-term Liabilities"),
    ("Owner's Equity", AccountType.EQUITY, "Owner's Equity"),
    ("Retained Earnings", AccountType.EQUITY, "Retained Earnings"),
    ("Sales Revenue", AccountType.REVENUE, "Sales Revenue"),
    ("Service Revenue", AccountType.REVENUE, "Service Revenue"),
    ("Interest Income", AccountType.REVENUE, "Other Income"),
    ("Office Supplies", AccountType.EXPENSE, "Operating Expenses"),
    ("Rent Expense", AccountType.EXPENSE, "Operating Expenses"),
    ("Utilities Expense", AccountType.EXPENSE, "Operating Expenses"),
    ("Marketing Expense", AccountType.EXPENSE, "Operating Expenses"),
    ("Travel Expense", AccountType.EXPENSE, "Operating Expenses"),
    ("Professional Services", AccountType.EXPENSE, "Administrative Expenses"),
    ("Insurance Expense", AccountType.EXPENSE, "Administrative Expenses"),
    ("Depreciation Expense", AccountType.EXPENSE, "Administrative Expenses"),
]


def parse_account_type(value: Union[AccountType, str]) -> AccountType:
    """Coerce an AccountType or its string value (any case) to AccountType.

    Raises:
        InvalidAccount: If the value is not one of the five account types
    """
    if isinstance(value, AccountType):
        return value
    if isinstance(value, str):
        try:
            return AccountType(value.strip().lower())
        except ValueError:
            pass
    valid = ", ".join(t.value for t in AccountType)
    raise InvalidAccount(f"Account type must be one of: {valid} (got {value!r})")


def _clean_name(name: Optional[str]) -> str:
    if name is None or not name.strip():
        raise InvalidAccount("Account name is required")
    name = name.strip()
    if len(name) > ACCOUNT_NAME_MAX_LENGTH:
        raise InvalidAccount(
            f"Account name must be {ACCOUNT_NAME_MAX_LENGTH} characters or less"
        )
    return name


def _clean_category(category: Optional[str]) -> str:
    if category is None or not category.strip():
        raise InvalidAccount("Account category is required")
    return category.strip()


class AccountService:
    """Service for managing the chart of accounts."""

    def __init__(self, db: Database):
        """Initialize account service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_account(
        self,
        name: str,
        account_type: Union[AccountType, str],
        category: str,
        active: bool = True,
    ) -> AccountEntity:
        """Create a new account.

        Args:
            name: Account name (trimmed)
            account_type: One of asset, liability, equity, revenue, expense
            category: Free-text classification within the type
            active: Whether the account accepts new entries

        Returns:
            The created account

        Raises:
            InvalidAccount: If name, type or category is invalid
            DuplicateAccount: If the name already exists under the type
        """
        name = _clean_name(name)
        account_type = parse_account_type(account_type)
        category = _clean_category(category)

        # Case-insensitive pre-check; the unique constraint covers races.
        if self.db.get_account_by_name(name, account_type) is not None:
            logger.warning("Rejected duplicate account '%s' (%s)", name, account_type.value)
            raise DuplicateAccount(name, account_type.label)

        account_id = self.db.create_account(
            name=name, account_type=account_type, category=category, is_active=active
        )
        logger.info("Created account %s '%s' (%s)", account_id, name, account_type.value)
        return self.db.get_account(account_id)

    def get_account(self, account_id: int) -> Optional[AccountEntity]:
        """Get account by ID.

        Args:
            account_id: Account ID

        Returns:
            Account entity or None if not found
        """
        return self.db.get_account(account_id)

    def require_account(self, account_id: int) -> AccountEntity:
        """Get account by ID or raise NotFound."""
        account = self.db.get_account(account_id)
        if account is None:
            raise account_not_found(account_id)
        return account

    def set_active(self, account_id: int, active: bool) -> AccountEntity:
        """Activate or deactivate an account.

        Deactivation is a soft delete: historical entries keep referencing
        the account, but it can no longer be used in new entries. Setting the
        current state again is a no-op.

        Raises:
            NotFound: If the account does not exist
        """
        account = self.require_account(account_id)
        if account.is_active == active:
            return account

        self.db.set_account_active(account_id, active)
        logger.info(
            "%s account %s '%s'", "Activated" if active else "Deactivated", account_id, account.name
        )
        return self.db.get_account(account_id)

    def list_accounts(self, include_inactive: bool = True) -> list[AccountEntity]:
        """List all accounts, ordered by type then name."""
        return self.db.list_accounts(include_inactive=include_inactive)

    def list_by_type(
        self, account_type: Union[AccountType, str], include_inactive: bool = False
    ) -> list[AccountEntity]:
        """List accounts of one type, ordered by name.

        Inactive accounts are left out unless ``include_inactive`` is set.
        """
        account_type = parse_account_type(account_type)
        return self.db.list_accounts(account_type=account_type, include_inactive=include_inactive)

    def list_grouped_by_type(
        self, include_inactive: bool = False
    ) -> dict[AccountType, list[AccountEntity]]:
        """Group accounts by type; every type is present, possibly empty."""
        grouped: dict[AccountType, list[AccountEntity]] = {t: [] for t in AccountType}
        for account in self.db.list_accounts(include_inactive=include_inactive):
            grouped[account.type].append(account)
        return grouped

    def find_by_name(
        self,
        query: str,
        account_type: Optional[Union[AccountType, str]] = None,
        include_inactive: bool = True,
    ) -> list[AccountEntity]:
        """Case-insensitive substring search on account names.

        Used to offer existing accounts before creating one inline.
        """
        if query is None or not query.strip():
            return []
        if account_type is not None:
            account_type = parse_account_type(account_type)
        return self.db.search_accounts(
            query, account_type=account_type, include_inactive=include_inactive
        )

    def update_account(
        self, account_id: int, name: Optional[str] = None, category: Optional[str] = None
    ) -> AccountEntity:
        """Rename an account and/or change its category.

        The type is fixed once the account exists.

        Raises:
            NotFound: If the account does not exist
            InvalidAccount: If nothing to update or a value is invalid
            DuplicateAccount: If the new name already exists under the type
        """
        account = self.require_account(account_id)
        if name is None and category is None:
            raise InvalidAccount("No valid updates provided")

        if name is not None:
            name = _clean_name(name)
            existing = self.db.get_account_by_name(name, account.type)
            if existing is not None and existing.id != account_id:
                raise DuplicateAccount(name, account.type.label)
        if category is not None:
            category = _clean_category(category)

        self.db.update_account(account_id, name=name, category=category)
        logger.info("Updated account %s", account_id)
        return self.db.get_account(account_id)

    def get_usage_count(self, account_id: int) -> int:
        """Number of transaction entries referencing the account."""
        self.require_account(account_id)
        return self.db.get_account_usage_count(account_id)

    def delete_account(self, account_id: int) -> None:
        """Delete an account that no entry has ever referenced.

        Raises:
            NotFound: If the account does not exist
            AccountInUse: If any entry references the account
        """
        account = self.require_account(account_id)
        usage_count = self.db.get_account_usage_count(account_id)
        if usage_count > 0:
            raise AccountInUse(account_id, usage_count)

        self.db.delete_account(account_id)
        logger.info("Deleted account %s '%s'", account_id, account.name)

    def seed_default_accounts(self) -> int:
        """Create the default chart of accounts if the registry is empty.

        Returns:
            Number of accounts created (0 if any account already existed)
        """
        if self.db.list_accounts():
            return 0

        for name, account_type, category in DEFAULT_ACCOUNTS:
            self.db.create_account(name=name, account_type=account_type, category=category)
        logger.info("Seeded %d default accounts", len(DEFAULT_ACCOUNTS))
        return len(DEFAULT_ACCOUNTS)
