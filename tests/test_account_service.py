"""Tests for the account registry service."""

import pytest

from postledger.domain.account import DEFAULT_ACCOUNTS, parse_account_type
from postledger.domain.entities import AccountType, EntryInput
from postledger.domain.errors import (
    AccountInUse,
    DuplicateAccount,
    InvalidAccount,
    NotFound,
)


def test_create_account(account_service):
    account = account_service.create_account("  Petty Cash ", "asset", "Current Assets")

    assert account.id is not None
    assert account.name == "Petty Cash"
    assert account.type == AccountType.ASSET
    assert account.category == "Current Assets"
    assert account.is_active is True


def test_create_inactive_account(account_service):
    account = account_service.create_account("Old Loan", AccountType.LIABILITY, "Long-term Liabilities", active=False)

    assert account.is_active is False


@pytest.mark.parametrize(
    "name, account_type, category",
    [
        ("", "asset", "Current Assets"),
        ("   ", "asset", "Current Assets"),
        ("x" * 101, "asset", "Current Assets"),
        ("Cash", "income", "Current Assets"),
        ("Cash", "asset", ""),
    ],
)
def test_create_account_validation(account_service, name, account_type, category):
    with pytest.raises(InvalidAccount):
        account_service.create_account(name, account_type, category)


def test_duplicate_name_same_type_rejected_case_insensitively(account_service):
    account_service.create_account("Cash", "asset", "Current Assets")

    with pytest.raises(DuplicateAccount) as exc_info:
        account_service.create_account("  CASH ", "asset", "Current Assets")

    assert exc_info.value.name == "CASH"
    assert "already exists in Assets" in str(exc_info.value)


def test_same_name_different_type_allowed(account_service):
    asset = account_service.create_account("Deposits", "asset", "Current Assets")
    liability = account_service.create_account("Deposits", "liability", "Current Liabilities")

    assert asset.id != liability.id


def test_parse_account_type():
    assert parse_account_type("Expense") is AccountType.EXPENSE
    assert parse_account_type(AccountType.EQUITY) is AccountType.EQUITY
    with pytest.raises(InvalidAccount):
        parse_account_type("income")


def test_deactivate_and_reactivate(account_service, sample_accounts):
    cash = sample_accounts["Cash"]

    deactivated = account_service.set_active(cash.id, False)
    assert deactivated.is_active is False

    reactivated = account_service.set_active(cash.id, True)
    assert reactivated.is_active is True


def test_set_active_is_idempotent(account_service, sample_accounts):
    cash = sample_accounts["Cash"]

    assert account_service.set_active(cash.id, True).is_active is True
    account_service.set_active(cash.id, False)
    assert account_service.set_active(cash.id, False).is_active is False


def test_set_active_unknown_account(account_service):
    with pytest.raises(NotFound):
        account_service.set_active(999, False)


def test_list_by_type_excludes_inactive_by_default(account_service, sample_accounts):
    account_service.set_active(sample_accounts["Office Supplies"].id, False)

    names = [a.name for a in account_service.list_by_type("expense")]
    assert names == ["Rent Expense"]

    all_names = [a.name for a in account_service.list_by_type("expense", include_inactive=True)]
    assert all_names == ["Office Supplies", "Rent Expense"]


def test_list_by_type_empty(account_service, sample_accounts):
    assert account_service.list_by_type(AccountType.EQUITY) == []


def test_list_grouped_by_type(account_service, sample_accounts):
    grouped = account_service.list_grouped_by_type()

    assert list(grouped) == list(AccountType)
    assert [a.name for a in grouped[AccountType.ASSET]] == ["Cash", "Checking Account"]
    assert grouped[AccountType.EQUITY] == []


def test_find_by_name(account_service, sample_accounts):
    matches = account_service.find_by_name("acc")

    assert {a.name for a in matches} == {"Checking Account", "Accounts Payable"}


def test_find_by_name_filters_type(account_service, sample_accounts):
    matches = account_service.find_by_name("acc", account_type="liability")

    assert [a.name for a in matches] == ["Accounts Payable"]


def test_find_by_name_treats_wildcards_literally(account_service, sample_accounts):
    assert account_service.find_by_name("%") == []
    assert account_service.find_by_name("") == []


def test_update_account(account_service, sample_accounts):
    cash = sample_accounts["Cash"]

    updated = account_service.update_account(cash.id, name="Petty Cash", category="Other")

    assert updated.name == "Petty Cash"
    assert updated.category == "Other"
    assert updated.type == AccountType.ASSET


def test_update_account_rejects_duplicate(account_service, sample_accounts):
    with pytest.raises(DuplicateAccount):
        account_service.update_account(sample_accounts["Cash"].id, name="checking account")


def test_update_account_allows_case_change_of_own_name(account_service, sample_accounts):
    updated = account_service.update_account(sample_accounts["Cash"].id, name="CASH")

    assert updated.name == "CASH"


def test_update_account_requires_changes(account_service, sample_accounts):
    with pytest.raises(InvalidAccount):
        account_service.update_account(sample_accounts["Cash"].id)


def test_delete_unused_account(account_service, sample_accounts):
    cash = sample_accounts["Cash"]

    account_service.delete_account(cash.id)

    assert account_service.get_account(cash.id) is None


def test_delete_used_account_rejected(
    account_service, transaction_service, sample_accounts, sample_post, yesterday
):
    transaction_service.create_transaction(
        post_id=sample_post.id,
        description="Rent",
        date=yesterday,
        created_by="user-1",
        entries=[
            EntryInput.debit_line(sample_accounts["Rent Expense"].id, "1200"),
            EntryInput.credit_line(sample_accounts["Cash"].id, "1200"),
        ],
    )

    with pytest.raises(AccountInUse) as exc_info:
        account_service.delete_account(sample_accounts["Cash"].id)

    assert exc_info.value.usage_count == 1
    assert "deactivating" in str(exc_info.value)
    assert account_service.get_account(sample_accounts["Cash"].id) is not None


def test_seed_default_accounts(account_service):
    created = account_service.seed_default_accounts()

    assert created == len(DEFAULT_ACCOUNTS) == 26
    assert len(account_service.list_accounts()) == 26
    assert account_service.seed_default_accounts() == 0


def test_seed_skipped_when_accounts_exist(account_service, sample_accounts):
    assert account_service.seed_default_accounts() == 0
    assert len(account_service.list_accounts()) == len(sample_accounts)
