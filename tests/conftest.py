"""Shared pytest fixtures for postledger tests."""

import os
import tempfile
from datetime import date, timedelta

import pytest

from postledger.database.factories import create_sqlite_database
from postledger.domain.account import AccountService
from postledger.domain.entities import AccountType
from postledger.domain.linker import PostLinker
from postledger.domain.post import PostService
from postledger.domain.transaction import TransactionService
from postledger.logging_config import reset_logging


@pytest.fixture(autouse=True)
def clean_logging():
    """Undo logging configuration done by CLI invocations."""
    reset_logging()
    yield
    reset_logging()


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    # Create a temporary file for the database
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    # Create database
    db = create_sqlite_database(database_path=db_path)
    # Store the path for tests that need it
    db.database_path = db_path
    db.connect()
    db.initialize_schema()

    yield db

    # Cleanup
    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def account_service(temp_db):
    """Create an AccountService with a temporary database."""
    return AccountService(temp_db)


@pytest.fixture
def post_service(temp_db):
    """Create a PostService with a temporary database."""
    return PostService(temp_db)


@pytest.fixture
def transaction_service(temp_db):
    """Create a TransactionService with a temporary database."""
    return TransactionService(temp_db)


@pytest.fixture
def linker(temp_db):
    """Create a PostLinker with a temporary database."""
    return PostLinker(temp_db)


@pytest.fixture
def sample_accounts(account_service):
    """Create a small chart of accounts, keyed by name."""
    specs = [
        ("Cash", AccountType.ASSET, "Current Assets"),
        ("Checking Account", AccountType.ASSET, "Current Assets"),
        ("Accounts Payable", AccountType.LIABILITY, "Current Liabilities"),
        ("Sales Revenue", AccountType.REVENUE, "Sales Revenue"),
        ("Rent Expense", AccountType.EXPENSE, "Operating Expenses"),
        ("Office Supplies", AccountType.EXPENSE, "Operating Expenses"),
    ]
    return {
        name: account_service.create_account(name, account_type, category)
        for name, account_type, category in specs
    }


@pytest.fixture
def sample_post(post_service):
    """Create a post describing a payment."""
    return post_service.create_post(
        author_id="user-1",
        author_persona="Office Manager",
        content="Paid $1,200 for March rent",
    )


@pytest.fixture
def yesterday():
    return date.today() - timedelta(days=1)


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()
