"""End-to-end workflow tests through the CLI."""

import os

from postledger.cli.main import cli
from postledger.domain.entities import TransactionStatus


def _run(cli_runner, db_path, *args):
    result = cli_runner.invoke(cli, ["--db-path", db_path, *args])
    return result


def test_post_to_approved_transaction(cli_runner, temp_db, transaction_service):
    """Seed accounts, post, record, reject, fix and approve."""
    db_path = temp_db.database_path

    assert _run(cli_runner, db_path, "init-accounts").exit_code == 0

    result = _run(
        cli_runner, db_path,
        "post", "create", "Paid $300 for printer paper",
        "--author", "user-1", "--persona", "Office Manager",
    )
    assert result.exit_code == 0
    assert "looks financial" in result.output

    result = _run(
        cli_runner, db_path,
        "transaction", "create", "1",
        "--description", "Printer paper",
        "--date", "yesterday",
        "--by", "user-1",
        "--debit", "Office Supplies=300",
        "--credit", "Cash=300",
    )
    assert result.exit_code == 0, result.output

    result = _run(cli_runner, db_path, "transaction", "reject", "1", "--by", "boss", "--reason", "Card, not cash")
    assert result.exit_code == 0

    result = _run(
        cli_runner, db_path,
        "transaction", "update", "1",
        "--debit", "Office Supplies=300",
        "--credit", "Credit Card Payable=300",
    )
    assert result.exit_code == 0

    result = _run(cli_runner, db_path, "transaction", "approve", "1", "--by", "boss")
    assert result.exit_code == 0

    txn = transaction_service.get_transaction(1)
    assert txn.status == TransactionStatus.APPROVED
    assert txn.version == 4

    result = _run(cli_runner, db_path, "post", "show", "1")
    assert "Transaction: 1 (approved)" in result.output

    result = _run(cli_runner, db_path, "account", "delete", "Credit Card Payable", "--yes")
    assert result.exit_code == 1

    result = _run(cli_runner, db_path, "account", "deactivate", "Credit Card Payable")
    assert result.exit_code == 0

    result = _run(cli_runner, db_path, "transaction", "show", "1")
    assert result.exit_code == 0
    assert "Credit Card Payable" in result.output
    assert "Status: approved" in result.output


def test_db_path_from_environment(cli_runner, temp_db, monkeypatch):
    monkeypatch.setenv("POSTLEDGER_DB_PATH", temp_db.database_path)

    result = cli_runner.invoke(cli, ["init-accounts"])

    assert result.exit_code == 0
    assert len(temp_db.list_accounts()) == 26


def test_log_level_option_emits_info(cli_runner, temp_db):
    result = cli_runner.invoke(
        cli, ["--db-path", temp_db.database_path, "--log-level", "info", "init-accounts"]
    )

    assert result.exit_code == 0
    assert "Seeded 26 default accounts" in result.output


def test_help_does_not_touch_database(cli_runner, tmp_path):
    db_path = tmp_path / "never.db"

    result = cli_runner.invoke(cli, ["--db-path", str(db_path), "--help"])

    assert result.exit_code == 0
    assert "transaction" in result.output
    assert not os.path.exists(db_path)
