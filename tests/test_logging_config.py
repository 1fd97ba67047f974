"""Tests for logging setup."""

import io
import logging

from postledger.logging_config import configure_logging, get_logger, reset_logging


def test_get_logger_namespaces_names():
    assert get_logger("postledger.domain.account").name == "postledger.domain.account"
    assert get_logger("tests").name == "postledger.tests"
    assert get_logger("postledger").name == "postledger"


def test_silent_until_configured(capsys):
    get_logger("postledger.test").warning("should not appear")

    captured = capsys.readouterr()
    assert "should not appear" not in captured.err


def test_configure_logging_writes_to_stream():
    stream = io.StringIO()
    configure_logging(level="INFO", stream=stream)

    get_logger("postledger.test").info("hello ledger")

    assert "hello ledger" in stream.getvalue()
    assert "INFO" in stream.getvalue()


def test_configure_logging_is_idempotent():
    configure_logging(level=logging.INFO, stream=io.StringIO())
    configure_logging(level=logging.DEBUG, stream=io.StringIO())

    root = logging.getLogger("postledger")
    handlers = [h for h in root.handlers if not isinstance(h, logging.NullHandler)]
    assert len(handlers) == 1
    assert root.level == logging.INFO


def test_unknown_level_name_falls_back_to_warning():
    configure_logging(level="CHATTY", stream=io.StringIO())

    assert logging.getLogger("postledger").level == logging.WARNING


def test_reset_logging():
    configure_logging(level="DEBUG", stream=io.StringIO())

    reset_logging()

    root = logging.getLogger("postledger")
    assert all(isinstance(h, logging.NullHandler) for h in root.handlers)
    assert root.propagate is True


def test_services_log_state_changes(transaction_service, sample_accounts, sample_post, yesterday, caplog):
    from postledger.domain.entities import EntryInput

    with caplog.at_level(logging.INFO, logger="postledger"):
        txn = transaction_service.create_transaction(
            sample_post.id,
            "Rent",
            yesterday,
            "user-1",
            [
                EntryInput.debit_line(sample_accounts["Rent Expense"].id, 10),
                EntryInput.credit_line(sample_accounts["Cash"].id, 10),
            ],
        )
        transaction_service.approve_transaction(txn.id, "boss")

    messages = [r.getMessage() for r in caplog.records]
    assert f"Created transaction {txn.id} for post {sample_post.id} with 2 entries" in messages
    assert f"Transaction {txn.id} approved by boss" in messages


def test_rejected_operations_logged_with_code(transaction_service, sample_accounts, sample_post, yesterday, caplog):
    import pytest

    from postledger.domain.entities import EntryInput
    from postledger.domain.errors import Unbalanced

    with caplog.at_level(logging.WARNING, logger="postledger"):
        with pytest.raises(Unbalanced):
            transaction_service.create_transaction(
                sample_post.id,
                "Rent",
                yesterday,
                "user-1",
                [
                    EntryInput.debit_line(sample_accounts["Rent Expense"].id, 10),
                    EntryInput.credit_line(sample_accounts["Cash"].id, 9),
                ],
            )

    assert any("[UNBALANCED]" in r.getMessage() for r in caplog.records)
    assert all(r.levelno == logging.WARNING for r in caplog.records)
