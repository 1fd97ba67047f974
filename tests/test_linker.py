"""Tests for the post to transaction link."""

import pytest

from postledger.domain.entities import EntryInput
from postledger.domain.errors import AlreadyLinked, InvalidTransaction, NotFound


@pytest.fixture
def rent_entries(sample_accounts):
    return [
        EntryInput.debit_line(sample_accounts["Rent Expense"].id, "1200.00"),
        EntryInput.credit_line(sample_accounts["Cash"].id, "1200.00"),
    ]


def test_lookup_unlinked_post(linker, sample_post):
    assert linker.lookup(sample_post.id) is None


def test_lookup_unknown_post(linker):
    with pytest.raises(NotFound):
        linker.lookup(999)


def test_create_transaction_links_post(linker, transaction_service, sample_post, rent_entries, yesterday):
    txn = transaction_service.create_transaction(
        sample_post.id, "Rent", yesterday, "user-1", rent_entries
    )

    assert linker.lookup(sample_post.id) == txn.id
    assert txn.post_id == sample_post.id


def test_link_rejects_relink(linker, transaction_service, sample_post, rent_entries, yesterday):
    txn = transaction_service.create_transaction(
        sample_post.id, "Rent", yesterday, "user-1", rent_entries
    )

    with pytest.raises(AlreadyLinked) as exc_info:
        linker.link(sample_post.id, txn.id)

    assert exc_info.value.transaction_id == txn.id


def test_link_rejects_foreign_transaction(
    linker, transaction_service, post_service, sample_post, rent_entries, yesterday
):
    txn = transaction_service.create_transaction(
        sample_post.id, "Rent", yesterday, "user-1", rent_entries
    )
    other = post_service.create_post("user-2", "Sales", "Sold 3 licences for cash")

    with pytest.raises(InvalidTransaction):
        linker.link(other.id, txn.id)
    assert linker.lookup(other.id) is None


def test_link_restores_missing_link(linker, temp_db, transaction_service, sample_post, rent_entries, yesterday):
    """A transaction whose post lost its back-reference can be re-linked."""
    from sqlalchemy import update

    from postledger.database.models import Post

    txn = transaction_service.create_transaction(
        sample_post.id, "Rent", yesterday, "user-1", rent_entries
    )
    session = temp_db._get_session()
    session.execute(update(Post).where(Post.id == sample_post.id).values(transaction_id=None))
    session.commit()

    linker.link(sample_post.id, txn.id)

    assert linker.lookup(sample_post.id) == txn.id


def test_link_unknown_transaction(linker, sample_post):
    with pytest.raises(NotFound, match="Transaction 77"):
        linker.link(sample_post.id, 77)
