"""Mapper functions to convert between domain models and SQLAlchemy models.

This layer isolates the conversion logic, so the domain entities stay stable
when the database schema changes.
"""

from postledger.domain import entities as domain
from postledger.database.models import (
    Account as ORMAccount,
    Post as ORMPost,
    Transaction as ORMTransaction,
    TransactionEntry as ORMTransactionEntry,
)


def account_to_domain(orm_account: ORMAccount) -> domain.Account:
    """Convert SQLAlchemy Account model to domain Account entity."""
    return domain.Account(
        id=orm_account.id,
        name=orm_account.name,
        type=domain.AccountType(orm_account.type),
        category=orm_account.category,
        is_active=bool(orm_account.is_active),
        created_at=orm_account.created_at,
    )


def post_to_domain(orm_post: ORMPost) -> domain.Post:
    """Convert SQLAlchemy Post model to domain Post entity."""
    return domain.Post(
        id=orm_post.id,
        author_id=orm_post.author_id,
        author_persona=orm_post.author_persona,
        content=orm_post.content,
        attachments=tuple(orm_post.attachments or ()),
        transaction_id=orm_post.transaction_id,
        created_at=orm_post.created_at,
    )


def entry_to_domain(orm_entry: ORMTransactionEntry) -> domain.TransactionEntry:
    """Convert SQLAlchemy TransactionEntry model to domain TransactionEntry entity."""
    return domain.TransactionEntry(
        id=orm_entry.id,
        transaction_id=orm_entry.transaction_id,
        account_id=orm_entry.account_id,
        debit_amount=orm_entry.debit_amount,
        credit_amount=orm_entry.credit_amount,
    )


def transaction_to_domain(orm_transaction: ORMTransaction) -> domain.Transaction:
    """Convert SQLAlchemy Transaction model (with its entries) to domain Transaction."""
    return domain.Transaction(
        id=orm_transaction.id,
        post_id=orm_transaction.post_id,
        description=orm_transaction.description,
        date=orm_transaction.date,
        status=domain.TransactionStatus(orm_transaction.status),
        created_by=orm_transaction.created_by,
        approved_by=orm_transaction.approved_by,
        approved_at=orm_transaction.approved_at,
        rejected_by=orm_transaction.rejected_by,
        rejection_reason=orm_transaction.rejection_reason,
        created_at=orm_transaction.created_at,
        updated_at=orm_transaction.updated_at,
        version=orm_transaction.version,
        entries=tuple(entry_to_domain(e) for e in orm_transaction.entries),
    )


def entry_to_orm(entry: domain.ValidatedEntry) -> ORMTransactionEntry:
    """Build an unsaved SQLAlchemy TransactionEntry from a validated entry."""
    return ORMTransactionEntry(
        account_id=entry.account_id,
        debit_amount=entry.debit_amount,
        credit_amount=entry.credit_amount,
    )
