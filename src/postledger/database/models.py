"""SQLAlchemy models for postledger database."""

from datetime import datetime, UTC
from sqlalchemy import (
    Column,
    Integer,
    String,
    ForeignKey,
    DateTime,
    Date,
    Numeric,
    Boolean,
    JSON,
    CheckConstraint,
    UniqueConstraint,
    create_engine,
    event,
)
from sqlalchemy.orm import declarative_base, relationship, sessionmaker, Session

Base = declarative_base()


def _utcnow() -> datetime:
    return datetime.now(UTC)


class Account(Base):
    """Chart of accounts model."""

    __tablename__ = "accounts"

    id = Column(Integer, primary_key=True)
    name = Column(String(100), nullable=False)
    # Trimmed, lower-cased name; uniqueness is enforced on this column.
    name_key = Column(String(100), nullable=False)
    type = Column(String(20), nullable=False)
    category = Column(String, nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime, default=_utcnow, nullable=False)

    __table_args__ = (UniqueConstraint("name_key", "type", name="uq_account_name_type"),)

    # Relationships
    entries = relationship("TransactionEntry", back_populates="account", passive_deletes="all")


class Post(Base):
    """Post model."""

    __tablename__ = "posts"

    id = Column(Integer, primary_key=True)
    author_id = Column(String, nullable=False)
    author_persona = Column(String, nullable=False)
    content = Column(String(500), nullable=False)
    attachments = Column(JSON, nullable=True)
    # Lookup back-reference; the owning side is transactions.post_id.
    transaction_id = Column(Integer, unique=True, nullable=True)
    created_at = Column(DateTime, default=_utcnow, nullable=False)


class Transaction(Base):
    """Transaction header model."""

    __tablename__ = "transactions"

    id = Column(Integer, primary_key=True)
    post_id = Column(Integer, ForeignKey("posts.id"), unique=True, nullable=False)
    description = Column(String(200), nullable=False)
    date = Column(Date, nullable=False)
    status = Column(String(20), default="pending", nullable=False)
    created_by = Column(String, nullable=False)
    approved_by = Column(String, nullable=True)
    approved_at = Column(DateTime, nullable=True)
    rejected_by = Column(String, nullable=True)
    rejection_reason = Column(String, nullable=True)
    created_at = Column(DateTime, default=_utcnow, nullable=False)
    updated_at = Column(DateTime, default=_utcnow, nullable=False)
    version = Column(Integer, default=1, nullable=False)

    __table_args__ = (
        CheckConstraint("status IN ('pending', 'approved', 'rejected')", name="ck_transaction_status"),
    )

    # Relationships
    post = relationship("Post")
    entries = relationship(
        "TransactionEntry",
        back_populates="transaction",
        cascade="all, delete-orphan",
        order_by="TransactionEntry.id",
    )


class TransactionEntry(Base):
    """Transaction entry (debit or credit line) model."""

    __tablename__ = "transaction_entries"

    id = Column(Integer, primary_key=True)
    transaction_id = Column(Integer, ForeignKey("transactions.id"), nullable=False)
    account_id = Column(Integer, ForeignKey("accounts.id"), nullable=False)
    debit_amount = Column(Numeric(12, 2), nullable=True)
    credit_amount = Column(Numeric(12, 2), nullable=True)
    created_at = Column(DateTime, default=_utcnow, nullable=False)

    __table_args__ = (
        CheckConstraint(
            "(debit_amount IS NULL) <> (credit_amount IS NULL)", name="ck_entry_one_side"
        ),
    )

    # Relationships
    transaction = relationship("Transaction", back_populates="entries")
    account = relationship("Account", back_populates="entries")


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    """Switch on foreign key enforcement for a new SQLite connection."""
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def create_session_factory(database_url: str) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory."""
    engine = create_engine(database_url, echo=False)
    if engine.dialect.name == "sqlite":
        event.listen(engine, "connect", _enable_sqlite_foreign_keys)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine)
