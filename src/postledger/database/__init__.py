"""Database layer for postledger."""

from postledger.database.base import Database
from postledger.database.factories import create_sqlite_database

__all__ = ["Database", "create_sqlite_database"]
