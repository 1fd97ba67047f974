"""Utility functions for postledger."""

from postledger.utils.date_parser import parse_date
from postledger.utils.amount_parser import parse_amount, parse_entry_spec
from postledger.utils.account_resolver import resolve_account

__all__ = ["parse_date", "parse_amount", "parse_entry_spec", "resolve_account"]
