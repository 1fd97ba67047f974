"""Balance validation for double-entry entry sets.

Pure functions: nothing here touches the database. Amounts are rounded to
currency precision entry by entry before they are summed, so the totals
checked here are exactly the totals that get stored.
"""

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Any, Iterable, Optional

from postledger.domain.entities import BalanceTotals, ValidatedEntry
from postledger.domain.errors import InsufficientEntries, MalformedEntry, Unbalanced

CENT = Decimal("0.01")
MIN_ENTRIES = 2
MAX_AMOUNT = Decimal("999999999.99")


def to_amount(value: Any, entry_index: Optional[int] = None) -> Decimal:
    """Convert a caller-supplied amount to a Decimal rounded to cents.

    Floats go through ``str()`` so that binary representation noise
    (``0.1 + 0.2``) never reaches the ledger.

    Args:
        value: Decimal, int, float or numeric string
        entry_index: 1-based entry position, used in error messages

    Returns:
        Amount quantized to two decimal places (ROUND_HALF_UP)

    Raises:
        MalformedEntry: If the value is not a finite number or is too large
            to round to cents
    """
    if isinstance(value, bool):
        raise MalformedEntry(f"Amount must be a number, got {value!r}", entry_index)

    if isinstance(value, Decimal):
        amount = value
    elif isinstance(value, int):
        amount = Decimal(value)
    elif isinstance(value, float):
        amount = Decimal(str(value))
    elif isinstance(value, str):
        try:
            amount = Decimal(value.strip())
        except InvalidOperation:
            raise MalformedEntry(f"Could not parse amount '{value}'", entry_index)
    else:
        raise MalformedEntry(f"Amount must be a number, got {value!r}", entry_index)

    if not amount.is_finite():
        raise MalformedEntry(f"Amount must be finite, got {value!r}", entry_index)

    try:
        return amount.quantize(CENT, rounding=ROUND_HALF_UP)
    except InvalidOperation:
        # Too many digits for the decimal context, far beyond MAX_AMOUNT.
        raise MalformedEntry(f"Amount must not exceed {MAX_AMOUNT:,}, got {value!r}", entry_index)


def _raw_amounts(entry: Any) -> tuple[Any, Any]:
    """Return (debit, credit) from an EntryInput or a stored entry."""
    if hasattr(entry, "debit_amount"):
        return entry.debit_amount, entry.credit_amount
    return entry.debit, entry.credit


def compute_totals(entries: Iterable[Any]) -> BalanceTotals:
    """Compute debit and credit totals for an entry set.

    The set balances when the rounded totals differ by less than one cent.

    Args:
        entries: EntryInput, ValidatedEntry or TransactionEntry objects

    Returns:
        BalanceTotals with the absolute difference as ``delta``
    """
    total_debits = Decimal("0.00")
    total_credits = Decimal("0.00")

    for index, entry in enumerate(entries, start=1):
        debit, credit = _raw_amounts(entry)
        if debit is not None:
            total_debits += to_amount(debit, index)
        if credit is not None:
            total_credits += to_amount(credit, index)

    total_debits = total_debits.quantize(CENT, rounding=ROUND_HALF_UP)
    total_credits = total_credits.quantize(CENT, rounding=ROUND_HALF_UP)
    delta = abs(total_debits - total_credits)

    return BalanceTotals(
        total_debits=total_debits,
        total_credits=total_credits,
        delta=delta,
        is_balanced=delta < CENT,
    )


def _validate_entry(entry: Any, index: int) -> ValidatedEntry:
    account_id = getattr(entry, "account_id", None)
    if account_id is None:
        raise MalformedEntry("Account is required", index)

    debit, credit = _raw_amounts(entry)
    if debit is None and credit is None:
        raise MalformedEntry("Entry must have either a debit or credit amount", index)
    if debit is not None and credit is not None:
        raise MalformedEntry("Entry cannot have both debit and credit amounts", index)

    is_debit = debit is not None
    amount = to_amount(debit if is_debit else credit, index)
    side = "Debit" if is_debit else "Credit"
    if amount <= 0:
        raise MalformedEntry(f"{side} amount must be positive, got {amount}", index)
    if amount > MAX_AMOUNT:
        raise MalformedEntry(f"{side} amount must not exceed {MAX_AMOUNT:,}", index)

    return ValidatedEntry(
        account_id=account_id,
        debit_amount=amount if is_debit else None,
        credit_amount=None if is_debit else amount,
    )


def validate_entry_set(entries: Iterable[Any]) -> list[ValidatedEntry]:
    """Validate a candidate entry set.

    Checks run in order: entry count, each entry's shape, then balance.

    Args:
        entries: Entry lines to validate

    Returns:
        The entries with amounts rounded to cents, in input order

    Raises:
        InsufficientEntries: If fewer than two entries are given
        MalformedEntry: If an entry has neither/both amounts or a bad amount
        Unbalanced: If total debits and credits differ
    """
    entries = list(entries)
    if len(entries) < MIN_ENTRIES:
        raise InsufficientEntries(len(entries), MIN_ENTRIES)

    validated = [_validate_entry(entry, index) for index, entry in enumerate(entries, start=1)]

    totals = compute_totals(validated)
    if not totals.is_balanced:
        raise Unbalanced(totals.total_debits, totals.total_credits, totals.delta)

    return validated
