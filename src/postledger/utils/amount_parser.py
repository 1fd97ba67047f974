"""Amount parsing utilities."""

import re
from decimal import Decimal, InvalidOperation


def parse_amount(amount_str: str) -> Decimal:
    """Parse a positive amount string into a Decimal.

    Handles various formats:
    - "123.45"
    - "$123.45", "€123.45", "£123.45"
    - "1,234.56"

    Entry amounts are always positive; the side (debit or credit) carries
    the direction, so signs are rejected.

    Args:
        amount_str: Amount string

    Returns:
        Decimal amount, unrounded

    Raises:
        ValueError: If amount string cannot be parsed or is not positive
    """
    if not amount_str or not amount_str.strip():
        raise ValueError("Empty amount string")

    cleaned = re.sub(r"[$€£]", "", amount_str.strip())
    cleaned = cleaned.replace(",", "").strip()

    if cleaned.startswith(("-", "+", "(")):
        raise ValueError(f"Amount must be a positive number, got '{amount_str.strip()}'")

    try:
        amount = Decimal(cleaned)
    except InvalidOperation:
        raise ValueError(f"Could not parse amount '{amount_str.strip()}'")
    if not amount.is_finite() or amount <= 0:
        raise ValueError(f"Amount must be a positive number, got '{amount_str.strip()}'")
    return amount


def parse_entry_spec(spec: str) -> tuple[str, Decimal]:
    """Split an ``ACCOUNT=AMOUNT`` entry option into its parts.

    The account part may itself contain '=', so the split happens on the
    last one.

    Raises:
        ValueError: If the spec has no '=' or either side is invalid
    """
    account, sep, amount = (spec or "").rpartition("=")
    if not sep or not account.strip():
        raise ValueError(f"Entry must look like ACCOUNT=AMOUNT, got '{spec}'")
    return account.strip(), parse_amount(amount)
