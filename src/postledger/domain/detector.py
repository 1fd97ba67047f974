"""Financial-activity detector for post content.

A fixed lookup table of payment verbs, monetary nouns, currency symbols and
currency codes, matched case-insensitively as substrings. The result is an
advisory hint only and never gates transaction creation.
"""

# Bump when the term list changes so stored suggestions can be traced to it.
FINANCIAL_TERMS_VERSION = 1

FINANCIAL_TERMS: tuple[str, ...] = (
    "paid",
    "received",
    "invoice",
    "expense",
    "revenue",
    "cost",
    "bill",
    "purchase",
    "sale",
    "deposit",
    "withdrawal",
    "transfer",
    "payment",
    "$",
    "€",
    "£",
    "usd",
    "eur",
    "gbp",
    "money",
    "cash",
    "credit",
    "debit",
)


def matched_terms(content: str) -> tuple[str, ...]:
    """Return the financial terms found in ``content``, in table order."""
    if not content:
        return ()
    lowered = content.lower()
    return tuple(term for term in FINANCIAL_TERMS if term in lowered)


def suggests_financial(content: str) -> bool:
    """Return True if the content looks like it describes financial activity.

    Examples:
        >>> suggests_financial("Paid $500 for office supplies")
        True
        >>> suggests_financial("Team meeting next week")
        False
    """
    if not content:
        return False
    lowered = content.lower()
    return any(term in lowered for term in FINANCIAL_TERMS)
