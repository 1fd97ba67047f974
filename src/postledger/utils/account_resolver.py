"""Utility for resolving account references to IDs."""

from postledger.domain.account import AccountService, parse_account_type
from postledger.domain.entities import AccountType
from postledger.domain.errors import InvalidAccount, NotFound


def _split_type_prefix(reference: str) -> tuple[AccountType | None, str]:
    """Split "expense:Rent Expense" into (EXPENSE, "Rent Expense").

    A prefix that is not an account type is treated as part of the name.
    """
    prefix, sep, rest = reference.partition(":")
    if not sep:
        return None, reference
    try:
        return parse_account_type(prefix), rest.strip()
    except InvalidAccount:
        return None, reference


def resolve_account(account_service: AccountService, account: str | int) -> int:
    """Resolve account ID, name or ``type:name`` to an account ID.

    Names match case-insensitively. Since names are only unique per type,
    a bare name that exists under several types must be qualified.

    Args:
        account_service: AccountService instance
        account: Account ID (int or numeric string), name, or "type:name"

    Returns:
        Account ID

    Raises:
        NotFound: If no account matches
        InvalidAccount: If a bare name matches accounts of several types
    """
    if isinstance(account, int):
        return account_service.require_account(account).id

    reference = account.strip()
    if reference.isdigit():
        return account_service.require_account(int(reference)).id

    account_type, name = _split_type_prefix(reference)
    wanted = name.casefold()
    matches = [
        acc
        for acc in account_service.find_by_name(name, account_type=account_type)
        if acc.name.casefold() == wanted
    ]

    if not matches:
        raise NotFound("Account", f"'{reference}'")
    if len(matches) > 1:
        qualified = ", ".join(f"{acc.type.value}:{acc.name}" for acc in matches)
        raise InvalidAccount(f"Account name '{name}' is ambiguous; use one of: {qualified}")
    return matches[0].id
