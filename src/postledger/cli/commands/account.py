"""Account management commands."""

import click

from postledger.cli.account_resolution import resolve_account_or_exit
from postledger.cli.error_handling import handle_domain_error
from postledger.domain.account import AccountService
from postledger.domain.entities import ACCOUNT_CATEGORIES, AccountType
from postledger.domain.errors import DomainError

ACCOUNT_TYPE_CHOICE = click.Choice([t.value for t in AccountType], case_sensitive=False)


def _format_account(acc) -> str:
    status = "" if acc.is_active else " (inactive)"
    return f"ID: {acc.id:3d} | {acc.name:30s} | {acc.category}{status}"


@click.group()
def account_group():
    """Manage the chart of accounts."""
    pass


@account_group.command("create")
@click.argument("name", metavar="ACCOUNT_NAME")
@click.option("--type", "account_type", type=ACCOUNT_TYPE_CHOICE, required=True, help="Account type")
@click.option("--category", required=True, help="Category within the type (e.g. 'Current Assets')")
@click.option("--inactive", is_flag=True, help="Create the account deactivated")
@click.pass_context
def create_account(ctx, name: str, account_type: str, category: str, inactive: bool):
    """Create a new account.

    Names are unique per type, ignoring case. Before creating, use
    'account search' to check for an existing account.

    Examples:
        postledger account create "Petty Cash" --type asset --category "Current Assets"
        postledger account create "Consulting" --type revenue --category "Service Revenue"
    """
    service = AccountService(ctx.obj["db"])

    try:
        account = service.create_account(
            name=name, account_type=account_type, category=category, active=not inactive
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    click.echo(f"Created account '{account.name}' (ID: {account.id}) in {account.type.label}")
    if inactive:
        click.echo("Account is inactive")


@account_group.command("list")
@click.option("--type", "account_type", type=ACCOUNT_TYPE_CHOICE, help="Only list this type")
@click.option("--all", "show_all", is_flag=True, help="Include inactive accounts")
@click.pass_context
def list_accounts(ctx, account_type: str | None, show_all: bool):
    """List accounts grouped by type."""
    service = AccountService(ctx.obj["db"])

    if account_type is not None:
        selected = AccountType(account_type.lower())
        grouped = {selected: service.list_by_type(selected, include_inactive=show_all)}
    else:
        grouped = service.list_grouped_by_type(include_inactive=show_all)

    if not any(grouped.values()):
        click.echo("No accounts found.")
        return

    for acc_type, accounts in grouped.items():
        if not accounts:
            continue
        click.echo(f"\n{acc_type.label}:")
        click.echo("-" * 70)
        for acc in accounts:
            click.echo(_format_account(acc))


@account_group.command("search")
@click.argument("query")
@click.option("--type", "account_type", type=ACCOUNT_TYPE_CHOICE, help="Only search this type")
@click.pass_context
def search_accounts(ctx, query: str, account_type: str | None):
    """Find accounts whose name contains QUERY (case-insensitive)."""
    service = AccountService(ctx.obj["db"])

    accounts = service.find_by_name(query, account_type=account_type)
    if not accounts:
        click.echo(f"No accounts matching '{query}'.")
        return

    for acc in accounts:
        click.echo(f"{_format_account(acc)} | {acc.type.value}")


def _set_active(ctx, account: str, active: bool) -> None:
    service = AccountService(ctx.obj["db"])
    account_id = resolve_account_or_exit(ctx, service, account)

    try:
        updated = service.set_active(account_id, active)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    state = "active" if updated.is_active else "inactive"
    click.echo(f"Account '{updated.name}' is now {state}")


@account_group.command("activate")
@click.argument("account", metavar="ACCOUNT")
@click.pass_context
def activate_account(ctx, account: str) -> None:
    """Allow an account to be used in new entries again.

    ACCOUNT can be an account ID, name, or type:name.
    """
    _set_active(ctx, account, True)


@account_group.command("deactivate")
@click.argument("account", metavar="ACCOUNT")
@click.pass_context
def deactivate_account(ctx, account: str) -> None:
    """Stop an account from being used in new entries.

    ACCOUNT can be an account ID, name, or type:name. Existing entries
    keep referencing the account.
    """
    _set_active(ctx, account, False)


@account_group.command("rename")
@click.argument("account", metavar="ACCOUNT")
@click.argument("new_name", metavar="NEW_NAME")
@click.option("--category", help="New category (optional)")
@click.pass_context
def rename_account(ctx, account: str, new_name: str, category: str | None) -> None:
    """Rename an account.

    ACCOUNT can be an account ID, name, or type:name.
    NEW_NAME is the new name for the account.

    Examples:
        postledger account rename "Cash" "Petty Cash"
        postledger account rename 3 "Reserve" --category "Investments"
    """
    service = AccountService(ctx.obj["db"])
    account_id = resolve_account_or_exit(ctx, service, account)

    try:
        updated = service.update_account(account_id, name=new_name, category=category)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    click.echo(f"Renamed account to '{updated.name}'")
    if category is not None:
        click.echo(f"Category updated to '{updated.category}'")


@account_group.command("delete")
@click.argument("account", metavar="ACCOUNT")
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def delete_account(ctx, account: str, yes: bool) -> None:
    """Delete an account.

    ACCOUNT can be an account ID, name, or type:name.

    Only accounts that no transaction entry has ever used can be deleted.
    Deactivate used accounts instead.
    """
    service = AccountService(ctx.obj["db"])
    account_id = resolve_account_or_exit(ctx, service, account)
    account_obj = service.require_account(account_id)

    usage_count = service.get_usage_count(account_id)
    if usage_count > 0:
        click.echo(
            f"Error: Cannot delete account '{account_obj.name}': it is used in "
            f"{usage_count} entr{'ies' if usage_count != 1 else 'y'}.",
            err=True,
        )
        click.echo("Deactivate it instead with 'account deactivate'.", err=True)
        ctx.exit(1)

    if not yes and not click.confirm(
        f"Are you sure you want to delete account '{account_obj.name}' (ID: {account_id})?"
    ):
        click.echo("Deletion cancelled.")
        return

    try:
        service.delete_account(account_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return
    click.echo(f"Deleted account '{account_obj.name}'")


@account_group.command("types")
def list_types():
    """Show account types and their suggested categories."""
    for acc_type in AccountType:
        click.echo(f"{acc_type.value:10s} {acc_type.label}")
        for category in ACCOUNT_CATEGORIES[acc_type]:
            click.echo(f"    - {category}")


def register_commands(cli):
    """Register account commands with main CLI."""
    cli.add_command(account_group, name="account")
