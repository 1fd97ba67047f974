"""Transaction commands: recording, review and resubmission."""

import click

from postledger.cli.account_resolution import resolve_account_or_exit
from postledger.cli.error_handling import handle_domain_error
from postledger.domain.account import AccountService
from postledger.domain.balance import compute_totals
from postledger.domain.entities import EntryInput, TransactionPatch, TransactionStatus
from postledger.domain.errors import DomainError
from postledger.domain.transaction import TransactionService
from postledger.utils.amount_parser import parse_entry_spec
from postledger.utils.date_parser import parse_date


def _build_entries(ctx, account_service: AccountService, debits, credits) -> list[EntryInput]:
    """Turn ACCOUNT=AMOUNT options into entry lines, debits first."""
    entries = []
    for specs, make_line in ((debits, EntryInput.debit_line), (credits, EntryInput.credit_line)):
        for spec in specs:
            try:
                account_ref, amount = parse_entry_spec(spec)
            except ValueError as e:
                click.echo(f"Error: Invalid entry: {e}", err=True)
                ctx.exit(1)
            account_id = resolve_account_or_exit(ctx, account_service, account_ref)
            entries.append(make_line(account_id, amount))
    return entries


def _parse_date_or_exit(ctx, value: str):
    try:
        return parse_date(value)
    except ValueError as e:
        click.echo(f"Error: Invalid date format: {e}", err=True)
        ctx.exit(1)


def _print_transaction(txn, account_names: dict[int, str]) -> None:
    click.echo(f"Transaction ID: {txn.id}")
    click.echo(f"  Post: {txn.post_id}")
    click.echo(f"  Date: {txn.date}")
    click.echo(f"  Description: {txn.description}")
    click.echo(f"  Status: {txn.status.value}")
    click.echo(f"  Created by: {txn.created_by} at {txn.created_at}")
    if txn.approved_by:
        click.echo(f"  Approved by: {txn.approved_by} at {txn.approved_at}")
    if txn.rejected_by:
        click.echo(f"  Rejected by: {txn.rejected_by}")
        if txn.rejection_reason:
            click.echo(f"  Reason: {txn.rejection_reason}")

    click.echo("-" * 64)
    click.echo(f"  {'Account':<30} {'Debit':>14} {'Credit':>14}")
    for entry in txn.entries:
        name = account_names.get(entry.account_id, f"#{entry.account_id}")
        debit = f"{entry.debit_amount:,.2f}" if entry.debit_amount is not None else ""
        credit = f"{entry.credit_amount:,.2f}" if entry.credit_amount is not None else ""
        click.echo(f"  {name[:30]:<30} {debit:>14} {credit:>14}")
    totals = compute_totals(txn.entries)
    click.echo("-" * 64)
    click.echo(f"  {'TOTAL':<30} {totals.total_debits:>14,.2f} {totals.total_credits:>14,.2f}")


@click.group()
def transaction_group():
    """Record and review transactions."""
    pass


@transaction_group.command("create")
@click.argument("post_id", type=int)
@click.option("--description", required=True, help="Transaction description")
@click.option("--date", "date_str", default="today", show_default=True,
              help="Transaction date (YYYY-MM-DD or relative like 'today', 'yesterday')")
@click.option("--by", "created_by", required=True, help="Creator identifier")
@click.option("--debit", "debits", multiple=True, metavar="ACCOUNT=AMOUNT", help="Debit line (repeatable)")
@click.option("--credit", "credits", multiple=True, metavar="ACCOUNT=AMOUNT", help="Credit line (repeatable)")
@click.pass_context
def create_transaction(ctx, post_id: int, description: str, date_str: str, created_by: str, debits, credits):
    """Record a pending transaction for a post.

    ACCOUNT can be an account ID, name, or type:name.

    Examples:
        postledger transaction create 1 --description "March rent" --by u1 \\
            --debit "Rent Expense=1200" --credit "Checking Account=1200"
    """
    db = ctx.obj["db"]
    service = TransactionService(db)
    account_service = AccountService(db)

    txn_date = _parse_date_or_exit(ctx, date_str)
    entries = _build_entries(ctx, account_service, debits, credits)

    try:
        txn = service.create_transaction(
            post_id=post_id,
            description=description,
            date=txn_date,
            created_by=created_by,
            entries=entries,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    click.echo(f"Created transaction {txn.id} for post {post_id} (pending approval)")


@transaction_group.command("show")
@click.argument("transaction_id", type=int)
@click.pass_context
def show_transaction(ctx, transaction_id: int):
    """Show a transaction with its entries."""
    db = ctx.obj["db"]
    service = TransactionService(db)

    try:
        txn = service.get_transaction(transaction_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    accounts = {acc.id: acc.name for acc in AccountService(db).list_accounts()}
    _print_transaction(txn, accounts)


@transaction_group.command("list")
@click.option("--status", type=click.Choice([s.value for s in TransactionStatus], case_sensitive=False),
              help="Only list this status")
@click.option("--creator", help="Only list transactions created by this user")
@click.pass_context
def list_transactions(ctx, status: str | None, creator: str | None):
    """List transactions, newest first."""
    service = TransactionService(ctx.obj["db"])

    transactions = service.list_transactions(status=status, created_by=creator)
    if not transactions:
        click.echo("No transactions found.")
        return

    click.echo(f"\nFound {len(transactions)} transaction(s):")
    click.echo("-" * 100)
    click.echo(f"{'ID':<6} {'Date':<12} {'Status':<10} {'Amount':>14}  {'Post':<6} {'Description':<40}")
    click.echo("-" * 100)
    for txn in transactions:
        amount = compute_totals(txn.entries).total_debits
        click.echo(
            f"{txn.id:<6} {str(txn.date):<12} {txn.status.value:<10} {amount:>14,.2f}  "
            f"{txn.post_id:<6} {txn.description[:40]:<40}"
        )


@transaction_group.command("approve")
@click.argument("transaction_id", type=int)
@click.option("--by", "approver", required=True, help="Approver identifier")
@click.pass_context
def approve_transaction(ctx, transaction_id: int, approver: str):
    """Approve a pending transaction. Approved transactions are final."""
    service = TransactionService(ctx.obj["db"])

    try:
        service.approve_transaction(transaction_id, approver)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return
    click.echo(f"Approved transaction {transaction_id}")


@transaction_group.command("reject")
@click.argument("transaction_id", type=int)
@click.option("--by", "reviewer", required=True, help="Reviewer identifier")
@click.option("--reason", help="Why the transaction was rejected")
@click.pass_context
def reject_transaction(ctx, transaction_id: int, reviewer: str, reason: str | None):
    """Reject a pending transaction so its creator can fix and resubmit it."""
    service = TransactionService(ctx.obj["db"])

    try:
        service.reject_transaction(transaction_id, reviewer, reason)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return
    click.echo(f"Rejected transaction {transaction_id}")


@transaction_group.command("update")
@click.argument("transaction_id", type=int)
@click.option("--description", help="New description")
@click.option("--date", "date_str", help="New date (YYYY-MM-DD or relative like 'yesterday')")
@click.option("--debit", "debits", multiple=True, metavar="ACCOUNT=AMOUNT",
              help="Debit line of the replacement entry set (repeatable)")
@click.option("--credit", "credits", multiple=True, metavar="ACCOUNT=AMOUNT",
              help="Credit line of the replacement entry set (repeatable)")
@click.pass_context
def update_transaction(ctx, transaction_id: int, description: str | None, date_str: str | None, debits, credits):
    """Edit a pending or rejected transaction and resubmit it for approval.

    Giving any --debit/--credit replaces the whole entry set.

    Examples:
        postledger transaction update 1 --description "April rent"
        postledger transaction update 1 --debit "Rent Expense=1250" --credit "Cash=1250"
    """
    db = ctx.obj["db"]
    service = TransactionService(db)

    txn_date = _parse_date_or_exit(ctx, date_str) if date_str is not None else None
    entries = None
    if debits or credits:
        entries = _build_entries(ctx, AccountService(db), debits, credits)

    try:
        txn = service.update_transaction(
            transaction_id,
            TransactionPatch(description=description, date=txn_date, entries=entries),
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
        return
    click.echo(f"Updated transaction {txn.id} (status: {txn.status.value})")


def register_commands(cli: click.Group) -> None:
    """Register transaction commands with main CLI."""
    cli.add_command(transaction_group, name="transaction")
