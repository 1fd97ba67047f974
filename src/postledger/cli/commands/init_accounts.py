"""Initialize the default chart of accounts."""

import click

from postledger.domain.account import DEFAULT_ACCOUNTS, AccountService


@click.command("init-accounts")
@click.pass_context
def init_accounts(ctx):
    """Initialize database with the default chart of accounts.

    Does nothing when any account already exists.
    """
    service = AccountService(ctx.obj["db"])

    if service.list_accounts():
        click.echo("Accounts already exist. Nothing to do.")
        return

    click.echo("Creating default chart of accounts...")
    created = service.seed_default_accounts()
    click.echo(f"Successfully created {created} of {len(DEFAULT_ACCOUNTS)} accounts.")


def register_commands(cli):
    """Register init-accounts command with main CLI."""
    cli.add_command(init_accounts)
