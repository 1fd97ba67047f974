"""Main CLI entry point."""

import click

from postledger.database.factories import DB_PATH_ENVVAR, create_sqlite_database
from postledger.logging_config import LOG_LEVEL_ENVVAR, configure_logging

# Import and register all commands at module level
from postledger.cli.commands import account, init_accounts, post, transaction

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help=f"Path to database file (overrides {DB_PATH_ENVVAR} environment variable)",
    envvar=DB_PATH_ENVVAR,
)
@click.option(
    "--log-level",
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    default="WARNING",
    show_default=True,
    help=f"Logging verbosity (overrides {LOG_LEVEL_ENVVAR} environment variable)",
    envvar=LOG_LEVEL_ENVVAR,
)
@click.pass_context
def cli(ctx, db_path: str | None, log_level: str):
    """Postledger - turn posts into reviewed double-entry transactions.

    Keep a chart of accounts, write posts, record balanced transactions
    against them and take each transaction through approval.
    """
    ctx.ensure_object(dict)
    configure_logging(level=log_level)

    # Initialize database connection only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None:
        db = create_sqlite_database(database_path=db_path)
        db.connect()
        db.initialize_schema()
        ctx.obj["db"] = db
        ctx.call_on_close(db.disconnect)


# Register all commands
account.register_commands(cli)
init_accounts.register_commands(cli)
post.register_commands(cli)
transaction.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
