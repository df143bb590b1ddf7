"""Main CLI entry point."""

import logging
import sys

import click

from fintracker.database.factories import create_database
from fintracker.utils.logging_utils import configure_logging

# Import and register all commands at module level
from fintracker.cli.commands import (
    user,
    account,
    category,
    transaction,
    scheduled,
    investment,
)

logger = logging.getLogger(__name__)


@click.group()
@click.option(
    "--db-path",
    type=click.Path(dir_okay=False),
    help="Path to SQLite database file (overrides FINTRACKER_DB_PATH environment variable)",
    envvar="FINTRACKER_DB_PATH",
)
@click.option(
    "--db-url",
    help="SQLAlchemy database URL; takes precedence over --db-path",
    envvar="FINTRACKER_DATABASE_URL",
)
@click.option(
    "--log-level",
    default="WARNING",
    show_default=True,
    envvar="FINTRACKER_LOG_LEVEL",
    help="Logging level (DEBUG, INFO, WARNING, ERROR)",
)
@click.pass_context
def cli(ctx, db_path: str | None, db_url: str | None, log_level: str):
    """Fintracker - Personal finance tracker.

    Track accounts, transactions, recurring (scheduled) transactions and
    investments. Account balances always follow the transactions booked
    against them.
    """
    ctx.ensure_object(dict)

    try:
        configure_logging(log_level)
    except ValueError as e:
        raise click.BadParameter(str(e), param_hint="--log-level")

    # Initialize database connection only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None and "db" not in ctx.obj:
        db = create_database(database_url=db_url, database_path=db_path)
        db.connect()
        db.initialize_schema()
        ctx.obj["db"] = db
        ctx.call_on_close(db.disconnect)


# Register all commands
user.register_commands(cli)
account.register_commands(cli)
category.register_commands(cli)
transaction.register_commands(cli)
scheduled.register_commands(cli)
investment.register_commands(cli)


def main():
    """Main entry point for CLI.

    Domain errors are reported by the commands themselves; anything that
    escapes is logged with its traceback and reported without details.
    """
    try:
        cli()
    except Exception:
        logger.exception("Unexpected error")
        click.echo("Error: An unexpected error occurred", err=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
