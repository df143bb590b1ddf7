"""Scheduled (recurring) transaction commands."""

from datetime import datetime, timedelta

import click

from fintracker.cli.error_handling import handle_domain_error
from fintracker.cli.resolution import (
    parse_amount_or_exit,
    parse_datetime_or_exit,
    parse_time_of_day,
    resolve_account_or_exit,
    resolve_category_or_exit,
    resolve_user_or_exit,
)
from fintracker.domain.entities import Frequency, ScheduledTransaction, TransactionType
from fintracker.domain.errors import DomainError
from fintracker.domain.scheduler import ScheduledTransactionService
from fintracker.scheduling import DailySweepTrigger
from fintracker.utils.currency import format_indian_rupee

FREQUENCIES = [member.value for member in Frequency]
TRANSACTION_TYPES = [member.value for member in TransactionType]


def echo_scheduled_row(item: ScheduledTransaction) -> None:
    status = "active" if item.active else "inactive"
    click.echo(
        f"{item.id:4d} | {item.description:25s} | {format_indian_rupee(item.amount):>14s} | "
        f"{item.transaction_type:8s} | {item.frequency:8s} | next {item.next_due_date:%Y-%m-%d} | {status}"
    )


@click.group()
def scheduled_group():
    """Manage recurring (scheduled) transactions."""
    pass


@scheduled_group.command("create")
@click.option("--description", required=True, help="Description copied onto each transaction")
@click.option("--amount", required=True, help="Positive amount")
@click.option("--frequency", required=True, type=click.Choice(FREQUENCIES, case_sensitive=False))
@click.option("--next-due", required=True, help="First due date (e.g. 2024-02-01)")
@click.option(
    "--type",
    "transaction_type",
    type=click.Choice(TRANSACTION_TYPES, case_sensitive=False),
    default="EXPENSE",
    show_default=True,
)
@click.option("--account", required=True, help="Account name or ID")
@click.option("--category", required=True, help="Category path or ID")
@click.option("--user", required=True, help="Creating username or ID")
@click.option("--notes", help="Notes")
@click.pass_context
def create_scheduled(
    ctx,
    description: str,
    amount: str,
    frequency: str,
    next_due: str,
    transaction_type: str,
    account: str,
    category: str,
    user: str,
    notes: str | None,
):
    """Create a scheduled transaction.

    Examples:
        fintracker scheduled create --description Rent --amount 25000 --frequency MONTHLY \\
            --next-due 2024-02-01 --account "HDFC Savings" --category Housing --user asha
    """
    service = ScheduledTransactionService(ctx.obj["db"])
    try:
        item = service.create_scheduled_transaction(
            description=description,
            amount=parse_amount_or_exit(ctx, amount),
            frequency=frequency.upper(),
            next_due_date=parse_datetime_or_exit(ctx, next_due, "next due date"),
            transaction_type=transaction_type.upper(),
            account_id=resolve_account_or_exit(ctx, account),
            category_id=resolve_category_or_exit(ctx, category),
            user_id=resolve_user_or_exit(ctx, user),
            notes=notes,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Created scheduled transaction {item.id}, next due {item.next_due_date:%Y-%m-%d}")


@scheduled_group.command("list")
@click.option("--account", help="Account name or ID")
@click.option("--user", help="Creating username or ID")
@click.option("--active/--inactive", "active", default=None, help="Filter by active flag")
@click.pass_context
def list_scheduled(ctx, account: str | None, user: str | None, active: bool | None):
    """List scheduled transactions."""
    service = ScheduledTransactionService(ctx.obj["db"])
    items = service.list_scheduled_transactions(
        account_id=resolve_account_or_exit(ctx, account) if account else None,
        user_id=resolve_user_or_exit(ctx, user) if user else None,
        active=active,
    )
    if not items:
        click.echo("No scheduled transactions found.")
        return

    click.echo("\nScheduled transactions:")
    click.echo("-" * 110)
    for item in items:
        echo_scheduled_row(item)


@scheduled_group.command("show")
@click.argument("scheduled_id", type=int)
@click.pass_context
def show_scheduled(ctx, scheduled_id: int):
    """Show a scheduled transaction and the transactions it has produced."""
    service = ScheduledTransactionService(ctx.obj["db"])
    try:
        item = service.get_scheduled_transaction(scheduled_id)
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Scheduled transaction ID: {item.id}")
    click.echo(f"  Description: {item.description}")
    click.echo(f"  Amount: {format_indian_rupee(item.amount)} ({item.transaction_type})")
    click.echo(f"  Frequency: {item.frequency}")
    click.echo(f"  Next due: {item.next_due_date:%Y-%m-%d %H:%M}")
    click.echo(f"  Active: {'yes' if item.active else 'no'}")
    if item.notes:
        click.echo(f"  Notes: {item.notes}")

    spawned = service.get_spawned_transactions(scheduled_id)
    click.echo(f"  Transactions created: {len(spawned)}")
    for txn in spawned:
        click.echo(f"    {txn.id:4d} | {txn.transaction_date:%Y-%m-%d} | {format_indian_rupee(txn.amount)}")


@scheduled_group.command("update")
@click.argument("scheduled_id", type=int)
@click.option("--description", help="New description")
@click.option("--amount", help="New positive amount")
@click.option("--frequency", type=click.Choice(FREQUENCIES, case_sensitive=False))
@click.option("--next-due", help="New next due date")
@click.option("--type", "transaction_type", type=click.Choice(TRANSACTION_TYPES, case_sensitive=False))
@click.option("--account", help="Account name or ID")
@click.option("--category", help="Category path or ID")
@click.option("--notes", help="Notes")
@click.option("--active/--inactive", "active", default=None, help="Enable or pause the schedule")
@click.pass_context
def update_scheduled(
    ctx,
    scheduled_id: int,
    description: str | None,
    amount: str | None,
    frequency: str | None,
    next_due: str | None,
    transaction_type: str | None,
    account: str | None,
    category: str | None,
    notes: str | None,
    active: bool | None,
):
    """Update a scheduled transaction. Only given fields change.

    Use --inactive to pause a schedule and --active to resume it.
    """
    service = ScheduledTransactionService(ctx.obj["db"])
    try:
        existing = service.get_scheduled_transaction(scheduled_id)
    except DomainError as e:
        handle_domain_error(ctx, e)

    try:
        item = service.update_scheduled_transaction(
            scheduled_id=scheduled_id,
            description=description if description is not None else existing.description,
            amount=parse_amount_or_exit(ctx, amount) if amount else existing.amount,
            frequency=frequency.upper() if frequency else existing.frequency,
            next_due_date=(
                parse_datetime_or_exit(ctx, next_due, "next due date")
                if next_due
                else existing.next_due_date
            ),
            transaction_type=transaction_type.upper() if transaction_type else existing.transaction_type,
            active=existing.active if active is None else active,
            notes=notes if notes is not None else existing.notes,
            account_id=resolve_account_or_exit(ctx, account) if account else None,
            category_id=resolve_category_or_exit(ctx, category) if category else None,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Updated scheduled transaction {item.id}")


@scheduled_group.command("delete")
@click.argument("scheduled_id", type=int)
@click.pass_context
def delete_scheduled(ctx, scheduled_id: int):
    """Delete a scheduled transaction. Transactions it created are kept."""
    try:
        ScheduledTransactionService(ctx.obj["db"]).delete_scheduled_transaction(scheduled_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Deleted scheduled transaction {scheduled_id}")


@scheduled_group.command("execute")
@click.argument("scheduled_id", type=int)
@click.pass_context
def execute_scheduled(ctx, scheduled_id: int):
    """Book one occurrence now and advance the next due date."""
    service = ScheduledTransactionService(ctx.obj["db"])
    try:
        txn = service.execute_scheduled_transaction(scheduled_id)
        item = service.get_scheduled_transaction(scheduled_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Created transaction {txn.id} for {format_indian_rupee(txn.amount)}")
    click.echo(f"  Next due: {item.next_due_date:%Y-%m-%d}")


@scheduled_group.command("upcoming")
@click.option("--days", default=7, show_default=True, type=click.IntRange(min=0), help="Look-ahead window")
@click.pass_context
def upcoming_scheduled(ctx, days: int):
    """List scheduled transactions due within the next DAYS days."""
    service = ScheduledTransactionService(ctx.obj["db"])
    items = service.list_upcoming(datetime.now() + timedelta(days=days))
    if not items:
        click.echo(f"Nothing due in the next {days} day(s).")
        return

    click.echo(f"\nDue in the next {days} day(s):")
    click.echo("-" * 110)
    for item in items:
        echo_scheduled_row(item)


@scheduled_group.command("run-due")
@click.option("--now", "as_of", help="Treat this moment as now (default: current time)")
@click.pass_context
def run_due(ctx, as_of: str | None):
    """Execute every active schedule that is due (one sweep)."""
    service = ScheduledTransactionService(ctx.obj["db"])
    now = parse_datetime_or_exit(ctx, as_of, "time") if as_of else None
    try:
        created = service.sweep(now)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Executed {len(created)} scheduled transaction(s)")


@scheduled_group.command("daemon")
@click.option("--at", "run_at", default="00:00", show_default=True, help="Daily run time (HH:MM)")
@click.pass_context
def run_daemon(ctx, run_at: str):
    """Run the sweep every day at a fixed time until interrupted."""
    service = ScheduledTransactionService(ctx.obj["db"])
    trigger = DailySweepTrigger(service.sweep, run_at=parse_time_of_day(ctx, run_at))
    click.echo(f"Sweeping scheduled transactions daily at {run_at}. Press Ctrl+C to stop.")
    try:
        trigger.run_forever()
    except KeyboardInterrupt:
        trigger.stop()
        click.echo("Stopped.")


def register_commands(cli):
    """Register scheduled transaction commands with main CLI."""
    cli.add_command(scheduled_group, name="scheduled")
