"""Transaction management commands."""

from datetime import datetime

import click

from fintracker.cli.error_handling import handle_domain_error
from fintracker.cli.resolution import (
    parse_amount_or_exit,
    parse_datetime_or_exit,
    resolve_account_or_exit,
    resolve_category_or_exit,
    resolve_user_or_exit,
)
from fintracker.domain.account import AccountService
from fintracker.domain.category import CategoryService
from fintracker.domain.entities import Transaction, TransactionType
from fintracker.domain.errors import DomainError
from fintracker.domain.transaction import TransactionService
from fintracker.utils.currency import format_indian_rupee
from fintracker.utils.date_parser import PERIODS, end_of_day, get_date_range, start_of_day

TRANSACTION_TYPES = [member.value for member in TransactionType]


def echo_transaction(txn: Transaction, account_name: str, category_path: str) -> None:
    """Print one transaction in detail."""
    click.echo(f"Transaction ID: {txn.id}")
    click.echo(f"  Date: {txn.transaction_date:%Y-%m-%d %H:%M}")
    click.echo(f"  Type: {txn.transaction_type}")
    click.echo(f"  Amount: {format_indian_rupee(txn.amount)}")
    click.echo(f"  Account: {account_name} (ID: {txn.account_id})")
    click.echo(f"  Category: {category_path}")
    if txn.description:
        click.echo(f"  Description: {txn.description}")
    if txn.notes:
        click.echo(f"  Notes: {txn.notes}")
    if txn.scheduled_transaction_id is not None:
        click.echo(f"  Scheduled transaction: {txn.scheduled_transaction_id}")


@click.group()
def transaction_group():
    """Manage transactions."""
    pass


@transaction_group.command("add")
@click.option("--account", required=True, help="Account name or ID")
@click.option("--category", required=True, help="Category path (e.g., 'Food & Dining > Groceries') or ID")
@click.option("--user", required=True, help="Creating username or ID")
@click.option("--amount", required=True, help="Positive transaction amount (e.g., 1,250.00)")
@click.option(
    "--type",
    "transaction_type",
    type=click.Choice(TRANSACTION_TYPES, case_sensitive=False),
    default="EXPENSE",
    show_default=True,
)
@click.option("--date", "txn_date", help="Transaction date (defaults to now; 'today', 'yesterday' work)")
@click.option("--description", help="Transaction description")
@click.option("--notes", help="Notes")
@click.pass_context
def add_transaction(
    ctx,
    account: str,
    category: str,
    user: str,
    amount: str,
    transaction_type: str,
    txn_date: str | None,
    description: str | None,
    notes: str | None,
):
    """Add a transaction and update the account balance.

    Examples:
        fintracker transaction add --account "HDFC Savings" --category Groceries --user asha --amount 1200
        fintracker transaction add --account 1 --category Salary --user 1 --amount 85000 --type INCOME
    """
    service = TransactionService(ctx.obj["db"])
    account_id = resolve_account_or_exit(ctx, account)
    category_id = resolve_category_or_exit(ctx, category)
    user_id = resolve_user_or_exit(ctx, user)
    txn_amount = parse_amount_or_exit(ctx, amount)
    when = parse_datetime_or_exit(ctx, txn_date) if txn_date else None

    try:
        txn = service.create_transaction(
            amount=txn_amount,
            transaction_type=transaction_type.upper(),
            account_id=account_id,
            category_id=category_id,
            user_id=user_id,
            transaction_date=when,
            description=description,
            notes=notes,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)

    balance = AccountService(ctx.obj["db"]).get_account(account_id).balance
    click.echo(f"Created transaction {txn.id}")
    click.echo(f"  Amount: {format_indian_rupee(txn.amount)} ({txn.transaction_type})")
    click.echo(f"  New balance: {format_indian_rupee(balance)}")


@transaction_group.command("list")
@click.option("--account", help="Account name or ID")
@click.option("--category", help="Category path or ID")
@click.option("--user", help="Creating username or ID")
@click.option("--start-date", help="Start date (YYYY-MM-DD or relative like 'last month')")
@click.option("--end-date", help="End date (YYYY-MM-DD or relative like 'today')")
@click.option("--period", type=click.Choice(PERIODS), help="Named period instead of start/end dates")
@click.pass_context
def list_transactions(
    ctx,
    account: str | None,
    category: str | None,
    user: str | None,
    start_date: str | None,
    end_date: str | None,
    period: str | None,
):
    """List transactions with optional filters."""
    db = ctx.obj["db"]
    service = TransactionService(db)

    if period and (start_date or end_date):
        click.echo("Error: --period cannot be combined with --start-date or --end-date.", err=True)
        ctx.exit(1)

    start = end = None
    if period:
        first, last = get_date_range(period)
        start, end = start_of_day(first), end_of_day(last)
    if start_date:
        start = start_of_day(parse_datetime_or_exit(ctx, start_date, "start date").date())
    if end_date:
        end = end_of_day(parse_datetime_or_exit(ctx, end_date, "end date").date())

    transactions = service.list_transactions(
        account_id=resolve_account_or_exit(ctx, account) if account else None,
        category_id=resolve_category_or_exit(ctx, category) if category else None,
        user_id=resolve_user_or_exit(ctx, user) if user else None,
        start_date=start,
        end_date=end,
    )
    if not transactions:
        click.echo("No transactions found.")
        return

    accounts = {acc.id: acc.name for acc in AccountService(db).list_accounts()}
    index = CategoryService(db).build_index()

    click.echo(f"\nFound {len(transactions)} transaction(s):")
    click.echo("-" * 110)
    for txn in transactions:
        click.echo(
            f"{txn.id:4d} | {txn.transaction_date:%Y-%m-%d} | {txn.transaction_type:8s} | "
            f"{format_indian_rupee(txn.amount):>14s} | {accounts.get(txn.account_id, 'Unknown'):15s} | "
            f"{index.path(txn.category_id):25s} | {txn.description or ''}"
        )


@transaction_group.command("show")
@click.argument("transaction_id", type=int)
@click.pass_context
def show_transaction(ctx, transaction_id: int):
    """Show one transaction."""
    db = ctx.obj["db"]
    try:
        txn = TransactionService(db).get_transaction(transaction_id)
    except DomainError as e:
        handle_domain_error(ctx, e)

    account = AccountService(db).get_account(txn.account_id)
    echo_transaction(txn, account.name, CategoryService(db).format_category_path(txn.category_id))


@transaction_group.command("update")
@click.argument("transaction_id", type=int)
@click.option("--account", help="Account name or ID")
@click.option("--category", help="Category path or ID")
@click.option("--amount", help="Positive transaction amount")
@click.option("--type", "transaction_type", type=click.Choice(TRANSACTION_TYPES, case_sensitive=False))
@click.option("--date", "txn_date", help="Transaction date")
@click.option("--description", help="Transaction description")
@click.option("--notes", help="Notes")
@click.pass_context
def update_transaction(
    ctx,
    transaction_id: int,
    account: str | None,
    category: str | None,
    amount: str | None,
    transaction_type: str | None,
    txn_date: str | None,
    description: str | None,
    notes: str | None,
):
    """Update a transaction; balances are corrected automatically.

    Updates only the fields that are provided.

    Examples:
        fintracker transaction update 4 --amount 1500
        fintracker transaction update 4 --account "Wallet" --type INCOME
    """
    service = TransactionService(ctx.obj["db"])
    try:
        existing = service.get_transaction(transaction_id)
    except DomainError as e:
        handle_domain_error(ctx, e)

    when: datetime = (
        parse_datetime_or_exit(ctx, txn_date) if txn_date else existing.transaction_date
    )
    try:
        service.update_transaction(
            transaction_id=transaction_id,
            amount=parse_amount_or_exit(ctx, amount) if amount else existing.amount,
            transaction_type=transaction_type.upper() if transaction_type else existing.transaction_type,
            transaction_date=when,
            description=description if description is not None else existing.description,
            notes=notes if notes is not None else existing.notes,
            account_id=resolve_account_or_exit(ctx, account) if account else None,
            category_id=resolve_category_or_exit(ctx, category) if category else None,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Updated transaction {transaction_id}")


@transaction_group.command("delete")
@click.argument("transaction_id", type=int)
@click.pass_context
def delete_transaction(ctx, transaction_id: int):
    """Delete a transaction and reverse its effect on the balance."""
    try:
        TransactionService(ctx.obj["db"]).delete_transaction(transaction_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Deleted transaction {transaction_id}")


def register_commands(cli):
    """Register transaction commands with main CLI."""
    cli.add_command(transaction_group, name="transaction")
