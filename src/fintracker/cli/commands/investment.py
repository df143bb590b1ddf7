"""Investment commands."""

import click

from fintracker.cli.error_handling import handle_domain_error
from fintracker.cli.resolution import (
    parse_amount_or_exit,
    parse_datetime_or_exit,
    resolve_user_or_exit,
)
from fintracker.domain.errors import DomainError
from fintracker.domain.investment import InvestmentService
from fintracker.utils.currency import format_indian_rupee


@click.group()
def investment_group():
    """Manage investments."""
    pass


@investment_group.command("create")
@click.argument("name")
@click.option("--user", required=True, help="Owner username or ID")
@click.option("--type", "investment_type", required=True, help="Investment type (e.g. STOCK, MUTUAL_FUND, FD)")
@click.option("--initial", required=True, help="Amount invested")
@click.option("--start-date", required=True, help="Start date (e.g. 2023-04-01)")
@click.option("--current", help="Current value (defaults to the amount invested)")
@click.option("--end-date", help="Maturity or end date")
@click.option("--expected-return", help="Expected yearly return in percent")
@click.option("--ticker", help="Ticker symbol")
@click.option("--notes", help="Notes")
@click.pass_context
def create_investment(
    ctx,
    name: str,
    user: str,
    investment_type: str,
    initial: str,
    start_date: str,
    current: str | None,
    end_date: str | None,
    expected_return: str | None,
    ticker: str | None,
    notes: str | None,
):
    """Create an investment.

    Examples:
        fintracker investment create "Nifty Index Fund" --user asha --type MUTUAL_FUND \\
            --initial 100000 --start-date 2023-04-01
    """
    service = InvestmentService(ctx.obj["db"])
    try:
        investment = service.create_investment(
            name=name,
            investment_type=investment_type.upper(),
            initial_amount=parse_amount_or_exit(ctx, initial),
            start_date=parse_datetime_or_exit(ctx, start_date, "start date"),
            user_id=resolve_user_or_exit(ctx, user),
            current_value=parse_amount_or_exit(ctx, current) if current else None,
            end_date=parse_datetime_or_exit(ctx, end_date, "end date") if end_date else None,
            expected_return_rate=parse_amount_or_exit(ctx, expected_return) if expected_return else None,
            notes=notes,
            ticker=ticker,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Created investment '{investment.name}' (ID: {investment.id})")


@investment_group.command("list")
@click.option("--user", help="Owner username or ID")
@click.option("--type", "investment_type", help="Investment type")
@click.pass_context
def list_investments(ctx, user: str | None, investment_type: str | None):
    """List investments."""
    service = InvestmentService(ctx.obj["db"])
    investments = service.list_investments(
        user_id=resolve_user_or_exit(ctx, user) if user else None,
        investment_type=investment_type.upper() if investment_type else None,
    )
    if not investments:
        click.echo("No investments found.")
        return

    click.echo("\nInvestments:")
    click.echo("-" * 95)
    for inv in investments:
        click.echo(
            f"ID: {inv.id:3d} | {inv.name:25s} | {inv.investment_type:12s} | "
            f"{format_indian_rupee(inv.initial_amount):>14s} -> {format_indian_rupee(inv.current_value):>14s}"
        )


@investment_group.command("show")
@click.argument("investment_id", type=int)
@click.pass_context
def show_investment(ctx, investment_id: int):
    """Show an investment with its return rate."""
    service = InvestmentService(ctx.obj["db"])
    try:
        inv = service.get_investment(investment_id)
        rate = service.calculate_return_rate(investment_id)
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Investment ID: {inv.id}")
    click.echo(f"  Name: {inv.name}")
    click.echo(f"  Type: {inv.investment_type}")
    if inv.ticker:
        click.echo(f"  Ticker: {inv.ticker}")
    click.echo(f"  Invested: {format_indian_rupee(inv.initial_amount)} on {inv.start_date:%Y-%m-%d}")
    click.echo(f"  Current value: {format_indian_rupee(inv.current_value)}")
    if inv.end_date:
        click.echo(f"  Ends: {inv.end_date:%Y-%m-%d}")
    if inv.expected_return_rate is not None:
        click.echo(f"  Expected return: {inv.expected_return_rate}%")
    click.echo(f"  Return rate: {rate}%")
    if inv.notes:
        click.echo(f"  Notes: {inv.notes}")


@investment_group.command("update-value")
@click.argument("investment_id", type=int)
@click.argument("value")
@click.pass_context
def update_value(ctx, investment_id: int, value: str):
    """Record the current value of an investment."""
    service = InvestmentService(ctx.obj["db"])
    try:
        inv = service.update_investment_value(investment_id, parse_amount_or_exit(ctx, value))
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Updated '{inv.name}' to {format_indian_rupee(inv.current_value)}")


@investment_group.command("return")
@click.argument("investment_id", type=int)
@click.option("--as-of", help="Calculate as of this date (default: now)")
@click.pass_context
def return_rate(ctx, investment_id: int, as_of: str | None):
    """Show the return rate in percent.

    Holdings older than about a month show an annualized rate.
    """
    service = InvestmentService(ctx.obj["db"])
    now = parse_datetime_or_exit(ctx, as_of, "date") if as_of else None
    try:
        rate = service.calculate_return_rate(investment_id, now=now)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"{rate}%")


@investment_group.command("delete")
@click.argument("investment_id", type=int)
@click.pass_context
def delete_investment(ctx, investment_id: int):
    """Delete an investment."""
    try:
        InvestmentService(ctx.obj["db"]).delete_investment(investment_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Deleted investment {investment_id}")


def register_commands(cli):
    """Register investment commands with main CLI."""
    cli.add_command(investment_group, name="investment")
