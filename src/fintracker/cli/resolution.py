"""CLI helpers for turning option values into IDs, amounts and dates."""

from __future__ import annotations

from datetime import datetime, time
from decimal import Decimal

import click

from fintracker.cli.error_handling import handle_domain_error
from fintracker.domain.account import AccountService
from fintracker.domain.category import CategoryService
from fintracker.domain.errors import DomainError
from fintracker.domain.user import UserService
from fintracker.utils.amount_parser import parse_amount
from fintracker.utils.date_parser import parse_datetime
from fintracker.utils.resolvers import resolve_account, resolve_category, resolve_user


def resolve_account_or_exit(ctx: click.Context, account: str | int) -> int:
    """Resolve account name or ID, or exit with a CLI error."""
    try:
        return resolve_account(AccountService(ctx.obj["db"]), account).id
    except DomainError as exc:
        handle_domain_error(ctx, exc)


def resolve_user_or_exit(ctx: click.Context, user: str | int) -> int:
    """Resolve username or ID, or exit with a CLI error."""
    try:
        return resolve_user(UserService(ctx.obj["db"]), user).id
    except DomainError as exc:
        handle_domain_error(ctx, exc)


def resolve_category_or_exit(ctx: click.Context, category: str | int) -> int:
    """Resolve category path or ID, or exit with a CLI error."""
    try:
        return resolve_category(CategoryService(ctx.obj["db"]), category).id
    except DomainError as exc:
        handle_domain_error(ctx, exc)


def parse_amount_or_exit(ctx: click.Context, amount: str) -> Decimal:
    try:
        return parse_amount(amount)
    except ValueError as exc:
        click.echo(f"Error: Invalid amount format: {exc}", err=True)
        ctx.exit(1)


def parse_datetime_or_exit(ctx: click.Context, value: str, label: str = "date") -> datetime:
    try:
        return parse_datetime(value)
    except ValueError as exc:
        click.echo(f"Error: Invalid {label}: {exc}", err=True)
        ctx.exit(1)


def parse_time_of_day(ctx: click.Context, value: str) -> time:
    """Parse HH:MM into a time, or exit with a CLI error."""
    try:
        return datetime.strptime(value.strip(), "%H:%M").time()
    except ValueError:
        click.echo(f"Error: Invalid time '{value}', expected HH:MM", err=True)
        ctx.exit(1)
