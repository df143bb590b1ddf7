"""Account management commands."""

import click

from fintracker.cli.error_handling import handle_domain_error
from fintracker.cli.resolution import (
    parse_amount_or_exit,
    resolve_account_or_exit,
    resolve_user_or_exit,
)
from fintracker.domain.account import AccountService
from fintracker.domain.errors import DomainError
from fintracker.utils.currency import format_indian_rupee


@click.group()
def account_group():
    """Manage accounts."""
    pass


@account_group.command("create")
@click.argument("name", metavar="ACCOUNT_NAME")
@click.option("--user", required=True, help="Owner username or ID")
@click.option("--type", "account_type", default="SAVINGS", show_default=True, help="Account type")
@click.option("--balance", default="0", help="Opening balance")
@click.pass_context
def create_account(ctx, name: str, user: str, account_type: str, balance: str):
    """Create a new account.

    Examples:
        fintracker account create "HDFC Savings" --user asha
        fintracker account create "Wallet" --user 1 --type CASH --balance 2500
    """
    service = AccountService(ctx.obj["db"])
    user_id = resolve_user_or_exit(ctx, user)
    opening = parse_amount_or_exit(ctx, balance)

    try:
        account = service.create_account(
            name=name, account_type=account_type.upper(), user_id=user_id, balance=opening
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Created account '{account.name}' (ID: {account.id})")


@account_group.command("list")
@click.option("--user", help="Only accounts of this username or ID")
@click.pass_context
def list_accounts(ctx, user: str | None):
    """List accounts."""
    service = AccountService(ctx.obj["db"])
    user_id = resolve_user_or_exit(ctx, user) if user else None

    accounts = service.list_accounts(user_id=user_id)
    if not accounts:
        click.echo("No accounts found.")
        return

    click.echo("\nAccounts:")
    click.echo("-" * 70)
    for acc in accounts:
        click.echo(
            f"ID: {acc.id:3d} | {acc.name:20s} | {acc.account_type:10s} | "
            f"{format_indian_rupee(acc.balance):>16s}"
        )


@account_group.command("show")
@click.argument("account", metavar="ACCOUNT")
@click.pass_context
def show_account(ctx, account: str):
    """Show an account and its balance. ACCOUNT can be a name or ID."""
    account_id = resolve_account_or_exit(ctx, account)
    acc = AccountService(ctx.obj["db"]).get_account(account_id)

    click.echo(f"Account ID: {acc.id}")
    click.echo(f"  Name: {acc.name}")
    click.echo(f"  Type: {acc.account_type}")
    click.echo(f"  Balance: {format_indian_rupee(acc.balance)}")
    click.echo(f"  Owner ID: {acc.user_id}")


@account_group.command("update")
@click.argument("account", metavar="ACCOUNT")
@click.option("--name", help="New account name")
@click.option("--type", "account_type", help="New account type")
@click.pass_context
def update_account(ctx, account: str, name: str | None, account_type: str | None):
    """Rename an account or change its type.

    The balance cannot be edited; it follows the account's transactions.
    """
    service = AccountService(ctx.obj["db"])
    account_id = resolve_account_or_exit(ctx, account)
    existing = service.get_account(account_id)

    try:
        updated = service.update_account(
            account_id=account_id,
            name=name if name is not None else existing.name,
            account_type=account_type.upper() if account_type else existing.account_type,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Updated account '{updated.name}' (ID: {updated.id})")


@account_group.command("delete")
@click.argument("account", metavar="ACCOUNT")
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def delete_account(ctx, account: str, yes: bool):
    """Delete an account. ACCOUNT can be a name or ID.

    Accounts with transactions or scheduled transactions cannot be deleted.
    """
    service = AccountService(ctx.obj["db"])
    account_id = resolve_account_or_exit(ctx, account)
    acc = service.get_account(account_id)

    if not yes and not click.confirm(
        f"Are you sure you want to delete account '{acc.name}' (ID: {account_id})?"
    ):
        click.echo("Deletion cancelled.")
        return

    try:
        service.delete_account(account_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Deleted account '{acc.name}'")


def register_commands(cli):
    """Register account commands with main CLI."""
    cli.add_command(account_group, name="account")
