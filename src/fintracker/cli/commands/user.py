"""User management commands."""

import click

from fintracker.cli.error_handling import handle_domain_error
from fintracker.cli.resolution import resolve_user_or_exit
from fintracker.domain.errors import DomainError
from fintracker.domain.user import UserService


@click.group()
def user_group():
    """Manage users."""
    pass


@user_group.command("create")
@click.argument("username")
@click.option("--email", required=True, help="Email address (must be unique)")
@click.option("--full-name", help="Display name")
@click.password_option(help="Password (prompted if not given)")
@click.pass_context
def create_user(ctx, username: str, email: str, full_name: str | None, password: str):
    """Create a new user.

    Examples:
        fintracker user create asha --email asha@example.com
        fintracker user create ravi --email ravi@example.com --full-name "Ravi Kumar" --password s3cret
    """
    service = UserService(ctx.obj["db"])

    try:
        user = service.create_user(
            username=username, password=password, email=email, full_name=full_name
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Created user '{user.username}' (ID: {user.id})")


@user_group.command("list")
@click.pass_context
def list_users(ctx):
    """List all users."""
    service = UserService(ctx.obj["db"])

    users = service.list_users()
    if not users:
        click.echo("No users found.")
        return

    click.echo("\nUsers:")
    click.echo("-" * 70)
    for user in users:
        full_name = user.full_name or ""
        click.echo(f"ID: {user.id:3d} | {user.username:15s} | {user.email:25s} | {full_name}")


@user_group.command("show")
@click.argument("user", metavar="USER")
@click.pass_context
def show_user(ctx, user: str):
    """Show a user. USER can be a username or ID."""
    user_id = resolve_user_or_exit(ctx, user)
    found = UserService(ctx.obj["db"]).get_user(user_id)

    click.echo(f"User ID: {found.id}")
    click.echo(f"  Username: {found.username}")
    click.echo(f"  Email: {found.email}")
    if found.full_name:
        click.echo(f"  Full name: {found.full_name}")
    click.echo(f"  Created: {found.created_at:%Y-%m-%d %H:%M}")


@user_group.command("delete")
@click.argument("user", metavar="USER")
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def delete_user(ctx, user: str, yes: bool):
    """Delete a user. USER can be a username or ID.

    Users that still own accounts or investments cannot be deleted.
    """
    service = UserService(ctx.obj["db"])
    user_id = resolve_user_or_exit(ctx, user)
    found = service.get_user(user_id)

    if not yes and not click.confirm(f"Are you sure you want to delete user '{found.username}'?"):
        click.echo("Deletion cancelled.")
        return

    try:
        service.delete_user(user_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Deleted user '{found.username}'")


def register_commands(cli):
    """Register user commands with main CLI."""
    cli.add_command(user_group, name="user")
