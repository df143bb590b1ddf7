"""Category management commands."""

import click

from fintracker.cli.error_handling import handle_domain_error
from fintracker.cli.resolution import resolve_category_or_exit
from fintracker.domain.category import CategoryService
from fintracker.domain.entities import CategoryTreeNode, CategoryType
from fintracker.domain.errors import DomainError

CATEGORY_TYPES = [member.value for member in CategoryType]


def print_category_tree(nodes: list[CategoryTreeNode], indent: int = 0) -> None:
    """Recursively print category tree."""
    for node in nodes:
        prefix = "  " * indent
        click.echo(f"{prefix}{node.name} [{node.category_type}] (ID: {node.id})")
        print_category_tree(list(node.children), indent + 1)


@click.group()
def category_group():
    """Manage categories."""
    pass


@category_group.command("list")
@click.option("--type", "category_type", type=click.Choice(CATEGORY_TYPES, case_sensitive=False))
@click.pass_context
def list_categories(ctx, category_type: str | None):
    """List categories in tree format, or flat when filtered by type."""
    service = CategoryService(ctx.obj["db"])

    if category_type:
        categories = service.list_categories(category_type=category_type.upper())
        if not categories:
            click.echo("No categories found.")
            return
        index = service.build_index()
        click.echo(f"\n{category_type.upper()} categories:")
        for cat in categories:
            click.echo(f"  {index.path(cat.id)} (ID: {cat.id})")
        return

    tree = service.get_category_tree()
    if not tree:
        click.echo("No categories found.")
        return

    click.echo("\nCategories:")
    print_category_tree(tree)


@category_group.command("create")
@click.argument("name")
@click.option("--parent", help="Parent category path (e.g., 'Food & Dining') or ID")
@click.option(
    "--type",
    "category_type",
    type=click.Choice(CATEGORY_TYPES, case_sensitive=False),
    default="EXPENSE",
    show_default=True,
    help="Category type",
)
@click.option("--description", help="Description")
@click.pass_context
def create_category(ctx, name: str, parent: str | None, category_type: str, description: str | None):
    """Create a new category."""
    service = CategoryService(ctx.obj["db"])
    parent_id = resolve_category_or_exit(ctx, parent) if parent else None

    try:
        category = service.create_category(
            name=name,
            category_type=category_type.upper(),
            description=description,
            parent_id=parent_id,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
    parent_str = f" under '{parent}'" if parent else ""
    click.echo(f"Created category '{name}'{parent_str} (ID: {category.id})")


@category_group.command("update")
@click.argument("category", metavar="CATEGORY")
@click.option("--name", help="New name")
@click.option("--type", "category_type", type=click.Choice(CATEGORY_TYPES, case_sensitive=False))
@click.option("--parent", help="New parent path or ID; empty string makes it top-level")
@click.option("--description", help="New description")
@click.pass_context
def update_category(
    ctx,
    category: str,
    name: str | None,
    category_type: str | None,
    parent: str | None,
    description: str | None,
):
    """Update a category. CATEGORY can be a path or ID."""
    service = CategoryService(ctx.obj["db"])
    category_id = resolve_category_or_exit(ctx, category)
    existing = service.get_category(category_id)

    if parent is None:
        parent_id = existing.parent_id
    elif parent == "":
        parent_id = None
    else:
        parent_id = resolve_category_or_exit(ctx, parent)

    try:
        updated = service.update_category(
            category_id=category_id,
            name=name if name is not None else existing.name,
            category_type=category_type.upper() if category_type else existing.category_type,
            description=description if description is not None else existing.description,
            parent_id=parent_id,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Updated category '{service.format_category_path(updated.id)}'")


@category_group.command("delete")
@click.argument("category", metavar="CATEGORY")
@click.pass_context
def delete_category(ctx, category: str):
    """Delete a category. CATEGORY can be a path or ID."""
    service = CategoryService(ctx.obj["db"])
    category_id = resolve_category_or_exit(ctx, category)

    try:
        service.delete_category(category_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Deleted category {category_id}")


def register_commands(cli):
    """Register category commands with main CLI."""
    cli.add_command(category_group, name="category")
