"""Category listing command."""

import click
from spendwise.domain.categories import CATEGORIES, category_color, is_expense_category


@click.command("categories")
def list_categories():
    """List the category labels."""
    click.echo("\nCategories:")
    for name in CATEGORIES:
        kind = "expense" if is_expense_category(name) else "not counted as spending"
        click.echo(f"  {name:<18} {category_color(name):<9} {kind}")


def register_commands(cli):
    """Register category commands with main CLI."""
    cli.add_command(list_categories)
