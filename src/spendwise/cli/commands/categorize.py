"""Categorization commands."""

import click
from spendwise.domain.categories import CATEGORIES
from spendwise.domain.errors import DomainError
from spendwise.domain.transaction import TransactionService
from spendwise.cli.error_handling import handle_domain_error
from spendwise.cli.transaction_resolution import resolve_transaction_or_exit, short_id


@click.command("categorize")
@click.argument("transaction_id")
@click.argument("category", type=click.Choice(CATEGORIES))
@click.pass_context
def categorize_transaction(ctx, transaction_id: str, category: str):
    """Set a transaction's category and remember the choice.

    Every transaction with the same description gets the category, and
    future imports of that merchant are categorized the same way.

    Examples:
        spendwise categorize 3f2a9c1b Dining
        spendwise categorize 3f2a "Coffee & Bakery"
    """
    db = ctx.obj["db"]
    service = TransactionService(db)

    txn_id = resolve_transaction_or_exit(ctx, service, transaction_id)
    try:
        updated = service.update_category(txn_id, category)
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Categorized {len(updated)} transaction(s) as '{category}'")
    for txn in updated:
        click.echo(f"  {short_id(txn.id)}  {txn.date:<12} {txn.description[:40]}")


@click.command("refresh")
@click.pass_context
def refresh_categories(ctx):
    """Re-run categorization over all transactions."""
    db = ctx.obj["db"]
    service = TransactionService(db)

    changed = service.refresh_categories()
    click.echo(f"Updated {changed} transaction(s)")


@click.command("hints")
@click.option("--accept", is_flag=True, help="Apply all suggested categories")
@click.pass_context
def show_hints(ctx, accept: bool):
    """Suggest categories for transactions still in 'Other'."""
    db = ctx.obj["db"]
    service = TransactionService(db)

    suggestions = service.get_suggestions()
    if not suggestions:
        click.echo("No suggestions.")
        return

    click.echo(f"\n{len(suggestions)} suggestion(s):")
    click.echo("-" * 90)
    for txn, hint in suggestions:
        click.echo(
            f"{short_id(txn.id):<10} {txn.description[:35]:<36} -> {hint.category:<15} ({hint.reason})"
        )

    if accept:
        applied = service.accept_suggestions()
        click.echo(f"\nApplied {applied} suggestion(s)")


def register_commands(cli):
    """Register categorization commands with main CLI."""
    cli.add_command(categorize_transaction)
    cli.add_command(refresh_categories)
    cli.add_command(show_hints)
