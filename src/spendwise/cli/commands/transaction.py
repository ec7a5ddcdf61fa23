"""Transaction listing and management commands."""

import click
from spendwise.domain.categories import CATEGORIES
from spendwise.domain.errors import DomainError
from spendwise.domain.transaction import TransactionService
from spendwise.cli.error_handling import handle_domain_error
from spendwise.cli.transaction_resolution import resolve_transaction_or_exit, short_id


def format_transaction_row(txn) -> str:
    """Format one transaction as a table row."""
    amount_str = f"${txn.amount:,.2f}"
    return (
        f"{short_id(txn.id):<10} {txn.date:<12} {amount_str:>12}  "
        f"{txn.category:<18} {txn.description[:40]}"
    )


@click.command("list")
@click.option(
    "--category",
    type=click.Choice(CATEGORIES),
    help="Only show transactions in this category",
)
@click.pass_context
def list_transactions(ctx, category: str | None):
    """List transactions in upload order."""
    db = ctx.obj["db"]
    service = TransactionService(db)

    transactions = service.list_transactions(category=category)
    if not transactions:
        click.echo("No transactions found.")
        return

    click.echo(f"\nFound {len(transactions)} transaction(s):")
    click.echo("-" * 100)
    click.echo(f"{'ID':<10} {'Date':<12} {'Amount':>12}  {'Category':<18} {'Description'}")
    click.echo("-" * 100)
    for txn in transactions:
        click.echo(format_transaction_row(txn))


@click.command("delete")
@click.argument("transaction_id")
@click.pass_context
def delete_transaction(ctx, transaction_id: str):
    """Delete a transaction (full ID or unique prefix)."""
    db = ctx.obj["db"]
    service = TransactionService(db)

    txn_id = resolve_transaction_or_exit(ctx, service, transaction_id)
    try:
        service.delete_transaction(txn_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Deleted transaction {short_id(txn_id)}")


@click.command("clear")
@click.confirmation_option(prompt="Clear all transactions?")
@click.pass_context
def clear_transactions(ctx):
    """Delete every transaction."""
    db = ctx.obj["db"]
    service = TransactionService(db)

    count = service.clear_transactions()
    click.echo(f"Deleted {count} transaction(s)")


@click.command("undo")
@click.pass_context
def undo_upload(ctx):
    """Restore the transaction list from before the last import."""
    db = ctx.obj["db"]
    service = TransactionService(db)

    try:
        count = service.undo_last_upload()
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Restored {count} transaction(s) from before the last import")


def register_commands(cli):
    """Register transaction commands with main CLI."""
    cli.add_command(list_transactions)
    cli.add_command(delete_transaction)
    cli.add_command(clear_transactions)
    cli.add_command(undo_upload)
