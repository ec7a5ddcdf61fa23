"""Duplicate detection commands."""

import click
from spendwise.domain.duplicates import DuplicateService
from spendwise.cli.commands.transaction import format_transaction_row


@click.command("duplicates")
@click.option("--remove", is_flag=True, help="Delete the duplicates (first occurrence is kept)")
@click.option("--yes", is_flag=True, help="Do not ask for confirmation when removing")
@click.pass_context
def duplicates(ctx, remove: bool, yes: bool):
    """Show transactions that repeat an earlier one.

    Two transactions are duplicates when they share a date, amount and
    merchant name, which happens when statements with overlapping date
    ranges are imported.
    """
    db = ctx.obj["db"]
    service = DuplicateService(db)

    found = service.find_duplicates()
    if not found:
        click.echo("No duplicates found.")
        return

    click.echo(f"\nFound {len(found)} duplicate(s):")
    click.echo("-" * 100)
    for txn in found:
        click.echo(format_transaction_row(txn))

    if not remove:
        click.echo("\nRun with --remove to delete them.")
        return

    if not yes and not click.confirm(f"Remove {len(found)} duplicate(s)?"):
        click.echo("Aborted.")
        return

    removed = service.remove_duplicates()
    click.echo(f"Removed {removed} duplicate(s)")


def register_commands(cli):
    """Register duplicate commands with main CLI."""
    cli.add_command(duplicates)
