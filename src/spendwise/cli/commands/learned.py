"""Learned category commands."""

import click
from spendwise.domain.categorization import CategorizationService


@click.group()
def learned_group():
    """Inspect and reset learned categories."""
    pass


@learned_group.command("list")
@click.pass_context
def list_learned(ctx):
    """List learned description -> category mappings."""
    db = ctx.obj["db"]
    service = CategorizationService(db.learned_categories)

    items = service.learned_categories()
    if not items:
        click.echo("No learned categories.")
        return

    click.echo(f"\n{len(items)} learned mapping(s):")
    for key, category in items:
        click.echo(f"  {key:<45} {category}")


@learned_group.command("count")
@click.pass_context
def count_learned(ctx):
    """Show how many learned mappings exist."""
    db = ctx.obj["db"]
    service = CategorizationService(db.learned_categories)
    click.echo(f"{service.learned_count()} learned mapping(s)")


@learned_group.command("clear")
@click.confirmation_option(prompt="Forget all learned categories?")
@click.pass_context
def clear_learned(ctx):
    """Forget every learned mapping."""
    db = ctx.obj["db"]
    service = CategorizationService(db.learned_categories)

    count = service.clear_learned()
    click.echo(f"Cleared {count} learned mapping(s)")


def register_commands(cli):
    """Register learned category commands with main CLI."""
    cli.add_command(learned_group, name="learned")
