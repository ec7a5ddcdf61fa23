"""Summary commands."""

import click
from spendwise.domain.summary import SummaryService


def _display_category_totals(totals) -> None:
    for ct in totals:
        total_str = f"${ct.total:,.2f}"
        click.echo(f"{ct.category:<30} {total_str:>15}  ({ct.count})")


def _display_period_totals(periods) -> None:
    for i, period in enumerate(periods):
        if i:
            click.echo()
        total_str = f"${period.total:,.2f}"
        click.echo(f"{period.period:<30} {total_str:>15}")
        # Largest category first within each period
        for category, amount in sorted(period.by_category.items(), key=lambda kv: (-kv[1], kv[0])):
            amount_str = f"${amount:,.2f}"
            click.echo(f"    {category:<26} {amount_str:>19}")


@click.command("summary")
@click.option(
    "--by",
    "group_by",
    type=click.Choice(["category", "month", "week"], case_sensitive=False),
    default="category",
    help="Grouping (default: category)",
)
@click.pass_context
def summary(ctx, group_by: str):
    """Show spending totals.

    Only debits count as spending, and payments to the card are left out.

    Examples:
        spendwise summary
        spendwise summary --by month
    """
    db = ctx.obj["db"]
    service = SummaryService(db)

    insights = service.insights()
    if insights.count == 0:
        click.echo("No spending found.")
        return

    click.echo(f"\nSpending by {group_by.lower()}:")
    click.echo("-" * 60)
    group_by = group_by.lower()
    if group_by == "category":
        _display_category_totals(service.category_totals())
    elif group_by == "month":
        _display_period_totals(service.monthly_totals())
    else:
        _display_period_totals(service.weekly_totals())

    click.echo("-" * 60)
    click.echo(f"{'Total':<30} {f'${insights.total:,.2f}':>15}")
    click.echo(f"\nTransactions: {insights.count}")
    click.echo(f"Average:      ${insights.average:,.2f}")
    click.echo(
        f"Largest:      ${abs(insights.largest.amount):,.2f} ({insights.largest.description[:40]})"
    )
    click.echo(f"Top category: {insights.top_category}")


def register_commands(cli):
    """Register summary commands with main CLI."""
    cli.add_command(summary)
