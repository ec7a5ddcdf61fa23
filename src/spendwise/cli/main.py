"""Main CLI entry point."""

import click
from spendwise.database.factories import create_sqlite_database
from spendwise.logging_setup import configure_logging

# Import and register all commands at module level
from spendwise.cli.commands import (
    import_cmd,
    transaction,
    categorize,
    learned,
    duplicates,
    summary,
    category,
)


@click.group()
@click.version_option(package_name="spendwise")
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to database file (overrides SPENDWISE_DB_PATH environment variable)",
    envvar="SPENDWISE_DB_PATH",
)
@click.option(
    "--log-level",
    help="Logging level, e.g. DEBUG or WARNING (overrides SPENDWISE_LOG_LEVEL)",
    envvar="SPENDWISE_LOG_LEVEL",
)
@click.pass_context
def cli(ctx, db_path: str | None, log_level: str | None):
    """Spendwise - statement ingestion and spending categorization.

    Import CSV and PDF bank statements, categorize transactions with keyword
    rules and categories learned from your corrections, and find duplicates
    from overlapping uploads.
    """
    ctx.ensure_object(dict)
    configure_logging(log_level)

    # Initialize database connection only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None:
        db = create_sqlite_database(database_path=db_path)
        db.connect()
        db.initialize_schema()
        ctx.obj["db"] = db
        ctx.call_on_close(db.disconnect)


for command_module in (import_cmd, transaction, categorize, learned, duplicates, summary, category):
    command_module.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
