"""Statement import command."""

import mimetypes
from pathlib import Path

import click
from spendwise.domain.entities import StatementFile
from spendwise.domain.statement_import import StatementImportService
from spendwise.cli.error_handling import report_file_result


@click.command("import")
@click.argument("files", nargs=-1, required=True, type=click.Path(exists=True, dir_okay=False))
@click.pass_context
def import_statements(ctx, files: tuple[str, ...]):
    """Import transactions from CSV or PDF statements.

    Files are processed one after another; a file that cannot be read is
    reported and the rest are still imported. Use 'undo' to restore the
    transaction list as it was before this import.

    Examples:
        spendwise import activity.csv
        spendwise import march.pdf april.pdf
    """
    db = ctx.obj["db"]
    service = StatementImportService(db)

    statements = [
        StatementFile(
            filename=Path(path).name,
            content=Path(path).read_bytes(),
            content_type=mimetypes.guess_type(path)[0],
        )
        for path in files
    ]
    result = service.import_files(statements)

    for file_result in result.files:
        report_file_result(file_result)

    click.echo("\nImport complete:")
    click.echo(f"  Imported: {result.imported} transactions")


def register_commands(cli):
    """Register import command with main CLI."""
    cli.add_command(import_statements)
