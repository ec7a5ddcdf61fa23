"""CLI error reporting helpers."""

import click

from spendwise.domain.entities import FileImportResult
from spendwise.domain.errors import DomainError
from spendwise.domain.statement_import import STATUS_IMPORTED


def handle_domain_error(ctx: click.Context, error: DomainError) -> None:
    """Print a domain error to stderr and exit with status 1."""
    click.echo(f"Error: {error}", err=True)
    ctx.exit(1)


def report_file_result(result: FileImportResult) -> None:
    """Print one file's import outcome. Skipped and failed files go to stderr."""
    if result.status == STATUS_IMPORTED:
        click.echo(f"{result.filename}: imported {result.count} transactions")
    else:
        click.echo(f"{result.filename}: {result.message}", err=True)
