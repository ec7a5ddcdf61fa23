"""CLI helpers for resolving transaction IDs typed by the user."""

from __future__ import annotations

import click
from spendwise.domain.transaction import TransactionService

SHORT_ID_LENGTH = 8


def short_id(transaction_id: str) -> str:
    """Return the abbreviated form shown in listings."""
    return transaction_id[:SHORT_ID_LENGTH]


def resolve_transaction_id(service: TransactionService, text: str) -> str:
    """Resolve a full transaction ID or a unique prefix of one.

    Raises:
        ValueError: If nothing or more than one transaction matches
    """
    text = text.strip()
    if service.get_transaction(text) is not None:
        return text

    matches = [txn.id for txn in service.list_transactions() if txn.id.startswith(text)]
    if not matches:
        raise ValueError(f"Transaction {text} not found")
    if len(matches) > 1:
        raise ValueError(f"Transaction ID prefix '{text}' is ambiguous ({len(matches)} matches)")
    return matches[0]


def resolve_transaction_or_exit(ctx: click.Context, service: TransactionService, text: str) -> str:
    """Resolve a transaction ID, or exit with a CLI error."""
    try:
        return resolve_transaction_id(service, text)
    except ValueError as exc:
        click.echo(f"Error: {exc}", err=True)
        ctx.exit(1)
