"""Shared domain error messages and error types."""


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class NotFoundError(DomainError):
    """Requested domain entity does not exist."""


class UnsupportedFileError(DomainError):
    """File type is not a statement format we can parse."""


class ExtractionError(DomainError):
    """Raw file content could not be turned into text."""


def transaction_not_found(transaction_id: str) -> str:
    """Return message for missing transaction."""
    return f"Transaction {transaction_id} not found"


def unknown_category(category: str) -> str:
    """Return message for a label outside the category set."""
    return f"Unknown category '{category}'"


def unsupported_file(filename: str) -> str:
    """Return message for a file rejected before parsing."""
    return f"Unsupported file type for '{filename}'. Please upload a CSV or PDF statement."


def pdf_extraction_failed(filename: str) -> str:
    """Return message for an unreadable PDF."""
    return (
        f"Could not read PDF '{filename}'. The file may be corrupt or encrypted. "
        "Try downloading a CSV export from your bank instead."
    )


def no_transactions_found(filename: str) -> str:
    """Return message when parsing ran but matched nothing."""
    return f"No transactions found in '{filename}'"
