"""Utility functions for spendwise."""

from spendwise.utils.date_parser import infer_year, parse_statement_date, week_start
from spendwise.utils.amount_parser import parse_amount, looks_like_amount

__all__ = ["infer_year", "parse_statement_date", "week_start", "parse_amount", "looks_like_amount"]
