"""Utility functions for costbook."""

from costbook.utils.date_parser import parse_date, parse_year_month
from costbook.utils.amount_parser import parse_amount
from costbook.utils.account_resolver import resolve_account

__all__ = ["parse_date", "parse_year_month", "parse_amount", "resolve_account"]
