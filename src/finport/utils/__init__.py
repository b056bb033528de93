"""Utility functions for finport."""

from finport.utils.date_parser import parse_date, parse_cell_date
from finport.utils.amount_parser import parse_amount
from finport.utils.header_resolver import resolve_column, resolve_mapping
from finport.utils.tokens import normalize_tokens, matches_token
from finport.utils.employee_resolver import EmployeeResolver

__all__ = [
    "parse_date",
    "parse_cell_date",
    "parse_amount",
    "resolve_column",
    "resolve_mapping",
    "normalize_tokens",
    "matches_token",
    "EmployeeResolver",
]
