"""Utility functions for ledgerclose."""

from ledgerclose.utils.date_parser import parse_date, fiscal_year_bounds
from ledgerclose.utils.money import to_money, to_cents, from_cents

__all__ = [
    "parse_date",
    "fiscal_year_bounds",
    "to_money",
    "to_cents",
    "from_cents",
]
