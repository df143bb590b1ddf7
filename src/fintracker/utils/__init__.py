"""Utility functions for fintracker."""

from fintracker.utils.date_parser import parse_date, parse_datetime, get_date_range
from fintracker.utils.amount_parser import parse_amount
from fintracker.utils.currency import format_indian_number, format_indian_rupee

__all__ = [
    "parse_date",
    "parse_datetime",
    "get_date_range",
    "parse_amount",
    "format_indian_number",
    "format_indian_rupee",
]
