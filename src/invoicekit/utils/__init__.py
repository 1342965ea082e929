"""Utility functions for invoicekit."""

from invoicekit.utils.date_parser import parse_date
from invoicekit.utils.amount_parser import parse_amount
from invoicekit.utils.formatting import format_currency, format_date_long

__all__ = ["parse_date", "parse_amount", "format_currency", "format_date_long"]
