"""Amount parsing utilities."""

from decimal import Decimal, InvalidOperation
import re
from typing import Any


def _normalize_separators(amount_str: str) -> str:
    """Rewrite grouping/decimal separators to plain "1234.56" form."""
    has_dot = "." in amount_str
    has_comma = "," in amount_str

    if has_dot and has_comma:
        # Whichever separator comes last is the decimal separator
        if amount_str.rfind(",") > amount_str.rfind("."):
            return amount_str.replace(".", "").replace(",", ".")
        return amount_str.replace(",", "")

    if has_comma:
        head, _, tail = amount_str.rpartition(",")
        if amount_str.count(",") == 1 and 1 <= len(tail) <= 2:
            return f"{head}.{tail}"
        return amount_str.replace(",", "")

    if has_dot and amount_str.count(".") > 1:
        return amount_str.replace(".", "")

    return amount_str


def parse_amount(amount: Any) -> Decimal:
    """Parse an amount into a Decimal.

    Handles numbers and various string formats:
    - 123.45 / Decimal("123.45")
    - "123.45", "-123.45"
    - "€ 1.234,56" (Dutch grouping)
    - "1,234.56" (English grouping)
    - "(123.45)" (negative in parentheses)

    Args:
        amount: Number or amount string

    Returns:
        Decimal amount

    Raises:
        ValueError: If the amount cannot be parsed
    """
    if isinstance(amount, bool):
        raise ValueError(f"Could not parse amount {amount!r}")
    if isinstance(amount, Decimal):
        return amount
    if isinstance(amount, int):
        return Decimal(amount)
    if isinstance(amount, float):
        return Decimal(str(amount))
    if amount is None:
        raise ValueError("Empty amount")

    amount_str = str(amount).strip()
    if not amount_str:
        raise ValueError("Empty amount string")

    # Handle parentheses notation (negative)
    is_negative = False
    if amount_str.startswith("(") and amount_str.endswith(")"):
        is_negative = True
        amount_str = amount_str[1:-1]

    # Remove currency symbols and codes
    amount_str = re.sub(r"[$€£¥]|EUR|USD|GBP", "", amount_str)
    amount_str = re.sub(r"\s+", "", amount_str)
    amount_str = _normalize_separators(amount_str)

    try:
        value = Decimal(amount_str)
    except InvalidOperation as e:
        raise ValueError(f"Could not parse amount '{amount}': {e!r}")
    if not value.is_finite():
        raise ValueError(f"Could not parse amount '{amount}': not a finite number")
    return -value if is_negative else value
