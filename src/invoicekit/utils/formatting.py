"""Currency and date formatting for Dutch-locale invoice output.

Month names and currency symbols are embedded tables, so output does not
depend on the host locale.
"""

from datetime import date, datetime
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Any

from invoicekit.domain.errors import FormatError

MONTH_NAMES_NL = (
    "januari",
    "februari",
    "maart",
    "april",
    "mei",
    "juni",
    "juli",
    "augustus",
    "september",
    "oktober",
    "november",
    "december",
)

# code -> (symbol, minor unit digits)
CURRENCY_INFO: dict[str, tuple[str, int]] = {
    "EUR": ("€", 2),
    "USD": ("$", 2),
    "GBP": ("£", 2),
    "CHF": ("CHF", 2),
    "JPY": ("¥", 0),
}

GROUP_SEPARATOR = "."
DECIMAL_SEPARATOR = ","


def _to_decimal(amount: Any) -> Decimal:
    if isinstance(amount, bool) or amount is None:
        raise FormatError(f"Cannot format amount {amount!r}")
    if isinstance(amount, Decimal):
        value = amount
    elif isinstance(amount, (int, float)):
        value = Decimal(str(amount))
    else:
        try:
            value = Decimal(str(amount).strip())
        except InvalidOperation:
            raise FormatError(f"Cannot format amount {amount!r}")
    if not value.is_finite():
        raise FormatError(f"Cannot format non-finite amount {amount!r}")
    return value


def _group_digits(digits: str) -> str:
    groups = []
    while len(digits) > 3:
        groups.insert(0, digits[-3:])
        digits = digits[:-3]
    groups.insert(0, digits)
    return GROUP_SEPARATOR.join(groups)


def format_currency(amount: Any, currency_code: str = "EUR") -> str:
    """Format an amount as Dutch-style currency.

    Examples:
        format_currency(Decimal("1234.5"), "EUR") -> "€ 1.234,50"
        format_currency(-12, "USD") -> "$ -12,00"

    Args:
        amount: Decimal, int, float or numeric string
        currency_code: ISO 4217 code; unknown codes are shown as-is

    Returns:
        Formatted string

    Raises:
        FormatError: If the amount is missing, not numeric, NaN or infinite
    """
    value = _to_decimal(amount)
    code = (currency_code or "EUR").upper()
    symbol, digits = CURRENCY_INFO.get(code, (code, 2))

    exponent = Decimal(1).scaleb(-digits)
    quantized = value.quantize(exponent, rounding=ROUND_HALF_UP)
    sign = "-" if quantized < 0 else ""
    text = f"{abs(quantized):.{digits}f}"
    if digits:
        whole, fraction = text.split(".")
        number = f"{_group_digits(whole)}{DECIMAL_SEPARATOR}{fraction}"
    else:
        number = _group_digits(text)
    return f"{symbol} {sign}{number}"


def format_date_long(value: Any) -> str:
    """Format a date as "D <maand> YYYY", e.g. "5 januari 2025".

    Raises:
        FormatError: If value is not a date or datetime
    """
    if isinstance(value, datetime):
        value = value.date()
    if not isinstance(value, date):
        raise FormatError(f"Cannot format date {value!r}")
    return f"{value.day} {MONTH_NAMES_NL[value.month - 1]} {value.year}"


def month_name(month: int) -> str:
    """Return the Dutch name for a 1-based month number."""
    if not 1 <= month <= 12:
        raise FormatError(f"Month must be between 1 and 12, got {month}")
    return MONTH_NAMES_NL[month - 1]


def format_quantity(quantity: Any) -> str:
    """Format a quantity without trailing zeros, using a decimal comma."""
    value = _to_decimal(quantity)
    text = format(value.normalize(), "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text.replace(".", DECIMAL_SEPARATOR) or "0"
