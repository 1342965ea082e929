"""Tests for amount parsing."""

import pytest
from decimal import Decimal

from invoicekit.utils.amount_parser import parse_amount


@pytest.mark.parametrize(
    "raw, expected",
    [
        (121, Decimal("121")),
        (12.5, Decimal("12.5")),
        (Decimal("7.25"), Decimal("7.25")),
        ("123.45", Decimal("123.45")),
        ("-123.45", Decimal("-123.45")),
        ("€ 1.234,56", Decimal("1234.56")),
        ("1,234.56", Decimal("1234.56")),
        ("12,50", Decimal("12.50")),
        ("1.234.567", Decimal("1234567")),
        ("(12.50)", Decimal("-12.50")),
        ("EUR 99", Decimal("99")),
    ],
)
def test_parse_amount(raw, expected):
    """Test supported amount notations."""
    assert parse_amount(raw) == expected


def test_float_is_exact_decimal():
    """Test floats are converted via their repr, not binary expansion."""
    assert parse_amount(0.1) == Decimal("0.1")


@pytest.mark.parametrize("raw", [None, "", "   ", "abc", True, "NaN"])
def test_parse_amount_invalid(raw):
    """Test invalid amounts raise ValueError."""
    with pytest.raises(ValueError):
        parse_amount(raw)
