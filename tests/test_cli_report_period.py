"""Tests for CLI report period helpers."""

from datetime import date

import click
import pytest

from invoicekit.cli.report_period import resolve_as_of, resolve_tax_period, resolve_year


def _ctx() -> click.Context:
    return click.Context(click.Command("test"))


def test_resolve_tax_period_defaults_to_current_quarter():
    year, quarter = resolve_tax_period(
        _ctx(), year=None, quarter=None, today=date(2024, 8, 14)
    )

    assert (year, quarter) == (2024, 3)


def test_resolve_tax_period_explicit_values():
    assert resolve_tax_period(
        _ctx(), year=2023, quarter=4, today=date(2024, 8, 14)
    ) == (2023, 4)


def test_resolve_tax_period_partial_override():
    assert resolve_tax_period(
        _ctx(), year=2022, quarter=None, today=date(2024, 2, 1)
    ) == (2022, 1)


def test_resolve_tax_period_last_quarter():
    assert resolve_tax_period(
        _ctx(), year=None, quarter=None, last_quarter=True, today=date(2024, 5, 1)
    ) == (2024, 1)


def test_resolve_tax_period_last_quarter_wraps_year():
    assert resolve_tax_period(
        _ctx(), year=None, quarter=None, last_quarter=True, today=date(2024, 1, 15)
    ) == (2023, 4)


def test_resolve_tax_period_rejects_last_quarter_with_explicit(capsys):
    with pytest.raises(click.exceptions.Exit) as excinfo:
        resolve_tax_period(_ctx(), year=2024, quarter=None, last_quarter=True)

    assert excinfo.value.exit_code == 1
    err = capsys.readouterr().err
    assert "cannot be combined" in err


def test_resolve_year():
    assert resolve_year(2021, today=date(2024, 1, 1)) == 2021
    assert resolve_year(None, today=date(2024, 1, 1)) == 2024


def test_resolve_as_of_empty():
    assert resolve_as_of(_ctx(), None) is None
    assert resolve_as_of(_ctx(), "") is None


def test_resolve_as_of_parses_date():
    assert resolve_as_of(_ctx(), "2024-06-30") == date(2024, 6, 30)


def test_resolve_as_of_rejects_invalid(capsys):
    with pytest.raises(click.exceptions.Exit) as excinfo:
        resolve_as_of(_ctx(), "not a date")

    assert excinfo.value.exit_code == 1
    err = capsys.readouterr().err
    assert "Invalid as-of date" in err
