"""CLI helpers for report period resolution."""

from datetime import date

import click

from invoicekit.utils.date_parser import parse_date, previous_quarter, quarter_of


def resolve_tax_period(
    ctx,
    *,
    year: int | None,
    quarter: int | None,
    last_quarter: bool = False,
    today: date | None = None,
) -> tuple[int, int]:
    """Resolve the (year, quarter) of a BTW report.

    Without options the quarter containing today is used.
    """
    today = today or date.today()

    if last_quarter:
        if year is not None or quarter is not None:
            click.echo(
                "Error: --last-quarter cannot be combined with --year or --quarter.",
                err=True,
            )
            ctx.exit(1)
        return previous_quarter(today)

    return (
        year if year is not None else today.year,
        quarter if quarter is not None else quarter_of(today),
    )


def resolve_year(year: int | None, today: date | None = None) -> int:
    """Resolve the report year, defaulting to the current one."""
    return year if year is not None else (today or date.today()).year


def resolve_as_of(ctx, as_of: str | None) -> date | None:
    """Parse the --as-of option (absolute or relative like 'last month')."""
    if not as_of:
        return None
    try:
        return parse_date(as_of)
    except ValueError as e:
        click.echo(f"Error: Invalid as-of date: {e}", err=True)
        ctx.exit(1)
