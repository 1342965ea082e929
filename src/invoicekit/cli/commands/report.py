"""Financial report commands."""

import click
from invoicekit.cli.error_handling import handle_domain_error
from invoicekit.cli.report_period import resolve_as_of, resolve_tax_period, resolve_year
from invoicekit.domain.csv_export import export_report
from invoicekit.domain.entities import STATUS_DISPLAY
from invoicekit.domain.errors import DomainError
from invoicekit.domain.reports import ReportService, days_overdue
from invoicekit.utils.formatting import format_currency, format_date_long


def _export(ctx, report, csv_path: str | None, detail: bool = False) -> None:
    if not csv_path:
        return
    try:
        rows = export_report(report, csv_path, detail=detail)
    except OSError as e:
        click.echo(f"Error: Could not write CSV: {e}", err=True)
        ctx.exit(1)
    click.echo(f"\nExported {rows} row(s) to {csv_path}")


@click.group()
def report_group():
    """Financial reports (BTW, revenue, aging)."""
    pass


@report_group.command("btw")
@click.option("--year", type=int, help="Report year (default: current year)")
@click.option("--quarter", type=int, help="Quarter 1-4 (default: current quarter)")
@click.option("--last-quarter", is_flag=True, help="Report on the previous quarter")
@click.option("--csv", "csv_path", type=click.Path(), help="Also export the report to this CSV file or directory")
@click.pass_context
def btw_report(ctx, year: int | None, quarter: int | None, last_quarter: bool, csv_path: str | None):
    """Show the quarterly BTW (VAT) report.

    Cancelled invoices are excluded. Invoices count in the quarter that
    contains their issue date.

    Examples:
        invoicekit report btw --year 2024 --quarter 1
        invoicekit report btw --last-quarter --csv ./exports/
    """
    db = ctx.obj["db"]
    service = ReportService(db)

    year, quarter = resolve_tax_period(
        ctx, year=year, quarter=quarter, last_quarter=last_quarter
    )
    try:
        report = service.tax_period_report(year, quarter)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    click.echo(
        f"\nBTW report {report.year} Q{report.quarter} "
        f"({format_date_long(report.start_date)} - {format_date_long(report.end_date)})"
    )
    click.echo("-" * 96)
    if report.invoices:
        click.echo(
            f"{'Number':<16} {'Client':<24} {'Issued':<10} {'Subtotal':>13} {'BTW':>13} {'Total':>13}"
        )
        click.echo("-" * 96)
        for inv in report.invoices:
            fin = inv.financial
            currency = inv.currency
            click.echo(
                f"{inv.invoice_number:<16} {(inv.recipient_name or '-')[:24]:<24} "
                f"{inv.issue_date.isoformat():<10} "
                f"{format_currency(fin.subtotal if fin else 0, currency):>13} "
                f"{format_currency(fin.tax if fin else 0, currency):>13} "
                f"{format_currency(fin.total if fin else 0, currency):>13}"
            )
        click.echo("-" * 96)
    else:
        click.echo("No invoices in this period.")
        click.echo("-" * 96)

    click.echo(f"{'Invoices':<50} {report.invoice_count:>20}")
    click.echo(f"{'Paid invoices':<50} {report.paid_count:>20}")
    click.echo(f"{'Subtotal':<50} {format_currency(report.total_subtotal):>20}")
    click.echo(f"{'BTW':<50} {format_currency(report.total_tax):>20}")
    click.echo(f"{'Revenue':<50} {format_currency(report.total_revenue):>20}")
    click.echo(f"{'Paid':<50} {format_currency(report.total_paid):>20}")
    click.echo(f"{'Outstanding':<50} {format_currency(report.total_outstanding):>20}")

    _export(ctx, report, csv_path)


@report_group.command("revenue")
@click.option("--year", type=int, help="Report year (default: current year)")
@click.option("--csv", "csv_path", type=click.Path(), help="Also export the report to this CSV file or directory")
@click.pass_context
def revenue_report(ctx, year: int | None, csv_path: str | None):
    """Show revenue per month for a year.

    All twelve months are listed, including months without invoices.
    """
    db = ctx.obj["db"]
    service = ReportService(db)

    report = service.monthly_revenue_report(resolve_year(year))

    click.echo(f"\nRevenue {report.year}")
    click.echo("-" * 80)
    click.echo(f"{'Month':<14} {'Invoices':>9} {'Revenue':>18} {'Paid':>18} {'Outstanding':>18}")
    click.echo("-" * 80)
    for month in report.months:
        click.echo(
            f"{month.month_name:<14} {month.invoice_count:>9} "
            f"{format_currency(month.revenue):>18} {format_currency(month.paid):>18} "
            f"{format_currency(month.outstanding):>18}"
        )
    click.echo("=" * 80)
    click.echo(
        f"{'TOTAL':<14} {report.invoice_count:>9} "
        f"{format_currency(report.total_revenue):>18} {format_currency(report.total_paid):>18} "
        f"{format_currency(report.total_outstanding):>18}"
    )

    _export(ctx, report, csv_path)


@report_group.command("aging")
@click.option("--as-of", help="Reference date (YYYY-MM-DD or relative like 'today', 'last month'; default: today)")
@click.option("--csv", "csv_path", type=click.Path(), help="Also export the report to this CSV file or directory")
@click.option("--detail", is_flag=True, help="List the invoices in each band (also applies to --csv)")
@click.pass_context
def aging_report(ctx, as_of: str | None, csv_path: str | None, detail: bool):
    """Show outstanding receivables by days overdue.

    Paid, cancelled and draft invoices are excluded.
    """
    db = ctx.obj["db"]
    service = ReportService(db)

    report = service.aging_report(resolve_as_of(ctx, as_of))

    click.echo(f"\nReceivables aging as of {format_date_long(report.as_of)}")
    click.echo("-" * 80)
    click.echo(f"{'Band':<36} {'Count':>8} {'Outstanding':>20}")
    click.echo("-" * 80)
    for bucket in report.buckets:
        click.echo(f"{bucket.range_label:<36} {bucket.count:>8} {format_currency(bucket.total):>20}")
        if detail:
            for inv in bucket.invoices:
                days = days_overdue(inv, report.as_of)
                days_str = "no due date" if days is None else f"{days} days"
                click.echo(
                    f"    {inv.invoice_number:<16} {(inv.recipient_name or '-')[:20]:<20} "
                    f"{days_str:>12} {STATUS_DISPLAY[inv.status].label:<14} "
                    f"{format_currency(inv.outstanding_amount, inv.currency):>14}"
                )
    click.echo("=" * 80)
    click.echo(
        f"{'TOTAL':<36} {report.invoice_count:>8} {format_currency(report.total_outstanding):>20}"
    )

    _export(ctx, report, csv_path, detail=detail)


def register_commands(cli):
    """Register report commands with main CLI."""
    cli.add_command(report_group, name="report")
