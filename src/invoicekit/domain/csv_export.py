"""CSV export of report view models.

Each writer emits one header row followed by one row per underlying record or
bucket, using the same formatted values as the terminal output.
"""

import csv
from datetime import date
from pathlib import Path
from typing import Optional, TextIO, Union

from invoicekit.domain.entities import AgingReport, RevenueReport, TaxPeriodReport
from invoicekit.domain.reports import days_overdue
from invoicekit.utils.formatting import format_currency, format_date_long

TAX_REPORT_HEADER = ["Factuurnummer", "Klant", "Datum", "Subtotaal", "BTW", "Totaal", "Status"]
REVENUE_REPORT_HEADER = ["Maand", "Aantal facturen", "Omzet", "Betaald", "Openstaand"]
AGING_REPORT_HEADER = ["Categorie", "Aantal", "Totaal"]
AGING_DETAIL_HEADER = [
    "Categorie",
    "Factuurnummer",
    "Klant",
    "Vervaldatum",
    "Dagen te laat",
    "Openstaand",
]


def _optional_date(value: Optional[date]) -> str:
    return format_date_long(value) if value is not None else ""


def write_tax_report(report: TaxPeriodReport, out: TextIO) -> int:
    """Write the BTW report rows. Returns number of data rows."""
    writer = csv.writer(out, lineterminator="\n")
    writer.writerow(TAX_REPORT_HEADER)
    for inv in report.invoices:
        currency = inv.currency
        fin = inv.financial
        writer.writerow(
            [
                inv.invoice_number,
                inv.recipient_name or "",
                _optional_date(inv.issue_date),
                format_currency(fin.subtotal if fin else 0, currency),
                format_currency(fin.tax if fin else 0, currency),
                format_currency(fin.total if fin else 0, currency),
                inv.status.value,
            ]
        )
    return len(report.invoices)


def write_revenue_report(report: RevenueReport, out: TextIO) -> int:
    """Write one row per month. Returns number of data rows."""
    writer = csv.writer(out, lineterminator="\n")
    writer.writerow(REVENUE_REPORT_HEADER)
    for month in report.months:
        writer.writerow(
            [
                month.month_name,
                month.invoice_count,
                format_currency(month.revenue),
                format_currency(month.paid),
                format_currency(month.outstanding),
            ]
        )
    return len(report.months)


def write_aging_report(report: AgingReport, out: TextIO) -> int:
    """Write one row per aging band. Returns number of data rows."""
    writer = csv.writer(out, lineterminator="\n")
    writer.writerow(AGING_REPORT_HEADER)
    for bucket in report.buckets:
        writer.writerow([bucket.label, bucket.count, format_currency(bucket.total)])
    return len(report.buckets)


def write_aging_detail(report: AgingReport, out: TextIO) -> int:
    """Write one row per invoice, grouped by band. Returns number of data rows."""
    writer = csv.writer(out, lineterminator="\n")
    writer.writerow(AGING_DETAIL_HEADER)
    rows = 0
    for bucket in report.buckets:
        for inv in bucket.invoices:
            days = days_overdue(inv, report.as_of)
            writer.writerow(
                [
                    bucket.label,
                    inv.invoice_number,
                    inv.recipient_name or "",
                    _optional_date(inv.due_date),
                    "" if days is None else days,
                    format_currency(inv.outstanding_amount, inv.currency),
                ]
            )
            rows += 1
    return rows


def default_filename(
    report: Union[TaxPeriodReport, RevenueReport, AgingReport]
) -> str:
    """Return the conventional export file name for a report."""
    if isinstance(report, TaxPeriodReport):
        return f"btw-rapport-{report.year}-Q{report.quarter}.csv"
    if isinstance(report, RevenueReport):
        return f"omzet-rapport-{report.year}.csv"
    return f"debiteuren-ouderdom-{report.as_of.isoformat()}.csv"


def export_report(
    report: Union[TaxPeriodReport, RevenueReport, AgingReport],
    path: Union[str, Path],
    detail: bool = False,
) -> int:
    """Write a report to a CSV file.

    Args:
        report: Report view model
        path: Destination file; a directory gets the default file name
        detail: For aging reports, write one row per invoice instead of per band

    Returns:
        Number of data rows written
    """
    target = Path(path)
    if target.is_dir():
        target = target / default_filename(report)

    with open(target, "w", newline="", encoding="utf-8") as out:
        if isinstance(report, TaxPeriodReport):
            return write_tax_report(report, out)
        if isinstance(report, RevenueReport):
            return write_revenue_report(report, out)
        if detail:
            return write_aging_detail(report, out)
        return write_aging_report(report, out)
