"""Tests for report CSV export."""

import csv
import io
from datetime import date, timedelta
from decimal import Decimal

from invoicekit.domain.csv_export import (
    AGING_DETAIL_HEADER,
    AGING_REPORT_HEADER,
    REVENUE_REPORT_HEADER,
    TAX_REPORT_HEADER,
    default_filename,
    export_report,
    write_aging_detail,
    write_aging_report,
    write_revenue_report,
    write_tax_report,
)
from invoicekit.domain.entities import InvoiceStatus
from invoicekit.domain.reports import aging_report, monthly_revenue_report, tax_period_report

from conftest import build_invoice

AS_OF = date(2024, 6, 30)


def _rows(text: str) -> list[list[str]]:
    return list(csv.reader(io.StringIO(text)))


def _sample_invoices():
    return [
        build_invoice("INV-1", issue_date=date(2024, 1, 15), total="1210.00",
                      due_date=AS_OF - timedelta(days=45)),
        build_invoice("INV-2", status=InvoiceStatus.PAID, issue_date=date(2024, 2, 3),
                      total="121.00", paid="121.00"),
        build_invoice("INV-3", issue_date=date(2024, 5, 1), total="60.50",
                      due_date=AS_OF + timedelta(days=5)),
    ]


def test_write_tax_report():
    """Test one header row plus one row per invoice with formatted values."""
    report = tax_period_report(_sample_invoices(), 2024, 1)
    out = io.StringIO()

    count = write_tax_report(report, out)

    rows = _rows(out.getvalue())
    assert count == 2
    assert rows[0] == TAX_REPORT_HEADER
    assert rows[1] == [
        "INV-1", "Acme B.V.", "15 januari 2024", "€ 1.000,00", "€ 210,00", "€ 1.210,00", "sent",
    ]
    assert rows[2][0] == "INV-2"
    assert rows[2][-1] == "paid"


def test_write_revenue_report():
    """Test one row per month, all twelve months present."""
    report = monthly_revenue_report(_sample_invoices(), 2024)
    out = io.StringIO()

    count = write_revenue_report(report, out)

    rows = _rows(out.getvalue())
    assert count == 12
    assert rows[0] == REVENUE_REPORT_HEADER
    assert rows[1] == ["januari", "1", "€ 1.210,00", "€ 0,00", "€ 1.210,00"]
    assert rows[2] == ["februari", "1", "€ 121,00", "€ 121,00", "€ 0,00"]
    assert rows[12][0] == "december"


def test_write_aging_report():
    """Test one row per band."""
    report = aging_report(_sample_invoices(), AS_OF)
    out = io.StringIO()

    count = write_aging_report(report, out)

    rows = _rows(out.getvalue())
    assert count == 5
    assert rows[0] == AGING_REPORT_HEADER
    assert rows[1] == ["Actueel", "1", "€ 60,50"]
    assert rows[3] == ["31-60 dagen", "1", "€ 1.210,00"]


def test_write_aging_detail():
    """Test one row per outstanding invoice."""
    report = aging_report(_sample_invoices(), AS_OF)
    out = io.StringIO()

    count = write_aging_detail(report, out)

    rows = _rows(out.getvalue())
    assert count == 2
    assert rows[0] == AGING_DETAIL_HEADER
    assert rows[1][:2] == ["Actueel", "INV-3"]
    assert rows[1][4] == "-5"
    assert rows[2][1] == "INV-1"
    assert rows[2][4] == "45"
    assert rows[2][5] == "€ 1.210,00"


def test_default_filenames():
    """Test conventional export file names."""
    invoices = _sample_invoices()

    assert default_filename(tax_period_report(invoices, 2024, 1)) == "btw-rapport-2024-Q1.csv"
    assert default_filename(monthly_revenue_report(invoices, 2024)) == "omzet-rapport-2024.csv"
    assert default_filename(aging_report(invoices, AS_OF)) == "debiteuren-ouderdom-2024-06-30.csv"


def test_export_report_to_directory(tmp_path):
    """Test a directory target receives the default file name."""
    report = tax_period_report(_sample_invoices(), 2024, 1)

    rows = export_report(report, tmp_path)

    target = tmp_path / "btw-rapport-2024-Q1.csv"
    assert rows == 2
    assert target.exists()
    assert target.read_text(encoding="utf-8").startswith("Factuurnummer,Klant,Datum")


def test_export_aging_detail_to_file(tmp_path):
    """Test the detail flag for aging exports."""
    target = tmp_path / "aging.csv"

    rows = export_report(aging_report(_sample_invoices(), AS_OF), target, detail=True)

    assert rows == 2
    assert _rows(target.read_text(encoding="utf-8"))[0] == AGING_DETAIL_HEADER


def test_amounts_with_grouping_are_quoted():
    """Test amounts containing commas survive the CSV round trip."""
    report = monthly_revenue_report(
        [build_invoice("big", issue_date=date(2024, 3, 1), total="1234567.89")], 2024
    )
    out = io.StringIO()
    write_revenue_report(report, out)

    assert '"€ 1.234.567,89"' in out.getvalue()
    assert _rows(out.getvalue())[3][2] == "€ 1.234.567,89"
    assert Decimal("1234567.89") == report.total_revenue
