"""Tests for the store-backed ReportService."""

from datetime import date, timedelta
from decimal import Decimal

from invoicekit.domain.entities import InvoiceStatus


def test_tax_period_report_from_store(report_service, invoice_service, make_invoice):
    """Test the BTW report is computed over stored invoices."""
    invoice_service.create_invoice(make_invoice("INV-1", issue_date=date(2024, 1, 10)))
    invoice_service.create_invoice(
        make_invoice("INV-2", status=InvoiceStatus.CANCELLED, issue_date=date(2024, 2, 10))
    )
    invoice_service.create_invoice(make_invoice("INV-3", issue_date=date(2024, 4, 10)))

    report = report_service.tax_period_report(2024, 1)

    assert report.invoice_count == 1
    assert report.total_revenue == Decimal("121.00")
    assert report.total_tax == Decimal("21.00")


def test_monthly_revenue_report_from_store(report_service, invoice_service, make_invoice):
    """Test the revenue report reflects status changes on the next call."""
    invoice_service.create_invoice(make_invoice("INV-1", issue_date=date(2024, 1, 10)))

    before = report_service.monthly_revenue_report(2024)
    invoice_service.update_status("INV-1", "paid", date(2024, 1, 20))
    after = report_service.monthly_revenue_report(2024)

    assert before.months[0].paid == Decimal("0")
    assert after.months[0].paid == Decimal("121.00")
    assert after.months[0].outstanding == Decimal("0")


def test_aging_report_from_store(report_service, invoice_service, make_invoice):
    """Test aging buckets over stored invoices."""
    as_of = date(2024, 6, 30)
    invoice_service.create_invoice(
        make_invoice("INV-1", due_date=as_of - timedelta(days=45), total="600", balance="500")
    )
    invoice_service.create_invoice(
        make_invoice("INV-2", status=InvoiceStatus.DRAFT, due_date=as_of - timedelta(days=100))
    )

    report = report_service.aging_report(as_of)

    assert report.bucket("31-60").total == Decimal("500")
    assert report.invoice_count == 1


def test_aging_report_defaults_to_today(report_service, invoice_service, make_invoice):
    """Test the reference day defaults to today."""
    invoice_service.create_invoice(make_invoice("INV-1", due_date=date.today()))

    report = report_service.aging_report()

    assert report.as_of == date.today()
    assert report.bucket("current").count == 1
