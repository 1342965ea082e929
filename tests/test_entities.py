"""Tests for domain entities."""

import dataclasses
from decimal import Decimal

import pytest

from invoicekit.domain.entities import (
    STATUS_DISPLAY,
    BadgeTone,
    BillingDetails,
    FinancialSummary,
    InvoiceStatus,
)


@pytest.mark.parametrize(
    "status,label,tone",
    [
        (InvoiceStatus.PAID, "Betaald", BadgeTone.GREEN),
        (InvoiceStatus.OVERDUE, "Verlopen", BadgeTone.RED),
        (InvoiceStatus.SENT, "Verstuurd", BadgeTone.BLUE),
        (InvoiceStatus.VIEWED, "Bekeken", BadgeTone.PURPLE),
        (InvoiceStatus.DRAFT, "Concept", BadgeTone.GRAY),
        (InvoiceStatus.CANCELLED, "Geannuleerd", BadgeTone.NEUTRAL),
        (InvoiceStatus.PARTIAL, "Deels betaald", BadgeTone.ORANGE),
    ],
)
def test_status_display(status, label, tone):
    """Test the status label and badge tone table."""
    assert STATUS_DISPLAY[status].label == label
    assert STATUS_DISPLAY[status].tone == tone


def test_status_display_is_exhaustive():
    assert set(STATUS_DISPLAY) == set(InvoiceStatus)


def test_status_is_str_enum():
    assert InvoiceStatus("partial") is InvoiceStatus.PARTIAL
    assert InvoiceStatus.PAID == "paid"


def test_outstanding_prefers_balance(make_invoice):
    """Test balance wins over total, even when zero."""
    assert make_invoice(total="121.00", balance="40.00").outstanding_amount == Decimal("40.00")
    assert make_invoice(total="121.00", balance="0").outstanding_amount == Decimal("0")


def test_outstanding_falls_back_to_total(make_invoice):
    assert make_invoice(total="121.00").outstanding_amount == Decimal("121.00")


def test_outstanding_without_financial(make_invoice):
    invoice = make_invoice(total=None)

    assert invoice.outstanding_amount == Decimal("0")
    assert invoice.total_amount == Decimal("0")
    assert invoice.currency == "EUR"


def test_currency_from_financial(make_invoice):
    invoice = make_invoice()
    usd = dataclasses.replace(
        invoice, financial=dataclasses.replace(invoice.financial, currency="USD")
    )

    assert usd.currency == "USD"


def test_recipient_name(make_invoice):
    """Test client name, then company, then contact."""
    invoice = make_invoice(client_name=None)

    assert invoice.recipient_name is None
    assert dataclasses.replace(
        invoice, billing_details=BillingDetails(company_name="Acme", contact_name="Jan")
    ).recipient_name == "Acme"
    assert dataclasses.replace(
        invoice, billing_details=BillingDetails(contact_name="Jan")
    ).recipient_name == "Jan"
    assert make_invoice().recipient_name == "Acme B.V."


def test_entities_are_frozen():
    summary = FinancialSummary(total=Decimal("10"))

    with pytest.raises(dataclasses.FrozenInstanceError):
        summary.total = Decimal("20")
