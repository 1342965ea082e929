"""Shared pytest fixtures for invoicekit tests."""

import json
import tempfile
import os
from datetime import date
from decimal import Decimal
import pytest

from invoicekit.database.factories import create_sqlite_database
from invoicekit.domain.entities import (
    BillingDetails,
    FinancialSummary,
    Invoice,
    InvoiceStatus,
    LineItem,
)
from invoicekit.domain.invoice import InvoiceService
from invoicekit.domain.reports import ReportService
from invoicekit.domain.settings import CompanySettingsService


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    # Create a temporary file for the database
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    # Create database
    db = create_sqlite_database(database_path=db_path)
    # Store the path for tests that need it
    db.database_path = db_path
    db.connect()
    db.initialize_schema()

    yield db

    # Cleanup
    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def invoice_service(temp_db):
    """Create an InvoiceService with a temporary database."""
    return InvoiceService(temp_db)


@pytest.fixture
def report_service(temp_db):
    """Create a ReportService with a temporary database."""
    return ReportService(temp_db)


@pytest.fixture
def settings_service(temp_db):
    """Create a CompanySettingsService with a temporary database."""
    return CompanySettingsService(temp_db)


def build_invoice(
    number: str = "INV-2024-001",
    status: InvoiceStatus = InvoiceStatus.SENT,
    issue_date: date | None = date(2024, 2, 1),
    due_date: date | None = date(2024, 3, 2),
    total: str | None = "121.00",
    paid: str = "0",
    balance: str | None = None,
    **overrides,
) -> Invoice:
    """Build an invoice whose financial block is derived from ``total`` (21% BTW)."""
    financial = None
    if total is not None:
        total_dec = Decimal(total)
        subtotal = (total_dec / Decimal("1.21")).quantize(Decimal("0.01"))
        financial = FinancialSummary(
            subtotal=subtotal,
            tax=total_dec - subtotal,
            total=total_dec,
            paid=Decimal(paid),
            balance=Decimal(balance) if balance is not None else None,
        )
    fields = dict(
        id=f"id-{number}",
        invoice_number=number,
        status=status,
        issue_date=issue_date,
        due_date=due_date,
        financial=financial,
        client_name="Acme B.V.",
    )
    fields.update(overrides)
    return Invoice(**fields)


@pytest.fixture
def make_invoice():
    """Factory fixture for Invoice entities."""
    return build_invoice


@pytest.fixture
def full_invoice():
    """An invoice with items, discount, extended billing details and a partial payment."""
    return Invoice(
        id="abc123",
        invoice_number="INV-2024-042",
        status=InvoiceStatus.PARTIAL,
        issue_date=date(2024, 5, 6),
        due_date=date(2024, 6, 5),
        items=(
            LineItem(
                description="AI strategie workshop",
                quantity=Decimal("2"),
                unit_price=Decimal("750.00"),
                tax=Decimal("315.00"),
                total=Decimal("1815.00"),
            ),
            LineItem(
                description="Implementatie begeleiding",
                quantity=Decimal("1.5"),
                unit_price=Decimal("100.00"),
                tax=Decimal("31.50"),
                total=Decimal("181.50"),
            ),
        ),
        financial=FinancialSummary(
            subtotal=Decimal("1650.00"),
            discount=Decimal("50.00"),
            tax=Decimal("336.00"),
            total=Decimal("1936.00"),
            paid=Decimal("500.00"),
            balance=Decimal("1436.00"),
        ),
        billing_details=BillingDetails(
            street="Keizersgracht 1",
            postal_code="1015 AA",
            city="Amsterdam",
            country="Nederland",
            company_name="Acme B.V.",
            contact_name="J. de Vries",
            kvk_number="12345678",
            btw_number="NL123456789B01",
            email="finance@acme.nl",
        ),
    )


def invoice_record(number: str = "INV-2024-001", **overrides) -> dict:
    """A document-store style invoice record (camelCase keys)."""
    record = {
        "id": f"doc-{number}",
        "invoiceNumber": number,
        "status": "sent",
        "issueDate": "2024-02-01",
        "dueDate": "2024-03-02T00:00:00Z",
        "clientName": "Acme B.V.",
        "items": [
            {
                "description": "Consultancy",
                "quantity": 1,
                "unitPrice": 100,
                "tax": 21,
                "total": 121,
            }
        ],
        "financial": {
            "subtotal": 100,
            "discount": 0,
            "tax": 21,
            "total": 121,
            "paid": 0,
            "currency": "EUR",
        },
        "billingAddress": {
            "street": "Damrak 1",
            "postalCode": "1012 LG",
            "city": "Amsterdam",
            "country": "Nederland",
        },
    }
    record.update(overrides)
    return record


@pytest.fixture
def make_record():
    """Factory fixture for document-store invoice records."""
    return invoice_record


@pytest.fixture
def invoices_json(tmp_path):
    """Write a JSON export with three invoices and return its path."""
    records = [
        invoice_record("INV-2024-001"),
        invoice_record("INV-2024-002", status="paid", paidDate="2024-02-20"),
        invoice_record("INV-2024-003", status="draft", issueDate="2024-04-10"),
    ]
    path = tmp_path / "invoices.json"
    path.write_text(json.dumps(records), encoding="utf-8")
    return path


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()
