"""Tests for Database interface returning domain models."""

from datetime import date
from decimal import Decimal

import pytest

from invoicekit.database.factories import resolve_database_path
from invoicekit.domain import entities
from invoicekit.domain.entities import InvoiceStatus
from invoicekit.domain.settings import DEFAULT_COMPANY_SETTINGS


class TestDatabaseInterface:
    """Tests to verify Database interface returns domain models."""

    def test_create_and_get_invoice(self, temp_db, full_invoice):
        """Test that get_invoice returns a domain Invoice entity."""
        invoice_id = temp_db.create_invoice(full_invoice)

        invoice = temp_db.get_invoice(invoice_id)

        assert isinstance(invoice, entities.Invoice)
        assert invoice.id == "abc123"
        assert invoice.invoice_number == "INV-2024-042"
        assert invoice.status == InvoiceStatus.PARTIAL
        assert invoice.issue_date == date(2024, 5, 6)
        assert len(invoice.items) == 2
        assert all(isinstance(item, entities.LineItem) for item in invoice.items)
        assert invoice.financial.total == Decimal("1936")
        assert invoice.financial.balance == Decimal("1436")
        assert invoice.billing_details.kvk_number == "12345678"

    def test_get_missing_invoice(self, temp_db):
        assert temp_db.get_invoice("nope") is None
        assert temp_db.get_invoice_by_number("nope") is None

    def test_get_invoice_by_number(self, temp_db, make_invoice):
        temp_db.create_invoice(make_invoice("INV-7"))

        invoice = temp_db.get_invoice_by_number("INV-7")

        assert isinstance(invoice, entities.Invoice)
        assert invoice.id == "id-INV-7"

    def test_duplicate_id_rejected(self, temp_db, make_invoice):
        temp_db.create_invoice(make_invoice("INV-1"))

        with pytest.raises(ValueError, match="already exists"):
            temp_db.create_invoice(make_invoice("INV-1"))

    def test_list_invoices_ordered_and_filtered(self, temp_db, make_invoice):
        """Test listing orders by issue date and filters by status."""
        temp_db.create_invoice(make_invoice("INV-2", issue_date=date(2024, 3, 1)))
        temp_db.create_invoice(
            make_invoice("INV-1", status=InvoiceStatus.DRAFT, issue_date=date(2024, 1, 1))
        )

        invoices = temp_db.list_invoices()
        drafts = temp_db.list_invoices(status=InvoiceStatus.DRAFT)

        assert [inv.invoice_number for inv in invoices] == ["INV-1", "INV-2"]
        assert [inv.invoice_number for inv in drafts] == ["INV-1"]

    def test_update_invoice_status(self, temp_db, make_invoice):
        temp_db.create_invoice(make_invoice("INV-1"))

        temp_db.update_invoice_status("id-INV-1", InvoiceStatus.PAID, date(2024, 3, 1))

        invoice = temp_db.get_invoice("id-INV-1")
        assert invoice.status == InvoiceStatus.PAID
        assert invoice.paid_date == date(2024, 3, 1)

    def test_update_missing_invoice_status(self, temp_db):
        with pytest.raises(ValueError, match="not found"):
            temp_db.update_invoice_status("nope", InvoiceStatus.PAID)

    def test_company_settings_singleton(self, temp_db):
        """Test settings are absent until saved, then replaced in place."""
        assert temp_db.get_company_settings() is None

        temp_db.save_company_settings(DEFAULT_COMPANY_SETTINGS)
        temp_db.save_company_settings(
            entities.CompanySettings(name="Other B.V.", iban="NL00TEST0123456789")
        )

        settings = temp_db.get_company_settings()
        assert isinstance(settings, entities.CompanySettings)
        assert settings.name == "Other B.V."
        assert settings.iban == "NL00TEST0123456789"
        assert settings.kvk_number == ""


class TestResolveDatabasePath:
    """Tests for choosing the SQLite file."""

    def test_explicit_path_wins(self, tmp_path, monkeypatch):
        monkeypatch.setenv("INVOICEKIT_DB_PATH", str(tmp_path / "env.db"))

        assert resolve_database_path(tmp_path / "cli.db") == str(tmp_path / "cli.db")

    def test_environment_variable(self, tmp_path, monkeypatch):
        monkeypatch.setenv("INVOICEKIT_DB_PATH", str(tmp_path / "env.db"))

        assert resolve_database_path() == str(tmp_path / "env.db")

    def test_default_under_home(self, tmp_path, monkeypatch):
        monkeypatch.delenv("INVOICEKIT_DB_PATH", raising=False)
        monkeypatch.setenv("HOME", str(tmp_path))

        path = resolve_database_path()

        assert path == str(tmp_path / ".invoicekit" / "invoicekit.db")
        assert (tmp_path / ".invoicekit").is_dir()

    def test_missing_parents_are_created(self, tmp_path):
        target = tmp_path / "a" / "b" / "store.db"

        assert resolve_database_path(str(target)) == str(target)
        assert target.parent.is_dir()

    def test_in_memory_passthrough(self):
        assert resolve_database_path(":memory:") == ":memory:"
