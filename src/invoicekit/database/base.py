"""Abstract database interface."""

from abc import ABC, abstractmethod
from datetime import date
from typing import Optional

# Import entities directly to avoid circular import through domain services
from invoicekit.domain.entities import CompanySettings, Invoice, InvoiceStatus


class Database(ABC):
    """Abstract database interface for invoicekit.

    Stands in for the invoice document collection and the company settings
    singleton; reporting and rendering only ever read from it.
    """

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        pass

    # Invoice operations
    @abstractmethod
    def create_invoice(self, invoice: Invoice) -> str:
        """Store an invoice with its line items. Returns invoice ID."""
        pass

    @abstractmethod
    def get_invoice(self, invoice_id: str) -> Optional[Invoice]:
        """Get invoice by ID."""
        pass

    @abstractmethod
    def get_invoice_by_number(self, invoice_number: str) -> Optional[Invoice]:
        """Get invoice by its human-readable number."""
        pass

    @abstractmethod
    def list_invoices(self, status: Optional[InvoiceStatus] = None) -> list[Invoice]:
        """List invoices ordered by issue date, optionally filtered by status."""
        pass

    @abstractmethod
    def update_invoice_status(
        self, invoice_id: str, status: InvoiceStatus, paid_date: Optional[date] = None
    ) -> None:
        """Update invoice status and paid date."""
        pass

    # Company settings operations
    @abstractmethod
    def get_company_settings(self) -> Optional[CompanySettings]:
        """Get stored company settings, or None if never saved."""
        pass

    @abstractmethod
    def save_company_settings(self, settings: CompanySettings) -> None:
        """Create or replace the company settings singleton."""
        pass
