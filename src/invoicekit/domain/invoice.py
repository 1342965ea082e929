"""Invoice domain service and store-record parsing."""

import json
import logging
from datetime import date
from decimal import Decimal
from pathlib import Path
from typing import Any, Optional, Union

from invoicekit.database.base import Database
from invoicekit.domain.entities import (
    ZERO,
    Address,
    BillingDetails,
    FinancialSummary,
    Invoice,
    InvoiceStatus,
    LineItem,
)
from invoicekit.domain.errors import (
    ConflictError,
    NotFoundError,
    ValidationError,
    duplicate_invoice_number,
    invoice_not_found,
    unknown_status,
)
from invoicekit.utils.amount_parser import parse_amount
from invoicekit.utils.date_parser import coerce_date

logger = logging.getLogger("invoicekit.domain.invoice")


def parse_status(value: Union[str, InvoiceStatus]) -> InvoiceStatus:
    """Convert a status string to InvoiceStatus.

    Raises:
        ValidationError: If the status is not recognised
    """
    if isinstance(value, InvoiceStatus):
        return value
    try:
        return InvoiceStatus(str(value).strip().lower())
    except ValueError:
        raise ValidationError(unknown_status(str(value)))


def _amount(data: dict[str, Any], key: str, default: Optional[Decimal] = ZERO) -> Optional[Decimal]:
    value = data.get(key)
    if value is None or value == "":
        return default
    try:
        return parse_amount(value)
    except ValueError as e:
        raise ValidationError(f"Invalid {key}: {e}")


def _date(data: dict[str, Any], key: str) -> Optional[date]:
    try:
        return coerce_date(data.get(key))
    except ValueError as e:
        raise ValidationError(f"Invalid {key}: {e}")


def _text(data: dict[str, Any], key: str) -> Optional[str]:
    value = data.get(key)
    if value is None:
        return None
    value = str(value).strip()
    return value or None


def _mapping(value: Any, what: str) -> Optional[dict[str, Any]]:
    if not value:
        return None
    if not isinstance(value, dict):
        raise ValidationError(f"{what} must be an object, got {type(value).__name__}")
    return value


def _parse_item(data: Any) -> LineItem:
    data = _mapping(data, "Line item") or {}
    return LineItem(
        description=str(data.get("description") or ""),
        quantity=_amount(data, "quantity"),
        unit_price=_amount(data, "unitPrice"),
        tax=_amount(data, "tax"),
        total=_amount(data, "total"),
    )


def _parse_financial(data: Any) -> Optional[FinancialSummary]:
    data = _mapping(data, "'financial'")
    if not data:
        return None
    return FinancialSummary(
        subtotal=_amount(data, "subtotal"),
        discount=_amount(data, "discount"),
        tax=_amount(data, "tax"),
        total=_amount(data, "total"),
        paid=_amount(data, "paid"),
        balance=_amount(data, "balance", default=None),
        currency=(_text(data, "currency") or "EUR").upper(),
    )


def _parse_billing_details(data: Any) -> Optional[BillingDetails]:
    data = _mapping(data, "'billingDetails'")
    if not data:
        return None
    return BillingDetails(
        street=_text(data, "street") or "",
        postal_code=_text(data, "postalCode") or "",
        city=_text(data, "city") or "",
        country=_text(data, "country") or "",
        company_name=_text(data, "companyName"),
        contact_name=_text(data, "contactName"),
        kvk_number=_text(data, "kvkNumber"),
        btw_number=_text(data, "btwNumber"),
        email=_text(data, "email"),
    )


def _parse_address(data: Any) -> Optional[Address]:
    data = _mapping(data, "'billingAddress'")
    if not data:
        return None
    return Address(
        street=_text(data, "street") or "",
        postal_code=_text(data, "postalCode") or "",
        city=_text(data, "city") or "",
        state=_text(data, "state") or "",
        country=_text(data, "country") or "",
    )


def parse_invoice_record(data: dict[str, Any]) -> Invoice:
    """Build an Invoice from a document-store record (camelCase keys).

    Args:
        data: Record as exported from the invoice collection

    Returns:
        Invoice entity

    Raises:
        ValidationError: If required fields are missing or malformed
    """
    if not isinstance(data, dict):
        raise ValidationError(f"Invoice record must be an object, got {type(data).__name__}")
    items = data.get("items") or []
    if not isinstance(items, list):
        raise ValidationError("'items' must be a list")
    invoice_number = _text(data, "invoiceNumber")
    if invoice_number is None:
        raise ValidationError("Invoice record is missing 'invoiceNumber'")
    if "status" not in data:
        raise ValidationError(f"Invoice {invoice_number} is missing 'status'")

    return Invoice(
        id=_text(data, "id") or invoice_number,
        invoice_number=invoice_number,
        status=parse_status(data["status"]),
        issue_date=_date(data, "issueDate"),
        due_date=_date(data, "dueDate"),
        paid_date=_date(data, "paidDate"),
        items=tuple(_parse_item(item) for item in items),
        financial=_parse_financial(data.get("financial")),
        billing_details=_parse_billing_details(data.get("billingDetails")),
        billing_address=_parse_address(data.get("billingAddress")),
        client_name=_text(data, "clientName"),
    )


class InvoiceService:
    """Service for reading and importing invoices."""

    def __init__(self, db: Database):
        """Initialize invoice service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_invoice(self, invoice: Invoice) -> str:
        """Store a new invoice.

        Returns:
            Invoice ID

        Raises:
            ConflictError: If the invoice number or ID is already taken
        """
        if self.db.get_invoice_by_number(invoice.invoice_number) is not None:
            raise ConflictError(duplicate_invoice_number(invoice.invoice_number))
        if self.db.get_invoice(invoice.id) is not None:
            raise ConflictError(f"Invoice with ID '{invoice.id}' already exists")
        return self.db.create_invoice(invoice)

    def get_invoice(self, invoice_ref: str) -> Invoice:
        """Get an invoice by number, falling back to its ID.

        Raises:
            NotFoundError: If neither lookup matches
        """
        invoice = self.db.get_invoice_by_number(invoice_ref)
        if invoice is None:
            invoice = self.db.get_invoice(invoice_ref)
        if invoice is None:
            raise NotFoundError(invoice_not_found(invoice_ref))
        return invoice

    def list_invoices(self, status: Optional[InvoiceStatus] = None) -> list[Invoice]:
        """List invoices, optionally filtered by status."""
        return self.db.list_invoices(status=status)

    def update_status(
        self,
        invoice_ref: str,
        status: Union[str, InvoiceStatus],
        paid_date: Optional[date] = None,
    ) -> Invoice:
        """Change an invoice status, recording a paid date when given."""
        invoice = self.get_invoice(invoice_ref)
        new_status = parse_status(status)
        if new_status == InvoiceStatus.PAID and paid_date is None:
            paid_date = date.today()
        self.db.update_invoice_status(invoice.id, new_status, paid_date)
        return self.get_invoice(invoice.id)

    def import_records(self, records: list[dict[str, Any]]) -> dict[str, Any]:
        """Import store records.

        Returns:
            Dict with import statistics:
            - imported: number of invoices stored
            - skipped: number of records whose invoice number already exists
            - errors: list of error messages for rejected records
        """
        imported = 0
        skipped = 0
        errors: list[str] = []

        for index, record in enumerate(records, start=1):
            try:
                invoice = parse_invoice_record(record)
            except ValidationError as e:
                errors.append(f"Record {index}: {e}")
                continue
            try:
                self.create_invoice(invoice)
            except ConflictError:
                logger.info("Skipping existing invoice %s", invoice.invoice_number)
                skipped += 1
                continue
            imported += 1

        return {"imported": imported, "skipped": skipped, "errors": errors}

    def import_file(self, path: Union[str, Path]) -> dict[str, Any]:
        """Import a JSON file holding a list of records (or {"invoices": [...]}).

        Raises:
            ValidationError: If the file is not valid JSON or has the wrong shape
            FileNotFoundError: If the file does not exist
        """
        with open(path, encoding="utf-8") as f:
            try:
                payload = json.load(f)
            except json.JSONDecodeError as e:
                raise ValidationError(f"Invalid JSON in {path}: {e}")

        if isinstance(payload, dict):
            payload = payload.get("invoices")
        if not isinstance(payload, list):
            raise ValidationError(f"{path} must contain a list of invoice records")
        return self.import_records(payload)
