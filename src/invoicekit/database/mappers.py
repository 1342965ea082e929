"""Mapper functions to convert between domain models and SQLAlchemy models.

This layer isolates the conversion logic, so the flat column layout of the
invoice table never leaks into reporting or rendering code.
"""

import dataclasses
from decimal import Decimal

from invoicekit.domain import entities as domain
from invoicekit.database.models import (
    Invoice as ORMInvoice,
    InvoiceItem as ORMInvoiceItem,
    CompanySettings as ORMCompanySettings,
    SETTINGS_ROW_ID,
)


def _decimal(value) -> Decimal:
    return Decimal(value) if value is not None else domain.ZERO


def invoice_item_to_domain(orm_item: ORMInvoiceItem) -> domain.LineItem:
    """Convert SQLAlchemy InvoiceItem model to domain LineItem entity."""
    return domain.LineItem(
        description=orm_item.description or "",
        quantity=_decimal(orm_item.quantity),
        unit_price=_decimal(orm_item.unit_price),
        tax=_decimal(orm_item.tax),
        total=_decimal(orm_item.total),
    )


def invoice_to_domain(orm_invoice: ORMInvoice) -> domain.Invoice:
    """Convert SQLAlchemy Invoice model to domain Invoice entity."""
    financial = None
    if orm_invoice.has_financial:
        financial = domain.FinancialSummary(
            subtotal=_decimal(orm_invoice.subtotal),
            discount=_decimal(orm_invoice.discount),
            tax=_decimal(orm_invoice.tax),
            total=_decimal(orm_invoice.total),
            paid=_decimal(orm_invoice.paid),
            balance=Decimal(orm_invoice.balance) if orm_invoice.balance is not None else None,
            currency=orm_invoice.currency or "EUR",
        )

    billing_details = None
    if orm_invoice.has_billing_details:
        billing_details = domain.BillingDetails(
            street=orm_invoice.billing_street or "",
            postal_code=orm_invoice.billing_postal_code or "",
            city=orm_invoice.billing_city or "",
            country=orm_invoice.billing_country or "",
            company_name=orm_invoice.billing_company_name,
            contact_name=orm_invoice.billing_contact_name,
            kvk_number=orm_invoice.billing_kvk_number,
            btw_number=orm_invoice.billing_btw_number,
            email=orm_invoice.billing_email,
        )

    billing_address = None
    if orm_invoice.has_billing_address:
        billing_address = domain.Address(
            street=orm_invoice.address_street or "",
            postal_code=orm_invoice.address_postal_code or "",
            city=orm_invoice.address_city or "",
            state=orm_invoice.address_state or "",
            country=orm_invoice.address_country or "",
        )

    return domain.Invoice(
        id=orm_invoice.id,
        invoice_number=orm_invoice.invoice_number,
        status=domain.InvoiceStatus(orm_invoice.status),
        issue_date=orm_invoice.issue_date,
        due_date=orm_invoice.due_date,
        paid_date=orm_invoice.paid_date,
        items=tuple(invoice_item_to_domain(item) for item in orm_invoice.items),
        financial=financial,
        billing_details=billing_details,
        billing_address=billing_address,
        client_name=orm_invoice.client_name,
    )


def invoice_to_orm(invoice: domain.Invoice) -> ORMInvoice:
    """Convert domain Invoice entity to a new SQLAlchemy Invoice model."""
    orm_invoice = ORMInvoice(
        id=invoice.id,
        invoice_number=invoice.invoice_number,
        client_name=invoice.client_name,
        status=invoice.status.value,
        issue_date=invoice.issue_date,
        due_date=invoice.due_date,
        paid_date=invoice.paid_date,
        has_financial=invoice.financial is not None,
        has_billing_details=invoice.billing_details is not None,
        has_billing_address=invoice.billing_address is not None,
    )

    fin = invoice.financial
    if fin is not None:
        orm_invoice.subtotal = fin.subtotal
        orm_invoice.discount = fin.discount
        orm_invoice.tax = fin.tax
        orm_invoice.total = fin.total
        orm_invoice.paid = fin.paid
        orm_invoice.balance = fin.balance
        orm_invoice.currency = fin.currency

    details = invoice.billing_details
    if details is not None:
        orm_invoice.billing_company_name = details.company_name
        orm_invoice.billing_contact_name = details.contact_name
        orm_invoice.billing_kvk_number = details.kvk_number
        orm_invoice.billing_btw_number = details.btw_number
        orm_invoice.billing_email = details.email
        orm_invoice.billing_street = details.street
        orm_invoice.billing_postal_code = details.postal_code
        orm_invoice.billing_city = details.city
        orm_invoice.billing_country = details.country

    address = invoice.billing_address
    if address is not None:
        orm_invoice.address_street = address.street
        orm_invoice.address_postal_code = address.postal_code
        orm_invoice.address_city = address.city
        orm_invoice.address_state = address.state
        orm_invoice.address_country = address.country

    orm_invoice.items = [
        ORMInvoiceItem(
            position=position,
            description=item.description,
            quantity=item.quantity,
            unit_price=item.unit_price,
            tax=item.tax,
            total=item.total,
        )
        for position, item in enumerate(invoice.items)
    ]
    return orm_invoice


def company_settings_to_domain(orm_settings: ORMCompanySettings) -> domain.CompanySettings:
    """Convert SQLAlchemy CompanySettings model to domain CompanySettings entity."""
    values = {
        field.name: getattr(orm_settings, field.name)
        for field in dataclasses.fields(domain.CompanySettings)
    }
    values["default_tax_rate"] = _decimal(values["default_tax_rate"])
    return domain.CompanySettings(**values)


def company_settings_to_orm(
    settings: domain.CompanySettings, orm_settings: ORMCompanySettings | None = None
) -> ORMCompanySettings:
    """Copy domain settings onto an existing or new SQLAlchemy model."""
    if orm_settings is None:
        orm_settings = ORMCompanySettings(id=SETTINGS_ROW_ID)
    for field in dataclasses.fields(domain.CompanySettings):
        setattr(orm_settings, field.name, getattr(settings, field.name))
    return orm_settings
