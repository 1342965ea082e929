"""Company settings domain service."""

import dataclasses
import logging
from decimal import Decimal, InvalidOperation
from typing import Any

from invoicekit.database.base import Database
from invoicekit.domain.entities import CompanySettings
from invoicekit.domain.errors import ValidationError, unknown_settings_field

logger = logging.getLogger("invoicekit.domain.settings")

DEFAULT_COMPANY_SETTINGS = CompanySettings(
    name="GroeimetAI",
    legal_name="GroeimetAI B.V.",
    email="info@groeimetai.io",
    phone="+31 (0) 20 123 4567",
    website="www.groeimetai.io",
    kvk_number="",
    btw_number="",
    street="",
    postal_code="",
    city="Amsterdam",
    country="Nederland",
    bank_name="ABN AMRO",
    iban="",
    bic="ABNANL2A",
    default_payment_terms_days=30,
    default_tax_rate=Decimal("21"),
    invoice_prefix="INV",
)

SETTINGS_FIELDS = [f.name for f in dataclasses.fields(CompanySettings)]


def _coerce_field(field_name: str, value: str) -> Any:
    if field_name == "default_payment_terms_days":
        try:
            days = int(value)
        except ValueError:
            raise ValidationError(f"Payment terms must be a whole number of days, got '{value}'")
        if days < 0:
            raise ValidationError("Payment terms cannot be negative")
        return days
    if field_name == "default_tax_rate":
        try:
            rate = Decimal(value)
        except InvalidOperation:
            raise ValidationError(f"Tax rate must be a number, got '{value}'")
        if not rate.is_finite() or rate < 0:
            raise ValidationError(f"Tax rate must be a non-negative number, got '{value}'")
        return rate
    if field_name == "name" and not value.strip():
        raise ValidationError("Company name cannot be empty")
    return value.strip()


class CompanySettingsService:
    """Service for reading and updating the company settings singleton."""

    def __init__(self, db: Database):
        """Initialize settings service.

        Args:
            db: Database instance
        """
        self.db = db

    def get_company_settings(self) -> CompanySettings:
        """Return stored settings, or the embedded defaults if none are stored."""
        settings = self.db.get_company_settings()
        if settings is None:
            logger.debug("No stored company settings; using defaults")
            return DEFAULT_COMPANY_SETTINGS
        return settings

    def save_company_settings(self, settings: CompanySettings) -> None:
        """Persist the full settings record."""
        self.db.save_company_settings(settings)

    def update_field(self, field_name: str, value: str) -> CompanySettings:
        """Update a single settings field.

        Args:
            field_name: CompanySettings attribute name
            value: New value as text; numeric fields are converted

        Returns:
            The updated settings

        Raises:
            ValidationError: If the field is unknown or the value is invalid
        """
        if field_name not in SETTINGS_FIELDS:
            raise ValidationError(unknown_settings_field(field_name, SETTINGS_FIELDS))
        current = self.get_company_settings()
        updated = dataclasses.replace(current, **{field_name: _coerce_field(field_name, value)})
        self.save_company_settings(updated)
        return updated
