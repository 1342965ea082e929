"""Tests for company settings service."""

import dataclasses
import pytest
from decimal import Decimal

from invoicekit.domain.errors import ValidationError
from invoicekit.domain.settings import DEFAULT_COMPANY_SETTINGS, SETTINGS_FIELDS


def test_defaults_when_nothing_stored(settings_service, temp_db):
    """Test the embedded default record is returned without a stored row."""
    assert temp_db.get_company_settings() is None
    assert settings_service.get_company_settings() == DEFAULT_COMPANY_SETTINGS


def test_save_and_load(settings_service):
    """Test saving the full record."""
    settings = dataclasses.replace(DEFAULT_COMPANY_SETTINGS, iban="NL91ABNA0417164300")

    settings_service.save_company_settings(settings)

    assert settings_service.get_company_settings() == settings


def test_save_twice_keeps_single_row(settings_service, temp_db):
    """Test the settings record is a singleton."""
    settings_service.save_company_settings(DEFAULT_COMPANY_SETTINGS)
    settings_service.save_company_settings(
        dataclasses.replace(DEFAULT_COMPANY_SETTINGS, name="Other")
    )

    assert temp_db.get_company_settings().name == "Other"


def test_update_text_field(settings_service):
    """Test updating a single text field starts from the defaults."""
    updated = settings_service.update_field("phone", "  +31 6 1234 5678 ")

    assert updated.phone == "+31 6 1234 5678"
    assert updated.email == DEFAULT_COMPANY_SETTINGS.email
    assert settings_service.get_company_settings() == updated


def test_update_numeric_fields(settings_service):
    """Test numeric fields are converted."""
    settings_service.update_field("default_payment_terms_days", "14")
    updated = settings_service.update_field("default_tax_rate", "9")

    assert updated.default_payment_terms_days == 14
    assert updated.default_tax_rate == Decimal("9")


@pytest.mark.parametrize(
    "field_name, value, message",
    [
        ("default_payment_terms_days", "two weeks", "whole number"),
        ("default_payment_terms_days", "-1", "negative"),
        ("default_tax_rate", "abc", "must be a number"),
        ("default_tax_rate", "-21", "non-negative"),
        ("name", "   ", "cannot be empty"),
    ],
)
def test_update_invalid_values(settings_service, field_name, value, message):
    """Test invalid values are rejected."""
    with pytest.raises(ValidationError, match=message):
        settings_service.update_field(field_name, value)


def test_update_unknown_field(settings_service):
    """Test unknown fields list the valid ones."""
    with pytest.raises(ValidationError, match="Unknown settings field 'color'"):
        settings_service.update_field("color", "orange")


def test_settings_fields_cover_record():
    """Test every settings attribute can be updated."""
    assert "iban" in SETTINGS_FIELDS
    assert "invoice_prefix" in SETTINGS_FIELDS
    assert len(SETTINGS_FIELDS) == len(dataclasses.fields(DEFAULT_COMPANY_SETTINGS))
