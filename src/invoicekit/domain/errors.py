"""Shared domain error messages and error types."""


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class NotFoundError(DomainError):
    """Requested domain entity does not exist."""


class ConflictError(DomainError):
    """Domain conflict, such as uniqueness violations."""


class FormatError(DomainError):
    """A value could not be rendered by a formatting primitive."""


def invoice_not_found(invoice_ref: str) -> str:
    """Return message for missing invoice by number or ID."""
    return f"Invoice '{invoice_ref}' not found"


def duplicate_invoice_number(invoice_number: str) -> str:
    """Return message for duplicate invoice number."""
    return f"Invoice with number '{invoice_number}' already exists"


def unknown_status(status: str) -> str:
    """Return message for an unrecognised invoice status."""
    return f"Unknown invoice status '{status}'"


def invalid_quarter(quarter: int) -> str:
    """Return message for a quarter outside 1-4."""
    return f"Quarter must be between 1 and 4, got {quarter}"


def unknown_settings_field(field_name: str, valid_fields: list[str]) -> str:
    """Return message when a settings field does not exist."""
    return (
        f"Unknown settings field '{field_name}'. "
        f"Valid fields: {', '.join(sorted(valid_fields))}"
    )
