"""PDF rendering of invoices."""

from invoicekit.rendering.document import (
    DEFAULT_PAYMENT_BASE_URL,
    InvoiceDocumentRenderer,
    RenderedDocument,
    payment_url_for,
)

__all__ = [
    "DEFAULT_PAYMENT_BASE_URL",
    "InvoiceDocumentRenderer",
    "RenderedDocument",
    "payment_url_for",
]
