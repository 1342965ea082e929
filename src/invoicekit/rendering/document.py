"""Invoice document assembly."""

import base64
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, ClassVar, Optional, Union

from invoicekit.domain.entities import CompanySettings, Invoice
from invoicekit.domain.settings import DEFAULT_COMPANY_SETTINGS
from invoicekit.rendering.assets import AssetResolver, FileAssetResolver
from invoicekit.rendering.sections import SECTIONS, RenderContext
from invoicekit.rendering.surface import (
    DrawingSurface,
    DrawInstruction,
    RecordingSurface,
    ReportLabSurface,
)

logger = logging.getLogger("invoicekit.rendering.document")

DEFAULT_PAYMENT_BASE_URL = "https://groeimetai.io"


def payment_url_for(invoice: Invoice, base_url: str = DEFAULT_PAYMENT_BASE_URL) -> str:
    """Online payment URL for ``invoice``."""
    return f"{base_url.rstrip('/')}/betalen/{invoice.id}"


@dataclass(frozen=True)
class RenderedDocument:
    """A rendered invoice PDF."""

    MEDIA_TYPE: ClassVar[str] = "application/pdf"

    invoice_number: str
    content: bytes
    page_count: int = 1

    @property
    def filename(self) -> str:
        return f"factuur-{self.invoice_number}.pdf"

    def to_base64(self) -> str:
        return base64.b64encode(self.content).decode("ascii")

    def to_data_uri(self) -> str:
        return f"data:{self.MEDIA_TYPE};base64,{self.to_base64()}"

    def save(self, path: Union[str, Path]) -> Path:
        """Write the PDF to ``path``; a directory gets the default file name."""
        target = Path(path)
        if target.is_dir():
            target = target / self.filename
        target.write_bytes(self.content)
        logger.info("Wrote %s (%d bytes)", target, len(self.content))
        return target


class InvoiceDocumentRenderer:
    """Renders invoices to PDF using the company settings and logo.

    Every call to ``render`` builds a fresh surface, so concurrent renders
    never share drawing state.
    """

    def __init__(
        self,
        settings_source: Optional[Callable[[], CompanySettings]] = None,
        asset_resolver: Optional[AssetResolver] = None,
        payment_base_url: str = DEFAULT_PAYMENT_BASE_URL,
    ):
        self.settings_source = settings_source
        self.asset_resolver = asset_resolver or FileAssetResolver()
        self.payment_base_url = payment_base_url

    def resolve_settings(self, settings: Optional[CompanySettings] = None) -> CompanySettings:
        if settings is not None:
            return settings
        if self.settings_source is None:
            return DEFAULT_COMPANY_SETTINGS
        try:
            return self.settings_source()
        except Exception as e:
            logger.warning("Company settings unavailable, using defaults: %s", e)
            return DEFAULT_COMPANY_SETTINGS

    def draw(
        self,
        surface: DrawingSurface,
        invoice: Invoice,
        settings: Optional[CompanySettings] = None,
        payment_url: Optional[str] = None,
    ) -> RenderContext:
        """Run every section, in order, against ``surface``."""
        ctx = RenderContext(
            surface=surface,
            invoice=invoice,
            settings=self.resolve_settings(settings),
            payment_url=payment_url or payment_url_for(invoice, self.payment_base_url),
            logo=self.asset_resolver.resolve_logo(),
        )
        for section in SECTIONS:
            logger.debug("Drawing %s for invoice %s", section.__name__, invoice.invoice_number)
            section(ctx)
        return ctx

    def render(
        self,
        invoice: Invoice,
        settings: Optional[CompanySettings] = None,
        payment_url: Optional[str] = None,
    ) -> RenderedDocument:
        """Render ``invoice`` to a PDF document."""
        resolved = self.resolve_settings(settings)
        surface = ReportLabSurface(
            title=f"Factuur {invoice.invoice_number}",
            author=resolved.legal_name or resolved.name,
        )
        self.draw(surface, invoice, resolved, payment_url)
        document = RenderedDocument(
            invoice_number=invoice.invoice_number,
            content=surface.finish(),
            page_count=surface.page_count,
        )
        logger.info(
            "Rendered invoice %s (%d page(s), %d bytes)",
            invoice.invoice_number,
            document.page_count,
            len(document.content),
        )
        return document

    def render_instructions(
        self,
        invoice: Invoice,
        settings: Optional[CompanySettings] = None,
        payment_url: Optional[str] = None,
    ) -> list[DrawInstruction]:
        """Draw ``invoice`` onto a recording surface and return the instructions."""
        surface = RecordingSurface()
        self.draw(surface, invoice, settings, payment_url)
        return surface.instructions
