"""Section renderers for the invoice document.

Each renderer derives its own content from the invoice and company settings
and draws it onto the shared surface. Sections run in the fixed order given by
``SECTIONS``; ``RenderContext.cursor`` carries the bottom edge of the previous
section so later sections can flow below it.
"""

import logging
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Any, Callable, Optional

from invoicekit.domain.entities import (
    STATUS_DISPLAY,
    CompanySettings,
    FinancialSummary,
    Invoice,
    InvoiceStatus,
)
from invoicekit.domain.errors import FormatError
from invoicekit.rendering import theme
from invoicekit.rendering.surface import DrawingSurface
from invoicekit.utils.formatting import format_currency, format_date_long, format_quantity

logger = logging.getLogger("invoicekit.rendering.sections")

UNPAYABLE_STATUSES = frozenset({InvoiceStatus.PAID, InvoiceStatus.CANCELLED})
PLACEHOLDER = "-"


@dataclass
class RenderContext:
    """Per-render state shared by the section renderers."""

    surface: DrawingSurface
    invoice: Invoice
    settings: CompanySettings
    payment_url: str
    logo: Optional[bytes] = None
    cursor: float = 0.0

    @property
    def currency(self) -> str:
        return self.invoice.currency

    def ensure_space(self, height: float) -> None:
        """Start a new page when ``height`` more millimetres would reach the footer."""
        if self.cursor + height > theme.FOOTER_TOP:
            self.break_page()

    def break_page(self) -> None:
        draw_footer(self)
        self.surface.new_page()
        self.cursor = theme.CONTENT_TOP


# ===== Helpers =====
def money(amount: Any, currency: str = "EUR") -> str:
    try:
        return format_currency(amount, currency)
    except FormatError as e:
        logger.warning("Could not format amount %r: %s", amount, e)
        return PLACEHOLDER


def long_date(value: Optional[date]) -> str:
    try:
        return format_date_long(value)
    except FormatError as e:
        logger.warning("Could not format date %r: %s", value, e)
        return PLACEHOLDER


def quantity(value: Any) -> str:
    try:
        return format_quantity(value)
    except FormatError as e:
        logger.warning("Could not format quantity %r: %s", value, e)
        return PLACEHOLDER


def truncate(text: str, limit: int = theme.DESCRIPTION_MAX_CHARS) -> str:
    """Cut ``text`` to ``limit`` characters, ending in an ellipsis when shortened."""
    text = " ".join((text or "").split())
    if len(text) <= limit:
        return text
    return text[: limit - 1].rstrip() + "…"


def _present(*values: Optional[str]) -> list[str]:
    return [v.strip() for v in values if v and v.strip()]


def _postal_city(postal_code: Optional[str], city: Optional[str]) -> str:
    return " ".join(_present(postal_code, city))


def company_address_lines(settings: CompanySettings) -> list[str]:
    return _present(
        settings.street, _postal_city(settings.postal_code, settings.city), settings.country
    )


def company_registration_lines(settings: CompanySettings) -> list[str]:
    lines = []
    if settings.kvk_number:
        lines.append(f"KvK: {settings.kvk_number}")
    if settings.btw_number:
        lines.append(f"BTW: {settings.btw_number}")
    return lines


def billing_lines(invoice: Invoice) -> tuple[list[str], list[str], list[str]]:
    """Return (names, address lines, registration lines) for the recipient.

    Extended billing details win over the legacy flat address.
    """
    details = invoice.billing_details
    if details is not None:
        names = _present(details.company_name, details.contact_name)
        if not names and invoice.client_name:
            names = [invoice.client_name]
        address = _present(
            details.street, _postal_city(details.postal_code, details.city), details.country
        )
        registrations = []
        if details.kvk_number:
            registrations.append(f"KvK: {details.kvk_number}")
        if details.btw_number:
            registrations.append(f"BTW: {details.btw_number}")
        return names, address, registrations

    names = _present(invoice.client_name)
    legacy = invoice.billing_address
    if legacy is None:
        return names, [], []
    address = _present(
        legacy.street,
        _postal_city(legacy.postal_code, legacy.city),
        ", ".join(_present(legacy.state, legacy.country)),
    )
    return names, address, []


def is_payable(invoice: Invoice) -> bool:
    return invoice.status not in UNPAYABLE_STATUSES


# ===== 1. Header =====
def _draw_wordmark(surface: DrawingSurface, settings: CompanySettings) -> None:
    baseline = theme.LOGO_Y + 10
    surface.text(
        theme.LOGO_X, baseline, settings.name, size=theme.SIZE_WORDMARK, bold=True,
        color=theme.BRAND,
    )
    width = surface.text_width(settings.name, theme.SIZE_WORDMARK, bold=True)
    surface.line(
        theme.LOGO_X, baseline + 2.5, theme.LOGO_X + min(width, 25.0), baseline + 2.5,
        color=theme.BRAND, width=0.8,
    )


def draw_header(ctx: RenderContext) -> None:
    """Logo or wordmark, company contact info, address and registrations."""
    surface, settings = ctx.surface, ctx.settings

    logo_drawn = False
    if ctx.logo:
        try:
            surface.image(
                ctx.logo, theme.LOGO_X, theme.LOGO_Y, theme.LOGO_WIDTH, theme.LOGO_HEIGHT
            )
            logo_drawn = True
        except ValueError as e:
            logger.warning("Logo could not be drawn, using wordmark: %s", e)
    if not logo_drawn:
        _draw_wordmark(surface, settings)

    right_y = theme.LOGO_Y + 3
    for line in _present(settings.email, settings.phone, settings.website):
        surface.text(
            theme.CONTENT_RIGHT, right_y, line, size=theme.SIZE_SMALL,
            color=theme.TEXT_SECONDARY, align="right",
        )
        right_y += theme.HEADER_LINE_HEIGHT
    for line in company_registration_lines(settings):
        surface.text(
            theme.CONTENT_RIGHT, right_y, line, size=theme.SIZE_SMALL,
            color=theme.TEXT_MUTED, align="right",
        )
        right_y += theme.HEADER_LINE_HEIGHT

    left_y = theme.LOGO_Y + theme.LOGO_HEIGHT + 5
    for line in company_address_lines(settings):
        surface.text(
            theme.CONTENT_LEFT, left_y, line, size=theme.SIZE_SMALL, color=theme.TEXT_SECONDARY
        )
        left_y += theme.HEADER_LINE_HEIGHT

    divider_y = max(theme.HEADER_DIVIDER_MIN_Y, right_y, left_y)
    surface.line(
        theme.MARGIN_LEFT, divider_y, theme.PAGE_WIDTH - theme.MARGIN_RIGHT, divider_y,
        color=theme.RULE, width=0.3,
    )
    ctx.cursor = divider_y


# ===== 2. Invoice identity =====
def draw_status_badge(surface: DrawingSurface, status: InvoiceStatus, x: float, top: float) -> float:
    """Draw the status pill with its top-left corner at (x, top). Returns its width."""
    display = STATUS_DISPLAY[status]
    background, text_color = theme.BADGE_COLORS[display.tone]
    width = max(
        theme.BADGE_WIDTH,
        surface.text_width(display.label, theme.SIZE_BADGE, bold=True) + 6,
    )
    surface.rect(
        x, top, width, theme.BADGE_HEIGHT, fill=background, radius=theme.BADGE_RADIUS
    )
    surface.text(
        x + width / 2, top + 4.6, display.label, size=theme.SIZE_BADGE, bold=True,
        color=text_color, align="center",
    )
    return width


def draw_invoice_identity(ctx: RenderContext) -> None:
    """Invoice number, status badge and the issue/due date panel."""
    surface, invoice = ctx.surface, ctx.invoice
    baseline = max(theme.IDENTITY_Y, ctx.cursor + 14)

    title = f"Factuur {invoice.invoice_number}"
    surface.text(theme.CONTENT_LEFT, baseline, title, size=theme.SIZE_TITLE, bold=True)
    badge_x = theme.CONTENT_LEFT + surface.text_width(title, theme.SIZE_TITLE, bold=True) + 4
    draw_status_badge(surface, invoice.status, badge_x, baseline - 5)

    panel_top = baseline - 10
    surface.rect(
        theme.DATE_PANEL_X, panel_top, theme.DATE_PANEL_WIDTH, theme.DATE_PANEL_HEIGHT,
        fill=theme.PANEL_BACKGROUND, stroke=theme.RULE, radius=1.5,
    )
    rows = (("Factuurdatum:", invoice.issue_date), ("Vervaldatum:", invoice.due_date))
    for index, (label, value) in enumerate(rows):
        row_y = panel_top + 6.5 + index * 5.5
        surface.text(theme.DATE_PANEL_X + 4, row_y, label, color=theme.TEXT_SECONDARY)
        surface.text(
            theme.DATE_PANEL_X + theme.DATE_PANEL_WIDTH - 4, row_y, long_date(value),
            bold=True, align="right",
        )
    ctx.cursor = panel_top + theme.DATE_PANEL_HEIGHT


# ===== 3. Billing details =====
def draw_billing_details(ctx: RenderContext) -> None:
    """Shaded recipient panel."""
    surface = ctx.surface
    names, address, registrations = billing_lines(ctx.invoice)
    line_h = theme.BILLING_LINE_HEIGHT

    top = ctx.cursor + 8
    height = 9 + line_h * (len(names) + len(address)) + 4.5 * len(registrations) + 2
    surface.rect(
        theme.BILLING_PANEL_X, top, theme.BILLING_PANEL_WIDTH, height,
        fill=theme.PANEL_BACKGROUND, radius=1.5,
    )
    surface.text(
        theme.CONTENT_LEFT, top + 6, "Factuur aan", size=theme.SIZE_HEADING, bold=True,
        color=theme.BRAND,
    )

    y = top + 6 + line_h + 0.5
    for name in names:
        surface.text(theme.CONTENT_LEFT, y, name, bold=True)
        y += line_h
    for line in address:
        surface.text(theme.CONTENT_LEFT, y, line)
        y += line_h
    for line in registrations:
        surface.text(
            theme.CONTENT_LEFT, y - 0.5, line, size=theme.SIZE_SMALL, color=theme.TEXT_MUTED
        )
        y += 4.5
    ctx.cursor = top + height


# ===== 4. Line items =====
def _draw_table_header(surface: DrawingSurface, top: float) -> float:
    surface.rect(
        theme.TABLE_LEFT, top, theme.TABLE_WIDTH, theme.TABLE_HEADER_HEIGHT,
        fill=theme.PANEL_BACKGROUND,
    )
    baseline = top + 6
    style = {"bold": True, "color": theme.TEXT_SECONDARY}
    surface.text(theme.COL_DESCRIPTION_X, baseline, "Omschrijving", **style)
    surface.text(theme.COL_QUANTITY_RIGHT, baseline, "Aantal", align="right", **style)
    surface.text(theme.COL_UNIT_PRICE_RIGHT, baseline, "Prijs", align="right", **style)
    surface.text(theme.COL_TAX_RIGHT, baseline, "BTW", align="right", **style)
    surface.text(theme.COL_TOTAL_RIGHT, baseline, "Totaal", align="right", **style)
    bottom = top + theme.TABLE_HEADER_HEIGHT
    surface.line(
        theme.TABLE_LEFT, bottom, theme.TABLE_LEFT + theme.TABLE_WIDTH, bottom,
        color=theme.RULE, width=0.3,
    )
    return bottom


def draw_line_items(ctx: RenderContext) -> None:
    """Item table; long descriptions are truncated, overflow continues on a new page."""
    surface, currency = ctx.surface, ctx.currency
    top = max(theme.TABLE_TOP, ctx.cursor + 8)
    row_top = _draw_table_header(surface, top)

    for index, item in enumerate(ctx.invoice.items):
        if row_top + theme.TABLE_ROW_HEIGHT > theme.FOOTER_TOP:
            ctx.break_page()
            row_top = _draw_table_header(surface, ctx.cursor)
        if index % 2 == 0:
            surface.rect(
                theme.TABLE_LEFT, row_top, theme.TABLE_WIDTH, theme.TABLE_ROW_HEIGHT,
                fill=theme.ROW_STRIPE,
            )
        baseline = row_top + 4.8
        surface.text(theme.COL_DESCRIPTION_X, baseline, truncate(item.description))
        surface.text(theme.COL_QUANTITY_RIGHT, baseline, quantity(item.quantity), align="right")
        surface.text(
            theme.COL_UNIT_PRICE_RIGHT, baseline, money(item.unit_price, currency), align="right"
        )
        surface.text(theme.COL_TAX_RIGHT, baseline, money(item.tax, currency), align="right")
        surface.text(theme.COL_TOTAL_RIGHT, baseline, money(item.total, currency), align="right")
        row_top += theme.TABLE_ROW_HEIGHT

    surface.line(
        theme.TABLE_LEFT, row_top, theme.TABLE_LEFT + theme.TABLE_WIDTH, row_top,
        color=theme.RULE, width=0.3,
    )
    ctx.cursor = row_top


# ===== 5. Totals =====
def totals_height(financial: FinancialSummary) -> float:
    height = 6 + 6 + 2 + 6 + 4
    if financial.discount > 0:
        height += 6
    if financial.paid > 0:
        height += 13
    return height


def draw_totals(ctx: RenderContext) -> None:
    """Subtotal, discount, tax, grand total and (when paid) the outstanding balance."""
    surface, currency = ctx.surface, ctx.currency
    financial = ctx.invoice.financial or FinancialSummary(currency=currency)
    height = totals_height(financial)
    ctx.ensure_space(height + 6)

    top = ctx.cursor + 6
    right = theme.TOTALS_X + theme.TOTALS_WIDTH - 5
    surface.rect(
        theme.TOTALS_X, top, theme.TOTALS_WIDTH, height, fill=theme.PANEL_BACKGROUND,
        radius=1.5,
    )

    def row(y: float, label: str, value: str, *, color: str = theme.TEXT_PRIMARY,
            bold: bool = False, size: float = theme.SIZE_BODY) -> None:
        surface.text(theme.TOTALS_LABEL_X, y, label, size=size, bold=bold,
                     color=theme.TEXT_SECONDARY if color == theme.TEXT_PRIMARY else color)
        surface.text(right, y, value, size=size, bold=bold, color=color, align="right")

    y = top + 6
    row(y, "Subtotaal", money(financial.subtotal, currency))
    if financial.discount > 0:
        y += 6
        row(y, "Korting", money(-financial.discount, currency), color=theme.DISCOUNT)
    y += 6
    row(y, "BTW", money(financial.tax, currency))
    y += 2
    surface.line(theme.TOTALS_LABEL_X, y, right, y, color=theme.RULE, width=0.3)
    y += 6
    row(y, "Totaal", money(financial.total, currency), color=theme.BRAND, bold=True,
        size=theme.SIZE_HEADING + 1)
    if financial.paid > 0:
        y += 7
        row(y, "Betaald", money(financial.paid, currency))
        y += 6
        row(y, "Openstaand", money(financial.outstanding, currency), bold=True)
    ctx.cursor = top + height


# ===== 6. Payment terms =====
def bank_lines(invoice: Invoice, settings: CompanySettings) -> list[str]:
    lines = []
    if settings.iban:
        lines.append(f"IBAN: {settings.iban}")
    if settings.bic:
        lines.append(f"BIC: {settings.bic}")
    if settings.bank_name:
        lines.append(f"Bank: {settings.bank_name}")
    lines.append(f"Betalingskenmerk: {invoice.invoice_number}")
    return lines


def draw_payment_terms(ctx: RenderContext) -> None:
    """Bank details and reference on the left; due date and pay-online link on the right."""
    surface, invoice = ctx.surface, ctx.invoice
    lines = bank_lines(invoice, ctx.settings)
    payable = is_payable(invoice)

    left_height = 6 + 5 * len(lines)
    right_height = 12 + (theme.PAY_BUTTON_HEIGHT + 9 if payable else 0)
    ctx.ensure_space(max(left_height, right_height) + 10)
    top = ctx.cursor + 10

    surface.text(
        theme.CONTENT_LEFT, top, "Betaalgegevens", size=theme.SIZE_HEADING, bold=True,
        color=theme.TEXT_SECONDARY,
    )
    y = top + 6
    for line in lines:
        surface.text(theme.CONTENT_LEFT, y, line, color=theme.TEXT_SECONDARY)
        y += 5

    x = theme.PAYMENT_RIGHT_X
    surface.text(
        x, top, "Te betalen vóór", size=theme.SIZE_HEADING, bold=True,
        color=theme.TEXT_SECONDARY,
    )
    surface.text(x, top + 6, long_date(invoice.due_date), bold=True)
    bottom = max(y, top + 6)

    if payable:
        button_top = top + 10
        surface.rect(
            x, button_top, theme.PAY_BUTTON_WIDTH, theme.PAY_BUTTON_HEIGHT, fill=theme.BRAND,
            radius=theme.PAY_BUTTON_RADIUS,
        )
        surface.text(
            x + theme.PAY_BUTTON_WIDTH / 2, button_top + 6, "Online betalen",
            size=theme.SIZE_HEADING, bold=True, color=theme.WHITE, align="center",
        )
        surface.link(ctx.payment_url, x, button_top, theme.PAY_BUTTON_WIDTH, theme.PAY_BUTTON_HEIGHT)

        url_y = button_top + theme.PAY_BUTTON_HEIGHT + 5
        surface.text(x, url_y, ctx.payment_url, size=theme.SIZE_SMALL, color=theme.BRAND)
        url_width = surface.text_width(ctx.payment_url, theme.SIZE_SMALL)
        surface.link(ctx.payment_url, x, url_y - 3, url_width, 4)
        bottom = max(bottom, url_y + 2)

    ctx.cursor = bottom


# ===== 7. Footer =====
def draw_footer(ctx: RenderContext) -> None:
    """Accent rule, thank-you line and company contact channels."""
    surface, settings = ctx.surface, ctx.settings
    left = theme.MARGIN_LEFT
    accent_end = left + theme.FOOTER_ACCENT_WIDTH
    surface.line(
        left, theme.FOOTER_RULE_Y, accent_end, theme.FOOTER_RULE_Y, color=theme.BRAND, width=0.8
    )
    surface.line(
        accent_end, theme.FOOTER_RULE_Y, theme.PAGE_WIDTH - theme.MARGIN_RIGHT,
        theme.FOOTER_RULE_Y, color=theme.RULE, width=0.3,
    )
    center = theme.PAGE_WIDTH / 2
    surface.text(
        center, theme.FOOTER_THANKS_Y, "Bedankt voor uw vertrouwen!", size=theme.SIZE_BODY,
        color=theme.TEXT_SECONDARY, align="center",
    )
    channels = _present(settings.email, settings.phone, settings.website)
    if channels:
        surface.text(
            center, theme.FOOTER_CONTACT_Y, " | ".join(channels), size=theme.SIZE_SMALL,
            color=theme.TEXT_MUTED, align="center",
        )


SECTIONS: tuple[Callable[[RenderContext], None], ...] = (
    draw_header,
    draw_invoice_identity,
    draw_billing_details,
    draw_line_items,
    draw_totals,
    draw_payment_terms,
    draw_footer,
)
