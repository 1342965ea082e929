"""Colors and page geometry for the invoice document.

All coordinates are millimetres from the top-left corner of an A4 page.
"""

from invoicekit.domain.entities import BadgeTone

# ===== Page =====
PAGE_WIDTH = 210.0
PAGE_HEIGHT = 297.0
MARGIN_LEFT = 15.0
MARGIN_RIGHT = 15.0
CONTENT_LEFT = 20.0
CONTENT_RIGHT = PAGE_WIDTH - 20.0
CONTENT_TOP = 20.0

# Everything below this line belongs to the footer band
FOOTER_TOP = 272.0

# ===== Colors (brand) =====
BRAND = "#ff7a00"
TEXT_PRIMARY = "#1a202c"
TEXT_SECONDARY = "#4a5568"
TEXT_MUTED = "#9ca3af"
PANEL_BACKGROUND = "#f7fafc"
ROW_STRIPE = "#f9fafb"
RULE = "#e5e7eb"
DISCOUNT = "#dc2626"
WHITE = "#ffffff"

# tone -> (background, text)
BADGE_COLORS: dict[BadgeTone, tuple[str, str]] = {
    BadgeTone.GREEN: ("#10b981", WHITE),
    BadgeTone.RED: ("#ef4444", WHITE),
    BadgeTone.BLUE: ("#3b82f6", WHITE),
    BadgeTone.PURPLE: ("#8b5cf6", WHITE),
    BadgeTone.GRAY: ("#9ca3af", WHITE),
    BadgeTone.NEUTRAL: ("#e5e7eb", TEXT_SECONDARY),
    BadgeTone.ORANGE: ("#f59e0b", WHITE),
}

# ===== Typography (points) =====
FONT_REGULAR = "Helvetica"
FONT_BOLD = "Helvetica-Bold"
SIZE_WORDMARK = 22
SIZE_TITLE = 18
SIZE_HEADING = 11
SIZE_BODY = 9.5
SIZE_SMALL = 8
SIZE_BADGE = 7.5

# ===== Header =====
LOGO_X = CONTENT_LEFT
LOGO_Y = 12.0
LOGO_WIDTH = 45.0
LOGO_HEIGHT = 16.0
HEADER_LINE_HEIGHT = 4.5
HEADER_DIVIDER_MIN_Y = 50.0

# ===== Identity =====
IDENTITY_Y = 64.0
BADGE_WIDTH = 26.0
BADGE_HEIGHT = 6.5
BADGE_RADIUS = 1.5
DATE_PANEL_X = 128.0
DATE_PANEL_WIDTH = 67.0
DATE_PANEL_HEIGHT = 16.0

# ===== Billing =====
BILLING_PANEL_X = MARGIN_LEFT
BILLING_PANEL_WIDTH = 100.0
BILLING_LINE_HEIGHT = 5.0

# ===== Line items table =====
TABLE_TOP = 124.0
TABLE_LEFT = MARGIN_LEFT
TABLE_WIDTH = PAGE_WIDTH - MARGIN_LEFT - MARGIN_RIGHT
TABLE_HEADER_HEIGHT = 9.0
TABLE_ROW_HEIGHT = 7.0
DESCRIPTION_MAX_CHARS = 48
COL_DESCRIPTION_X = CONTENT_LEFT
COL_QUANTITY_RIGHT = 112.0
COL_UNIT_PRICE_RIGHT = 140.0
COL_TAX_RIGHT = 164.0
COL_TOTAL_RIGHT = CONTENT_RIGHT

# ===== Totals =====
TOTALS_X = 115.0
TOTALS_WIDTH = PAGE_WIDTH - MARGIN_RIGHT - TOTALS_X
TOTALS_LABEL_X = TOTALS_X + 5.0
TOTALS_LINE_HEIGHT = 6.0

# ===== Payment terms =====
PAYMENT_RIGHT_X = 120.0
PAY_BUTTON_WIDTH = 75.0
PAY_BUTTON_HEIGHT = 9.0
PAY_BUTTON_RADIUS = 2.0

# ===== Footer =====
FOOTER_RULE_Y = 276.0
FOOTER_ACCENT_WIDTH = 30.0
FOOTER_THANKS_Y = 282.0
FOOTER_CONTACT_Y = 287.0
