"""Domain model entities for invoicekit.

These are pure data classes representing business concepts, independent of
database schema. Report models are derived snapshots and are never persisted.
"""

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Optional

ZERO = Decimal("0")


class InvoiceStatus(str, Enum):
    """Lifecycle status of an invoice."""

    DRAFT = "draft"
    SENT = "sent"
    VIEWED = "viewed"
    PAID = "paid"
    PARTIAL = "partial"
    OVERDUE = "overdue"
    CANCELLED = "cancelled"


class BadgeTone(str, Enum):
    """Color family used for status badges."""

    GREEN = "green"
    RED = "red"
    BLUE = "blue"
    PURPLE = "purple"
    GRAY = "gray"
    NEUTRAL = "neutral"
    ORANGE = "orange"


@dataclass(frozen=True)
class StatusDisplay:
    """Display label and badge tone for a status."""

    label: str
    tone: BadgeTone


STATUS_DISPLAY: dict[InvoiceStatus, StatusDisplay] = {
    InvoiceStatus.PAID: StatusDisplay("Betaald", BadgeTone.GREEN),
    InvoiceStatus.OVERDUE: StatusDisplay("Verlopen", BadgeTone.RED),
    InvoiceStatus.SENT: StatusDisplay("Verstuurd", BadgeTone.BLUE),
    InvoiceStatus.VIEWED: StatusDisplay("Bekeken", BadgeTone.PURPLE),
    InvoiceStatus.DRAFT: StatusDisplay("Concept", BadgeTone.GRAY),
    InvoiceStatus.CANCELLED: StatusDisplay("Geannuleerd", BadgeTone.NEUTRAL),
    InvoiceStatus.PARTIAL: StatusDisplay("Deels betaald", BadgeTone.ORANGE),
}


@dataclass(frozen=True)
class Address:
    """Legacy flat billing address."""

    street: str = ""
    postal_code: str = ""
    city: str = ""
    state: str = ""
    country: str = ""


@dataclass(frozen=True)
class BillingDetails:
    """Extended recipient block with Dutch registration numbers."""

    street: str = ""
    postal_code: str = ""
    city: str = ""
    country: str = ""
    company_name: Optional[str] = None
    contact_name: Optional[str] = None
    kvk_number: Optional[str] = None
    btw_number: Optional[str] = None
    email: Optional[str] = None


@dataclass(frozen=True)
class LineItem:
    """Invoice line. The stored total is authoritative."""

    description: str
    quantity: Decimal
    unit_price: Decimal
    tax: Decimal
    total: Decimal


@dataclass(frozen=True)
class FinancialSummary:
    """Invoice money block.

    ``balance`` is None when the record carries no balance; consumers then
    fall back to ``total``.
    """

    subtotal: Decimal = ZERO
    discount: Decimal = ZERO
    tax: Decimal = ZERO
    total: Decimal = ZERO
    paid: Decimal = ZERO
    balance: Optional[Decimal] = None
    currency: str = "EUR"

    @property
    def outstanding(self) -> Decimal:
        return self.balance if self.balance is not None else self.total


@dataclass(frozen=True)
class Invoice:
    """Invoice domain entity."""

    id: str
    invoice_number: str
    status: InvoiceStatus
    issue_date: Optional[date]
    due_date: Optional[date]
    items: tuple[LineItem, ...] = ()
    financial: Optional[FinancialSummary] = None
    billing_details: Optional[BillingDetails] = None
    billing_address: Optional[Address] = None
    paid_date: Optional[date] = None
    client_name: Optional[str] = None

    def __post_init__(self):
        # Calendar dates only; timestamps are reduced to their day
        for name in ("issue_date", "due_date", "paid_date"):
            value = getattr(self, name)
            if isinstance(value, datetime):
                object.__setattr__(self, name, value.date())

    @property
    def currency(self) -> str:
        if self.financial is None:
            return "EUR"
        return self.financial.currency or "EUR"

    @property
    def total_amount(self) -> Decimal:
        return self.financial.total if self.financial is not None else ZERO

    @property
    def outstanding_amount(self) -> Decimal:
        """Balance if present, else total, else zero."""
        if self.financial is None:
            return ZERO
        return self.financial.outstanding

    @property
    def recipient_name(self) -> Optional[str]:
        if self.client_name:
            return self.client_name
        if self.billing_details is not None:
            return self.billing_details.company_name or self.billing_details.contact_name
        return None


@dataclass(frozen=True)
class CompanySettings:
    """Invoicing entity configuration (singleton)."""

    name: str
    legal_name: str = ""
    email: str = ""
    phone: str = ""
    website: str = ""
    kvk_number: str = ""
    btw_number: str = ""
    street: str = ""
    postal_code: str = ""
    city: str = ""
    country: str = ""
    bank_name: str = ""
    iban: str = ""
    bic: str = ""
    default_payment_terms_days: int = 30
    default_tax_rate: Decimal = Decimal("21")
    invoice_prefix: str = "INV"


@dataclass(frozen=True)
class TaxPeriodReport:
    """Quarterly BTW summary over non-cancelled invoices."""

    year: int
    quarter: int
    start_date: date
    end_date: date
    invoices: tuple[Invoice, ...]
    total_revenue: Decimal
    total_tax: Decimal
    total_subtotal: Decimal
    total_paid: Decimal
    total_outstanding: Decimal
    invoice_count: int
    paid_count: int


@dataclass(frozen=True)
class MonthlyRevenue:
    """Revenue bucket for one calendar month."""

    month: int
    month_name: str
    start_date: date
    end_date: date
    invoice_count: int
    revenue: Decimal
    paid: Decimal
    outstanding: Decimal


@dataclass(frozen=True)
class RevenueReport:
    """Twelve monthly buckets for one year, in calendar order."""

    year: int
    months: tuple[MonthlyRevenue, ...]

    @property
    def total_revenue(self) -> Decimal:
        return sum((m.revenue for m in self.months), ZERO)

    @property
    def total_paid(self) -> Decimal:
        return sum((m.paid for m in self.months), ZERO)

    @property
    def total_outstanding(self) -> Decimal:
        return sum((m.outstanding for m in self.months), ZERO)

    @property
    def invoice_count(self) -> int:
        return sum(m.invoice_count for m in self.months)


@dataclass(frozen=True)
class AgingBucket:
    """One overdue band of the receivables aging report.

    ``max_days`` is None for the open-ended last band.
    """

    key: str
    label: str
    range_label: str
    min_days: Optional[int]
    max_days: Optional[int]
    count: int
    total: Decimal
    invoices: tuple[Invoice, ...]


@dataclass(frozen=True)
class AgingReport:
    """Unpaid invoices partitioned into the five aging bands."""

    as_of: date
    buckets: tuple[AgingBucket, ...]
    total_outstanding: Decimal

    @property
    def invoice_count(self) -> int:
        return sum(bucket.count for bucket in self.buckets)

    def bucket(self, key: str) -> AgingBucket:
        for bucket in self.buckets:
            if bucket.key == key:
                return bucket
        raise KeyError(key)
