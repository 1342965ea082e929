"""Financial report aggregation.

The module-level functions are pure: they take an invoice snapshot and return
frozen report models, recomputed on every call. ``ReportService`` loads the
snapshot from the store and delegates to them.
"""

import logging
from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import Iterable, Optional, Sequence, Union

from invoicekit.database.base import Database
from invoicekit.domain.entities import (
    ZERO,
    AgingBucket,
    AgingReport,
    Invoice,
    InvoiceStatus,
    MonthlyRevenue,
    RevenueReport,
    TaxPeriodReport,
)
from invoicekit.domain.errors import ValidationError, invalid_quarter
from invoicekit.utils.date_parser import month_date_range, quarter_date_range
from invoicekit.utils.formatting import month_name

logger = logging.getLogger("invoicekit.domain.reports")

AGING_EXCLUDED_STATUSES = frozenset(
    {InvoiceStatus.PAID, InvoiceStatus.CANCELLED, InvoiceStatus.DRAFT}
)


@dataclass(frozen=True)
class AgingBand:
    """Static definition of an aging band (inclusive bounds)."""

    key: str
    label: str
    range_label: str
    min_days: Optional[int]
    max_days: Optional[int]

    def contains(self, days_overdue: int) -> bool:
        if self.min_days is not None and days_overdue < self.min_days:
            return False
        if self.max_days is not None and days_overdue > self.max_days:
            return False
        return True


AGING_BANDS: tuple[AgingBand, ...] = (
    AgingBand("current", "Actueel", "Niet vervallen", None, 0),
    AgingBand("1-30", "1-30 dagen", "1-30 dagen te laat", 1, 30),
    AgingBand("31-60", "31-60 dagen", "31-60 dagen te laat", 31, 60),
    AgingBand("61-90", "61-90 dagen", "61-90 dagen te laat", 61, 90),
    AgingBand("90+", "90+ dagen", "Meer dan 90 dagen te laat", 91, None),
)


def _in_window(invoice: Invoice, start: date, end: date) -> bool:
    if invoice.issue_date is None:
        logger.debug("Invoice %s has no issue date; skipped", invoice.invoice_number)
        return False
    return start <= invoice.issue_date <= end


def _reportable(invoices: Iterable[Invoice], start: date, end: date) -> list[Invoice]:
    return [
        inv
        for inv in invoices
        if inv.status != InvoiceStatus.CANCELLED and _in_window(inv, start, end)
    ]


def _warn_missing_financial(invoices: Iterable[Invoice]) -> None:
    for inv in invoices:
        if inv.financial is None:
            logger.warning(
                "Invoice %s has no financial block; counted as zero",
                inv.invoice_number,
            )


def _warn_mixed_currencies(invoices: Iterable[Invoice], report: str) -> None:
    currencies = sorted({inv.currency for inv in invoices})
    if len(currencies) > 1:
        logger.warning(
            "%s mixes currencies (%s); totals are summed without conversion",
            report,
            ", ".join(currencies),
        )


def _sum(values: Iterable[Decimal]) -> Decimal:
    return sum(values, ZERO)


def tax_period_report(
    invoices: Sequence[Invoice], year: int, quarter: int
) -> TaxPeriodReport:
    """Build the quarterly BTW report.

    Args:
        invoices: Invoice snapshot
        year: Calendar year
        quarter: Quarter number 1-4

    Returns:
        TaxPeriodReport over non-cancelled invoices issued inside the quarter

    Raises:
        ValidationError: If quarter is outside 1-4
    """
    if not 1 <= quarter <= 4:
        raise ValidationError(invalid_quarter(quarter))
    start, end = quarter_date_range(year, quarter)
    selected = _reportable(invoices, start, end)
    _warn_missing_financial(selected)
    _warn_mixed_currencies(selected, f"BTW report {year} Q{quarter}")

    def money(inv: Invoice, field: str) -> Decimal:
        return getattr(inv.financial, field) if inv.financial is not None else ZERO

    paid = [inv for inv in selected if inv.status == InvoiceStatus.PAID]
    open_invoices = [inv for inv in selected if inv.status != InvoiceStatus.PAID]

    return TaxPeriodReport(
        year=year,
        quarter=quarter,
        start_date=start,
        end_date=end,
        invoices=tuple(selected),
        total_revenue=_sum(money(inv, "total") for inv in selected),
        total_tax=_sum(money(inv, "tax") for inv in selected),
        total_subtotal=_sum(money(inv, "subtotal") for inv in selected),
        total_paid=_sum(money(inv, "total") for inv in paid),
        total_outstanding=_sum(inv.outstanding_amount for inv in open_invoices),
        invoice_count=len(selected),
        paid_count=len(paid),
    )


def monthly_revenue_report(invoices: Sequence[Invoice], year: int) -> RevenueReport:
    """Build twelve zero-filled monthly revenue buckets for ``year``."""
    months = []
    year_invoices: list[Invoice] = []
    for month in range(1, 13):
        start, end = month_date_range(year, month)
        selected = _reportable(invoices, start, end)
        year_invoices.extend(selected)
        _warn_missing_financial(selected)
        revenue = _sum(inv.total_amount for inv in selected)
        paid = _sum(
            inv.total_amount for inv in selected if inv.status == InvoiceStatus.PAID
        )
        months.append(
            MonthlyRevenue(
                month=month,
                month_name=month_name(month),
                start_date=start,
                end_date=end,
                invoice_count=len(selected),
                revenue=revenue,
                paid=paid,
                outstanding=revenue - paid,
            )
        )
    _warn_mixed_currencies(year_invoices, f"Revenue report {year}")
    return RevenueReport(year=year, months=tuple(months))


def days_overdue(invoice: Invoice, as_of: date) -> Optional[int]:
    """Whole days between the due date and ``as_of``; None without a due date."""
    if invoice.due_date is None:
        return None
    return (as_of - invoice.due_date).days


def band_for(days: Optional[int]) -> AgingBand:
    """Return the first band containing ``days``; None maps to the last band."""
    if days is None:
        return AGING_BANDS[-1]
    for band in AGING_BANDS:
        if band.contains(days):
            return band
    return AGING_BANDS[-1]


def aging_report(
    invoices: Sequence[Invoice], as_of: Union[date, datetime]
) -> AgingReport:
    """Partition unpaid invoices into the five aging bands.

    Paid, cancelled and draft invoices are excluded. An invoice without a due
    date is treated as maximally overdue.

    Args:
        invoices: Invoice snapshot
        as_of: Reference day ("now"); a datetime is reduced to its date

    Returns:
        AgingReport with all five bands in order
    """
    if isinstance(as_of, datetime):
        as_of = as_of.date()

    members: dict[str, list[Invoice]] = {band.key: [] for band in AGING_BANDS}
    for inv in invoices:
        if inv.status in AGING_EXCLUDED_STATUSES:
            continue
        days = days_overdue(inv, as_of)
        if days is None:
            logger.warning(
                "Invoice %s has no due date; placed in the oldest aging band",
                inv.invoice_number,
            )
        if inv.financial is None:
            logger.warning(
                "Invoice %s has no financial block; counted as zero",
                inv.invoice_number,
            )
        members[band_for(days).key].append(inv)

    _warn_mixed_currencies(
        (inv for band_members in members.values() for inv in band_members), "Aging report"
    )

    buckets = tuple(
        AgingBucket(
            key=band.key,
            label=band.label,
            range_label=band.range_label,
            min_days=band.min_days,
            max_days=band.max_days,
            count=len(members[band.key]),
            total=_sum(inv.outstanding_amount for inv in members[band.key]),
            invoices=tuple(members[band.key]),
        )
        for band in AGING_BANDS
    )
    return AgingReport(
        as_of=as_of,
        buckets=buckets,
        total_outstanding=_sum(bucket.total for bucket in buckets),
    )


class ReportService:
    """Service for building reports from the invoice store."""

    def __init__(self, db: Database):
        """Initialize report service.

        Args:
            db: Database instance
        """
        self.db = db

    def get_invoices(self) -> list[Invoice]:
        """Load the current invoice snapshot."""
        invoices = self.db.list_invoices()
        logger.debug("Loaded %d invoices for reporting", len(invoices))
        return invoices

    def tax_period_report(self, year: int, quarter: int) -> TaxPeriodReport:
        """Build the BTW report for a quarter."""
        return tax_period_report(self.get_invoices(), year, quarter)

    def monthly_revenue_report(self, year: int) -> RevenueReport:
        """Build the monthly revenue report for a year."""
        return monthly_revenue_report(self.get_invoices(), year)

    def aging_report(self, as_of: Optional[date] = None) -> AgingReport:
        """Build the aging report relative to ``as_of`` (default: today)."""
        return aging_report(self.get_invoices(), as_of or date.today())
