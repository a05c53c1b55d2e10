# gst_invoice/domain/services/gst_analytics.py
"""
GST liability vs. input credit analytics over historical records.

Folds sales invoices and purchase bills into:
  - totals (output liability, input credit, net payable / carry-forward)
  - a monthly series keyed by ``YYYY-MM`` for charting
  - per-client and per-vendor rollups, largest tax contribution first
  - top-N distributions for pie charts

Every call recomputes from scratch; nothing is cached between calls.
All sums are Decimal, so the result does not depend on record order.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal, localcontext
from typing import Any, Callable, Iterable, Sequence

from gst_invoice.domain.models.gst import ZERO
from gst_invoice.domain.models.records import ExpenseRecord, InvoiceRecord
from gst_invoice.domain.services.gst_calculator import gst_from_inclusive_total

logger = logging.getLogger("gst_analytics")

UNKNOWN_GSTIN = "N/A"
OTHERS_LABEL = "Others"
NO_DATA_LABEL = "No Data"
TOP_N = 4

# Backfilled tax is held to a fixed scale so Decimal sums stay exact
_BACKFILL_SCALE = Decimal("1e-10")

LIABILITY_PALETTE = ("#f87171", "#fb923c", "#fdba74", "#fda4af", "#9ca3af")
CREDIT_PALETTE = ("#3b82f6", "#10b981", "#0ea5e9", "#6366f1", "#64748b")
PLACEHOLDER_COLOR = "#334155"


# ---------------------------------------------------------------------------
# Data structures
# ---------------------------------------------------------------------------
@dataclass
class Totals:
    """Output liability vs. input credit across all records."""

    output: Decimal = ZERO
    input: Decimal = ZERO
    net: Decimal = ZERO

    @property
    def is_credit(self) -> bool:
        """True when input credit exceeds output tax (nothing to pay)."""
        return self.net < ZERO

    @property
    def payable(self) -> Decimal:
        return max(ZERO, self.net)

    @property
    def carry_forward(self) -> Decimal:
        return max(ZERO, -self.net)


@dataclass
class MonthlyAggregate:
    month: str  # YYYY-MM
    liability: Decimal = ZERO
    credit: Decimal = ZERO


@dataclass
class ClientStats:
    name: str
    gstin: str
    total_sales: Decimal = ZERO
    total_gst: Decimal = ZERO
    invoices: list[InvoiceRecord] = field(default_factory=list)


@dataclass
class VendorStats:
    name: str
    gstin: str
    total_spent: Decimal = ZERO
    total_input_credit: Decimal = ZERO


@dataclass
class DistributionSlice:
    name: str
    value: Decimal
    color: str


@dataclass
class DataQualityReport:
    """Records that were aggregated through a fallback instead of stored data."""

    invoices_missing_date: list[Any] = field(default_factory=list)
    expenses_missing_date: list[Any] = field(default_factory=list)
    invoices_backfilled_tax: list[Any] = field(default_factory=list)

    @property
    def has_gaps(self) -> bool:
        return bool(
            self.invoices_missing_date
            or self.expenses_missing_date
            or self.invoices_backfilled_tax
        )

    def to_dict(self) -> dict:
        return {
            "invoices_missing_date": len(self.invoices_missing_date),
            "expenses_missing_date": len(self.expenses_missing_date),
            "invoices_backfilled_tax": len(self.invoices_backfilled_tax),
        }


@dataclass
class GstAnalytics:
    totals: Totals
    monthly: list[MonthlyAggregate]
    clients: list[ClientStats]
    vendors: list[VendorStats]
    client_distribution: list[DistributionSlice]
    vendor_distribution: list[DistributionSlice]
    data_quality: DataQualityReport


# ---------------------------------------------------------------------------
# Per-record figures
# ---------------------------------------------------------------------------
def has_stored_tax(inv: InvoiceRecord) -> bool:
    return inv.gst_total is not None and inv.gst_total > ZERO


def invoice_tax(inv: InvoiceRecord, rate_percent: Any = None) -> Decimal:
    """
    Output tax of one invoice.

    Uses the stored ``gst_total`` when positive; otherwise treats ``amount``
    as tax-inclusive and extracts the GST component at ``rate_percent``.
    """
    if has_stored_tax(inv):
        return inv.gst_total
    tax = gst_from_inclusive_total(inv.amount, rate_percent)
    with localcontext() as ctx:
        # Room for every integer digit plus the fixed fractional scale
        ctx.prec = max(ctx.prec, tax.adjusted() + 12)
        return tax.quantize(_BACKFILL_SCALE)


def expense_credit(exp: ExpenseRecord) -> Decimal:
    return exp.gst_amount


def month_key(raw_date: str | None, today: date | None = None) -> str:
    """``YYYY-MM`` bucket for a date string; a missing date falls into today's month."""
    if raw_date:
        return str(raw_date)[:7]
    return (today or date.today()).isoformat()[:7]


# ---------------------------------------------------------------------------
# Aggregation
# ---------------------------------------------------------------------------
def compute_totals(
    invoices: Iterable[InvoiceRecord],
    expenses: Iterable[ExpenseRecord],
    rate_percent: Any = None,
) -> Totals:
    output = sum((invoice_tax(i, rate_percent) for i in invoices), ZERO)
    credit = sum((expense_credit(e) for e in expenses), ZERO)
    return Totals(output=output, input=credit, net=output - credit)


def monthly_series(
    invoices: Iterable[InvoiceRecord],
    expenses: Iterable[ExpenseRecord],
    *,
    rate_percent: Any = None,
    today: date | None = None,
) -> list[MonthlyAggregate]:
    """Liability and credit per month, oldest month first."""
    buckets: dict[str, MonthlyAggregate] = {}

    for inv in invoices:
        key = month_key(inv.invoice_date, today)
        bucket = buckets.setdefault(key, MonthlyAggregate(month=key))
        bucket.liability += invoice_tax(inv, rate_percent)

    for exp in expenses:
        key = month_key(exp.date, today)
        bucket = buckets.setdefault(key, MonthlyAggregate(month=key))
        bucket.credit += expense_credit(exp)

    # Zero-padded YYYY-MM sorts correctly as a plain string
    return [buckets[k] for k in sorted(buckets)]


def client_rollup(
    invoices: Iterable[InvoiceRecord],
    rate_percent: Any = None,
) -> list[ClientStats]:
    """Group sales by (client, GSTIN); highest GST collected first."""
    clients: dict[tuple[str, str], ClientStats] = {}
    for inv in invoices:
        gstin = inv.gstin or UNKNOWN_GSTIN
        stats = clients.setdefault(
            (inv.client_name, gstin), ClientStats(name=inv.client_name, gstin=gstin),
        )
        stats.total_sales += inv.amount
        stats.total_gst += invoice_tax(inv, rate_percent)
        stats.invoices.append(inv)
    return sorted(clients.values(), key=lambda s: s.total_gst, reverse=True)


def vendor_rollup(expenses: Iterable[ExpenseRecord]) -> list[VendorStats]:
    """Group purchases by (vendor, GSTIN); highest input credit first."""
    vendors: dict[tuple[str, str], VendorStats] = {}
    for exp in expenses:
        gstin = exp.gstin or UNKNOWN_GSTIN
        stats = vendors.setdefault(
            (exp.vendor_name, gstin), VendorStats(name=exp.vendor_name, gstin=gstin),
        )
        stats.total_spent += exp.total_amount
        stats.total_input_credit += expense_credit(exp)
    return sorted(vendors.values(), key=lambda s: s.total_input_credit, reverse=True)


def _slice_label(stats: Any) -> str:
    gstin = getattr(stats, "gstin", None)
    if gstin and gstin != UNKNOWN_GSTIN:
        return f"{stats.name} ({gstin})"
    return stats.name


def distribution(
    stats: Sequence[Any],
    value_of: Callable[[Any], Decimal],
    *,
    top_n: int = TOP_N,
    palette: Sequence[str] = LIABILITY_PALETTE,
) -> list[DistributionSlice]:
    """
    Pie-chart slices: the first ``top_n`` entries of an already-sorted rollup,
    plus an "Others" slice for the rest. Never returns an empty list.
    """
    head, tail = stats[:top_n], stats[top_n:]
    slices = [
        DistributionSlice(
            name=_slice_label(s),
            value=value_of(s),
            color=palette[idx % len(palette)],
        )
        for idx, s in enumerate(head)
    ]
    others = sum((value_of(s) for s in tail), ZERO)
    if others > ZERO:
        slices.append(
            DistributionSlice(name=OTHERS_LABEL, value=others, color=palette[min(top_n, len(palette) - 1)]),
        )
    if not slices:
        return [DistributionSlice(name=NO_DATA_LABEL, value=Decimal("1"), color=PLACEHOLDER_COLOR)]
    return slices


def _record_ref(rec: Any) -> Any:
    return rec.id if rec.id is not None else (rec.invoice_number or "?")


def build_gst_analytics(
    invoices: Sequence[InvoiceRecord],
    expenses: Sequence[ExpenseRecord],
    *,
    rate_percent: Any = None,
    today: date | None = None,
) -> GstAnalytics:
    """One-shot fold of all records into dashboard structures."""
    quality = DataQualityReport(
        invoices_missing_date=[_record_ref(i) for i in invoices if not i.invoice_date],
        expenses_missing_date=[_record_ref(e) for e in expenses if not e.date],
        invoices_backfilled_tax=[_record_ref(i) for i in invoices if not has_stored_tax(i)],
    )
    if quality.has_gaps:
        logger.warning(
            "GST analytics data gaps: %d invoice(s) without date, %d expense(s) without date, "
            "%d invoice(s) with tax backfilled from total",
            len(quality.invoices_missing_date),
            len(quality.expenses_missing_date),
            len(quality.invoices_backfilled_tax),
        )

    totals = compute_totals(invoices, expenses, rate_percent)
    clients = client_rollup(invoices, rate_percent)
    vendors = vendor_rollup(expenses)

    result = GstAnalytics(
        totals=totals,
        monthly=monthly_series(invoices, expenses, rate_percent=rate_percent, today=today),
        clients=clients,
        vendors=vendors,
        client_distribution=distribution(
            clients, lambda s: s.total_gst, palette=LIABILITY_PALETTE,
        ),
        vendor_distribution=distribution(
            vendors, lambda s: s.total_input_credit, palette=CREDIT_PALETTE,
        ),
        data_quality=quality,
    )

    logger.info(
        "GST analytics: invoices=%d expenses=%d months=%d output=%.2f input=%.2f net=%.2f",
        len(invoices),
        len(expenses),
        len(result.monthly),
        totals.output,
        totals.input,
        totals.net,
    )
    return result
