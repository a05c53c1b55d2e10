# gst_invoice/domain/services/gst_calculator.py
"""
GST computation for a taxable base.

Intrastate supplies split the tax evenly into CGST + SGST; interstate
supplies carry it as a single IGST component. The same function runs for the
live form estimate and for the final payload, so it must stay pure.

Inputs outside the documented domain (negative bases, non-finite numbers)
are not rejected here; the arithmetic result is returned as-is and
callers validate upstream.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any

from gst_invoice.domain.models.gst import (
    ZERO,
    ComponentRates,
    GstClassification,
    TaxBreakdown,
)

GST_RATES: tuple[int, ...] = (5, 12, 18, 28)
DEFAULT_GST_RATE = 18

_HUNDRED = Decimal("100")
_TWO = Decimal("2")


def _dec(val: Any) -> Decimal:
    """Convert a number to Decimal through its string form (no binary float noise)."""
    if isinstance(val, Decimal):
        return val
    return Decimal(str(val))


def _rate(rate_percent: Any) -> Decimal:
    if rate_percent is None:
        return Decimal(DEFAULT_GST_RATE)
    return _dec(rate_percent)


def compute_tax(
    taxable_total: Any,
    classification: GstClassification | str,
    rate_percent: Any = None,
) -> TaxBreakdown:
    """
    Derive CGST / SGST / IGST and the grand total.

    ``rate_percent`` defaults to 18 when not given.

    >>> compute_tax(1000, "intrastate", 18).cgst
    Decimal('90')
    """
    kind = GstClassification.parse(classification)
    taxable = _dec(taxable_total)
    tax_amount = taxable * _rate(rate_percent) / _HUNDRED
    grand_total = taxable + tax_amount

    if kind is GstClassification.INTRASTATE:
        half = tax_amount / _TWO
        return TaxBreakdown(
            cgst=half,
            sgst=half,
            igst=ZERO,
            tax_amount=tax_amount,
            grand_total=grand_total,
        )
    return TaxBreakdown(
        cgst=ZERO,
        sgst=ZERO,
        igst=tax_amount,
        tax_amount=tax_amount,
        grand_total=grand_total,
    )


def gst_from_inclusive_total(total_amount: Any, rate_percent: Any = None) -> Decimal:
    """
    Extract the GST component from a tax-inclusive total.

    Formula: GST = total * rate / (100 + rate). Non-positive totals give 0.
    """
    total = _dec(total_amount)
    if total.is_nan() or total <= ZERO:
        return ZERO
    rate = _rate(rate_percent)
    return total * rate / (_HUNDRED + rate)


def component_rates(
    classification: GstClassification | str,
    rate_percent: Any = None,
) -> ComponentRates:
    """Rate printed against each tax head (9% + 9% intrastate, 18% IGST interstate)."""
    rate = _rate(rate_percent)
    if GstClassification.parse(classification) is GstClassification.INTRASTATE:
        return ComponentRates(cgst_rate=rate / _TWO, sgst_rate=rate / _TWO, igst_rate=ZERO)
    return ComponentRates(cgst_rate=ZERO, sgst_rate=ZERO, igst_rate=rate)


def is_standard_rate(rate_percent: Any) -> bool:
    """Whether a rate is one of the slabs offered on the invoice form."""
    try:
        return _dec(rate_percent) in {Decimal(r) for r in GST_RATES}
    except (ArithmeticError, ValueError):
        return False
