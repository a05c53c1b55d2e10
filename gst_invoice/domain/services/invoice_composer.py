# gst_invoice/domain/services/invoice_composer.py
"""
Assemble the webhook payload for one invoice.

Input is already-validated form state (see invoice_validation). The payload
is frozen; preview and submit each build a fresh one.
"""

from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal
from typing import Any, Dict, Iterable, Sequence

from gst_invoice.domain.models.gst import ZERO, GstClassification, TaxBreakdown
from gst_invoice.domain.models.invoice import (
    ApiLineItem,
    BuyerDetails,
    Financials,
    InvoiceDetails,
    InvoiceMeta,
    InvoicePayload,
    LineItemInput,
    PayloadBuyer,
    PayloadMeta,
    PayloadSupplier,
    SupplierDetails,
    TaxBreakup,
)
from gst_invoice.domain.services.gst_calculator import (
    DEFAULT_GST_RATE,
    component_rates,
    compute_tax,
)
from gst_invoice.domain.services.money_format import number_to_words

CREATE_ACTION = "create_invoice"


def _d(val: Decimal | None) -> float:
    """Convert Decimal to float for JSON serialization."""
    if val is None:
        return 0.0
    return float(val)


def _line_amount(item: LineItemInput) -> Decimal:
    return Decimal(str(item.quantity)) * Decimal(str(item.rate_per_unit))


def _blank_to_none(value: str | None) -> str | None:
    if value is None or not value.strip():
        return None
    return value


def taxable_total(items: Iterable[LineItemInput]) -> Decimal:
    """Sum of quantity x rate over all rows."""
    return sum((_line_amount(i) for i in items), ZERO)


def live_estimate(
    items: Iterable[LineItemInput],
    classification: GstClassification | str,
    rate_percent: Any = None,
) -> tuple[Decimal, TaxBreakdown]:
    """Running totals for the form while it is being filled in (no validation)."""
    base = taxable_total(items)
    return base, compute_tax(base, classification, rate_percent)


def compose_invoice(
    supplier: SupplierDetails,
    buyer: BuyerDetails,
    meta: InvoiceMeta,
    items: Sequence[LineItemInput],
    *,
    now: datetime | None = None,
) -> InvoicePayload:
    """Build an InvoicePayload from validated form state."""
    rate = meta.gst_rate if meta.gst_rate is not None else DEFAULT_GST_RATE
    kind = meta.gst_type

    base = taxable_total(items)
    taxes = compute_tax(base, kind, rate)
    rates = component_rates(kind, rate)

    timestamp = (now or datetime.now(timezone.utc)).isoformat()

    line_items = tuple(
        ApiLineItem(
            serial_no=idx,
            description=item.description,
            hsn_code=item.hsn_code,
            quantity=item.quantity,
            unit=item.unit,
            rate=item.rate_per_unit,
            rate_per_unit=item.rate_per_unit,
            amount=_d(_line_amount(item)),
        )
        for idx, item in enumerate(items, start=1)
    )

    breakup = TaxBreakup(
        cgst_rate=_d(rates.cgst_rate),
        sgst_rate=_d(rates.sgst_rate),
        igst_rate=_d(rates.igst_rate),
    )

    return InvoicePayload(
        meta=PayloadMeta(action=CREATE_ACTION, timestamp=timestamp),
        supplier_details=PayloadSupplier(**supplier.model_dump()),
        buyer_details=PayloadBuyer(
            name=buyer.name,
            gstin=buyer.gstin,
            address=buyer.address,
            vendor_code=_blank_to_none(buyer.vendor_code),
        ),
        invoice_details=InvoiceDetails(
            invoice_date=meta.invoice_date,
            order_ref_no=_blank_to_none(meta.order_ref_no),
            order_date=meta.order_date,
            gst_type=kind.value,
            gst_rate=float(rate),
        ),
        line_items=line_items,
        financials=Financials(
            taxable_total=_d(base),
            cgst_amount=_d(taxes.cgst),
            sgst_amount=_d(taxes.sgst),
            igst_amount=_d(taxes.igst),
            grand_total=_d(taxes.grand_total),
            amount_in_words=number_to_words(taxes.grand_total),
            tax_breakup=breakup,
            # Flattened copies for simpler PDF template access
            cgst_rate=breakup.cgst_rate,
            sgst_rate=breakup.sgst_rate,
            igst_rate=breakup.igst_rate,
        ),
    )


def payload_to_json(payload: InvoicePayload) -> Dict[str, Any]:
    """Wire form of a payload: optional fields that were not provided are dropped."""
    return payload.model_dump(mode="json", exclude_none=True)
