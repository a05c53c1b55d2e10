# gst_invoice/domain/services/invoice_validation.py

from __future__ import annotations

import re
from datetime import date, datetime
from typing import Sequence

from gst_invoice.domain.models.invoice import (
    BuyerDetails,
    InvoiceMeta,
    InvoicePayload,
    LineItemInput,
    SupplierDetails,
)

# Relaxed on purpose: 15 uppercase alphanumerics, no checksum
GSTIN_REGEX = re.compile(r"^[0-9A-Z]{15}$")
EMAIL_REGEX = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


class InvoiceValidationError(Exception):
    """Raised when invoice input is incomplete or malformed. Blocks composition."""

    def __init__(self, message: str, field: str = "", row: int | None = None):
        super().__init__(message)
        self.message = message
        self.field = field
        self.row = row

    def to_dict(self) -> dict:
        d = {"field": self.field, "message": self.message}
        if self.row is not None:
            d["row"] = self.row
        return d


def is_valid_gstin(gstin: str | None) -> bool:
    if not gstin:
        return False
    return bool(GSTIN_REGEX.match(gstin))


def is_valid_email(email: str | None) -> bool:
    if not email:
        return False
    return bool(EMAIL_REGEX.match(email))


def _is_parseable_date(value: str) -> bool:
    raw = value.strip()
    try:
        datetime.fromisoformat(raw.replace("Z", "+00:00"))
        return True
    except ValueError:
        pass
    try:
        date.fromisoformat(raw[:10])
        return True
    except ValueError:
        return False


def validate_invoice_input(
    supplier: SupplierDetails,
    buyer: BuyerDetails,
    meta: InvoiceMeta,
    items: Sequence[LineItemInput],
) -> None:
    """
    Check form state before composing a payload.

    Raises InvoiceValidationError for the first problem found, in form order:
    supplier, buyer, invoice details, then line items row by row.
    """
    if not supplier.legal_name.strip():
        raise InvoiceValidationError("Supplier Legal Name is required.", field="supplier_details.legal_name")
    if not supplier.gstin.strip():
        raise InvoiceValidationError("Supplier GSTIN is required.", field="supplier_details.gstin")
    if not is_valid_gstin(supplier.gstin):
        raise InvoiceValidationError("Invalid Supplier GSTIN format.", field="supplier_details.gstin")
    if supplier.email and not is_valid_email(supplier.email):
        raise InvoiceValidationError("Invalid Supplier email.", field="supplier_details.email")

    if not buyer.name.strip():
        raise InvoiceValidationError("Buyer Name is required.", field="buyer_details.name")
    # Unregistered (B2C) buyers may leave GSTIN blank
    if buyer.gstin and not is_valid_gstin(buyer.gstin):
        raise InvoiceValidationError("Invalid Buyer GSTIN format.", field="buyer_details.gstin")

    if not meta.invoice_date.strip():
        raise InvoiceValidationError("Invoice Date is required.", field="invoice_details.invoice_date")
    if not _is_parseable_date(meta.invoice_date):
        raise InvoiceValidationError("Invalid Invoice Date.", field="invoice_details.invoice_date")

    if not items:
        raise InvoiceValidationError("At least one line item is required.", field="line_items")
    for idx, item in enumerate(items, start=1):
        if not item.description.strip():
            raise InvoiceValidationError(
                f"Row {idx}: Description is required.", field="line_items.description", row=idx,
            )
        if not item.quantity > 0:
            raise InvoiceValidationError(
                f"Row {idx}: Quantity must be > 0.", field="line_items.quantity", row=idx,
            )
        if item.rate_per_unit < 0:
            raise InvoiceValidationError(
                f"Row {idx}: Rate cannot be negative.", field="line_items.rate_per_unit", row=idx,
            )


def validate_payload(payload: InvoicePayload) -> None:
    """Sanity check on an assembled payload before it leaves the process."""
    if not payload.line_items:
        raise InvoiceValidationError("At least one line item is required.", field="line_items")
    if payload.financials.grand_total < 0:
        raise InvoiceValidationError("Grand Total cannot be negative.", field="financials.grand_total")
