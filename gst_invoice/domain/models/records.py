"""
Historical sales / purchase rows as stored in the record store.

Rows come from an untyped table, so numeric columns tolerate strings, nulls
and garbage (coerced to zero) and text columns stringify whatever scalar
arrives, instead of rejecting the whole row.
"""

from __future__ import annotations

from decimal import Decimal, InvalidOperation
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, field_validator

from gst_invoice.domain.models.gst import ZERO


def to_decimal(val: Any) -> Decimal:
    """Safely convert a value to Decimal; None / non-numeric / non-finite become 0."""
    if val is None or isinstance(val, bool):
        return ZERO
    try:
        d = Decimal(str(val).strip())
    except (InvalidOperation, ValueError):
        return ZERO
    if not d.is_finite():
        return ZERO
    return d


def to_optional_str(val: Any) -> Optional[str]:
    return None if val is None else str(val)


class InvoiceRecord(BaseModel):
    """A generated sales invoice."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    id: Optional[int | str] = None
    created_at: Optional[str] = None
    invoice_number: Optional[str] = None
    client_name: str = ""
    gstin: Optional[str] = None
    status: Optional[str] = None
    amount: Decimal = ZERO  # grand total
    invoice_date: Optional[str] = None
    pdf_link: Optional[str] = None
    gst_total: Optional[Decimal] = None

    @field_validator("amount", mode="before")
    @classmethod
    def _coerce_amount(cls, v):
        return to_decimal(v)

    @field_validator("gst_total", mode="before")
    @classmethod
    def _coerce_gst_total(cls, v):
        if v is None:
            return None
        return to_decimal(v)

    @field_validator("client_name", mode="before")
    @classmethod
    def _coerce_name(cls, v):
        return "" if v is None else str(v)

    @field_validator(
        "created_at", "invoice_number", "gstin", "status", "invoice_date", "pdf_link", mode="before",
    )
    @classmethod
    def _coerce_text(cls, v):
        return to_optional_str(v)


class ExpenseRecord(BaseModel):
    """A purchase bill; ``gst_amount`` is claimed as input tax credit."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    id: Optional[int | str] = None
    created_at: Optional[str] = None
    date: Optional[str] = None
    invoice_number: Optional[str] = None
    vendor_name: str = ""
    gstin: Optional[str] = None
    taxable_amount: Decimal = ZERO
    gst_amount: Decimal = ZERO
    total_amount: Decimal = ZERO
    category: Optional[str] = None

    @field_validator("taxable_amount", "gst_amount", "total_amount", mode="before")
    @classmethod
    def _coerce_money(cls, v):
        return to_decimal(v)

    @field_validator("vendor_name", mode="before")
    @classmethod
    def _coerce_name(cls, v):
        return "" if v is None else str(v)

    @field_validator("created_at", "date", "invoice_number", "gstin", "category", mode="before")
    @classmethod
    def _coerce_text(cls, v):
        return to_optional_str(v)
