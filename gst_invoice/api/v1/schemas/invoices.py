# gst_invoice/api/v1/schemas/invoices.py
"""Request and response schemas for invoice endpoints."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field

from gst_invoice.domain.models.gst import GstClassification
from gst_invoice.domain.models.invoice import (
    BuyerDetails,
    InvoiceMeta,
    LineItemInput,
    SupplierDetails,
)


class InvoiceRequest(BaseModel):
    # Falls back to the saved seller profile when omitted
    supplier_details: Optional[SupplierDetails] = None
    buyer_details: BuyerDetails
    invoice_meta: InvoiceMeta
    line_items: list[LineItemInput] = Field(default_factory=list)


class EstimateRequest(BaseModel):
    line_items: list[LineItemInput] = Field(default_factory=list)
    gst_type: str = GstClassification.INTRASTATE.value
    gst_rate: Optional[float] = Field(default=None, ge=0)


class EstimateResponse(BaseModel):
    taxable_total: float
    cgst: float
    sgst: float
    igst: float
    tax_amount: float
    grand_total: float
    grand_total_display: str
    amount_in_words: str


class SubmitResponse(BaseModel):
    submitted: bool = True
    grand_total: float
    amount_in_words: str
