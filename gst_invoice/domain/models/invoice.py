"""Invoice form inputs and the payload sent to the PDF webhook."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from gst_invoice.domain.models.gst import GstClassification


# ---------------------------------------------------------------------------
# Form inputs
# ---------------------------------------------------------------------------

class SupplierDetails(BaseModel):
    legal_name: str = ""
    gstin: str = ""
    address: str = ""
    city: Optional[str] = None
    state_code: Optional[str] = None
    email: Optional[str] = None
    bank_name: Optional[str] = None
    account_number: Optional[str] = None
    ifsc_code: Optional[str] = None
    auth_signatory: Optional[str] = None


class BuyerDetails(BaseModel):
    name: str = ""
    gstin: str = ""
    address: str = ""
    vendor_code: Optional[str] = None


class InvoiceMeta(BaseModel):
    order_ref_no: Optional[str] = None
    order_date: str = ""
    invoice_date: str = ""
    gst_type: GstClassification = GstClassification.INTRASTATE
    gst_rate: Optional[float] = Field(default=None, ge=0)

    @field_validator("gst_type", mode="before")
    @classmethod
    def _parse_gst_type(cls, v):
        # Form state uses "intra" / "inter"
        return GstClassification.parse(v)


class LineItemInput(BaseModel):
    description: str = ""
    hsn_code: str = ""
    quantity: float = 1
    unit: str = "Nos"
    rate_per_unit: float = 0


# ---------------------------------------------------------------------------
# Webhook payload (immutable once composed)
# ---------------------------------------------------------------------------

class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True)


class PayloadMeta(_Frozen):
    action: str = "create_invoice"
    timestamp: str


class PayloadBuyer(_Frozen):
    name: str
    gstin: str
    address: str
    vendor_code: Optional[str] = None


class PayloadSupplier(_Frozen):
    legal_name: str
    gstin: str
    address: str
    city: Optional[str] = None
    state_code: Optional[str] = None
    email: Optional[str] = None
    bank_name: Optional[str] = None
    account_number: Optional[str] = None
    ifsc_code: Optional[str] = None
    auth_signatory: Optional[str] = None


class InvoiceDetails(_Frozen):
    invoice_date: str
    order_ref_no: Optional[str] = None
    order_date: str
    gst_type: str
    gst_rate: float


class ApiLineItem(_Frozen):
    serial_no: int
    description: str
    hsn_code: str
    quantity: float
    unit: str
    rate: float
    rate_per_unit: float
    amount: float


class TaxBreakup(_Frozen):
    cgst_rate: float
    sgst_rate: float
    igst_rate: float


class Financials(_Frozen):
    taxable_total: float
    cgst_amount: float
    sgst_amount: float
    igst_amount: float
    grand_total: float
    amount_in_words: str
    tax_breakup: TaxBreakup
    cgst_rate: float
    sgst_rate: float
    igst_rate: float


class InvoicePayload(_Frozen):
    meta: PayloadMeta
    supplier_details: PayloadSupplier
    buyer_details: PayloadBuyer
    invoice_details: InvoiceDetails
    line_items: tuple[ApiLineItem, ...]
    financials: Financials
