# gst_invoice/api/v1/schemas/analytics.py
"""Response schemas for analytics and history endpoints."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class TotalsSchema(BaseModel):
    output: float
    input: float
    net: float
    payable: float
    carry_forward: float
    is_credit: bool


class ChartPointSchema(BaseModel):
    # Chart keys as the dashboard consumes them
    model_config = ConfigDict(populate_by_name=True)

    name: str
    liability: float = Field(serialization_alias="Liability")
    credit: float = Field(serialization_alias="Credit")


class SliceSchema(BaseModel):
    name: str
    value: float
    color: str


class ClientInvoiceSchema(BaseModel):
    # Contributing invoice, amounts as plain numbers
    id: Optional[int | str] = None
    invoice_number: Optional[str] = None
    invoice_date: Optional[str] = None
    client_name: str
    gstin: Optional[str] = None
    status: Optional[str] = None
    amount: float
    gst_total: Optional[float] = None
    pdf_link: Optional[str] = None


class ClientStatsSchema(BaseModel):
    name: str
    gstin: str
    total_sales: float
    total_gst: float
    invoice_count: int
    invoices: list[ClientInvoiceSchema]


class VendorStatsSchema(BaseModel):
    name: str
    gstin: str
    total_spent: float
    total_input_credit: float


class GstAnalyticsSchema(BaseModel):
    totals: TotalsSchema
    chart_data: list[ChartPointSchema]
    buyer_stats: list[ClientStatsSchema]
    vendor_stats: list[VendorStatsSchema]
    client_pie: list[SliceSchema]
    vendor_pie: list[SliceSchema]
    data_quality: dict


class SalesRowSchema(BaseModel):
    id: Optional[int | str] = None
    invoice_number: Optional[str] = None
    date: str
    party: str
    gstin: Optional[str] = None
    amount: float
    amount_display: str
    gst_total: float
    status: Optional[str] = None
    pdf_link: Optional[str] = None


class PurchaseRowSchema(BaseModel):
    id: Optional[int | str] = None
    invoice_number: Optional[str] = None
    date: str
    party: str
    gstin: Optional[str] = None
    amount: float
    amount_display: str
    itc: float
    itc_display: str
    category: Optional[str] = None
