# gst_invoice/api/v1/routes/history.py
"""Past sales invoices and purchase expenses, formatted for the history table."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from gst_invoice.core.config import settings
from gst_invoice.domain.services.gst_analytics import invoice_tax
from gst_invoice.domain.services.money_format import format_currency, format_date
from gst_invoice.infrastructure.external.record_store_client import (
    RecordStoreClient,
    RecordStoreError,
)

from gst_invoice.api.v1.deps import get_record_store
from gst_invoice.api.v1.envelope import PaginationParams, paginated
from gst_invoice.api.v1.schemas.analytics import PurchaseRowSchema, SalesRowSchema

logger = logging.getLogger("api.v1.history")

router = APIRouter(prefix="/history", tags=["History"])


@router.get("/sales", response_model=dict)
async def sales_history(
    page: PaginationParams = Depends(),
    store: RecordStoreClient = Depends(get_record_store),
):
    try:
        invoices = await store.fetch_invoices()
    except RecordStoreError as exc:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(exc)) from exc

    rows = [
        SalesRowSchema(
            id=inv.id,
            invoice_number=inv.invoice_number,
            date=format_date(inv.invoice_date),
            party=inv.client_name,
            gstin=inv.gstin,
            amount=inv.amount,
            amount_display=format_currency(inv.amount),
            gst_total=invoice_tax(inv, settings.DEFAULT_GST_RATE),
            status=inv.status,
            pdf_link=inv.pdf_link,
        ).model_dump()
        for inv in invoices[page.offset:page.offset + page.limit]
    ]
    return paginated(rows, total=len(invoices), limit=page.limit, offset=page.offset)


@router.get("/purchases", response_model=dict)
async def purchase_history(
    page: PaginationParams = Depends(),
    store: RecordStoreClient = Depends(get_record_store),
):
    try:
        expenses = await store.fetch_expenses()
    except RecordStoreError as exc:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(exc)) from exc

    rows = [
        PurchaseRowSchema(
            id=exp.id,
            invoice_number=exp.invoice_number,
            date=format_date(exp.date),
            party=exp.vendor_name,
            gstin=exp.gstin,
            amount=exp.total_amount,
            amount_display=format_currency(exp.total_amount),
            itc=exp.gst_amount,
            itc_display=format_currency(exp.gst_amount),
            category=exp.category,
        ).model_dump()
        for exp in expenses[page.offset:page.offset + page.limit]
    ]
    return paginated(rows, total=len(expenses), limit=page.limit, offset=page.offset)
