# gst_invoice/api/v1/routes/analytics.py
"""
GST dashboard: output liability vs. input credit, monthly series, party
rollups, and CSV export.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Response, status

from gst_invoice.core.config import settings
from gst_invoice.domain.services.gst_analytics import GstAnalytics, build_gst_analytics
from gst_invoice.domain.services.gst_export import CSV_FILENAME, monthly_series_to_csv
from gst_invoice.infrastructure.external.record_store_client import (
    RecordStoreClient,
    RecordStoreError,
)

from gst_invoice.api.v1.deps import get_record_store
from gst_invoice.api.v1.envelope import ok
from gst_invoice.api.v1.schemas.analytics import (
    ChartPointSchema,
    ClientInvoiceSchema,
    ClientStatsSchema,
    GstAnalyticsSchema,
    SliceSchema,
    TotalsSchema,
    VendorStatsSchema,
)

logger = logging.getLogger("api.v1.analytics")

router = APIRouter(prefix="/analytics", tags=["Analytics"])


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

async def _load_analytics(store: RecordStoreClient) -> GstAnalytics:
    """Fetch records and fold them. Invoices are required, expenses optional."""
    try:
        invoices = await store.fetch_invoices()
    except RecordStoreError as exc:
        logger.error("Error fetching invoices for analytics: %s", exc)
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(exc)) from exc
    expenses = await store.fetch_expenses_optional()
    return build_gst_analytics(invoices, expenses, rate_percent=settings.DEFAULT_GST_RATE)


def _to_schema(result: GstAnalytics) -> GstAnalyticsSchema:
    t = result.totals
    return GstAnalyticsSchema(
        totals=TotalsSchema(
            output=t.output,
            input=t.input,
            net=t.net,
            payable=t.payable,
            carry_forward=t.carry_forward,
            is_credit=t.is_credit,
        ),
        chart_data=[
            ChartPointSchema(name=m.month, liability=m.liability, credit=m.credit)
            for m in result.monthly
        ],
        buyer_stats=[
            ClientStatsSchema(
                name=c.name,
                gstin=c.gstin,
                total_sales=c.total_sales,
                total_gst=c.total_gst,
                invoice_count=len(c.invoices),
                invoices=[ClientInvoiceSchema.model_validate(i.model_dump()) for i in c.invoices],
            )
            for c in result.clients
        ],
        vendor_stats=[
            VendorStatsSchema(
                name=v.name,
                gstin=v.gstin,
                total_spent=v.total_spent,
                total_input_credit=v.total_input_credit,
            )
            for v in result.vendors
        ],
        client_pie=[SliceSchema(name=s.name, value=s.value, color=s.color) for s in result.client_distribution],
        vendor_pie=[SliceSchema(name=s.name, value=s.value, color=s.color) for s in result.vendor_distribution],
        data_quality=result.data_quality.to_dict(),
    )


# ---------------------------------------------------------------------------
# Dashboard
# ---------------------------------------------------------------------------

@router.get("/gst", response_model=dict)
async def gst_dashboard(store: RecordStoreClient = Depends(get_record_store)):
    """Totals, monthly liability vs. credit, and top clients / vendors."""
    result = await _load_analytics(store)
    message = None
    if result.totals.is_credit:
        message = "Input credit exceeds output tax; balance carries forward."
    return ok(data=_to_schema(result).model_dump(by_alias=True), message=message)


@router.get("/gst/export.csv")
async def gst_export_csv(store: RecordStoreClient = Depends(get_record_store)):
    """Monthly series as a CSV download."""
    result = await _load_analytics(store)
    return Response(
        content=monthly_series_to_csv(result.monthly),
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": f'attachment; filename="{CSV_FILENAME}"'},
    )
