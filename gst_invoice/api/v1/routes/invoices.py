# gst_invoice/api/v1/routes/invoices.py
"""
Invoice preview, live estimate, and submission to the PDF webhook.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from gst_invoice.core.config import settings
from gst_invoice.domain.models.invoice import InvoicePayload
from gst_invoice.domain.services.invoice_composer import (
    compose_invoice,
    live_estimate,
    payload_to_json,
)
from gst_invoice.domain.services.invoice_validation import (
    InvoiceValidationError,
    validate_invoice_input,
    validate_payload,
)
from gst_invoice.domain.services.money_format import format_currency, number_to_words
from gst_invoice.infrastructure.external.invoice_webhook_client import (
    InvoiceSubmissionError,
    InvoiceWebhookClient,
)
from gst_invoice.infrastructure.profile_store import ProfileStore

from gst_invoice.api.v1.deps import get_profile_store, get_webhook_client
from gst_invoice.api.v1.envelope import ok
from gst_invoice.api.v1.schemas.invoices import (
    EstimateRequest,
    EstimateResponse,
    InvoiceRequest,
    SubmitResponse,
)

logger = logging.getLogger("api.v1.invoices")

router = APIRouter(prefix="/invoices", tags=["Invoices"])


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _build_payload(body: InvoiceRequest, profiles: ProfileStore) -> InvoicePayload:
    """Validate the form and compose a fresh payload; 422 on validation failure."""
    supplier = body.supplier_details or profiles.load()
    try:
        validate_invoice_input(supplier, body.buyer_details, body.invoice_meta, body.line_items)
        payload = compose_invoice(supplier, body.buyer_details, body.invoice_meta, body.line_items)
        validate_payload(payload)
    except InvoiceValidationError as exc:
        logger.info("Invoice validation failed: %s", exc.message)
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=exc.to_dict(),
        ) from exc
    return payload


# ---------------------------------------------------------------------------
# Live estimate (per keystroke, no validation)
# ---------------------------------------------------------------------------

@router.post("/estimate", response_model=dict)
async def estimate(body: EstimateRequest):
    """Running taxable / GST / grand totals for a partially filled form."""
    rate = body.gst_rate if body.gst_rate is not None else settings.DEFAULT_GST_RATE
    try:
        base, taxes = live_estimate(body.line_items, body.gst_type, rate)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(exc)) from exc

    resp = EstimateResponse(
        taxable_total=base,
        cgst=taxes.cgst,
        sgst=taxes.sgst,
        igst=taxes.igst,
        tax_amount=taxes.tax_amount,
        grand_total=taxes.grand_total,
        grand_total_display=format_currency(taxes.grand_total),
        amount_in_words=number_to_words(taxes.grand_total),
    )
    return ok(data=resp.model_dump())


# ---------------------------------------------------------------------------
# Preview
# ---------------------------------------------------------------------------

@router.post("/preview", response_model=dict)
async def preview(
    body: InvoiceRequest,
    profiles: ProfileStore = Depends(get_profile_store),
):
    """Compose the payload exactly as it would be submitted."""
    payload = _build_payload(body, profiles)
    return ok(data=payload_to_json(payload))


# ---------------------------------------------------------------------------
# Submit
# ---------------------------------------------------------------------------

@router.post("/submit", response_model=dict)
async def submit(
    body: InvoiceRequest,
    profiles: ProfileStore = Depends(get_profile_store),
    webhook: InvoiceWebhookClient = Depends(get_webhook_client),
):
    """Compose and send the invoice to the PDF webhook (single attempt)."""
    if not webhook.url:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Invoice webhook is not configured",
        )

    payload = _build_payload(body, profiles)
    try:
        await webhook.submit(payload)
    except InvoiceSubmissionError as exc:
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail={"message": str(exc), "upstream_status": exc.status_code},
        ) from exc

    resp = SubmitResponse(
        grand_total=payload.financials.grand_total,
        amount_in_words=payload.financials.amount_in_words,
    )
    return ok(data=resp.model_dump(), message="Invoice successfully generated!")
