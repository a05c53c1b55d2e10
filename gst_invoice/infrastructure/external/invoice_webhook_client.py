# gst_invoice/infrastructure/external/invoice_webhook_client.py
"""
Client for the invoice automation webhook (n8n).

The webhook receives one invoice payload as JSON, renders the PDF and stores
the invoice row. Any 2xx status means the invoice was accepted; the response
body is not parsed (n8n may answer with plain text).

Delivery is at most once per call: no retries, no queueing. A failed submit
raises InvoiceSubmissionError and the caller may resubmit.
"""

from __future__ import annotations

import logging
from typing import Any, Dict

import httpx

from gst_invoice.core.config import settings
from gst_invoice.domain.models.invoice import InvoicePayload
from gst_invoice.domain.services.invoice_composer import payload_to_json

logger = logging.getLogger("invoice_webhook_client")


class InvoiceSubmissionError(Exception):
    """Raised when the webhook rejects the payload or cannot be reached."""

    def __init__(self, message: str, status_code: int = 0, response: str = ""):
        super().__init__(message)
        self.status_code = status_code
        self.response = response


class InvoiceWebhookClient:
    """POSTs composed invoices to the PDF generation webhook."""

    def __init__(
        self,
        url: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.url = url if url is not None else settings.INVOICE_WEBHOOK_URL
        self.timeout = timeout if timeout is not None else settings.INVOICE_WEBHOOK_TIMEOUT
        self._transport = transport

    @classmethod
    def is_configured(cls) -> bool:
        return bool(settings.INVOICE_WEBHOOK_URL)

    def _headers(self) -> Dict[str, str]:
        return {"Content-Type": "application/json"}

    async def submit(self, payload: InvoicePayload | Dict[str, Any]) -> None:
        """Send one invoice. Returns on 2xx, raises InvoiceSubmissionError otherwise."""
        if not self.url:
            raise InvoiceSubmissionError("Invoice webhook URL is not configured")

        body = payload_to_json(payload) if isinstance(payload, InvoicePayload) else payload
        items = len(body.get("line_items", []))
        logger.info("Submitting invoice to webhook (line_items=%d)", items)

        async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
            try:
                r = await client.post(self.url, json=body, headers=self._headers())
                r.raise_for_status()
            except httpx.HTTPStatusError as exc:
                status_code = exc.response.status_code
                logger.error("Invoice webhook rejected payload: status=%d", status_code)
                raise InvoiceSubmissionError(
                    f"API Error: {status_code} {exc.response.reason_phrase}".strip(),
                    status_code=status_code,
                    response=exc.response.text[:500],
                ) from exc
            except httpx.RequestError as exc:
                logger.error("Invoice webhook unreachable: %s", exc)
                raise InvoiceSubmissionError(f"Failed to reach invoice webhook: {exc}") from exc

        logger.info("Invoice accepted by webhook: status=%d", r.status_code)
