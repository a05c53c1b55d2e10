from fastapi import APIRouter

from gst_invoice.infrastructure.external.invoice_webhook_client import InvoiceWebhookClient
from gst_invoice.infrastructure.external.record_store_client import RecordStoreClient

router = APIRouter()


@router.get("/")
async def health():
    return {
        "status": "ok",
        "message": "GST Invoice Service Running",
        "webhook_configured": InvoiceWebhookClient.is_configured(),
        "record_store_configured": RecordStoreClient.is_configured(),
    }
