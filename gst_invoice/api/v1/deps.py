# gst_invoice/api/v1/deps.py
"""
FastAPI dependencies for the v1 API layer.

Each external collaborator is provided through a dependency so tests can
swap it with ``app.dependency_overrides``.
"""

from __future__ import annotations

from gst_invoice.infrastructure.external.invoice_webhook_client import InvoiceWebhookClient
from gst_invoice.infrastructure.external.record_store_client import RecordStoreClient
from gst_invoice.infrastructure.profile_store import ProfileStore


def get_record_store() -> RecordStoreClient:
    return RecordStoreClient()


def get_webhook_client() -> InvoiceWebhookClient:
    return InvoiceWebhookClient()


def get_profile_store() -> ProfileStore:
    return ProfileStore()
