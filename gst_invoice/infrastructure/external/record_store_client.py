# gst_invoice/infrastructure/external/record_store_client.py
"""
Read-only client for the invoice / expense tables (Supabase PostgREST).

    GET {SUPABASE_URL}/rest/v1/invoices?select=*&order=created_at.desc&limit=100
    GET {SUPABASE_URL}/rest/v1/expenses?select=*&order=date.desc&limit=100

Required headers on every call: ``apikey`` and ``Authorization: Bearer``
(both the anon key).
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List

import httpx
from pydantic import ValidationError

from gst_invoice.core.config import settings
from gst_invoice.domain.models.records import ExpenseRecord, InvoiceRecord

logger = logging.getLogger("record_store_client")

_TIMEOUT = 30

INVOICES_TABLE = "invoices"
EXPENSES_TABLE = "expenses"


class RecordStoreError(Exception):
    """Raised when the record store is unconfigured or returns an error."""

    def __init__(self, message: str, status_code: int = 0, response: dict | None = None):
        super().__init__(message)
        self.status_code = status_code
        self.response = response or {}


class RecordStoreClient:
    """Fetches historical sales invoices and purchase expenses."""

    def __init__(
        self,
        base_url: str | None = None,
        api_key: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        base = base_url if base_url is not None else settings.SUPABASE_URL
        self.base = base.rstrip("/")
        self.api_key = api_key if api_key is not None else settings.SUPABASE_ANON_KEY
        self._transport = transport

    @classmethod
    def is_configured(cls) -> bool:
        return bool(settings.SUPABASE_URL and settings.SUPABASE_ANON_KEY)

    def _headers(self) -> Dict[str, str]:
        return {
            "apikey": self.api_key,
            "Authorization": f"Bearer {self.api_key}",
            "Accept": "application/json",
        }

    async def _select(self, table: str, order: str, limit: int) -> List[Dict[str, Any]]:
        if not (self.base and self.api_key):
            raise RecordStoreError("Record store is not configured (SUPABASE_URL / SUPABASE_ANON_KEY)")

        url = f"{self.base}/rest/v1/{table}"
        params = {"select": "*", "order": order, "limit": str(limit)}
        logger.info("Record store GET %s order=%s limit=%d", table, order, limit)

        async with httpx.AsyncClient(timeout=_TIMEOUT, transport=self._transport) as client:
            try:
                r = await client.get(url, headers=self._headers(), params=params)
                r.raise_for_status()
                data = r.json()
            except httpx.HTTPStatusError as exc:
                body = {}
                try:
                    body = exc.response.json()
                except ValueError:
                    pass
                if not isinstance(body, dict):
                    body = {"body": body}
                logger.error("Record store HTTP error: %s -> %d", table, exc.response.status_code)
                raise RecordStoreError(
                    body.get("message") or f"Record store error: {exc.response.status_code}",
                    status_code=exc.response.status_code,
                    response=body,
                ) from exc
            except httpx.RequestError as exc:
                logger.error("Record store unreachable: %s", exc)
                raise RecordStoreError(f"Record store unreachable: {exc}") from exc
            except ValueError as exc:
                raise RecordStoreError(f"Record store returned non-JSON body for {table}") from exc

        if not isinstance(data, list):
            raise RecordStoreError(f"Unexpected response shape for {table}", response={"body": data})
        return data

    async def fetch_invoices(self, limit: int | None = None) -> List[InvoiceRecord]:
        """Newest invoices first."""
        rows = await self._select(
            INVOICES_TABLE, "created_at.desc", limit or settings.RECORD_FETCH_LIMIT,
        )
        return _parse_rows(rows, InvoiceRecord, INVOICES_TABLE)

    async def fetch_expenses(self, limit: int | None = None) -> List[ExpenseRecord]:
        """Most recent bill date first."""
        rows = await self._select(
            EXPENSES_TABLE, "date.desc", limit or settings.RECORD_FETCH_LIMIT,
        )
        return _parse_rows(rows, ExpenseRecord, EXPENSES_TABLE)

    async def fetch_expenses_optional(self, limit: int | None = None) -> List[ExpenseRecord]:
        """Expenses for analytics; a missing or failing expenses table yields no rows."""
        try:
            return await self.fetch_expenses(limit)
        except RecordStoreError as exc:
            logger.warning("Expenses unavailable, continuing without input credit: %s", exc)
            return []


def _parse_rows(rows: List[Dict[str, Any]], model, table: str) -> list:
    records = []
    for row in rows:
        try:
            records.append(model.model_validate(row))
        except ValidationError:
            logger.warning("Skipping malformed %s row id=%s", table, row.get("id"))
    return records
