"""HTTP-level tests for the v1 API (collaborators replaced via dependency_overrides)."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from gst_invoice.api.v1.deps import get_profile_store, get_record_store, get_webhook_client
from gst_invoice.infrastructure.external.invoice_webhook_client import InvoiceSubmissionError
from gst_invoice.infrastructure.external.record_store_client import RecordStoreError
from gst_invoice.infrastructure.profile_store import ProfileStore
from gst_invoice.main import app


class FakeStore:
    def __init__(self, invoices=None, expenses=None, fail_invoices=False):
        self.invoices = invoices or []
        self.expenses = expenses or []
        self.fail_invoices = fail_invoices

    async def fetch_invoices(self, limit=None):
        if self.fail_invoices:
            raise RecordStoreError("Record store unreachable")
        return self.invoices

    async def fetch_expenses(self, limit=None):
        return self.expenses

    async def fetch_expenses_optional(self, limit=None):
        return self.expenses


class FakeWebhook:
    def __init__(self, url="https://automation.example.test/hook", error=None):
        self.url = url
        self.error = error
        self.sent = []

    async def submit(self, payload):
        if self.error:
            raise self.error
        self.sent.append(payload)


@pytest.fixture
def profiles(tmp_path):
    return ProfileStore(tmp_path / "profile.json")


@pytest.fixture
def client(profiles):
    app.dependency_overrides[get_profile_store] = lambda: profiles
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def form(supplier, buyer, meta, items) -> dict:
    return {
        "supplier_details": supplier.model_dump(),
        "buyer_details": buyer.model_dump(),
        "invoice_meta": {**meta.model_dump(mode="json"), "gst_type": "intra"},
        "line_items": [i.model_dump() for i in items],
    }


def test_health(client):
    r = client.get("/")
    assert r.status_code == 200
    assert r.json()["status"] == "ok"


class TestInvoiceRoutes:

    def test_estimate(self, client, items):
        r = client.post("/api/v1/invoices/estimate", json={
            "line_items": [i.model_dump() for i in items], "gst_type": "inter", "gst_rate": 18,
        })
        assert r.status_code == 200
        data = r.json()["data"]
        assert data["igst"] == 180
        assert data["cgst"] == 0
        assert data["grand_total"] == 1180
        assert data["grand_total_display"] == "₹1,180.00"
        assert data["amount_in_words"] == "One Thousand One Hundred Eighty only"

    def test_estimate_amounts_are_numbers(self, client, items):
        r = client.post("/api/v1/invoices/estimate", json={"line_items": [i.model_dump() for i in items]})
        data = r.json()["data"]
        for key in ("taxable_total", "cgst", "sgst", "igst", "tax_amount", "grand_total"):
            assert isinstance(data[key], (int, float)), key
        assert data["cgst"] == 90

    def test_estimate_bad_classification(self, client):
        r = client.post("/api/v1/invoices/estimate", json={"line_items": [], "gst_type": "export"})
        assert r.status_code == 422

    def test_preview(self, client, form):
        r = client.post("/api/v1/invoices/preview", json=form)
        assert r.status_code == 200
        body = r.json()
        assert body["status"] == "ok"
        payload = body["data"]
        assert payload["financials"]["cgst_amount"] == 90.0
        assert payload["financials"]["grand_total"] == 1180.0
        assert payload["invoice_details"]["gst_type"] == "intrastate"
        assert "vendor_code" not in payload["buyer_details"]

    def test_preview_validation_error(self, client, form):
        form["line_items"][0]["quantity"] = 0
        r = client.post("/api/v1/invoices/preview", json=form)
        assert r.status_code == 422
        body = r.json()
        assert body["status"] == "error"
        assert body["message"] == "Row 1: Quantity must be > 0."
        assert body["errors"][0]["row"] == 1
        assert body["errors"][0]["field"] == "line_items.quantity"

    def test_preview_malformed_body(self, client, form):
        form.pop("buyer_details")
        r = client.post("/api/v1/invoices/preview", json=form)
        assert r.status_code == 422
        body = r.json()
        assert body["status"] == "error"
        assert any("buyer_details" in e["field"] for e in body["errors"])

    def test_preview_uses_saved_profile(self, client, form, profiles):
        form.pop("supplier_details")
        r = client.post("/api/v1/invoices/preview", json=form)
        assert r.status_code == 200
        assert r.json()["data"]["supplier_details"]["legal_name"] == "Your Company Name"

    def test_submit(self, client, form):
        webhook = FakeWebhook()
        app.dependency_overrides[get_webhook_client] = lambda: webhook
        r = client.post("/api/v1/invoices/submit", json=form)
        assert r.status_code == 200
        assert r.json()["message"] == "Invoice successfully generated!"
        assert r.json()["data"]["grand_total"] == 1180.0
        assert len(webhook.sent) == 1
        assert webhook.sent[0].financials.grand_total == 1180.0

    def test_submit_upstream_failure(self, client, form):
        webhook = FakeWebhook(error=InvoiceSubmissionError("API Error: 500", status_code=500))
        app.dependency_overrides[get_webhook_client] = lambda: webhook
        r = client.post("/api/v1/invoices/submit", json=form)
        assert r.status_code == 502
        assert r.json()["errors"][0]["upstream_status"] == 500

    def test_submit_unconfigured(self, client, form):
        app.dependency_overrides[get_webhook_client] = lambda: FakeWebhook(url="")
        r = client.post("/api/v1/invoices/submit", json=form)
        assert r.status_code == 503

    def test_submit_invalid_form_not_sent(self, client, form):
        webhook = FakeWebhook()
        app.dependency_overrides[get_webhook_client] = lambda: webhook
        form["buyer_details"]["name"] = ""
        r = client.post("/api/v1/invoices/submit", json=form)
        assert r.status_code == 422
        assert webhook.sent == []


class TestAnalyticsRoutes:

    def test_dashboard(self, client, sample_invoices, sample_expenses):
        app.dependency_overrides[get_record_store] = lambda: FakeStore(sample_invoices, sample_expenses)
        r = client.get("/api/v1/analytics/gst")
        assert r.status_code == 200
        data = r.json()["data"]
        assert data["totals"]["output"] == 3240
        assert data["totals"]["input"] == pytest.approx(1125.09)
        assert data["totals"]["is_credit"] is False
        assert [p["name"] for p in data["chart_data"]] == ["2024-12", "2025-01", "2025-02"]
        assert data["chart_data"][1]["Liability"] == 1800
        assert data["chart_data"][1]["Credit"] == 180
        assert data["buyer_stats"][0]["name"] == "XYZ Enterprises"
        assert data["buyer_stats"][0]["invoice_count"] == 2
        assert data["vendor_pie"][0]["name"] == "Cloud Hosting Co"
        assert data["data_quality"]["invoices_backfilled_tax"] == 1

    def test_dashboard_amounts_are_numbers(self, client, sample_invoices, sample_expenses):
        app.dependency_overrides[get_record_store] = lambda: FakeStore(sample_invoices, sample_expenses)
        data = client.get("/api/v1/analytics/gst").json()["data"]
        numbers = [
            *data["totals"].values(),
            *(p[k] for p in data["chart_data"] for k in ("Liability", "Credit")),
            *(s["value"] for s in data["client_pie"] + data["vendor_pie"]),
            *(c["total_gst"] for c in data["buyer_stats"]),
            *(i["amount"] for c in data["buyer_stats"] for i in c["invoices"]),
            *(v["total_input_credit"] for v in data["vendor_stats"]),
        ]
        assert all(isinstance(n, (bool, int, float)) for n in numbers)
        assert data["buyer_stats"][0]["invoices"][0]["amount"] == 11800

    def test_dashboard_carry_forward_message(self, client, sample_expenses):
        app.dependency_overrides[get_record_store] = lambda: FakeStore([], sample_expenses)
        r = client.get("/api/v1/analytics/gst")
        body = r.json()
        assert body["data"]["totals"]["is_credit"] is True
        assert body["data"]["totals"]["payable"] == 0
        assert "carries forward" in body["message"]
        assert body["data"]["client_pie"][0]["name"] == "No Data"

    def test_dashboard_store_failure(self, client):
        app.dependency_overrides[get_record_store] = lambda: FakeStore(fail_invoices=True)
        r = client.get("/api/v1/analytics/gst")
        assert r.status_code == 502
        assert r.json()["message"] == "Record store unreachable"

    def test_csv_export(self, client, sample_invoices, sample_expenses):
        app.dependency_overrides[get_record_store] = lambda: FakeStore(sample_invoices, sample_expenses)
        r = client.get("/api/v1/analytics/gst/export.csv")
        assert r.status_code == 200
        assert r.headers["content-type"].startswith("text/csv")
        assert "gst_report.csv" in r.headers["content-disposition"]
        assert r.text.splitlines()[0] == "Month,Liability (Output),Credit (Input)"
        assert "2025-01,1800.00,180.00" in r.text.splitlines()


class TestHistoryRoutes:

    def test_sales(self, client, sample_invoices):
        app.dependency_overrides[get_record_store] = lambda: FakeStore(sample_invoices)
        r = client.get("/api/v1/history/sales", params={"limit": 2})
        assert r.status_code == 200
        page = r.json()["data"]
        assert page["total"] == 4
        assert page["has_more"] is True
        first = page["items"][0]
        assert first["date"] == "15 Jan 2025"
        assert first["amount_display"] == "₹11,800.00"
        assert first["amount"] == 11800
        assert first["gst_total"] == 1800

    def test_purchases(self, client, sample_expenses):
        app.dependency_overrides[get_record_store] = lambda: FakeStore(expenses=sample_expenses)
        r = client.get("/api/v1/history/purchases")
        page = r.json()["data"]
        assert page["total"] == 3
        assert page["items"][2]["itc_display"] == "₹45.09"
        assert page["items"][2]["itc"] == pytest.approx(45.09)


class TestProfileRoutes:

    def test_get_default(self, client):
        r = client.get("/api/v1/profile")
        assert r.status_code == 200
        assert r.json()["data"]["legal_name"] == "Your Company Name"

    def test_put_then_get(self, client, supplier):
        r = client.put("/api/v1/profile", json=supplier.model_dump())
        assert r.status_code == 200
        assert client.get("/api/v1/profile").json()["data"]["gstin"] == supplier.gstin

    def test_put_invalid_gstin(self, client, supplier):
        body = supplier.model_dump()
        body["gstin"] = "bad"
        r = client.put("/api/v1/profile", json=body)
        assert r.status_code == 422
