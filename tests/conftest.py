"""Shared test fixtures for the GST invoice test suite."""

import asyncio

import pytest

from gst_invoice.domain.models.invoice import (
    BuyerDetails,
    InvoiceMeta,
    LineItemInput,
    SupplierDetails,
)
from gst_invoice.domain.models.records import ExpenseRecord, InvoiceRecord


@pytest.fixture(scope="session")
def event_loop():
    """Use a single event loop for the entire test session."""
    loop = asyncio.new_event_loop()
    yield loop
    loop.close()


@pytest.fixture
def supplier() -> SupplierDetails:
    return SupplierDetails(
        legal_name="ABC Traders Pvt Ltd",
        gstin="36AABCU9603R1ZM",
        address="Banjara Hills, Hyderabad",
        city="Hyderabad",
        state_code="36",
        email="accounts@abctraders.in",
    )


@pytest.fixture
def buyer() -> BuyerDetails:
    return BuyerDetails(
        name="XYZ Enterprises",
        gstin="36AADCB2230M1ZP",
        address="Madhapur, Hyderabad",
        vendor_code="",
    )


@pytest.fixture
def meta() -> InvoiceMeta:
    return InvoiceMeta(
        order_ref_no="",
        order_date="2025-01-10",
        invoice_date="2025-01-15",
        gst_type="intra",
        gst_rate=18,
    )


@pytest.fixture
def items() -> list[LineItemInput]:
    return [
        LineItemInput(description="Laptop stand", hsn_code="8473", quantity=2, unit="Nos", rate_per_unit=250),
        LineItemInput(description="USB-C hub", hsn_code="8471", quantity=1, unit="Nos", rate_per_unit=500),
    ]


@pytest.fixture
def sample_invoices() -> list[InvoiceRecord]:
    """Sales rows as they come back from the invoices table."""
    return [
        InvoiceRecord(id=1, invoice_number="INV-001", client_name="XYZ Enterprises",
                      gstin="36AADCB2230M1ZP", amount=11800, invoice_date="2025-01-15", gst_total=1800),
        InvoiceRecord(id=2, invoice_number="INV-002", client_name="XYZ Enterprises",
                      gstin="36AADCB2230M1ZP", amount=5900, invoice_date="2025-02-03", gst_total=900),
        # No stored tax: backfilled from the inclusive total (1180 @ 18% -> 180)
        InvoiceRecord(id=3, invoice_number="INV-003", client_name="Walk-in Customer",
                      amount=1180, invoice_date="2025-02-20", gst_total=None),
        InvoiceRecord(id=4, invoice_number="INV-004", client_name="Sharma & Sons",
                      gstin="27AAECR4582J1Z6", amount="2360.00", invoice_date="2024-12-31", gst_total="360"),
    ]


@pytest.fixture
def sample_expenses() -> list[ExpenseRecord]:
    """Purchase rows as they come back from the expenses table."""
    return [
        ExpenseRecord(id=10, date="2025-01-05", vendor_name="Office Mart", gstin="36AAACO1234F1Z2",
                      taxable_amount=1000, gst_amount=180, total_amount=1180, category="Supplies"),
        ExpenseRecord(id=11, date="2025-02-11", vendor_name="Cloud Hosting Co",
                      taxable_amount=5000, gst_amount=900, total_amount=5900),
        ExpenseRecord(id=12, date="2025-02-28", vendor_name="Office Mart", gstin="36AAACO1234F1Z2",
                      taxable_amount="250.50", gst_amount="45.09", total_amount="295.59"),
    ]
