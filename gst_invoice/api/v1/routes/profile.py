# gst_invoice/api/v1/routes/profile.py
"""Seller profile used as the default supplier on new invoices."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, status

from gst_invoice.domain.models.invoice import SupplierDetails
from gst_invoice.domain.services.invoice_validation import is_valid_gstin
from gst_invoice.infrastructure.profile_store import ProfileStore, ProfileStoreError

from gst_invoice.api.v1.deps import get_profile_store
from gst_invoice.api.v1.envelope import ok

router = APIRouter(prefix="/profile", tags=["Profile"])


@router.get("", response_model=dict)
async def get_profile(profiles: ProfileStore = Depends(get_profile_store)):
    return ok(data=profiles.load().model_dump())


@router.put("", response_model=dict)
async def put_profile(
    body: SupplierDetails,
    profiles: ProfileStore = Depends(get_profile_store),
):
    if body.gstin and not is_valid_gstin(body.gstin):
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail={"field": "gstin", "message": "Invalid Supplier GSTIN format."},
        )
    try:
        profiles.save(body)
    except ProfileStoreError as exc:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(exc)) from exc
    return ok(data=body.model_dump(), message="Profile saved")
