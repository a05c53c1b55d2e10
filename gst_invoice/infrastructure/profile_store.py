# gst_invoice/infrastructure/profile_store.py
"""Seller profile persisted as a small JSON file next to the service."""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path

from pydantic import ValidationError

from gst_invoice.core.config import settings
from gst_invoice.domain.models.invoice import SupplierDetails

logger = logging.getLogger("profile_store")

DEFAULT_PROFILE = SupplierDetails(
    legal_name="Your Company Name",
    gstin="29AAAAA0000A1Z5",
    address="Your Business Address",
    city="",
    state_code="",
    email="",
    bank_name="",
    account_number="",
    ifsc_code="",
    auth_signatory="",
)


class ProfileStoreError(Exception):
    """Raised when the seller profile cannot be written."""


class ProfileStore:
    def __init__(self, path: str | Path | None = None) -> None:
        self.path = Path(path if path is not None else settings.SELLER_PROFILE_PATH)

    def load(self) -> SupplierDetails:
        """Stored profile, or the placeholder profile when none is saved or it is unreadable."""
        if not self.path.exists():
            return DEFAULT_PROFILE.model_copy()
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
            return SupplierDetails.model_validate(data)
        except (OSError, ValueError, ValidationError):
            logger.warning("Failed to load seller profile from %s", self.path, exc_info=True)
            return DEFAULT_PROFILE.model_copy()

    def save(self, profile: SupplierDetails) -> None:
        """Write the profile atomically (temp file + rename)."""
        tmp = None
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp = tempfile.mkstemp(dir=self.path.parent, prefix=".profile-", suffix=".json")
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                json.dump(profile.model_dump(), fh, ensure_ascii=False, indent=2)
            os.replace(tmp, self.path)
        except OSError as exc:
            if tmp is not None:
                Path(tmp).unlink(missing_ok=True)
            logger.error("Failed to save seller profile to %s: %s", self.path, exc)
            raise ProfileStoreError(f"Failed to save seller profile: {exc}") from exc
        logger.info("Seller profile saved for %s", profile.legal_name)
