from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum

ZERO = Decimal("0")


class GstClassification(str, Enum):
    """Liability type of a supply: within one state or across states."""

    INTRASTATE = "intrastate"
    INTERSTATE = "interstate"

    @classmethod
    def parse(cls, value: "GstClassification | str") -> "GstClassification":
        """Accept the enum, its value, or the short form aliases ``intra`` / ``inter``."""
        if isinstance(value, cls):
            return value
        key = str(value).strip().lower()
        if key in ("intra", "intrastate"):
            return cls.INTRASTATE
        if key in ("inter", "interstate"):
            return cls.INTERSTATE
        raise ValueError(f"Unknown GST classification: {value!r}")


@dataclass(frozen=True)
class TaxBreakdown:
    """Tax split for a taxable base. Unused components are zero, never None."""

    cgst: Decimal = ZERO
    sgst: Decimal = ZERO
    igst: Decimal = ZERO
    tax_amount: Decimal = ZERO
    grand_total: Decimal = ZERO


@dataclass(frozen=True)
class ComponentRates:
    """Per-component rate percentages printed on the invoice."""

    cgst_rate: Decimal = ZERO
    sgst_rate: Decimal = ZERO
    igst_rate: Decimal = ZERO
