# gst_invoice/domain/services/gst_export.py
"""
CSV export of the monthly liability vs. credit series.

One row per month: ``Month,Liability (Output),Credit (Input)`` with
two-decimal amounts.
"""

from __future__ import annotations

import csv
import io
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable

from gst_invoice.domain.services.gst_analytics import MonthlyAggregate

CSV_HEADER = ("Month", "Liability (Output)", "Credit (Input)")
CSV_FILENAME = "gst_report.csv"


def _fixed2(val: Decimal) -> str:
    return f"{val.quantize(Decimal('0.01'), rounding=ROUND_HALF_UP):.2f}"


def monthly_series_to_csv(series: Iterable[MonthlyAggregate]) -> str:
    buf = io.StringIO()
    writer = csv.writer(buf, lineterminator="\n")
    writer.writerow(CSV_HEADER)
    for row in series:
        writer.writerow([row.month, _fixed2(row.liability), _fixed2(row.credit)])
    return buf.getvalue()
