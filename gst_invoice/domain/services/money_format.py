# gst_invoice/domain/services/money_format.py
"""
Display formatting for rupee amounts.

- ``format_currency``: ``₹1,23,456.78`` (Indian digit grouping, 2 decimals)
- ``number_to_words``: ``One Lakh Fifty Thousand only`` for the legal
  amount-in-words line on a tax invoice
- ``format_date``: ``15 Jan 2025`` for history tables

Display only. Nothing here feeds back into tax arithmetic.
"""

from __future__ import annotations

from datetime import date, datetime
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any

RUPEE = "₹"

CRORE = 10_000_000
LAKH = 100_000
THOUSAND = 1_000

_UNITS = ["", "One", "Two", "Three", "Four", "Five", "Six", "Seven", "Eight", "Nine"]
_TEENS = [
    "Ten", "Eleven", "Twelve", "Thirteen", "Fourteen",
    "Fifteen", "Sixteen", "Seventeen", "Eighteen", "Nineteen",
]
_TENS = ["", "", "Twenty", "Thirty", "Forty", "Fifty", "Sixty", "Seventy", "Eighty", "Ninety"]

_MONTHS = ["Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"]


def _money(val: Any) -> Decimal:
    if val is None or isinstance(val, bool):
        return Decimal("0")
    try:
        d = Decimal(str(val).strip())
    except (InvalidOperation, ValueError):
        return Decimal("0")
    return d if d.is_finite() else Decimal("0")


def _group_indian(digits: str) -> str:
    """Group an integer digit string as 12,34,56,789."""
    if len(digits) <= 3:
        return digits
    head, tail = digits[:-3], digits[-3:]
    groups = []
    while len(head) > 2:
        groups.insert(0, head[-2:])
        head = head[:-2]
    if head:
        groups.insert(0, head)
    return ",".join(groups) + "," + tail


def format_currency(amount: Any) -> str:
    """Render an amount as ``₹x,xx,xxx.xx``. Missing or unparseable input is ₹0.00."""
    value = _money(amount).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
    sign = "-" if value < 0 else ""
    whole, frac = f"{abs(value):.2f}".split(".")
    return f"{RUPEE}{sign}{_group_indian(whole)}.{frac}"


def _under_thousand(n: int) -> str:
    parts: list[str] = []
    if n >= 100:
        parts.append(f"{_UNITS[n // 100]} Hundred")
        n %= 100
    if n >= 20:
        parts.append(_TENS[n // 10])
        n %= 10
    if n >= 10:
        parts.append(_TEENS[n - 10])
        n = 0
    if n > 0:
        parts.append(_UNITS[n])
    return " ".join(parts)


def _indian_words(n: int) -> str:
    crore, rest = divmod(n, CRORE)
    lakh, rest = divmod(rest, LAKH)
    thousand, rest = divmod(rest, THOUSAND)

    parts: list[str] = []
    if crore:
        # 1000+ crore is spelled in the same scheme ("One Thousand Crore")
        parts.append(f"{_indian_words(crore)} Crore")
    if lakh:
        parts.append(f"{_under_thousand(lakh)} Lakh")
    if thousand:
        parts.append(f"{_under_thousand(thousand)} Thousand")
    if rest:
        parts.append(_under_thousand(rest))
    return " ".join(parts)


def number_to_words(amount: Any) -> str:
    """
    Spell a rupee amount in the Indian numbering system.

    Paise are dropped: the amount is rounded to the nearest rupee first.

    >>> number_to_words(150000)
    'One Lakh Fifty Thousand only'
    """
    n = int(_money(amount).quantize(Decimal("1"), rounding=ROUND_HALF_UP))
    if n == 0:
        return "Zero only"
    if n < 0:
        return f"Minus {_indian_words(-n)} only"
    return f"{_indian_words(n)} only"


def format_date(value: Any) -> str:
    """Render an ISO date / datetime as ``15 Jan 2025``; anything else is 'Invalid Date'."""
    if not value:
        return "Invalid Date"
    if isinstance(value, datetime):
        d = value.date()
    elif isinstance(value, date):
        d = value
    else:
        raw = str(value).strip()
        try:
            d = datetime.fromisoformat(raw.replace("Z", "+00:00")).date()
        except ValueError:
            try:
                d = date.fromisoformat(raw[:10])
            except ValueError:
                return "Invalid Date"
    return f"{d.day:02d} {_MONTHS[d.month - 1]} {d.year}"
