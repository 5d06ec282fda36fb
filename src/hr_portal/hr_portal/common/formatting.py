"""Indonesian (id-ID) display formatting for money and dates."""

from __future__ import annotations

from datetime import date
from decimal import ROUND_HALF_UP, Decimal


def format_idr(amount) -> str:
    """5300000 -> 'Rp 5.300.000' (no fraction digits)."""
    value = Decimal(str(amount or 0)).quantize(Decimal("1"), rounding=ROUND_HALF_UP)
    sign = "-" if value < 0 else ""
    grouped = f"{abs(int(value)):,}".replace(",", ".")
    return f"{sign}Rp {grouped}"


def format_date_id(value: date) -> str:
    """date(2026, 10, 5) -> '5/10/2026'."""
    return f"{value.day}/{value.month}/{value.year}"
