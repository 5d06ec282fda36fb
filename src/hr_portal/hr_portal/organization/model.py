from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal


@dataclass(frozen=True)
class LookupItem:
    """Department, position or bank: a named, switchable master-data row."""

    id: int
    name: str
    is_active: bool = True


@dataclass(frozen=True)
class OfficeLocation:
    name: str
    latitude: Decimal
    longitude: Decimal
    radius_meters: int
