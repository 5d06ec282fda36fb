from __future__ import annotations

from decimal import Decimal, InvalidOperation
from typing import Optional, Sequence

from ..common.validators import require_non_empty
from ..core.exceptions import ValidationError
from .model import LookupItem, OfficeLocation
from .repository import LocationRepository, LookupRepository


class LookupService:
    """List/add/toggle for departments, positions and banks."""

    def __init__(self, repo: LookupRepository, *, label: str):
        self._repo = repo
        self.label = label

    def list_all(self) -> Sequence[LookupItem]:
        return self._repo.list_all()

    def list_active(self) -> Sequence[LookupItem]:
        return self._repo.list_active()

    def create(self, name: str) -> int:
        name = require_non_empty(name, f"Nama {self.label.lower()}")
        if self._repo.get_by_name(name):
            raise ValidationError(f"{self.label} '{name}' sudah ada")
        return self._repo.create(name)

    def set_active(self, item_id: int, *, is_active: bool) -> None:
        if not self._repo.get_by_id(item_id):
            raise ValidationError(f"{self.label} tidak ditemukan")
        self._repo.set_active(item_id, is_active=is_active)


class LocationService:
    def __init__(self, repo: LocationRepository):
        self._repo = repo

    def get(self) -> Optional[OfficeLocation]:
        return self._repo.get()

    def save(self, *, name: str, latitude: str, longitude: str, radius_meters: str) -> OfficeLocation:
        name = require_non_empty(name, "Nama lokasi")
        try:
            lat = Decimal(str(latitude).strip())
            lng = Decimal(str(longitude).strip())
            radius = int(str(radius_meters).strip())
        except (InvalidOperation, ValueError):
            raise ValidationError("Koordinat atau radius tidak valid")
        if not lat.is_finite() or not lng.is_finite():
            raise ValidationError("Koordinat atau radius tidak valid")

        if not (Decimal("-90") <= lat <= Decimal("90")) or not (Decimal("-180") <= lng <= Decimal("180")):
            raise ValidationError("Koordinat di luar jangkauan")
        if radius <= 0:
            raise ValidationError("Radius harus lebih dari 0 meter")

        location = OfficeLocation(name=name, latitude=lat, longitude=lng, radius_meters=radius)
        self._repo.save(location)
        return location
