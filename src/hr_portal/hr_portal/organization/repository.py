from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import LookupItem, OfficeLocation


class LookupRepository(Protocol):
    def list_all(self) -> Sequence[LookupItem]:
        raise NotImplementedError

    def list_active(self) -> Sequence[LookupItem]:
        raise NotImplementedError

    def get_by_id(self, item_id: int) -> Optional[LookupItem]:
        raise NotImplementedError

    def get_by_name(self, name: str) -> Optional[LookupItem]:
        raise NotImplementedError

    def create(self, name: str) -> int:
        raise NotImplementedError

    def set_active(self, item_id: int, *, is_active: bool) -> bool:
        raise NotImplementedError


class LocationRepository(Protocol):
    def get(self) -> Optional[OfficeLocation]:
        raise NotImplementedError

    def save(self, location: OfficeLocation) -> None:
        raise NotImplementedError
