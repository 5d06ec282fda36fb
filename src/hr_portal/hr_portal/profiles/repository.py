from __future__ import annotations

from decimal import Decimal
from typing import Optional, Protocol, Sequence

from ..core.enums import Role
from .model import Profile


class ProfileRepository(Protocol):
    """Repository interface for profiles.

    Services depend on this interface, not on a concrete database.
    """

    def get_by_id(self, user_id: str) -> Optional[Profile]:
        raise NotImplementedError

    def get_role(self, user_id: str) -> Optional[Role]:
        raise NotImplementedError

    def list_employees(self) -> Sequence[Profile]:
        raise NotImplementedError

    def update_details(
        self,
        user_id: str,
        *,
        full_name: str,
        phone: Optional[str],
        department_id: Optional[int],
        position_id: Optional[int],
        bank_id: Optional[int],
        bank_account: Optional[str],
        profile_completed: bool,
    ) -> bool:
        raise NotImplementedError

    def update_salary(self, user_id: str, *, salary: Decimal) -> bool:
        raise NotImplementedError

    def set_active(self, user_id: str, *, is_active: bool) -> bool:
        raise NotImplementedError
