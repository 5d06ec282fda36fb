from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Optional

from ..core.enums import Role


@dataclass(frozen=True)
class Profile:
    """Entitas domain: profil karyawan.

    Catatan: objek data murni (tanpa akses DB); nama departemen,
    posisi dan bank diisi dari join jika tersedia.
    """

    id: str
    email: str
    full_name: str
    role: Role
    phone: Optional[str] = None
    department_id: Optional[int] = None
    position_id: Optional[int] = None
    bank_id: Optional[int] = None
    bank_account: Optional[str] = None
    salary: Decimal = Decimal("0")
    is_active: bool = True
    profile_completed: bool = False
    last_salary_payment: Optional[date] = None
    department_name: Optional[str] = None
    position_name: Optional[str] = None
    bank_name: Optional[str] = None

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN

    @property
    def display_name(self) -> str:
        return self.full_name or self.email
