from __future__ import annotations

import logging
from typing import Optional, Sequence

from ..common.validators import optional_digits, optional_int, parse_amount, require_non_empty
from ..core.enums import Role
from ..core.exceptions import AuthorizationError, ValidationError
from .model import Profile
from .repository import ProfileRepository

logger = logging.getLogger(__name__)


class ProfileService:
    """Use case: employee profile setup/editing and admin user management."""

    def __init__(self, profiles: ProfileRepository):
        self._profiles = profiles

    def get(self, user_id: str) -> Profile:
        profile = self._profiles.get_by_id(user_id)
        if not profile:
            raise ValidationError("Profil tidak ditemukan")
        return profile

    @staticmethod
    def needs_setup(profile: Profile) -> bool:
        return not profile.profile_completed and not profile.is_admin

    def save_profile(
        self,
        *,
        user_id: str,
        full_name: str,
        phone: str = "",
        department_id=None,
        position_id=None,
        bank_id=None,
        bank_account: str = "",
    ) -> Profile:
        """Used by both /profile-setup and /profile-editor; saving completes the profile."""
        self.get(user_id)

        full_name = require_non_empty(full_name, "Nama lengkap")
        phone_v = optional_digits(phone, "Nomor telepon")
        account_v = optional_digits(bank_account, "Nomor rekening")
        bank_v = optional_int(bank_id)
        if account_v and not bank_v:
            raise ValidationError("Pilih bank untuk nomor rekening")

        self._profiles.update_details(
            user_id,
            full_name=full_name,
            phone=phone_v,
            department_id=optional_int(department_id),
            position_id=optional_int(position_id),
            bank_id=bank_v,
            bank_account=account_v,
            profile_completed=True,
        )
        return self.get(user_id)

    def list_employees(self) -> Sequence[Profile]:
        return self._profiles.list_employees()

    def update_salary(self, *, current_role: Optional[Role], user_id: str, salary) -> None:
        if current_role != Role.ADMIN:
            raise AuthorizationError("Anda tidak memiliki akses")
        self.get(user_id)
        self._profiles.update_salary(user_id, salary=parse_amount(salary, "Gaji pokok"))

    def set_active(self, *, current_role: Optional[Role], current_user_id: str, user_id: str, is_active: bool) -> None:
        if current_role != Role.ADMIN:
            raise AuthorizationError("Anda tidak memiliki akses")

        profile = self.get(user_id)
        if profile.id == current_user_id:
            raise ValidationError("Tidak dapat menonaktifkan akun sendiri")
        if profile.is_admin and not is_active:
            raise ValidationError("Akun admin tidak dapat dinonaktifkan")

        if not self._profiles.set_active(user_id, is_active=is_active):
            raise ValidationError("Gagal memperbarui status karyawan")
        logger.info("Profile %s active=%s", user_id, is_active)
