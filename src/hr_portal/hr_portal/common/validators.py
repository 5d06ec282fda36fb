from __future__ import annotations

from decimal import Decimal, InvalidOperation
from typing import Optional

from ..core.exceptions import ValidationError


def require_non_empty(value: Optional[str], field_name: str) -> str:
    if not value or not value.strip():
        raise ValidationError(f"{field_name} tidak valid")
    return value.strip()


def require_min_length(value: Optional[str], field_name: str, min_len: int) -> str:
    if value is None or len(value) < min_len:
        raise ValidationError(f"{field_name} minimal {min_len} karakter")
    return value


# money columns are DECIMAL(15, 2)
CENT = Decimal("0.01")
MAX_MONEY = Decimal("9999999999999.99")


def check_money(amount: Decimal, field_name: str) -> Decimal:
    """Reject what a DECIMAL(15, 2) column would not store exactly."""
    if not amount.is_finite():
        raise ValidationError(f"{field_name} harus berupa angka")
    if amount < 0:
        raise ValidationError(f"{field_name} tidak boleh negatif")
    if amount > MAX_MONEY:
        raise ValidationError(f"{field_name} terlalu besar")
    if amount != amount.quantize(CENT):
        raise ValidationError(f"{field_name} maksimal 2 angka desimal")
    return amount


def parse_amount(value, field_name: str) -> Decimal:
    """Parse a money input; blank means zero, negatives are rejected."""
    if value is None or (isinstance(value, str) and not value.strip()):
        return Decimal("0")
    try:
        amount = Decimal(str(value).strip())
    except InvalidOperation:
        raise ValidationError(f"{field_name} harus berupa angka")
    return check_money(amount, field_name)


def optional_digits(value: Optional[str], field_name: str) -> Optional[str]:
    v = (value or "").strip().replace(" ", "").replace("-", "")
    if not v:
        return None
    if not v.isdigit():
        raise ValidationError(f"{field_name} hanya boleh berisi angka")
    return v


def optional_int(value) -> Optional[int]:
    v = str(value if value is not None else "").strip()
    if not v:
        return None
    try:
        return int(v)
    except ValueError:
        raise ValidationError("Pilihan tidak valid")
