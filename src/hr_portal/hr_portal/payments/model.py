from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from ..core.enums import PaymentMethod, PaymentStatus


@dataclass(frozen=True)
class PaymentRequest:
    """Input of one salary disbursement, as entered in the payment form."""

    employee_id: str
    base_amount: Decimal
    payment_date: date
    bonus: Decimal = Decimal("0")
    deductions: Decimal = Decimal("0")
    method: PaymentMethod = PaymentMethod.TRANSFER
    bank_account: Optional[str] = None
    notes: Optional[str] = None

    @property
    def total_amount(self) -> Decimal:
        return self.base_amount + self.bonus - self.deductions


@dataclass(frozen=True)
class NewPayment:
    """Row written to salary_payments."""

    employee_id: str
    amount: Decimal
    bonus: Decimal
    deductions: Decimal
    total_amount: Decimal
    payment_date: date
    payment_method: PaymentMethod
    bank_account: Optional[str]
    bank_id: Optional[int]
    status: PaymentStatus
    notes: Optional[str]
    created_at: datetime
    processed_by: Optional[str]


@dataclass(frozen=True)
class PaymentRecord:
    """Persisted payment. Never updated after creation."""

    id: int
    employee_id: str
    amount: Decimal
    bonus: Decimal
    deductions: Decimal
    total_amount: Decimal
    payment_date: date
    payment_method: PaymentMethod
    bank_account: Optional[str]
    bank_id: Optional[int]
    status: PaymentStatus
    notes: Optional[str]
    created_at: datetime
    processed_by: Optional[str]
    employee_name: Optional[str] = None


@dataclass(frozen=True)
class PaymentDefaults:
    amount: Decimal
    payment_date: date
    method: PaymentMethod
    bank_account: str
    bonus: Decimal = Decimal("0")
    deductions: Decimal = Decimal("0")
    notes: str = ""
