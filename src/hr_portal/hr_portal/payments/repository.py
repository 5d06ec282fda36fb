from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from ..organization.model import LookupItem
from .model import NewPayment, PaymentRecord


class PaymentRepository(Protocol):
    def record_payment(self, payment: NewPayment, *, updated_at: datetime) -> PaymentRecord:
        """Insert the payment and stamp the employee's last payment date.

        Both writes belong to one transaction: either both happen or neither.
        """

        raise NotImplementedError

    def list_for_employee(self, employee_id: str, *, limit: int) -> Sequence[PaymentRecord]:
        raise NotImplementedError

    def list_recent(self, *, limit: int) -> Sequence[PaymentRecord]:
        raise NotImplementedError


class BankRepository(Protocol):
    def list_active(self) -> Sequence[LookupItem]:
        raise NotImplementedError

    def get_by_id(self, item_id: int) -> Optional[LookupItem]:
        raise NotImplementedError
