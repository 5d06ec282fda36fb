from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Callable, Mapping, Optional, Sequence

from markupsafe import escape

from ..common.datetime_utils import now_local, parse_iso_date
from ..common.formatting import format_date_id, format_idr
from ..common.validators import check_money, optional_digits, parse_amount
from ..core.constants import DEFAULT_PAYMENT_HISTORY_LIMIT
from ..core.enums import PaymentMethod, PaymentStatus
from ..core.exceptions import PaymentProcessingError, ValidationError
from ..organization.model import LookupItem
from ..profiles.model import Profile
from ..profiles.repository import ProfileRepository
from .dialog import Dialog, DialogMessage
from .model import NewPayment, PaymentDefaults, PaymentRecord, PaymentRequest
from .repository import BankRepository, PaymentRepository

logger = logging.getLogger(__name__)

METHOD_LABELS = {
    PaymentMethod.TRANSFER: "Transfer Bank",
    PaymentMethod.CASH: "Tunai",
}

GENERIC_FAILURE = "Terjadi kesalahan saat memproses pembayaran gaji"


def parse_payment_form(employee_id: str, form: Mapping[str, str]) -> PaymentRequest:
    """Build a PaymentRequest from the salary payment form fields."""
    raw_date = (form.get("payment_date") or "").strip()
    try:
        payment_date = parse_iso_date(raw_date)
    except ValueError:
        raise ValidationError("Tanggal pembayaran tidak valid")

    try:
        method = PaymentMethod((form.get("payment_method") or PaymentMethod.TRANSFER.value).strip())
    except ValueError:
        raise ValidationError("Metode pembayaran tidak valid")

    return PaymentRequest(
        employee_id=(employee_id or "").strip(),
        base_amount=parse_amount(form.get("amount"), "Gaji pokok"),
        bonus=parse_amount(form.get("bonus"), "Bonus"),
        deductions=parse_amount(form.get("deductions"), "Potongan"),
        payment_date=payment_date,
        method=method,
        bank_account=optional_digits(form.get("bank_account"), "Nomor rekening"),
        notes=(form.get("notes") or "").strip() or None,
    )


class PaymentService:
    """Use case: record a salary payment for one employee."""

    def __init__(
        self,
        payments: PaymentRepository,
        banks: BankRepository,
        profiles: ProfileRepository,
        *,
        dialog: Dialog,
        clock: Callable[[], datetime] = now_local,
    ):
        self._payments = payments
        self._banks = banks
        self._profiles = profiles
        self._dialog = dialog
        self._clock = clock

    def get_employee(self, employee_id: str) -> Profile:
        employee = self._profiles.get_by_id(employee_id) if employee_id else None
        if not employee:
            raise ValidationError("Data karyawan tidak valid")
        return employee

    def defaults_for(self, employee: Profile, *, today: Optional[date] = None) -> PaymentDefaults:
        return PaymentDefaults(
            amount=employee.salary,
            payment_date=today or self._clock().date(),
            method=PaymentMethod.TRANSFER,
            bank_account=employee.bank_account or "",
        )

    def list_active_banks(self) -> Sequence[LookupItem]:
        return self._banks.list_active()

    def employee_bank(self, employee: Profile) -> Optional[LookupItem]:
        if not employee.bank_id:
            return None
        try:
            return self._banks.get_by_id(employee.bank_id)
        except Exception:
            logger.exception("Error fetching bank %s for employee %s", employee.bank_id, employee.id)
            return None

    def history_for(self, employee_id: str, *, limit: int = DEFAULT_PAYMENT_HISTORY_LIMIT) -> Sequence[PaymentRecord]:
        return self._payments.list_for_employee(employee_id, limit=limit)

    def recent_payments(self, *, limit: int = DEFAULT_PAYMENT_HISTORY_LIMIT) -> Sequence[PaymentRecord]:
        return self._payments.list_recent(limit=limit)

    @staticmethod
    def validate(request: PaymentRequest) -> None:
        """Checks done before anything is written."""
        if not (request.employee_id or "").strip():
            raise ValidationError("Data karyawan tidak valid")
        for value, label in (
            (request.base_amount, "Gaji pokok"),
            (request.bonus, "Bonus"),
            (request.deductions, "Potongan"),
        ):
            check_money(value, label)
        total = request.total_amount
        if total <= 0:
            raise ValidationError("Total pembayaran harus lebih dari 0")
        check_money(total, "Total pembayaran")

    def submit(
        self,
        request: PaymentRequest,
        *,
        employee: Profile,
        processed_by: Optional[str],
        on_processed: Optional[Callable[[PaymentRecord], None]] = None,
    ) -> PaymentRecord:
        """Validate, persist and confirm one payment.

        ValidationError is raised before any write (shown inline by the form).
        Persistence failures are logged, shown in an error dialog and re-raised
        as PaymentProcessingError; nothing is retried.
        """
        self.validate(request)
        if employee.id != request.employee_id:
            raise ValidationError("Data karyawan tidak valid")

        bank = self.employee_bank(employee)
        now = self._clock()
        payment = NewPayment(
            employee_id=employee.id,
            amount=request.base_amount,
            bonus=request.bonus,
            deductions=request.deductions,
            total_amount=request.total_amount,
            payment_date=request.payment_date,
            payment_method=request.method,
            bank_account=request.bank_account,
            bank_id=employee.bank_id,
            status=PaymentStatus.COMPLETED,
            notes=request.notes,
            created_at=now,
            processed_by=processed_by,
        )

        try:
            record = self._payments.record_payment(payment, updated_at=now)
        except Exception as e:
            logger.exception("Error processing salary payment for employee %s", employee.id)
            self._dialog.fire(
                DialogMessage(
                    icon="error",
                    title="Gagal Memproses Pembayaran",
                    text=GENERIC_FAILURE,
                )
            )
            raise PaymentProcessingError(GENERIC_FAILURE) from e

        logger.info(
            "Salary payment %s recorded for employee %s (total=%s)",
            record.id,
            record.employee_id,
            record.total_amount,
        )
        self._dialog.fire(self.confirmation(employee, record, bank))
        if on_processed:
            on_processed(record)
        return record

    @staticmethod
    def confirmation(employee: Profile, record: PaymentRecord, bank: Optional[LookupItem]) -> DialogMessage:
        lines = [
            ("Karyawan", employee.display_name),
            ("Total Dibayar", format_idr(record.total_amount)),
            ("Tanggal", format_date_id(record.payment_date)),
            ("Metode", METHOD_LABELS[record.payment_method]),
        ]
        if bank and record.payment_method == PaymentMethod.TRANSFER:
            lines.append(("Bank", bank.name))

        html = "".join(f"<p><strong>{escape(label)}:</strong> {escape(value)}</p>" for label, value in lines)
        return DialogMessage(
            icon="success",
            title="Pembayaran Gaji Berhasil",
            html=f'<div class="text-left">{html}</div>',
            confirm_button_text="OK",
            confirm_button_color="#10b981",
        )
