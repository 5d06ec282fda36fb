from __future__ import annotations

from datetime import datetime
from typing import Sequence

from ..core.enums import PaymentMethod, PaymentStatus
from ..core.exceptions import PaymentProcessingError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import as_decimal, db_cursor, fetchall, fetchone
from .model import NewPayment, PaymentRecord
from .repository import PaymentRepository

_SELECT_PAYMENT = """
    SELECT sp.id, sp.employee_id, sp.amount, sp.bonus, sp.deductions, sp.total_amount,
           sp.payment_date, sp.payment_method, sp.bank_account, sp.bank_id, sp.status,
           sp.notes, sp.created_at, sp.processed_by, p.full_name AS employee_name
    FROM salary_payments sp
    LEFT JOIN profiles p ON p.id = sp.employee_id
"""


def _to_record(r: dict) -> PaymentRecord:
    return PaymentRecord(
        id=int(r["id"]),
        employee_id=r["employee_id"],
        amount=as_decimal(r["amount"]),
        bonus=as_decimal(r["bonus"]),
        deductions=as_decimal(r["deductions"]),
        total_amount=as_decimal(r["total_amount"]),
        payment_date=r["payment_date"],
        payment_method=PaymentMethod(r["payment_method"]),
        bank_account=r.get("bank_account"),
        bank_id=r.get("bank_id"),
        status=PaymentStatus(r["status"]),
        notes=r.get("notes"),
        created_at=r["created_at"],
        processed_by=r.get("processed_by"),
        employee_name=r.get("employee_name"),
    )


class MySQLPaymentRepository(PaymentRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def record_payment(self, payment: NewPayment, *, updated_at: datetime) -> PaymentRecord:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO salary_payments(
                    employee_id, amount, bonus, deductions, total_amount, payment_date,
                    payment_method, bank_account, bank_id, status, notes, created_at, processed_by
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    payment.employee_id,
                    payment.amount,
                    payment.bonus,
                    payment.deductions,
                    payment.total_amount,
                    payment.payment_date,
                    payment.payment_method.value,
                    payment.bank_account,
                    payment.bank_id,
                    payment.status.value,
                    payment.notes,
                    payment.created_at,
                    payment.processed_by,
                ),
            )
            payment_id = int(cur.lastrowid)

            cur.execute(
                "UPDATE profiles SET last_salary_payment=%s, updated_at=%s WHERE id=%s",
                (payment.payment_date, updated_at, payment.employee_id),
            )
            if cur.rowcount == 0:
                # raising inside db_cursor rolls the insert back too
                raise PaymentProcessingError("Data karyawan tidak ditemukan")

            cur.execute(_SELECT_PAYMENT + " WHERE sp.id=%s", (payment_id,))
            return _to_record(fetchone(cur))

    def list_for_employee(self, employee_id: str, *, limit: int) -> Sequence[PaymentRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                _SELECT_PAYMENT + " WHERE sp.employee_id=%s ORDER BY sp.payment_date DESC, sp.id DESC LIMIT %s",
                (employee_id, int(limit)),
            )
            return [_to_record(r) for r in fetchall(cur)]

    def list_recent(self, *, limit: int) -> Sequence[PaymentRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT_PAYMENT + " ORDER BY sp.created_at DESC, sp.id DESC LIMIT %s", (int(limit),))
            return [_to_record(r) for r in fetchall(cur)]
