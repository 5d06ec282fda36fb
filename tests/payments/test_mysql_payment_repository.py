from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal

import pytest

from src.hr_portal.hr_portal.core.enums import PaymentMethod, PaymentStatus
from src.hr_portal.hr_portal.core.exceptions import PaymentProcessingError
from src.hr_portal.hr_portal.payments.model import NewPayment
from src.hr_portal.hr_portal.payments.mysql_payment_repository import MySQLPaymentRepository

NOW = datetime(2026, 10, 5, 14, 30)


class FakeCursor:
    def __init__(self, update_rowcount: int):
        self.update_rowcount = update_rowcount
        self.statements = []
        self.rowcount = -1
        self.lastrowid = None
        self._row = None

    def execute(self, sql, params=()):
        self.statements.append(" ".join(sql.split()))
        if sql.lstrip().startswith("INSERT"):
            self.lastrowid = 41
            self._row = dict(zip(
                ("employee_id", "amount", "bonus", "deductions", "total_amount", "payment_date",
                 "payment_method", "bank_account", "bank_id", "status", "notes", "created_at", "processed_by"),
                params,
            ))
        elif sql.lstrip().startswith("UPDATE"):
            self.rowcount = self.update_rowcount

    def fetchone(self):
        return dict(self._row, id=self.lastrowid, employee_name="Budi")

    def close(self):
        pass


class FakeConnection:
    def __init__(self, cursor):
        self._cursor = cursor
        self.committed = False
        self.rolled_back = False
        self.closed = False

    def cursor(self, dictionary=True):
        return self._cursor

    def commit(self):
        self.committed = True

    def rollback(self):
        self.rolled_back = True

    def close(self):
        self.closed = True


class FakeConnectionFactory:
    def __init__(self, update_rowcount: int):
        self.cursor = FakeCursor(update_rowcount)
        self.connection = FakeConnection(self.cursor)

    def connect(self, *, database=None):
        return self.connection


def _payment():
    return NewPayment(
        employee_id="e-1",
        amount=Decimal("5000000"),
        bonus=Decimal("0"),
        deductions=Decimal("0"),
        total_amount=Decimal("5000000"),
        payment_date=date(2026, 10, 5),
        payment_method=PaymentMethod.TRANSFER,
        bank_account="123",
        bank_id=1,
        status=PaymentStatus.COMPLETED,
        notes=None,
        created_at=NOW,
        processed_by="a-1",
    )


def test_insert_and_profile_stamp_commit_together():
    factory = FakeConnectionFactory(update_rowcount=1)
    record = MySQLPaymentRepository(factory).record_payment(_payment(), updated_at=NOW)

    assert record.id == 41
    assert record.status == PaymentStatus.COMPLETED
    assert record.employee_name == "Budi"
    assert factory.cursor.statements[0].startswith("INSERT INTO salary_payments")
    assert factory.cursor.statements[1].startswith("UPDATE profiles SET last_salary_payment")
    assert factory.connection.committed
    assert not factory.connection.rolled_back
    assert factory.connection.closed


def test_missing_profile_rolls_back_the_insert():
    factory = FakeConnectionFactory(update_rowcount=0)

    with pytest.raises(PaymentProcessingError):
        MySQLPaymentRepository(factory).record_payment(_payment(), updated_at=NOW)

    assert factory.connection.rolled_back
    assert not factory.connection.committed
    assert factory.connection.closed
