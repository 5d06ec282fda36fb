"""In-memory repositories and collaborators shared by the test modules."""

from __future__ import annotations

from dataclasses import replace
from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from werkzeug.security import generate_password_hash

from src.hr_portal.hr_portal.attendance.model import AttendanceRecord
from src.hr_portal.hr_portal.auth.model import AuthUser, Session
from src.hr_portal.hr_portal.container import assemble
from src.hr_portal.hr_portal.core.enums import AttendanceStatus, Role
from src.hr_portal.hr_portal.core.exceptions import PaymentProcessingError
from src.hr_portal.hr_portal.organization.model import LookupItem
from src.hr_portal.hr_portal.payments.model import NewPayment, PaymentRecord
from src.hr_portal.hr_portal.profiles.model import Profile


def make_profile(user_id: str = "u-1", *, role: Role = Role.EMPLOYEE, **overrides) -> Profile:
    values = dict(
        id=user_id,
        email=f"{user_id}@hrportal.local",
        full_name=f"User {user_id}",
        role=role,
        salary=Decimal("5000000"),
        profile_completed=True,
    )
    values.update(overrides)
    return Profile(**values)


class InMemoryProfiles:
    def __init__(self, *profiles: Profile):
        self.by_id: dict[str, Profile] = {p.id: p for p in profiles}
        self.role_error: Optional[Exception] = None
        self.role_calls: list[str] = []

    def get_by_id(self, user_id: str) -> Optional[Profile]:
        return self.by_id.get(user_id)

    def get_role(self, user_id: str) -> Optional[Role]:
        self.role_calls.append(user_id)
        if self.role_error is not None:
            raise self.role_error
        p = self.by_id.get(user_id)
        return p.role if p else None

    def list_employees(self):
        return sorted(self.by_id.values(), key=lambda p: p.full_name)

    def update_details(self, user_id: str, **fields) -> bool:
        if user_id not in self.by_id:
            return False
        self.by_id[user_id] = replace(self.by_id[user_id], **fields)
        return True

    def update_salary(self, user_id: str, *, salary: Decimal) -> bool:
        return self.update_details(user_id, salary=salary)

    def set_active(self, user_id: str, *, is_active: bool) -> bool:
        return self.update_details(user_id, is_active=is_active)


class InMemoryAuth:
    def __init__(self, profiles: InMemoryProfiles):
        self.profiles = profiles
        self.users: dict[str, AuthUser] = {}
        self.sessions: dict[str, Session] = {}
        self.session_error: Optional[Exception] = None

    def add_user(self, profile: Profile, password: str) -> None:
        self.users[profile.email] = AuthUser(
            id=profile.id,
            email=profile.email,
            password_hash=generate_password_hash(password),
            is_active=profile.is_active,
        )
        self.profiles.by_id[profile.id] = profile

    def get_user_by_email(self, email: str) -> Optional[AuthUser]:
        user = self.users.get(email)
        if user is None:
            return None
        profile = self.profiles.get_by_id(user.id)
        return replace(user, is_active=profile.is_active if profile else user.is_active)

    def create_user(self, *, user_id: str, email: str, password_hash: str, full_name: str) -> None:
        self.users[email] = AuthUser(id=user_id, email=email, password_hash=password_hash)
        self.profiles.by_id[user_id] = Profile(id=user_id, email=email, full_name=full_name, role=Role.EMPLOYEE)

    def create_session(self, *, access_token: str, user_id: str, expires_at: datetime) -> None:
        self.sessions[access_token] = Session(access_token=access_token, user_id=user_id, expires_at=expires_at)

    def get_session(self, access_token: str) -> Optional[Session]:
        if self.session_error is not None:
            raise self.session_error
        s = self.sessions.get(access_token)
        if s is None:
            return None
        profile = self.profiles.get_by_id(s.user_id)
        return replace(s, is_active=profile.is_active if profile else True)

    def extend_session(self, access_token: str, *, expires_at: datetime) -> bool:
        s = self.sessions.get(access_token)
        if not s:
            return False
        self.sessions[access_token] = replace(s, expires_at=expires_at)
        return True

    def delete_session(self, access_token: str) -> None:
        self.sessions.pop(access_token, None)


class InMemoryAttendance:
    def __init__(self, profiles: Optional[InMemoryProfiles] = None):
        self.profiles = profiles
        self.by_user_date: dict[tuple[str, date], AttendanceRecord] = {}
        self._id = 0

    def get_recent_for_user(self, user_id: str, limit: int):
        items = [r for r in self.by_user_date.values() if r.user_id == user_id]
        items.sort(key=lambda r: r.check_in_time, reverse=True)
        return items[:limit]

    def get_for_user_and_date(self, user_id: str, work_date: date) -> Optional[AttendanceRecord]:
        return self.by_user_date.get((user_id, work_date))

    def list_for_date(self, work_date: date):
        return [r for (_, d), r in self.by_user_date.items() if d == work_date]

    def create_checkin(self, *, user_id, work_date, check_in_time, status: AttendanceStatus, note=None) -> int:
        self._id += 1
        profile = self.profiles.get_by_id(user_id) if self.profiles else None
        self.by_user_date[(user_id, work_date)] = AttendanceRecord(
            attendance_id=self._id,
            user_id=user_id,
            work_date=work_date,
            check_in_time=check_in_time,
            check_out_time=None,
            status=status,
            note=note,
            full_name=profile.full_name if profile else None,
        )
        return self._id

    def update_checkout(self, *, attendance_id: int, check_out_time, status: AttendanceStatus, note=None) -> bool:
        for key, rec in self.by_user_date.items():
            if rec.attendance_id == attendance_id:
                self.by_user_date[key] = replace(rec, check_out_time=check_out_time, status=status, note=note)
                return True
        return False


class InMemoryPayments:
    """Insert + profile stamp applied together, like the MySQL transaction."""

    def __init__(self, profiles: InMemoryProfiles):
        self.profiles = profiles
        self.records: list[PaymentRecord] = []
        self.calls = 0
        self.error: Optional[Exception] = None

    def record_payment(self, payment: NewPayment, *, updated_at: datetime) -> PaymentRecord:
        self.calls += 1
        if self.error is not None:
            raise self.error
        profile = self.profiles.get_by_id(payment.employee_id)
        if profile is None:
            raise PaymentProcessingError("Data karyawan tidak ditemukan")

        record = PaymentRecord(id=len(self.records) + 1, employee_name=profile.full_name, **vars(payment))
        self.records.append(record)
        self.profiles.by_id[profile.id] = replace(profile, last_salary_payment=payment.payment_date)
        return record

    def list_for_employee(self, employee_id: str, *, limit: int):
        return [r for r in reversed(self.records) if r.employee_id == employee_id][:limit]

    def list_recent(self, *, limit: int):
        return list(reversed(self.records))[:limit]


class InMemoryLookups:
    def __init__(self, *names: str):
        self.items: dict[int, LookupItem] = {}
        for name in names:
            self.create(name)

    def list_all(self):
        return sorted(self.items.values(), key=lambda i: i.name)

    def list_active(self):
        return [i for i in self.list_all() if i.is_active]

    def get_by_id(self, item_id: int) -> Optional[LookupItem]:
        return self.items.get(item_id)

    def get_by_name(self, name: str) -> Optional[LookupItem]:
        return next((i for i in self.items.values() if i.name.lower() == name.lower()), None)

    def create(self, name: str) -> int:
        item_id = len(self.items) + 1
        self.items[item_id] = LookupItem(id=item_id, name=name)
        return item_id

    def set_active(self, item_id: int, *, is_active: bool) -> bool:
        if item_id not in self.items:
            return False
        self.items[item_id] = replace(self.items[item_id], is_active=is_active)
        return True


class InMemoryLocation:
    def __init__(self):
        self.location = None

    def get(self):
        return self.location

    def save(self, location) -> None:
        self.location = location


class RecordingDialog:
    def __init__(self):
        self.messages = []

    def fire(self, message) -> None:
        self.messages.append(message)


class FakeStack:
    """All repositories wired through ``assemble``; keeps handles for assertions."""

    def __init__(self, *, dialog=None):
        self.profiles = InMemoryProfiles()
        self.auth = InMemoryAuth(self.profiles)
        self.attendance = InMemoryAttendance(self.profiles)
        self.payments = InMemoryPayments(self.profiles)
        self.departments = InMemoryLookups("Engineering", "Finance")
        self.positions = InMemoryLookups("Staff", "Manager")
        self.banks = InMemoryLookups("BCA", "Mandiri")
        self.location = InMemoryLocation()
        self.container = assemble(
            auth_repo=self.auth,
            profiles_repo=self.profiles,
            attendance_repo=self.attendance,
            payments_repo=self.payments,
            departments_repo=self.departments,
            positions_repo=self.positions,
            banks_repo=self.banks,
            location_repo=self.location,
            dialog=dialog,
        )
