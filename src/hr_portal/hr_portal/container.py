from __future__ import annotations

from dataclasses import dataclass
from datetime import time
from typing import Optional

from .attendance.factory import AttendanceStrategyFactory
from .attendance.model import WorkHours
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .auth.client import AuthClient, TokenStorage
from .auth.mysql_auth_repository import MySQLAuthRepository
from .auth.repository import AuthRepository
from .auth.role_resolver import RoleResolver
from .core.constants import DEFAULT_LATE_GRACE_MINUTES, DEFAULT_SESSION_HOURS
from .database.connection import DatabaseConnection, DBConfig
from .organization.mysql_organization_repository import MySQLLocationRepository, MySQLLookupRepository
from .organization.repository import LocationRepository, LookupRepository
from .organization.service import LocationService, LookupService
from .payments.dialog import Dialog, FlashDialog
from .payments.mysql_payment_repository import MySQLPaymentRepository
from .payments.repository import PaymentRepository
from .payments.service import PaymentService
from .profiles.mysql_profile_repository import MySQLProfileRepository
from .profiles.repository import ProfileRepository
from .profiles.service import ProfileService

DEFAULT_WORK_HOURS = WorkHours(start=time(8, 0), end=time(17, 0))


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]

    auth_repo: AuthRepository
    profiles_repo: ProfileRepository
    attendance_repo: AttendanceRepository
    payments_repo: PaymentRepository
    banks_repo: LookupRepository

    role_resolver: RoleResolver
    profile_service: ProfileService
    attendance_service: AttendanceService
    payment_service: PaymentService
    department_service: LookupService
    position_service: LookupService
    bank_service: LookupService
    location_service: LocationService

    session_hours: int = DEFAULT_SESSION_HOURS

    def auth_client(self, storage: TokenStorage) -> AuthClient:
        """A fresh auth client bound to one browser session's token storage."""
        return AuthClient(self.auth_repo, storage, session_hours=self.session_hours)


def assemble(
    *,
    auth_repo: AuthRepository,
    profiles_repo: ProfileRepository,
    attendance_repo: AttendanceRepository,
    payments_repo: PaymentRepository,
    departments_repo: LookupRepository,
    positions_repo: LookupRepository,
    banks_repo: LookupRepository,
    location_repo: LocationRepository,
    dialog: Optional[Dialog] = None,
    conn: Optional[DatabaseConnection] = None,
    session_hours: int = DEFAULT_SESSION_HOURS,
    work_hours: WorkHours = DEFAULT_WORK_HOURS,
    grace_minutes: int = DEFAULT_LATE_GRACE_MINUTES,
) -> Container:
    """Wire services on top of any repository implementations (MySQL or in-memory)."""
    return Container(
        conn=conn,
        auth_repo=auth_repo,
        profiles_repo=profiles_repo,
        attendance_repo=attendance_repo,
        payments_repo=payments_repo,
        banks_repo=banks_repo,
        role_resolver=RoleResolver(profiles_repo),
        profile_service=ProfileService(profiles_repo),
        attendance_service=AttendanceService(
            attendance_repo,
            profiles_repo,
            hours=work_hours,
            strategy_factory=AttendanceStrategyFactory(),
            grace_minutes=grace_minutes,
        ),
        payment_service=PaymentService(payments_repo, banks_repo, profiles_repo, dialog=dialog or FlashDialog()),
        department_service=LookupService(departments_repo, label="Departemen"),
        position_service=LookupService(positions_repo, label="Posisi"),
        bank_service=LookupService(banks_repo, label="Bank"),
        location_service=LocationService(location_repo),
        session_hours=int(session_hours),
    )


def build_container(
    *,
    db_config: dict,
    session_hours: int = DEFAULT_SESSION_HOURS,
    work_hours: WorkHours = DEFAULT_WORK_HOURS,
    grace_minutes: int = DEFAULT_LATE_GRACE_MINUTES,
) -> Container:
    conn = DatabaseConnection(DBConfig.from_dict(db_config))

    return assemble(
        conn=conn,
        auth_repo=MySQLAuthRepository(conn),
        profiles_repo=MySQLProfileRepository(conn),
        attendance_repo=MySQLAttendanceRepository(conn),
        payments_repo=MySQLPaymentRepository(conn),
        departments_repo=MySQLLookupRepository(conn, table="departments"),
        positions_repo=MySQLLookupRepository(conn, table="positions"),
        banks_repo=MySQLLookupRepository(conn, table="bank_info"),
        location_repo=MySQLLocationRepository(conn),
        session_hours=session_hours,
        work_hours=work_hours,
        grace_minutes=grace_minutes,
    )
