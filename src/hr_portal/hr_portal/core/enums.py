from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Peran pengguna yang disimpan di profil."""

    ADMIN = "admin"
    EMPLOYEE = "employee"


class RouteAccess(str, Enum):
    """Capability a path requires."""

    PUBLIC = "public"
    EMPLOYEE = "employee"
    ADMIN = "admin"


class GuardState(str, Enum):
    LOADING = "loading"
    UNAUTHENTICATED = "unauthenticated"
    EMPLOYEE = "employee"
    ADMIN = "admin"


class AuthEvent(str, Enum):
    INITIAL_SESSION = "INITIAL_SESSION"
    SIGNED_IN = "SIGNED_IN"
    SIGNED_OUT = "SIGNED_OUT"
    TOKEN_REFRESHED = "TOKEN_REFRESHED"


class PaymentMethod(str, Enum):
    TRANSFER = "transfer"
    CASH = "cash"


class PaymentStatus(str, Enum):
    COMPLETED = "completed"


class AttendanceStatus(str, Enum):
    """Status absensi yang disimpan di basis data."""

    ON_TIME = "ON_TIME"
    LATE = "LATE"
    EARLY_LEAVE = "EARLY_LEAVE"
    UNKNOWN = "UNKNOWN"
