from __future__ import annotations

from enum import Enum


class SessionStatus(str, Enum):
    """Lifecycle of a QR attendance session."""

    ACTIVE = "active"
    EXPIRED = "expired"


class AttendanceStatus(str, Enum):
    """Status stored on an attendance record."""

    PRESENT = "present"
    LATE = "late"
    EXCUSED = "excused"
    ABSENT = "absent"


class VerificationMethod(str, Enum):
    QR = "qr"
    MANUAL = "manual"
