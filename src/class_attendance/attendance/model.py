from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import AttendanceStatus, VerificationMethod


@dataclass(frozen=True)
class Location:
    latitude: float
    longitude: float


@dataclass(frozen=True)
class DeviceInfo:
    ip_address: Optional[str] = None
    user_agent: Optional[str] = None


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one student's mark for one session."""

    record_id: int
    session_id: str
    student_id: str
    timestamp: datetime
    status: AttendanceStatus
    verification_method: VerificationMethod
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    device_ip_address: Optional[str] = None
    device_user_agent: Optional[str] = None


@dataclass(frozen=True)
class NewAttendanceRecord:
    session_id: str
    student_id: str
    timestamp: datetime
    status: AttendanceStatus
    verification_method: VerificationMethod
    location: Optional[Location] = None
    device: Optional[DeviceInfo] = None


@dataclass(frozen=True)
class AttendanceListRow:
    """Read-model for the records page and CSV export."""

    record_id: int
    session_id: str
    student_id: str
    student_name: str
    section_id: Optional[int]
    section_name: Optional[str]
    course_code: Optional[str]
    timestamp: datetime
    status: AttendanceStatus
    verification_method: VerificationMethod
