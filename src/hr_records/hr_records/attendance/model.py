from __future__ import annotations

from dataclasses import dataclass
from datetime import date, time
from typing import Optional

from ..core.enums import AttendanceStatus


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one employee's attendance for one calendar day."""

    attendance_id: int
    employee_id: int
    work_date: date
    check_in: Optional[time]
    check_out: Optional[time]
    status: AttendanceStatus
    notes: Optional[str] = None


@dataclass(frozen=True)
class AttendanceView(AttendanceRecord):
    """Read-model: record joined with employee and department display fields."""

    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: Optional[str] = None
    position: Optional[str] = None
    department_name: Optional[str] = None


@dataclass(frozen=True)
class AttendanceFilter:
    work_date: Optional[date] = None
    employee_id: Optional[int] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None

    @property
    def has_range(self) -> bool:
        return self.start_date is not None or self.end_date is not None


@dataclass(frozen=True)
class AttendanceStats:
    total_records: int
    present_count: int
    absent_count: int
    late_count: int
    today_attendance: list[AttendanceView]
