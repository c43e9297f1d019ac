from __future__ import annotations

from datetime import date, time
from typing import Optional, Protocol, Sequence

from ..core.enums import AttendanceStatus
from .model import AttendanceRecord, AttendanceView


class AttendanceRepository(Protocol):
    """Storage contract for attendance records.

    Implementations must keep a unique key on (employee_id, work_date) and
    raise UniqueConstraintViolation when an insert collides with it.
    """

    def get_by_id(self, attendance_id: int) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def get_for_employee_and_date(self, employee_id: int, work_date: date) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def get_view(self, attendance_id: int) -> Optional[AttendanceView]:
        raise NotImplementedError

    def list_views(
        self,
        *,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        employee_id: Optional[int] = None,
    ) -> Sequence[AttendanceView]:
        """Date descending, then employee first/last name ascending."""
        raise NotImplementedError

    def count(
        self,
        *,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        employee_id: Optional[int] = None,
        status: Optional[AttendanceStatus] = None,
        checked_in_after: Optional[time] = None,
    ) -> int:
        raise NotImplementedError

    def insert(
        self,
        *,
        employee_id: int,
        work_date: date,
        check_in: Optional[time],
        check_out: Optional[time],
        status: AttendanceStatus,
        notes: Optional[str] = None,
    ) -> int:
        raise NotImplementedError

    def update(
        self,
        *,
        attendance_id: int,
        check_in: Optional[time],
        check_out: Optional[time],
        status: AttendanceStatus,
        notes: Optional[str],
    ) -> bool:
        raise NotImplementedError

    def set_check_in(self, *, attendance_id: int, check_in: time, status: AttendanceStatus) -> bool:
        """Write check_in only while it is still empty. False if already set."""
        raise NotImplementedError

    def set_check_out(self, *, attendance_id: int, check_out: time) -> bool:
        """Write check_out only while it is still empty. False if already set."""
        raise NotImplementedError

    def delete(self, attendance_id: int) -> bool:
        raise NotImplementedError
