from __future__ import annotations

import logging
from datetime import date, time
from typing import Optional, Sequence

from ..common.clock import Clock
from ..common.datetime_utils import minutes_since_midnight
from ..common.unset import UNSET, Patch, is_set, merge
from ..common.validators import optional_text
from ..core.constants import NOTES_MAX_LENGTH
from ..core.enums import AttendanceStatus, MarkAction
from ..core.exceptions import ConflictError, NotFoundError, ValidationError
from ..integrity.guard import IntegrityGuard
from .model import AttendanceFilter, AttendanceView
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)

ALREADY_CHECKED_IN = "Already checked in for this date"
ALREADY_CHECKED_OUT = "Already checked out for this date"


def validate_time_range(check_in: Optional[time], check_out: Optional[time]) -> None:
    """Check-out must be strictly later than check-in, to the minute, same day."""
    if check_in is None or check_out is None:
        return
    if minutes_since_midnight(check_out) <= minutes_since_midnight(check_in):
        raise ValidationError.for_field(
            "check_out", "Check-out time must be after check-in time", summary="Invalid time range"
        )


class AttendanceService:
    """Lifecycle of the one attendance record per (employee, date).

    absent (no row) -> checked-in (check_in set) -> completed (both set).
    Explicit create/update may jump states but always keep the time order.
    """

    def __init__(self, attendance: AttendanceRepository, guard: IntegrityGuard, clock: Clock):
        self._attendance = attendance
        self._guard = guard
        self._clock = clock

    def _view(self, attendance_id: int) -> AttendanceView:
        view = self._attendance.get_view(attendance_id)
        if not view:
            raise NotFoundError("Attendance record not found")
        return view

    def get(self, attendance_id: int) -> AttendanceView:
        return self._view(attendance_id)

    def list(self, filters: AttendanceFilter) -> Sequence[AttendanceView]:
        # A range wins over a single date when both are given.
        if filters.has_range:
            start, end = filters.start_date, filters.end_date
            if start and end and start > end:
                raise ValidationError.for_field(
                    "start_date/end_date", "start_date must not be after end_date", summary="Invalid date range"
                )
        else:
            start = end = filters.work_date
        return self._attendance.list_views(start_date=start, end_date=end, employee_id=filters.employee_id)

    def create(
        self,
        *,
        employee_id: int,
        work_date: date,
        check_in: Optional[time] = None,
        check_out: Optional[time] = None,
        status: Optional[AttendanceStatus] = None,
        notes: Optional[str] = None,
    ) -> AttendanceView:
        self._guard.require_employee(employee_id)
        self._guard.ensure_attendance_slot_free(employee_id, work_date)
        validate_time_range(check_in, check_out)

        with self._guard.translate_unique_violation(self._guard.attendance_conflict(work_date)):
            attendance_id = self._attendance.insert(
                employee_id=employee_id,
                work_date=work_date,
                check_in=check_in,
                check_out=check_out,
                status=status or AttendanceStatus.PRESENT,
                notes=optional_text(notes, "notes", NOTES_MAX_LENGTH),
            )

        logger.info("Attendance %s created for employee %s on %s", attendance_id, employee_id, work_date)
        return self._view(attendance_id)

    def update(
        self,
        attendance_id: int,
        *,
        check_in: Patch[Optional[time]] = UNSET,
        check_out: Patch[Optional[time]] = UNSET,
        status: Patch[AttendanceStatus] = UNSET,
        notes: Patch[Optional[str]] = UNSET,
    ) -> AttendanceView:
        current = self._attendance.get_by_id(attendance_id)
        if not current:
            raise NotFoundError("Attendance record not found")

        if is_set(status) and status is None:
            raise ValidationError.for_field("status", "status cannot be empty")

        new_check_in = merge(check_in, current.check_in)
        new_check_out = merge(check_out, current.check_out)
        validate_time_range(new_check_in, new_check_out)

        new_notes = optional_text(notes, "notes", NOTES_MAX_LENGTH) if is_set(notes) else current.notes

        if not self._attendance.update(
            attendance_id=attendance_id,
            check_in=new_check_in,
            check_out=new_check_out,
            status=merge(status, current.status),
            notes=new_notes,
        ):
            raise NotFoundError("Attendance record not found")

        logger.info("Attendance %s updated", attendance_id)
        return self._view(attendance_id)

    def delete(self, attendance_id: int) -> None:
        if not self._attendance.get_by_id(attendance_id):
            raise NotFoundError("Attendance record not found")
        self._attendance.delete(attendance_id)
        logger.info("Attendance %s deleted", attendance_id)

    def mark(self, *, employee_id: int, work_date: date, action: MarkAction) -> AttendanceView:
        """Check-in/check-out workflow entry point; times come from the clock."""
        self._guard.require_employee(employee_id)

        if action == MarkAction.CHECK_IN:
            attendance_id = self._check_in(employee_id, work_date)
        elif action == MarkAction.CHECK_OUT:
            attendance_id = self._check_out(employee_id, work_date)
        else:
            raise ValidationError.for_field("action", "Action must be check_in or check_out")

        return self._view(attendance_id)

    def _check_in(self, employee_id: int, work_date: date) -> int:
        record = self._attendance.get_for_employee_and_date(employee_id, work_date)
        if record and record.check_in is not None:
            raise ConflictError(ALREADY_CHECKED_IN)

        now = self._clock.now_time()

        if record:
            # Conditional write: loses cleanly if a concurrent check-in got there first.
            if not self._attendance.set_check_in(
                attendance_id=record.attendance_id, check_in=now, status=AttendanceStatus.PRESENT
            ):
                raise ConflictError(ALREADY_CHECKED_IN)
            attendance_id = record.attendance_id
        else:
            with self._guard.translate_unique_violation(ConflictError(ALREADY_CHECKED_IN)):
                attendance_id = self._attendance.insert(
                    employee_id=employee_id,
                    work_date=work_date,
                    check_in=now,
                    check_out=None,
                    status=AttendanceStatus.PRESENT,
                )

        logger.info("Employee %s checked in on %s at %s", employee_id, work_date, now.strftime("%H:%M:%S"))
        return attendance_id

    def _check_out(self, employee_id: int, work_date: date) -> int:
        record = self._attendance.get_for_employee_and_date(employee_id, work_date)
        if not record:
            raise ValidationError.for_field(
                "action",
                "Employee must check in first before checking out",
                summary="Must check in before checking out",
            )
        if record.check_out is not None:
            raise ConflictError(ALREADY_CHECKED_OUT)

        now = self._clock.now_time()
        if not self._attendance.set_check_out(attendance_id=record.attendance_id, check_out=now):
            raise ConflictError(ALREADY_CHECKED_OUT)

        logger.info("Employee %s checked out on %s at %s", employee_id, work_date, now.strftime("%H:%M:%S"))
        return record.attendance_id
