from __future__ import annotations

from datetime import date
from typing import Optional

from ..common.clock import Clock
from ..core.constants import LATE_THRESHOLD
from ..core.enums import AttendanceStatus
from ..core.exceptions import ValidationError
from .model import AttendanceStats
from .repository import AttendanceRepository


class AttendanceStatsService:
    """Read-only counts over attendance records.

    "Late" is derived (present + check-in after LATE_THRESHOLD); the stored
    status is never rewritten. The today roster ignores the range.
    """

    def __init__(self, attendance: AttendanceRepository, clock: Clock):
        self._attendance = attendance
        self._clock = clock

    def stats(self, *, start_date: Optional[date] = None, end_date: Optional[date] = None) -> AttendanceStats:
        if start_date and end_date and start_date > end_date:
            raise ValidationError.for_field(
                "start_date/end_date", "start_date must not be after end_date", summary="Invalid date range"
            )

        rng = dict(start_date=start_date, end_date=end_date)
        today = self._clock.today()

        today_rows = sorted(
            self._attendance.list_views(start_date=today, end_date=today),
            key=lambda v: ((v.first_name or ""), (v.last_name or "")),
        )

        return AttendanceStats(
            total_records=self._attendance.count(**rng),
            present_count=self._attendance.count(**rng, status=AttendanceStatus.PRESENT),
            absent_count=self._attendance.count(**rng, status=AttendanceStatus.ABSENT),
            late_count=self._attendance.count(**rng, status=AttendanceStatus.PRESENT, checked_in_after=LATE_THRESHOLD),
            today_attendance=list(today_rows),
        )
