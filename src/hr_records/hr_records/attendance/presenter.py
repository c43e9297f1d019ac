from __future__ import annotations

from ..common.datetime_utils import format_date, format_time
from .model import AttendanceStats, AttendanceView


def present_attendance(v: AttendanceView) -> dict:
    return {
        "id": v.attendance_id,
        "employee_id": v.employee_id,
        "date": format_date(v.work_date),
        "check_in": format_time(v.check_in),
        "check_out": format_time(v.check_out),
        "status": v.status.value,
        "notes": v.notes,
        "first_name": v.first_name,
        "last_name": v.last_name,
        "email": v.email,
        "position": v.position,
        "department_name": v.department_name or None,
    }


def present_stats(s: AttendanceStats) -> dict:
    return {
        "totalRecords": s.total_records,
        "presentCount": s.present_count,
        "absentCount": s.absent_count,
        "lateCount": s.late_count,
        "todayAttendance": [present_attendance(v) for v in s.today_attendance],
    }
