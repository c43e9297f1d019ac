from __future__ import annotations

from datetime import date, time
from typing import Optional, Sequence

from ..core.enums import AttendanceStatus
from ..database.memory import InMemoryDatabase
from .model import AttendanceRecord, AttendanceView
from .repository import AttendanceRepository


def _record_fields(r: dict) -> dict:
    return dict(
        attendance_id=int(r["attendance_id"]),
        employee_id=int(r["employee_id"]),
        work_date=r["work_date"],
        check_in=r.get("check_in"),
        check_out=r.get("check_out"),
        status=AttendanceStatus(r["status"]),
        notes=r.get("notes"),
    )


def _matches(
    r: dict,
    *,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    employee_id: Optional[int] = None,
    status: Optional[AttendanceStatus] = None,
    checked_in_after: Optional[time] = None,
) -> bool:
    if start_date is not None and r["work_date"] < start_date:
        return False
    if end_date is not None and r["work_date"] > end_date:
        return False
    if employee_id is not None and r["employee_id"] != int(employee_id):
        return False
    if status is not None and r["status"] != status.value:
        return False
    if checked_in_after is not None and (r.get("check_in") is None or r["check_in"] <= checked_in_after):
        return False
    return True


class InMemoryAttendanceRepository(AttendanceRepository):
    def __init__(self, db: InMemoryDatabase):
        self._db = db

    def _view(self, r: dict) -> AttendanceView:
        emp = self._db.get("employees", r["employee_id"]) or {}
        dept = self._db.get("departments", emp["dept_id"]) if emp.get("dept_id") is not None else None
        return AttendanceView(
            **_record_fields(r),
            first_name=emp.get("first_name"),
            last_name=emp.get("last_name"),
            email=emp.get("email"),
            position=emp.get("position"),
            department_name=dept["name"] if dept else None,
        )

    def get_by_id(self, attendance_id: int) -> Optional[AttendanceRecord]:
        r = self._db.get("attendance_records", attendance_id)
        return AttendanceRecord(**_record_fields(r)) if r else None

    def get_for_employee_and_date(self, employee_id: int, work_date: date) -> Optional[AttendanceRecord]:
        for r in self._db.rows("attendance_records"):
            if r["employee_id"] == int(employee_id) and r["work_date"] == work_date:
                return AttendanceRecord(**_record_fields(r))
        return None

    def get_view(self, attendance_id: int) -> Optional[AttendanceView]:
        r = self._db.get("attendance_records", attendance_id)
        return self._view(r) if r else None

    def list_views(
        self,
        *,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        employee_id: Optional[int] = None,
    ) -> Sequence[AttendanceView]:
        views = [
            self._view(r)
            for r in self._db.rows("attendance_records")
            if _matches(r, start_date=start_date, end_date=end_date, employee_id=employee_id)
        ]
        # name ascending within a day, days descending (two stable passes)
        views.sort(key=lambda v: ((v.first_name or ""), (v.last_name or "")))
        views.sort(key=lambda v: v.work_date, reverse=True)
        return views

    def count(
        self,
        *,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        employee_id: Optional[int] = None,
        status: Optional[AttendanceStatus] = None,
        checked_in_after: Optional[time] = None,
    ) -> int:
        return sum(
            1
            for r in self._db.rows("attendance_records")
            if _matches(
                r,
                start_date=start_date,
                end_date=end_date,
                employee_id=employee_id,
                status=status,
                checked_in_after=checked_in_after,
            )
        )

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
        return self._db.insert(
            "attendance_records",
            {
                "employee_id": int(employee_id),
                "work_date": work_date,
                "check_in": check_in,
                "check_out": check_out,
                "status": status.value,
                "notes": notes,
            },
            id_column="attendance_id",
        )

    def update(
        self,
        *,
        attendance_id: int,
        check_in: Optional[time],
        check_out: Optional[time],
        status: AttendanceStatus,
        notes: Optional[str],
    ) -> bool:
        return self._db.update(
            "attendance_records",
            attendance_id,
            {"check_in": check_in, "check_out": check_out, "status": status.value, "notes": notes},
        )

    def set_check_in(self, *, attendance_id: int, check_in: time, status: AttendanceStatus) -> bool:
        return self._db.update(
            "attendance_records",
            attendance_id,
            {"check_in": check_in, "status": status.value},
            where={"check_in": None},
        )

    def set_check_out(self, *, attendance_id: int, check_out: time) -> bool:
        return self._db.update("attendance_records", attendance_id, {"check_out": check_out}, where={"check_out": None})

    def delete(self, attendance_id: int) -> bool:
        return self._db.delete("attendance_records", attendance_id)
