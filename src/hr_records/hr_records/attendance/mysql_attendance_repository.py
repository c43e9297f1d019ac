from __future__ import annotations

from datetime import date, time
from typing import Optional, Sequence

from ..core.enums import AttendanceStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, normalize_mysql_time
from .model import AttendanceRecord, AttendanceView
from .repository import AttendanceRepository

_COLUMNS = "ar.attendance_id, ar.employee_id, ar.work_date, ar.check_in, ar.check_out, ar.status, ar.notes"

_VIEW_SELECT = f"""
    SELECT {_COLUMNS},
           e.first_name, e.last_name, e.email, e.position,
           d.name AS department_name
    FROM attendance_records ar
    JOIN employees e ON e.employee_id = ar.employee_id
    LEFT JOIN departments d ON d.dept_id = e.dept_id
"""


def _record_fields(r: dict) -> dict:
    return dict(
        attendance_id=int(r["attendance_id"]),
        employee_id=int(r["employee_id"]),
        work_date=r["work_date"],
        check_in=normalize_mysql_time(r.get("check_in")),
        check_out=normalize_mysql_time(r.get("check_out")),
        status=AttendanceStatus(r["status"]),
        notes=r.get("notes"),
    )


def _view(r: dict) -> AttendanceView:
    return AttendanceView(
        **_record_fields(r),
        first_name=r.get("first_name"),
        last_name=r.get("last_name"),
        email=r.get("email"),
        position=r.get("position"),
        department_name=r.get("department_name"),
    )


def _where(
    *,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    employee_id: Optional[int] = None,
    status: Optional[AttendanceStatus] = None,
    checked_in_after: Optional[time] = None,
) -> tuple[str, list[object]]:
    clauses = ["1=1"]
    params: list[object] = []
    if start_date is not None:
        clauses.append("ar.work_date >= %s")
        params.append(start_date)
    if end_date is not None:
        clauses.append("ar.work_date <= %s")
        params.append(end_date)
    if employee_id is not None:
        clauses.append("ar.employee_id=%s")
        params.append(int(employee_id))
    if status is not None:
        clauses.append("ar.status=%s")
        params.append(status.value)
    if checked_in_after is not None:
        clauses.append("ar.check_in > %s")
        params.append(checked_in_after)
    return " AND ".join(clauses), params


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, attendance_id: int) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM attendance_records ar WHERE ar.attendance_id=%s", (int(attendance_id),))
            r = fetchone(cur)
            return AttendanceRecord(**_record_fields(r)) if r else None

    def get_for_employee_and_date(self, employee_id: int, work_date: date) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM attendance_records ar WHERE ar.employee_id=%s AND ar.work_date=%s",
                (int(employee_id), work_date),
            )
            r = fetchone(cur)
            return AttendanceRecord(**_record_fields(r)) if r else None

    def get_view(self, attendance_id: int) -> Optional[AttendanceView]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_VIEW_SELECT + " WHERE ar.attendance_id=%s", (int(attendance_id),))
            r = fetchone(cur)
            return _view(r) if r else None

    def list_views(
        self,
        *,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        employee_id: Optional[int] = None,
    ) -> Sequence[AttendanceView]:
        where, params = _where(start_date=start_date, end_date=end_date, employee_id=employee_id)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                _VIEW_SELECT + f" WHERE {where} ORDER BY ar.work_date DESC, e.first_name ASC, e.last_name ASC",
                tuple(params),
            )
            return [_view(r) for r in fetchall(cur)]

    def count(
        self,
        *,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        employee_id: Optional[int] = None,
        status: Optional[AttendanceStatus] = None,
        checked_in_after: Optional[time] = None,
    ) -> int:
        where, params = _where(
            start_date=start_date,
            end_date=end_date,
            employee_id=employee_id,
            status=status,
            checked_in_after=checked_in_after,
        )
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT COUNT(*) AS n FROM attendance_records ar WHERE {where}", tuple(params))
            return int(fetchone(cur)["n"])

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
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO attendance_records(employee_id, work_date, check_in, check_out, status, notes)
                VALUES(%s,%s,%s,%s,%s,%s)
                """,
                (int(employee_id), work_date, check_in, check_out, status.value, notes),
            )
            return int(cur.lastrowid)

    def update(
        self,
        *,
        attendance_id: int,
        check_in: Optional[time],
        check_out: Optional[time],
        status: AttendanceStatus,
        notes: Optional[str],
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE attendance_records
                SET check_in=%s, check_out=%s, status=%s, notes=%s
                WHERE attendance_id=%s
                """,
                (check_in, check_out, status.value, notes, int(attendance_id)),
            )
            return cur.rowcount > 0

    def set_check_in(self, *, attendance_id: int, check_in: time, status: AttendanceStatus) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE attendance_records
                SET check_in=%s, status=%s
                WHERE attendance_id=%s AND check_in IS NULL
                """,
                (check_in, status.value, int(attendance_id)),
            )
            return cur.rowcount > 0

    def set_check_out(self, *, attendance_id: int, check_out: time) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE attendance_records
                SET check_out=%s
                WHERE attendance_id=%s AND check_out IS NULL
                """,
                (check_out, int(attendance_id)),
            )
            return cur.rowcount > 0

    def delete(self, attendance_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM attendance_records WHERE attendance_id=%s", (int(attendance_id),))
            return cur.rowcount > 0
