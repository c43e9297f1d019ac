from __future__ import annotations

from typing import Optional, Sequence

from ..core.enums import EmployeeStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, escape_like, fetchall, fetchone
from .model import Employee, EmployeeData, EmployeeView
from .repository import EmployeeRepository

_COLUMNS = "e.employee_id, e.first_name, e.last_name, e.email, e.phone, e.position, e.dept_id, e.hire_date, e.salary, e.status"

_VIEW_SELECT = f"""
    SELECT {_COLUMNS}, d.name AS department_name
    FROM employees e
    LEFT JOIN departments d ON d.dept_id = e.dept_id
"""


def _fields(r: dict) -> dict:
    salary = r.get("salary")
    return dict(
        employee_id=int(r["employee_id"]),
        first_name=r["first_name"],
        last_name=r["last_name"],
        email=r["email"],
        phone=r.get("phone"),
        position=r["position"],
        department_id=int(r["dept_id"]) if r.get("dept_id") is not None else None,
        hire_date=r.get("hire_date"),
        salary=float(salary) if salary is not None else None,
        status=EmployeeStatus(r["status"]),
    )


def _params(data: EmployeeData) -> tuple:
    return (
        data.first_name,
        data.last_name,
        data.email,
        data.phone,
        data.position,
        data.department_id,
        data.hire_date,
        data.salary,
        data.status.value,
    )


class MySQLEmployeeRepository(EmployeeRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM employees e WHERE e.employee_id=%s", (int(employee_id),))
            r = fetchone(cur)
            return Employee(**_fields(r)) if r else None

    def get_view(self, employee_id: int) -> Optional[EmployeeView]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_VIEW_SELECT + " WHERE e.employee_id=%s", (int(employee_id),))
            r = fetchone(cur)
            return EmployeeView(**_fields(r), department_name=r.get("department_name")) if r else None

    def get_by_email(self, email: str) -> Optional[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM employees e WHERE LOWER(e.email)=LOWER(%s)", (email.strip(),))
            r = fetchone(cur)
            return Employee(**_fields(r)) if r else None

    def list_views(
        self,
        *,
        search: Optional[str] = None,
        department_id: Optional[int] = None,
        status: Optional[EmployeeStatus] = None,
    ) -> Sequence[EmployeeView]:
        clauses: list[str] = []
        params: list[object] = []

        if search:
            like = f"%{escape_like(search.strip())}%"
            clauses.append("(e.first_name LIKE %s OR e.last_name LIKE %s OR e.email LIKE %s OR e.position LIKE %s)")
            params.extend([like, like, like, like])
        if department_id is not None:
            clauses.append("e.dept_id=%s")
            params.append(int(department_id))
        if status is not None:
            clauses.append("e.status=%s")
            params.append(status.value)

        where = f" WHERE {' AND '.join(clauses)}" if clauses else ""

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_VIEW_SELECT + where + " ORDER BY e.created_at DESC, e.employee_id DESC", tuple(params))
            return [EmployeeView(**_fields(r), department_name=r.get("department_name")) for r in fetchall(cur)]

    def list_by_department(self, department_id: int) -> Sequence[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM employees e WHERE e.dept_id=%s ORDER BY e.last_name, e.first_name",
                (int(department_id),),
            )
            return [Employee(**_fields(r)) for r in fetchall(cur)]

    def recent_hires(self, limit: int) -> Sequence[EmployeeView]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                _VIEW_SELECT + " WHERE e.hire_date IS NOT NULL ORDER BY e.hire_date DESC, e.employee_id DESC LIMIT %s",
                (int(limit),),
            )
            return [EmployeeView(**_fields(r), department_name=r.get("department_name")) for r in fetchall(cur)]

    def count(self, *, department_id: Optional[int] = None, status: Optional[EmployeeStatus] = None) -> int:
        clauses = ["1=1"]
        params: list[object] = []
        if department_id is not None:
            clauses.append("dept_id=%s")
            params.append(int(department_id))
        if status is not None:
            clauses.append("status=%s")
            params.append(status.value)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT COUNT(*) AS n FROM employees WHERE {' AND '.join(clauses)}", tuple(params))
            return int(fetchone(cur)["n"])

    def insert(self, data: EmployeeData) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO employees(first_name, last_name, email, phone, position, dept_id, hire_date, salary, status)
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                _params(data),
            )
            return int(cur.lastrowid)

    def update(self, employee_id: int, data: EmployeeData) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE employees
                SET first_name=%s, last_name=%s, email=%s, phone=%s, position=%s,
                    dept_id=%s, hire_date=%s, salary=%s, status=%s
                WHERE employee_id=%s
                """,
                _params(data) + (int(employee_id),),
            )
            return cur.rowcount > 0

    def delete(self, employee_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM employees WHERE employee_id=%s", (int(employee_id),))
            return cur.rowcount > 0
