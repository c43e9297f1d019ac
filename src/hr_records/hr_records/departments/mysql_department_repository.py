from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Department, DepartmentSummary
from .repository import DepartmentRepository

_SUMMARY_SELECT = """
    SELECT d.dept_id, d.name, d.description, COUNT(e.employee_id) AS employee_count
    FROM departments d
    LEFT JOIN employees e ON e.dept_id = d.dept_id
    GROUP BY d.dept_id, d.name, d.description
"""


def _summary(r: dict) -> DepartmentSummary:
    return DepartmentSummary(
        dept_id=int(r["dept_id"]),
        name=r["name"],
        description=r.get("description"),
        employee_count=int(r.get("employee_count") or 0),
    )


class MySQLDepartmentRepository(DepartmentRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, dept_id: int) -> Optional[Department]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT dept_id, name, description FROM departments WHERE dept_id=%s", (int(dept_id),))
            r = fetchone(cur)
            if not r:
                return None
            return Department(dept_id=int(r["dept_id"]), name=r["name"], description=r.get("description"))

    def get_by_name(self, name: str) -> Optional[Department]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT dept_id, name, description FROM departments WHERE LOWER(name)=LOWER(%s)",
                (name.strip(),),
            )
            r = fetchone(cur)
            if not r:
                return None
            return Department(dept_id=int(r["dept_id"]), name=r["name"], description=r.get("description"))

    def list_with_counts(self) -> Sequence[DepartmentSummary]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SUMMARY_SELECT + " ORDER BY d.name")
            return [_summary(r) for r in fetchall(cur)]

    def top_by_employee_count(self, limit: int) -> Sequence[DepartmentSummary]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SUMMARY_SELECT + " ORDER BY employee_count DESC, d.name LIMIT %s", (int(limit),))
            return [_summary(r) for r in fetchall(cur)]

    def count(self) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT COUNT(*) AS n FROM departments")
            return int(fetchone(cur)["n"])

    def insert(self, *, name: str, description: Optional[str]) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("INSERT INTO departments(name, description) VALUES(%s,%s)", (name, description))
            return int(cur.lastrowid)

    def update(self, *, dept_id: int, name: str, description: Optional[str]) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE departments SET name=%s, description=%s WHERE dept_id=%s",
                (name, description, int(dept_id)),
            )
            return cur.rowcount > 0

    def delete(self, dept_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM departments WHERE dept_id=%s", (int(dept_id),))
            return cur.rowcount > 0
