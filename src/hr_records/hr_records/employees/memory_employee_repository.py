from __future__ import annotations

from dataclasses import asdict
from datetime import date
from typing import Optional, Sequence

from ..core.enums import EmployeeStatus
from ..database.memory import InMemoryDatabase
from .model import Employee, EmployeeData, EmployeeView
from .repository import EmployeeRepository


def _row(data: EmployeeData) -> dict:
    row = asdict(data)
    row["dept_id"] = row.pop("department_id")
    row["status"] = data.status.value
    return row


def _fields(r: dict) -> dict:
    return dict(
        employee_id=int(r["employee_id"]),
        first_name=r["first_name"],
        last_name=r["last_name"],
        email=r["email"],
        phone=r.get("phone"),
        position=r["position"],
        department_id=r.get("dept_id"),
        hire_date=r.get("hire_date"),
        salary=r.get("salary"),
        status=EmployeeStatus(r["status"]),
    )


class InMemoryEmployeeRepository(EmployeeRepository):
    def __init__(self, db: InMemoryDatabase):
        self._db = db

    def _view(self, r: dict) -> EmployeeView:
        dept = self._db.get("departments", r["dept_id"]) if r.get("dept_id") is not None else None
        return EmployeeView(**_fields(r), department_name=dept["name"] if dept else None)

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        r = self._db.get("employees", employee_id)
        return Employee(**_fields(r)) if r else None

    def get_view(self, employee_id: int) -> Optional[EmployeeView]:
        r = self._db.get("employees", employee_id)
        return self._view(r) if r else None

    def get_by_email(self, email: str) -> Optional[Employee]:
        wanted = email.strip().casefold()
        for r in self._db.rows("employees"):
            if r["email"].casefold() == wanted:
                return Employee(**_fields(r))
        return None

    def list_views(
        self,
        *,
        search: Optional[str] = None,
        department_id: Optional[int] = None,
        status: Optional[EmployeeStatus] = None,
    ) -> Sequence[EmployeeView]:
        needle = search.strip().casefold() if search else None
        out = []
        for r in self._db.rows("employees"):
            if department_id is not None and r.get("dept_id") != int(department_id):
                continue
            if status is not None and r["status"] != status.value:
                continue
            if needle and not any(needle in (r.get(c) or "").casefold() for c in ("first_name", "last_name", "email", "position")):
                continue
            out.append(self._view(r))
        out.sort(key=lambda e: e.employee_id, reverse=True)
        return out

    def list_by_department(self, department_id: int) -> Sequence[Employee]:
        items = [Employee(**_fields(r)) for r in self._db.rows("employees") if r.get("dept_id") == int(department_id)]
        items.sort(key=lambda e: (e.last_name, e.first_name))
        return items

    def recent_hires(self, limit: int) -> Sequence[EmployeeView]:
        items = [self._view(r) for r in self._db.rows("employees") if r.get("hire_date")]
        items.sort(key=lambda e: (e.hire_date or date.min, e.employee_id), reverse=True)
        return items[: int(limit)]

    def count(self, *, department_id: Optional[int] = None, status: Optional[EmployeeStatus] = None) -> int:
        n = 0
        for r in self._db.rows("employees"):
            if department_id is not None and r.get("dept_id") != int(department_id):
                continue
            if status is not None and r["status"] != status.value:
                continue
            n += 1
        return n

    def insert(self, data: EmployeeData) -> int:
        return self._db.insert("employees", _row(data), id_column="employee_id")

    def update(self, employee_id: int, data: EmployeeData) -> bool:
        return self._db.update("employees", employee_id, _row(data))

    def delete(self, employee_id: int) -> bool:
        return self._db.delete("employees", employee_id)
