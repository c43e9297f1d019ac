from __future__ import annotations

from typing import Optional, Sequence

from ..employees.model import Employee
from ..employees.presenter import present_employee_brief
from .model import Department, DepartmentSummary


def present_department(d: Department, *, employees: Optional[Sequence[Employee]] = None) -> dict:
    out = {"id": d.dept_id, "name": d.name, "description": d.description}
    if isinstance(d, DepartmentSummary):
        out["employee_count"] = d.employee_count
    if employees is not None:
        out["employees"] = [present_employee_brief(e) for e in employees]
    return out
