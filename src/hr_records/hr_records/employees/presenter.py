from __future__ import annotations

from ..common.datetime_utils import format_date
from .model import Employee, EmployeeView


def present_employee(e: EmployeeView) -> dict:
    return {
        "id": e.employee_id,
        "first_name": e.first_name,
        "last_name": e.last_name,
        "email": e.email,
        "phone": e.phone,
        "position": e.position,
        "department_id": e.department_id,
        "department_name": e.department_name,
        "hire_date": format_date(e.hire_date),
        "salary": e.salary,
        "status": e.status.value,
    }


def present_employee_brief(e: Employee) -> dict:
    return {
        "id": e.employee_id,
        "first_name": e.first_name,
        "last_name": e.last_name,
        "email": e.email,
        "position": e.position,
    }
