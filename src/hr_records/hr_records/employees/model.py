from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..core.enums import EmployeeStatus


@dataclass(frozen=True)
class EmployeeData:
    """Writable employee columns (everything but the identifier)."""

    first_name: str
    last_name: str
    email: str
    position: str
    phone: Optional[str] = None
    department_id: Optional[int] = None
    hire_date: Optional[date] = None
    salary: Optional[float] = None
    status: EmployeeStatus = EmployeeStatus.ACTIVE


@dataclass(frozen=True)
class Employee(EmployeeData):
    employee_id: int = 0

    def data(self) -> EmployeeData:
        return EmployeeData(
            first_name=self.first_name,
            last_name=self.last_name,
            email=self.email,
            position=self.position,
            phone=self.phone,
            department_id=self.department_id,
            hire_date=self.hire_date,
            salary=self.salary,
            status=self.status,
        )


@dataclass(frozen=True)
class EmployeeView(Employee):
    """Read-model: employee joined with its department name."""

    department_name: Optional[str] = None
