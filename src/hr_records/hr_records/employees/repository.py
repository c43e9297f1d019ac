from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.enums import EmployeeStatus
from .model import Employee, EmployeeData, EmployeeView


class EmployeeRepository(Protocol):
    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        raise NotImplementedError

    def get_view(self, employee_id: int) -> Optional[EmployeeView]:
        raise NotImplementedError

    def get_by_email(self, email: str) -> Optional[Employee]:
        """Case-insensitive lookup."""
        raise NotImplementedError

    def list_views(
        self,
        *,
        search: Optional[str] = None,
        department_id: Optional[int] = None,
        status: Optional[EmployeeStatus] = None,
    ) -> Sequence[EmployeeView]:
        """Newest employees first."""
        raise NotImplementedError

    def list_by_department(self, department_id: int) -> Sequence[Employee]:
        raise NotImplementedError

    def recent_hires(self, limit: int) -> Sequence[EmployeeView]:
        raise NotImplementedError

    def count(self, *, department_id: Optional[int] = None, status: Optional[EmployeeStatus] = None) -> int:
        raise NotImplementedError

    def insert(self, data: EmployeeData) -> int:
        raise NotImplementedError

    def update(self, employee_id: int, data: EmployeeData) -> bool:
        raise NotImplementedError

    def delete(self, employee_id: int) -> bool:
        raise NotImplementedError
