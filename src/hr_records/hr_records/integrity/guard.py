"""Cross-entity rules between departments, employees and attendance.

Every check here is a pre-check that gives the caller a precise error. The
storage unique keys remain the source of truth for races; writes that lose a
race are re-raised through `translate_unique_violation` so they surface as the
same ConflictError. Foreign-key failures on the same window go through
`translate_reference_violation`.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from datetime import date
from typing import Iterator, Optional

from ..attendance.repository import AttendanceRepository
from ..core.exceptions import (
    ConflictError,
    DomainError,
    ForeignKeyViolation,
    NotFoundError,
    UniqueConstraintViolation,
    ValidationError,
)
from ..departments.model import Department
from ..departments.repository import DepartmentRepository
from ..employees.model import Employee
from ..employees.repository import EmployeeRepository

logger = logging.getLogger(__name__)


class IntegrityGuard:
    def __init__(
        self,
        employees: EmployeeRepository,
        departments: DepartmentRepository,
        attendance: AttendanceRepository,
    ):
        self._employees = employees
        self._departments = departments
        self._attendance = attendance

    # -- references ---------------------------------------------------------

    def require_employee(self, employee_id: int) -> Employee:
        employee = self._employees.get_by_id(employee_id)
        if not employee:
            raise NotFoundError("Employee not found")
        return employee

    def resolve_department_reference(self, department_id: Optional[int]) -> Optional[Department]:
        """A dangling department id is bad caller input, not a missing resource."""
        if department_id is None:
            return None
        department = self._departments.get_by_id(department_id)
        if not department:
            raise ValidationError.for_field(
                "department_id", "The specified department does not exist", summary="Department not found"
            )
        return department

    # -- deletions ----------------------------------------------------------

    def ensure_department_deletable(self, dept_id: int) -> None:
        n = self._employees.count(department_id=dept_id)
        if n > 0:
            logger.info("Refusing to delete department %s: %d employee(s) assigned", dept_id, n)
            raise self.department_in_use(n)

    def ensure_employee_deletable(self, employee_id: int) -> None:
        n = self._attendance.count(employee_id=employee_id)
        if n > 0:
            logger.info("Refusing to delete employee %s: %d attendance record(s)", employee_id, n)
            raise self.employee_in_use(n)

    @staticmethod
    def department_in_use(count: Optional[int] = None) -> ConflictError:
        held = f"{count} employee(s)" if count is not None else "assigned employees"
        return ConflictError(
            "Cannot delete department with assigned employees",
            details=[
                {
                    "field": "department_id",
                    "message": f"Department has {held}. Please reassign employees first.",
                }
            ],
            count=count,
        )

    @staticmethod
    def employee_in_use(count: Optional[int] = None) -> ConflictError:
        held = f"{count} attendance record(s)" if count is not None else "attendance records"
        return ConflictError(
            "Cannot delete employee with attendance records",
            details=[
                {
                    "field": "employee_id",
                    "message": f"Employee has {held}. Please delete attendance records first.",
                }
            ],
            count=count,
        )

    # -- uniqueness ---------------------------------------------------------

    def ensure_email_available(self, email: str, *, exclude_id: Optional[int] = None) -> None:
        other = self._employees.get_by_email(email)
        if other and other.employee_id != exclude_id:
            raise self.email_conflict(email, updating=exclude_id is not None)

    def ensure_department_name_available(self, name: str, *, exclude_id: Optional[int] = None) -> None:
        other = self._departments.get_by_name(name)
        if other and other.dept_id != exclude_id:
            raise self.department_name_conflict(name, updating=exclude_id is not None)

    def ensure_attendance_slot_free(self, employee_id: int, work_date: date) -> None:
        if self._attendance.get_for_employee_and_date(employee_id, work_date):
            raise self.attendance_conflict(work_date)

    @staticmethod
    def email_conflict(email: str, *, updating: bool = False) -> ConflictError:
        message = "Email already taken by another employee" if updating else "Employee with this email already exists"
        return ConflictError(message, details=[{"field": "email", "message": message, "value": email}])

    @staticmethod
    def department_name_conflict(name: str, *, updating: bool = False) -> ConflictError:
        message = "Department name already taken" if updating else "Department with this name already exists"
        return ConflictError(message, details=[{"field": "name", "message": message, "value": name}])

    @staticmethod
    def attendance_conflict(work_date: date) -> ConflictError:
        return ConflictError(
            "Attendance record already exists for this date",
            details=[{"field": "date", "message": "One record per employee per day", "value": work_date.isoformat()}],
        )

    @staticmethod
    @contextmanager
    def translate_unique_violation(conflict: ConflictError) -> Iterator[None]:
        """Re-raise a storage unique-key collision as `conflict`."""
        try:
            yield
        except UniqueConstraintViolation as e:
            logger.info("Unique key %s rejected a write that passed the pre-check", e.constraint)
            raise conflict from e

    @staticmethod
    @contextmanager
    def translate_reference_violation(error: DomainError) -> Iterator[None]:
        """Re-raise a storage foreign-key failure as `error`."""
        try:
            yield
        except ForeignKeyViolation as e:
            logger.info("Foreign key %s rejected a write that passed the pre-check", e.constraint)
            raise error from e
