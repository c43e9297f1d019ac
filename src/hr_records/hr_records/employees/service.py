from __future__ import annotations

import logging
from datetime import date
from typing import Optional, Sequence

from ..common.clock import Clock
from ..common.unset import UNSET, Patch, is_set, merge
from ..common.validators import optional_phone, optional_text, require_email, require_non_empty
from ..core.constants import NAME_MIN_LENGTH, PERSON_NAME_MAX_LENGTH, POSITION_MAX_LENGTH, SEARCH_MAX_LENGTH
from ..core.enums import EmployeeStatus
from ..core.exceptions import NotFoundError, ValidationError
from ..integrity.guard import IntegrityGuard
from .model import EmployeeData, EmployeeView
from .repository import EmployeeRepository

logger = logging.getLogger(__name__)


class EmployeeService:
    """Use case: manage employee records."""

    def __init__(self, employees: EmployeeRepository, guard: IntegrityGuard, clock: Clock):
        self._employees = employees
        self._guard = guard
        self._clock = clock

    def _view(self, employee_id: int) -> EmployeeView:
        view = self._employees.get_view(employee_id)
        if not view:
            raise NotFoundError("Employee not found")
        return view

    def _check_hire_date(self, hire_date: Optional[date]) -> Optional[date]:
        if hire_date and hire_date > self._clock.today():
            raise ValidationError.for_field(
                "hire_date", "Hire date must be today or in the past", summary="Hire date cannot be in the future"
            )
        return hire_date

    @staticmethod
    def _check_salary(salary: Optional[float]) -> Optional[float]:
        if salary is None:
            return None
        salary = float(salary)
        if salary < 0:
            raise ValidationError.for_field("salary", "Salary must be a positive number")
        return salary

    @staticmethod
    def _name(value: Optional[str], field_name: str) -> str:
        return require_non_empty(value, field_name, min_len=NAME_MIN_LENGTH, max_len=PERSON_NAME_MAX_LENGTH)

    @staticmethod
    def _position(value: Optional[str]) -> str:
        return require_non_empty(value, "position", min_len=NAME_MIN_LENGTH, max_len=POSITION_MAX_LENGTH)

    def list(
        self,
        *,
        search: Optional[str] = None,
        department_id: Optional[int] = None,
        status: Optional[EmployeeStatus] = None,
    ) -> Sequence[EmployeeView]:
        search = optional_text(search, "search", SEARCH_MAX_LENGTH)
        return self._employees.list_views(search=search, department_id=department_id, status=status)

    def get(self, employee_id: int) -> EmployeeView:
        return self._view(employee_id)

    def create(
        self,
        *,
        first_name: str,
        last_name: str,
        email: str,
        position: str,
        phone: Optional[str] = None,
        department_id: Optional[int] = None,
        hire_date: Optional[date] = None,
        salary: Optional[float] = None,
        status: Optional[EmployeeStatus] = None,
    ) -> EmployeeView:
        email = require_email(email)
        self._guard.ensure_email_available(email)
        self._guard.resolve_department_reference(department_id)

        data = EmployeeData(
            first_name=self._name(first_name, "first_name"),
            last_name=self._name(last_name, "last_name"),
            email=email,
            position=self._position(position),
            phone=optional_phone(phone),
            department_id=department_id,
            hire_date=self._check_hire_date(hire_date),
            salary=self._check_salary(salary),
            status=status or EmployeeStatus.ACTIVE,
        )

        with self._guard.translate_unique_violation(self._guard.email_conflict(email)):
            employee_id = self._employees.insert(data)

        logger.info("Employee %s created (%s)", employee_id, email)
        return self._view(employee_id)

    def update(
        self,
        employee_id: int,
        *,
        first_name: Patch[str] = UNSET,
        last_name: Patch[str] = UNSET,
        email: Patch[str] = UNSET,
        position: Patch[str] = UNSET,
        phone: Patch[Optional[str]] = UNSET,
        department_id: Patch[Optional[int]] = UNSET,
        hire_date: Patch[Optional[date]] = UNSET,
        salary: Patch[Optional[float]] = UNSET,
        status: Patch[EmployeeStatus] = UNSET,
    ) -> EmployeeView:
        current = self._employees.get_by_id(employee_id)
        if not current:
            raise NotFoundError("Employee not found")

        new_email = require_email(email) if is_set(email) else current.email
        if new_email != current.email.lower():
            self._guard.ensure_email_available(new_email, exclude_id=employee_id)

        if is_set(department_id):
            self._guard.resolve_department_reference(department_id)

        if is_set(status) and status is None:
            raise ValidationError.for_field("status", "status cannot be empty")

        data = EmployeeData(
            first_name=self._name(first_name, "first_name") if is_set(first_name) else current.first_name,
            last_name=self._name(last_name, "last_name") if is_set(last_name) else current.last_name,
            email=new_email,
            position=self._position(position) if is_set(position) else current.position,
            phone=optional_phone(phone) if is_set(phone) else current.phone,
            department_id=merge(department_id, current.department_id),
            hire_date=self._check_hire_date(hire_date) if is_set(hire_date) else current.hire_date,
            salary=self._check_salary(salary) if is_set(salary) else current.salary,
            status=merge(status, current.status),
        )

        with self._guard.translate_unique_violation(self._guard.email_conflict(new_email, updating=True)):
            if not self._employees.update(employee_id, data):
                raise NotFoundError("Employee not found")

        logger.info("Employee %s updated", employee_id)
        return self._view(employee_id)

    def delete(self, employee_id: int) -> None:
        if not self._employees.get_by_id(employee_id):
            raise NotFoundError("Employee not found")
        self._guard.ensure_employee_deletable(employee_id)
        with self._guard.translate_reference_violation(self._guard.employee_in_use()):
            self._employees.delete(employee_id)
        logger.info("Employee %s deleted", employee_id)
