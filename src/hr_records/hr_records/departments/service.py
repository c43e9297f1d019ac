from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Sequence

from ..common.unset import UNSET, Patch, is_set
from ..common.validators import optional_text, require_non_empty
from ..core.constants import DEPARTMENT_NAME_MAX_LENGTH, DESCRIPTION_MAX_LENGTH, NAME_MIN_LENGTH
from ..core.exceptions import NotFoundError
from ..employees.model import Employee
from ..employees.repository import EmployeeRepository
from ..integrity.guard import IntegrityGuard
from .model import Department, DepartmentSummary
from .repository import DepartmentRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DepartmentDetail:
    department: Department
    employees: Sequence[Employee]


class DepartmentService:
    def __init__(self, departments: DepartmentRepository, employees: EmployeeRepository, guard: IntegrityGuard):
        self._departments = departments
        self._employees = employees
        self._guard = guard

    def _require(self, dept_id: int) -> Department:
        department = self._departments.get_by_id(dept_id)
        if not department:
            raise NotFoundError("Department not found")
        return department

    @staticmethod
    def _name(value: Optional[str]) -> str:
        return require_non_empty(value, "name", min_len=NAME_MIN_LENGTH, max_len=DEPARTMENT_NAME_MAX_LENGTH)

    def list(self) -> Sequence[DepartmentSummary]:
        return self._departments.list_with_counts()

    def get(self, dept_id: int) -> DepartmentDetail:
        department = self._require(dept_id)
        return DepartmentDetail(department=department, employees=self._employees.list_by_department(dept_id))

    def create(self, *, name: str, description: Optional[str] = None) -> Department:
        name = self._name(name)
        description = optional_text(description, "description", DESCRIPTION_MAX_LENGTH)

        self._guard.ensure_department_name_available(name)
        with self._guard.translate_unique_violation(self._guard.department_name_conflict(name)):
            dept_id = self._departments.insert(name=name, description=description)

        logger.info("Department %s created (%s)", dept_id, name)
        return self._require(dept_id)

    def update(
        self,
        dept_id: int,
        *,
        name: Patch[str] = UNSET,
        description: Patch[Optional[str]] = UNSET,
    ) -> Department:
        current = self._require(dept_id)

        new_name = self._name(name) if is_set(name) else current.name
        new_description = (
            optional_text(description, "description", DESCRIPTION_MAX_LENGTH) if is_set(description) else current.description
        )

        if new_name.casefold() != current.name.casefold():
            self._guard.ensure_department_name_available(new_name, exclude_id=dept_id)

        with self._guard.translate_unique_violation(self._guard.department_name_conflict(new_name, updating=True)):
            if not self._departments.update(dept_id=dept_id, name=new_name, description=new_description):
                raise NotFoundError("Department not found")

        logger.info("Department %s updated", dept_id)
        return self._require(dept_id)

    def delete(self, dept_id: int) -> None:
        self._require(dept_id)
        self._guard.ensure_department_deletable(dept_id)
        with self._guard.translate_reference_violation(self._guard.department_in_use()):
            self._departments.delete(dept_id)
        logger.info("Department %s deleted", dept_id)
