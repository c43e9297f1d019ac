from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Department, DepartmentSummary


class DepartmentRepository(Protocol):
    """Repository interface for departments.

    Service code depends on this protocol only; MySQL and in-memory
    implementations live beside it.
    """

    def get_by_id(self, dept_id: int) -> Optional[Department]:
        raise NotImplementedError

    def get_by_name(self, name: str) -> Optional[Department]:
        """Case-insensitive lookup."""
        raise NotImplementedError

    def list_with_counts(self) -> Sequence[DepartmentSummary]:
        raise NotImplementedError

    def top_by_employee_count(self, limit: int) -> Sequence[DepartmentSummary]:
        raise NotImplementedError

    def count(self) -> int:
        raise NotImplementedError

    def insert(self, *, name: str, description: Optional[str]) -> int:
        raise NotImplementedError

    def update(self, *, dept_id: int, name: str, description: Optional[str]) -> bool:
        raise NotImplementedError

    def delete(self, dept_id: int) -> bool:
        raise NotImplementedError
