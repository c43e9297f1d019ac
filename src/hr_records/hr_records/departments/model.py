from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Department:
    dept_id: int
    name: str
    description: Optional[str] = None


@dataclass(frozen=True)
class DepartmentSummary(Department):
    """Read-model: department plus how many employees reference it."""

    employee_count: int = 0
