from __future__ import annotations

from typing import Optional, Sequence

from ..database.memory import InMemoryDatabase
from .model import Department, DepartmentSummary
from .repository import DepartmentRepository


class InMemoryDepartmentRepository(DepartmentRepository):
    def __init__(self, db: InMemoryDatabase):
        self._db = db

    @staticmethod
    def _to_model(r: dict) -> Department:
        return Department(dept_id=int(r["dept_id"]), name=r["name"], description=r.get("description"))

    def _summaries(self) -> list[DepartmentSummary]:
        with self._db.lock:
            employees = self._db.rows("employees")
            out = []
            for r in self._db.rows("departments"):
                n = sum(1 for e in employees if e.get("dept_id") == r["dept_id"])
                out.append(
                    DepartmentSummary(
                        dept_id=int(r["dept_id"]), name=r["name"], description=r.get("description"), employee_count=n
                    )
                )
            return out

    def get_by_id(self, dept_id: int) -> Optional[Department]:
        r = self._db.get("departments", dept_id)
        return self._to_model(r) if r else None

    def get_by_name(self, name: str) -> Optional[Department]:
        wanted = name.strip().casefold()
        for r in self._db.rows("departments"):
            if r["name"].casefold() == wanted:
                return self._to_model(r)
        return None

    def list_with_counts(self) -> Sequence[DepartmentSummary]:
        return sorted(self._summaries(), key=lambda d: d.name)

    def top_by_employee_count(self, limit: int) -> Sequence[DepartmentSummary]:
        items = sorted(self._summaries(), key=lambda d: (-d.employee_count, d.name))
        return items[: int(limit)]

    def count(self) -> int:
        return len(self._db.rows("departments"))

    def insert(self, *, name: str, description: Optional[str]) -> int:
        return self._db.insert("departments", {"name": name, "description": description}, id_column="dept_id")

    def update(self, *, dept_id: int, name: str, description: Optional[str]) -> bool:
        return self._db.update("departments", dept_id, {"name": name, "description": description})

    def delete(self, dept_id: int) -> bool:
        return self._db.delete("departments", dept_id)
