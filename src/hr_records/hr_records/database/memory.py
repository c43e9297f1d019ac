from __future__ import annotations

import copy
import logging
import threading
from typing import Any, Dict, List, Optional, Tuple

from ..core.exceptions import StorageError, UniqueConstraintViolation

logger = logging.getLogger(__name__)

# Mirrors the unique keys declared in schema.sql.
UNIQUE_KEYS: Dict[str, List[Tuple[str, Tuple[str, ...]]]] = {
    "users": [("uq_users_email", ("email",))],
    "departments": [("uq_departments_name", ("name",))],
    "employees": [("uq_employees_email", ("email",))],
    "attendance_records": [("uq_attendance_employee_date", ("employee_id", "work_date"))],
}


def _key_part(value: Any) -> Any:
    # utf8mb4_unicode_ci compares strings case-insensitively
    return value.casefold() if isinstance(value, str) else value


class InMemoryDatabase:
    """Process-local table store used by the memory repositories.

    Every write runs under one lock, so unique keys behave like the MySQL
    indexes even when callers race.
    """

    def __init__(self):
        self.lock = threading.RLock()
        self._tables: Dict[str, Dict[int, Dict[str, Any]]] = {name: {} for name in UNIQUE_KEYS}
        self._seq: Dict[str, int] = {name: 0 for name in UNIQUE_KEYS}
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def close(self) -> None:
        self._closed = True

    def _table(self, table: str) -> Dict[int, Dict[str, Any]]:
        if self._closed:
            raise StorageError("Database handle is closed")
        try:
            return self._tables[table]
        except KeyError:
            raise StorageError(f"Unknown table: {table}")

    def _check_unique(self, table: str, row: Dict[str, Any], *, exclude_id: Optional[int] = None) -> None:
        for name, cols in UNIQUE_KEYS[table]:
            key = tuple(_key_part(row.get(c)) for c in cols)
            for ident, other in self._tables[table].items():
                if ident == exclude_id:
                    continue
                if tuple(_key_part(other.get(c)) for c in cols) == key:
                    raise UniqueConstraintViolation(f"Duplicate entry for key '{table}.{name}'", constraint=name)

    def get(self, table: str, ident: int) -> Optional[Dict[str, Any]]:
        with self.lock:
            row = self._table(table).get(int(ident))
            return copy.deepcopy(row) if row else None

    def rows(self, table: str) -> List[Dict[str, Any]]:
        with self.lock:
            return [copy.deepcopy(r) for r in self._table(table).values()]

    def insert(self, table: str, row: Dict[str, Any], *, id_column: str) -> int:
        with self.lock:
            rows = self._table(table)
            self._check_unique(table, row)
            self._seq[table] += 1
            ident = self._seq[table]
            stored = dict(row)
            stored[id_column] = ident
            rows[ident] = stored
            return ident

    def update(self, table: str, ident: int, changes: Dict[str, Any], *, where: Optional[Dict[str, Any]] = None) -> bool:
        """Apply `changes` to one row; `where` adds column equality guards."""
        with self.lock:
            rows = self._table(table)
            current = rows.get(int(ident))
            if current is None:
                return False
            if where and any(current.get(col) != val for col, val in where.items()):
                return False
            merged = {**current, **changes}
            self._check_unique(table, merged, exclude_id=int(ident))
            rows[int(ident)] = merged
            return True

    def delete(self, table: str, ident: int) -> bool:
        with self.lock:
            return self._table(table).pop(int(ident), None) is not None
