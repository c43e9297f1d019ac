from __future__ import annotations

from contextlib import contextmanager
from datetime import time, timedelta
from typing import Any, Dict, List, Optional

import mysql.connector
from mysql.connector import errorcode

from ..core.exceptions import ForeignKeyViolation, StorageError, UniqueConstraintViolation
from .connection import DatabaseConnection


_REFERENCE_ERRNOS = (
    errorcode.ER_ROW_IS_REFERENCED,
    errorcode.ER_ROW_IS_REFERENCED_2,
    errorcode.ER_NO_REFERENCED_ROW,
    errorcode.ER_NO_REFERENCED_ROW_2,
)


def _constraint_name(msg: str) -> Optional[str]:
    # "... CONSTRAINT `fk_employees_department` FOREIGN KEY ..."
    if "CONSTRAINT `" not in msg:
        return None
    return msg.split("CONSTRAINT `", 1)[1].split("`", 1)[0]


def _translate(err: mysql.connector.Error) -> StorageError:
    errno = getattr(err, "errno", None)
    msg = getattr(err, "msg", "") or ""
    if errno == errorcode.ER_DUP_ENTRY:
        # msg: "Duplicate entry 'x' for key 'employees.uq_employees_email'"
        constraint = msg.rsplit("for key", 1)[-1].strip(" '").split(".")[-1] if "for key" in msg else None
        return UniqueConstraintViolation(msg or "Duplicate entry", constraint=constraint)
    if errno in _REFERENCE_ERRNOS:
        return ForeignKeyViolation(msg or "Foreign key constraint fails", constraint=_constraint_name(msg))
    return StorageError(msg or str(err))


def escape_like(value: str) -> str:
    """Escape LIKE wildcards so `value` matches literally (default `\\` escape)."""
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True):
    conn = conn_factory.connect()
    try:
        cur = conn.cursor(dictionary=dictionary)
        try:
            yield conn, cur
            conn.commit()
        finally:
            cur.close()
    except mysql.connector.Error as e:
        conn.rollback()
        raise _translate(e) from e
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


def fetchone(cur) -> Optional[Dict[str, Any]]:
    row = cur.fetchone()
    return row if row else None


def fetchall(cur) -> List[Dict[str, Any]]:
    rows = cur.fetchall()
    return list(rows or [])


def normalize_mysql_time(value: Any) -> Optional[time]:
    """Normalize MySQL TIME values across connector implementations.

    mysql-connector can return TIME as:
    - datetime.time
    - datetime.timedelta
    - string (e.g. '08:30:00')
    """

    if value is None:
        return None

    if isinstance(value, time):
        return value

    if isinstance(value, timedelta):
        total_seconds = int(value.total_seconds()) % 86400
        hours = total_seconds // 3600
        minutes = (total_seconds % 3600) // 60
        seconds = total_seconds % 60
        return time(hour=hours, minute=minutes, second=seconds)

    if isinstance(value, str):
        parts = value.strip().split(":")
        if len(parts) < 2:
            raise ValueError(f"Invalid time string: {value!r}")
        hours = int(parts[0])
        minutes = int(parts[1])
        seconds = int(parts[2]) if len(parts) >= 3 and parts[2] else 0
        return time(hour=hours, minute=minutes, second=seconds)

    raise TypeError(f"Unsupported MySQL TIME value type: {type(value)!r}")
