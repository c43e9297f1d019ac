from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Role of an API account."""

    ADMIN = "admin"
    USER = "user"


class EmployeeStatus(str, Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"


class AttendanceStatus(str, Enum):
    """Descriptive tag stored on an attendance record.

    Not a transition driver: check-in always writes PRESENT.
    """

    PRESENT = "present"
    ABSENT = "absent"
    LATE = "late"
    HALF_DAY = "half_day"


class MarkAction(str, Enum):
    CHECK_IN = "check_in"
    CHECK_OUT = "check_out"
