from __future__ import annotations

from dataclasses import dataclass, field
from typing import Sequence

from ..attendance.repository import AttendanceRepository
from ..common.clock import Clock
from ..core.constants import DASHBOARD_RECENT_HIRES, DASHBOARD_TOP_DEPARTMENTS
from ..core.enums import AttendanceStatus, EmployeeStatus
from ..departments.model import DepartmentSummary
from ..departments.repository import DepartmentRepository
from ..employees.model import EmployeeView
from ..employees.repository import EmployeeRepository


@dataclass(frozen=True)
class DashboardSummary:
    total_employees: int
    active_employees: int
    total_departments: int
    today_attendance: int
    today_present: int
    employees_by_department: Sequence[DepartmentSummary] = field(default_factory=list)
    recent_hires: Sequence[EmployeeView] = field(default_factory=list)


class DashboardService:
    """Headline counts for the landing page."""

    def __init__(
        self,
        employees: EmployeeRepository,
        departments: DepartmentRepository,
        attendance: AttendanceRepository,
        clock: Clock,
    ):
        self._employees = employees
        self._departments = departments
        self._attendance = attendance
        self._clock = clock

    def summary(self) -> DashboardSummary:
        today = self._clock.today()
        return DashboardSummary(
            total_employees=self._employees.count(),
            active_employees=self._employees.count(status=EmployeeStatus.ACTIVE),
            total_departments=self._departments.count(),
            today_attendance=self._attendance.count(start_date=today, end_date=today),
            today_present=self._attendance.count(start_date=today, end_date=today, status=AttendanceStatus.PRESENT),
            employees_by_department=self._departments.top_by_employee_count(DASHBOARD_TOP_DEPARTMENTS),
            recent_hires=self._employees.recent_hires(DASHBOARD_RECENT_HIRES),
        )
