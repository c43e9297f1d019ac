from __future__ import annotations

from ..employees.presenter import present_employee
from .service import DashboardSummary


def present_dashboard(s: DashboardSummary) -> dict:
    return {
        "totalEmployees": s.total_employees,
        "activeEmployees": s.active_employees,
        "totalDepartments": s.total_departments,
        "todayAttendance": s.today_attendance,
        "todayPresent": s.today_present,
        "employeesByDepartment": [
            {"id": d.dept_id, "name": d.name, "count": d.employee_count} for d in s.employees_by_department
        ],
        "recentHires": [present_employee(e) for e in s.recent_hires],
    }
