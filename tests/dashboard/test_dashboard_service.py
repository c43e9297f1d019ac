from __future__ import annotations

from datetime import date, time

from hr_records.core.enums import AttendanceStatus, EmployeeStatus
from hr_records.dashboard.presenter import present_dashboard


def test_summary_counts(container, make_employee):
    depts = [container.department_service.create(name=f"Dept {i}") for i in range(6)]
    a = make_employee(department_id=depts[0].dept_id, hire_date=date(2023, 3, 1))
    b = make_employee(department_id=depts[0].dept_id, hire_date=date(2023, 6, 1))
    c = make_employee(department_id=depts[1].dept_id, hire_date=date(2022, 1, 1))
    container.employee_service.update(c.employee_id, status=EmployeeStatus.INACTIVE)

    today = date(2024, 1, 10)
    container.attendance_service.create(employee_id=a.employee_id, work_date=today, check_in=time(8, 0))
    container.attendance_service.create(employee_id=b.employee_id, work_date=today, status=AttendanceStatus.ABSENT)
    container.attendance_service.create(employee_id=c.employee_id, work_date=date(2024, 1, 9))

    summary = container.dashboard_service.summary()

    assert summary.total_employees == 3
    assert summary.active_employees == 2
    assert summary.total_departments == 6
    assert summary.today_attendance == 2
    assert summary.today_present == 1
    assert len(summary.employees_by_department) == 5
    assert [d.employee_count for d in summary.employees_by_department[:2]] == [2, 1]
    assert [e.employee_id for e in summary.recent_hires] == [b.employee_id, a.employee_id, c.employee_id]

    out = present_dashboard(summary)
    assert out["totalEmployees"] == 3
    assert out["employeesByDepartment"][0] == {"id": depts[0].dept_id, "name": "Dept 0", "count": 2}
    assert out["recentHires"][0]["department_name"] == "Dept 0"
