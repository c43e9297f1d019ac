"""Example: drive the service layer directly, without Flask.

Controllers are a thin layer; the rules live in the services.
"""

from datetime import date, datetime

from hr_records.common.clock import FixedClock
from hr_records.container import build_container
from hr_records.core.enums import MarkAction


def main():
    clock = FixedClock(datetime(2024, 1, 10, 8, 55, 0))
    container = build_container(backend="memory", clock=clock)

    dept = container.department_service.create(name="Engineering", description="Builds things")
    emp = container.employee_service.create(
        first_name="Ada",
        last_name="Lovelace",
        email="ada@example.com",
        position="Engineer",
        department_id=dept.dept_id,
        hire_date=date(2023, 5, 1),
    )

    container.attendance_service.mark(employee_id=emp.employee_id, work_date=clock.today(), action=MarkAction.CHECK_IN)
    clock.set(datetime(2024, 1, 10, 17, 0, 0))
    record = container.attendance_service.mark(
        employee_id=emp.employee_id, work_date=clock.today(), action=MarkAction.CHECK_OUT
    )
    print(record)
    print(container.attendance_stats_service.stats(start_date=clock.today(), end_date=clock.today()))

    container.close()


if __name__ == "__main__":
    main()
