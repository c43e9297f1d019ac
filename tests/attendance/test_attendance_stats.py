from __future__ import annotations

from datetime import date, time

import pytest

from hr_records.attendance.presenter import present_stats
from hr_records.core.enums import AttendanceStatus
from hr_records.core.exceptions import ValidationError

DAY = date(2024, 1, 10)


def test_late_is_derived_from_check_in_after_nine(container, make_employee):
    e2 = make_employee()
    view = container.attendance_service.create(employee_id=e2.employee_id, work_date=DAY, check_in=time(9, 15, 0))

    stats = container.attendance_stats_service.stats(start_date=date(2024, 1, 1), end_date=date(2024, 1, 31))

    assert stats.late_count >= 1
    # the stored status is never rewritten
    assert container.attendance_service.get(view.attendance_id).status == AttendanceStatus.PRESENT


def test_nine_sharp_is_not_late(container, make_employee):
    e = make_employee()
    container.attendance_service.create(employee_id=e.employee_id, work_date=DAY, check_in=time(9, 0, 0))
    assert container.attendance_stats_service.stats().late_count == 0


def test_counts_over_range(container, make_employee):
    svc = container.attendance_service
    a, b, c = make_employee(), make_employee(), make_employee()
    svc.create(employee_id=a.employee_id, work_date=DAY, check_in=time(8, 0))
    svc.create(employee_id=b.employee_id, work_date=DAY, status=AttendanceStatus.ABSENT)
    svc.create(employee_id=c.employee_id, work_date=DAY, check_in=time(10, 0), status=AttendanceStatus.LATE)
    svc.create(employee_id=a.employee_id, work_date=date(2023, 12, 1), check_in=time(11, 0))

    stats = container.attendance_stats_service.stats(start_date=DAY, end_date=DAY)

    assert stats.total_records == 3
    assert stats.present_count == 1
    assert stats.absent_count == 1
    # a LATE-tagged record is not counted by the derived rule
    assert stats.late_count == 0

    everything = container.attendance_stats_service.stats()
    assert everything.total_records == 4
    assert everything.late_count == 1


def test_today_roster_follows_clock_and_is_sorted_by_name(container, make_employee):
    svc = container.attendance_service
    zed = make_employee(first_name="Zed")
    amy = make_employee(first_name="Amy")
    svc.create(employee_id=zed.employee_id, work_date=DAY)
    svc.create(employee_id=amy.employee_id, work_date=DAY)
    svc.create(employee_id=amy.employee_id, work_date=date(2024, 1, 9))

    stats = container.attendance_stats_service.stats(start_date=date(2024, 1, 9), end_date=date(2024, 1, 9))

    assert stats.total_records == 1
    assert [v.first_name for v in stats.today_attendance] == ["Amy", "Zed"]


def test_stats_rejects_inverted_range(container):
    with pytest.raises(ValidationError):
        container.attendance_stats_service.stats(start_date=date(2024, 2, 1), end_date=date(2024, 1, 1))


def test_present_stats_uses_camel_case_keys(container):
    out = present_stats(container.attendance_stats_service.stats())
    assert set(out) == {"totalRecords", "presentCount", "absentCount", "lateCount", "todayAttendance"}
