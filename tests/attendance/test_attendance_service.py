from __future__ import annotations

from datetime import date, datetime, time

import pytest

from hr_records.attendance.model import AttendanceFilter
from hr_records.core.enums import AttendanceStatus, MarkAction
from hr_records.core.exceptions import ConflictError, NotFoundError, ValidationError

DAY = date(2024, 1, 10)


def test_create_unknown_employee_raises_not_found(container):
    with pytest.raises(NotFoundError) as exc:
        container.attendance_service.create(employee_id=999, work_date=DAY)
    assert exc.value.message == "Employee not found"


def test_create_defaults_status_and_joins_display_fields(container, employee):
    view = container.attendance_service.create(
        employee_id=employee.employee_id, work_date=DAY, check_in=time(8, 30), notes="  on site  "
    )

    assert view.status == AttendanceStatus.PRESENT
    assert view.check_in == time(8, 30)
    assert view.check_out is None
    assert view.notes == "on site"
    assert view.first_name == "Ada"
    assert view.department_name == "Engineering"


def test_create_second_record_same_day_conflicts(container, employee):
    svc = container.attendance_service
    svc.create(employee_id=employee.employee_id, work_date=DAY)

    with pytest.raises(ConflictError) as exc:
        svc.create(employee_id=employee.employee_id, work_date=DAY, status=AttendanceStatus.ABSENT)
    assert exc.value.message == "Attendance record already exists for this date"
    assert len(svc.list(AttendanceFilter(employee_id=employee.employee_id))) == 1


def test_create_rejects_check_out_before_check_in(container, employee):
    with pytest.raises(ValidationError) as exc:
        container.attendance_service.create(
            employee_id=employee.employee_id,
            work_date=DAY,
            check_in=time(10, 0, 0),
            check_out=time(9, 0, 0),
            status=AttendanceStatus.LATE,
            notes="anything",
        )
    assert exc.value.details[0]["field"] == "check_out"
    assert container.attendance_repo.count() == 0


def test_time_order_is_compared_to_the_minute(container, employee):
    # same minute, later second: still not strictly later
    with pytest.raises(ValidationError):
        container.attendance_service.create(
            employee_id=employee.employee_id, work_date=DAY, check_in=time(9, 0, 0), check_out=time(9, 0, 45)
        )


def test_create_with_only_one_time_is_allowed(container, employee):
    view = container.attendance_service.create(employee_id=employee.employee_id, work_date=DAY, check_out=time(17, 0))
    assert view.check_in is None
    assert view.check_out == time(17, 0)


def test_update_check_out_only_is_validated_against_existing_check_in(container, employee):
    svc = container.attendance_service
    view = svc.create(employee_id=employee.employee_id, work_date=DAY, check_in=time(9, 0), check_out=time(17, 0))

    with pytest.raises(ValidationError):
        svc.update(view.attendance_id, check_out=time(8, 0))

    assert svc.get(view.attendance_id).check_out == time(17, 0)


def test_update_keeps_omitted_fields(container, employee):
    svc = container.attendance_service
    view = svc.create(
        employee_id=employee.employee_id, work_date=DAY, check_in=time(9, 0), check_out=time(17, 0), notes="n"
    )

    updated = svc.update(view.attendance_id, status=AttendanceStatus.HALF_DAY)

    assert updated.status == AttendanceStatus.HALF_DAY
    assert updated.check_in == time(9, 0)
    assert updated.check_out == time(17, 0)
    assert updated.notes == "n"


def test_update_with_explicit_none_clears_field(container, employee):
    svc = container.attendance_service
    view = svc.create(employee_id=employee.employee_id, work_date=DAY, check_in=time(9, 0), check_out=time(17, 0))

    updated = svc.update(view.attendance_id, check_out=None, notes=None)

    assert updated.check_out is None
    assert updated.check_in == time(9, 0)


def test_update_rejects_empty_status(container, employee):
    svc = container.attendance_service
    view = svc.create(employee_id=employee.employee_id, work_date=DAY)
    with pytest.raises(ValidationError):
        svc.update(view.attendance_id, status=None)


def test_update_and_delete_unknown_id_raise_not_found(container):
    svc = container.attendance_service
    with pytest.raises(NotFoundError):
        svc.update(42, notes="x")
    with pytest.raises(NotFoundError):
        svc.delete(42)
    with pytest.raises(NotFoundError):
        svc.get(42)


def test_delete_removes_record(container, employee):
    svc = container.attendance_service
    view = svc.create(employee_id=employee.employee_id, work_date=DAY)

    svc.delete(view.attendance_id)

    with pytest.raises(NotFoundError):
        svc.get(view.attendance_id)


def test_mark_check_in_twice_conflicts(container, employee):
    svc = container.attendance_service
    svc.mark(employee_id=employee.employee_id, work_date=DAY, action=MarkAction.CHECK_IN)

    with pytest.raises(ConflictError) as exc:
        svc.mark(employee_id=employee.employee_id, work_date=DAY, action=MarkAction.CHECK_IN)
    assert exc.value.message == "Already checked in for this date"


def test_mark_check_out_without_record_is_validation_error(container, employee):
    with pytest.raises(ValidationError) as exc:
        container.attendance_service.mark(employee_id=employee.employee_id, work_date=DAY, action=MarkAction.CHECK_OUT)
    assert exc.value.message == "Must check in before checking out"


def test_mark_check_out_twice_conflicts(container, employee, clock):
    svc = container.attendance_service
    svc.mark(employee_id=employee.employee_id, work_date=DAY, action=MarkAction.CHECK_IN)
    clock.set(datetime(2024, 1, 10, 17, 0, 0))
    svc.mark(employee_id=employee.employee_id, work_date=DAY, action=MarkAction.CHECK_OUT)

    with pytest.raises(ConflictError) as exc:
        svc.mark(employee_id=employee.employee_id, work_date=DAY, action=MarkAction.CHECK_OUT)
    assert exc.value.message == "Already checked out for this date"


def test_mark_unknown_employee_raises_not_found(container):
    with pytest.raises(NotFoundError):
        container.attendance_service.mark(employee_id=7, work_date=DAY, action=MarkAction.CHECK_IN)


def test_mark_check_in_fills_existing_record_without_check_in(container, employee, clock):
    svc = container.attendance_service
    existing = svc.create(
        employee_id=employee.employee_id, work_date=DAY, status=AttendanceStatus.ABSENT, check_out=time(18, 0)
    )
    clock.set(datetime(2024, 1, 10, 9, 5, 30, 123456))

    view = svc.mark(employee_id=employee.employee_id, work_date=DAY, action=MarkAction.CHECK_IN)

    assert view.attendance_id == existing.attendance_id
    assert view.check_in == time(9, 5, 30)
    assert view.status == AttendanceStatus.PRESENT
    assert view.check_out == time(18, 0)


def test_check_in_then_check_out_end_to_end(container, employee, clock):
    svc = container.attendance_service

    first = svc.mark(employee_id=employee.employee_id, work_date=DAY, action=MarkAction.CHECK_IN)
    assert first.check_in == time(8, 55, 0)
    assert first.status == AttendanceStatus.PRESENT

    stats = container.attendance_stats_service.stats(start_date=DAY, end_date=DAY)
    assert stats.late_count == 0

    clock.set(datetime(2024, 1, 10, 17, 0, 0))
    second = svc.mark(employee_id=employee.employee_id, work_date=DAY, action=MarkAction.CHECK_OUT)

    assert second.attendance_id == first.attendance_id
    assert second.check_out == time(17, 0, 0)
    assert container.attendance_repo.count(employee_id=employee.employee_id, start_date=DAY, end_date=DAY) == 1


def test_list_range_wins_over_single_date(container, make_employee):
    svc = container.attendance_service
    e = make_employee()
    for d in (date(2024, 1, 8), date(2024, 1, 9), date(2024, 1, 10)):
        svc.create(employee_id=e.employee_id, work_date=d)

    items = svc.list(AttendanceFilter(work_date=date(2024, 1, 10), start_date=date(2024, 1, 8), end_date=date(2024, 1, 9)))
    assert [v.work_date for v in items] == [date(2024, 1, 9), date(2024, 1, 8)]

    single = svc.list(AttendanceFilter(work_date=date(2024, 1, 10)))
    assert [v.work_date for v in single] == [date(2024, 1, 10)]

    open_ended = svc.list(AttendanceFilter(start_date=date(2024, 1, 9)))
    assert len(open_ended) == 2


def test_list_rejects_inverted_range(container):
    with pytest.raises(ValidationError):
        container.attendance_service.list(AttendanceFilter(start_date=date(2024, 2, 1), end_date=date(2024, 1, 1)))


def test_list_orders_by_date_desc_then_name(container, make_employee):
    svc = container.attendance_service
    zed = make_employee(first_name="Zed", last_name="Ames")
    amy = make_employee(first_name="Amy", last_name="Berg")
    svc.create(employee_id=zed.employee_id, work_date=date(2024, 1, 9))
    svc.create(employee_id=zed.employee_id, work_date=date(2024, 1, 10))
    svc.create(employee_id=amy.employee_id, work_date=date(2024, 1, 10))

    items = svc.list(AttendanceFilter())

    assert [(v.work_date.day, v.first_name) for v in items] == [(10, "Amy"), (10, "Zed"), (9, "Zed")]
    assert [v.first_name for v in svc.list(AttendanceFilter(employee_id=amy.employee_id))] == ["Amy"]
