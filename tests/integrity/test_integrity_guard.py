from __future__ import annotations

from datetime import date

import pytest

from hr_records.core.exceptions import (
    ConflictError,
    ForeignKeyViolation,
    NotFoundError,
    UniqueConstraintViolation,
    ValidationError,
)


def test_department_with_employees_cannot_be_deleted(container, department, make_employee):
    make_employee(department_id=department.dept_id)
    make_employee(department_id=department.dept_id)

    with pytest.raises(ConflictError) as exc:
        container.department_service.delete(department.dept_id)

    assert exc.value.message == "Cannot delete department with assigned employees"
    assert exc.value.count == 2
    assert "2 employee(s)" in exc.value.details[0]["message"]
    assert container.departments_repo.get_by_id(department.dept_id) is not None


def test_employee_with_attendance_cannot_be_deleted(container, employee):
    container.attendance_service.create(employee_id=employee.employee_id, work_date=date(2024, 1, 9))
    container.attendance_service.create(employee_id=employee.employee_id, work_date=date(2024, 1, 10))

    with pytest.raises(ConflictError) as exc:
        container.employee_service.delete(employee.employee_id)

    assert exc.value.message == "Cannot delete employee with attendance records"
    assert exc.value.count == 2
    assert container.employees_repo.get_by_id(employee.employee_id) is not None


def test_deletes_succeed_once_dependents_are_gone(container, department, employee):
    view = container.attendance_service.create(employee_id=employee.employee_id, work_date=date(2024, 1, 10))
    container.attendance_service.delete(view.attendance_id)
    container.employee_service.delete(employee.employee_id)
    container.department_service.delete(department.dept_id)

    assert container.employees_repo.get_by_id(employee.employee_id) is None
    assert container.departments_repo.get_by_id(department.dept_id) is None


def test_missing_department_reference_is_validation_error(container):
    with pytest.raises(ValidationError) as exc:
        container.guard.resolve_department_reference(404)
    assert exc.value.message == "Department not found"
    assert exc.value.details[0]["field"] == "department_id"
    assert container.guard.resolve_department_reference(None) is None


def test_require_employee(container, employee):
    assert container.guard.require_employee(employee.employee_id).email == "ada@example.com"
    with pytest.raises(NotFoundError):
        container.guard.require_employee(9999)


def test_translate_unique_violation_reraises_given_conflict(container):
    conflict = container.guard.email_conflict("x@example.com")
    with pytest.raises(ConflictError) as exc:
        with container.guard.translate_unique_violation(conflict):
            raise UniqueConstraintViolation("dup", constraint="uq_employees_email")
    assert exc.value is conflict
    assert isinstance(exc.value.__cause__, UniqueConstraintViolation)


def test_translate_reference_violation_reraises_given_error(container):
    error = container.guard.department_in_use()
    with pytest.raises(ConflictError) as exc:
        with container.guard.translate_reference_violation(error):
            raise ForeignKeyViolation("row is referenced", constraint="fk_employees_department")
    assert exc.value is error
    assert exc.value.count is None
    assert exc.value.message == "Cannot delete department with assigned employees"


def test_department_delete_losing_to_new_employee_is_conflict(container, department, monkeypatch):
    # an employee lands between the count and the delete
    def delete(dept_id):
        raise ForeignKeyViolation("row is referenced", constraint="fk_employees_department")

    monkeypatch.setattr(container.departments_repo, "delete", delete)

    with pytest.raises(ConflictError) as exc:
        container.department_service.delete(department.dept_id)
    assert exc.value.message == "Cannot delete department with assigned employees"
    assert exc.value.details[0]["field"] == "department_id"


def test_employee_delete_losing_to_new_attendance_is_conflict(container, employee, monkeypatch):
    def delete(employee_id):
        raise ForeignKeyViolation("row is referenced", constraint="fk_attendance_employee")

    monkeypatch.setattr(container.employees_repo, "delete", delete)

    with pytest.raises(ConflictError) as exc:
        container.employee_service.delete(employee.employee_id)
    assert exc.value.message == "Cannot delete employee with attendance records"
    assert container.employee_service.get(employee.employee_id).email == "ada@example.com"
