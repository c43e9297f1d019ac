from __future__ import annotations

import pytest

from hr_records.core.exceptions import ConflictError, NotFoundError, ValidationError
from hr_records.departments.presenter import present_department


def test_create_and_get_with_employees(container, department, make_employee):
    make_employee(first_name="Ada", department_id=department.dept_id)
    make_employee(first_name="Bob")

    detail = container.department_service.get(department.dept_id)

    assert detail.department.name == "Engineering"
    assert [e.first_name for e in detail.employees] == ["Ada"]

    out = present_department(detail.department, employees=detail.employees)
    assert out["employees"][0]["first_name"] == "Ada"
    assert "employee_count" not in out


def test_list_is_ordered_by_name_with_counts(container, make_employee):
    svc = container.department_service
    sales = svc.create(name="Sales")
    svc.create(name="Accounting")
    make_employee(department_id=sales.dept_id)

    items = svc.list()

    assert [d.name for d in items] == ["Accounting", "Sales"]
    assert [d.employee_count for d in items] == [0, 1]
    assert present_department(items[1])["employee_count"] == 1


def test_duplicate_name_conflicts(container, department):
    with pytest.raises(ConflictError):
        container.department_service.create(name="engineering")


def test_name_is_required(container):
    with pytest.raises(ValidationError):
        container.department_service.create(name="   ")


def test_description_length_is_bounded(container):
    with pytest.raises(ValidationError):
        container.department_service.create(name="Ops", description="x" * 501)


def test_update_patch_semantics(container, department):
    svc = container.department_service

    renamed = svc.update(department.dept_id, name="R&D")
    assert renamed.name == "R&D"
    assert renamed.description == "Builds things"

    cleared = svc.update(department.dept_id, description=None)
    assert cleared.description is None
    assert cleared.name == "R&D"


def test_update_to_taken_name_conflicts(container, department):
    other = container.department_service.create(name="Sales")
    with pytest.raises(ConflictError):
        container.department_service.update(other.dept_id, name="Engineering")


def test_unknown_department(container):
    svc = container.department_service
    with pytest.raises(NotFoundError):
        svc.get(5)
    with pytest.raises(NotFoundError):
        svc.update(5, name="x")
    with pytest.raises(NotFoundError):
        svc.delete(5)


@pytest.mark.parametrize("name", ["X", "N" * 101, 12])
def test_name_length_and_type_are_checked(container, department, name):
    with pytest.raises(ValidationError) as exc:
        container.department_service.create(name=name)
    assert exc.value.details[0]["field"] == "name"

    with pytest.raises(ValidationError):
        container.department_service.update(department.dept_id, name=name)
    assert container.department_service.get(department.dept_id).department.name == "Engineering"
