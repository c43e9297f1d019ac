from __future__ import annotations

from datetime import date

import pytest

from hr_records.core.enums import EmployeeStatus
from hr_records.core.exceptions import ConflictError, NotFoundError, ValidationError
from hr_records.employees.presenter import present_employee


def test_create_normalizes_email_and_defaults_status(container, department):
    view = container.employee_service.create(
        first_name=" Grace ",
        last_name="Hopper",
        email="Grace@Example.COM",
        position="Admiral",
        department_id=department.dept_id,
        salary=1000,
    )

    assert view.first_name == "Grace"
    assert view.email == "grace@example.com"
    assert view.status == EmployeeStatus.ACTIVE
    assert view.department_name == "Engineering"
    assert view.salary == 1000.0


def test_duplicate_email_conflicts_case_insensitively(container, employee):
    with pytest.raises(ConflictError) as exc:
        container.employee_service.create(first_name="Al", last_name="Bo", email="ADA@example.com", position="Dev")
    assert exc.value.details[0]["field"] == "email"


@pytest.mark.parametrize(
    "overrides, field",
    [
        ({"first_name": "  "}, "first_name"),
        ({"position": ""}, "position"),
        ({"salary": -1}, "salary"),
        ({"hire_date": date(2024, 1, 11)}, "hire_date"),
        ({"department_id": 777}, "department_id"),
        ({"first_name": "A" * 51}, "first_name"),
        ({"last_name": "B"}, "last_name"),
        ({"last_name": 42}, "last_name"),
        ({"position": "P" * 101}, "position"),
        ({"email": "not-an-email"}, "email"),
        ({"email": "a" * 90 + "@example.com"}, "email"),
        ({"email": 5}, "email"),
        ({"phone": "x" * 80}, "phone"),
        ({"phone": "1" * 21}, "phone"),
        ({"phone": "call me"}, "phone"),
    ],
)
def test_create_validation(container, overrides, field):
    fields = dict(first_name="Al", last_name="Bo", email="ab@example.com", position="Dev")
    fields.update(overrides)
    with pytest.raises(ValidationError) as exc:
        container.employee_service.create(**fields)
    assert exc.value.details[0]["field"] == field


def test_hire_date_today_is_allowed(container, clock):
    view = container.employee_service.create(
        first_name="Al", last_name="Bo", email="ab@example.com", position="Dev", hire_date=clock.today()
    )
    assert view.hire_date == date(2024, 1, 10)


def test_update_patches_only_supplied_fields(container, employee, department):
    updated = container.employee_service.update(employee.employee_id, position="Lead", department_id=None)

    assert updated.position == "Lead"
    assert updated.department_id is None
    assert updated.first_name == "Ada"
    assert updated.email == "ada@example.com"


def test_update_email_to_taken_address_conflicts(container, employee, make_employee):
    other = make_employee()
    with pytest.raises(ConflictError):
        container.employee_service.update(other.employee_id, email="ada@example.com")
    # own address is fine
    assert container.employee_service.update(employee.employee_id, email="ADA@example.com").email == "ada@example.com"


def test_update_unknown_employee(container):
    with pytest.raises(NotFoundError):
        container.employee_service.update(99, position="X")
    with pytest.raises(NotFoundError):
        container.employee_service.delete(99)


def test_list_search_and_filters(container, department, make_employee):
    make_employee(first_name="Alice", position="Designer", department_id=department.dept_id)
    bob = make_employee(first_name="Bob", position="Engineer")
    container.employee_service.update(bob.employee_id, status=EmployeeStatus.INACTIVE)

    svc = container.employee_service
    assert [e.first_name for e in svc.list(search="DESIGN")] == ["Alice"]
    assert [e.first_name for e in svc.list(department_id=department.dept_id)] == ["Alice"]
    assert [e.first_name for e in svc.list(status=EmployeeStatus.INACTIVE)] == ["Bob"]
    # newest first
    assert [e.first_name for e in svc.list()] == ["Bob", "Alice"]


def test_present_employee_shape(employee):
    out = present_employee(employee)
    assert out["id"] == employee.employee_id
    assert out["department_name"] == "Engineering"
    assert out["hire_date"] == "2023-01-01"
    assert out["status"] == "active"


def test_update_checks_field_bounds(container, employee):
    svc = container.employee_service
    with pytest.raises(ValidationError):
        svc.update(employee.employee_id, first_name="A" * 51)
    with pytest.raises(ValidationError):
        svc.update(employee.employee_id, phone="x" * 80)
    with pytest.raises(ValidationError):
        svc.update(employee.employee_id, email="nope")

    updated = svc.update(employee.employee_id, phone="+1 (555) 010-2030")
    assert updated.phone == "+1 (555) 010-2030"
    assert updated.first_name == "Ada"


def test_search_is_bounded_and_literal(container, make_employee):
    make_employee(first_name="Percy", email="p100%@example.com")
    make_employee(first_name="Other")

    svc = container.employee_service
    with pytest.raises(ValidationError) as exc:
        svc.list(search="s" * 101)
    assert exc.value.details[0]["field"] == "search"
    assert [e.first_name for e in svc.list(search="100%")] == ["Percy"]
    assert svc.list(search="s" * 100) == []
