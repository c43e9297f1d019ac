from __future__ import annotations

from datetime import date, datetime

import pytest

from hr_records.common.clock import FixedClock
from hr_records.container import build_container
from hr_records.main import create_app

TEST_SETTINGS = {
    "DB_BACKEND": "memory",
    "TESTING": True,
    "DEBUG": False,
    "SECRET_KEY": "test-secret",
    "JWT_SECRET_KEY": "test-jwt-secret-with-at-least-32-bytes",
    "AUTO_INIT_DB": False,
    "AUTO_SEED_DB": False,
    "ADMIN_EMAIL": None,
    "ADMIN_PASSWORD": None,
    "LOG_LEVEL": "WARNING",
}


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock(datetime(2024, 1, 10, 8, 55, 0))


@pytest.fixture
def container(clock):
    c = build_container(backend="memory", clock=clock)
    yield c
    c.close()


@pytest.fixture
def department(container):
    return container.department_service.create(name="Engineering", description="Builds things")


@pytest.fixture
def make_employee(container):
    counter = {"n": 0}

    def _make(**overrides):
        counter["n"] += 1
        n = counter["n"]
        fields = dict(
            first_name=f"First{n}",
            last_name=f"Last{n}",
            email=f"employee{n}@example.com",
            position="Engineer",
            hire_date=date(2023, 1, n),
        )
        fields.update(overrides)
        return container.employee_service.create(**fields)

    return _make


@pytest.fixture
def employee(make_employee, department):
    return make_employee(first_name="Ada", last_name="Lovelace", email="ada@example.com", department_id=department.dept_id)


@pytest.fixture
def settings() -> dict:
    return dict(TEST_SETTINGS)


@pytest.fixture
def app(monkeypatch, clock, settings):
    monkeypatch.setenv("APP_ENV", "testing")
    app = create_app(settings, clock=clock)
    yield app
    app.extensions["hr_records.container"].close()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def auth_headers(client) -> dict:
    resp = client.post(
        "/api/auth/register",
        json={"email": "hr@example.com", "password": "secret123", "name": "HR Admin"},
    )
    assert resp.status_code == 201
    token = resp.get_json()["data"]["token"]
    return {"Authorization": f"Bearer {token}"}
