from __future__ import annotations

from flask import Flask, request
from flask_jwt_extended import jwt_required

from ..common.responses import json_body, ok, patch_value
from ..common.validators import (
    optional_date_field,
    optional_id_field,
    optional_number_field,
    parse_enum_field,
)
from ..container import Container
from ..core.enums import EmployeeStatus
from .presenter import present_employee


def _status(value: object, field_name: str) -> EmployeeStatus:
    return parse_enum_field(value, EmployeeStatus, field_name)


def register(app: Flask, container: Container) -> None:
    service = container.employee_service

    @app.route("/api/employees", methods=["GET"], endpoint="employees_list")
    @jwt_required()
    def employees_list():
        status = request.args.get("status") or None
        items = service.list(
            search=(request.args.get("search") or "").strip() or None,
            department_id=optional_id_field(request.args.get("department_id"), "department_id"),
            status=_status(status, "status") if status else None,
        )
        data = [present_employee(e) for e in items]
        return ok(data, count=len(data))

    @app.route("/api/employees/<int:employee_id>", methods=["GET"], endpoint="employees_get")
    @jwt_required()
    def employees_get(employee_id: int):
        return ok(present_employee(service.get(employee_id)))

    @app.route("/api/employees", methods=["POST"], endpoint="employees_create")
    @jwt_required()
    def employees_create():
        payload = json_body()
        status = payload.get("status")
        employee = service.create(
            first_name=payload.get("first_name"),
            last_name=payload.get("last_name"),
            email=payload.get("email"),
            position=payload.get("position"),
            phone=payload.get("phone"),
            department_id=optional_id_field(payload.get("department_id"), "department_id"),
            hire_date=optional_date_field(payload.get("hire_date"), "hire_date"),
            salary=optional_number_field(payload.get("salary"), "salary"),
            status=_status(status, "status") if status else None,
        )
        return ok(present_employee(employee), message="Employee created successfully", status=201)

    @app.route("/api/employees/<int:employee_id>", methods=["PUT"], endpoint="employees_update")
    @jwt_required()
    def employees_update(employee_id: int):
        payload = json_body()
        employee = service.update(
            employee_id,
            first_name=patch_value(payload, "first_name"),
            last_name=patch_value(payload, "last_name"),
            email=patch_value(payload, "email"),
            position=patch_value(payload, "position"),
            phone=patch_value(payload, "phone"),
            department_id=patch_value(payload, "department_id", optional_id_field),
            hire_date=patch_value(payload, "hire_date", optional_date_field),
            salary=patch_value(payload, "salary", optional_number_field),
            status=patch_value(payload, "status", _status),
        )
        return ok(present_employee(employee), message="Employee updated successfully")

    @app.route("/api/employees/<int:employee_id>", methods=["DELETE"], endpoint="employees_delete")
    @jwt_required()
    def employees_delete(employee_id: int):
        service.delete(employee_id)
        return ok(message="Employee deleted successfully")
