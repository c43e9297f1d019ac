from __future__ import annotations

from flask import Flask
from flask_jwt_extended import jwt_required

from ..common.responses import json_body, ok, patch_value
from ..container import Container
from .presenter import present_department


def register(app: Flask, container: Container) -> None:
    service = container.department_service

    @app.route("/api/departments", methods=["GET"], endpoint="departments_list")
    @jwt_required()
    def departments_list():
        items = [present_department(d) for d in service.list()]
        return ok(items, count=len(items))

    @app.route("/api/departments/<int:dept_id>", methods=["GET"], endpoint="departments_get")
    @jwt_required()
    def departments_get(dept_id: int):
        detail = service.get(dept_id)
        return ok(present_department(detail.department, employees=detail.employees))

    @app.route("/api/departments", methods=["POST"], endpoint="departments_create")
    @jwt_required()
    def departments_create():
        payload = json_body()
        department = service.create(name=payload.get("name"), description=payload.get("description"))
        return ok(present_department(department), message="Department created successfully", status=201)

    @app.route("/api/departments/<int:dept_id>", methods=["PUT"], endpoint="departments_update")
    @jwt_required()
    def departments_update(dept_id: int):
        payload = json_body()
        department = service.update(
            dept_id,
            name=patch_value(payload, "name"),
            description=patch_value(payload, "description"),
        )
        return ok(present_department(department), message="Department updated successfully")

    @app.route("/api/departments/<int:dept_id>", methods=["DELETE"], endpoint="departments_delete")
    @jwt_required()
    def departments_delete(dept_id: int):
        service.delete(dept_id)
        return ok(message="Department deleted successfully")
