from __future__ import annotations

from flask import Flask, request
from flask_jwt_extended import jwt_required

from ..common.responses import json_body, ok, patch_value
from ..common.validators import (
    optional_date_field,
    optional_id_field,
    parse_enum_field,
    parse_id_field,
    parse_time_field,
    require_date_field,
)
from ..container import Container
from ..core.enums import AttendanceStatus, MarkAction
from .model import AttendanceFilter
from .presenter import present_attendance, present_stats


def _status(value: object, field_name: str) -> AttendanceStatus:
    return parse_enum_field(value, AttendanceStatus, field_name)


def register(app: Flask, container: Container) -> None:
    service = container.attendance_service
    stats_service = container.attendance_stats_service

    @app.route("/api/attendance", methods=["GET"], endpoint="attendance_list")
    @jwt_required()
    def attendance_list():
        args = request.args
        filters = AttendanceFilter(
            work_date=optional_date_field(args.get("date"), "date"),
            employee_id=optional_id_field(args.get("employee_id"), "employee_id"),
            start_date=optional_date_field(args.get("start_date"), "start_date"),
            end_date=optional_date_field(args.get("end_date"), "end_date"),
        )
        data = [present_attendance(v) for v in service.list(filters)]
        return ok(data, count=len(data))

    @app.route("/api/attendance/stats", methods=["GET"], endpoint="attendance_stats")
    @jwt_required()
    def attendance_stats():
        stats = stats_service.stats(
            start_date=optional_date_field(request.args.get("start_date"), "start_date"),
            end_date=optional_date_field(request.args.get("end_date"), "end_date"),
        )
        return ok(present_stats(stats))

    @app.route("/api/attendance/mark", methods=["POST"], endpoint="attendance_mark")
    @jwt_required()
    def attendance_mark():
        payload = json_body()
        action = parse_enum_field(payload.get("action"), MarkAction, "action")
        view = service.mark(
            employee_id=parse_id_field(payload.get("employee_id"), "employee_id"),
            work_date=require_date_field(payload.get("date"), "date"),
            action=action,
        )
        message = "Checked in successfully" if action == MarkAction.CHECK_IN else "Checked out successfully"
        return ok(present_attendance(view), message=message)

    @app.route("/api/attendance/<int:attendance_id>", methods=["GET"], endpoint="attendance_get")
    @jwt_required()
    def attendance_get(attendance_id: int):
        return ok(present_attendance(service.get(attendance_id)))

    @app.route("/api/attendance", methods=["POST"], endpoint="attendance_create")
    @jwt_required()
    def attendance_create():
        payload = json_body()
        status = payload.get("status")
        view = service.create(
            employee_id=parse_id_field(payload.get("employee_id"), "employee_id"),
            work_date=require_date_field(payload.get("date"), "date"),
            check_in=parse_time_field(payload.get("check_in"), "check_in"),
            check_out=parse_time_field(payload.get("check_out"), "check_out"),
            status=_status(status, "status") if status else None,
            notes=payload.get("notes"),
        )
        return ok(present_attendance(view), message="Attendance record created successfully", status=201)

    @app.route("/api/attendance/<int:attendance_id>", methods=["PUT"], endpoint="attendance_update")
    @jwt_required()
    def attendance_update(attendance_id: int):
        payload = json_body()
        view = service.update(
            attendance_id,
            check_in=patch_value(payload, "check_in", parse_time_field),
            check_out=patch_value(payload, "check_out", parse_time_field),
            status=patch_value(payload, "status", _status),
            notes=patch_value(payload, "notes"),
        )
        return ok(present_attendance(view), message="Attendance record updated successfully")

    @app.route("/api/attendance/<int:attendance_id>", methods=["DELETE"], endpoint="attendance_delete")
    @jwt_required()
    def attendance_delete(attendance_id: int):
        service.delete(attendance_id)
        return ok(message="Attendance record deleted successfully")
