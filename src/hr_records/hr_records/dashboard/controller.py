from __future__ import annotations

from flask import Flask
from flask_jwt_extended import jwt_required

from ..common.responses import ok
from ..container import Container
from .presenter import present_dashboard


def register(app: Flask, container: Container) -> None:
    @app.route("/api/dashboard/stats", methods=["GET"], endpoint="dashboard_stats")
    @jwt_required()
    def dashboard_stats():
        return ok(present_dashboard(container.dashboard_service.summary()))
