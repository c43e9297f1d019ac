from __future__ import annotations

from flask import Flask

from ..common.responses import json_body, ok
from ..container import Container
from .model import User
from .tokens import issue_token


def present_user(u: User) -> dict:
    return {"id": u.user_id, "email": u.email, "name": u.name, "role": u.role.value}


def register(app: Flask, container: Container) -> None:
    @app.route("/api/auth/register", methods=["POST"], endpoint="auth_register")
    def auth_register():
        payload = json_body()
        user = container.auth_service.register(
            email=payload.get("email"),
            password=payload.get("password"),
            name=payload.get("name"),
        )
        data = {"token": issue_token(user), "user": present_user(user)}
        return ok(data, message="User created successfully", status=201)

    @app.route("/api/auth/login", methods=["POST"], endpoint="auth_login")
    def auth_login():
        payload = json_body()
        user = container.auth_service.authenticate(payload.get("email"), payload.get("password"))
        data = {"token": issue_token(user), "user": present_user(user)}
        return ok(data, message="Login successful")
