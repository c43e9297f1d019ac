from __future__ import annotations

import logging
from datetime import timedelta
from typing import Optional

from flask import Flask
from flask_jwt_extended import JWTManager, create_access_token

from ..common.responses import fail
from ..core.constants import DEFAULT_TOKEN_DAYS
from .model import User
from .repository import UserRepository

logger = logging.getLogger(__name__)

TOKEN_REQUIRED = "Access token required. Please provide a valid authentication token."
TOKEN_INVALID = "Invalid or expired token. Please login again."


def init_jwt(app: Flask, users: UserRepository) -> JWTManager:
    """Bearer-token auth; the token subject is the user id."""
    app.config.setdefault("JWT_TOKEN_LOCATION", ["headers"])
    app.config.setdefault("JWT_ACCESS_TOKEN_EXPIRES", timedelta(days=DEFAULT_TOKEN_DAYS))
    jwt = JWTManager(app)

    @jwt.user_lookup_loader
    def _load_user(_jwt_header: dict, jwt_data: dict) -> Optional[User]:
        try:
            return users.get_by_id(int(jwt_data["sub"]))
        except (KeyError, TypeError, ValueError):
            return None

    @jwt.unauthorized_loader
    def _missing(reason: str):
        return fail("Unauthorized", TOKEN_REQUIRED, 401)

    @jwt.invalid_token_loader
    def _invalid(reason: str):
        logger.info("Rejected token: %s", reason)
        return fail("Unauthorized", TOKEN_INVALID, 401)

    @jwt.expired_token_loader
    def _expired(_jwt_header: dict, _jwt_data: dict):
        return fail("Unauthorized", TOKEN_INVALID, 401)

    @jwt.user_lookup_error_loader
    def _unknown_user(_jwt_header: dict, _jwt_data: dict):
        return fail("Unauthorized", TOKEN_INVALID, 401)

    return jwt


def issue_token(user: User) -> str:
    return create_access_token(identity=str(user.user_id))
