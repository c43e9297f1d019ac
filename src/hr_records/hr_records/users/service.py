from __future__ import annotations

import logging
from typing import Optional

from werkzeug.security import check_password_hash, generate_password_hash

from ..common.validators import require_email, require_min_length, require_non_empty
from ..core.constants import MIN_PASSWORD_LENGTH, NAME_MIN_LENGTH, PASSWORD_MAX_LENGTH, USER_NAME_MAX_LENGTH
from ..core.enums import Role
from ..core.exceptions import AuthenticationError, ConflictError, UniqueConstraintViolation
from .model import User
from .repository import UserRepository

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid email or password"


class AuthService:
    """Use case: register an account and verify login credentials."""

    def __init__(self, users: UserRepository):
        self._users = users

    def register(self, *, email: str, password: str, name: str, role: Role = Role.USER) -> User:
        email = require_email(email)
        name = require_non_empty(name, "name", min_len=NAME_MIN_LENGTH, max_len=USER_NAME_MAX_LENGTH)
        require_min_length(password, "password", MIN_PASSWORD_LENGTH, PASSWORD_MAX_LENGTH)

        if self._users.get_by_email(email):
            raise ConflictError(
                "User with this email already exists",
                details=[{"field": "email", "message": "An account with this email already exists", "value": email}],
            )

        password_hash = generate_password_hash(password)
        try:
            user_id = self._users.create_user(email=email, name=name, password_hash=password_hash, role=role)
        except UniqueConstraintViolation as e:
            raise ConflictError("User with this email already exists") from e

        logger.info("User %s registered (%s)", user_id, email)
        return User(user_id=user_id, email=email, name=name, password_hash=password_hash, role=role)

    def authenticate(self, email: Optional[str], password: Optional[str]) -> User:
        email = require_non_empty(email, "email").lower()
        require_non_empty(password, "password")

        user = self._users.get_by_email(email)
        if not user:
            raise AuthenticationError(INVALID_CREDENTIALS)

        try:
            ok = check_password_hash(user.password_hash, password)
        except ValueError:
            # placeholder or corrupted hashes
            ok = False

        if not ok:
            logger.info("Failed login for %s", user.email)
            raise AuthenticationError(INVALID_CREDENTIALS)
        return user
