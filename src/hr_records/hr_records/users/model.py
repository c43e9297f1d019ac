from __future__ import annotations

from dataclasses import dataclass

from ..core.enums import Role


@dataclass(frozen=True)
class User:
    """Domain entity: an API account. Not an employee record."""

    user_id: int
    email: str
    name: str
    password_hash: str
    role: Role = Role.USER
