from __future__ import annotations

from typing import Optional, Protocol

from ..core.enums import Role
from .model import User


class UserRepository(Protocol):
    """Repository interface for User. Services depend on this, not on a concrete store."""

    def get_by_id(self, user_id: int) -> Optional[User]:
        raise NotImplementedError

    def get_by_email(self, email: str) -> Optional[User]:
        raise NotImplementedError

    def create_user(self, *, email: str, name: str, password_hash: str, role: Role) -> int:
        raise NotImplementedError
