from __future__ import annotations

from typing import Optional

from ..core.enums import Role
from ..database.memory import InMemoryDatabase
from .model import User
from .repository import UserRepository


class InMemoryUserRepository(UserRepository):
    def __init__(self, db: InMemoryDatabase):
        self._db = db

    @staticmethod
    def _to_model(r: dict) -> User:
        return User(
            user_id=int(r["user_id"]),
            email=r["email"],
            name=r["name"],
            password_hash=r["password_hash"],
            role=Role(r["role"]),
        )

    def get_by_id(self, user_id: int) -> Optional[User]:
        r = self._db.get("users", user_id)
        return self._to_model(r) if r else None

    def get_by_email(self, email: str) -> Optional[User]:
        wanted = email.strip().casefold()
        for r in self._db.rows("users"):
            if r["email"].casefold() == wanted:
                return self._to_model(r)
        return None

    def create_user(self, *, email: str, name: str, password_hash: str, role: Role) -> int:
        row = {"email": email, "name": name, "password_hash": password_hash, "role": role.value}
        return self._db.insert("users", row, id_column="user_id")
