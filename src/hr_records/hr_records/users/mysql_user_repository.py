from __future__ import annotations

from typing import Optional

from ..core.enums import Role
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .model import User
from .repository import UserRepository

_COLUMNS = "user_id, email, name, password_hash, role"


class MySQLUserRepository(UserRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    @staticmethod
    def _to_model(row: dict) -> User:
        return User(
            user_id=int(row["user_id"]),
            email=row["email"],
            name=row["name"],
            password_hash=row["password_hash"],
            role=Role(row["role"]),
        )

    def get_by_id(self, user_id: int) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM users WHERE user_id=%s", (user_id,))
            row = fetchone(cur)
            return self._to_model(row) if row else None

    def get_by_email(self, email: str) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM users WHERE email=%s", (email,))
            row = fetchone(cur)
            return self._to_model(row) if row else None

    def create_user(self, *, email: str, name: str, password_hash: str, role: Role) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO users(email, name, password_hash, role)
                VALUES(%s,%s,%s,%s)
                """,
                (email, name, password_hash, role.value),
            )
            return int(cur.lastrowid)
