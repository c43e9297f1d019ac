from __future__ import annotations

import logging
from dataclasses import dataclass

import mysql.connector
from mysql.connector.constants import ClientFlag

from ..core.exceptions import StorageError

logger = logging.getLogger(__name__)


@dataclass
class DBConfig:
    host: str
    port: int
    user: str
    password: str
    database: str

    @classmethod
    def from_dict(cls, db_config: dict) -> "DBConfig":
        return cls(
            host=str(db_config.get("host", "localhost")),
            port=int(db_config.get("port", 3306)),
            user=str(db_config.get("user", "root")),
            password=str(db_config.get("password", "")),
            database=str(db_config.get("database", "hr_records")),
        )


class DatabaseConnection:
    """DB connection factory handed to every MySQL repository.

    Built once at startup by the container and closed at shutdown. Connections
    are short-lived, one per repository call.
    """

    def __init__(self, config: DBConfig):
        self._config = config
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def connect(self):
        if self._closed:
            raise StorageError("Database handle is closed")
        try:
            return mysql.connector.connect(
                host=self._config.host,
                port=int(self._config.port),
                user=self._config.user,
                password=self._config.password,
                database=self._config.database,
                # rowcount reports matched rows, so an UPDATE that changes nothing still counts
                client_flags=[ClientFlag.FOUND_ROWS],
            )
        except mysql.connector.Error as e:
            raise StorageError(f"Cannot connect to {self._config.host}:{self._config.port}") from e

    def close(self) -> None:
        if not self._closed:
            logger.info("Closing database handle for %s", self._config.database)
        self._closed = True
