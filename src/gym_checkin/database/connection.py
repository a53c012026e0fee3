from __future__ import annotations

from dataclasses import dataclass

import mysql.connector

# Memberships are stored as naive UTC DATETIMEs, so every session runs in UTC.
SESSION_TIME_ZONE = "+00:00"


@dataclass(frozen=True)
class DBConfig:
    host: str = "localhost"
    port: int = 3306
    user: str = "root"
    password: str = ""
    database: str = "gym_checkin"
    connect_timeout: int = 5

    @classmethod
    def from_dict(cls, db_config: dict) -> "DBConfig":
        """Build from the DB_CONFIG settings dict; missing keys keep the defaults."""
        defaults = cls()
        return cls(
            host=str(db_config.get("host", defaults.host)),
            port=int(db_config.get("port", defaults.port)),
            user=str(db_config.get("user", defaults.user)),
            password=str(db_config.get("password", defaults.password)),
            database=str(db_config.get("database", defaults.database)),
            connect_timeout=int(db_config.get("connect_timeout", defaults.connect_timeout)),
        )

    def describe(self) -> str:
        """user@host:port/database, for logs (never the password)."""
        return f"{self.user}@{self.host}:{self.port}/{self.database}"


class DatabaseConnection:
    """Opens one short-lived MySQL connection per repository call.

    A scan is a handful of single-statement reads and writes, so nothing is
    pooled and no transaction spans two calls.
    """

    def __init__(self, config: DBConfig):
        self._config = config

    @property
    def config(self) -> DBConfig:
        return self._config

    def connect(self):
        return mysql.connector.connect(
            host=self._config.host,
            port=self._config.port,
            user=self._config.user,
            password=self._config.password,
            database=self._config.database,
            connection_timeout=self._config.connect_timeout,
            time_zone=SESSION_TIME_ZONE,
        )
