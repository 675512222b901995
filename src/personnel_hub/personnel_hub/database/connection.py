from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping

import mysql.connector


@dataclass(frozen=True)
class DBConfig:
    host: str
    port: int
    user: str
    password: str
    database: str

    @classmethod
    def from_mapping(cls, raw: Mapping) -> "DBConfig":
        return cls(
            host=str(raw.get("host", "localhost")),
            port=int(raw.get("port", 3306)),
            user=str(raw.get("user", "root")),
            password=str(raw.get("password", "")),
            database=str(raw.get("database", "personnel_hub")),
        )


class DatabaseConnection:
    """Connection factory shared by every MySQL repository.

    Note: Built once in ``build_container`` and injected; each repository call
    opens a short-lived connection.
    """

    def __init__(self, config: DBConfig):
        self._config = config

    @property
    def config(self) -> DBConfig:
        return self._config

    def connect(self, *, with_database: bool = True):
        kwargs = dict(
            host=self._config.host,
            port=int(self._config.port),
            user=self._config.user,
            password=self._config.password,
            charset="utf8mb4",
        )
        if with_database:
            kwargs["database"] = self._config.database
        return mysql.connector.connect(**kwargs)
