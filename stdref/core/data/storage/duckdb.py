"""DuckDB状态存储实现."""

from __future__ import annotations

import duckdb
from duckdb import DuckDBPyConnection

from stdref.core.exceptions.oracle import StorageError

from .base import StateBackend
from .duckdb_factory import DuckDBFactoryConfig, StdRefDuckDBFactory

STATE_TABLE = "oracle_state"
STATE_KEY = "state"


class DuckDBStateBackend(StateBackend):
    """Stores the state blob as a single row of a DuckDB table."""

    name = "duckdb"

    def __init__(self, db_path: str = ":memory:", factory: StdRefDuckDBFactory | None = None):
        """初始化DuckDB状态存储."""
        self._factory = factory or StdRefDuckDBFactory(DuckDBFactoryConfig(database=db_path))
        self.db_path = self._factory.database
        self._conn: DuckDBPyConnection | None = None
        self._init_database()

    def _init_database(self) -> None:
        """初始化数据库表结构."""
        try:
            self._conn = self._factory.create_connection()
            self._conn.execute(f"""
                CREATE TABLE IF NOT EXISTS {STATE_TABLE} (
                    key VARCHAR PRIMARY KEY,
                    payload VARCHAR NOT NULL,
                    updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
                )
            """)
        except duckdb.Error as exc:
            raise StorageError(
                f"Unable to open state database: {exc}", self.name, {"path": self.db_path}
            ) from exc

    def _connection(self) -> DuckDBPyConnection:
        if self._conn is None:
            raise StorageError("State database is closed", self.name, {"path": self.db_path})
        return self._conn

    def load(self) -> str | None:
        try:
            row = self._connection().execute(
                f"SELECT payload FROM {STATE_TABLE} WHERE key = ?", [STATE_KEY]
            ).fetchone()
        except duckdb.Error as exc:
            raise StorageError(f"Unable to read state: {exc}", self.name, {"path": self.db_path}) from exc
        return row[0] if row else None

    def save(self, blob: str) -> None:
        try:
            self._connection().execute(
                f"INSERT OR REPLACE INTO {STATE_TABLE} (key, payload, updated_at) "
                "VALUES (?, ?, CURRENT_TIMESTAMP)",
                [STATE_KEY, blob],
            )
        except duckdb.Error as exc:
            raise StorageError(f"Unable to write state: {exc}", self.name, {"path": self.db_path}) from exc

    def close(self) -> None:
        """关闭数据库连接."""
        if self._conn is not None:
            self._conn.close()
            self._conn = None
