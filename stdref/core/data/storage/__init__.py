"""状态存储模块."""

from stdref.core.data.storage.base import StateBackend
from stdref.core.data.storage.duckdb import DuckDBStateBackend
from stdref.core.data.storage.duckdb_factory import DuckDBFactoryConfig, StdRefDuckDBFactory
from stdref.core.data.storage.factory import create_backend
from stdref.core.data.storage.memory import MemoryStateBackend

__all__ = [
    "StateBackend",
    "MemoryStateBackend",
    "DuckDBStateBackend",
    "DuckDBFactoryConfig",
    "StdRefDuckDBFactory",
    "create_backend",
]
