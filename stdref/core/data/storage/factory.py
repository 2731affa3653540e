"""Backend construction from configuration."""

from __future__ import annotations

from stdref.core.config.settings import StorageSettings
from stdref.core.exceptions.oracle import ConfigurationError

from .base import StateBackend
from .duckdb import DuckDBStateBackend
from .memory import MemoryStateBackend


def create_backend(settings: StorageSettings | None = None) -> StateBackend:
    """Create the state backend named by ``settings.backend``."""

    settings = settings or StorageSettings()
    backend = settings.backend.lower()
    if backend == "memory":
        return MemoryStateBackend()
    if backend == "duckdb":
        return DuckDBStateBackend(settings.path)
    raise ConfigurationError(
        f"Unsupported storage backend '{settings.backend}'. Allowed values: duckdb, memory",
        "storage.backend",
        settings.backend,
    )


__all__ = ["create_backend"]
