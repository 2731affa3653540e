"""Configuration management module."""

from stdref.core.config.settings import (
    ConfigManager,
    LoggingSettings,
    OracleSettings,
    StdRefConfig,
    StorageSettings,
    get_default_config,
    load_config_from_env,
)

__all__ = [
    "ConfigManager",
    "StdRefConfig",
    "OracleSettings",
    "StorageSettings",
    "LoggingSettings",
    "get_default_config",
    "load_config_from_env",
]
