"""配置管理模块 - 处理stdref oracle的配置"""

import os
import tomllib
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any

from loguru import logger


def default_config_dir() -> Path:
    """用户级配置目录 (~/.stdref)"""
    return Path.home() / ".stdref"


@dataclass
class OracleSettings:
    """Oracle计算配置"""

    anchor_symbol: str = "USD"
    anchor_rate: int = 10**9
    cross_rate_scale: int = 10**18
    allowed_relayers: list[str] = field(default_factory=list)


@dataclass
class StorageSettings:
    """状态存储配置"""

    backend: str = "duckdb"
    path: str = field(default_factory=lambda: str(default_config_dir() / "state.duckdb"))


@dataclass
class LoggingSettings:
    """日志配置"""

    level: str = "WARNING"
    file: str | None = None


@dataclass
class StdRefConfig:
    """stdref主配置"""

    oracle: OracleSettings = field(default_factory=OracleSettings)
    storage: StorageSettings = field(default_factory=StorageSettings)
    logging: LoggingSettings = field(default_factory=LoggingSettings)

    @classmethod
    def from_dict(cls, config_dict: dict[str, Any]) -> "StdRefConfig":
        """从字典创建配置"""
        return cls(
            oracle=OracleSettings(**config_dict.get("oracle", {})),
            storage=StorageSettings(**config_dict.get("storage", {})),
            logging=LoggingSettings(**config_dict.get("logging", {})),
        )

    def to_dict(self) -> dict[str, Any]:
        """转换为字典"""
        return {
            "oracle": asdict(self.oracle),
            "storage": asdict(self.storage),
            "logging": asdict(self.logging),
        }


def _deep_update(d: dict[str, Any], u: dict[str, Any]) -> dict[str, Any]:
    for k, v in u.items():
        if isinstance(v, dict):
            d[k] = _deep_update(d.get(k, {}), v)
        else:
            d[k] = v
    return d


class ConfigManager:
    """配置管理器"""

    def __init__(self, config_path: Path | None = None, use_env: bool = True):
        """初始化配置管理器

        Args:
            config_path: 配置文件路径，如果为None则使用默认路径
            use_env: 是否叠加 STDREF_* 环境变量
        """
        self.config_path = config_path or default_config_dir() / "config.toml"
        self.use_env = use_env
        self.config = self._load_config()

    def _load_config(self) -> StdRefConfig:
        """加载配置"""
        config_dict: dict[str, Any] = {}
        try:
            if self.config_path.exists():
                with open(self.config_path, "rb") as f:
                    config_dict = tomllib.load(f)
            if self.use_env:
                _deep_update(config_dict, load_config_from_env())
            return StdRefConfig.from_dict(config_dict)
        except (OSError, tomllib.TOMLDecodeError, TypeError, ValueError, AttributeError) as e:
            # 配置文件有问题时退回默认配置
            logger.warning(f"Failed to load config from {self.config_path}: {e}")
            return StdRefConfig()

    def get_config(self) -> StdRefConfig:
        """获取当前配置"""
        return self.config

    def update_config(self, **updates: Any) -> None:
        """更新配置"""
        config_dict = _deep_update(self.config.to_dict(), updates)
        self.config = StdRefConfig.from_dict(config_dict)


def get_default_config() -> StdRefConfig:
    """获取默认配置"""
    return StdRefConfig()


def load_config_from_env() -> dict[str, Any]:
    """从环境变量加载配置"""
    config: dict[str, Any] = {}

    oracle_config: dict[str, Any] = {}
    anchor_symbol = os.getenv("STDREF_ANCHOR_SYMBOL")
    if anchor_symbol:
        oracle_config["anchor_symbol"] = anchor_symbol
    allowed_relayers = os.getenv("STDREF_ALLOWED_RELAYERS")
    if allowed_relayers is not None:
        oracle_config["allowed_relayers"] = [
            relayer.strip() for relayer in allowed_relayers.split(",") if relayer.strip()
        ]
    if oracle_config:
        config["oracle"] = oracle_config

    storage_config: dict[str, Any] = {}
    storage_backend = os.getenv("STDREF_STORAGE_BACKEND")
    if storage_backend:
        storage_config["backend"] = storage_backend.lower()
    storage_path = os.getenv("STDREF_STORAGE_PATH")
    if storage_path:
        storage_config["path"] = storage_path
    if storage_config:
        config["storage"] = storage_config

    logging_config: dict[str, Any] = {}
    logging_level = os.getenv("STDREF_LOGGING_LEVEL")
    if logging_level is not None:
        logging_config["level"] = logging_level
    logging_file = os.getenv("STDREF_LOGGING_FILE")
    if logging_file is not None:
        logging_config["file"] = logging_file
    if logging_config:
        config["logging"] = logging_config

    return config
