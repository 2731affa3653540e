"""状态存储接口定义."""

from abc import ABC, abstractmethod


class StateBackend(ABC):
    """Persists the oracle state as one opaque serialized blob."""

    name: str = "abstract"

    @abstractmethod
    def load(self) -> str | None:
        """读取完整状态; 尚未初始化时返回 None."""
        pass

    @abstractmethod
    def save(self, blob: str) -> None:
        """整体替换已保存的状态."""
        pass

    def close(self) -> None:
        """释放底层资源."""
        return None
