"""内存状态存储实现."""

from .base import StateBackend


class MemoryStateBackend(StateBackend):
    """Keeps the serialized state in process memory."""

    name = "memory"

    def __init__(self, blob: str | None = None):
        self._blob = blob

    def load(self) -> str | None:
        return self._blob

    def save(self, blob: str) -> None:
        self._blob = blob
