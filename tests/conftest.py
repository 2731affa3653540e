"""Pytest configuration for the stdref test suite."""

from __future__ import annotations

from collections.abc import Iterator

import pytest

from stdref.core.data.storage import MemoryStateBackend
from stdref.core.logging import configure_logging
from stdref.core.models import ExecutionContext
from stdref.core.oracle import ReferenceOracle
from stdref.core.store import ReferenceStore

# Block time used by the reference scenarios, in nanoseconds.
BLOCK_TIME = 1571797419879305533


@pytest.fixture(autouse=True)
def _reset_logging() -> Iterator[None]:
    """Route logs back to the real stderr after each test."""

    yield
    configure_logging()


@pytest.fixture
def backend() -> MemoryStateBackend:
    return MemoryStateBackend()


@pytest.fixture
def store(backend: MemoryStateBackend) -> ReferenceStore:
    reference_store = ReferenceStore(backend)
    reference_store.initialize()
    return reference_store


@pytest.fixture
def ctx() -> ExecutionContext:
    return ExecutionContext(block_time=BLOCK_TIME, sender="creator")


@pytest.fixture
def oracle(backend: MemoryStateBackend, ctx: ExecutionContext) -> ReferenceOracle:
    instance = ReferenceOracle(backend)
    instance.instantiate(ctx)
    return instance


@pytest.fixture(autouse=True)
def _isolated_config(monkeypatch: pytest.MonkeyPatch, tmp_path) -> None:
    """Keep tests away from the user's ~/.stdref and STDREF_* variables."""

    monkeypatch.setenv("HOME", str(tmp_path / "home"))
    for name in (
        "STDREF_ANCHOR_SYMBOL",
        "STDREF_ALLOWED_RELAYERS",
        "STDREF_STORAGE_BACKEND",
        "STDREF_STORAGE_PATH",
        "STDREF_LOGGING_LEVEL",
        "STDREF_LOGGING_FILE",
    ):
        monkeypatch.delenv(name, raising=False)
