"""Reference store: the authoritative symbol -> RateRecord mapping.

Every operation loads the full state from the injected backend and, for
writes, saves it back in one piece. A rejected batch never reaches the
backend.
"""

from __future__ import annotations

from collections.abc import Sequence

from pydantic import ValidationError

from stdref.core.data.storage.base import StateBackend
from stdref.core.exceptions.oracle import (
    BatchValidationError,
    MismatchedBatchLengthError,
    StateNotInitializedError,
    StorageError,
)
from stdref.core.logging import get_logger
from stdref.core.models.records import RateRecord, StoreState

logger = get_logger(__name__)


class ReferenceStore:
    """Exclusively owned handle over the persisted oracle state."""

    def __init__(self, backend: StateBackend) -> None:
        self._backend = backend

    @property
    def backend(self) -> StateBackend:
        return self._backend

    def initialize(self) -> None:
        """Persist an empty state, replacing whatever was stored before."""

        self._save(StoreState())
        logger.info("Reference store initialized", backend=self._backend.name)

    def apply_batch(
        self,
        symbols: Sequence[str],
        rates: Sequence[int],
        resolve_times: Sequence[int],
        request_ids: Sequence[int],
    ) -> int:
        """Upsert one record per index and persist the whole state once.

        Later indices overwrite earlier ones for duplicate symbols. Returns the
        number of entries applied.
        """

        lengths = {
            "symbols": len(symbols),
            "rates": len(rates),
            "resolve_times": len(resolve_times),
            "request_ids": len(request_ids),
        }
        if len(set(lengths.values())) != 1:
            logger.warning("Rejected relay batch with mismatched lengths", lengths=lengths)
            raise MismatchedBatchLengthError(lengths)

        updates = self._build_records(symbols, rates, resolve_times, request_ids)

        state = self._load()
        for symbol, record in updates:
            state.refs[symbol] = record
        self._save(state)

        logger.debug("Applied relay batch", size=len(updates), symbols=list(symbols))
        return len(updates)

    def get(self, symbol: str) -> RateRecord | None:
        """Return the stored record for ``symbol`` or ``None`` when unknown."""

        return self._load().refs.get(symbol)

    def snapshot(self) -> dict[str, RateRecord]:
        """Return a copy of the full mapping."""

        return dict(self._load().refs)

    def _build_records(
        self,
        symbols: Sequence[str],
        rates: Sequence[int],
        resolve_times: Sequence[int],
        request_ids: Sequence[int],
    ) -> list[tuple[str, RateRecord]]:
        updates: list[tuple[str, RateRecord]] = []
        for index, (symbol, rate, resolve_time, request_id) in enumerate(
            zip(symbols, rates, resolve_times, request_ids)
        ):
            if not isinstance(symbol, str):
                raise BatchValidationError(f"Symbol at index {index} must be a string", index)
            try:
                record = RateRecord(rate=rate, resolve_time=resolve_time, request_id=request_id)
            except ValidationError as exc:
                raise BatchValidationError(
                    f"Invalid relay entry for '{symbol}' at index {index}",
                    index,
                    [{"loc": list(err["loc"]), "msg": err["msg"]} for err in exc.errors()],
                ) from exc
            updates.append((symbol, record))
        return updates

    def _load(self) -> StoreState:
        blob = self._backend.load()
        if blob is None:
            raise StateNotInitializedError(self._backend.name)
        try:
            return StoreState.model_validate_json(blob)
        except ValidationError as exc:
            raise StorageError("Persisted state is corrupt", self._backend.name) from exc

    def _save(self, state: StoreState) -> None:
        self._backend.save(state.model_dump_json())


__all__ = ["ReferenceStore"]
