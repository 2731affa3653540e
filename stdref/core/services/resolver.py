"""Cross-rate resolution on top of the reference store."""

from __future__ import annotations

from collections.abc import Mapping

from stdref.core.config.settings import OracleSettings
from stdref.core.exceptions.oracle import (
    DivisionByZeroError,
    RefDataNotAvailableError,
    UnknownSymbolError,
)
from stdref.core.logging import get_logger
from stdref.core.models.records import RateRecord, ReferenceData, ResolvedPair
from stdref.core.store import ReferenceStore

logger = get_logger(__name__)


class Resolver:
    """Resolves symbols to rates and combines two of them into a cross-rate.

    The anchor symbol is never stored: it resolves to ``anchor_rate`` at the
    caller-supplied time.
    """

    def __init__(self, store: ReferenceStore, settings: OracleSettings | None = None) -> None:
        self._store = store
        self._settings = settings or OracleSettings()

    @property
    def anchor_symbol(self) -> str:
        return self._settings.anchor_symbol

    def resolve(self, symbol: str, current_time: int) -> ResolvedPair:
        """Resolve one symbol against a fresh snapshot of the store."""

        if symbol == self.anchor_symbol:
            return self._anchor(current_time)
        return self._resolve_from(self._store.snapshot(), symbol, current_time)

    def cross_rate(self, base_symbol: str, quote_symbol: str, current_time: int) -> ReferenceData:
        """Price of ``base_symbol`` in ``quote_symbol`` scaled by ``cross_rate_scale``.

        Both sides are resolved against the same snapshot. Division truncates.
        """

        refs: Mapping[str, RateRecord] = {}
        if self._needs_store(base_symbol, quote_symbol):
            refs = self._store.snapshot()

        base = self._resolve_from(refs, base_symbol, current_time)
        quote = self._resolve_from(refs, quote_symbol, current_time)

        if quote.rate == 0:
            logger.warning("Cross-rate quote resolved to zero", base=base_symbol, quote=quote_symbol)
            raise DivisionByZeroError(base_symbol, quote_symbol)

        return ReferenceData(
            rate=(base.rate * self._settings.cross_rate_scale) // quote.rate,
            last_updated_base=base.last_update,
            last_updated_quote=quote.last_update,
        )

    def _needs_store(self, *symbols: str) -> bool:
        return any(symbol != self.anchor_symbol for symbol in symbols)

    def _anchor(self, current_time: int) -> ResolvedPair:
        return ResolvedPair(rate=self._settings.anchor_rate, last_update=current_time)

    def _resolve_from(self, refs: Mapping[str, RateRecord], symbol: str, current_time: int) -> ResolvedPair:
        if symbol == self.anchor_symbol:
            return self._anchor(current_time)

        record = refs.get(symbol)
        if record is None:
            logger.warning("Unknown symbol requested", symbol=symbol, error_code="UNKNOWN_SYMBOL")
            raise UnknownSymbolError(symbol)
        if not record.is_resolved:
            logger.warning("Reference data not resolved", symbol=symbol, error_code="REF_DATA_NOT_AVAILABLE")
            raise RefDataNotAvailableError(symbol)
        return ResolvedPair(rate=record.rate, last_update=record.resolve_time)


__all__ = ["Resolver"]
