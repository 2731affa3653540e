"""Concrete errors raised by the reference store, resolver and oracle."""

from __future__ import annotations

from typing import Any, Mapping

from stdref.core.exceptions.codes import ErrorCode
from stdref.core.exceptions.domain import DomainError


class MismatchedBatchLengthError(DomainError):
    """Relay batch arrays are not positionally aligned."""

    def __init__(self, lengths: Mapping[str, int]) -> None:
        super().__init__(
            "Relay batch arrays have different lengths",
            ErrorCode.MISMATCHED_BATCH_LENGTH,
            layer="store",
            context={"lengths": dict(lengths)},
        )
        self.lengths = dict(lengths)


class BatchValidationError(DomainError):
    """A relay batch entry carries a value outside the unsigned 64-bit range."""

    def __init__(self, message: str, index: int, errors: list[dict[str, Any]] | None = None) -> None:
        super().__init__(
            message,
            ErrorCode.VALIDATION,
            layer="store",
            context={"index": index, "validation_errors": errors or []},
        )
        self.index = index


class UnknownSymbolError(DomainError):
    """Symbol has never been relayed."""

    def __init__(self, symbol: str) -> None:
        super().__init__(
            f"Unknown symbol '{symbol}'",
            ErrorCode.UNKNOWN_SYMBOL,
            layer="resolver",
            context={"symbol": symbol},
        )
        self.symbol = symbol


class RefDataNotAvailableError(DomainError):
    """Symbol is registered but has never been resolved."""

    def __init__(self, symbol: str) -> None:
        super().__init__(
            f"Reference data for '{symbol}' is not available",
            ErrorCode.REF_DATA_NOT_AVAILABLE,
            layer="resolver",
            context={"symbol": symbol},
        )
        self.symbol = symbol


class DivisionByZeroError(DomainError):
    """Quote side of a cross-rate resolved to a zero rate."""

    def __init__(self, base: str, quote: str) -> None:
        super().__init__(
            f"Quote rate for '{quote}' is zero",
            ErrorCode.DIVISION_BY_ZERO,
            layer="resolver",
            context={"base": base, "quote": quote},
        )
        self.base = base
        self.quote = quote


class UnauthorizedRelayerError(DomainError):
    """Relay submitted by a sender outside the configured relayer set."""

    def __init__(self, sender: str | None) -> None:
        super().__init__(
            f"Sender '{sender}' is not an allowed relayer",
            ErrorCode.UNAUTHORIZED,
            layer="oracle",
            context={"sender": sender},
        )
        self.sender = sender


class StateNotInitializedError(DomainError):
    """No persisted state exists; the oracle was never instantiated."""

    def __init__(self, backend: str) -> None:
        super().__init__(
            "Oracle state has not been initialized",
            ErrorCode.STATE_NOT_INITIALIZED,
            layer="storage",
            context={"backend": backend},
        )


class StorageError(DomainError):
    """Persisted state could not be read or written."""

    def __init__(self, message: str, backend: str, context: Mapping[str, Any] | None = None) -> None:
        super().__init__(
            message,
            ErrorCode.STORAGE,
            layer="storage",
            context={"backend": backend, **dict(context or {})},
        )


class ConfigurationError(DomainError):
    """Configuration names an unsupported option."""

    def __init__(self, message: str, setting: str, value: Any) -> None:
        super().__init__(
            message,
            ErrorCode.CONFIGURATION,
            layer="config",
            context={"setting": setting, "value": value},
        )
        self.setting = setting


__all__ = [
    "ConfigurationError",
    "MismatchedBatchLengthError",
    "BatchValidationError",
    "UnknownSymbolError",
    "RefDataNotAvailableError",
    "DivisionByZeroError",
    "UnauthorizedRelayerError",
    "StateNotInitializedError",
    "StorageError",
]
