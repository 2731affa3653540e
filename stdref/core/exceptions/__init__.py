"""Exception handling module."""

from stdref.core.exceptions.base import StdRefError
from stdref.core.exceptions.codes import ErrorCode
from stdref.core.exceptions.domain import DomainError
from stdref.core.exceptions.oracle import (
    BatchValidationError,
    ConfigurationError,
    DivisionByZeroError,
    MismatchedBatchLengthError,
    RefDataNotAvailableError,
    StateNotInitializedError,
    StorageError,
    UnauthorizedRelayerError,
    UnknownSymbolError,
)

__all__ = [
    "StdRefError",
    "DomainError",
    "ErrorCode",
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
