"""Standardised error codes shared across the oracle layers."""

from __future__ import annotations

from enum import Enum


class ErrorCode(str, Enum):
    """错误代码枚举."""

    GENERAL_ERROR = "GENERAL_ERROR"
    VALIDATION = "VALIDATION"
    MISMATCHED_BATCH_LENGTH = "MISMATCHED_BATCH_LENGTH"
    UNKNOWN_SYMBOL = "UNKNOWN_SYMBOL"
    REF_DATA_NOT_AVAILABLE = "REF_DATA_NOT_AVAILABLE"
    DIVISION_BY_ZERO = "DIVISION_BY_ZERO"
    UNAUTHORIZED = "UNAUTHORIZED"
    STATE_NOT_INITIALIZED = "STATE_NOT_INITIALIZED"
    STORAGE = "STORAGE"
    CONFIGURATION = "CONFIGURATION"


__all__ = ["ErrorCode"]
