"""stdref - price-reference oracle store.

Accepts batched rate updates from a relayer and answers cross-rate queries
by combining two independently resolved rates.
"""

from stdref.core.config import StdRefConfig
from stdref.core.data.storage import DuckDBStateBackend, MemoryStateBackend
from stdref.core.exceptions import (
    DivisionByZeroError,
    DomainError,
    MismatchedBatchLengthError,
    RefDataNotAvailableError,
    UnknownSymbolError,
)
from stdref.core.models import (
    ExecutionContext,
    GetReferenceDataQuery,
    GetRefsQuery,
    InstantiateMsg,
    RateRecord,
    ReferenceData,
    RelayMsg,
)
from stdref.core.oracle import ReferenceOracle
from stdref.core.services.resolver import Resolver
from stdref.core.store import ReferenceStore

__version__ = "0.1.0"

__all__ = [
    "ReferenceOracle",
    "ReferenceStore",
    "Resolver",
    "StdRefConfig",
    "MemoryStateBackend",
    "DuckDBStateBackend",
    "RateRecord",
    "ReferenceData",
    "ExecutionContext",
    "InstantiateMsg",
    "RelayMsg",
    "GetRefsQuery",
    "GetReferenceDataQuery",
    "DomainError",
    "MismatchedBatchLengthError",
    "UnknownSymbolError",
    "RefDataNotAvailableError",
    "DivisionByZeroError",
]
