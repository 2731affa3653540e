"""Data models for the reference oracle."""

from stdref.core.models.messages import (
    ExecuteMsg,
    ExecuteResponse,
    ExecutionContext,
    GetReferenceDataQuery,
    GetRefsQuery,
    InstantiateMsg,
    QueryMsg,
    RelayMsg,
)
from stdref.core.models.records import (
    U64_MAX,
    RateRecord,
    ReferenceData,
    ResolvedPair,
    StoreState,
)

__all__ = [
    "U64_MAX",
    "RateRecord",
    "StoreState",
    "ResolvedPair",
    "ReferenceData",
    "ExecutionContext",
    "InstantiateMsg",
    "RelayMsg",
    "GetRefsQuery",
    "GetReferenceDataQuery",
    "ExecuteResponse",
    "ExecuteMsg",
    "QueryMsg",
]
