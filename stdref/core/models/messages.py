"""Typed messages accepted by the oracle entry points."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ExecutionContext(BaseModel):
    """Per-invocation context supplied by the host.

    ``block_time`` is the resolution instant in nanoseconds; ``sender`` is the
    caller identity when the host provides one.
    """

    model_config = ConfigDict(frozen=True)

    block_time: int = Field(ge=0)
    sender: str | None = None


class InstantiateMsg(BaseModel):
    """实例化消息（无参数）."""


class RelayMsg(BaseModel):
    """Batch of rate updates as four positionally aligned arrays."""

    symbols: list[str] = Field(default_factory=list)
    rates: list[int] = Field(default_factory=list)
    resolve_times: list[int] = Field(default_factory=list)
    request_ids: list[int] = Field(default_factory=list)


class GetRefsQuery(BaseModel):
    """Query for the full stored mapping."""


class GetReferenceDataQuery(BaseModel):
    """Query for the cross-rate of ``base`` in ``quote``."""

    base: str
    quote: str


class ExecuteResponse(BaseModel):
    """Acknowledgement of a state-changing call."""

    action: str
    attributes: dict[str, Any] = Field(default_factory=dict)


ExecuteMsg = RelayMsg
QueryMsg = GetRefsQuery | GetReferenceDataQuery


__all__ = [
    "ExecutionContext",
    "InstantiateMsg",
    "RelayMsg",
    "GetRefsQuery",
    "GetReferenceDataQuery",
    "ExecuteResponse",
    "ExecuteMsg",
    "QueryMsg",
]
