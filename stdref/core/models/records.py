"""Reference data records and query results."""

from __future__ import annotations

from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, field_serializer

U64_MAX = 2**64 - 1

Uint64 = Annotated[int, Field(ge=0, le=U64_MAX, strict=True)]


class RateRecord(BaseModel):
    """单个交易对的最新中继数据.

    ``resolve_time == 0`` marks a record that has never been resolved.
    ``request_id`` is carried for traceability only.
    """

    model_config = ConfigDict(frozen=True)

    rate: Uint64
    resolve_time: Uint64
    request_id: Uint64

    @property
    def is_resolved(self) -> bool:
        return self.resolve_time > 0


class StoreState(BaseModel):
    """Persisted oracle state: every relayed symbol and its record."""

    refs: dict[str, RateRecord] = Field(default_factory=dict)


class ResolvedPair(BaseModel):
    """Rate and last update time of one side of a cross-rate."""

    model_config = ConfigDict(frozen=True)

    rate: int
    last_update: int


class ReferenceData(BaseModel):
    """Cross-rate of ``base`` denominated in ``quote``, scaled by 1e18."""

    model_config = ConfigDict(frozen=True)

    rate: int
    last_updated_base: int
    last_updated_quote: int

    @field_serializer("rate", "last_updated_base", "last_updated_quote", when_used="json")
    def serialize_big_int(self, value: int) -> str:
        """Serialize arbitrary-precision integers as decimal strings."""
        return str(value)


__all__ = [
    "U64_MAX",
    "Uint64",
    "RateRecord",
    "StoreState",
    "ResolvedPair",
    "ReferenceData",
]
