"""Host-facing entry points of the reference oracle.

The host invokes ``instantiate``, ``execute`` and ``query`` once per call,
supplying an :class:`ExecutionContext`. Each call runs inside its own
logging context so every event carries a trace id and the operation name.
"""

from __future__ import annotations

from stdref.core.config.settings import OracleSettings, StdRefConfig
from stdref.core.data.storage import StateBackend, create_backend
from stdref.core.exceptions.oracle import UnauthorizedRelayerError
from stdref.core.logging import get_logger, log_context
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
from stdref.core.models.records import ReferenceData, StoreState
from stdref.core.services.resolver import Resolver
from stdref.core.store import ReferenceStore

logger = get_logger(__name__)


class ReferenceOracle:
    """Dispatches oracle messages to the store and resolver."""

    def __init__(self, backend: StateBackend, settings: OracleSettings | None = None) -> None:
        self.settings = settings or OracleSettings()
        self.store = ReferenceStore(backend)
        self.resolver = Resolver(self.store, self.settings)

    @classmethod
    def from_config(cls, config: StdRefConfig) -> "ReferenceOracle":
        """Build an oracle with the backend named in ``config.storage``."""

        return cls(create_backend(config.storage), config.oracle)

    def close(self) -> None:
        self.store.backend.close()

    def instantiate(self, ctx: ExecutionContext, msg: InstantiateMsg | None = None) -> ExecuteResponse:
        with log_context(operation="instantiate", sender=ctx.sender):
            self.store.initialize()
            return ExecuteResponse(action="instantiate")

    def execute(self, ctx: ExecutionContext, msg: ExecuteMsg) -> ExecuteResponse:
        with log_context(operation="execute", sender=ctx.sender):
            if isinstance(msg, RelayMsg):
                return self._relay(ctx, msg)
            raise TypeError(f"Unsupported execute message: {type(msg).__name__}")

    def query(self, ctx: ExecutionContext, msg: QueryMsg) -> StoreState | ReferenceData:
        with log_context(operation="query", sender=ctx.sender):
            if isinstance(msg, GetRefsQuery):
                return self.get_refs()
            if isinstance(msg, GetReferenceDataQuery):
                return self.get_reference_data(ctx, msg.base, msg.quote)
            raise TypeError(f"Unsupported query message: {type(msg).__name__}")

    def get_refs(self) -> StoreState:
        """Full snapshot of every stored record."""

        return StoreState(refs=self.store.snapshot())

    def get_reference_data(self, ctx: ExecutionContext, base: str, quote: str) -> ReferenceData:
        """Cross-rate of ``base`` in ``quote`` at the context's block time."""

        return self.resolver.cross_rate(base, quote, ctx.block_time)

    def _relay(self, ctx: ExecutionContext, msg: RelayMsg) -> ExecuteResponse:
        allowed = self.settings.allowed_relayers
        if allowed and ctx.sender not in allowed:
            logger.warning("Relay rejected for unauthorized sender", error_code="UNAUTHORIZED")
            raise UnauthorizedRelayerError(ctx.sender)

        count = self.store.apply_batch(msg.symbols, msg.rates, msg.resolve_times, msg.request_ids)
        return ExecuteResponse(action="relay", attributes={"count": count})


__all__ = ["ReferenceOracle"]
