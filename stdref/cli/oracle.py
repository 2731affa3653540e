"""Oracle CLI commands: init, relay, refs and rate."""

from __future__ import annotations

import json
import time
from dataclasses import replace
from pathlib import Path
from typing import Mapping

import typer
from pydantic import ValidationError

from stdref.core.config import ConfigManager, StorageSettings
from stdref.core.exceptions import DomainError
from stdref.core.models import (
    ExecutionContext,
    GetReferenceDataQuery,
    GetRefsQuery,
    InstantiateMsg,
    RateRecord,
    RelayMsg,
)
from stdref.core.oracle import ReferenceOracle

from .constants import VALIDATION_EXIT_CODE
from .utils import CLIOptions, emit_error, exit_with_domain_error, get_cli_options, prepare_output

ACK_COLUMNS = ["action", "count"]
REFS_COLUMNS = ["symbol", "rate", "resolve_time", "request_id"]
RATE_COLUMNS = ["base", "quote", "rate", "last_updated_base", "last_updated_quote"]


def register(app: typer.Typer) -> None:
    """Register oracle commands on the root CLI application."""

    app.command("init")(init_command)
    app.command("relay")(relay_command)
    app.command("refs")(refs_command)
    app.command("rate")(rate_command)


def get_oracle(options: CLIOptions) -> ReferenceOracle:
    """Factory hook returning a :class:`ReferenceOracle` for the CLI options."""

    config = options.config or ConfigManager().get_config()
    if options.db_path is not None:
        config = replace(config, storage=StorageSettings(backend="duckdb", path=str(options.db_path)))
    return ReferenceOracle.from_config(config)


def init_command(ctx: typer.Context) -> None:
    """Create an empty reference store, replacing any existing state."""

    options = get_cli_options(ctx)
    oracle = _open_oracle(options)
    try:
        response = oracle.instantiate(_context(options), InstantiateMsg())
    except DomainError as error:
        raise exit_with_domain_error(error) from error
    finally:
        oracle.close()

    _render(ctx, [{"action": response.action, "count": 0}], ACK_COLUMNS)


def relay_command(
    ctx: typer.Context,
    entries: list[str] = typer.Option(
        [],
        "--entry",
        "-e",
        help="Relay entry as SYMBOL:RATE:RESOLVE_TIME:REQUEST_ID (repeatable).",
    ),
    batch_file: Path | None = typer.Option(
        None,
        "--file",
        help="JSON file with symbols, rates, resolve_times and request_ids arrays.",
    ),
) -> None:
    """Apply a relay batch atomically."""

    if entries and batch_file is not None:
        raise typer.BadParameter("Use either --entry or --file, not both.", param_hint="--file")
    if not entries and batch_file is None:
        raise typer.BadParameter("Provide at least one --entry or a --file.", param_hint="--entry")

    msg = _load_batch_file(batch_file) if batch_file is not None else _parse_entries(entries)

    options = get_cli_options(ctx)
    oracle = _open_oracle(options)
    try:
        response = oracle.execute(_context(options), msg)
    except DomainError as error:
        raise exit_with_domain_error(error) from error
    finally:
        oracle.close()

    _render(ctx, [{"action": response.action, **response.attributes}], ACK_COLUMNS)


def refs_command(ctx: typer.Context) -> None:
    """List every stored reference record."""

    options = get_cli_options(ctx)
    oracle = _open_oracle(options)
    try:
        state = oracle.query(_context(options), GetRefsQuery())
    except DomainError as error:
        raise exit_with_domain_error(error) from error
    finally:
        oracle.close()

    rows = [_record_to_row(symbol, record) for symbol, record in sorted(state.refs.items())]
    _render(ctx, rows, REFS_COLUMNS)


def rate_command(
    ctx: typer.Context,
    base: str = typer.Argument(..., help="Base symbol."),
    quote: str = typer.Argument(..., help="Quote symbol."),
    at: int | None = typer.Option(
        None,
        "--time",
        min=0,
        help="Resolution time in nanoseconds (defaults to now).",
    ),
) -> None:
    """Compute the cross-rate of BASE in QUOTE scaled by 1e18."""

    options = get_cli_options(ctx)
    block_time = at if at is not None else time.time_ns()
    oracle = _open_oracle(options)
    try:
        data = oracle.query(
            _context(options, block_time=block_time),
            GetReferenceDataQuery(base=base, quote=quote),
        )
    except DomainError as error:
        raise exit_with_domain_error(error) from error
    finally:
        oracle.close()

    row = {"base": base, "quote": quote, **data.model_dump()}
    _render(ctx, [row], RATE_COLUMNS)


def _open_oracle(options: CLIOptions) -> ReferenceOracle:
    try:
        return get_oracle(options)
    except DomainError as error:
        raise exit_with_domain_error(error) from error


def _context(options: CLIOptions, *, block_time: int | None = None) -> ExecutionContext:
    return ExecutionContext(
        block_time=block_time if block_time is not None else time.time_ns(),
        sender=options.sender,
    )


def _parse_entries(entries: list[str]) -> RelayMsg:
    msg = RelayMsg()
    for raw in entries:
        parts = raw.split(":")
        if len(parts) != 4 or not parts[0]:
            raise typer.BadParameter(
                f"Invalid entry '{raw}'. Expected SYMBOL:RATE:RESOLVE_TIME:REQUEST_ID",
                param_hint="--entry",
            )
        symbol, rate, resolve_time, request_id = parts
        try:
            values = [int(rate), int(resolve_time), int(request_id)]
        except ValueError as exc:
            raise typer.BadParameter(f"Invalid integer in entry '{raw}'", param_hint="--entry") from exc
        msg.symbols.append(symbol)
        msg.rates.append(values[0])
        msg.resolve_times.append(values[1])
        msg.request_ids.append(values[2])
    return msg


def _load_batch_file(path: Path) -> RelayMsg:
    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
        return RelayMsg.model_validate(payload)
    except (OSError, UnicodeDecodeError, json.JSONDecodeError, ValidationError) as exc:
        emit_error(f"Unable to read relay batch from '{path}': {exc}", "INVALID_BATCH_FILE")
        raise typer.Exit(code=VALIDATION_EXIT_CODE) from exc


def _record_to_row(symbol: str, record: RateRecord) -> Mapping[str, object]:
    return {
        "symbol": symbol,
        "rate": record.rate,
        "resolve_time": record.resolve_time,
        "request_id": record.request_id,
    }


def _render(ctx: typer.Context, rows: list[Mapping[str, object]], columns: list[str]) -> None:
    formatter, stream, stack, _ = prepare_output(ctx)
    try:
        formatter.render(rows, stream=stream, columns=columns)
    finally:
        stack.close()


__all__ = [
    "register",
    "get_oracle",
    "init_command",
    "relay_command",
    "refs_command",
    "rate_command",
]
