"""Utility helpers shared across CLI commands."""

from __future__ import annotations

import json
import sys
from contextlib import ExitStack
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Sequence, TextIO

import typer

from stdref.core.config import StdRefConfig
from stdref.core.exceptions import DomainError, ErrorCode

from .constants import RESOLUTION_EXIT_CODE, STORAGE_EXIT_CODE, VALIDATION_EXIT_CODE
from .formatters import OutputFormatter, create_formatter

_EXIT_CODES: Mapping[ErrorCode, int] = {
    ErrorCode.VALIDATION: VALIDATION_EXIT_CODE,
    ErrorCode.MISMATCHED_BATCH_LENGTH: VALIDATION_EXIT_CODE,
    ErrorCode.UNKNOWN_SYMBOL: RESOLUTION_EXIT_CODE,
    ErrorCode.REF_DATA_NOT_AVAILABLE: RESOLUTION_EXIT_CODE,
    ErrorCode.DIVISION_BY_ZERO: RESOLUTION_EXIT_CODE,
    ErrorCode.UNAUTHORIZED: STORAGE_EXIT_CODE,
    ErrorCode.STATE_NOT_INITIALIZED: STORAGE_EXIT_CODE,
    ErrorCode.STORAGE: STORAGE_EXIT_CODE,
    ErrorCode.CONFIGURATION: VALIDATION_EXIT_CODE,
}


@dataclass(slots=True)
class CLIOptions:
    """Resolved options derived from the Typer context."""

    format: str = "table"
    output_path: Path | None = None
    no_color: bool = False
    db_path: Path | None = None
    sender: str | None = None
    config: StdRefConfig | None = None


def get_cli_options(ctx: typer.Context) -> CLIOptions:
    """Extract :class:`CLIOptions` from the Typer context object."""

    ctx.ensure_object(dict)
    data = ctx.obj or {}
    return CLIOptions(
        format=str(data.get("format", "table")),
        output_path=data.get("output_path"),
        no_color=bool(data.get("no_color", False)),
        db_path=data.get("db_path"),
        sender=data.get("sender"),
        config=data.get("config"),
    )


def prepare_output(ctx: typer.Context) -> tuple[OutputFormatter, TextIO, ExitStack, CLIOptions]:
    """Resolve formatter and writable stream for the current command."""

    options = get_cli_options(ctx)
    formatter = create_formatter(options.format, no_color=options.no_color)

    stack = ExitStack()
    stream: TextIO
    if options.output_path is not None:
        try:
            stream = stack.enter_context(open(options.output_path, "w", encoding="utf-8"))
        except OSError as exc:
            stack.close()
            emit_error(f"Unable to open '{options.output_path}': {exc}", "OUTPUT_WRITE_ERROR")
            raise typer.Exit(code=VALIDATION_EXIT_CODE) from exc
    else:
        stream = sys.stdout

    return formatter, stream, stack, options


def emit_error(message: str, code: str, *, details: Mapping[str, object] | None = None) -> None:
    """Print a structured error payload to stderr."""

    payload: dict[str, object] = {"code": code, "message": message}
    if details:
        payload["details"] = _sanitize_details(details)
    typer.echo(json.dumps(payload, ensure_ascii=False, default=str), err=True)


def exit_with_domain_error(error: DomainError) -> typer.Exit:
    """Report ``error`` on stderr and build the matching :class:`typer.Exit`."""

    emit_error(error.message, error.error_code, details=error.details)
    return typer.Exit(code=_EXIT_CODES.get(error.code, VALIDATION_EXIT_CODE))


def _sanitize_details(details: Mapping[str, object]) -> Mapping[str, object]:
    sanitized: dict[str, object] = {}
    for key, value in details.items():
        if isinstance(value, (str, int, float, bool)) or value is None:
            sanitized[key] = value
        elif isinstance(value, Mapping):
            sanitized[key] = _sanitize_details(value)
        elif isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray)):
            sanitized[key] = [str(item) for item in value]
        else:
            sanitized[key] = str(value)
    return sanitized


__all__ = ["CLIOptions", "get_cli_options", "prepare_output", "emit_error", "exit_with_domain_error"]
