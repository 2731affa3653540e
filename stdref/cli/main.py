"""Main entry point for the stdref command line interface."""

from __future__ import annotations

import sys
from pathlib import Path

import typer

from stdref.core.config import ConfigManager, LoggingSettings
from stdref.core.logging import configure_logging

from .formatters import create_formatter
from .oracle import register as register_oracle_commands


def create_app() -> typer.Typer:
    """Create a Typer application instance for stdref."""

    app = typer.Typer(add_completion=False, help="stdref reference oracle command line interface")

    @app.callback()
    def main(
        ctx: typer.Context,
        format: str = typer.Option(
            "table",
            "--format",
            "-f",
            help="Output format (table or jsonl).",
            show_default=True,
        ),
        output: Path | None = typer.Option(
            None,
            "--output",
            "-o",
            help="Write output to a file instead of stdout.",
        ),
        db: Path | None = typer.Option(
            None,
            "--db",
            help="DuckDB state file (overrides the configured storage).",
        ),
        sender: str | None = typer.Option(
            None,
            "--sender",
            help="Caller identity passed to the oracle.",
        ),
        log_level: str | None = typer.Option(
            None,
            "--log-level",
            help="Logging level for structured logs (overrides the configured level).",
        ),
        no_color: bool = typer.Option(
            False,
            "--no-color",
            help="Disable colorized output for table format.",
        ),
    ) -> None:
        ctx.ensure_object(dict)
        config = ConfigManager().get_config()
        normalized_format = format.strip().lower()
        try:
            create_formatter(normalized_format, no_color=no_color)
        except ValueError as exc:
            raise typer.BadParameter(str(exc), param_hint="--format") from exc

        ctx.obj.update(
            {
                "format": normalized_format,
                "output_path": output,
                "db_path": db,
                "sender": sender,
                "no_color": no_color,
                "config": config,
            }
        )
        _configure_logging(config.logging, log_level)

    register_oracle_commands(app)
    return app


def _configure_logging(settings: LoggingSettings, level_override: str | None) -> None:
    level = (level_override or settings.level).upper()
    try:
        configure_logging(
            level,
            console_stream=sys.stderr,
            file_output=bool(settings.file),
            file_path=settings.file,
        )
    except ValueError as exc:
        raise typer.BadParameter(f"Unknown logging level '{level}'", param_hint="--log-level") from exc


app = create_app()
