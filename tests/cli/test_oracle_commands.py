from __future__ import annotations

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from stdref.cli import oracle as oracle_module
from stdref.cli.main import create_app
from stdref.core.data.storage import MemoryStateBackend
from stdref.core.oracle import ReferenceOracle


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def db_path(tmp_path: Path) -> Path:
    return tmp_path / "state.duckdb"


def _invoke(runner: CliRunner, db_path: Path, *args: str):
    app = create_app()
    return runner.invoke(app, ["--db", str(db_path), *args])


def _jsonl(output: str) -> list[dict[str, object]]:
    return [json.loads(line) for line in output.splitlines() if line.startswith("{") and "trace_id" not in line]


def test_init_then_refs_is_empty(runner: CliRunner, db_path: Path) -> None:
    result = _invoke(runner, db_path, "init")
    assert result.exit_code == 0, result.output

    result = _invoke(runner, db_path, "refs")
    assert result.exit_code == 0, result.output
    assert "No data available." in result.output


def test_relay_entries_and_list_refs(runner: CliRunner, db_path: Path) -> None:
    _invoke(runner, db_path, "init")

    result = _invoke(runner, db_path, "relay", "--entry", "ETH:1:2:3", "--entry", "BAND:100:200:300")
    assert result.exit_code == 0, result.output

    result = _invoke(runner, db_path, "--format", "jsonl", "refs")
    assert result.exit_code == 0, result.output
    assert _jsonl(result.output) == [
        {"symbol": "BAND", "rate": 100, "resolve_time": 200, "request_id": 300},
        {"symbol": "ETH", "rate": 1, "resolve_time": 2, "request_id": 3},
    ]


def test_relay_file_and_rate(runner: CliRunner, db_path: Path, tmp_path: Path) -> None:
    batch = tmp_path / "batch.json"
    batch.write_text(
        json.dumps(
            {
                "symbols": ["MATIC"],
                "rates": [112],
                "resolve_times": [1625108298000000000],
                "request_ids": [124],
            }
        ),
        encoding="utf-8",
    )
    _invoke(runner, db_path, "init")
    result = _invoke(runner, db_path, "relay", "--file", str(batch))
    assert result.exit_code == 0, result.output

    result = _invoke(
        runner, db_path, "--format", "jsonl", "rate", "USD", "MATIC", "--time", "1571797419879305533"
    )

    assert result.exit_code == 0, result.output
    assert _jsonl(result.output) == [
        {
            "base": "USD",
            "quote": "MATIC",
            "rate": 8928571428571428571428571,
            "last_updated_base": 1571797419879305533,
            "last_updated_quote": 1625108298000000000,
        }
    ]


def test_rate_table_output(runner: CliRunner, db_path: Path) -> None:
    _invoke(runner, db_path, "init")
    _invoke(runner, db_path, "relay", "--entry", "ETH:2000000000000:5:1")

    result = _invoke(runner, db_path, "--no-color", "rate", "ETH", "USD", "--time", "7")

    assert result.exit_code == 0, result.output
    assert "2000000000000000000000" in result.output
    assert "last_updated_base" in result.output


def test_mismatched_batch_file_exits_with_validation_code(
    runner: CliRunner, db_path: Path, tmp_path: Path
) -> None:
    batch = tmp_path / "batch.json"
    batch.write_text(
        json.dumps({"symbols": ["ETH", "BTC"], "rates": [1], "resolve_times": [2], "request_ids": [3]}),
        encoding="utf-8",
    )
    _invoke(runner, db_path, "init")

    result = _invoke(runner, db_path, "relay", "--file", str(batch))

    assert result.exit_code == 10
    assert "MISMATCHED_BATCH_LENGTH" in result.output


def test_unknown_symbol_exits_with_resolution_code(runner: CliRunner, db_path: Path) -> None:
    _invoke(runner, db_path, "init")

    result = _invoke(runner, db_path, "rate", "USD", "DOGE", "--time", "1")

    assert result.exit_code == 11
    assert "UNKNOWN_SYMBOL" in result.output
    assert "DOGE" in result.output


def test_refs_before_init_reports_storage_error(runner: CliRunner, db_path: Path) -> None:
    result = _invoke(runner, db_path, "refs")

    assert result.exit_code == 12
    assert "STATE_NOT_INITIALIZED" in result.output


def test_invalid_entry_is_bad_parameter(runner: CliRunner, db_path: Path) -> None:
    result = _invoke(runner, db_path, "relay", "--entry", "ETH:1:2")

    assert result.exit_code == 2


def test_relay_requires_entries_or_file(runner: CliRunner, db_path: Path) -> None:
    result = _invoke(runner, db_path, "relay")

    assert result.exit_code == 2


def test_invalid_format_is_rejected(runner: CliRunner, db_path: Path) -> None:
    result = _invoke(runner, db_path, "--format", "xml", "refs")

    assert result.exit_code == 2


def test_sender_is_forwarded_to_oracle(
    runner: CliRunner, monkeypatch: pytest.MonkeyPatch
) -> None:
    from stdref.core.config import OracleSettings

    backend = MemoryStateBackend()
    oracle = ReferenceOracle(backend, OracleSettings(allowed_relayers=["band"]))
    monkeypatch.setattr(oracle_module, "get_oracle", lambda options: oracle)

    app = create_app()
    assert runner.invoke(app, ["init"]).exit_code == 0

    denied = runner.invoke(app, ["relay", "--entry", "ETH:1:2:3"])
    assert denied.exit_code == 12
    assert "UNAUTHORIZED" in denied.output

    allowed = runner.invoke(app, ["--sender", "band", "relay", "--entry", "ETH:1:2:3"])
    assert allowed.exit_code == 0, allowed.output
    assert oracle.store.get("ETH") is not None


def test_output_file(runner: CliRunner, db_path: Path, tmp_path: Path) -> None:
    out = tmp_path / "refs.jsonl"
    _invoke(runner, db_path, "init")
    _invoke(runner, db_path, "relay", "--entry", "ETH:1:2:3")

    result = _invoke(runner, db_path, "--format", "jsonl", "--output", str(out), "refs")

    assert result.exit_code == 0, result.output
    assert _jsonl(out.read_text(encoding="utf-8")) == [
        {"symbol": "ETH", "rate": 1, "resolve_time": 2, "request_id": 3}
    ]


def test_logging_file_from_environment(
    runner: CliRunner, db_path: Path, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    log_file = tmp_path / "logs" / "stdref.log"
    monkeypatch.setenv("STDREF_LOGGING_LEVEL", "DEBUG")
    monkeypatch.setenv("STDREF_LOGGING_FILE", str(log_file))

    _invoke(runner, db_path, "init")
    result = _invoke(runner, db_path, "relay", "--entry", "ETH:1:2:3")

    assert result.exit_code == 0, result.output
    messages = [json.loads(line)["message"] for line in log_file.read_text(encoding="utf-8").splitlines()]
    assert "Applied relay batch" in messages


def test_log_level_option_overrides_config(
    runner: CliRunner, db_path: Path, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    log_file = tmp_path / "stdref.log"
    monkeypatch.setenv("STDREF_LOGGING_LEVEL", "DEBUG")
    monkeypatch.setenv("STDREF_LOGGING_FILE", str(log_file))

    _invoke(runner, db_path, "--log-level", "ERROR", "init")
    result = _invoke(runner, db_path, "--log-level", "ERROR", "relay", "--entry", "ETH:1:2:3")

    assert result.exit_code == 0, result.output
    assert not log_file.exists() or "Applied relay batch" not in log_file.read_text(encoding="utf-8")


def test_unknown_log_level_is_bad_parameter(runner: CliRunner, db_path: Path) -> None:
    result = _invoke(runner, db_path, "--log-level", "LOUD", "refs")

    assert result.exit_code == 2
    assert "LOUD" in result.output


def test_unsupported_backend_exits_with_configuration_error(
    runner: CliRunner, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setenv("STDREF_STORAGE_BACKEND", "redis")

    result = runner.invoke(create_app(), ["init"])

    assert result.exit_code == 10
    assert "CONFIGURATION" in result.output
    assert "redis" in result.output


def test_misspelled_config_key_falls_back_to_defaults(
    runner: CliRunner, db_path: Path, tmp_path: Path
) -> None:
    config_dir = tmp_path / "home" / ".stdref"
    config_dir.mkdir(parents=True)
    (config_dir / "config.toml").write_text('[oracle]\nanchor = "EUR"\n', encoding="utf-8")

    result = _invoke(runner, db_path, "init")
    assert result.exit_code == 0, result.output

    result = _invoke(runner, db_path, "--format", "jsonl", "rate", "USD", "USD", "--time", "1")
    assert result.exit_code == 0, result.output
    assert _jsonl(result.output)[0]["rate"] == 10**18


def test_non_utf8_batch_file_exits_with_validation_code(
    runner: CliRunner, db_path: Path, tmp_path: Path
) -> None:
    batch = tmp_path / "batch.json"
    batch.write_bytes(b"\xff\xfe\x00{")
    _invoke(runner, db_path, "init")

    result = _invoke(runner, db_path, "relay", "--file", str(batch))

    assert result.exit_code == 10
    assert "INVALID_BATCH_FILE" in result.output
