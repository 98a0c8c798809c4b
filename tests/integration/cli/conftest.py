"""Fixtures for driving the aquaflow CLI end to end."""

from __future__ import annotations

import json
import os
from pathlib import Path

import pytest

from aquaflow.cli.__main__ import main


@pytest.fixture
def data_dir(tmp_path: Path, monkeypatch) -> Path:
    """Isolated data directory, timezone and working directory."""
    for var in [k for k in os.environ if k.startswith(("AQUAFLOW_", "GEMINI_"))]:
        monkeypatch.delenv(var)

    data = tmp_path / "data"
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("AQUAFLOW_DATA_DIR", str(data))
    monkeypatch.setenv("AQUAFLOW_TZ", "America/New_York")
    monkeypatch.setenv("AQUAFLOW_LOG_LEVEL", "ERROR")
    return data


@pytest.fixture
def run_cli(data_dir, capsys):
    """Run a command with --json and return (exit_code, payload)."""

    def _run(*args: str) -> tuple[int, dict]:
        capsys.readouterr()
        code = main(["--json", *args])
        out = capsys.readouterr().out
        return code, json.loads(out) if out.strip() else {}

    return _run


@pytest.fixture
def run_text(data_dir, capsys):
    """Run a command in human mode and return (exit_code, stdout, stderr)."""

    def _run(*args: str) -> tuple[int, str, str]:
        capsys.readouterr()
        code = main(list(args))
        captured = capsys.readouterr()
        return code, captured.out, captured.err

    return _run
