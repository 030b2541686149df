from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List, Optional

import pytest
from rich.console import Console
from typer.testing import CliRunner

from actlog.core.classify import DEFAULT_RULES
from actlog.core.config import load_config
from actlog.core.state import CLIState


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Path:
    path = tmp_path / "config" / "config.toml"
    monkeypatch.setenv("ACTLOG_CONFIG_FILE", str(path))
    monkeypatch.setenv("ACTLOG_OUTPUT_DIR", str(tmp_path / "exports"))
    return path


@pytest.fixture()
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture()
def sample_entries() -> List[str]:
    return [
        "weight 175",
        "ran 5k in 25 minutes",
        "had eggs for breakfast",
        "slept 8 hours",
        "drank 64 oz water",
        "asdkjashdkjh",
    ]


@pytest.fixture()
def make_state(tmp_path: Path):
    def _make(
        config: Optional[Dict[str, Any]] = None,
        verbose: bool = False,
        plain_output: bool = True,
    ) -> CLIState:
        return CLIState(
            json_output=False,
            plain_output=plain_output,
            verbose=verbose,
            quiet=False,
            config_path=tmp_path / "config.toml",
            config=config or load_config(tmp_path / "missing.toml"),
            console=Console(record=True, log_time=False, log_path=False),
            rules=DEFAULT_RULES,
            min_confidence=0.5,
        )

    return _make


@pytest.fixture()
def write_temp_json(tmp_path: Path):
    def _write(name: str, payload: Any) -> Path:
        path = tmp_path / name
        path.write_text(json.dumps(payload, indent=2) + "\n")
        return path

    return _write


@pytest.fixture()
def write_temp_text(tmp_path: Path):
    def _write(name: str, content: str) -> Path:
        path = tmp_path / name
        path.write_text(content.strip() + "\n")
        return path

    return _write
