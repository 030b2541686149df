from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict

import pytest

from actlog.core.config import (
    DEFAULT_CONFIG,
    ConfigError,
    _deep_merge,
    default_config_path,
    expand_path,
    load_config,
    resolve_min_confidence,
    resolve_output_dir,
    save_config,
)


def test_deep_merge_nested_dicts() -> None:
    base = {"a": {"b": 1, "c": 2}, "x": 3}
    override = {"a": {"b": 9}, "y": 4}
    merged = _deep_merge(base, override)
    assert merged == {"a": {"b": 9, "c": 2}, "x": 3, "y": 4}
    assert base["a"]["b"] == 1


def test_expand_path_expands_home_and_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("ACTLOG_TMP_PATH", str(tmp_path))
    expanded = expand_path("$ACTLOG_TMP_PATH/config.toml")
    assert expanded == (tmp_path / "config.toml").resolve()


def test_default_config_path_uses_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    path = tmp_path / "custom.toml"
    monkeypatch.setenv("ACTLOG_CONFIG_FILE", str(path))
    assert default_config_path() == path.resolve()


def test_load_config_missing_file_returns_defaults(tmp_path: Path) -> None:
    cfg = load_config(tmp_path / "missing.toml")
    assert cfg["classification"]["min_confidence"] == 0.5
    assert cfg["classification"]["keywords"] == {}
    assert cfg["export"]["format"] == "json"


def test_load_config_from_json(tmp_path: Path) -> None:
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"classification": {"min_confidence": 0.7}}))
    cfg = load_config(path)
    assert cfg["classification"]["min_confidence"] == 0.7
    assert cfg["classification"]["keywords"] == {}


def test_load_config_from_toml(tmp_path: Path) -> None:
    path = tmp_path / "config.toml"
    path.write_text(
        """
[classification.keywords]
exercise = ["hiked", "rowed"]

[export]
format = "csv"
""".strip()
        + "\n"
    )
    cfg = load_config(path)
    assert cfg["classification"]["keywords"] == {"exercise": ["hiked", "rowed"]}
    assert cfg["classification"]["min_confidence"] == 0.5
    assert cfg["export"]["format"] == "csv"


def test_load_config_invalid_json_raises(tmp_path: Path) -> None:
    path = tmp_path / "broken.json"
    path.write_text("{broken")
    with pytest.raises(ConfigError):
        load_config(path)


def test_load_config_invalid_toml_raises(tmp_path: Path) -> None:
    path = tmp_path / "broken.toml"
    path.write_text("[classification\nmin_confidence = 3")
    with pytest.raises(ConfigError):
        load_config(path)


def test_load_config_non_table_root_raises(tmp_path: Path) -> None:
    path = tmp_path / "list.json"
    path.write_text("[1, 2]")
    with pytest.raises(ConfigError):
        load_config(path)


def test_save_config_json(tmp_path: Path) -> None:
    payload: Dict[str, Any] = {"classification": {"min_confidence": 0.6}}
    path = save_config(payload, tmp_path / "config.json")
    assert path.exists()
    assert json.loads(path.read_text())["classification"]["min_confidence"] == 0.6


def test_save_config_toml_and_reload(tmp_path: Path) -> None:
    payload: Dict[str, Any] = {
        "classification": {"min_confidence": 0.7, "keywords": {"exercise": ["hiked", "ran"]}},
    }
    path = save_config(payload, tmp_path / "nested" / "config.toml")
    assert path.exists()
    cfg = load_config(path)
    assert cfg["classification"]["min_confidence"] == 0.7
    assert cfg["classification"]["keywords"]["exercise"] == ["hiked", "ran"]


def test_save_default_config_round_trips(tmp_path: Path) -> None:
    path = save_config(DEFAULT_CONFIG, tmp_path / "config.toml")
    assert load_config(path) == load_config(tmp_path / "missing.toml")


def test_resolve_min_confidence_clamps_and_validates() -> None:
    assert resolve_min_confidence({}) == 0.5
    assert resolve_min_confidence({"classification": {"min_confidence": 1.7}}) == 1.0
    assert resolve_min_confidence({"classification": {"min_confidence": "0.25"}}) == 0.25
    with pytest.raises(ConfigError):
        resolve_min_confidence({"classification": {"min_confidence": "high"}})


def test_resolve_output_dir_prefers_explicit(tmp_path: Path) -> None:
    explicit = tmp_path / "exports"
    cfg = {"export": {"default_directory": "/tmp/ignored"}}
    assert resolve_output_dir(cfg, explicit=explicit) == explicit.resolve()


def test_resolve_output_dir_env_override(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("ACTLOG_OUTPUT_DIR", str(tmp_path / "from-env"))
    cfg = {"export": {"default_directory": "/tmp/ignored"}}
    assert resolve_output_dir(cfg) == (tmp_path / "from-env").resolve()


def test_resolve_output_dir_from_config(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.delenv("ACTLOG_OUTPUT_DIR", raising=False)
    cfg = {"export": {"default_directory": str(tmp_path / "logs")}}
    assert resolve_output_dir(cfg) == (tmp_path / "logs").resolve()


def test_load_config_undecodable_file_raises(tmp_path: Path) -> None:
    path = tmp_path / "config.toml"
    path.write_bytes(b"[classification]\nmin_confidence = 0.5\n# \xff\xfe\n")
    with pytest.raises(ConfigError):
        load_config(path)


@pytest.mark.parametrize(
    "content",
    [
        "classification = 0.7\n",
        'defaults = "pretty"\n',
        "export = [1, 2]\n",
        "[classification]\nkeywords = [\"ran\"]\n",
    ],
)
def test_load_config_non_table_sections_raise(tmp_path: Path, content: str) -> None:
    path = tmp_path / "config.toml"
    path.write_text(content)
    with pytest.raises(ConfigError):
        load_config(path)
