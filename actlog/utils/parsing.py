"""Parsing helpers for batch activity input."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, List, Optional

import yaml


class InputError(ValueError):
    """Raised when a batch input file cannot be read."""


def _lines(text: str) -> List[str]:
    return [line.strip() for line in text.splitlines() if line.strip()]


def _entries_from_data(raw_data: Any) -> List[str]:
    if isinstance(raw_data, dict):
        raw_data = [raw_data]
    if not isinstance(raw_data, list):
        return []

    entries: List[str] = []
    for item in raw_data:
        if isinstance(item, dict):
            item = item.get("text")
        if isinstance(item, str) and item.strip():
            entries.append(item.strip())
    return entries


def load_entries(file_path: Optional[Path], read_stdin: bool, stdin_text: str = "") -> List[str]:
    """Load free-text entries from file or stdin text."""
    if file_path:
        try:
            text = file_path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise InputError(f"Cannot read {file_path}: {exc}") from exc

        suffix = file_path.suffix.lower()
        try:
            if suffix in {".yaml", ".yml"}:
                return _entries_from_data(yaml.safe_load(text))
            if suffix == ".json":
                return _entries_from_data(json.loads(text))
        except (json.JSONDecodeError, yaml.YAMLError) as exc:
            raise InputError(f"Invalid {suffix.lstrip('.').upper()} in {file_path}: {exc}") from exc
        return _lines(text)

    if not read_stdin:
        return []

    text = stdin_text.strip()
    if not text:
        return []
    try:
        raw_data = json.loads(text)
    except json.JSONDecodeError:
        try:
            raw_data = yaml.safe_load(text)
        except yaml.YAMLError:
            raw_data = None
    # Structured payloads without usable entries are read as plain lines.
    return _entries_from_data(raw_data) or _lines(text)
