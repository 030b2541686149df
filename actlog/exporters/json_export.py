"""JSON export helpers."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, Iterable

from actlog.core.models import ActivityClassification


def export_payload(results: Iterable[ActivityClassification], summary: Dict[str, Any]) -> Dict[str, Any]:
    return {"entries": [result.as_dict() for result in results], "summary": summary}


def write_json(path: Path, results: Iterable[ActivityClassification], summary: Dict[str, Any]) -> Path:
    """Write classified entries and their summary as indented JSON."""
    path.parent.mkdir(parents=True, exist_ok=True)
    payload = export_payload(results, summary)
    path.write_text(json.dumps(payload, indent=2, ensure_ascii=False) + "\n", encoding="utf-8")
    return path
