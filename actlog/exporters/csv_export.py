"""CSV export helpers."""

from __future__ import annotations

import csv
from pathlib import Path
from typing import Iterable

from actlog.core.models import ActivityClassification
from actlog.utils.formatting import extracted_json

CSV_COLUMNS = ["rawText", "type", "confidence", "extracted"]


def write_csv(path: Path, results: Iterable[ActivityClassification]) -> Path:
    """Write one row per classification and return path."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", newline="", encoding="utf-8") as handle:
        writer = csv.writer(handle)
        writer.writerow(CSV_COLUMNS)
        for result in results:
            writer.writerow(
                [
                    result.raw_text,
                    result.type.value,
                    result.confidence,
                    extracted_json(result.extracted),
                ]
            )
    return path
