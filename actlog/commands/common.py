"""Shared command helpers."""

from __future__ import annotations

import json
from collections import Counter
from typing import Any, Dict, Iterable, List, Optional

import typer

from actlog.core.classify import classify, normalize_text
from actlog.core.models import ActivityClassification, ActivityType
from actlog.core.state import CLIState
from actlog.utils.formatting import confirmation_message

VALID_TYPES = {activity_type.value for activity_type in ActivityType}


def get_state(ctx: typer.Context) -> CLIState:
    """Extract validated CLI state from Typer context."""
    state = ctx.obj
    if not isinstance(state, CLIState):
        raise typer.Exit(code=2)
    return state


def print_json_payload(state: CLIState, payload: Any) -> None:
    """Print JSON payload with plain-mode fallback for piping."""
    if state.plain_output:
        typer.echo(json.dumps(payload, separators=(",", ":")))
        return
    state.console.print_json(data=payload)


def needs_clarification(result: ActivityClassification, threshold: float) -> bool:
    """Unknown or low-confidence entries should be confirmed with the user."""
    return result.type is ActivityType.UNKNOWN or result.confidence < threshold


def classification_payload(result: ActivityClassification, threshold: float) -> Dict[str, Any]:
    payload = result.as_dict()
    payload["message"] = confirmation_message(result)
    payload["needsClarification"] = needs_clarification(result, threshold)
    return payload


def classify_entries(
    state: CLIState,
    texts: Iterable[str],
    type_filter: Optional[str] = None,
) -> List[ActivityClassification]:
    """Classify entries with the configured rules and optional type filter."""
    if type_filter and type_filter not in VALID_TYPES:
        raise typer.BadParameter(f"--type must be one of: {', '.join(sorted(VALID_TYPES))}")

    results: List[ActivityClassification] = []
    for text in texts:
        result = classify(text, rules=state.rules)
        state.debug(f"{normalize_text(text)!r} -> {result.type.value} ({result.confidence})")
        if type_filter and result.type.value != type_filter:
            continue
        results.append(result)
    return results


def summarize(results: List[ActivityClassification]) -> Dict[str, Any]:
    by_type = Counter(result.type.value for result in results)
    total = len(results)
    average = sum(result.confidence for result in results) / total if total else 0.0
    return {
        "total": total,
        "by_type": dict(by_type),
        "unknown": by_type.get(ActivityType.UNKNOWN.value, 0),
        "average_confidence": round(average, 3),
    }
