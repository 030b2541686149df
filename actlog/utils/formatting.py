"""Formatting helpers used by exports and console output."""

from __future__ import annotations

import json
from typing import Any, Dict

from actlog.core.models import ActivityClassification, ActivityType


def format_number(value: Any) -> str:
    """Render numbers without trailing zeros."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return str(value)
    if isinstance(value, float):
        return f"{value:g}"
    return str(value)


def format_confidence(value: float) -> str:
    """Format a 0-1 score as a whole percentage."""
    return f"{round(float(value) * 100)}%"


def format_extracted(extracted: Dict[str, Any]) -> str:
    """Render extracted fields as `key=value` pairs."""
    if not extracted:
        return "-"
    parts = []
    for key, value in extracted.items():
        if value is None:
            continue
        if isinstance(value, list):
            rendered = ",".join(str(item) for item in value) or "-"
        else:
            rendered = format_number(value)
        parts.append(f"{key}={rendered}")
    return " ".join(parts) or "-"


def extracted_json(extracted: Dict[str, Any]) -> str:
    """Compact JSON for tabular exports."""
    return json.dumps(extracted, separators=(",", ":"), sort_keys=True)


def _confidence_prefix(confidence: float) -> str:
    if confidence >= 0.9:
        return "Got it!"
    if confidence >= 0.7:
        return "Logged!"
    return "Recorded (let me know if I misunderstood)"


def _detail(result: ActivityClassification) -> str:
    data = result.extracted

    if result.type is ActivityType.WEIGHT:
        unit = f" {data['unit']}" if data.get("unit") else ""
        return f"Weight updated to {format_number(data.get('value'))}{unit}."

    if result.type is ActivityType.WATER:
        return f"{format_number(data.get('amount'))} {data.get('unit')} of water logged."

    if result.type is ActivityType.EXERCISE:
        details = []
        if "distanceValue" in data:
            details.append(f"{format_number(data['distanceValue'])} {data.get('distanceUnit', '')}".strip())
        if "durationMinutes" in data:
            details.append(f"{format_number(data['durationMinutes'])} min")
        return f"Workout logged ({', '.join(details)})." if details else "Workout logged."

    if result.type is ActivityType.FOOD:
        meal = data.get("meal")
        return f"{meal.capitalize()} recorded." if meal else "Meal recorded."

    if result.type is ActivityType.SLEEP:
        if "hours" in data:
            return f"{format_number(data['hours'])} hours of sleep logged."
        return "Sleep logged."

    if result.type is ActivityType.ENERGY:
        if "level" in data:
            return f"Energy {format_number(data['level'])}/10 noted."
        return "Energy noted."

    if result.type is ActivityType.MOOD:
        return f"Mood noted ({data.get('mood', 'okay')})."

    return "Activity logged."


def confirmation_message(result: ActivityClassification) -> str:
    """Build the short acknowledgement shown after logging an entry."""
    if result.type is ActivityType.UNKNOWN:
        return (
            "Sorry, I couldn't tell what that was. "
            'Try something like "ran 5k", "weight 175" or "slept 8 hours".'
        )
    return f"{_confidence_prefix(result.confidence)} {_detail(result)}"
