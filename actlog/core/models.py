"""Lightweight data models used across commands."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict


class ActivityType(str, Enum):
    """Closed set of activity categories."""

    WEIGHT = "weight"
    FOOD = "food"
    EXERCISE = "exercise"
    SLEEP = "sleep"
    MOOD = "mood"
    WATER = "water"
    ENERGY = "energy"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class ActivityClassification:
    """Typed record produced for one free-text entry."""

    raw_text: str
    type: ActivityType
    confidence: float
    extracted: Dict[str, Any] = field(default_factory=dict)

    def as_dict(self) -> Dict[str, Any]:
        return {
            "rawText": self.raw_text,
            "type": self.type.value,
            "confidence": self.confidence,
            "extracted": dict(self.extracted),
        }
