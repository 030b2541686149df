"""Activity text classification utilities."""

from __future__ import annotations

import re
from functools import partial
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple, Union

from actlog.core.constants import (
    CONFIDENCE,
    DEFAULT_KEYWORDS,
    DEFAULT_MOOD,
    DISTANCE_UNITS,
    DURATION_HOUR_UNITS,
    DURATION_MINUTE_UNITS,
    FOOD_VERBS,
    HYDRATION_CUES,
    MOOD_LEVELS,
    NEGATABLE_MOOD_LEVELS,
    NEGATED_MOOD,
    NEGATIONS,
    NUMBER_PATTERN,
    WATER_UNITS,
    WATER_VERBS,
    WEIGHT_LABELS,
    WEIGHT_UNITS,
)
from actlog.core.models import ActivityClassification, ActivityType

Predicate = Callable[[str], Optional[float]]
Extractor = Callable[[str], Dict[str, Any]]
Rule = Tuple[ActivityType, Predicate, Extractor]


def _alternation(words: Iterable[str]) -> str:
    # Longest first so "km" wins over "k" and "weighed" over "weigh".
    unique = sorted(set(words), key=lambda word: (-len(word), word))
    return "|".join(re.escape(word) for word in unique)


def _keyword_pattern(words: Iterable[str]) -> re.Pattern[str]:
    return re.compile(rf"\b({_alternation(words)})s?\b")


_NUM = NUMBER_PATTERN
# Distance units end at whitespace, punctuation or the end of the entry.
_UNIT_END = r"(?=[\s,.;:!?)]|$)"
_ACTIVITY_UNITS = DISTANCE_UNITS + DURATION_MINUTE_UNITS + DURATION_HOUR_UNITS
_NOT_ACTIVITY_UNIT = rf"(?!\.\d|\s*(?:{_alternation(_ACTIVITY_UNITS)})\b)"

_LABELED_WEIGHT_RE = re.compile(
    rf"\b(?:{_alternation(WEIGHT_LABELS)})\s*:?\s*(?:in\s+at\s+|at\s+)?"
    rf"({_NUM}){_NOT_ACTIVITY_UNIT}\s*({_alternation(WEIGHT_UNITS)})?\b"
)
_BARE_WEIGHT_RE = re.compile(rf"({_NUM})\s*({_alternation(WEIGHT_UNITS)})?")

_WATER_MEASURE = rf"({_NUM})\s*({_alternation(WATER_UNITS)})\b"
_WATER_PHRASE_RE = re.compile(
    rf"(?:(?:{_alternation(WATER_VERBS)})\s+)?{_WATER_MEASURE}(?:\s+(?:of\s+)?water)?"
)
_WATER_MEASURE_RE = re.compile(_WATER_MEASURE)
_HYDRATION_RE = re.compile(rf"\b(?:{_alternation(HYDRATION_CUES)})\b")

_DISTANCE_RE = re.compile(rf"({_NUM})\s*({_alternation(DISTANCE_UNITS)}){_UNIT_END}")
_DURATION_RE = re.compile(
    rf"(?:\b(?:in|for)\s+)?({_NUM})\s*"
    rf"({_alternation(DURATION_MINUTE_UNITS + DURATION_HOUR_UNITS)})\b"
)
_SLEEP_HOURS_RE = re.compile(rf"({_NUM})\s*(?:hours?|hrs?|h)\b")
_RATING_RE = re.compile(rf"({_NUM})\s*/\s*10\b")

_MOOD_PATTERNS = [(level, re.compile(rf"\b(?:{_alternation(phrases)})\b")) for level, phrases in MOOD_LEVELS]
_NEGATABLE_WORDS = [word for level, phrases in MOOD_LEVELS if level in NEGATABLE_MOOD_LEVELS for word in phrases]
_NEGATED_MOOD_RE = re.compile(
    rf"\b(?:{_alternation(NEGATIONS)})\s+(?:\w+\s+){{0,2}}(?:{_alternation(_NEGATABLE_WORDS)})\b"
)


def normalize_text(text: str) -> str:
    """Trim, lower-case and collapse whitespace."""
    return " ".join(str(text or "").lower().split())


def _to_number(value: Union[str, float]) -> Union[int, float]:
    number = float(value)
    return int(number) if number.is_integer() else number


def _found_in_order(pattern: re.Pattern[str], text: str) -> List[str]:
    found: List[str] = []
    for match in pattern.finditer(text):
        word = match.group(1)
        if word not in found:
            found.append(word)
    return found


def _weight_confidence(text: str) -> Optional[float]:
    if _LABELED_WEIGHT_RE.search(text):
        return CONFIDENCE["weight_labeled"]
    if _BARE_WEIGHT_RE.fullmatch(text):
        return CONFIDENCE["weight_bare"]
    return None


def _extract_weight(text: str) -> Dict[str, Any]:
    match = _LABELED_WEIGHT_RE.search(text) or _BARE_WEIGHT_RE.fullmatch(text)
    if match is None:
        return {}
    unit = match.group(2)
    return {
        "value": _to_number(match.group(1)),
        "unit": WEIGHT_UNITS[unit] if unit else None,
    }


def _water_confidence(text: str) -> Optional[float]:
    if _WATER_PHRASE_RE.fullmatch(text):
        return CONFIDENCE["water"]
    if _WATER_MEASURE_RE.search(text) and _HYDRATION_RE.search(text):
        return CONFIDENCE["water"]
    return None


def _extract_water(text: str) -> Dict[str, Any]:
    match = _WATER_MEASURE_RE.search(text)
    if match is None:
        return {}
    return {"amount": _to_number(match.group(1)), "unit": WATER_UNITS[match.group(2)]}


def _exercise_confidence(verbs: re.Pattern[str], text: str) -> Optional[float]:
    # A duration on its own is not enough; "slept 8 hours" belongs to sleep.
    if verbs.search(text) or _DISTANCE_RE.search(text):
        return CONFIDENCE["exercise"]
    return None


def _extract_exercise(text: str) -> Dict[str, Any]:
    extracted: Dict[str, Any] = {}

    distance = _DISTANCE_RE.search(text)
    if distance:
        extracted["distanceValue"] = _to_number(distance.group(1))
        extracted["distanceUnit"] = distance.group(2)

    duration = _DURATION_RE.search(text)
    if duration:
        value = float(duration.group(1))
        if duration.group(2) in DURATION_HOUR_UNITS:
            value *= 60
        extracted["durationMinutes"] = _to_number(value)
    return extracted


def _keyword_confidence(pattern: re.Pattern[str], confidence: float, text: str) -> Optional[float]:
    return confidence if pattern.search(text) else None


def _extract_food(items: Optional[re.Pattern[str]], meals: re.Pattern[str], text: str) -> Dict[str, Any]:
    extracted: Dict[str, Any] = {"items": _found_in_order(items, text) if items else []}
    meal = meals.search(text)
    if meal:
        extracted["meal"] = meal.group(1)
    return extracted


def _extract_sleep(text: str) -> Dict[str, Any]:
    match = _SLEEP_HOURS_RE.search(text)
    return {"hours": _to_number(match.group(1))} if match else {}


def _extract_energy(keywords: re.Pattern[str], text: str) -> Dict[str, Any]:
    rating = _RATING_RE.search(text)
    if rating is None:
        rating = re.search(
            rf"\b(?:{keywords.pattern})\s*(?:level\s*)?(?:is\s*)?:?\s*({_NUM})\b",
            text,
        )
    if rating is None:
        return {}
    level = _to_number(rating.group(1))
    if not 0 <= level <= 10:
        return {}
    return {"level": level}


def _mood_level(text: str) -> str:
    for level, pattern in _MOOD_PATTERNS:
        if pattern.search(text) or (level == NEGATED_MOOD and _NEGATED_MOOD_RE.search(text)):
            return level
    return DEFAULT_MOOD


def _extract_mood(emotions: re.Pattern[str], text: str) -> Dict[str, Any]:
    extracted: Dict[str, Any] = {"mood": _mood_level(text)}
    named = _found_in_order(emotions, text)
    if named:
        extracted["emotions"] = named
    return extracted


def merge_keywords(overrides: Optional[Mapping[str, Sequence[str]]] = None) -> Dict[str, List[str]]:
    """Overlay per-category keyword overrides on the default vocabularies."""
    merged = {category: list(words) for category, words in DEFAULT_KEYWORDS.items()}
    for category, words in (overrides or {}).items():
        if category not in merged or isinstance(words, str):
            continue
        cleaned = [str(word).strip().lower() for word in words if str(word).strip()]
        if cleaned:
            merged[category] = cleaned
    return merged


def build_rules(keywords: Optional[Mapping[str, Sequence[str]]] = None) -> List[Rule]:
    """Build the ordered (type, predicate, extractor) rule list.

    Order is the tie-break: narrowly shaped numeric entries (weight, water)
    come first, then exercise ahead of food, then sleep, energy and mood.
    """
    vocab = merge_keywords(keywords)

    exercise = _keyword_pattern(vocab["exercise"])
    food = _keyword_pattern(vocab["food"] + vocab["meal"])
    food_items = [word for word in vocab["food"] if word not in FOOD_VERBS]
    items = _keyword_pattern(food_items) if food_items else None
    meals = _keyword_pattern(vocab["meal"])
    sleep = _keyword_pattern(vocab["sleep"])
    energy = re.compile(rf"\b(?:{_alternation(vocab['energy'])})\b")
    mood = _keyword_pattern(vocab["mood"] + vocab["emotion"])
    emotions = _keyword_pattern(vocab["emotion"])

    return [
        (ActivityType.WEIGHT, _weight_confidence, _extract_weight),
        (ActivityType.WATER, _water_confidence, _extract_water),
        (ActivityType.EXERCISE, partial(_exercise_confidence, exercise), _extract_exercise),
        (
            ActivityType.FOOD,
            partial(_keyword_confidence, food, CONFIDENCE["food"]),
            partial(_extract_food, items, meals),
        ),
        (ActivityType.SLEEP, partial(_keyword_confidence, sleep, CONFIDENCE["sleep"]), _extract_sleep),
        (
            ActivityType.ENERGY,
            partial(_keyword_confidence, energy, CONFIDENCE["energy"]),
            partial(_extract_energy, energy),
        ),
        (
            ActivityType.MOOD,
            partial(_keyword_confidence, mood, CONFIDENCE["mood"]),
            partial(_extract_mood, emotions),
        ),
    ]


DEFAULT_RULES: List[Rule] = build_rules()


def classify(text: str, rules: Optional[Sequence[Rule]] = None) -> ActivityClassification:
    """Classify one free-text entry; the first matching rule wins."""
    normalized = normalize_text(text)
    if normalized:
        for activity_type, predicate, extractor in DEFAULT_RULES if rules is None else rules:
            confidence = predicate(normalized)
            if confidence is not None:
                return ActivityClassification(
                    raw_text=text,
                    type=activity_type,
                    confidence=confidence,
                    extracted=extractor(normalized),
                )

    return ActivityClassification(
        raw_text=text,
        type=ActivityType.UNKNOWN,
        confidence=CONFIDENCE["unknown"],
    )


def classify_many(
    texts: Iterable[str],
    rules: Optional[Sequence[Rule]] = None,
) -> List[ActivityClassification]:
    """Classify a batch of entries, preserving input order."""
    active = DEFAULT_RULES if rules is None else rules
    return [classify(text, rules=active) for text in texts]


def keyword_overrides_from_config(config: Dict[str, Any]) -> Dict[str, List[str]]:
    """Read [classification.keywords] overrides, dropping malformed entries."""
    configured = config.get("classification", {}).get("keywords", {})
    if not isinstance(configured, dict):
        return {}

    overrides: Dict[str, List[str]] = {}
    for key, value in configured.items():
        if isinstance(value, Iterable) and not isinstance(value, str):
            overrides[str(key).lower()] = [str(item).lower() for item in value]
    return overrides


def classification_rules_from_config(config: Dict[str, Any]) -> List[Rule]:
    """Build rules from config if provided, otherwise defaults."""
    overrides = keyword_overrides_from_config(config)
    if not overrides:
        return DEFAULT_RULES
    return build_rules(overrides)


def describe_rules(keywords: Optional[Mapping[str, Sequence[str]]] = None) -> List[Dict[str, Any]]:
    """Summarize rule order, confidence and triggers for display."""
    vocab = merge_keywords(keywords)
    return [
        {
            "type": ActivityType.WEIGHT.value,
            "confidence": [CONFIDENCE["weight_labeled"], CONFIDENCE["weight_bare"]],
            "triggers": WEIGHT_LABELS + sorted(set(WEIGHT_UNITS)),
        },
        {
            "type": ActivityType.WATER.value,
            "confidence": [CONFIDENCE["water"]],
            "triggers": sorted(set(WATER_UNITS)) + HYDRATION_CUES,
        },
        {
            "type": ActivityType.EXERCISE.value,
            "confidence": [CONFIDENCE["exercise"]],
            "triggers": vocab["exercise"] + DISTANCE_UNITS,
        },
        {
            "type": ActivityType.FOOD.value,
            "confidence": [CONFIDENCE["food"]],
            "triggers": vocab["meal"] + vocab["food"],
        },
        {
            "type": ActivityType.SLEEP.value,
            "confidence": [CONFIDENCE["sleep"]],
            "triggers": vocab["sleep"],
        },
        {
            "type": ActivityType.ENERGY.value,
            "confidence": [CONFIDENCE["energy"]],
            "triggers": vocab["energy"],
        },
        {
            "type": ActivityType.MOOD.value,
            "confidence": [CONFIDENCE["mood"]],
            "triggers": vocab["mood"] + vocab["emotion"],
        },
        {
            "type": ActivityType.UNKNOWN.value,
            "confidence": [CONFIDENCE["unknown"]],
            "triggers": [],
        },
    ]
