"""Static vocabularies and scores for activity classification."""

from __future__ import annotations

# A number match only starts at the beginning of a digit run.
NUMBER_PATTERN = r"(?<![\d.])\d+(?:\.\d+)?"

WEIGHT_LABELS = ["weight", "weighed", "weigh"]
WEIGHT_UNITS = {
    "lbs": "lbs",
    "lb": "lbs",
    "pounds": "lbs",
    "pound": "lbs",
    "kg": "kg",
    "kgs": "kg",
    "kilos": "kg",
    "kilo": "kg",
}

WATER_UNITS = {
    "oz": "oz",
    "ml": "ml",
    "cups": "cups",
    "cup": "cups",
    "liters": "liters",
    "liter": "liters",
    "litres": "liters",
    "litre": "liters",
    "l": "liters",
}
WATER_VERBS = ["drank", "drink", "had"]
HYDRATION_CUES = ["water", "drank", "drink", "hydrated"]

DISTANCE_UNITS = ["km", "k", "miles", "mile", "mi", "meters", "meter", "m"]
DURATION_MINUTE_UNITS = ["minutes", "minute", "mins", "min"]
DURATION_HOUR_UNITS = ["hours", "hour", "hrs", "hr"]

MEAL_WORDS = ["breakfast", "lunch", "dinner", "snack"]

# Category vocabularies; each may be overridden from [classification.keywords].
DEFAULT_KEYWORDS = {
    "exercise": [
        "ran",
        "run",
        "running",
        "walked",
        "walk",
        "walking",
        "cycled",
        "cycling",
        "biked",
        "biking",
        "swim",
        "swam",
        "swimming",
        "workout",
        "jog",
        "jogged",
        "jogging",
    ],
    "food": [
        "ate",
        "eaten",
        "meal",
        "eggs",
        "egg",
        "toast",
        "chicken",
        "rice",
        "salad",
        "sandwich",
        "pizza",
        "pasta",
        "steak",
        "fish",
        "vegetables",
        "vegetable",
        "fruit",
        "yogurt",
        "cereal",
        "oatmeal",
        "coffee",
        "tea",
        "juice",
        "milk",
        "cheese",
        "bread",
        "apple",
        "banana",
        "orange",
        "berries",
        "berry",
        "nuts",
        "nut",
        "soup",
        "burger",
    ],
    "meal": list(MEAL_WORDS),
    "sleep": ["slept", "sleep", "nap", "napped"],
    "energy": ["energy"],
    "mood": ["feeling", "feel", "felt", "mood"],
    "emotion": ["happy", "sad", "stressed", "anxious", "calm", "angry", "excited"],
}

# Food words that describe the act of eating rather than an item eaten.
FOOD_VERBS = {"ate", "eaten", "meal"}

# First matching level wins.
MOOD_LEVELS = [
    ("terrible", ["terrible", "awful", "horrible"]),
    ("bad", ["bad", "poor", "sad", "stressed", "anxious", "angry"]),
    ("great", ["great", "excellent", "amazing", "excited"]),
    ("good", ["good", "fine", "well", "happy", "calm"]),
    ("okay", ["okay", "alright", "so-so", "ok"]),
]
DEFAULT_MOOD = "okay"

# "not feeling well" and similar negated positives count as this level.
NEGATIONS = ["not", "never", "hardly"]
NEGATED_MOOD = "bad"
NEGATABLE_MOOD_LEVELS = ("great", "good")

CONFIDENCE = {
    "weight_labeled": 0.95,
    "weight_bare": 0.85,
    "water": 0.9,
    "exercise": 0.85,
    "food": 0.85,
    "sleep": 0.9,
    "energy": 0.9,
    "mood": 0.8,
    "unknown": 0.1,
}

DEFAULT_MIN_CONFIDENCE = 0.5

TYPE_LABELS = {
    "weight": "Weight",
    "food": "Food",
    "exercise": "Exercise",
    "sleep": "Sleep",
    "mood": "Mood",
    "water": "Water",
    "energy": "Energy",
    "unknown": "Unknown",
}
