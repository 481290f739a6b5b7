"""Map loose spreadsheet spellings onto the canonical lift-data vocabulary."""

from __future__ import annotations

import re
from typing import Optional

DATE = "Date"
LIFT_TYPE = "Lift Type"
REPS = "Reps"
WEIGHT = "Weight"
NOTES = "Notes"
IS_GOAL = "isGoal"
LABEL = "Label"
URL = "URL"

REQUIRED_COLUMNS = [DATE, LIFT_TYPE, REPS, WEIGHT]
OPTIONAL_COLUMNS = [NOTES, IS_GOAL, LABEL, URL]

COLUMN_ALIASES = {
    "Date": DATE,
    "Day": DATE,
    "Session Date": DATE,
    "Workout Date": DATE,
    "Lift Type": LIFT_TYPE,
    "LiftType": LIFT_TYPE,
    "Lift": LIFT_TYPE,
    "Exercise": LIFT_TYPE,
    "Exercise Name": LIFT_TYPE,
    "Movement": LIFT_TYPE,
    "Reps": REPS,
    "Rep": REPS,
    "Repetitions": REPS,
    "Weight": WEIGHT,
    "Load": WEIGHT,
    "Notes": NOTES,
    "Note": NOTES,
    "Comment": NOTES,
    "Comments": NOTES,
    "isGoal": IS_GOAL,
    "Is Goal": IS_GOAL,
    "Goal": IS_GOAL,
    "Label": LABEL,
    "Tag": LABEL,
    "URL": URL,
    "Link": URL,
    "Video": URL,
}

_LOOSE_COLUMN_ALIASES = {key.lower(): value for key, value in COLUMN_ALIASES.items()}
_SEPARATORS = re.compile(r"[\s_.\-]+")

LIFT_TYPE_ALIASES = {
    "squat": "Back Squat",
    "back squat": "Back Squat",
    "backsquat": "Back Squat",
    "bs": "Back Squat",
    "front squat": "Front Squat",
    "deadlift": "Deadlift",
    "dead lift": "Deadlift",
    "conventional deadlift": "Deadlift",
    "dl": "Deadlift",
    "bench": "Bench Press",
    "bench press": "Bench Press",
    "bp": "Bench Press",
    "press": "Strict Press",
    "strict press": "Strict Press",
    "overhead press": "Strict Press",
    "military press": "Strict Press",
    "ohp": "Strict Press",
    "romanian deadlift": "Romanian Deadlift",
    "rdl": "Romanian Deadlift",
    "power clean": "Power Clean",
    "clean": "Clean",
    "snatch": "Snatch",
    "power snatch": "Power Snatch",
}

_DATE_PART = re.compile(r"^\d{1,2}$")
_YEAR_PART = re.compile(r"^\d{4}$")
_LEADING_FLOAT = re.compile(r"^\s*[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")
_LEADING_INT = re.compile(r"^\s*[+-]?\d+")


def normalize_column_name(header: str) -> str:
    """Return the canonical column name for ``header`` or ``header`` itself."""
    if header in COLUMN_ALIASES:
        return COLUMN_ALIASES[header]
    key = _SEPARATORS.sub(" ", str(header)).strip().lower()
    return _LOOSE_COLUMN_ALIASES.get(key, header)


def normalize_lift_type(value: str) -> str:
    """Return the canonical spelling of a lift type; unknown names pass through."""
    return LIFT_TYPE_ALIASES.get(value.strip().lower(), value)


def normalize_date(value: str) -> Optional[str]:
    """Return ``value`` as zero-padded ``YYYY-MM-DD`` or ``None`` if malformed.

    Month and day only get range checks; month lengths and leap years are
    not validated.
    """
    if not isinstance(value, str):
        return None
    parts = value.strip().split("-")
    if len(parts) != 3:
        return None
    year, month, day = parts
    if not _YEAR_PART.match(year):
        return None
    if not _DATE_PART.match(month) or not _DATE_PART.match(day):
        return None
    if not 1 <= int(month) <= 12 or not 1 <= int(day) <= 31:
        return None
    return f"{year}-{int(month):02d}-{int(day):02d}"


def parse_weight(value: str) -> dict:
    """Parse strings like ``"225lb"`` or ``"100 KG"``.

    Returns ``{"value": float | None, "unit_type": "kg" | "lb" | None}``.
    """
    if value is None or value == "":
        return {"value": None, "unit_type": None}
    text = str(value)
    unit_type = "kg" if "kg" in text.lower() else "lb"
    match = _LEADING_FLOAT.match(text)
    if match is None:
        return {"value": None, "unit_type": unit_type}
    return {"value": float(match.group(0)), "unit_type": unit_type}


def parse_reps(value: str) -> Optional[int]:
    """Return the leading integer of ``value`` or ``None``."""
    if not value:
        return None
    match = _LEADING_INT.match(str(value))
    if match is None:
        return None
    return int(match.group(0))
