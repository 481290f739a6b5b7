"""Turn raw spreadsheet values into canonical, date-sorted lift entries.

Two layouts are understood: the bespoke Strength Journeys sheet (Date,
Lift Type, Reps, Weight plus optional columns, in any order and with loose
header spelling) and the TurnKey coaching export, recognised by its
leading ``user_name``/``workout_id`` headers.

Every entry is a plain dict so the parsed list round-trips through JSON:

    {"date": "2024-06-01", "lift_type": "Back Squat", "reps": 5,
     "weight": 225.0, "unit_type": "lb", "notes": "felt fast"}
"""

from __future__ import annotations

import logging
import time
from typing import Sequence

from normalizer import (
    DATE,
    IS_GOAL,
    LABEL,
    LIFT_TYPE,
    NOTES,
    REPS,
    REQUIRED_COLUMNS,
    URL,
    WEIGHT,
    normalize_column_name,
    normalize_date,
    normalize_lift_type,
    parse_reps,
    parse_weight,
)

logger = logging.getLogger(__name__)

TURNKEY_WORKOUT_URL = "https://app.turnkey.coach//workout/{}"

_OPTIONAL_FIELDS = {NOTES: "notes", LABEL: "label", URL: "url"}


class MissingColumnsError(ValueError):
    """Raised when the header row lacks one or more required columns."""

    def __init__(self, missing: list[str]) -> None:
        self.missing = list(missing)
        super().__init__(f"Missing required columns: {', '.join(self.missing)}")


def _is_turnkey(header: Sequence[str]) -> bool:
    return len(header) >= 2 and header[0] == "user_name" and header[1] == "workout_id"


def parse_data(rows: Sequence[Sequence[str]]) -> list[dict]:
    """Detect the sheet layout from its header row and parse it."""
    if rows and _is_turnkey(rows[0]):
        return parse_turnkey_data(rows)
    return parse_bespoke_data(rows)


def _column_indices(header: Sequence[str]) -> dict[str, int]:
    indices: dict[str, int] = {}
    for idx, name in enumerate(header):
        canonical = normalize_column_name(name)
        indices.setdefault(canonical, idx)
    return indices


def parse_bespoke_data(rows: Sequence[Sequence[str]]) -> list[dict]:
    """Parse the bespoke layout.

    Blank date and lift type cells inherit the last value seen above them.
    An unparseable date drops its row and clears the inherited date so the
    blank-date rows beneath it are dropped too. Rows without usable reps or
    weight are dropped. The result is stably sorted by date.
    """
    start = time.perf_counter()
    header = list(rows[0]) if rows else []
    columns = _column_indices(header)
    missing = [name for name in REQUIRED_COLUMNS if name not in columns]
    if missing:
        raise MissingColumnsError(missing)

    date_col = columns[DATE]
    lift_col = columns[LIFT_TYPE]
    reps_col = columns[REPS]
    weight_col = columns[WEIGHT]
    goal_col = columns.get(IS_GOAL)
    optional_cols = {
        field: columns[name]
        for name, field in _OPTIONAL_FIELDS.items()
        if name in columns
    }

    previous_date = None
    previous_lift_type = None
    entries: list[dict] = []
    dropped = 0

    for row_number, raw in enumerate(rows[1:], start=2):
        row = list(raw) + [""] * (len(header) - len(raw))

        reps_cell = row[reps_col]
        weight_cell = row[weight_col]
        if reps_cell == "" or weight_cell == "":
            dropped += 1
            continue

        date_cell = row[date_col]
        if date_cell != "":
            date = normalize_date(date_cell)
            if date is None:
                logger.warning("Row %d: invalid date %r, row skipped", row_number, date_cell)
                previous_date = None
                dropped += 1
                continue
            previous_date = date
        elif previous_date is None:
            dropped += 1
            continue
        else:
            date = previous_date

        lift_cell = row[lift_col]
        if lift_cell != "":
            lift_type = normalize_lift_type(lift_cell)
            previous_lift_type = lift_type
        elif previous_lift_type is None:
            dropped += 1
            continue
        else:
            lift_type = previous_lift_type

        reps = parse_reps(reps_cell)
        weight = parse_weight(weight_cell)
        if reps is None or weight["value"] is None:
            dropped += 1
            continue
        if reps < 1 or weight["value"] <= 0:
            dropped += 1
            continue

        entry = {
            "date": date,
            "lift_type": lift_type,
            "reps": reps,
            "weight": weight["value"],
            "unit_type": weight["unit_type"],
        }
        for field, col in optional_cols.items():
            if row[col] != "":
                entry[field] = row[col]
        if goal_col is not None and row[goal_col] != "":
            entry["is_goal"] = row[goal_col] == "TRUE"
        entries.append(entry)

    entries.sort(key=lambda e: e["date"])
    logger.debug(
        "parse_bespoke_data: %d entries, %d rows dropped in %.1fms",
        len(entries),
        dropped,
        (time.perf_counter() - start) * 1000,
    )
    return entries


def _int_or_none(value) -> int | None:
    return parse_reps(str(value)) if value not in (None, "") else None


def _float_or_none(value) -> float | None:
    if value in (None, ""):
        return None
    return parse_weight(str(value))["value"]


def parse_turnkey_data(rows: Sequence[Sequence[str]]) -> list[dict]:
    """Parse a TurnKey coaching export.

    Actual reps and weight override the coach's assignment when both are
    present. Multi-set rows expand into one entry per set.
    """
    start = time.perf_counter()
    header = list(rows[0])

    def col(name: str) -> int | None:
        return header.index(name) if name in header else None

    date_col = col("workout_date")
    workout_col = col("workout_id")
    completed_col = col("workout_completed")
    exercise_col = col("exercise_name")
    assigned_reps_col = col("assigned_reps")
    assigned_weight_col = col("assigned_weight")
    assigned_sets_col = col("assigned_sets")
    actual_reps_col = col("actual_reps")
    actual_weight_col = col("actual_weight")
    actual_sets_col = col("actual_sets")
    missed_col = col("assigned_exercise_missed")
    units_col = col("weight_units")

    def cell(row: list, idx: int | None) -> str:
        if idx is None or idx >= len(row) or row[idx] is None:
            return ""
        return row[idx]

    entries: list[dict] = []
    for raw in rows[1:]:
        if not raw or raw[0] is None:
            logger.debug("parse_turnkey_data skipping bad row: %r", raw)
            continue
        row = list(raw)
        if cell(row, actual_reps_col) == "actual_reps":
            continue
        if cell(row, completed_col) == "FALSE" or cell(row, missed_col) == "TRUE":
            continue
        # Coach comments leave the assignment empty.
        if _int_or_none(cell(row, assigned_reps_col)) is None:
            continue

        reps = _int_or_none(cell(row, assigned_reps_col))
        weight = _float_or_none(cell(row, assigned_weight_col))
        actual_reps = _int_or_none(cell(row, actual_reps_col))
        actual_weight = _float_or_none(cell(row, actual_weight_col))
        if actual_reps is not None and actual_weight is not None:
            reps, weight = actual_reps, actual_weight

        if not reps or not weight:
            continue
        if reps < 1 or weight <= 0:
            continue

        date = normalize_date(cell(row, date_col))
        if date is None:
            logger.warning("TurnKey row with invalid date %r skipped", cell(row, date_col))
            continue

        lift_type = cell(row, exercise_col)
        if lift_type == "Squat":
            lift_type = "Back Squat"

        sets = 1
        for sets_col in (assigned_sets_col, actual_sets_col):
            count = _int_or_none(cell(row, sets_col))
            if count is not None and count > 1:
                sets = count

        unit_type = "kg" if "kg" in str(cell(row, units_col)).lower() else "lb"
        url = TURNKEY_WORKOUT_URL.format(cell(row, workout_col))
        for i in range(1, sets + 1):
            entry = {
                "date": date,
                "lift_type": lift_type,
                "reps": reps,
                "weight": weight,
                "unit_type": unit_type,
                "url": url,
            }
            if sets > 1:
                entry["notes"] = f"Set {i} of {sets}"
            entries.append(entry)

    entries.sort(key=lambda e: e["date"])
    logger.debug(
        "parse_turnkey_data: %d entries in %.1fms",
        len(entries),
        (time.perf_counter() - start) * 1000,
    )
    return entries
