"""Personal records derived from the canonical entry list.

``process_top_lifts`` returns tables shaped like::

    top["Back Squat"][4][2]  # third best Back Squat set of 5 reps

ranked by estimated one-rep max, with an earlier date winning a tie.
"""

from __future__ import annotations

import datetime
import logging
import time
from typing import Iterable, Optional

from algorithms import (
    DEFAULT_FORMULA,
    WeightConverter,
    estimate_e1rm,
    estimate_e1rm_many,
    estimate_weight_for_reps,
)

logger = logging.getLogger(__name__)

MAX_RANKED_REPS = 10
DEFAULT_TOP_LIFTS_CAP = 20
DEFAULT_WINDOW_DAYS = 365
NOT_RANKED = -1

CELEBRATION_EMOJIS = [
    "\U0001F947",
    "\U0001F948",
    "\U0001F949",
    "\U0001F4AA",
    "\U0001F44C",
    "\U0001F44F",
    "\U0001F3C6",
    "\U0001F525",
    "\U0001F4AF",
    "\U0001F929",
    "\U0001F389",
    "\U0001F44D",
    "\U0001F381",
    "\U0001F60D",
    "\U0001F389",
    "\U0001F60A",
    "\U0001F604",
    "\U0001F60B",
    "\U0001F973",
    "\U0001F609",
]

_MATCH_FIELDS = ("date", "lift_type", "reps", "weight", "notes", "label", "url")


def _is_goal(entry: dict) -> bool:
    return entry.get("is_goal") is True


def mark_historical_prs(entries: Iterable[dict]) -> list[dict]:
    """Return copies of ``entries`` flagged with ``is_historical_pr``.

    ``entries`` must be sorted by date. An entry is a historical PR when its
    weight beats every earlier entry with the same lift type and reps; a
    tie does not count. Goals are copied without a flag and never move the
    running best.
    """
    start = time.perf_counter()
    best: dict[tuple[str, int], float] = {}
    marked: list[dict] = []
    for entry in entries:
        item = dict(entry)
        if not _is_goal(item):
            key = (item["lift_type"], item["reps"])
            if key not in best or item["weight"] > best[key]:
                best[key] = item["weight"]
                item["is_historical_pr"] = True
            else:
                item["is_historical_pr"] = False
        marked.append(item)
    logger.debug("mark_historical_prs: %.1fms", (time.perf_counter() - start) * 1000)
    return marked


def _rank_into_table(
    ranked: list[tuple[float, int, dict]], cap: int
) -> dict[str, list[list[dict]]]:
    table: dict[str, list[list[tuple[float, int, dict]]]] = {}
    for item in ranked:
        entry = item[2]
        slots = table.setdefault(
            entry["lift_type"], [[] for _ in range(MAX_RANKED_REPS)]
        )
        slots[entry["reps"] - 1].append(item)

    result: dict[str, list[list[dict]]] = {}
    for lift_type, slots in table.items():
        result[lift_type] = []
        for slot in slots:
            slot.sort(key=lambda x: (-x[0], x[2]["date"], x[1]))
            result[lift_type].append([x[2] for x in slot[:cap]])
    return result


def process_top_lifts(
    entries: Iterable[dict],
    formula: str = DEFAULT_FORMULA,
    cap: int = DEFAULT_TOP_LIFTS_CAP,
    window_days: int = DEFAULT_WINDOW_DAYS,
) -> dict[str, dict[str, list[list[dict]]]]:
    """Return all-time and trailing-window top lifts by lift type and reps.

    Only non-goal sets of 1 to 10 reps are ranked. The trailing window
    covers ``window_days`` days up to the latest non-goal entry.
    """
    if cap < 1:
        raise ValueError("cap must be at least 1")
    start = time.perf_counter()
    lifts = [e for e in entries if not _is_goal(e)]
    candidates = [e for e in lifts if 1 <= e["reps"] <= MAX_RANKED_REPS]
    if not candidates:
        return {"all_time": {}, "last_12_months": {}}

    estimates = estimate_e1rm_many(
        [e["reps"] for e in candidates], [e["weight"] for e in candidates], formula
    ).tolist()
    ranked = [(est, idx, e) for idx, (est, e) in enumerate(zip(estimates, candidates))]

    latest = max(datetime.date.fromisoformat(e["date"]) for e in lifts)
    cutoff = (latest - datetime.timedelta(days=window_days)).isoformat()
    recent = [item for item in ranked if item[2]["date"] >= cutoff]

    result = {
        "all_time": _rank_into_table(ranked, cap),
        "last_12_months": _rank_into_table(recent, cap),
    }
    logger.debug(
        "process_top_lifts: %d sets ranked in %.1fms",
        len(ranked),
        (time.perf_counter() - start) * 1000,
    )
    return result


def _same_lift(a: dict, b: dict) -> bool:
    return all(a.get(field) == b.get(field) for field in _MATCH_FIELDS)


def find_lift_rank(entry: dict, top_lifts: dict[str, list[list[dict]]]) -> int:
    """Return the 1-based rank of ``entry`` in its slot, or ``NOT_RANKED``."""
    reps = entry.get("reps", 0)
    if not 1 <= reps <= MAX_RANKED_REPS:
        return NOT_RANKED
    slots = top_lifts.get(entry.get("lift_type"))
    if not slots:
        return NOT_RANKED
    for position, lift in enumerate(slots[reps - 1], start=1):
        if lift is entry or _same_lift(lift, entry):
            return position
    return NOT_RANKED


def rank_annotation(rank: int, reps: int) -> Optional[str]:
    """Return a celebratory label such as ``"🥇  #1 best 5RM"``."""
    if rank == NOT_RANKED or rank < 1:
        return None
    emoji = CELEBRATION_EMOJIS[(rank - 1) % len(CELEBRATION_EMOJIS)]
    return f"{emoji}  #{rank} best {reps}RM"


def calculate_lift_types(entries: Iterable[dict]) -> list[dict]:
    """Summarise sets and reps per lift type, most frequent first."""
    stats: dict[str, dict] = {}
    for entry in entries:
        if _is_goal(entry):
            continue
        item = stats.setdefault(
            entry["lift_type"],
            {
                "lift_type": entry["lift_type"],
                "total_sets": 0,
                "total_reps": 0,
                "oldest_date": entry["date"],
                "newest_date": entry["date"],
            },
        )
        item["total_sets"] += 1
        item["total_reps"] += entry["reps"]
        item["oldest_date"] = min(item["oldest_date"], entry["date"])
        item["newest_date"] = max(item["newest_date"], entry["date"])

    summary = sorted(stats.values(), key=lambda x: -x["total_sets"])
    for rank, item in enumerate(summary, start=1):
        item["frequency_rank"] = rank
    return summary


def strength_potential(
    slots: list[list[dict]], formula: str = DEFAULT_FORMULA
) -> list[dict]:
    """Return the load each rep count from 1 to 10 should allow.

    Loads are projected from the single best estimated max across
    ``slots`` (one lift type's top-lift table) and reported in that set's
    unit. Sets in different units are compared in lb.
    """
    best = None
    best_lb = 0.0
    for slot in slots:
        for entry in slot:
            est = estimate_e1rm(entry["reps"], entry["weight"], formula)
            est_lb = WeightConverter.convert(est, entry["unit_type"], "lb")
            if best is None or est_lb > best_lb:
                best = (est, entry)
                best_lb = est_lb
    if best is None:
        return []
    e1rm, source = best
    return [
        {
            "reps": reps,
            "weight": estimate_weight_for_reps(e1rm, reps, formula),
            "unit_type": source["unit_type"],
        }
        for reps in range(1, MAX_RANKED_REPS + 1)
    ]
