"""Session-level summaries: tonnage, weekly streaks, momentum and consistency.

A session is every entry logged on one calendar date. Goals never count.
Tonnage is always kept per unit; kg and lb are only combined by the
lifetime summary, which converts into the preferred display unit.
"""

from __future__ import annotations

import datetime
from typing import Iterable, Optional

from algorithms import MathTools, WeightConverter

STREAK_MIN_SESSIONS = 3
MOMENTUM_WINDOW_DAYS = 90
TONNAGE_WINDOW_DAYS = 365


def _today(today: Optional[datetime.date]) -> datetime.date:
    return today if today is not None else datetime.date.today()


def _lifts(entries: Iterable[dict]) -> list[dict]:
    return [e for e in entries if e.get("is_goal") is not True]


def session_dates(entries: Iterable[dict]) -> list[str]:
    """Return the sorted distinct dates of all non-goal entries."""
    return sorted({e["date"] for e in _lifts(entries)})


def session_tonnage_lookup(entries: Iterable[dict]) -> dict:
    """Return session dates and per-unit tonnage for each date."""
    sets: dict[str, dict[str, list[tuple[int, float]]]] = {}
    for entry in _lifts(entries):
        by_unit = sets.setdefault(entry["date"], {})
        by_unit.setdefault(entry["unit_type"], []).append(
            (entry["reps"], entry["weight"])
        )
    tonnage = {
        date: {unit: MathTools.volume(items) for unit, items in by_unit.items()}
        for date, by_unit in sets.items()
    }
    return {
        "all_session_dates": sorted(tonnage),
        "session_tonnage_by_date": tonnage,
    }


def _to_unit(total_by_unit: dict[str, float], unit: str) -> float:
    total = 0.0
    for source, value in total_by_unit.items():
        if source in WeightConverter.UNITS:
            total += WeightConverter.convert(value, source, unit)
        else:
            total += value
    return total


def lifetime_tonnage(
    lookup: dict,
    preferred_unit: str = "lb",
    today: Optional[datetime.date] = None,
) -> dict:
    """Summarise lifetime tonnage in ``preferred_unit``.

    ``lookup`` is the result of :func:`session_tonnage_lookup`. The trailing
    year total is only reported once the history spans at least 365 days.
    """
    dates = lookup.get("all_session_dates", [])
    by_date = lookup.get("session_tonnage_by_date", {})
    if not dates:
        return {
            "total_by_unit": {},
            "primary_unit": preferred_unit,
            "primary_total": 0.0,
            "session_count": 0,
            "average_per_session": 0,
            "has_twelve_months_of_data": False,
            "last_year_primary_total": 0.0,
        }

    end = _today(today)
    year_start = (end - datetime.timedelta(days=TONNAGE_WINDOW_DAYS)).isoformat()
    end_str = end.isoformat()
    total_by_unit: dict[str, float] = {}
    last_year_by_unit: dict[str, float] = {}
    for date in dates:
        for unit, value in by_date.get(date, {}).items():
            total_by_unit[unit] = total_by_unit.get(unit, 0.0) + value
            if year_start <= date <= end_str:
                last_year_by_unit[unit] = last_year_by_unit.get(unit, 0.0) + value

    primary_total = _to_unit(total_by_unit, preferred_unit)
    span = datetime.date.fromisoformat(dates[-1]) - datetime.date.fromisoformat(dates[0])
    has_year = span.days >= TONNAGE_WINDOW_DAYS
    return {
        "total_by_unit": total_by_unit,
        "primary_unit": preferred_unit,
        "primary_total": primary_total,
        "session_count": len(dates),
        "average_per_session": MathTools.round_half_up(primary_total / len(dates)),
        "has_twelve_months_of_data": has_year,
        "last_year_primary_total": (
            _to_unit(last_year_by_unit, preferred_unit) if has_year else 0.0
        ),
    }


def _heaviest_sessions(tonnage: dict[tuple[str, str, str], float]) -> dict:
    result: dict[str, dict[str, dict]] = {}
    for (lift_type, date, unit), value in sorted(tonnage.items(), key=lambda x: x[0][1]):
        best = result.setdefault(lift_type, {}).get(unit)
        if best is None or value > best["tonnage"]:
            result[lift_type][unit] = {"date": date, "tonnage": value}
    return result


def top_tonnage_by_type(
    entries: Iterable[dict], window_days: int = TONNAGE_WINDOW_DAYS
) -> dict:
    """Return the heaviest single-session tonnage per lift type and unit.

    Ties go to the earlier session. The trailing table covers
    ``window_days`` days up to the latest non-goal entry.
    """
    lifts = _lifts(entries)
    if not lifts:
        return {"all_time": {}, "last_12_months": {}}
    tonnage: dict[tuple[str, str, str], float] = {}
    for entry in lifts:
        key = (entry["lift_type"], entry["date"], entry["unit_type"])
        tonnage[key] = tonnage.get(key, 0.0) + entry["reps"] * entry["weight"]

    latest = max(datetime.date.fromisoformat(e["date"]) for e in lifts)
    cutoff = (latest - datetime.timedelta(days=window_days)).isoformat()
    recent = {k: v for k, v in tonnage.items() if k[1] >= cutoff}
    return {
        "all_time": _heaviest_sessions(tonnage),
        "last_12_months": _heaviest_sessions(recent),
    }


def _week_start(day: datetime.date) -> datetime.date:
    return day - datetime.timedelta(days=day.weekday())


def weekly_streak(
    dates: Iterable[str],
    today: Optional[datetime.date] = None,
    min_sessions: int = STREAK_MIN_SESSIONS,
) -> dict[str, int]:
    """Return current and best streaks of weeks with ``min_sessions`` sessions.

    Weeks start on Monday. The week containing ``today`` only extends the
    current streak once it already qualifies; otherwise the streak is
    counted back from the previous week.
    """
    weeks: dict[datetime.date, set[str]] = {}
    for date in dates:
        weeks.setdefault(
            _week_start(datetime.date.fromisoformat(date)), set()
        ).add(date)
    if not weeks:
        return {"current_streak": 0, "best_streak": 0, "sessions_this_week": 0}

    def qualifies(week: datetime.date) -> bool:
        return len(weeks.get(week, ())) >= min_sessions

    one_week = datetime.timedelta(days=7)
    oldest = min(weeks)
    this_week = _week_start(_today(today))
    last_complete = this_week - one_week
    sessions_this_week = len(weeks.get(this_week, ()))

    current = 1 if qualifies(this_week) else 0
    week = last_complete
    while week >= oldest and qualifies(week):
        current += 1
        week -= one_week

    best = run = 0
    week = oldest
    end = this_week if qualifies(this_week) else last_complete
    while week <= end:
        if qualifies(week):
            run += 1
            best = max(best, run)
        else:
            run = 0
        week += one_week

    return {
        "current_streak": current,
        "best_streak": best,
        "sessions_this_week": sessions_this_week,
    }


def session_momentum(
    dates: Iterable[str],
    today: Optional[datetime.date] = None,
    window_days: int = MOMENTUM_WINDOW_DAYS,
) -> dict[str, int]:
    """Compare session counts in the last ``window_days`` with the block before."""
    end = _today(today)
    recent_start = (end - datetime.timedelta(days=window_days - 1)).isoformat()
    previous_start = (end - datetime.timedelta(days=window_days * 2 - 1)).isoformat()
    end_str = end.isoformat()

    recent: set[str] = set()
    previous: set[str] = set()
    for date in dates:
        if recent_start <= date <= end_str:
            recent.add(date)
        elif previous_start <= date < recent_start:
            previous.add(date)

    return {
        "recent_sessions": len(recent),
        "previous_sessions": len(previous),
        "session_delta": len(recent) - len(previous),
        "percentage_change": MathTools.percentage_change(len(recent), len(previous)),
        "window_days": window_days,
    }


# Longer periods are shortened to leave room for rest weeks.
CONSISTENCY_PERIODS = [
    ("Week", 7),
    ("Month", 30),
    ("3 Month", 90),
    ("Half Year", 180),
    ("Year", 345),
    ("24 Month", 350 * 2),
    ("5 Year", 350 * 5),
    ("Decade", 350 * 10),
]
CONSISTENCY_SESSIONS_PER_WEEK = 3

# (minimum percentage, grade), best grade first.
CONSISTENCY_GRADES = [
    (100, "A+"),
    (90, "A"),
    (80, "A-"),
    (70, "B+"),
    (59, "B"),
    (50, "B-"),
    (42, "C+"),
    (36, "C"),
    (30, "C-"),
    (0, "."),
]


def consistency_grade(percentage: int) -> str:
    """Return the letter grade for a consistency percentage."""
    for minimum, grade in CONSISTENCY_GRADES:
        if percentage >= minimum:
            return grade
    return CONSISTENCY_GRADES[-1][1]


def _sessions_to_next_grade(actual: int, expected: int, percentage: int) -> int:
    higher = [minimum for minimum, _ in CONSISTENCY_GRADES if minimum > percentage]
    if not higher:
        return 0
    return -(-min(higher) * expected // 100) - actual


def consistency_grades(
    dates: Iterable[str], today: Optional[datetime.date] = None
) -> list[dict]:
    """Grade session frequency against three sessions a week per period.

    Periods run back from ``today`` inclusive. Only periods up to and
    including the first one longer than the training history are graded,
    so longer periods unlock as the history grows.
    """
    sessions = sorted(set(dates))
    if not sessions:
        return []
    end = _today(today)
    history_days = (end - datetime.date.fromisoformat(sessions[0])).days

    results = []
    for label, days in CONSISTENCY_PERIODS:
        start = (end - datetime.timedelta(days=days - 1)).isoformat()
        actual = sum(1 for d in sessions if start <= d <= end.isoformat())
        expected = MathTools.round_half_up(days / 7 * CONSISTENCY_SESSIONS_PER_WEEK)
        percentage = min(MathTools.round_half_up(actual / expected * 100), 100)
        results.append(
            {
                "label": label,
                "days": days,
                "sessions": actual,
                "expected_sessions": expected,
                "percentage": percentage,
                "grade": consistency_grade(percentage),
                "sessions_to_next_grade": _sessions_to_next_grade(actual, expected, percentage),
            }
        )
        if days > history_days:
            break
    return results
