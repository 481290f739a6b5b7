from __future__ import annotations

import datetime
import logging
from typing import Callable, Optional, Sequence

from aggregates import (
    consistency_grades,
    lifetime_tonnage,
    session_dates,
    session_momentum,
    session_tonnage_lookup,
    top_tonnage_by_type,
    weekly_streak,
)
from lift_parser import MissingColumnsError, parse_data
from normalizer import normalize_lift_type
from records import (
    calculate_lift_types,
    find_lift_rank,
    mark_historical_prs,
    process_top_lifts,
    rank_annotation,
    strength_potential,
)
from sample_data import SAMPLE_ROWS, transpose_dates_to_today
from settings_schema import SettingsSchema

logger = logging.getLogger(__name__)

DEMO_NOTICE = "demo_data"
LOADED_NOTICE = "data_loaded"


class LiftDataService:
    """Parse a lifting sheet and cache every view derived from it.

    Nothing is patched in place: loading new rows or calling
    :meth:`invalidate` drops the cached dataset and the next accessor runs
    the whole pipeline again from the raw rows.
    """

    def __init__(
        self,
        settings: SettingsSchema | None = None,
        today: Callable[[], datetime.date] | None = None,
    ) -> None:
        self.settings = settings or SettingsSchema()
        self._today = today or datetime.date.today
        self._rows: Optional[Sequence[Sequence[str]]] = None
        self._cache: dict[str, dict] = {}
        self._shown: set[str] = set()
        self.parse_error: str | None = None
        self.is_demo = True

    def load(self, rows: Optional[Sequence[Sequence[str]]]) -> None:
        """Replace the source rows; ``None`` switches to the sample data."""
        self._rows = rows
        self.is_demo = rows is None
        self.parse_error = None
        self.invalidate()

    def invalidate(self) -> None:
        """Clear any cached derived data."""
        self._cache.clear()

    def recompute(self) -> dict:
        self.invalidate()
        return self._dataset()

    def _parse(self) -> list[dict]:
        self.parse_error = None
        if self._rows is None:
            self.is_demo = True
            entries = parse_data(SAMPLE_ROWS)
            return transpose_dates_to_today(entries, self._today())
        self.is_demo = False
        try:
            return parse_data(self._rows)
        except MissingColumnsError as e:
            logger.error("Data parsing error: %s", e)
            self.parse_error = str(e)
            return []

    def _dataset(self) -> dict:
        if "dataset" in self._cache:
            return self._cache["dataset"]
        s = self.settings
        today = self._today()
        entries = mark_historical_prs(self._parse())
        dates = session_dates(entries)
        tonnage = session_tonnage_lookup(entries)
        data = {
            "entries": entries,
            "lift_types": calculate_lift_types(entries),
            "top_lifts": process_top_lifts(
                entries,
                formula=s.e1rm_formula,
                cap=s.top_lifts_cap,
                window_days=s.rolling_window_days,
            ),
            "session_tonnage": tonnage,
            "top_tonnage": top_tonnage_by_type(entries, s.rolling_window_days),
            "lifetime_tonnage": lifetime_tonnage(tonnage, s.weight_unit, today),
            "streak": weekly_streak(dates, today, s.streak_min_sessions),
            "momentum": session_momentum(dates, today, s.momentum_window_days),
            "consistency": consistency_grades(dates, today),
        }
        self._cache["dataset"] = data
        logger.info(
            "Recomputed lift data: %d entries, %d lift types",
            len(entries),
            len(data["lift_types"]),
        )
        return data

    def entries(self) -> list[dict]:
        return self._dataset()["entries"]

    def lift_types(self) -> list[dict]:
        return self._dataset()["lift_types"]

    def top_lifts(self, last_12_months: bool = False) -> dict:
        tables = self._dataset()["top_lifts"]
        return tables["last_12_months" if last_12_months else "all_time"]

    def session_tonnage(self) -> dict:
        return self._dataset()["session_tonnage"]

    def top_tonnage(self) -> dict:
        return self._dataset()["top_tonnage"]

    def lifetime_tonnage(self) -> dict:
        return self._dataset()["lifetime_tonnage"]

    def streak(self) -> dict:
        return self._dataset()["streak"]

    def momentum(self) -> dict:
        return self._dataset()["momentum"]

    def consistency(self) -> list[dict]:
        return self._dataset()["consistency"]

    def rank_of(self, entry: dict, last_12_months: bool = False) -> dict:
        """Return the entry's rank among its lift's top sets and a label."""
        rank = find_lift_rank(entry, self.top_lifts(last_12_months))
        return {"rank": rank, "annotation": rank_annotation(rank, entry.get("reps", 0))}

    def strength_potential(self, lift_type: str) -> list[dict]:
        slots = self.top_lifts().get(normalize_lift_type(lift_type), [])
        return strength_potential(slots, self.settings.e1rm_formula)

    def notify_once(self, key: str) -> bool:
        """Return True the first time ``key`` is seen by this service."""
        if key in self._shown:
            return False
        self._shown.add(key)
        return True

    def pending_notices(self) -> list[str]:
        """Return user notices about the current dataset not shown before."""
        data = self._dataset()
        notices = []
        if self.is_demo and self.notify_once(DEMO_NOTICE):
            notices.append("Showing demo data. Connect a sheet to see your own lifts.")
        elif not self.is_demo and data["entries"] and self.notify_once(LOADED_NOTICE):
            notices.append(f"Loaded {len(data['entries'])} lifts from your sheet.")
        return notices

    def snapshot(self) -> dict:
        """Return every derived view as JSON-compatible data."""
        data = self._dataset()
        return {
            **data,
            "is_demo": self.is_demo,
            "parse_error": self.parse_error,
            "settings": self.settings.model_dump(
                exclude={"google_api_key", "sheet_id"}
            ),
        }
