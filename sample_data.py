import datetime
from typing import Optional

SAMPLE_ROWS = [
    ["Date", "Lift Type", "Reps", "Weight", "Notes", "isGoal", "Label", "URL"],
    ["2023-01-09", "Back Squat", "5", "185lb", "", "", "", ""],
    ["", "", "5", "185lb", "", "", "", ""],
    ["", "", "5", "185lb", "", "", "", ""],
    ["", "Bench Press", "5", "135lb", "", "", "", ""],
    ["", "", "5", "135lb", "", "", "", ""],
    ["2023-01-11", "Deadlift", "5", "225lb", "First time pulling in months", "", "", ""],
    ["", "Strict Press", "5", "85lb", "", "", "", ""],
    ["", "", "5", "85lb", "", "", "", ""],
    ["2023-01-13", "Back Squat", "5", "195lb", "", "", "", ""],
    ["", "", "5", "195lb", "", "", "", ""],
    ["", "Bench Press", "5", "140lb", "", "", "", ""],
    ["2023-03-06", "Back Squat", "3", "225lb", "", "", "", ""],
    ["", "Deadlift", "3", "275lb", "", "", "", ""],
    ["2023-03-08", "Bench Press", "3", "160lb", "", "", "", ""],
    ["", "Strict Press", "3", "105lb", "", "", "", ""],
    ["2023-03-10", "Back Squat", "1", "255lb", "Comp practice", "", "Heavy single", ""],
    ["2023-06-12", "Deadlift", "1", "335lb", "", "", "Heavy single", ""],
    ["2023-06-14", "Bench Press", "1", "190lb", "", "", "", ""],
    ["2023-09-04", "Back Squat", "5", "235lb", "", "", "", ""],
    ["", "", "5", "235lb", "", "", "", ""],
    ["2023-09-06", "Front Squat", "3", "165lb", "", "", "", ""],
    ["2023-09-08", "Romanian Deadlift", "8", "185lb", "", "", "", ""],
    ["2023-12-04", "Back Squat", "1", "275lb", "New PR", "", "Heavy single", ""],
    ["2023-12-06", "Deadlift", "3", "315lb", "", "", "", ""],
    ["2023-12-08", "Strict Press", "1", "135lb", "Finally a plate", "", "", ""],
    ["2024-01-01", "Back Squat", "1", "315lb", "", "TRUE", "Goal", ""],
]


def transpose_dates_to_today(
    entries: list[dict], today: Optional[datetime.date] = None
) -> list[dict]:
    """Shift every entry date so the latest one falls on ``today``."""
    if not entries:
        return []
    end = today if today is not None else datetime.date.today()
    lifts = [e for e in entries if e.get("is_goal") is not True] or entries
    latest = max(datetime.date.fromisoformat(e["date"]) for e in lifts)
    shift = end - latest
    shifted = []
    for entry in entries:
        item = dict(entry)
        item["date"] = (datetime.date.fromisoformat(entry["date"]) + shift).isoformat()
        shifted.append(item)
    return shifted
