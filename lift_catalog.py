import hashlib

from pydantic import BaseModel

from normalizer import normalize_lift_type

CORE_LIFT_TYPES = [
    "Back Squat",
    "Deadlift",
    "Bench Press",
    "Strict Press",
    "Snatch",
    "Power Snatch",
    "Clean",
    "Power Clean",
    "Front Squat",
]

LIFT_COLORS = {
    "Back Squat": "#9B2226",
    "Deadlift": "#005F73",
    "Bench Press": "#94D2BD",
    "Strict Press": "#544B3D",
    "Front Squat": "#0A9396",
    "Romanian Deadlift": "#EE9B00",
}


class LiftProfile(BaseModel):
    name: str
    color: str
    is_known: bool
    is_core: bool = False


def _fallback_color(lift_type: str) -> str:
    digest = hashlib.sha1(lift_type.encode("utf-8")).hexdigest()
    return f"#{digest[:6].upper()}"


def lift_profile(lift_type: str) -> LiftProfile:
    """Return display details for ``lift_type``.

    Lifts without a preset get ``is_known=False`` and a colour derived from
    the name, so the same lift always gets the same colour. Aliases such as
    ``"Squat"`` resolve to the canonical lift first.
    """
    lift_type = normalize_lift_type(lift_type)
    color = LIFT_COLORS.get(lift_type)
    if color is None:
        return LiftProfile(
            name=lift_type, color=_fallback_color(lift_type), is_known=False
        )
    return LiftProfile(
        name=lift_type,
        color=color,
        is_known=True,
        is_core=lift_type in CORE_LIFT_TYPES,
    )
