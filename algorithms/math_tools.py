import math
from typing import Iterable


class MathTools:
    """Provides essential mathematical utilities for lift calculations."""

    @staticmethod
    def clamp(value: float, min_value: float, max_value: float) -> float:
        """Clamp ``value`` to the inclusive range [min_value, max_value]."""
        if min_value > max_value:
            raise ValueError("min_value must not exceed max_value")
        return max(min_value, min(value, max_value))

    @staticmethod
    def round_half_up(value: float) -> int:
        """Round ``value`` to the nearest whole number, halves away from zero."""
        if value < 0:
            return -math.floor(-value + 0.5)
        return math.floor(value + 0.5)

    @staticmethod
    def volume(sets: Iterable[tuple[int, float]]) -> float:
        """Compute training volume as the sum of reps times weight."""
        vol = 0.0
        for reps, weight in sets:
            vol += reps * weight
        return vol

    @staticmethod
    def percentage_change(recent: float, previous: float) -> int:
        """Return the rounded percent change from ``previous`` to ``recent``.

        Growth from nothing counts as 100 and no activity in either period
        as 0.
        """
        if previous > 0:
            return MathTools.round_half_up((recent - previous) / previous * 100)
        if recent > 0:
            return 100
        return 0
