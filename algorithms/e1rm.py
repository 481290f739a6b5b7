"""Estimated one-rep max formulae and their inverses.

Every formula is expressed as a multiplier of the lifted weight for a given
rep count, ``e1rm = weight * factor(reps)``, so the inverse used to suggest
loads at other rep ranges is simply ``weight = e1rm / factor(reps)``.
See https://en.wikipedia.org/wiki/One-repetition_maximum for the sources.
"""

from __future__ import annotations

from typing import Callable, Sequence

import numpy as np

from .math_tools import MathTools

E1RM_FORMULAE = [
    "Brzycki",
    "Epley",
    "McGlothin",
    "Lombardi",
    "Mayhew",
    "OConner",
    "Wathan",
]
DEFAULT_FORMULA = "Brzycki"

# Estimates beyond 20 reps say little about a single, so reps are capped.
MAX_ESTIMATE_REPS = 20

_FACTORS: dict[str, Callable] = {
    "Brzycki": lambda r: 1 / (1.0278 - 0.0278 * r),
    "Epley": lambda r: 1 + r / 30,
    "McGlothin": lambda r: 100 / (101.3 - 2.67123 * r),
    "Lombardi": lambda r: np.power(r, 0.1),
    "Mayhew": lambda r: 100 / (52.2 + 41.9 * np.exp(-0.055 * r)),
    "OConner": lambda r: 1 + r / 40,
    "Wathan": lambda r: 100 / (48.8 + 53.8 * np.exp(-0.075 * r)),
}


def _factor(formula: str, reps):
    func = _FACTORS.get(formula, _FACTORS[DEFAULT_FORMULA])
    return func(np.minimum(reps, MAX_ESTIMATE_REPS))


def _check_reps(reps: int) -> None:
    if reps < 1:
        raise ValueError("reps must be at least 1")


def estimate_e1rm(reps: int, weight: float, formula: str = DEFAULT_FORMULA):
    """Return the rounded estimated one-rep max for ``reps`` at ``weight``.

    A single needs no estimate and is returned as is. Unknown formula names
    fall back to Brzycki.
    """
    _check_reps(reps)
    if reps == 1:
        return weight
    return MathTools.round_half_up(float(weight * _factor(formula, reps)))


def estimate_weight_for_reps(
    e1rm: float, target_reps: int, formula: str = DEFAULT_FORMULA
):
    """Return the rounded weight achievable for ``target_reps`` given ``e1rm``."""
    _check_reps(target_reps)
    if target_reps == 1:
        return e1rm
    return MathTools.round_half_up(float(e1rm / _factor(formula, target_reps)))


def estimate_e1rm_many(
    reps: Sequence[int], weights: Sequence[float], formula: str = DEFAULT_FORMULA
) -> np.ndarray:
    """Vectorised :func:`estimate_e1rm` over parallel ``reps``/``weights``."""
    r = np.asarray(reps, dtype=float)
    w = np.asarray(weights, dtype=float)
    if r.shape != w.shape:
        raise ValueError("reps and weights must have the same length")
    if r.size == 0:
        return np.array([], dtype=float)
    if np.any(r < 1):
        raise ValueError("reps must be at least 1")
    estimates = np.floor(w * _factor(formula, r) + 0.5)
    return np.where(r == 1, w, estimates)
