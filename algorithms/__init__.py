from .math_tools import MathTools
from .weight_converter import WeightConverter
from .e1rm import (
    DEFAULT_FORMULA,
    E1RM_FORMULAE,
    estimate_e1rm,
    estimate_e1rm_many,
    estimate_weight_for_reps,
)

__all__ = [
    "MathTools",
    "WeightConverter",
    "DEFAULT_FORMULA",
    "E1RM_FORMULAE",
    "estimate_e1rm",
    "estimate_e1rm_many",
    "estimate_weight_for_reps",
]
