class WeightConverter:
    """Utility for converting between kg and lb."""

    LB_PER_KG = 2.2046
    UNITS = ("kg", "lb")

    @staticmethod
    def kg_to_lb(kg: float) -> float:
        return kg * WeightConverter.LB_PER_KG

    @staticmethod
    def lb_to_kg(lb: float) -> float:
        return lb / WeightConverter.LB_PER_KG

    @staticmethod
    def convert(value: float, from_unit: str, to_unit: str) -> float:
        """Convert ``value`` between units, unchanged when they match."""
        for unit in (from_unit, to_unit):
            if unit not in WeightConverter.UNITS:
                raise ValueError(f"unknown unit: {unit}")
        if from_unit == to_unit:
            return value
        if from_unit == "kg":
            return WeightConverter.kg_to_lb(value)
        return WeightConverter.lb_to_kg(value)
