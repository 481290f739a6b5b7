import os
import sys
import unittest

sys.path.append(os.path.dirname(os.path.dirname(__file__)))
from normalizer import (
    normalize_column_name,
    normalize_date,
    normalize_lift_type,
    parse_reps,
    parse_weight,
)


class ColumnNameTestCase(unittest.TestCase):
    def test_canonical_names_unchanged(self) -> None:
        for name in ("Date", "Lift Type", "Reps", "Weight", "Notes", "isGoal", "Label", "URL"):
            self.assertEqual(normalize_column_name(name), name)

    def test_aliases(self) -> None:
        self.assertEqual(normalize_column_name("Exercise"), "Lift Type")
        self.assertEqual(normalize_column_name("Load"), "Weight")
        self.assertEqual(normalize_column_name("Comments"), "Notes")
        self.assertEqual(normalize_column_name("Link"), "URL")

    def test_loose_spelling(self) -> None:
        self.assertEqual(normalize_column_name("lift_type"), "Lift Type")
        self.assertEqual(normalize_column_name("  REPS "), "Reps")
        self.assertEqual(normalize_column_name("is-goal"), "isGoal")

    def test_unknown_passes_through(self) -> None:
        self.assertEqual(normalize_column_name("RPE"), "RPE")


class LiftTypeTestCase(unittest.TestCase):
    def test_aliases(self) -> None:
        self.assertEqual(normalize_lift_type("Squat"), "Back Squat")
        self.assertEqual(normalize_lift_type(" bench "), "Bench Press")
        self.assertEqual(normalize_lift_type("OHP"), "Strict Press")
        self.assertEqual(normalize_lift_type("RDL"), "Romanian Deadlift")

    def test_unknown_passes_through(self) -> None:
        self.assertEqual(normalize_lift_type("Zercher Squat"), "Zercher Squat")


class DateTestCase(unittest.TestCase):
    def test_valid(self) -> None:
        self.assertEqual(normalize_date("2024-06-01"), "2024-06-01")
        self.assertEqual(normalize_date("2024-6-1"), "2024-06-01")
        self.assertEqual(normalize_date(" 2024-12-31 "), "2024-12-31")

    def test_invalid(self) -> None:
        for value in ("2024-99-99", "2024-13-01", "2024-01-32", "24-01-01",
                      "2024/01/01", "01-01-2024", "yesterday", "", None):
            self.assertIsNone(normalize_date(value), value)


class WeightAndRepsTestCase(unittest.TestCase):
    def test_weight_units(self) -> None:
        self.assertEqual(parse_weight("225lb"), {"value": 225.0, "unit_type": "lb"})
        self.assertEqual(parse_weight("100 KG"), {"value": 100.0, "unit_type": "kg"})
        self.assertEqual(parse_weight("102.5kg"), {"value": 102.5, "unit_type": "kg"})
        self.assertEqual(parse_weight("135"), {"value": 135.0, "unit_type": "lb"})

    def test_weight_unparseable(self) -> None:
        self.assertEqual(parse_weight(""), {"value": None, "unit_type": None})
        self.assertIsNone(parse_weight("heavy")["value"])

    def test_reps(self) -> None:
        self.assertEqual(parse_reps("5"), 5)
        self.assertEqual(parse_reps("5 reps"), 5)
        self.assertIsNone(parse_reps(""))
        self.assertIsNone(parse_reps("x"))


if __name__ == "__main__":
    unittest.main()
