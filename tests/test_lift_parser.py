import json
import os
import sys
import unittest

sys.path.append(os.path.dirname(os.path.dirname(__file__)))
from lift_parser import MissingColumnsError, parse_data

HEADER = ["Date", "Lift Type", "Reps", "Weight"]

TURNKEY_HEADER = [
    "user_name",
    "workout_id",
    "workout_date",
    "workout_completed",
    "exercise_name",
    "assigned_sets",
    "assigned_reps",
    "assigned_weight",
    "actual_sets",
    "actual_reps",
    "actual_weight",
    "weight_units",
    "assigned_exercise_missed",
]


class BespokeParserTestCase(unittest.TestCase):
    def test_squat_is_normalised(self) -> None:
        rows = [
            HEADER,
            ["2024-06-01", "Squat", "5", "225lb"],
            ["2024-06-08", "Squat", "5", "230lb"],
        ]
        entries = parse_data(rows)
        self.assertEqual(len(entries), 2)
        self.assertEqual(
            entries[0],
            {
                "date": "2024-06-01",
                "lift_type": "Back Squat",
                "reps": 5,
                "weight": 225.0,
                "unit_type": "lb",
            },
        )
        self.assertEqual(entries[1]["weight"], 230.0)

    def test_missing_weight_column(self) -> None:
        with self.assertRaises(MissingColumnsError) as ctx:
            parse_data([["Date", "Lift Type", "Reps"], ["2024-06-01", "Squat", "5"]])
        self.assertIn("Weight", str(ctx.exception))
        self.assertEqual(ctx.exception.missing, ["Weight"])

    def test_missing_columns_listed_in_order(self) -> None:
        with self.assertRaises(ValueError) as ctx:
            parse_data([["Notes", "Reps"]])
        self.assertEqual(
            str(ctx.exception), "Missing required columns: Date, Lift Type, Weight"
        )

    def test_empty_sheet(self) -> None:
        with self.assertRaises(MissingColumnsError):
            parse_data([])

    def test_parsing_is_repeatable(self) -> None:
        rows = [
            HEADER + ["Notes"],
            ["2024-01-03", "Bench", "5", "60kg", "easy"],
            ["2024-01-01", "Deadlift", "3", "140kg", ""],
            ["", "", "3", "145kg", ""],
        ]
        first = json.dumps(parse_data(rows))
        second = json.dumps(parse_data(rows))
        self.assertEqual(first, second)

    def test_equal_dates_keep_row_order(self) -> None:
        rows = [
            HEADER,
            ["2024-01-02", "Deadlift", "5", "200lb"],
            ["2024-01-01", "Bench Press", "5", "100lb"],
            ["2024-01-02", "Back Squat", "5", "150lb"],
            ["", "Strict Press", "5", "60lb"],
            ["2024-01-01", "Front Squat", "5", "120lb"],
        ]
        lifts = [e["lift_type"] for e in parse_data(rows)]
        self.assertEqual(
            lifts,
            ["Bench Press", "Front Squat", "Deadlift", "Back Squat", "Strict Press"],
        )

    def test_blank_cells_inherit(self) -> None:
        rows = [
            HEADER,
            ["2024-01-01", "Squat", "5", "100"],
            ["", "", "3", "90"],
        ]
        entries = parse_data(rows)
        self.assertEqual(entries[1]["date"], "2024-01-01")
        self.assertEqual(entries[1]["lift_type"], "Back Squat")
        self.assertEqual(entries[1]["reps"], 3)

    def test_invalid_date_drops_inheriting_rows(self) -> None:
        rows = [
            HEADER,
            ["2024-99-99", "Squat", "5", "100"],
            ["", "", "3", "90"],
        ]
        with self.assertLogs("lift_parser", level="WARNING"):
            self.assertEqual(parse_data(rows), [])

    def test_invalid_date_resets_until_next_date(self) -> None:
        rows = [
            HEADER,
            ["2024-01-01", "Squat", "5", "100"],
            ["not a date", "", "5", "100"],
            ["", "", "5", "100"],
            ["2024-01-03", "", "5", "105"],
        ]
        with self.assertLogs("lift_parser", level="WARNING"):
            entries = parse_data(rows)
        self.assertEqual([e["date"] for e in entries], ["2024-01-01", "2024-01-03"])
        self.assertEqual(entries[1]["lift_type"], "Back Squat")

    def test_rows_without_reps_or_weight_dropped(self) -> None:
        rows = [
            HEADER,
            ["2023-12-30", "Squat", "", "100"],
            ["2024-01-01", "Squat", "5", "100"],
            ["", "", "5", ""],
            ["", "", "0", "100"],
            ["", "", "5", "0"],
            ["", "", "five", "100"],
            ["", "", "5", "heavy"],
        ]
        entries = parse_data(rows)
        self.assertEqual(len(entries), 1)
        self.assertEqual(entries[0]["date"], "2024-01-01")

    def test_blank_leading_date_dropped(self) -> None:
        rows = [HEADER, ["", "Squat", "5", "100"], ["2024-01-01", "", "5", "100"]]
        self.assertEqual(parse_data(rows), [])

    def test_optional_columns(self) -> None:
        rows = [
            ["Date", "Lift Type", "Reps", "Weight", "Notes", "isGoal", "Label", "URL"],
            ["2024-01-01", "Deadlift", "1", "405lb", "smoke", "", "Meet", "https://x.y/v"],
            ["2024-01-02", "Deadlift", "1", "500lb", "", "TRUE", "", ""],
            ["2024-01-03", "Deadlift", "1", "410lb", "", "FALSE", "", ""],
        ]
        first, goal, third = parse_data(rows)
        self.assertEqual(first["notes"], "smoke")
        self.assertEqual(first["label"], "Meet")
        self.assertEqual(first["url"], "https://x.y/v")
        self.assertNotIn("is_goal", first)
        self.assertIs(goal["is_goal"], True)
        self.assertNotIn("notes", goal)
        self.assertIs(third["is_goal"], False)

    def test_column_order_and_aliases(self) -> None:
        rows = [
            ["weight", "Exercise", "Day", "Repetitions", "RPE"],
            ["100kg", "OHP", "2024-2-3", "3", "8"],
        ]
        self.assertEqual(
            parse_data(rows),
            [
                {
                    "date": "2024-02-03",
                    "lift_type": "Strict Press",
                    "reps": 3,
                    "weight": 100.0,
                    "unit_type": "kg",
                }
            ],
        )

    def test_duplicate_columns_first_wins(self) -> None:
        rows = [
            ["Date", "Lift Type", "Reps", "Weight", "Load"],
            ["2024-01-01", "Bench", "5", "100", "999"],
        ]
        self.assertEqual(parse_data(rows)[0]["weight"], 100.0)

    def test_short_rows_padded(self) -> None:
        rows = [
            ["Date", "Lift Type", "Reps", "Weight", "Notes"],
            ["2024-01-01", "Bench", "5", "100"],
        ]
        entries = parse_data(rows)
        self.assertEqual(len(entries), 1)
        self.assertNotIn("notes", entries[0])


class TurnKeyParserTestCase(unittest.TestCase):
    def row(self, **values) -> list:
        defaults = {
            "user_name": "sam",
            "workout_id": "42",
            "workout_date": "2024-03-01",
            "workout_completed": "TRUE",
            "exercise_name": "Squat",
            "assigned_sets": "1",
            "assigned_reps": "5",
            "assigned_weight": "100",
            "actual_sets": "",
            "actual_reps": "",
            "actual_weight": "",
            "weight_units": "kg",
            "assigned_exercise_missed": "FALSE",
        }
        defaults.update(values)
        return [defaults[name] for name in TURNKEY_HEADER]

    def test_detects_layout(self) -> None:
        entries = parse_data([TURNKEY_HEADER, self.row()])
        self.assertEqual(
            entries,
            [
                {
                    "date": "2024-03-01",
                    "lift_type": "Back Squat",
                    "reps": 5,
                    "weight": 100.0,
                    "unit_type": "kg",
                    "url": "https://app.turnkey.coach//workout/42",
                }
            ],
        )

    def test_actuals_override_assignment(self) -> None:
        entries = parse_data(
            [TURNKEY_HEADER, self.row(actual_reps="3", actual_weight="110")]
        )
        self.assertEqual((entries[0]["reps"], entries[0]["weight"]), (3, 110.0))

    def test_partial_actuals_ignored(self) -> None:
        entries = parse_data([TURNKEY_HEADER, self.row(actual_reps="3")])
        self.assertEqual((entries[0]["reps"], entries[0]["weight"]), (5, 100.0))

    def test_sets_expand(self) -> None:
        entries = parse_data([TURNKEY_HEADER, self.row(assigned_sets="3")])
        self.assertEqual(len(entries), 3)
        self.assertEqual(
            [e["notes"] for e in entries], ["Set 1 of 3", "Set 2 of 3", "Set 3 of 3"]
        )

    def test_skipped_rows(self) -> None:
        rows = [
            TURNKEY_HEADER,
            self.row(workout_completed="FALSE"),
            self.row(assigned_exercise_missed="TRUE"),
            self.row(assigned_reps=""),
            self.row(assigned_weight="0"),
            TURNKEY_HEADER,
            self.row(exercise_name="Deadlift", workout_date="2024-02-01", weight_units="lbs"),
        ]
        entries = parse_data(rows)
        self.assertEqual(len(entries), 1)
        self.assertEqual(entries[0]["lift_type"], "Deadlift")
        self.assertEqual(entries[0]["unit_type"], "lb")

    def test_sorted_by_date(self) -> None:
        rows = [
            TURNKEY_HEADER,
            self.row(workout_date="2024-03-05"),
            self.row(workout_date="2024-03-01"),
        ]
        self.assertEqual(
            [e["date"] for e in parse_data(rows)], ["2024-03-01", "2024-03-05"]
        )


if __name__ == "__main__":
    unittest.main()
