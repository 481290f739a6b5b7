import argparse
import json
import logging
import sys

import pandas as pd

from algorithms import E1RM_FORMULAE, WeightConverter, estimate_e1rm, estimate_weight_for_reps
from settings_schema import load_settings
from stats_service import LiftDataService


def read_sheet_csv(csv_path: str) -> list[list[str]]:
    """Read a CSV export of a lifting sheet as rows of strings, headers first."""
    frame = pd.read_csv(
        csv_path,
        header=None,
        dtype=str,
        keep_default_na=False,
    )
    return frame.values.tolist()


def analyze(csv_path: str | None, yaml_path: str, out_path: str | None = None) -> dict:
    """Run the full pipeline on ``csv_path`` (demo data when None)."""
    service = LiftDataService(load_settings(yaml_path))
    service.load(read_sheet_csv(csv_path) if csv_path else None)
    snapshot = service.snapshot()
    if service.parse_error:
        raise ValueError(service.parse_error)
    for notice in service.pending_notices():
        print(notice, file=sys.stderr)
    text = json.dumps(snapshot, indent=2, ensure_ascii=False)
    if out_path:
        with open(out_path, "w", encoding="utf-8") as f:
            f.write(text)
    else:
        print(text)
    return snapshot


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Strength Journeys lift data tools")
    parser.add_argument("-v", "--verbose", action="store_true")
    sub = parser.add_subparsers(dest="cmd", required=True)

    ana = sub.add_parser("analyze")
    ana.add_argument("--csv", required=True)
    ana.add_argument("--yaml", default="settings.yaml")
    ana.add_argument("--out")

    demo = sub.add_parser("demo")
    demo.add_argument("--yaml", default="settings.yaml")
    demo.add_argument("--out")

    est = sub.add_parser("e1rm")
    est.add_argument("--reps", type=int, required=True)
    est.add_argument("--weight", type=float, required=True)
    est.add_argument("--formula", choices=E1RM_FORMULAE, default="Brzycki")

    inv = sub.add_parser("weight_for_reps")
    inv.add_argument("--e1rm", type=float, required=True)
    inv.add_argument("--reps", type=int, required=True)
    inv.add_argument("--formula", choices=E1RM_FORMULAE, default="Brzycki")

    conv = sub.add_parser("convert")
    conv.add_argument("--weight", type=float, required=True)
    conv.add_argument("--unit", choices=["kg", "lb"], required=True)

    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        if args.cmd == "analyze":
            analyze(args.csv, args.yaml, args.out)
        elif args.cmd == "demo":
            analyze(None, args.yaml, args.out)
        elif args.cmd == "e1rm":
            print(estimate_e1rm(args.reps, args.weight, args.formula))
        elif args.cmd == "weight_for_reps":
            print(estimate_weight_for_reps(args.e1rm, args.reps, args.formula))
        elif args.cmd == "convert":
            if args.unit == "kg":
                print(f"{args.weight} kg = {WeightConverter.kg_to_lb(args.weight):.2f} lb")
            else:
                print(f"{args.weight} lb = {WeightConverter.lb_to_kg(args.weight):.2f} kg")
    except ValueError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
