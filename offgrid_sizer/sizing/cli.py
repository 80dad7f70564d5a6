from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict

from pydantic import ValidationError

from .custom_check import check_custom_system
from .errors import InsufficientInputError, SizingError
from .models import CustomSystem
from .packages import SOLAR_PACKAGES, get_package
from .parsing import parse_request
from .policy import DEFAULT_POLICY, SizingPolicy
from .recommend import recommend
from .sizer import size_system
from .storage import LastCalculationStore


def load_request(path: str) -> Dict[str, Any]:
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(f"Input JSON not found: {path}")
    data = json.loads(p.read_text())
    if not isinstance(data, dict):
        raise ValueError("Input JSON must be an object with 'appliances' and 'system' keys")
    return data


def _cmd_size(args: argparse.Namespace) -> int:
    # Deferred so `check` and `packages` don't pay for matplotlib/pandas imports.
    from ..export.pdf import write_summary_pdf
    from ..export.text import summary_text

    try:
        raw = load_request(args.input)
        policy = SizingPolicy.model_validate(raw["policy"]) if "policy" in raw else DEFAULT_POLICY
        report = parse_request(raw)
    except ValidationError as e:
        print("Input validation error:", file=sys.stderr)
        print(e, file=sys.stderr)
        return 2
    except (FileNotFoundError, json.JSONDecodeError, ValueError) as e:
        print(f"Input error: {e}", file=sys.stderr)
        return 2

    if report.issues:
        print("\nInput warnings:", file=sys.stderr)
        for issue in report.issues:
            print(f"- {issue}", file=sys.stderr)

    try:
        result = size_system(report.appliances, report.configuration, policy)
    except InsufficientInputError as e:
        print(e, file=sys.stderr)
        return 1
    except SizingError as e:
        print(f"Input error: {e}", file=sys.stderr)
        return 2

    recs = recommend(result, policy)
    text = summary_text(result, recs)
    print(text, end="")

    if args.text:
        Path(args.text).write_text(text)
    if args.json:
        payload = {"result": result.model_dump(mode="json"), "recommendations": recs.model_dump(mode="json")}
        Path(args.json).write_text(json.dumps(payload, indent=2))
    if args.pdf:
        write_summary_pdf(result, args.pdf, recs)
    if not args.no_save:
        LastCalculationStore(args.state).save(result)
    return 0


def _cmd_check(args: argparse.Namespace) -> int:
    try:
        system = CustomSystem(
            inverter_w=args.inverter,
            panel_w=args.panel,
            battery_ah=args.battery_ah,
            battery_v=args.battery_v,
        )
    except ValidationError as e:
        print("Input validation error:", file=sys.stderr)
        print(e, file=sys.stderr)
        return 2

    last = LastCalculationStore(args.state).load()
    check = check_custom_system(system, last)

    print(f"Daily load: {check.daily_load_wh:.0f} Wh, sun hours: {check.sun_hours:g} h")
    print(f"Battery: {check.battery_wh:.0f} Wh ({check.safe_battery_wh:.0f} Wh usable)")
    if check.autonomy_days is not None:
        print(f"System autonomy: {check.autonomy_days:.1f} days ({check.autonomy_days * 24:.1f} hrs)")
    print(f"Daily energy balance: {check.net_energy_wh:.0f} Wh")
    print(check.message)

    if args.pdf:
        from ..export.pdf import write_custom_check_pdf

        write_custom_check_pdf(check, args.pdf)
    return 0


def _cmd_packages(args: argparse.Namespace) -> int:
    from ..export.text import write_package_file

    if args.write:
        try:
            pkg = get_package(args.write)
        except KeyError as e:
            print(e.args[0], file=sys.stderr)
            return 2
        path = write_package_file(pkg, args.directory)
        print(f"Wrote {path}")
        return 0

    for pkg in SOLAR_PACKAGES:
        print(f"{pkg.key:<10} {pkg.name:<15} {pkg.daily_wh:>6g} Wh/day  PV {pkg.pv}, inverter {pkg.inverter}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Off-grid solar system sizing calculator.")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging.")
    parser.add_argument(
        "--state",
        help="Path of the saved last-calculation file (default: ~/.offgrid_sizer/last_calculation.json).",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("size", help="Size a system from a JSON list of appliances.")
    p.add_argument("input", help="Path to input JSON with 'appliances', 'system' and optional 'policy'.")
    p.add_argument("--pdf", help="Write a PDF summary to this path.")
    p.add_argument("--text", help="Write the text summary to this path.")
    p.add_argument("--json", help="Write the full result and recommendations as JSON.")
    p.add_argument("--no-save", action="store_true", help="Do not update the saved last calculation.")
    p.set_defaults(func=_cmd_size)

    p = sub.add_parser("check", help="Check a custom system against the last calculated load.")
    p.add_argument("--inverter", type=float, default=1000.0, help="Inverter rating (W).")
    p.add_argument("--panel", type=float, default=400.0, help="Total panel wattage (W).")
    p.add_argument("--battery-ah", type=float, default=100.0, help="Battery capacity (Ah).")
    p.add_argument("--battery-v", type=float, default=12.0, help="Battery voltage (V).")
    p.add_argument("--pdf", help="Write a PDF report to this path.")
    p.set_defaults(func=_cmd_check)

    p = sub.add_parser("packages", help="List common setups or write one as a text file.")
    p.add_argument("--write", metavar="KEY", help="Package key to write as solar-package-<key>.txt.")
    p.add_argument("--directory", default=".", help="Directory for the written file.")
    p.set_defaults(func=_cmd_packages)

    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")
    return args.func(args)


if __name__ == "__main__":
    raise SystemExit(main())
