"""Plain-text exports: package description files and a calculation summary."""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional, Union

from ..sizing.models import Recommendations, SizingResult
from ..sizing.packages import PackagePreset

PACKAGE_FILENAME_PREFIX = "solar-package-"
RULE_STAR = "*" * 75
RULE_EQ = "=" * 75
FOOTER = "Generated by Off-Grid Solar Sizer"


def package_description(pkg: PackagePreset) -> str:
    lines = [
        RULE_STAR,
        "Common 24-hour Solar Setups",
        RULE_STAR,
        "",
        "",
        f"Package: {pkg.name}",
        f"Estimated Daily Load: {pkg.daily_wh:g} Wh/day",
        f"PV: {pkg.pv}",
        f"Battery (LiFePO4): {pkg.battery_lfp}",
        f"Battery (Lead-Acid): {pkg.battery_lead_acid}",
        f"Inverter: {pkg.inverter}",
        f"Controller: {pkg.controller}",
        f"Runs: {', '.join(pkg.runs)}",
        "",
        RULE_EQ,
        FOOTER,
        RULE_EQ,
        "",
    ]
    return "\n".join(lines)


def write_package_file(pkg: PackagePreset, directory: Union[str, Path] = ".") -> Path:
    path = Path(directory) / f"{PACKAGE_FILENAME_PREFIX}{pkg.key}.txt"
    path.write_text(package_description(pkg), encoding="utf-8")
    return path


def summary_text(result: SizingResult, recs: Optional[Recommendations] = None) -> str:
    """Human readable calculation summary (console output and .txt export)."""
    lines: List[str] = [
        "Solar System Summary",
        RULE_EQ,
        f"Day consumption:    {result.total_day_wh:.2f} Wh/day",
        f"Night consumption:  {result.total_night_wh:.2f} Wh/day",
        f"Total consumption:  {result.total_watt_hours:.2f} Wh/day "
        f"(AC {result.total_ac_wh:.2f} / DC {result.total_dc_wh:.2f})",
        f"Inverter size:      {result.inverter_size_w:.2f} W (AC load {result.total_ac_watts:.2f} W)",
        f"Panel wattage:      {result.solar_panel_watts:.2f} W ({result.sun_hours:g} sun hours)",
        f"Controller size:    {result.controller_amps:.2f} A @ {result.system_voltage} V",
        "",
        f"Battery capacity for night load ({result.days_of_autonomy:g} day(s) autonomy):",
    ]
    for name, wh in result.battery_sizing_wh.items():
        marker = "*" if name == result.battery_type else " "
        lines.append(f" {marker} {name:<8} {wh:10.2f} Wh  ~{result.battery_ah(name):.2f} Ah")

    if recs is not None:
        lines += ["", f"Solar panels (summer {recs.panels.required_watts:.0f} W, "
                      f"winter {recs.panels.winter_required_watts:.0f} W):"]
        for o in recs.panels.options:
            lines.append(f"   {o.unit_watts:>4.0f}W panel: {o.count} summer / {o.winter_count} winter")

        battery = recs.battery
        lines += ["", f"{battery.battery_type} batteries ({battery.required_ah:.0f} Ah @ {battery.system_voltage}V):"]
        if battery.options:
            for o in battery.options:
                lines.append(f"   {o.unit_ah:>4.0f}Ah battery: {o.count} unit(s) ({o.total_ah:.0f} Ah total)")
        else:
            lines.append(f"   no common {battery.system_voltage}V battery sizes listed")

        inv = recs.inverter
        if inv.parallel_inverters:
            lines += ["", f"Inverter of {inv.inverter_w:.0f} W exceeds single-unit ranges; "
                          "consider parallel inverters on a 48V bus."]
        elif not inv.matches:
            lines += ["", f"A {inv.inverter_w:.0f} W inverter is best served by a "
                          f"{inv.recommended_voltage}V system (current: {inv.system_voltage}V)."]

        safe = recs.safe_specs
        lines += [
            "",
            f"Safe specs ({safe.days_of_autonomy:g} days, lead-acid worst case):",
            f"   battery {safe.battery_wh:.0f} Wh, panels {safe.panel_watts:.0f} W, inverter {safe.inverter_w:.0f} W",
        ]

    return "\n".join(lines) + "\n"
