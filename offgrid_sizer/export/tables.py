"""
Tabular views of a sizing result, shared by the UI and the exporters.
"""

from __future__ import annotations

import pandas as pd

from ..sizing.models import BatteryGuide, CustomCheckResult, PanelGuide, SafeSpecs, SizingResult


def key_specs_table(result: SizingResult) -> pd.DataFrame:
    return pd.DataFrame({
        "Parameter": [
            "Day Consumption",
            "Night Consumption",
            "Total Consumption",
            "Total AC Load",
            "Inverter Size",
            "Panel Wattage",
            "Controller Size",
            f"Battery ({result.battery_type})",
            "System Voltage",
            "Peak Sun Hours",
            "Days of Autonomy",
        ],
        "Value": [
            f"{result.total_day_wh:.2f} Wh/day",
            f"{result.total_night_wh:.2f} Wh/day",
            f"{result.total_watt_hours:.2f} Wh/day",
            f"{result.total_ac_watts:.2f} W",
            f"{result.inverter_size_w:.2f} W",
            f"{result.solar_panel_watts:.2f} W",
            f"{result.controller_amps:.2f} A",
            f"{result.required_battery_wh:.2f} Wh (~{result.battery_ah():.2f} Ah)",
            f"{result.system_voltage} V",
            f"{result.sun_hours:g} h",
            f"{result.days_of_autonomy:g}",
        ],
    })


def battery_table(result: SizingResult) -> pd.DataFrame:
    rows = [
        {
            "Chemistry": name,
            "Required (Wh)": round(wh, 2),
            f"Required (Ah @{result.system_voltage}V)": round(result.battery_ah(name), 2),
        }
        for name, wh in result.battery_sizing_wh.items()
    ]
    return pd.DataFrame(rows)


def device_table(result: SizingResult) -> pd.DataFrame:
    columns = ["Device", "Type", "Qty", "Watts", "Day (h)", "Night (h)", "Wh/day"]
    rows = [
        [d.name or "Unnamed", d.power_type.value, d.quantity, d.watts, d.day_hours, d.night_hours, d.watt_hours]
        for d in result.devices
    ]
    return pd.DataFrame(rows, columns=columns)


def panel_guide_table(guide: PanelGuide) -> pd.DataFrame:
    return pd.DataFrame({
        "Panel": [f"{o.unit_watts:g}W" for o in guide.options],
        "Summer": [o.count for o in guide.options],
        "Winter": [o.winter_count for o in guide.options],
        "Summer total (W)": [o.total_watts for o in guide.options],
        "Winter total (W)": [o.winter_total_watts for o in guide.options],
    })


def battery_guide_table(guide: BatteryGuide) -> pd.DataFrame:
    return pd.DataFrame({
        "Battery": [f"{o.unit_ah:g}Ah" for o in guide.options],
        "Units": [o.count for o in guide.options],
        "Total (Ah)": [o.total_ah for o in guide.options],
    })


def safe_specs_table(specs: SafeSpecs) -> pd.DataFrame:
    return pd.DataFrame({
        "Parameter": ["Days of Autonomy", "Battery", "Panels", "Inverter"],
        "Value": [
            f"{specs.days_of_autonomy:g}",
            f"{specs.battery_wh:.0f} Wh (~{specs.battery_ah:.0f} Ah)",
            f"{specs.panel_watts:.0f} W",
            f"{specs.inverter_w:.0f} W",
        ],
    })


def custom_check_table(check: CustomCheckResult) -> pd.DataFrame:
    autonomy = "n/a (no load)" if check.autonomy_days is None else (
        f"{check.autonomy_days:.1f} days ({check.autonomy_days * 24:.1f} hrs)"
    )
    return pd.DataFrame({
        "Parameter": [
            "Inverter",
            "Solar Panels",
            "Battery",
            "Daily Load",
            "Sun Hours",
            "System Autonomy",
            "Daily Energy Balance",
        ],
        "Value": [
            f"{check.system.inverter_w:g} W",
            f"{check.system.panel_w:g} W",
            f"{check.system.battery_ah:g} Ah @ {check.system.battery_v:g} V ({check.battery_wh:g} Wh)",
            f"{check.daily_load_wh:.0f} Wh",
            f"{check.sun_hours:g} h",
            autonomy,
            f"{check.net_energy_wh:.0f} Wh",
        ],
    })
