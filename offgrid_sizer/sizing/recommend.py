"""
Recommendation Generator
========================

Maps required capacities onto common commercial unit sizes. Every unit count
rounds up: a combination may over-provision but never under-provision.
"""

from __future__ import annotations

import math
from typing import Sequence, Tuple

import numpy as np

from .models import (
    BatteryGuide,
    BatteryOption,
    InverterAdvice,
    PanelGuide,
    PanelOption,
    Recommendations,
    SafeSpecs,
    SizingResult,
    WeatherScenario,
)
from .policy import DEFAULT_POLICY, SizingPolicy


def units_needed(required: float, unit: float) -> int:
    """Smallest n >= 0 with n * unit >= required."""
    if unit <= 0:
        raise ValueError("unit size must be positive")
    if required <= 0:
        return 0
    n = math.ceil(required / unit)
    # guard against the quotient landing one ulp above an exact multiple
    if n > 1 and (n - 1) * unit >= required:
        n -= 1
    while n * unit < required:
        n += 1
    return n


def _counts(required: float, units: Sequence[float]) -> np.ndarray:
    sizes = np.asarray(units, dtype=float)
    if sizes.size == 0:
        return np.zeros(0, dtype=int)
    return np.array([units_needed(required, float(u)) for u in sizes], dtype=int)


def panel_guide(solar_panel_watts: float, policy: SizingPolicy = DEFAULT_POLICY) -> PanelGuide:
    """Panel counts per catalog wattage for the nominal and winter requirement."""
    winter_watts = solar_panel_watts * policy.winter_panel_factor
    summer = _counts(solar_panel_watts, policy.panel_catalog_w)
    winter = _counts(winter_watts, policy.panel_catalog_w)
    options = tuple(
        PanelOption(unit_watts=float(w), count=int(s), winter_count=int(wc))
        for w, s, wc in zip(policy.panel_catalog_w, summer, winter)
    )
    return PanelGuide(required_watts=solar_panel_watts, winter_required_watts=winter_watts, options=options)


def battery_guide(
    required_wh: float,
    system_voltage: int,
    battery_type: str = "",
    policy: SizingPolicy = DEFAULT_POLICY,
) -> BatteryGuide:
    """Battery counts per catalog Ah size for the system voltage (none for a voltage without a catalog)."""
    if system_voltage <= 0:
        raise ValueError("system_voltage must be positive")
    required_ah = required_wh / system_voltage
    units = policy.battery_catalog_ah.get(system_voltage, ())
    counts = _counts(required_ah, units)
    options = tuple(BatteryOption(unit_ah=float(ah), count=int(c)) for ah, c in zip(units, counts))
    return BatteryGuide(
        battery_type=battery_type,
        required_wh=required_wh,
        system_voltage=system_voltage,
        required_ah=required_ah,
        options=options,
    )


def safe_specs(result: SizingResult, policy: SizingPolicy = DEFAULT_POLICY) -> SafeSpecs:
    """
    Conservative fallback sizing that ignores the chosen chemistry and autonomy.

    The whole daily load (not only the night load) is stored for the profile's
    days of autonomy on a lead-acid style bank.
    """
    profile = policy.safe_spec
    battery_wh = (result.total_watt_hours * profile.days_of_autonomy) / (
        profile.efficiency * profile.depth_of_discharge
    )
    return SafeSpecs(
        days_of_autonomy=profile.days_of_autonomy,
        battery_wh=battery_wh,
        battery_ah=battery_wh / result.system_voltage,
        panel_watts=(battery_wh / result.sun_hours) * profile.panel_buffer,
        inverter_w=result.total_ac_watts * profile.inverter_buffer,
    )


def inverter_voltage_advice(
    inverter_w: float, system_voltage: int, policy: SizingPolicy = DEFAULT_POLICY
) -> InverterAdvice:
    """Recommend the bus voltage whose band covers the inverter size."""
    bands = sorted(policy.inverter_voltage_bands, key=lambda b: b.system_voltage)
    for band in bands:
        if inverter_w <= band.max_w:
            return InverterAdvice(
                inverter_w=inverter_w, system_voltage=system_voltage, recommended_voltage=band.system_voltage
            )
    return InverterAdvice(
        inverter_w=inverter_w,
        system_voltage=system_voltage,
        recommended_voltage=bands[-1].system_voltage if bands else None,
        parallel_inverters=True,
    )


def weather_scenarios(result: SizingResult, policy: SizingPolicy = DEFAULT_POLICY) -> Tuple[WeatherScenario, ...]:
    """Daily PV generation of the sized array under each weather scenario."""
    labels = list(policy.weather_factors)
    factors = np.array([policy.weather_factors[k] for k in labels], dtype=float)
    hours = result.sun_hours * factors
    generated = result.solar_panel_watts * hours
    return tuple(
        WeatherScenario(label=label, factor=float(f), sun_hours=float(h), generated_wh=float(g))
        for label, f, h, g in zip(labels, factors, hours, generated)
    )


def recommend(result: SizingResult, policy: SizingPolicy = DEFAULT_POLICY) -> Recommendations:
    return Recommendations(
        panels=panel_guide(result.solar_panel_watts, policy),
        battery=battery_guide(result.required_battery_wh, result.system_voltage, result.battery_type, policy),
        safe_specs=safe_specs(result, policy),
        inverter=inverter_voltage_advice(result.inverter_size_w, result.system_voltage, policy),
        weather=weather_scenarios(result, policy),
    )
