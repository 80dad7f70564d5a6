"""Common 24-hour solar setups shown for reference. No calculation uses them."""

from __future__ import annotations

from typing import Dict, Tuple

from pydantic import BaseModel, ConfigDict, Field, PositiveFloat


class PackagePreset(BaseModel):
    model_config = ConfigDict(frozen=True)

    key: str
    name: str
    daily_wh: PositiveFloat = Field(..., description="Estimated daily load (Wh).")
    pv: str
    battery_lfp: str
    battery_lead_acid: str
    inverter: str
    controller: str
    runs: Tuple[str, ...] = ()


SOLAR_PACKAGES: Tuple[PackagePreset, ...] = (
    PackagePreset(
        key="ecolite",
        name="EcoLite",
        daily_wh=300,
        pv="2 × 100W panels (200W)",
        battery_lfp="12V 50Ah LiFePO₄ (600Wh)",
        battery_lead_acid="12V 100Ah Lead-Acid (1200Wh, 50% usable)",
        inverter="400W Pure Sine",
        controller="20A MPPT",
        runs=("2× LED bulbs", "Phone charging", "WiFi router", "Small fan (few hours)"),
    ),
    PackagePreset(
        key="ecobasic",
        name="EcoBasic",
        daily_wh=600,
        pv="2 × 200W panels (400W)",
        battery_lfp="12V 100Ah LiFePO₄ (1200Wh)",
        battery_lead_acid="12V 200Ah Lead-Acid (2400Wh, 50% usable)",
        inverter="800W Pure Sine",
        controller="30A MPPT",
        runs=("LED lighting", "TV (2–3h)", "Laptop", "Router", "USB chargers"),
    ),
    PackagePreset(
        key="standard",
        name="Standard Home",
        daily_wh=1200,
        pv="3 × 300W panels (900W)",
        battery_lfp="24V 100Ah LiFePO₄ (2400Wh)",
        battery_lead_acid="24V 200Ah Lead-Acid (4800Wh, 50% usable)",
        inverter="1500W Pure Sine",
        controller="40–60A MPPT",
        runs=("Lights", "TV", "Laptop", "Fridge (efficient)", "Phone/Router"),
    ),
    PackagePreset(
        key="premium",
        name="Premium Power",
        daily_wh=2500,
        pv="4 × 450W panels (1800W)",
        battery_lfp="48V 100Ah LiFePO₄ (4800Wh)",
        battery_lead_acid="48V 300Ah Lead-Acid (14400Wh, 50% usable)",
        inverter="3000W Pure Sine",
        controller="80A MPPT",
        runs=("Lights", "Large fridge", "TV", "Computers", "Small tools (short use)"),
    ),
    PackagePreset(
        key="maxduty",
        name="MaxDuty",
        daily_wh=4000,
        pv="6 × 450W panels (2700W)",
        battery_lfp="48V 150Ah LiFePO₄ (7200Wh)",
        battery_lead_acid="48V 400Ah Lead-Acid (19200Wh, 50% usable)",
        inverter="5000W Pure Sine",
        controller="100A MPPT",
        runs=("Full lighting", "Large fridge/freezer", "Multiple devices", "Microwave/Tools (short)"),
    ),
)

_BY_KEY: Dict[str, PackagePreset] = {p.key: p for p in SOLAR_PACKAGES}


def get_package(key: str) -> PackagePreset:
    try:
        return _BY_KEY[key]
    except KeyError:
        raise KeyError(f"Unknown package {key!r}; expected one of: {', '.join(_BY_KEY)}") from None
