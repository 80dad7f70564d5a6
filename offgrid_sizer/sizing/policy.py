"""
Sizing policy: every constant the engine and recommendations depend on.

The engine never reads module-level constants directly; callers pass a
``SizingPolicy`` (``DEFAULT_POLICY`` unless overridden) so alternative rules
can be tested or loaded from an input file.
"""

from __future__ import annotations

from typing import Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, PositiveFloat, confloat, model_validator


class BatteryChemistry(BaseModel):
    model_config = ConfigDict(frozen=True)

    depth_of_discharge: confloat(gt=0, le=1) = Field(..., description="Usable fraction of nominal capacity.")
    efficiency: confloat(gt=0, le=1) = Field(..., description="Round-trip charge/discharge efficiency.")


class SafeSpecProfile(BaseModel):
    """Worst-case profile for the conservative 'safe specs' recommendation."""

    model_config = ConfigDict(frozen=True)

    days_of_autonomy: PositiveFloat = Field(3.0, description="Days of autonomy assumed for the safe battery bank.")
    efficiency: confloat(gt=0, le=1) = Field(0.8, description="Lead-acid style efficiency.")
    depth_of_discharge: confloat(gt=0, le=1) = Field(0.5, description="Lead-acid style depth of discharge.")
    panel_buffer: PositiveFloat = Field(1.3, description="Multiplier on the safe panel wattage.")
    inverter_buffer: PositiveFloat = Field(1.3, description="Multiplier on the AC load for the safe inverter.")


class VoltageBand(BaseModel):
    """Inverter wattage range a system voltage is recommended for."""

    model_config = ConfigDict(frozen=True)

    system_voltage: int = Field(..., gt=0)
    min_w: confloat(ge=0) = 0.0
    max_w: PositiveFloat


def _default_chemistries() -> Dict[str, BatteryChemistry]:
    return {
        "Lithium": BatteryChemistry(depth_of_discharge=0.99, efficiency=1.0),
        "Flooded": BatteryChemistry(depth_of_discharge=0.5, efficiency=0.8),
        "Gel": BatteryChemistry(depth_of_discharge=0.6, efficiency=0.85),
        "AGM": BatteryChemistry(depth_of_discharge=0.7, efficiency=0.9),
    }


def _default_voltage_bands() -> List[VoltageBand]:
    return [
        VoltageBand(system_voltage=12, min_w=0.0, max_w=1000.0),
        VoltageBand(system_voltage=24, min_w=1000.0, max_w=2000.0),
        VoltageBand(system_voltage=48, min_w=2000.0, max_w=4000.0),
    ]


class SizingPolicy(BaseModel):
    model_config = ConfigDict(frozen=True)

    inverter_safety_factor: PositiveFloat = Field(
        1.25, description="Headroom over simultaneous AC load (surge, no continuous 100% operation)."
    )
    controller_safety_factor: PositiveFloat = Field(1.25, description="Margin on charge controller current.")
    winter_panel_factor: PositiveFloat = Field(1.5, description="Extra PV needed in the low-sun season.")
    chemistries: Dict[str, BatteryChemistry] = Field(default_factory=_default_chemistries)
    panel_catalog_w: Tuple[PositiveFloat, ...] = Field(
        (100, 200, 250, 300, 390, 450, 500), description="Common panel unit sizes (W)."
    )
    battery_catalog_ah: Dict[int, Tuple[PositiveFloat, ...]] = Field(
        default_factory=lambda: {12: (100, 150, 200, 250), 24: (100, 150, 200), 48: (100, 150)},
        description="Common battery unit sizes (Ah) per system voltage.",
    )
    safe_spec: SafeSpecProfile = Field(default_factory=SafeSpecProfile)
    custom_check_safeguard: confloat(gt=0, le=1) = Field(
        0.8, description="Usable battery fraction assumed by the custom system check."
    )
    inverter_voltage_bands: Tuple[VoltageBand, ...] = Field(default_factory=lambda: tuple(_default_voltage_bands()))
    weather_factors: Dict[str, confloat(ge=0)] = Field(
        default_factory=lambda: {"Sunny": 1.0, "Partly Cloudy": 0.6, "Overcast": 0.3},
        description="Fraction of nominal sun hours per weather scenario.",
    )

    @model_validator(mode="after")
    def _non_empty_tables(self) -> "SizingPolicy":
        if not self.chemistries:
            raise ValueError("chemistries must define at least one battery type")
        if not self.panel_catalog_w:
            raise ValueError("panel_catalog_w must not be empty")
        return self

    def chemistry(self, battery_type: str) -> Optional[BatteryChemistry]:
        return self.chemistries.get(battery_type)


DEFAULT_POLICY = SizingPolicy()
