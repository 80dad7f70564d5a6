from __future__ import annotations

from enum import Enum
from types import MappingProxyType
from typing import Dict, Mapping, Optional, Tuple

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    PositiveFloat,
    confloat,
    field_serializer,
    field_validator,
    model_validator,
)

_HOURS_TOLERANCE = 1e-9


class PowerType(Enum):
    """How an appliance's power draw is specified."""
    AC = "AC"  # watts entered directly, served through the inverter
    DC = "DC"  # volts x amps, served from the battery bus


class TimeOfUse(Enum):
    """When an appliance runs; drives the day/night split of its hours."""
    DAY = "Day"
    NIGHT = "Night"
    BOTH = "Both"

    def split(self, hours: float) -> Tuple[float, float]:
        """Default (day_hours, night_hours) for a total number of hours."""
        if self is TimeOfUse.DAY:
            return hours, 0.0
        if self is TimeOfUse.NIGHT:
            return 0.0, hours
        return hours / 2, hours / 2


class ApplianceLoad(BaseModel):
    """
    One user-entered device.

    Either ``hours`` or the ``day_hours``/``night_hours`` split may be given;
    the missing side is derived so that ``hours == day_hours + night_hours``.
    """
    model_config = ConfigDict(frozen=True)

    name: str = ""
    power_type: PowerType = PowerType.AC
    power: confloat(ge=0) = Field(0.0, description="AC power draw (W).")
    volts: confloat(ge=0) = Field(0.0, description="DC supply voltage (V).")
    amps: confloat(ge=0) = Field(0.0, description="DC current draw (A).")
    time_of_use: TimeOfUse = TimeOfUse.DAY
    hours: confloat(ge=0) = Field(0.0, description="Total operating hours per day.")
    day_hours: confloat(ge=0) = 0.0
    night_hours: confloat(ge=0) = 0.0
    quantity: int = Field(1, description="Number of identical devices (minimum 1).")

    @model_validator(mode="before")
    @classmethod
    def _derive_hours(cls, data):
        if not isinstance(data, dict):
            return data
        data = dict(data)
        has_split = "day_hours" in data or "night_hours" in data
        if "hours" in data and not has_split:
            tou = TimeOfUse(data.get("time_of_use", TimeOfUse.DAY))
            data["day_hours"], data["night_hours"] = tou.split(float(data["hours"]))
        elif has_split and "hours" not in data:
            data["hours"] = float(data.get("day_hours", 0.0)) + float(data.get("night_hours", 0.0))
        return data

    @field_validator("quantity", mode="before")
    @classmethod
    def _clamp_quantity(cls, v):
        try:
            return max(1, int(float(v)))
        except (TypeError, ValueError, OverflowError):
            raise ValueError(f"quantity must be a number, got {v!r}") from None

    @model_validator(mode="after")
    def _check_hours(self) -> "ApplianceLoad":
        if abs(self.hours - (self.day_hours + self.night_hours)) > _HOURS_TOLERANCE:
            raise ValueError("hours must equal day_hours + night_hours")
        if self.time_of_use is TimeOfUse.DAY and self.night_hours > 0:
            raise ValueError("a Day appliance cannot have night_hours")
        if self.time_of_use is TimeOfUse.NIGHT and self.day_hours > 0:
            raise ValueError("a Night appliance cannot have day_hours")
        return self

    @property
    def device_watts(self) -> float:
        if self.power_type is PowerType.AC:
            return self.power
        return self.volts * self.amps

    @property
    def watt_hours(self) -> float:
        return self.device_watts * (self.day_hours + self.night_hours) * self.quantity


class SystemConfiguration(BaseModel):
    model_config = ConfigDict(frozen=True)

    system_voltage: int = Field(12, ge=0, description="Battery bank voltage (12, 24 or 48 V).")
    battery_type: str = Field("Lithium", description="Chemistry used for PV and controller sizing.")
    days_of_autonomy: confloat(ge=1) = Field(1.0, description="Days the bank must carry the night load.")
    sun_hours: confloat(ge=0) = Field(5.0, description="Peak sun hours per day.")


class DeviceLoad(BaseModel):
    """Per-device energy breakdown produced by the load aggregator."""
    model_config = ConfigDict(frozen=True)

    name: str
    power_type: PowerType
    watts: float
    day_hours: float
    night_hours: float
    quantity: int
    day_wh: float
    night_wh: float

    @property
    def hours(self) -> float:
        return self.day_hours + self.night_hours

    @property
    def watt_hours(self) -> float:
        return self.day_wh + self.night_wh


class LoadTotals(BaseModel):
    model_config = ConfigDict(frozen=True)

    total_day_wh: float = 0.0
    total_night_wh: float = 0.0
    total_watt_hours: float = 0.0
    total_ac_wh: float = 0.0
    total_dc_wh: float = 0.0
    total_ac_watts: float = Field(0.0, description="Simultaneous AC wattage (not energy).")
    devices: Tuple[DeviceLoad, ...] = ()


class SizingResult(BaseModel):
    """Output of one calculation. Replaced wholesale on recalculation."""
    model_config = ConfigDict(frozen=True)

    total_day_wh: float
    total_night_wh: float
    total_watt_hours: float
    total_ac_watts: float
    total_ac_wh: float
    total_dc_wh: float
    inverter_size_w: float
    battery_sizing_wh: Dict[str, float]
    energy_to_recharge_wh: float
    solar_panel_watts: float
    controller_amps: float

    # configuration snapshot
    sun_hours: float
    days_of_autonomy: float
    battery_type: str
    system_voltage: int

    devices: Tuple[DeviceLoad, ...] = ()

    @field_validator("battery_sizing_wh", mode="after")
    @classmethod
    def _read_only_sizing(cls, v: Dict[str, float]) -> Mapping[str, float]:
        return MappingProxyType(dict(v))

    @field_serializer("battery_sizing_wh")
    def _dump_sizing(self, v: Mapping[str, float]) -> Dict[str, float]:
        return dict(v)

    @property
    def required_battery_wh(self) -> float:
        """Battery capacity for the selected chemistry (Wh)."""
        return self.battery_sizing_wh[self.battery_type]

    def battery_ah(self, battery_type: Optional[str] = None) -> float:
        """Battery capacity in Ah at the system voltage."""
        wh = self.battery_sizing_wh[battery_type or self.battery_type]
        return wh / self.system_voltage


class PanelOption(BaseModel):
    model_config = ConfigDict(frozen=True)

    unit_watts: float
    count: int
    winter_count: int

    @property
    def total_watts(self) -> float:
        return self.count * self.unit_watts

    @property
    def winter_total_watts(self) -> float:
        return self.winter_count * self.unit_watts


class PanelGuide(BaseModel):
    model_config = ConfigDict(frozen=True)

    required_watts: float
    winter_required_watts: float
    options: Tuple[PanelOption, ...]


class BatteryOption(BaseModel):
    model_config = ConfigDict(frozen=True)

    unit_ah: float
    count: int

    @property
    def total_ah(self) -> float:
        return self.count * self.unit_ah


class BatteryGuide(BaseModel):
    model_config = ConfigDict(frozen=True)

    battery_type: str
    required_wh: float
    system_voltage: int
    required_ah: float
    options: Tuple[BatteryOption, ...] = ()


class SafeSpecs(BaseModel):
    model_config = ConfigDict(frozen=True)

    days_of_autonomy: float
    battery_wh: float
    battery_ah: float
    panel_watts: float
    inverter_w: float


class InverterAdvice(BaseModel):
    model_config = ConfigDict(frozen=True)

    inverter_w: float
    system_voltage: int
    recommended_voltage: Optional[int] = Field(
        None, description="Smallest catalog voltage whose band covers the inverter, None above every band."
    )
    parallel_inverters: bool = False

    @property
    def matches(self) -> bool:
        return self.recommended_voltage == self.system_voltage


class WeatherScenario(BaseModel):
    model_config = ConfigDict(frozen=True)

    label: str
    factor: float
    sun_hours: float
    generated_wh: float


class Recommendations(BaseModel):
    model_config = ConfigDict(frozen=True)

    panels: PanelGuide
    battery: BatteryGuide
    safe_specs: SafeSpecs
    inverter: InverterAdvice
    weather: Tuple[WeatherScenario, ...]


class LastCalculation(BaseModel):
    """Snapshot of the last main calculation read by the custom check."""
    model_config = ConfigDict(frozen=True)

    daily_load_wh: confloat(ge=0) = 0.0
    sun_hours: confloat(ge=0) = 5.0


class CustomSystem(BaseModel):
    """A user-specified system to test against the stored daily load."""
    model_config = ConfigDict(frozen=True)

    inverter_w: confloat(ge=0) = 1000.0
    panel_w: confloat(ge=0) = 400.0
    battery_ah: confloat(ge=0) = 100.0
    battery_v: PositiveFloat = 12.0


class CheckStatus(Enum):
    SUSTAINABLE = "sustainable"
    DEPLETING = "depleting"
    NO_LOAD = "no_load"


class CustomCheckResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    system: CustomSystem
    daily_load_wh: float
    sun_hours: float
    battery_wh: float
    safe_battery_wh: float
    daily_charge_wh: float
    net_energy_wh: float
    status: CheckStatus
    autonomy_days: Optional[float] = None
    days_to_deplete: Optional[float] = None

    @property
    def message(self) -> str:
        if self.status is CheckStatus.NO_LOAD:
            return (
                "No load configured: run the main calculation first so the daily "
                "load is known."
            )
        if self.status is CheckStatus.SUSTAINABLE:
            return (
                "Sustainable: your panels generate more energy than you consume daily. "
                "The system should run indefinitely under these conditions."
            )
        return (
            "Not sustainable: your panels help, but can't keep up with the daily load. "
            f"Your battery will be fully depleted in ~{self.days_to_deplete:.1f} days "
            "if not recharged by other means."
        )
