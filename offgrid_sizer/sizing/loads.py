"""
Load Model
==========

Reduces appliance rows to day/night and AC/DC energy totals, and applies
form edits to a single appliance row.
"""

from __future__ import annotations

from typing import Any, Iterable

from .errors import DeviceEditError
from .models import ApplianceLoad, DeviceLoad, LoadTotals, PowerType, TimeOfUse
from .parsing import parse_number

_NUMERIC_FIELDS = ("power", "volts", "amps", "hours", "day_hours", "night_hours", "quantity")


def aggregate_loads(appliances: Iterable[ApplianceLoad]) -> LoadTotals:
    """
    Sum the daily energy of every appliance.

    AC and DC totals partition the same energy as day and night totals.
    ``total_ac_watts`` is the simultaneous AC draw used for inverter sizing.
    """
    day_wh = night_wh = ac_wh = dc_wh = ac_watts = 0.0
    devices = []

    for appliance in appliances:
        watts = appliance.device_watts
        device_day = watts * appliance.day_hours * appliance.quantity
        device_night = watts * appliance.night_hours * appliance.quantity
        day_wh += device_day
        night_wh += device_night

        if appliance.power_type is PowerType.AC:
            ac_wh += device_day + device_night
            ac_watts += appliance.power * appliance.quantity
        else:
            dc_wh += device_day + device_night

        devices.append(
            DeviceLoad(
                name=appliance.name,
                power_type=appliance.power_type,
                watts=watts,
                day_hours=appliance.day_hours,
                night_hours=appliance.night_hours,
                quantity=appliance.quantity,
                day_wh=device_day,
                night_wh=device_night,
            )
        )

    return LoadTotals(
        total_day_wh=day_wh,
        total_night_wh=night_wh,
        total_watt_hours=day_wh + night_wh,
        total_ac_wh=ac_wh,
        total_dc_wh=dc_wh,
        total_ac_watts=ac_watts,
        devices=tuple(devices),
    )


def _choice(enum_cls, value: Any, field: str):
    try:
        return enum_cls(value)
    except ValueError:
        options = ", ".join(m.value for m in enum_cls)
        raise DeviceEditError(f"Unknown {field} {value!r}; expected one of: {options}") from None


def _rescale_both(appliance: ApplianceLoad, hours: float) -> tuple:
    current = appliance.day_hours + appliance.night_hours
    if current <= 0:
        return TimeOfUse.BOTH.split(hours)
    day = hours * appliance.day_hours / current
    return day, hours - day


def apply_edit(appliance: ApplianceLoad, field: str, value: Any) -> ApplianceLoad:
    """
    Apply one form edit and return the updated appliance.

    Args:
        appliance: Current row
        field: Field being edited
        value: Raw new value; numeric fields treat invalid input as 0

    Returns:
        New ``ApplianceLoad`` with ``hours == day_hours + night_hours`` kept
    """
    if field in _NUMERIC_FIELDS:
        value = parse_number(value, field).value

    update: dict = {}
    tou = appliance.time_of_use

    if field == "name":
        update["name"] = "" if value is None else str(value)
    elif field == "power_type":
        update.update(power_type=_choice(PowerType, value, field), power=0.0, volts=0.0, amps=0.0)
    elif field in ("power", "volts", "amps"):
        update[field] = max(0.0, value)
    elif field == "time_of_use":
        new_tou = _choice(TimeOfUse, value, field)
        day, night = new_tou.split(appliance.hours)
        update.update(time_of_use=new_tou, day_hours=day, night_hours=night)
    elif field == "hours":
        hours = max(0.0, value)
        if tou is TimeOfUse.BOTH:
            day, night = _rescale_both(appliance, hours)
        else:
            day, night = tou.split(hours)
        update.update(hours=hours, day_hours=day, night_hours=night)
    elif field in ("day_hours", "night_hours"):
        locked = "night_hours" if tou is TimeOfUse.DAY else "day_hours" if tou is TimeOfUse.NIGHT else None
        if field == locked:
            raise DeviceEditError(f"{field} is fixed at 0 for {tou.value} appliances")
        split = {"day_hours": appliance.day_hours, "night_hours": appliance.night_hours}
        split[field] = max(0.0, value)
        update.update(split, hours=split["day_hours"] + split["night_hours"])
    elif field == "quantity":
        update["quantity"] = max(1, int(value))
    else:
        raise DeviceEditError(f"Unknown appliance field: {field}")

    # model_copy skips validation; rebuild so the invariants are re-checked
    return ApplianceLoad(**{**appliance.model_dump(), **update})
