from __future__ import annotations

import logging
from typing import Iterable, Union

from .errors import InsufficientInputError, UnknownChemistryError
from .loads import aggregate_loads
from .models import ApplianceLoad, LoadTotals, SizingResult, SystemConfiguration
from .policy import DEFAULT_POLICY, SizingPolicy

logger = logging.getLogger(__name__)


def _check_inputs(config: SystemConfiguration, policy: SizingPolicy) -> None:
    missing = []
    if config.sun_hours <= 0:
        missing.append("sun_hours")
    if config.system_voltage <= 0:
        missing.append("system_voltage")
    if missing:
        raise InsufficientInputError(missing)
    if policy.chemistry(config.battery_type) is None:
        raise UnknownChemistryError(config.battery_type, policy.chemistries)


def size_system(
    loads: Union[LoadTotals, Iterable[ApplianceLoad]],
    config: SystemConfiguration,
    policy: SizingPolicy = DEFAULT_POLICY,
) -> SizingResult:
    """
    Size inverter, battery bank, PV array and charge controller.

    - inverter: simultaneous AC watts plus the inverter safety margin
    - battery: night load only (day load is served directly by the panels),
      for every chemistry in the policy
    - panels: day load plus the energy needed to refill the battery,
      spread over the sun hours
    - controller: panel current at the system voltage plus margin

    Raises:
        InsufficientInputError: sun hours or system voltage is not positive
        UnknownChemistryError: battery type is not in the policy table
    """
    totals = loads if isinstance(loads, LoadTotals) else aggregate_loads(loads)
    _check_inputs(config, policy)

    inverter_size = totals.total_ac_watts * policy.inverter_safety_factor

    night_need = totals.total_night_wh * config.days_of_autonomy
    battery_sizing = {
        name: night_need / (chem.efficiency * chem.depth_of_discharge)
        for name, chem in policy.chemistries.items()
    }

    selected = policy.chemistries[config.battery_type]
    energy_to_recharge = totals.total_night_wh / selected.efficiency
    solar_panel_watts = (totals.total_day_wh + energy_to_recharge) / config.sun_hours
    controller_amps = (solar_panel_watts / config.system_voltage) * policy.controller_safety_factor

    logger.debug(
        "Sized %d devices: %.1f Wh/day, inverter %.1f W, PV %.1f W, controller %.1f A",
        len(totals.devices),
        totals.total_watt_hours,
        inverter_size,
        solar_panel_watts,
        controller_amps,
    )

    return SizingResult(
        total_day_wh=totals.total_day_wh,
        total_night_wh=totals.total_night_wh,
        total_watt_hours=totals.total_watt_hours,
        total_ac_watts=totals.total_ac_watts,
        total_ac_wh=totals.total_ac_wh,
        total_dc_wh=totals.total_dc_wh,
        inverter_size_w=inverter_size,
        battery_sizing_wh=battery_sizing,
        energy_to_recharge_wh=energy_to_recharge,
        solar_panel_watts=solar_panel_watts,
        controller_amps=controller_amps,
        sun_hours=config.sun_hours,
        days_of_autonomy=config.days_of_autonomy,
        battery_type=config.battery_type,
        system_voltage=config.system_voltage,
        devices=totals.devices,
    )
