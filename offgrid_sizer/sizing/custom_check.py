from __future__ import annotations

from .models import CheckStatus, CustomCheckResult, CustomSystem, LastCalculation
from .policy import DEFAULT_POLICY, SizingPolicy


def check_custom_system(
    system: CustomSystem,
    last: LastCalculation,
    policy: SizingPolicy = DEFAULT_POLICY,
) -> CustomCheckResult:
    """
    Check whether a user-specified system sustains the last calculated load.

    ``last`` is a snapshot taken when the check was opened; this function does
    not read persisted state itself.
    """
    battery_wh = system.battery_ah * system.battery_v
    safe_battery_wh = battery_wh * policy.custom_check_safeguard
    daily_charge_wh = system.panel_w * last.sun_hours
    net_energy = daily_charge_wh - last.daily_load_wh

    autonomy = None
    days_to_deplete = None
    if last.daily_load_wh <= 0:
        status = CheckStatus.NO_LOAD
    else:
        autonomy = safe_battery_wh / last.daily_load_wh
        if net_energy >= 0:
            status = CheckStatus.SUSTAINABLE
        else:
            status = CheckStatus.DEPLETING
            days_to_deplete = battery_wh / abs(net_energy)

    return CustomCheckResult(
        system=system,
        daily_load_wh=last.daily_load_wh,
        sun_hours=last.sun_hours,
        battery_wh=battery_wh,
        safe_battery_wh=safe_battery_wh,
        daily_charge_wh=daily_charge_wh,
        net_energy_wh=net_energy,
        status=status,
        autonomy_days=autonomy,
        days_to_deplete=days_to_deplete,
    )
