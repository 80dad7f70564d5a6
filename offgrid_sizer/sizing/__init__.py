"""
Sizing engine.

Converts a list of appliance loads plus a handful of system settings into
inverter, battery bank, PV array and charge controller specifications, and
maps those onto purchasable unit combinations.
"""

from .custom_check import check_custom_system
from .errors import DeviceEditError, InsufficientInputError, SizingError, UnknownChemistryError
from .loads import aggregate_loads, apply_edit
from .models import (
    ApplianceLoad,
    CheckStatus,
    CustomCheckResult,
    CustomSystem,
    LastCalculation,
    LoadTotals,
    PowerType,
    Recommendations,
    SizingResult,
    SystemConfiguration,
    TimeOfUse,
)
from .packages import SOLAR_PACKAGES, PackagePreset, get_package
from .parsing import parse_request
from .policy import DEFAULT_POLICY, BatteryChemistry, SizingPolicy
from .recommend import recommend
from .sizer import size_system
from .storage import LastCalculationStore

__all__ = [
    "ApplianceLoad",
    "BatteryChemistry",
    "CheckStatus",
    "CustomCheckResult",
    "CustomSystem",
    "DEFAULT_POLICY",
    "DeviceEditError",
    "InsufficientInputError",
    "LastCalculation",
    "LastCalculationStore",
    "LoadTotals",
    "PackagePreset",
    "PowerType",
    "Recommendations",
    "SOLAR_PACKAGES",
    "SizingError",
    "SizingPolicy",
    "SizingResult",
    "SystemConfiguration",
    "TimeOfUse",
    "UnknownChemistryError",
    "aggregate_loads",
    "apply_edit",
    "check_custom_system",
    "get_package",
    "parse_request",
    "recommend",
    "size_system",
]
