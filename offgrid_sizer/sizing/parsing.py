"""
Input Parsing
=============

Turns raw user input (form text, JSON values) into validated models.

Parsing is lenient in the same way the calculator form is: a value that is
not a number becomes 0 so a result can always be computed. Unlike a silent
coercion, every substitution is recorded as an ``InputIssue`` so callers can
show the user what was absorbed.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

from .models import ApplianceLoad, PowerType, SystemConfiguration, TimeOfUse


@dataclass(frozen=True)
class InputIssue:
    """A raw value that was replaced during parsing."""
    field: str
    raw: Any
    replacement: Any
    reason: str

    def __str__(self) -> str:
        return f"{self.field}: {self.reason} (got {self.raw!r}, using {self.replacement!r})"


@dataclass(frozen=True)
class ParsedNumber:
    value: float
    issue: Optional[InputIssue] = None


@dataclass
class ParseReport:
    """Parsed calculator request plus every substitution made along the way."""
    appliances: List[ApplianceLoad] = field(default_factory=list)
    configuration: SystemConfiguration = field(default_factory=SystemConfiguration)
    issues: List[InputIssue] = field(default_factory=list)

    @property
    def clean(self) -> bool:
        return not self.issues


def _is_blank(raw: Any) -> bool:
    return raw is None or (isinstance(raw, str) and not raw.strip())


def parse_number(
    raw: Any,
    field_name: str,
    *,
    default: float = 0.0,
    minimum: Optional[float] = None,
) -> ParsedNumber:
    """
    Parse a numeric field.

    Blank input silently takes ``default``; non-numeric or non-finite input
    takes ``default`` with an issue; values below ``minimum`` are raised to
    it with an issue.
    """
    if _is_blank(raw):
        return ParsedNumber(default)
    if isinstance(raw, bool):
        return ParsedNumber(default, InputIssue(field_name, raw, default, "not a number"))
    try:
        value = float(raw.strip() if isinstance(raw, str) else raw)
    except (TypeError, ValueError):
        return ParsedNumber(default, InputIssue(field_name, raw, default, "not a number"))
    if not math.isfinite(value):
        return ParsedNumber(default, InputIssue(field_name, raw, default, "not a finite number"))
    if minimum is not None and value < minimum:
        return ParsedNumber(minimum, InputIssue(field_name, raw, minimum, f"below minimum {minimum:g}"))
    return ParsedNumber(value)


def _parse_choice(raw: Any, field_name: str, enum_cls, default, issues: List[InputIssue]):
    if _is_blank(raw):
        return default
    if isinstance(raw, enum_cls):
        return raw
    for member in enum_cls:
        if str(raw).strip().lower() == member.value.lower():
            return member
    issues.append(InputIssue(field_name, raw, default.value, "unknown option"))
    return default


def parse_appliance(raw: Mapping[str, Any], index: int = 0) -> Tuple[ApplianceLoad, List[InputIssue]]:
    """Parse one appliance row. Field names in issues are prefixed with the row index."""
    issues: List[InputIssue] = []
    prefix = f"appliances[{index}]."

    def num(key: str, **kwargs) -> float:
        parsed = parse_number(raw.get(key), prefix + key, **kwargs)
        if parsed.issue:
            issues.append(parsed.issue)
        return parsed.value

    power_type = _parse_choice(raw.get("power_type"), prefix + "power_type", PowerType, PowerType.AC, issues)
    time_of_use = _parse_choice(raw.get("time_of_use"), prefix + "time_of_use", TimeOfUse, TimeOfUse.DAY, issues)

    data: Dict[str, Any] = {
        "name": str(raw.get("name") or ""),
        "power_type": power_type,
        "power": num("power", minimum=0.0),
        "volts": num("volts", minimum=0.0),
        "amps": num("amps", minimum=0.0),
        "time_of_use": time_of_use,
        "quantity": num("quantity", default=1.0, minimum=1.0),
    }

    has_split = not (_is_blank(raw.get("day_hours")) and _is_blank(raw.get("night_hours")))
    if has_split:
        day = num("day_hours", minimum=0.0)
        night = num("night_hours", minimum=0.0)
        if time_of_use is TimeOfUse.DAY and night > 0:
            issues.append(InputIssue(prefix + "night_hours", night, 0.0, "Day appliances have no night hours"))
            night = 0.0
        elif time_of_use is TimeOfUse.NIGHT and day > 0:
            issues.append(InputIssue(prefix + "day_hours", day, 0.0, "Night appliances have no day hours"))
            day = 0.0
        data["day_hours"], data["night_hours"] = day, night
        if not _is_blank(raw.get("hours")):
            hours = num("hours", minimum=0.0)
            if abs(hours - (day + night)) > 1e-9:
                issues.append(InputIssue(prefix + "hours", hours, day + night, "does not match day + night hours"))
    else:
        data["hours"] = num("hours", minimum=0.0)

    return ApplianceLoad(**data), issues


def parse_configuration(raw: Mapping[str, Any]) -> Tuple[SystemConfiguration, List[InputIssue]]:
    issues: List[InputIssue] = []
    defaults = SystemConfiguration()

    def num(key: str, default: float, **kwargs) -> float:
        parsed = parse_number(raw.get(key), key, default=default, **kwargs)
        if parsed.issue:
            issues.append(parsed.issue)
        return parsed.value

    voltage = num("system_voltage", float(defaults.system_voltage), minimum=0.0)
    if voltage != int(voltage):
        issues.append(InputIssue("system_voltage", voltage, int(voltage), "not a whole number of volts"))

    battery_type = raw.get("battery_type")
    config = SystemConfiguration(
        system_voltage=int(voltage),
        battery_type=defaults.battery_type if _is_blank(battery_type) else str(battery_type).strip(),
        days_of_autonomy=num("days_of_autonomy", defaults.days_of_autonomy, minimum=1.0),
        sun_hours=num("sun_hours", defaults.sun_hours, minimum=0.0),
    )
    return config, issues


def parse_request(raw: Mapping[str, Any]) -> ParseReport:
    """
    Parse ``{"appliances": [...], "system": {...}}`` into a ``ParseReport``.

    Raises:
        ValueError: ``appliances`` is not a list of objects or ``system`` is not an object
    """
    report = ParseReport()
    rows: Sequence[Mapping[str, Any]] = raw.get("appliances") or []
    if not isinstance(rows, (list, tuple)):
        raise ValueError("appliances must be a list of objects")
    for i, row in enumerate(rows):
        if not isinstance(row, Mapping):
            raise ValueError(f"appliances[{i}] must be an object, got {row!r}")
        appliance, issues = parse_appliance(row, i)
        report.appliances.append(appliance)
        report.issues.extend(issues)
    system = raw.get("system") or {}
    if not isinstance(system, Mapping):
        raise ValueError(f"system must be an object, got {system!r}")
    report.configuration, issues = parse_configuration(system)
    report.issues.extend(issues)
    return report
