"""
Persisted Snapshot
==================

Stores the two scalars the custom system check needs from the last main
calculation: total daily watt-hours and the sun hours used.
"""

from __future__ import annotations

import json
import logging
import math
import os
from pathlib import Path
from typing import Optional, Union

from .models import LastCalculation, SizingResult

logger = logging.getLogger(__name__)

TOTAL_WATT_HOURS_KEY = "ssc_totalWattHours"
SUN_HOURS_KEY = "ssc_sunHours"
STATE_ENV_VAR = "OFFGRID_SIZER_STATE"


def default_state_path() -> Path:
    override = os.environ.get(STATE_ENV_VAR)
    if override:
        return Path(override)
    return Path.home() / ".offgrid_sizer" / "last_calculation.json"


def _read_scalar(data: dict, key: str, default: float) -> float:
    raw = data.get(key)
    if raw is None:
        return default
    try:
        value = float(raw)
    except (TypeError, ValueError):
        logger.warning("Ignoring unparsable %s=%r in saved state", key, raw)
        return default
    if not math.isfinite(value) or value < 0:
        logger.warning("Ignoring out-of-range %s=%r in saved state", key, raw)
        return default
    return value


class LastCalculationStore:
    """JSON file holding ``ssc_totalWattHours`` and ``ssc_sunHours``."""

    def __init__(self, path: Optional[Union[str, Path]] = None):
        self.path = Path(path) if path is not None else default_state_path()

    def save(self, result: SizingResult) -> LastCalculation:
        snapshot = LastCalculation(daily_load_wh=result.total_watt_hours, sun_hours=result.sun_hours)
        self.path.parent.mkdir(parents=True, exist_ok=True)
        payload = {
            TOTAL_WATT_HOURS_KEY: snapshot.daily_load_wh,
            SUN_HOURS_KEY: snapshot.sun_hours,
        }
        self.path.write_text(json.dumps(payload, indent=2))
        logger.debug("Saved last calculation to %s", self.path)
        return snapshot

    def load(self) -> LastCalculation:
        """
        Read a snapshot, falling back to 0 Wh and 5 sun hours for anything
        missing or unparsable.
        """
        defaults = LastCalculation()
        if not self.path.exists():
            logger.debug("No saved calculation at %s; using defaults", self.path)
            return defaults
        try:
            data = json.loads(self.path.read_text())
        except (OSError, json.JSONDecodeError) as e:
            logger.warning("Could not read saved calculation %s: %s", self.path, e)
            return defaults
        if not isinstance(data, dict):
            logger.warning("Saved calculation %s is not a JSON object", self.path)
            return defaults
        return LastCalculation(
            daily_load_wh=_read_scalar(data, TOTAL_WATT_HOURS_KEY, defaults.daily_load_wh),
            sun_hours=_read_scalar(data, SUN_HOURS_KEY, defaults.sun_hours),
        )
