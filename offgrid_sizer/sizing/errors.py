"""Error types raised by the sizing engine."""

from __future__ import annotations

from typing import Iterable, Tuple


class SizingError(ValueError):
    """Base class for sizing failures."""


class InsufficientInputError(SizingError):
    """
    Raised when an input would make a formula divide by zero.

    Attributes:
        fields: Names of the inputs that must be strictly positive.
    """

    def __init__(self, fields: Iterable[str]):
        self.fields: Tuple[str, ...] = tuple(fields)
        super().__init__(f"Insufficient input: {', '.join(self.fields)} must be greater than zero")


class UnknownChemistryError(SizingError):
    """Raised when the selected battery type is missing from the policy."""

    def __init__(self, battery_type: str, known: Iterable[str]):
        self.battery_type = battery_type
        super().__init__(
            f"Unknown battery type {battery_type!r}; expected one of: {', '.join(known)}"
        )


class DeviceEditError(SizingError):
    """Raised when an appliance field edit is not allowed."""
