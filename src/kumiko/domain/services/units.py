"""Unit conversion at the presentation boundary.

Everything inside the domain is millimeters; these helpers only convert
for display and export.
"""

from __future__ import annotations

from ..constants import INCH_TO_MM, MM_TO_INCH
from ..value_objects import DisplayUnit


def convert_unit(value: float, from_unit: DisplayUnit | str, to_unit: DisplayUnit | str) -> float:
    """Convert a length between millimeters and inches.

    Raises:
        ValueError: If either unit is not ``mm`` or ``in``.
    """
    source = DisplayUnit(from_unit)
    target = DisplayUnit(to_unit)
    if source == target:
        return value
    if source == DisplayUnit.MM:
        return value * MM_TO_INCH
    return value * INCH_TO_MM


def format_value(mm_value: float, display_unit: DisplayUnit | str) -> str:
    """Format a millimeter value for display.

    Millimeters get one decimal place, inches three.
    """
    unit = DisplayUnit(display_unit)
    value = convert_unit(mm_value, DisplayUnit.MM, unit)
    precision = 1 if unit == DisplayUnit.MM else 3
    return f"{value:.{precision}f}"
