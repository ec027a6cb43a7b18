"""Meters and feet distance handling.

Photo intervals are given on the command line with a unit suffix, e.g.
``20m`` or ``60ft``, and are always converted to meters before they reach
the converter.
"""
import argparse
import re

FEET_TO_METERS = 0.3048

_METER_UNITS = ("M", "m", "Meters", "meters")
_FEET_UNITS = ("Ft", "ft", "Feet", "feet")

_DISTANCE_RE = re.compile(r"^\s*([-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?)\s*([A-Za-z]*)\s*$")


class Meters(float):
    """Distance in meters."""

    def __str__(self) -> str:
        return f"{float(self):g}"


class Feet(float):
    """Distance in feet."""

    def __str__(self) -> str:
        return f"{float(self):g}"


def feet_to_meters(feet: float) -> Meters:
    return Meters(feet * FEET_TO_METERS)


def parse_distance(text: str) -> Meters:
    """Parse a distance with units into meters.

    Args:
        text: Value followed by a unit, e.g. "10m", "30ft", "12.5 meters"

    Returns:
        Distance in meters

    Raises:
        ValueError: value is malformed or the unit is unknown
    """
    match = _DISTANCE_RE.match(text)
    if not match:
        raise ValueError(f"invalid distance {text!r}")

    value = float(match.group(1))
    unit = match.group(2)
    if unit in _METER_UNITS:
        return Meters(value)
    if unit in _FEET_UNITS:
        return feet_to_meters(Feet(value))
    raise ValueError(f"invalid units {text!r}")


def distance_arg(text: str) -> Meters:
    """argparse type for distances with units."""
    try:
        return parse_distance(text)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e)) from e
