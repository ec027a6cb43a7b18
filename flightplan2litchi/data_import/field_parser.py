"""Parsing and range validation of individual CSV cells."""
import math
from enum import Enum
from typing import Union

import numpy as np

from flightplan2litchi.errors import InvalidValue, OutOfRange, ParseError

INT8_MIN = -128
INT8_MAX = 127

_MISSING_TOKENS = ("nan", "null", "")


class FieldKind(Enum):
    """Numeric representation a field is parsed into."""
    REAL = "real"        # double precision
    REAL32 = "real32"    # single precision
    SMALL_INT = "small_int"  # 8-bit signed


def is_missing(field: str) -> bool:
    """Return True for NaN, null and empty cells (case-insensitive)."""
    return field.strip().lower() in _MISSING_TOKENS


def to_float32(value: float) -> float:
    """Round a float to the nearest single-precision value."""
    return float(np.float32(value))


def parse_field(field: str, kind: FieldKind,
                min_value: float, max_value: float) -> Union[float, int]:
    """Parse a CSV cell and validate it against an inclusive range.

    Args:
        field: Raw cell text
        kind: Numeric kind to parse into
        min_value: Smallest accepted value
        max_value: Largest accepted value

    Returns:
        float for REAL/REAL32, int for SMALL_INT

    Raises:
        InvalidValue: cell is NaN, null or empty
        ParseError: cell is not numeric text of the requested kind
        OutOfRange: value lies outside [min_value, max_value]
    """
    if is_missing(field):
        raise InvalidValue(f"field value is NaN or empty: {field!r}", details={"field": field})

    # float() and int() also accept padded text and "1_000" grouping
    if field != field.strip() or "_" in field or not field.isascii():
        raise ParseError(f"cannot parse {field!r} as number", details={"field": field})
    text = field

    if kind is FieldKind.SMALL_INT:
        try:
            value = int(text)
        except ValueError as e:
            raise ParseError(f"cannot parse {field!r} as integer", details={"field": field}) from e
        if value < INT8_MIN or value > INT8_MAX:
            raise OutOfRange(
                f"field value {value} does not fit a small integer",
                details={"field": field, "min": INT8_MIN, "max": INT8_MAX}
            )
    elif kind in (FieldKind.REAL, FieldKind.REAL32):
        try:
            value = float(text)
        except ValueError as e:
            raise ParseError(f"cannot parse {field!r} as number", details={"field": field}) from e
        if math.isnan(value):
            raise InvalidValue(f"field value is NaN: {field!r}", details={"field": field})
        if kind is FieldKind.REAL32:
            value = to_float32(value)
    else:
        raise ValueError(f"Unsupported field kind: {kind}")

    if value < min_value or value > max_value:
        raise OutOfRange(
            f"field value out of range (min: {min_value:f}, max: {max_value:f})",
            details={"field": field, "min": min_value, "max": max_value}
        )
    return value
