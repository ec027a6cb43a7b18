"""Error taxonomy for the Flight Planner to Litchi conversion."""
from typing import Any, Dict, Optional


class ConversionError(Exception):
    """Base class for every error raised by the converter."""
    code = "CONVERSION_ERROR"

    def __init__(self, message: str, *, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ConfigError(ConversionError):
    """Invalid run-wide option. Aborts the run before any output is written."""
    code = "CONFIG_ERROR"


class FieldError(ConversionError, ValueError):
    """A single CSV cell could not be turned into a valid value."""
    code = "FIELD_ERROR"


class InvalidValue(FieldError):
    """Field is NaN, null or empty."""
    code = "INVALID_VALUE"


class ParseError(FieldError):
    """Field is not well-formed numeric text."""
    code = "PARSE_ERROR"


class OutOfRange(FieldError):
    """Field parsed but lies outside its allowed range."""
    code = "OUT_OF_RANGE"


class WriteError(ConversionError):
    """Serializer failed to write the mission."""
    code = "WRITE_ERROR"
