"""Configuration defaults from the environment and logging setup."""
import logging
import os
import sys
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ValidationError, field_validator

from flightplan2litchi.domain.options import (
    ALTITUDE_MODE_AGL,
    DEFAULT_MAX_ALTITUDE_AGL,
    ConverterOptions,
)
from flightplan2litchi.domain.waypoint import DEFAULT_GIMBAL_PITCH
from flightplan2litchi.errors import ConfigError
from flightplan2litchi.units import parse_distance

logger = logging.getLogger(__name__)

ENV_PREFIX = "FP2LM_"
LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"


class OptionsSettings(BaseModel):
    """Converter defaults read from FP2LM_* environment variables."""
    altitude_mode: str = ALTITUDE_MODE_AGL
    gimbal_pitch: float = DEFAULT_GIMBAL_PITCH
    photo_interval: float = 0.0  # meters
    max_altitude_agl: float = DEFAULT_MAX_ALTITUDE_AGL
    log_level: str = "WARNING"

    @field_validator("photo_interval", mode="before")
    @classmethod
    def parse_photo_interval(cls, value):
        # Accept "20m" / "60ft" as on the command line
        if isinstance(value, str):
            return float(parse_distance(value))
        return value

    @field_validator("log_level")
    @classmethod
    def check_log_level(cls, value: str) -> str:
        level = value.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"unknown log level {value!r}")
        return level

    def to_options(self) -> ConverterOptions:
        return ConverterOptions.from_dict(self.model_dump())


def load_dotenv_file(env_path: Optional[Path] = None):
    """Load a .env file into the environment if it exists."""
    path = env_path or Path.cwd() / ".env"
    if path.exists():
        load_dotenv(dotenv_path=path)
        logger.debug(f"Loaded environment from {path}")


def load_settings(environ: Optional[dict] = None) -> OptionsSettings:
    """Read converter defaults from FP2LM_* variables.

    Args:
        environ: Mapping to read instead of os.environ

    Raises:
        ConfigError: a variable holds a value of the wrong type
    """
    env = os.environ if environ is None else environ
    values = {}
    for name in OptionsSettings.model_fields:
        raw = env.get(f"{ENV_PREFIX}{name.upper()}")
        if raw is not None and raw != "":
            values[name] = raw

    try:
        return OptionsSettings(**values)
    except ValidationError as e:
        raise ConfigError(f"invalid configuration in environment: {e}",
                          details={"errors": e.errors()}) from e


def configure_logging(level: str = "WARNING"):
    """Send log records to stderr; stdout may carry the mission itself."""
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT, stream=sys.stderr)
