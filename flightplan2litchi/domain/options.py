"""Run-wide converter options."""
from dataclasses import dataclass

from flightplan2litchi.domain.waypoint import DEFAULT_GIMBAL_PITCH, AltitudeMode
from flightplan2litchi.errors import ConfigError

ALTITUDE_MODE_AGL = "agl"
ALTITUDE_MODE_ASL = "asl"

# 120 m is the common regulatory ceiling (FAA, EASA). Aircraft may allow more;
# raise it only where local rules permit.
DEFAULT_MAX_ALTITUDE_AGL = 120.0


@dataclass(frozen=True)
class ConverterOptions:
    """Options consumed read-only by one conversion run."""
    altitude_mode: str = ALTITUDE_MODE_AGL  # "agl" or "asl"
    photo_interval: float = 0.0  # meters between photos
    gimbal_pitch: float = DEFAULT_GIMBAL_PITCH  # degrees, -90 points straight down
    max_altitude_agl: float = DEFAULT_MAX_ALTITUDE_AGL  # meters

    @classmethod
    def default(cls) -> "ConverterOptions":
        return cls()

    @property
    def normalized_altitude_mode(self) -> str:
        if not isinstance(self.altitude_mode, str):
            return ""
        return self.altitude_mode.lower()

    @property
    def uses_agl(self) -> bool:
        return self.normalized_altitude_mode == ALTITUDE_MODE_AGL

    @property
    def waypoint_altitude_mode(self) -> AltitudeMode:
        """Altitude mode newly created waypoints start with."""
        return AltitudeMode.RELATIVE if self.uses_agl else AltitudeMode.ABSOLUTE

    def validate(self):
        """Validate options.

        Raises:
            ConfigError: altitude mode or gimbal pitch is invalid
        """
        if self.normalized_altitude_mode not in (ALTITUDE_MODE_AGL, ALTITUDE_MODE_ASL):
            raise ConfigError(
                f"altitude mode must be either 'asl' or 'agl', got {self.altitude_mode!r}",
                details={"altitude_mode": self.altitude_mode}
            )
        if not isinstance(self.gimbal_pitch, (int, float)) or isinstance(self.gimbal_pitch, bool):
            raise ConfigError(
                f"gimbal pitch must be a number, got {self.gimbal_pitch!r}",
                details={"gimbal_pitch": self.gimbal_pitch}
            )
        if not -90 <= self.gimbal_pitch <= 0:
            raise ConfigError(
                f"gimbal pitch must be between -90 and 0 degrees, got {self.gimbal_pitch:.1f}",
                details={"gimbal_pitch": self.gimbal_pitch}
            )

    def to_dict(self) -> dict:
        return {
            "altitude_mode": self.altitude_mode,
            "photo_interval": self.photo_interval,
            "gimbal_pitch": self.gimbal_pitch,
            "max_altitude_agl": self.max_altitude_agl
        }

    @classmethod
    def from_dict(cls, data: dict) -> "ConverterOptions":
        """Create options from dictionary, falling back to defaults."""
        return cls(
            altitude_mode=data.get("altitude_mode", ALTITUDE_MODE_AGL),
            photo_interval=data.get("photo_interval", 0.0),
            gimbal_pitch=data.get("gimbal_pitch", DEFAULT_GIMBAL_PITCH),
            max_altitude_agl=data.get("max_altitude_agl", DEFAULT_MAX_ALTITUDE_AGL)
        )
