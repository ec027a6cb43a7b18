"""Waypoint domain model."""
from dataclasses import dataclass, field
from enum import IntEnum
from typing import List

MAX_ACTIONS = 15
HEADING_UNSET = 360.0
PHOTO_INTERVAL_UNUSED = -1.0
DEFAULT_GIMBAL_PITCH = -90.0


class AltitudeMode(IntEnum):
    """How a waypoint altitude is referenced. Values are the Litchi codes."""
    ABSOLUTE = 0  # above sea level
    RELATIVE = 1  # above ground level


@dataclass(frozen=True)
class GeoPoint:
    """Geographic position in decimal degrees and meters."""
    latitude: float = 0.0
    longitude: float = 0.0
    altitude: float = 0.0  # in meters

    def __post_init__(self):
        """Validate coordinates."""
        if not -90 <= self.latitude <= 90:
            raise ValueError(f"Latitude must be between -90 and 90, got {self.latitude}")
        if not -180 <= self.longitude <= 180:
            raise ValueError(f"Longitude must be between -180 and 180, got {self.longitude}")
        if self.altitude < 0:
            raise ValueError(f"Altitude must be non-negative, got {self.altitude}")

    def to_dict(self) -> dict:
        return {
            "latitude": self.latitude,
            "longitude": self.longitude,
            "altitude": self.altitude
        }


@dataclass(frozen=True)
class Action:
    """Action performed by the aircraft when it reaches a waypoint."""
    action_type: int = 0
    param: int = 0

    TAKE_PHOTO = 1

    @classmethod
    def take_photo(cls) -> "Action":
        return cls(cls.TAKE_PHOTO, 0)

    @classmethod
    def none(cls) -> "Action":
        return cls(0, 0)


def _default_actions() -> List[Action]:
    return [Action.take_photo()]


@dataclass
class Waypoint:
    """One mission waypoint as consumed by Litchi.

    A fresh instance carries the defaults every converted waypoint starts
    from; the conversion pipeline then sets position, altitude mode and
    heading.
    """
    position: GeoPoint = field(default_factory=GeoPoint)
    heading: float = HEADING_UNSET  # degrees, 360 means not resolved yet
    curve_size: float = 0.0
    rotation_direction: int = 0
    gimbal_mode: int = 0
    gimbal_pitch: float = DEFAULT_GIMBAL_PITCH
    altitude_mode: AltitudeMode = AltitudeMode.RELATIVE
    speed: float = 0.0  # m/s, 0 lets the mission use its cruise speed
    poi: GeoPoint = field(default_factory=GeoPoint)
    poi_altitude_mode: AltitudeMode = AltitudeMode.ABSOLUTE
    photo_time_interval: float = PHOTO_INTERVAL_UNUSED
    photo_distance_interval: float = PHOTO_INTERVAL_UNUSED
    actions: List[Action] = field(default_factory=_default_actions)

    @property
    def latitude(self) -> float:
        return self.position.latitude

    @property
    def longitude(self) -> float:
        return self.position.longitude

    @property
    def altitude(self) -> float:
        return self.position.altitude

    def padded_actions(self) -> List[Action]:
        """Return exactly MAX_ACTIONS actions, zero-padded or truncated."""
        actions = list(self.actions[:MAX_ACTIONS])
        actions.extend(Action.none() for _ in range(MAX_ACTIONS - len(actions)))
        return actions

    def to_dict(self) -> dict:
        """Convert waypoint to dictionary."""
        return {
            "position": self.position.to_dict(),
            "heading": self.heading,
            "curve_size": self.curve_size,
            "rotation_direction": self.rotation_direction,
            "gimbal_mode": self.gimbal_mode,
            "gimbal_pitch": self.gimbal_pitch,
            "altitude_mode": self.altitude_mode.name.lower(),
            "speed": self.speed,
            "poi": self.poi.to_dict(),
            "poi_altitude_mode": self.poi_altitude_mode.name.lower(),
            "photo_time_interval": self.photo_time_interval,
            "photo_distance_interval": self.photo_distance_interval,
            "actions": [{"type": a.action_type, "param": a.param} for a in self.actions]
        }
