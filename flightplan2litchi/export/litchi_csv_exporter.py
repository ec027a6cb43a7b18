"""Writer for the Litchi Mission Hub CSV format."""
import csv
import logging
from typing import IO, Iterable, List

from flightplan2litchi.data_import.field_parser import to_float32
from flightplan2litchi.domain.waypoint import MAX_ACTIONS, Waypoint
from flightplan2litchi.errors import WriteError

logger = logging.getLogger(__name__)


def _action_columns() -> List[str]:
    columns = []
    for i in range(1, MAX_ACTIONS + 1):
        columns.extend([f"actiontype{i}", f"actionparam{i}"])
    return columns


LITCHI_HEADER = (
    ["latitude", "longitude", "altitude(m)", "heading(deg)", "curvesize(m)",
     "rotationdir", "gimbalmode", "gimbalpitchangle"]
    + _action_columns()
    + ["altitudemode", "speed(m/s)", "poi_latitude", "poi_longitude",
       "poi_altitude(m)", "poi_altitudemode", "photo_timeinterval", "photo_distinterval"]
)


def format_waypoint_row(waypoint: Waypoint) -> List[str]:
    """Format a waypoint as the 46 Litchi CSV columns.

    Heading, curve size, gimbal pitch, speed and photo intervals are single
    precision in a Litchi mission and are rounded to float32 before formatting.
    """
    if len(waypoint.actions) > MAX_ACTIONS:
        logger.warning(f"Truncated excess actions for waypoint at "
                       f"{waypoint.latitude:.7f}, {waypoint.longitude:.7f}")

    row = [
        f"{waypoint.latitude:.7f}",
        f"{waypoint.longitude:.7f}",
        f"{waypoint.altitude:.3f}",
        f"{to_float32(waypoint.heading):.1f}",
        f"{to_float32(waypoint.curve_size):.1f}",
        f"{int(waypoint.rotation_direction)}",
        f"{int(waypoint.gimbal_mode)}",
        f"{to_float32(waypoint.gimbal_pitch):.1f}",
    ]

    for action in waypoint.padded_actions():
        row.extend([f"{int(action.action_type)}", f"{int(action.param)}"])

    row.extend([
        f"{int(waypoint.altitude_mode)}",
        f"{to_float32(waypoint.speed):.1f}",
        f"{waypoint.poi.latitude:.7f}",
        f"{waypoint.poi.longitude:.7f}",
        f"{waypoint.poi.altitude:.3f}",
        f"{int(waypoint.poi_altitude_mode)}",
        f"{to_float32(waypoint.photo_time_interval):.1f}",
        f"{to_float32(waypoint.photo_distance_interval):.1f}",
    ])
    return row


class LitchiCSVWriter:
    """Writes waypoints to a Litchi-compatible CSV stream."""

    def __init__(self, stream: IO[str]):
        self.stream = stream
        self._writer = csv.writer(stream, lineterminator="\n")

    def _write_row(self, row: List[str]):
        try:
            self._writer.writerow(row)
        except (OSError, ValueError, csv.Error) as e:
            raise WriteError(f"error writing CSV output: {e}") from e

    def write_header(self):
        """Write the standard Litchi mission header."""
        self._write_row(LITCHI_HEADER)

    def write_waypoint(self, waypoint: Waypoint):
        self._write_row(format_waypoint_row(waypoint))

    def write_waypoints(self, waypoints: Iterable[Waypoint]):
        for waypoint in waypoints:
            self.write_waypoint(waypoint)

    def flush(self):
        """Flush buffered output to the underlying stream."""
        try:
            self.stream.flush()
        except (OSError, ValueError) as e:
            raise WriteError(f"error writing CSV output: {e}") from e


def export_litchi_csv(waypoints: List[Waypoint], stream: IO[str]):
    """Write a complete Litchi mission (header and rows) to a text stream."""
    writer = LitchiCSVWriter(stream)
    writer.write_header()
    writer.write_waypoints(waypoints)
    writer.flush()
