"""Conversion of Flight Planner CSV data into Litchi mission waypoints."""
import logging
import sys
from typing import IO, Iterable, List, Optional

from flightplan2litchi.data_import.field_parser import FieldKind, is_missing, parse_field
from flightplan2litchi.data_import.flightplanner_reader import (
    COL_ALTITUDE_AGL,
    COL_ALTITUDE_ASL,
    COL_LATITUDE,
    COL_LONGITUDE,
    COL_WAYPOINT,
    MIN_COLUMNS,
    read_records,
)
from flightplan2litchi.domain.options import ConverterOptions
from flightplan2litchi.domain.waypoint import Action, AltitudeMode, GeoPoint, Waypoint
from flightplan2litchi.errors import FieldError
from flightplan2litchi.export.litchi_csv_exporter import LitchiCSVWriter
from flightplan2litchi.navigation.bearing import calculate_bearing

logger = logging.getLogger(__name__)

MAX_ASL_ALTITUDE = sys.float_info.max


class ConversionPipeline:
    """Converts Flight Planner rows into an ordered list of Litchi waypoints.

    Usage:
        pipeline = ConversionPipeline(options)
        waypoints = pipeline.convert(open("mission.csv"))
        # or straight to a Litchi CSV
        pipeline.process(input_stream, output_stream)

    Options are validated on construction; a ConfigError aborts the run
    before any output is produced. Rows that fail to parse are skipped with a
    warning and the run continues.
    """

    def __init__(self, options: Optional[ConverterOptions] = None):
        self.options = options or ConverterOptions.default()
        self.options.validate()

    def new_waypoint(self) -> Waypoint:
        """Create a waypoint carrying the run-wide defaults."""
        return Waypoint(
            gimbal_pitch=self.options.gimbal_pitch,
            altitude_mode=self.options.waypoint_altitude_mode,
            photo_distance_interval=self.options.photo_interval,
            actions=[Action.take_photo()]
        )

    def convert_record(self, record: List[str], line_num: int = 0) -> Optional[Waypoint]:
        """Build a waypoint from one data record.

        Returns:
            The waypoint, or None when the record must be skipped
        """
        if len(record) < MIN_COLUMNS:
            logger.warning(f"Line {line_num}: expected at least {MIN_COLUMNS} columns, "
                           f"got {len(record)}; skipping")
            return None

        waypoint = self.new_waypoint()

        try:
            longitude = parse_field(record[COL_LONGITUDE], FieldKind.REAL, -180, 180)
        except FieldError as e:
            logger.warning(f"Line {line_num}: error parsing longitude: {e}")
            return None

        try:
            latitude = parse_field(record[COL_LATITUDE], FieldKind.REAL, -90, 90)
        except FieldError as e:
            logger.warning(f"Line {line_num}: error parsing latitude: {e}")
            return None

        altitude = self._resolve_altitude(waypoint, record, line_num)
        if altitude is None:
            return None

        waypoint.position = GeoPoint(latitude=latitude, longitude=longitude, altitude=altitude)
        return waypoint

    def _resolve_altitude(self, waypoint: Waypoint, record: List[str], line_num: int) -> Optional[float]:
        """Pick and validate the altitude column for the configured mode.

        In AGL mode a missing AGL value falls back to the ASL column and
        switches this waypoint (only) to absolute altitude.
        """
        if not self.options.uses_agl:
            try:
                return parse_field(record[COL_ALTITUDE_ASL], FieldKind.REAL, 0, MAX_ASL_ALTITUDE)
            except FieldError as e:
                logger.warning(f"Line {line_num}: error parsing altitude "
                               f"(mode {self.options.altitude_mode}): {e}")
                return None

        column = COL_ALTITUDE_AGL
        if is_missing(record[COL_ALTITUDE_AGL]):
            logger.warning(f"Line {line_num}: AGL altitude is NaN, falling back to ASL "
                           f"and switching waypoint {record[COL_WAYPOINT]} to absolute mode")
            column = COL_ALTITUDE_ASL
            waypoint.altitude_mode = AltitudeMode.ABSOLUTE

        try:
            return parse_field(record[column], FieldKind.REAL, 0, self.options.max_altitude_agl)
        except FieldError as e:
            logger.warning(f"Line {line_num}: altitude {record[column]!r} exceeds maximum allowed "
                           f"AGL height of {self.options.max_altitude_agl} m or is invalid: {e}")
            return None

    def convert_lines(self, lines: Iterable[str]) -> List[Waypoint]:
        """Convert every data line, in file order, without resolving headings."""
        waypoints = []
        skipped = 0
        for line_num, record in read_records(lines):
            waypoint = self.convert_record(record, line_num)
            if waypoint is None:
                skipped += 1
                continue
            waypoints.append(waypoint)

        logger.info(f"Converted {len(waypoints)} waypoints, skipped {skipped} rows")
        return waypoints

    @staticmethod
    def resolve_headings(waypoints: List[Waypoint]):
        """Point every waypoint at the next one.

        The last waypoint has nothing to aim at and keeps the heading of the
        previous leg. With fewer than two waypoints headings stay unset.
        """
        if len(waypoints) < 2:
            return

        for current, following in zip(waypoints, waypoints[1:]):
            current.heading = calculate_bearing(current.latitude, current.longitude,
                                                following.latitude, following.longitude)

        waypoints[-1].heading = waypoints[-2].heading

    def convert(self, lines: Iterable[str]) -> List[Waypoint]:
        """Convert Flight Planner lines into the finished waypoint sequence."""
        waypoints = self.convert_lines(lines)
        self.resolve_headings(waypoints)
        return waypoints

    def process(self, input_stream: Iterable[str], output_stream: IO[str]) -> List[Waypoint]:
        """Convert Flight Planner CSV and write it as a Litchi mission CSV.

        Raises:
            WriteError: the mission could not be written
        """
        writer = LitchiCSVWriter(output_stream)
        writer.write_header()
        waypoints = self.convert(input_stream)
        writer.write_waypoints(waypoints)
        writer.flush()
        return waypoints


def convert_waypoints(lines: Iterable[str], options: Optional[ConverterOptions] = None) -> List[Waypoint]:
    """Convert Flight Planner lines into Litchi waypoints."""
    return ConversionPipeline(options).convert(lines)


def process(input_stream: Iterable[str], output_stream: IO[str],
            options: Optional[ConverterOptions] = None) -> List[Waypoint]:
    """Convert Flight Planner CSV into a Litchi mission CSV."""
    return ConversionPipeline(options).process(input_stream, output_stream)
