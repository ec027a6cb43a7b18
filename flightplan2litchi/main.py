"""Command-line entry point.

Convert a Flight Planner export to a Litchi mission:
    flightplan2litchi -d 20m --altitude-mode agl < FlightplannerMission.csv > litchi.csv

Or to KML / KMZ for preview in a map viewer:
    flightplan2litchi --format kmz --input FlightplannerMission.csv --output mission.kmz
"""
import argparse
import logging
import sys
from typing import List, Optional

from flightplan2litchi.config import configure_logging, load_dotenv_file, load_settings
from flightplan2litchi.conversion.pipeline import ConversionPipeline
from flightplan2litchi.domain.options import ALTITUDE_MODE_AGL, ALTITUDE_MODE_ASL, ConverterOptions
from flightplan2litchi.errors import ConversionError
from flightplan2litchi.export.exporter import FORMAT_CSV, SUPPORTED_FORMATS, MissionExporter
from flightplan2litchi.units import Meters, distance_arg

logger = logging.getLogger(__name__)

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


def build_parser(settings) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="flightplan2litchi",
        description="Convert Flight Planner waypoint CSV to a Litchi mission (CSV, KML or KMZ)"
    )
    parser.add_argument("-d", dest="photo_interval", type=distance_arg,
                        default=Meters(settings.photo_interval),
                        help="Photo interval distance (e.g. 20m or 60ft)")
    parser.add_argument("--altitude-mode", type=str.lower, default=settings.altitude_mode,
                        choices=[ALTITUDE_MODE_AGL, ALTITUDE_MODE_ASL],
                        help="Altitude mode: agl or asl")
    parser.add_argument("--pitch", type=float, default=settings.gimbal_pitch,
                        help="Gimbal pitch angle (-90 to 0)")
    parser.add_argument("--max-altitude", type=float, default=settings.max_altitude_agl,
                        help="Maximum allowed altitude AGL in meters")
    parser.add_argument("--input", default=None,
                        help="Flight Planner CSV file (default: stdin)")
    parser.add_argument("--output", default=None,
                        help="Output file path (default: stdout)")
    parser.add_argument("--format", dest="output_format", type=str.lower, default=FORMAT_CSV,
                        choices=SUPPORTED_FORMATS,
                        help="Output format: csv, kml or kmz")
    parser.add_argument("--log-level", type=str.upper, default=settings.log_level,
                        choices=LOG_LEVELS,
                        help="Logging level (default: WARNING)")
    return parser


def run(args: argparse.Namespace) -> int:
    """Run one conversion. Returns the process exit status."""
    options = ConverterOptions(
        altitude_mode=args.altitude_mode,
        photo_interval=float(args.photo_interval),
        gimbal_pitch=args.pitch,
        max_altitude_agl=args.max_altitude
    )

    try:
        pipeline = ConversionPipeline(options)

        if args.input:
            with open(args.input, "r", encoding="utf-8", newline="") as f:
                waypoints = pipeline.convert(f)
        else:
            waypoints = pipeline.convert(sys.stdin)

        if args.output:
            with open(args.output, "wb") as f:
                MissionExporter.export(waypoints, args.output_format, f)
            print(f"wrote {args.output}", file=sys.stderr)
        else:
            MissionExporter.export(waypoints, args.output_format, sys.stdout.buffer)
            sys.stdout.buffer.flush()
    except ConversionError as e:
        logger.error(f"{e.code}: {e.message}")
        return 1
    except OSError as e:
        logger.error(f"I/O error: {e}")
        return 1

    return 0


def main(argv: Optional[List[str]] = None) -> int:
    load_dotenv_file()
    try:
        settings = load_settings()
    except ConversionError as e:
        configure_logging()
        logger.error(f"{e.code}: {e.message}")
        return 1

    args = build_parser(settings).parse_args(argv)
    configure_logging(args.log_level)
    return run(args)


if __name__ == '__main__':
    sys.exit(main())
