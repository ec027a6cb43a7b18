"""Main exporter interface."""
import io
from typing import BinaryIO, List

from flightplan2litchi.domain.waypoint import Waypoint
from flightplan2litchi.errors import ConfigError, WriteError
from flightplan2litchi.export.kml_exporter import KMLExporter
from flightplan2litchi.export.litchi_csv_exporter import export_litchi_csv

FORMAT_CSV = "csv"
FORMAT_KML = "kml"
FORMAT_KMZ = "kmz"
SUPPORTED_FORMATS = (FORMAT_CSV, FORMAT_KML, FORMAT_KMZ)


class MissionExporter:
    """Writes a finished waypoint sequence in one of the supported formats."""

    @staticmethod
    def export(waypoints: List[Waypoint], output_format: str, stream: BinaryIO):
        """Export waypoints to a binary stream.

        Args:
            waypoints: Finished waypoint sequence
            output_format: "csv", "kml" or "kmz"
            stream: Binary output stream

        Raises:
            ConfigError: unknown output format
            WriteError: the stream could not be written
        """
        fmt = output_format.lower()
        if fmt == FORMAT_CSV:
            text = io.StringIO(newline="")
            export_litchi_csv(waypoints, text)
            try:
                stream.write(text.getvalue().encode("utf-8"))
            except (OSError, ValueError) as e:
                raise WriteError(f"error writing CSV output: {e}") from e
        elif fmt == FORMAT_KML:
            KMLExporter.export_kml(waypoints, stream)
        elif fmt == FORMAT_KMZ:
            KMLExporter.export_kmz(waypoints, stream)
        else:
            raise ConfigError(
                f"Unsupported output format: {output_format}. Supported: {', '.join(SUPPORTED_FORMATS)}",
                details={"format": output_format}
            )
