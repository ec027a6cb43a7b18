"""KML and KMZ export of converted waypoints."""
import io
import logging
import zipfile
from typing import BinaryIO, List

import simplekml

from flightplan2litchi.domain.waypoint import AltitudeMode, Waypoint
from flightplan2litchi.errors import WriteError

logger = logging.getLogger(__name__)

KMZ_DOCUMENT_NAME = "doc.kml"


class KMLExporter:
    """Exports waypoints as KML placemarks, plain or zipped (KMZ)."""

    @staticmethod
    def build_kml(waypoints: List[Waypoint], name: str = "Litchi mission") -> simplekml.Kml:
        """Build a KML document with one placemark per waypoint.

        Placemarks are named by their 1-based position in the mission and
        carry a (longitude, latitude, altitude) coordinate.
        """
        kml = simplekml.Kml(name=name)
        for idx, waypoint in enumerate(waypoints, start=1):
            point = kml.newpoint(
                name=str(idx),
                coords=[(round(waypoint.longitude, 7), round(waypoint.latitude, 7),
                         round(waypoint.altitude, 3))]
            )
            if waypoint.altitude_mode == AltitudeMode.RELATIVE:
                point.altitudemode = simplekml.AltitudeMode.relativetoground
            else:
                point.altitudemode = simplekml.AltitudeMode.absolute
        return kml

    @staticmethod
    def to_kml_string(waypoints: List[Waypoint]) -> str:
        return KMLExporter.build_kml(waypoints).kml()

    @staticmethod
    def export_kml(waypoints: List[Waypoint], stream: BinaryIO):
        """Write the KML document, UTF-8 encoded, to a binary stream.

        Raises:
            WriteError: the stream could not be written
        """
        data = KMLExporter.to_kml_string(waypoints).encode("utf-8")
        try:
            stream.write(data)
        except (OSError, ValueError) as e:
            raise WriteError(f"error writing KML output: {e}") from e
        logger.info(f"Wrote KML with {len(waypoints)} placemarks")

    @staticmethod
    def export_kmz(waypoints: List[Waypoint], stream: BinaryIO):
        """Write a KMZ archive holding a single doc.kml to a binary stream.

        Raises:
            WriteError: the stream could not be written
        """
        document = KMLExporter.to_kml_string(waypoints).encode("utf-8")
        mem = io.BytesIO()
        with zipfile.ZipFile(mem, mode="w", compression=zipfile.ZIP_DEFLATED) as z:
            z.writestr(KMZ_DOCUMENT_NAME, document)
        try:
            stream.write(mem.getvalue())
        except (OSError, ValueError) as e:
            raise WriteError(f"error writing KMZ output: {e}") from e
        logger.info(f"Wrote KMZ with {len(waypoints)} placemarks")
