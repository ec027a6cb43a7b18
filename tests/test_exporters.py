"""Tests for Litchi CSV, KML and KMZ export."""
import io
import unittest
import xml.etree.ElementTree as ET
import zipfile

from flightplan2litchi.domain.waypoint import Action, AltitudeMode, GeoPoint, Waypoint
from flightplan2litchi.errors import ConfigError, WriteError
from flightplan2litchi.export.exporter import MissionExporter
from flightplan2litchi.export.kml_exporter import KMLExporter
from flightplan2litchi.export.litchi_csv_exporter import (
    LITCHI_HEADER,
    LitchiCSVWriter,
    export_litchi_csv,
    format_waypoint_row,
)

KML_NS = "{http://www.opengis.net/kml/2.2}"


def sample_waypoints():
    return [
        Waypoint(position=GeoPoint(43.0700000, -89.4000000, 60.0), heading=90.0),
        Waypoint(position=GeoPoint(43.0710000, -89.4000000, 62.9), heading=90.0,
                 altitude_mode=AltitudeMode.ABSOLUTE),
    ]


def placemarks(document: bytes):
    root = ET.fromstring(document)
    return list(root.iter(f"{KML_NS}Placemark"))


class TestLitchiCSV(unittest.TestCase):
    """Test the Litchi CSV writer."""

    def test_header(self):
        """Test the header has every Litchi column in order."""
        self.assertEqual(len(LITCHI_HEADER), 46)
        self.assertEqual(LITCHI_HEADER[:4], ["latitude", "longitude", "altitude(m)", "heading(deg)"])
        self.assertEqual(LITCHI_HEADER[8:10], ["actiontype1", "actionparam1"])
        self.assertEqual(LITCHI_HEADER[36:38], ["actiontype15", "actionparam15"])
        self.assertEqual(LITCHI_HEADER[-1], "photo_distinterval")

    def test_row_formatting(self):
        """Test numeric precision of every column group."""
        wp = Waypoint(position=GeoPoint(43.07123456, -89.4, 61.25), heading=123.456,
                      gimbal_pitch=-45.0, photo_distance_interval=20.0)
        row = format_waypoint_row(wp)

        self.assertEqual(len(row), len(LITCHI_HEADER))
        self.assertEqual(row[0], "43.0712346")
        self.assertEqual(row[1], "-89.4000000")
        self.assertEqual(row[2], "61.250")
        self.assertEqual(row[3], "123.5")
        self.assertEqual(row[4:8], ["0.0", "0", "0", "-45.0"])
        self.assertEqual(row[8:10], ["1", "0"])
        self.assertEqual(row[10:38], ["0"] * 28)
        self.assertEqual(row[38:], ["1", "0.0", "0.0000000", "0.0000000", "0.000", "0", "-1.0", "20.0"])

    def test_single_precision_columns(self):
        """Test single precision columns round as float32 at .x5 boundaries."""
        # 0.45 is just above .45 as a double and just below it as a float32
        wp = Waypoint(heading=0.45, curve_size=0.45, gimbal_pitch=-0.45, speed=0.45,
                      photo_time_interval=0.45, photo_distance_interval=0.45)
        row = format_waypoint_row(wp)
        self.assertEqual(f"{0.45:.1f}", "0.5")
        self.assertEqual(row[3], "0.4")
        self.assertEqual(row[4], "0.4")
        self.assertEqual(row[7], "-0.4")
        self.assertEqual(row[39], "0.4")
        self.assertEqual(row[44:], ["0.4", "0.4"])

    def test_excess_actions_truncated(self):
        """Test more than fifteen actions are truncated with a warning."""
        wp = Waypoint(actions=[Action(1, i) for i in range(17)])
        with self.assertLogs("flightplan2litchi.export.litchi_csv_exporter", level="WARNING"):
            row = format_waypoint_row(wp)
        self.assertEqual(len(row), 46)
        self.assertEqual(row[36:38], ["1", "14"])

    def test_export(self):
        """Test header plus one row per waypoint with newline endings."""
        output = io.StringIO()
        export_litchi_csv(sample_waypoints(), output)
        text = output.getvalue()
        self.assertNotIn("\r", text)
        lines = text.strip().split("\n")
        self.assertEqual(len(lines), 3)
        self.assertEqual(lines[0], ",".join(LITCHI_HEADER))
        self.assertEqual(lines[2].split(",")[38], "0")

    def test_write_error(self):
        """Test stream failures surface as WriteError."""
        output = io.StringIO()
        writer = LitchiCSVWriter(output)
        output.close()
        with self.assertRaises(WriteError):
            writer.write_header()


class TestKML(unittest.TestCase):
    """Test KML and KMZ export."""

    def test_kml_placemarks(self):
        """Test one placemark per waypoint with lon,lat,alt coordinates."""
        output = io.BytesIO()
        KMLExporter.export_kml(sample_waypoints(), output)
        document = output.getvalue()

        self.assertIn(b"<kml", document)
        marks = placemarks(document)
        self.assertEqual(len(marks), 2)
        self.assertEqual(marks[0].find(f"{KML_NS}name").text, "1")
        self.assertEqual(marks[1].find(f"{KML_NS}name").text, "2")

        coords = marks[1].find(f"{KML_NS}Point/{KML_NS}coordinates").text.strip()
        lon, lat, alt = (float(v) for v in coords.split(","))
        self.assertAlmostEqual(lon, -89.4)
        self.assertAlmostEqual(lat, 43.071)
        self.assertAlmostEqual(alt, 62.9)

    def test_kml_altitude_modes(self):
        """Test placemarks mirror the waypoint altitude mode."""
        marks = placemarks(KMLExporter.to_kml_string(sample_waypoints()).encode("utf-8"))
        modes = [m.find(f"{KML_NS}Point/{KML_NS}altitudeMode").text for m in marks]
        self.assertEqual(modes, ["relativeToGround", "absolute"])

    def test_empty_kml(self):
        """Test an empty mission still produces a KML document."""
        document = KMLExporter.to_kml_string([]).encode("utf-8")
        self.assertEqual(placemarks(document), [])

    def test_kmz_contains_doc_kml(self):
        """Test the KMZ archive holds a single doc.kml."""
        output = io.BytesIO()
        KMLExporter.export_kmz(sample_waypoints(), output)

        with zipfile.ZipFile(io.BytesIO(output.getvalue())) as z:
            self.assertEqual(z.namelist(), ["doc.kml"])
            document = z.read("doc.kml")
        self.assertIn(b"<kml", document)
        self.assertEqual(len(placemarks(document)), 2)

    def test_kml_write_error(self):
        """Test a closed stream raises WriteError."""
        output = io.BytesIO()
        output.close()
        with self.assertRaises(WriteError):
            KMLExporter.export_kml(sample_waypoints(), output)
        with self.assertRaises(WriteError):
            KMLExporter.export_kmz(sample_waypoints(), output)


class TestMissionExporter(unittest.TestCase):
    """Test format dispatch."""

    def test_csv_to_binary_stream(self):
        """Test CSV export through a binary stream."""
        output = io.BytesIO()
        MissionExporter.export(sample_waypoints(), "CSV", output)
        lines = output.getvalue().decode("utf-8").strip().split("\n")
        self.assertEqual(len(lines), 3)
        self.assertFalse(output.closed)

    def test_csv_to_closed_stream(self):
        """Test a closed output stream raises WriteError for every format."""
        for fmt in ("csv", "kml", "kmz"):
            with self.subTest(fmt=fmt):
                output = io.BytesIO()
                output.close()
                with self.assertRaises(WriteError):
                    MissionExporter.export(sample_waypoints(), fmt, output)

    def test_kml_and_kmz(self):
        """Test KML and KMZ dispatch."""
        kml = io.BytesIO()
        MissionExporter.export(sample_waypoints(), "kml", kml)
        self.assertEqual(len(placemarks(kml.getvalue())), 2)

        kmz = io.BytesIO()
        MissionExporter.export(sample_waypoints(), "kmz", kmz)
        self.assertTrue(zipfile.is_zipfile(io.BytesIO(kmz.getvalue())))

    def test_unknown_format(self):
        """Test unsupported formats are rejected."""
        with self.assertRaises(ConfigError):
            MissionExporter.export(sample_waypoints(), "gpx", io.BytesIO())


if __name__ == '__main__':
    unittest.main()
