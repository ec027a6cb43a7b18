"""Initial great-circle bearing between two geographic points."""
import math

POLE_MARGIN_LAT = 89.5
HIGH_LAT = 89.0
HIGH_LAT_OPPOSITE_TOLERANCE = 10.0
ANTIPODAL_TOLERANCE = 1e-6
DEGENERATE_EPSILON = 1e-10


def calculate_bearing(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Calculate the initial bearing from point 1 to point 2.

    Uses the forward azimuth formula, with fixed answers for the cases where it
    is numerically unstable: coincident points, points near a pole and
    antipodal pairs.

    Args:
        lat1, lon1: Start point in decimal degrees
        lat2, lon2: End point in decimal degrees

    Returns:
        Bearing in degrees from true north, in [0, 360)
    """
    if lat1 == lat2 and lon1 == lon2:
        return 0.0

    if abs(lat1) > POLE_MARGIN_LAT or abs(lat2) > POLE_MARGIN_LAT:
        if lat1 > POLE_MARGIN_LAT:
            return 180.0  # every direction is south from the north pole
        if lat1 < -POLE_MARGIN_LAT:
            return 0.0
        if lat1 > HIGH_LAT and lat2 > HIGH_LAT:
            if abs(abs(lon1 - lon2) - 180.0) < HIGH_LAT_OPPOSITE_TOLERANCE:
                return 180.0

    if abs(lat1 + lat2) < ANTIPODAL_TOLERANCE and abs(abs(lon1 - lon2) - 180.0) < ANTIPODAL_TOLERANCE:
        return 90.0 if lon2 > lon1 else 270.0

    lat1_rad = math.radians(lat1)
    lat2_rad = math.radians(lat2)
    dlon_rad = math.radians(lon2 - lon1)

    y = math.sin(dlon_rad) * math.cos(lat2_rad)
    x = math.cos(lat1_rad) * math.sin(lat2_rad) - math.sin(lat1_rad) * math.cos(lat2_rad) * math.cos(dlon_rad)

    if abs(x) < DEGENERATE_EPSILON and abs(y) < DEGENERATE_EPSILON:
        return 0.0

    bearing = math.degrees(math.atan2(y, x)) % 360.0
    # Tiny negative angles wrap to exactly 360.0 in floating point
    if bearing >= 360.0:
        bearing = 0.0
    return bearing
