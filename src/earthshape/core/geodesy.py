"""
Great-circle helpers for travel between (latitude, longitude) pairs.

These encode the size and shape of the real Earth, but what they produce
(heading and distance along the shortest route) is exactly what one would
measure by walking or driving the route, whatever model is used to compute
it.  They exist for callers that only know geographic coordinates.
"""

import numpy as np
import logging
from dataclasses import dataclass

logger = logging.getLogger(__name__)

# Mean radius of the Earth
EARTH_RADIUS_KM = 6371.0

# arccos of a cosine that rounds just below 1 is about 1e-6 degrees
COINCIDENT_DEGREES = 1e-5


@dataclass(frozen=True)
class TravelObservation:
    """Headings and distance along the shortest route between two points."""
    start_latitude: float
    start_longitude: float
    end_latitude: float
    end_longitude: float
    distance_km: float
    start_to_end_heading: float  # Degrees East of North, at the start
    end_to_start_heading: float  # Degrees East of North, at the end

    @property
    def end_heading(self) -> float:
        """Direction of continued start->end travel, as seen at the end location."""
        return (self.end_to_start_heading + 180.0) % 360.0


def clamp_latitude(latitude: float) -> float:
    return float(np.clip(latitude, -90.0, 90.0))


def normalize_longitude(longitude: float) -> float:
    """Map a longitude into (-180, 180]."""
    longitude = float(longitude) % 360.0
    if longitude > 180.0:
        longitude -= 360.0
    return longitude


def spherical_separation_angle(lat1: float, lon1: float,
                               lat2: float, lon2: float) -> float:
    """
    Angle in degrees subtended at the center of a sphere by two surface points.

    Uses the spherical law of cosines, clamped against rounding.
    """
    phi1, phi2 = np.radians(lat1), np.radians(lat2)
    delta_lambda = np.radians(lon2 - lon1)
    cos_c = (np.sin(phi1) * np.sin(phi2) +
             np.cos(phi1) * np.cos(phi2) * np.cos(delta_lambda))
    return float(np.degrees(np.arccos(np.clip(cos_c, -1.0, 1.0))))


def lat_long_pair_heading(start_lat: float, start_lon: float,
                          end_lat: float, end_lon: float) -> float:
    """
    Initial great-circle heading from start to end.

    Args:
        start_lat, start_lon: Start location in degrees
        end_lat, end_lon: End location in degrees

    Returns:
        Heading in [0, 360) degrees East of North.  Coincident points give 0,
        a start at the North pole gives 180 and one at the South pole gives 0.

    Notes:
        Applies the spherical law of cosines to the triangle formed by the
        North pole, the start and the end, whose sides are the two colatitudes
        and the separation c:

            sin(end_lat) = sin(start_lat) cos(c) + cos(start_lat) sin(c) cos(H)
    """
    separation = spherical_separation_angle(start_lat, start_lon, end_lat, end_lon)
    if separation < COINCIDENT_DEGREES:
        return 0.0
    if start_lat >= 90.0:
        return 180.0
    if start_lat <= -90.0:
        return 0.0

    phi1, phi2 = np.radians(start_lat), np.radians(end_lat)
    c = np.radians(separation)
    cos_heading = (np.sin(phi2) - np.sin(phi1) * np.cos(c)) / (np.cos(phi1) * np.sin(c))
    heading = float(np.degrees(np.arccos(np.clip(cos_heading, -1.0, 1.0))))

    # arccos only gives [0, 180]; westward travel is the mirror image
    if normalize_longitude(end_lon - start_lon) < 0.0:
        heading = (360.0 - heading) % 360.0
    return heading


def travel_between(start_lat: float, start_lon: float,
                   end_lat: float, end_lon: float,
                   radius_km: float = EARTH_RADIUS_KM) -> TravelObservation:
    """
    Headings and distance of the shortest route over a sphere.

    Args:
        start_lat, start_lon: Start location in degrees
        end_lat, end_lon: End location in degrees
        radius_km: Sphere radius

    Returns:
        TravelObservation with normalized coordinates
    """
    start_lat, end_lat = clamp_latitude(start_lat), clamp_latitude(end_lat)
    start_lon, end_lon = normalize_longitude(start_lon), normalize_longitude(end_lon)

    arc_degrees = spherical_separation_angle(start_lat, start_lon, end_lat, end_lon)
    distance_km = float(np.radians(arc_degrees) * radius_km)

    travel = TravelObservation(
        start_latitude=start_lat,
        start_longitude=start_lon,
        end_latitude=end_lat,
        end_longitude=end_lon,
        distance_km=distance_km,
        start_to_end_heading=lat_long_pair_heading(start_lat, start_lon, end_lat, end_lon),
        end_to_start_heading=lat_long_pair_heading(end_lat, end_lon, start_lat, start_lon),
    )
    logger.debug(f"Travel ({start_lat}, {start_lon}) -> ({end_lat}, {end_lon}): "
                 f"{distance_km:.1f} km at {travel.start_to_end_heading:.3f} deg")
    return travel
