"""
Point functions and a-priori star maps for the built-in world models.

Every point function maps (latitude, longitude) in degrees to a 3D point in
units of 1000 km.  North is along -Z and Up along +Y at latitude 0,
longitude 0 of the spherical Earth, matching the nominal local frame.
"""

import numpy as np
from typing import Dict

from ..core.geodesy import EARTH_RADIUS_KM
from ..core.rotation import AxisAngleRotation, rotate
from ..stars.star_generator import StarPosition

# Units of the model coordinate system, in km
MODEL_UNIT_KM = 1000.0

# Where the close-star model agrees exactly with the real sky
REFERENCE_LATITUDE = 38.0
REFERENCE_LONGITUDE = -122.0

# Distance from the reference location, in thousands of km.  The first four
# are about one Earth radius away, the rest about as far as the Moon.
CLOSE_STAR_DISTANCES: Dict[str, float] = {
    "Procyon": 6.0,
    "Betelgeuse": 7.0,
    "Rigel": 8.0,
    "Aldebaran": 9.0,
    "Sirius": 380.0,
    "Capella": 390.0,
    "Polaris": 400.0,
    "Dubhe": 410.0,
}


def spherical_earth_point(latitude: float, longitude: float,
                          radius_km: float = EARTH_RADIUS_KM) -> np.ndarray:
    """Sphere centered at the origin with the North pole at -Z."""
    point = np.array([0.0, radius_km / MODEL_UNIT_KM, 0.0])
    point = rotate(point, AxisAngleRotation.about([1, 0, 0], -latitude))
    return rotate(point, AxisAngleRotation.about([0, 0, 1], -longitude))


def _disk_coordinates(latitude: float, longitude: float, radius_km: float):
    # Azimuthal equidistant projection centered on the North pole
    scale = radius_km / MODEL_UNIT_KM
    r = np.radians(90.0 - latitude) * scale
    lon = np.radians(longitude)
    return r * np.sin(lon), r * np.cos(lon), scale


def azimuthal_equidistant_point(latitude: float, longitude: float,
                                radius_km: float = EARTH_RADIUS_KM) -> np.ndarray:
    """Flat disk in the Y=0 plane, North pole at the origin."""
    x, z, _ = _disk_coordinates(latitude, longitude, radius_km)
    return np.array([x, 0.0, z])


def bowl_point(latitude: float, longitude: float,
               radius_km: float = EARTH_RADIUS_KM) -> np.ndarray:
    """The azimuthal disk with its rim raised."""
    x, z, _ = _disk_coordinates(latitude, longitude, radius_km)
    y = 5.0 * (1.0 - np.cos(np.radians((90.0 - latitude) / 2.0)))
    return np.array([x, y, z])


def saddle_point(latitude: float, longitude: float,
                 radius_km: float = EARTH_RADIUS_KM) -> np.ndarray:
    """The azimuthal disk bent up along X and down along Z."""
    x, z, scale = _disk_coordinates(latitude, longitude, radius_km)
    y = (x * x - z * z) / (scale * 5.0)
    return np.array([x, y, z])


def synthetic_star_map() -> Dict[str, StarPosition]:
    """Arbitrary stars for the bowl and saddle: some close, some far, two at infinity."""
    stars = [
        StarPosition("A", (1, 6, 2), 1.0),
        StarPosition("B", (-3, 7, 4), 1.0),
        StarPosition("C", (5, 18, -6), 1.0),
        StarPosition("D", (-17, 19, -8), 1.0),
        StarPosition("E", (200, 380, 300), 1.0),
        StarPosition("F", (-300, 390, 150), 1.0),
        StarPosition("G", (15, 28, -6), 0.0),
        StarPosition("H", (-7, 29, -18), 0.0),
    ]
    return {star.name: star for star in stars}
