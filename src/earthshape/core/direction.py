"""
Direction <-> azimuth/elevation conversion in a patch's local frame.

Local frame convention: -Z is North, +Y is Up, +X is East.  Azimuth is
measured in degrees clockwise from North (as seen from above), elevation in
degrees above the horizon.
"""

import numpy as np
import logging

from .rotation import AxisAngleRotation, rotate
from .vectors import VectorLike, as_vector3, NOMINAL_NORTH, NOMINAL_UP

logger = logging.getLogger(__name__)


def to_direction(azimuth_deg: float, elevation_deg: float) -> np.ndarray:
    """
    Convert azimuth/elevation to a unit vector in the local frame.

    Args:
        azimuth_deg: Degrees East of North
        elevation_deg: Degrees above the horizon

    Returns:
        Unit vector; azimuth 0 points toward -Z, azimuth 90 toward +X
    """
    if not (np.isfinite(azimuth_deg) and np.isfinite(elevation_deg)):
        raise ValueError(f"Non-finite sighting: az={azimuth_deg}, el={elevation_deg}")

    az = np.radians(azimuth_deg)
    el = np.radians(elevation_deg)
    horizontal = np.cos(el)
    return np.array([horizontal * np.sin(az), np.sin(el), -horizontal * np.cos(az)])


def elevation_of(direction: VectorLike) -> float:
    """Elevation in [-90, 90] degrees of a unit vector in the local frame."""
    d = as_vector3(direction, "direction")
    # Clamp for vectors that are slightly longer than unit
    return float(np.degrees(np.arcsin(np.clip(d[1], -1.0, 1.0))))


def azimuth_of(direction: VectorLike) -> float:
    """
    Azimuth in [0, 360) degrees of a vector in the local frame.

    The first atan2 argument, x, grows as azimuth increases clockwise from
    North; the second, -z, plays the role of the standard X coordinate.
    Undefined (any value) for straight up or straight down.
    """
    d = as_vector3(direction, "direction")
    azimuth = float(np.degrees(np.arctan2(d[0], -d[2]))) % 360.0
    # Tiny negative angles round up to exactly 360 under the modulus
    if azimuth >= 360.0:
        azimuth -= 360.0
    return azimuth


def heading_to_vector(heading_deg: float) -> np.ndarray:
    """Unit horizontal vector for a travel heading in degrees East of North."""
    return rotate(NOMINAL_NORTH, AxisAngleRotation.about(NOMINAL_UP, -heading_deg))
