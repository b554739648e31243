"""
Geometry core: rotation algebra, local direction conversion and great-circle helpers.
"""

from .rotation import (
    AxisAngleRotation,
    compose,
    rotate,
    rotation_matrix,
    rotation_to_become,
)
from .direction import azimuth_of, elevation_of, heading_to_vector, to_direction
from .geodesy import (
    EARTH_RADIUS_KM,
    TravelObservation,
    lat_long_pair_heading,
    spherical_separation_angle,
    travel_between,
)

__all__ = [
    'AxisAngleRotation',
    'compose',
    'rotate',
    'rotation_matrix',
    'rotation_to_become',
    'azimuth_of',
    'elevation_of',
    'heading_to_vector',
    'to_direction',
    'EARTH_RADIUS_KM',
    'TravelObservation',
    'lat_long_pair_heading',
    'spherical_separation_angle',
    'travel_between',
]
