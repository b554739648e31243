#!/usr/bin/env python3
"""
Local-Frame Builder

Derives a SurfaceSquare from any parametric surface P(latitude, longitude)
by finite differencing: North follows increasing latitude, East follows
increasing longitude, and Up completes the right-handed triad.  The frame is
re-orthogonalised so that a surface that is not perfectly smooth still
yields an orthonormal North/Up/East.

Usage:
    from earthshape.surface import LocalFrameBuilder
    from earthshape.world.surfaces import spherical_earth_point

    builder = LocalFrameBuilder(spherical_earth_point)
    square = builder.build_patch(38.0, -122.0)
"""

import numpy as np
import logging
from typing import Callable

from ..core.rotation import AxisAngleRotation, compose, rotate, rotation_to_become
from ..core.vectors import NOMINAL_EAST, NOMINAL_NORTH, as_vector3, normalize
from .surface_square import SurfaceSquare

logger = logging.getLogger(__name__)

PointFunction = Callable[[float, float], np.ndarray]

# Latitude/longitude offset used for the finite differences
DEFAULT_STEP_DEGREES = 0.1


class LocalFrameBuilder:
    """Builds oriented patches on the surface described by a point function."""

    def __init__(self, point_function: PointFunction,
                 step_degrees: float = DEFAULT_STEP_DEGREES):
        """
        Args:
            point_function: Maps (latitude, longitude) in degrees to a 3D point
            step_degrees: Finite-difference offset
        """
        if step_degrees <= 0:
            raise ValueError(f"step_degrees must be positive, got {step_degrees}")
        self.point_function = point_function
        self.step_degrees = step_degrees

    def point(self, latitude: float, longitude: float) -> np.ndarray:
        return as_vector3(self.point_function(latitude, longitude), "surface point")

    def build_patch(self, latitude: float, longitude: float) -> SurfaceSquare:
        """
        Build the patch at (latitude, longitude).

        Returns:
            SurfaceSquare with no parent whose rotation_from_base and
            rotation_from_nominal both take the nominal frame to the local one
        """
        step = self.step_degrees
        center = self.point(latitude, longitude)

        # Difference toward the equator side so the neighbour stays well
        # inside [-90, 90] near the poles
        if latitude >= 0:
            north = normalize(center - self.point(latitude - step, longitude))
        else:
            north = normalize(self.point(latitude + step, longitude) - center)

        if longitude >= 0:
            east = normalize(center - self.point(latitude, longitude - step))
        else:
            east = normalize(self.point(latitude, longitude + step) - center)

        up = normalize(np.cross(east, north))
        east = np.cross(north, up)

        rotation = frame_rotation(north, east)
        logger.debug(f"Patch at ({latitude}, {longitude}): north={north}, up={up}, "
                     f"rotation={rotation.as_vector()}")

        return SurfaceSquare(
            center=center,
            north=north,
            up=up,
            latitude=latitude,
            longitude=longitude,
            rotation_from_base=rotation,
            rotation_from_nominal=rotation,
        )


def frame_rotation(north: np.ndarray, east: np.ndarray) -> AxisAngleRotation:
    """
    Rotation taking the nominal North/East pair onto 'north'/'east'.

    The first rotation aligns nominal North with 'north'.  The second turns
    the once-rotated nominal East onto 'east' about 'north' itself, which
    leaves North in place since both East vectors are orthogonal to it.
    """
    rot1 = rotation_to_become(NOMINAL_NORTH, north, wide_angle=True)
    rot1_east = rotate(NOMINAL_EAST, rot1)

    twist = float(np.degrees(np.arctan2(np.dot(np.cross(rot1_east, east), north),
                                        np.dot(rot1_east, east))))
    rot2 = AxisAngleRotation.about(north, twist)

    return compose(rot1, rot2)


def build_patch(point_function: PointFunction, latitude: float, longitude: float,
                step_degrees: float = DEFAULT_STEP_DEGREES) -> SurfaceSquare:
    """Convenience wrapper around LocalFrameBuilder.build_patch."""
    return LocalFrameBuilder(point_function, step_degrees).build_patch(latitude, longitude)
