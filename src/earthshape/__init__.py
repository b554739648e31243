"""
earthshape: Surface Shape Reconstruction from Star Sightings

This package infers the shape of the ground people stand on using only the
directions in which stars appear from different places, plus the heading and
distance traveled between those places.

Modules:
    core: Axis-angle rotations, azimuth/elevation conversion, great-circle helpers
    surface: Oriented surface patches and the finite-difference frame builder
    stars: Star sightings, the bright-star catalog and the star generator
    curvature: Normal curvature and geodesic torsion from paired sightings
    world: Real and hypothetical world models
    config: YAML configuration loading
"""

__version__ = "1.0.0"
__author__ = "Earth Shape Team"

from .core import AxisAngleRotation, compose, rotate, rotation_to_become, to_direction
from .surface import LocalFrameBuilder, SurfaceMap, SurfaceSquare
from .stars import StarGenerator, StarObservation
from .curvature import CurvatureCalculator, CurvatureResult

__all__ = [
    'AxisAngleRotation',
    'compose',
    'rotate',
    'rotation_to_become',
    'to_direction',
    'LocalFrameBuilder',
    'SurfaceMap',
    'SurfaceSquare',
    'StarGenerator',
    'StarObservation',
    'CurvatureCalculator',
    'CurvatureResult',
]
