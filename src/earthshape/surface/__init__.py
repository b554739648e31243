"""
Surface patches: the oriented patch model, the flat patch collection and the
finite-difference frame builder.
"""

from .surface_square import SurfaceMap, SurfaceSquare
from .frame_builder import LocalFrameBuilder, PointFunction, build_patch, frame_rotation

__all__ = [
    'SurfaceMap',
    'SurfaceSquare',
    'LocalFrameBuilder',
    'PointFunction',
    'build_patch',
    'frame_rotation',
]
