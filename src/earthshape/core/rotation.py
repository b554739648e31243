#!/usr/bin/env python3
"""
Axis-Angle Rotation Algebra

Implements the rotation type used by every other earthshape module.  A
rotation is an explicit unit axis plus an angle in degrees (right-hand rule).
The packed "rotation vector" form, whose direction is the axis and whose
magnitude is the angle in degrees, is only produced or consumed at the edges
via AxisAngleRotation.from_vector / AxisAngleRotation.as_vector.

Key Functions:
- compose: Rotation equivalent to applying one rotation and then another
- rotate: Apply a rotation to a vector
- rotation_to_become: Rotation that turns one vector into another
- rotation_matrix: 3x3 matrix for a rotation

Usage:
    from earthshape.core.rotation import AxisAngleRotation, compose, rotate

    quarter_turn = AxisAngleRotation.about([0, -1, 0], 90.0)
    east = rotate([0, 0, -1], quarter_turn)        # -> [1, 0, 0]
    back = compose(quarter_turn, quarter_turn.inverse())  # -> identity
"""

import numpy as np
import logging
from typing import Tuple
from dataclasses import dataclass
from scipy.spatial.transform import Rotation

from .vectors import VectorLike, as_vector3, normalize, perpendicular_to

logger = logging.getLogger(__name__)

# Combined angles below this many radians collapse to the identity rotation
IDENTITY_TOLERANCE_RAD = 1e-12


@dataclass(frozen=True)
class AxisAngleRotation:
    """
    Immutable rotation by 'angle_degrees' about the unit vector 'axis'.

    The zero axis and the zero angle both mean the identity rotation; such
    inputs are stored as axis (0, 0, 0) with angle 0.  Negative angles are
    stored as the positive angle about the flipped axis.
    """
    axis: Tuple[float, float, float] = (0.0, 0.0, 0.0)
    angle_degrees: float = 0.0

    def __post_init__(self):
        axis = as_vector3(self.axis, "rotation axis")
        angle = float(self.angle_degrees)
        if not np.isfinite(angle):
            raise ValueError(f"Rotation angle must be finite, got {angle}")

        length = np.linalg.norm(axis)
        if length == 0.0 or angle == 0.0:
            axis = np.zeros(3)
            angle = 0.0
        else:
            axis = axis / length
            if angle < 0.0:
                axis = -axis
                angle = -angle

        object.__setattr__(self, "axis", tuple(float(c) for c in axis))
        object.__setattr__(self, "angle_degrees", angle)

    @classmethod
    def identity(cls) -> 'AxisAngleRotation':
        """The rotation that leaves every vector unchanged."""
        return cls()

    @classmethod
    def about(cls, axis: VectorLike, degrees: float) -> 'AxisAngleRotation':
        """Rotation of 'degrees' about 'axis' (need not be unit length)."""
        return cls(tuple(as_vector3(axis, "rotation axis")), degrees)

    @classmethod
    def from_vector(cls, packed: VectorLike) -> 'AxisAngleRotation':
        """Unpack a rotation vector whose magnitude is the angle in degrees."""
        packed = as_vector3(packed, "rotation vector")
        return cls(tuple(packed), float(np.linalg.norm(packed)))

    def as_vector(self) -> np.ndarray:
        """Packed form: the axis scaled by the angle in degrees."""
        return self.axis_vector * self.angle_degrees

    @property
    def axis_vector(self) -> np.ndarray:
        return np.array(self.axis)

    @property
    def angle_radians(self) -> float:
        return float(np.radians(self.angle_degrees))

    @property
    def is_identity(self) -> bool:
        return self.angle_degrees == 0.0

    def inverse(self) -> 'AxisAngleRotation':
        """Rotation that undoes this one."""
        return AxisAngleRotation(self.axis, -self.angle_degrees)

    def matrix(self) -> np.ndarray:
        return rotation_matrix(self)

    def apply(self, v: VectorLike) -> np.ndarray:
        return rotate(v, self)

    def then(self, other: 'AxisAngleRotation') -> 'AxisAngleRotation':
        """Rotation equivalent to applying self and then 'other'."""
        return compose(self, other)


def rotation_matrix(rotation: AxisAngleRotation) -> np.ndarray:
    """
    Convert an axis-angle rotation to a 3x3 rotation matrix.

    Args:
        rotation: Rotation to convert

    Returns:
        3x3 matrix R such that R @ v rotates v about the axis by the angle,
        following the right-hand rule (the glRotate matrix)
    """
    if rotation.is_identity:
        return np.eye(3)

    return Rotation.from_rotvec(rotation.axis_vector * rotation.angle_radians).as_matrix()


def rotate(v: VectorLike, rotation: AxisAngleRotation) -> np.ndarray:
    """
    Rotate vector 'v' by 'rotation'.

    Args:
        v: 3D vector
        rotation: Rotation to apply; the identity returns 'v' unchanged

    Returns:
        Rotated vector as a numpy array
    """
    v = as_vector3(v)
    if rotation.is_identity:
        return v
    return rotation_matrix(rotation) @ v


def compose(first: AxisAngleRotation, second: AxisAngleRotation) -> AxisAngleRotation:
    """
    Compose two rotations into one.

    Args:
        first: Rotation applied first
        second: Rotation applied second

    Returns:
        Single rotation equivalent to applying 'first' then 'second'

    Notes:
        With alpha, l the angle and axis of 'second' and beta, m those of
        'first', the half-angle composition is

            cos(gamma/2) = cos(alpha/2)cos(beta/2) - sin(alpha/2)sin(beta/2)(l.m)
            axis ~ l sin(alpha/2)cos(beta/2) + m cos(alpha/2)sin(beta/2)
                   + (l x m) sin(alpha/2)sin(beta/2)

        which is the quaternion product q_second * q_first.
    """
    alpha = second.angle_radians
    l = second.axis_vector
    beta = first.angle_radians
    m = first.axis_vector

    sin_a, cos_a = np.sin(alpha / 2), np.cos(alpha / 2)
    sin_b, cos_b = np.sin(beta / 2), np.cos(beta / 2)

    cos_half_gamma = cos_a * cos_b - sin_a * sin_b * np.dot(l, m)
    axis = (l * (sin_a * cos_b) +
            m * (cos_a * sin_b) +
            np.cross(l, m) * (sin_a * sin_b))

    # |axis| equals sin(gamma/2); it vanishes for no turn and for a full turn
    sin_half_gamma = np.linalg.norm(axis)
    if sin_half_gamma < IDENTITY_TOLERANCE_RAD:
        return AxisAngleRotation.identity()
    gamma = 2.0 * np.arctan2(sin_half_gamma, cos_half_gamma)

    return AxisAngleRotation.about(axis, float(np.degrees(gamma)))


def rotation_to_become(a: VectorLike, b: VectorLike,
                       wide_angle: bool = False) -> AxisAngleRotation:
    """
    Rotation that turns the direction of 'a' into the direction of 'b'.

    Args:
        a: Source vector (length ignored)
        b: Destination vector (length ignored)
        wide_angle: If False (default) the angle is asin(|a x b|), which is
            only correct for angles up to 90 degrees.  If True the angle is
            atan2(|a x b|, a.b), correct over [0, 180], and antiparallel
            inputs get a half turn about an arbitrary perpendicular axis.

    Returns:
        Rotation about normalize(a x b); identity if the vectors are
        parallel or either is zero
    """
    src = normalize(as_vector3(a, "source vector"))
    dest = normalize(as_vector3(b, "destination vector"))

    cross = np.cross(src, dest)
    sin_angle = float(np.linalg.norm(cross))

    if wide_angle:
        cos_angle = float(np.dot(src, dest))
        if sin_angle < IDENTITY_TOLERANCE_RAD and cos_angle < 0.0:
            return AxisAngleRotation.about(perpendicular_to(src), 180.0)
        degrees = float(np.degrees(np.arctan2(sin_angle, cos_angle)))
    else:
        degrees = float(np.degrees(np.arcsin(min(sin_angle, 1.0))))

    return AxisAngleRotation.about(cross, degrees)
