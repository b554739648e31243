"""
Small vector helpers shared by the geometry modules.

All vectors are plain numpy arrays of shape (3,).  The "nominal" frame used
throughout earthshape has North along -Z, Up along +Y and East along +X.
"""

import numpy as np
from typing import Sequence, Union

VectorLike = Union[Sequence[float], np.ndarray]

# Nominal local frame: a patch with identity orientation sees these axes.
NOMINAL_NORTH = np.array([0.0, 0.0, -1.0])
NOMINAL_UP = np.array([0.0, 1.0, 0.0])
NOMINAL_EAST = np.array([1.0, 0.0, 0.0])


def as_vector3(v: VectorLike, name: str = "vector") -> np.ndarray:
    """
    Convert input to a float numpy 3-vector.

    Raises
    ------
    ValueError
        If the input does not have exactly three finite components
    """
    arr = np.asarray(v, dtype=float)
    if arr.shape != (3,):
        raise ValueError(f"{name} must be a 3-element vector, got shape {arr.shape}")
    if not np.all(np.isfinite(arr)):
        raise ValueError(f"{name} has non-finite components: {arr}")
    return arr


def normalize(v: VectorLike) -> np.ndarray:
    """Return a unit vector along 'v'.  The zero vector is returned unchanged."""
    arr = np.asarray(v, dtype=float)
    length = np.linalg.norm(arr)
    if length == 0.0:
        return arr.copy()
    return arr / length


def orthogonal_component(v: VectorLike, unit: VectorLike) -> np.ndarray:
    """Return the component of 'v' orthogonal to the unit vector 'unit'."""
    v = np.asarray(v, dtype=float)
    unit = np.asarray(unit, dtype=float)
    return v - unit * np.dot(v, unit)


def separation_angle_degrees(a: VectorLike, b: VectorLike) -> float:
    """Angle between two vectors in degrees, via the clamped arccos of their unit dot product."""
    dot_product = np.clip(np.dot(normalize(a), normalize(b)), -1.0, 1.0)
    return float(np.degrees(np.arccos(dot_product)))


def perpendicular_to(v: VectorLike) -> np.ndarray:
    """Return some unit vector perpendicular to 'v' (which must be non-zero)."""
    v = np.asarray(v, dtype=float)
    # Cross with the basis axis least aligned with v for a well-conditioned result
    basis = np.zeros(3)
    basis[int(np.argmin(np.abs(v)))] = 1.0
    return normalize(np.cross(v, basis))
