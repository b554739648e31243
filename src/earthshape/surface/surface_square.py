#!/usr/bin/env python3
"""
Oriented Surface Patches

A SurfaceSquare is one small square of the reconstructed surface: a center
point with a local North/Up/East frame, the rotation that takes the nominal
frame (North = -Z, Up = +Y, East = +X) to that local frame, and the star
sightings taken there.

Patches live in a flat SurfaceMap addressed by integer id.  A patch built
from another records the parent's id rather than a reference to it, so
removing a parent never removes its children; it only clears their parent_id.

Usage:
    from earthshape.surface import SurfaceMap

    surface = SurfaceMap()
    base_id = surface.add(base_square)
    child_id = surface.derive(base_id, center, rotation_from_base, latitude, longitude)
    surface.remove(base_id)    # surface[child_id].parent_id is now None
"""

import numpy as np
import logging
from typing import Dict, Iterator, List, Optional, Tuple
from dataclasses import dataclass, field

from ..core.rotation import AxisAngleRotation, compose, rotate
from ..core.vectors import NOMINAL_NORTH, NOMINAL_UP, VectorLike, as_vector3, normalize
from ..stars.observations import StarObservation

logger = logging.getLogger(__name__)

# Largest |north . up| accepted for a patch frame
ORTHOGONALITY_TOLERANCE = 1e-6


@dataclass
class SurfaceSquare:
    """
    A labeled point on the surface with an orthonormal local frame.

    Latitude and longitude are opaque labels tying the patch to the
    observation data; the geometry never depends on them.
    """
    center: np.ndarray
    north: np.ndarray
    up: np.ndarray
    latitude: float
    longitude: float
    rotation_from_base: AxisAngleRotation = field(default_factory=AxisAngleRotation.identity)
    rotation_from_nominal: AxisAngleRotation = field(default_factory=AxisAngleRotation.identity)
    size_km: float = 1.0
    parent_id: Optional[int] = None
    star_observations: Dict[str, Tuple[float, float]] = field(default_factory=dict)

    def __post_init__(self):
        self.center = as_vector3(self.center, "center")
        self.north = normalize(as_vector3(self.north, "north"))
        self.up = normalize(as_vector3(self.up, "up"))
        if abs(float(np.dot(self.north, self.up))) > ORTHOGONALITY_TOLERANCE:
            raise ValueError(f"North {self.north} and up {self.up} are not perpendicular")

    @classmethod
    def from_rotation(cls, center: VectorLike, rotation_from_base: AxisAngleRotation,
                      latitude: float, longitude: float,
                      parent: Optional['SurfaceSquare'] = None,
                      parent_id: Optional[int] = None,
                      size_km: float = 1.0) -> 'SurfaceSquare':
        """
        Build a patch whose frame is the nominal frame rotated into place.

        Args:
            center: Patch center
            rotation_from_base: Rotation relative to 'parent' (or to the
                nominal frame when there is no parent)
            latitude, longitude: Labels
            parent: Patch this one was derived from, if any
            parent_id: Id of 'parent' in its SurfaceMap
            size_km: Side length of the square

        Returns:
            SurfaceSquare with rotation_from_nominal =
            compose(parent.rotation_from_nominal, rotation_from_base)
        """
        if parent is None:
            rotation_from_nominal = rotation_from_base
        else:
            rotation_from_nominal = compose(parent.rotation_from_nominal, rotation_from_base)

        return cls(
            center=center,
            north=rotate(NOMINAL_NORTH, rotation_from_nominal),
            up=rotate(NOMINAL_UP, rotation_from_nominal),
            latitude=latitude,
            longitude=longitude,
            rotation_from_base=rotation_from_base,
            rotation_from_nominal=rotation_from_nominal,
            size_km=size_km,
            parent_id=parent_id if parent is not None else None,
        )

    @property
    def east(self) -> np.ndarray:
        return np.cross(self.north, self.up)

    def add_observation(self, observation: StarObservation):
        """Record a sighting; a later sighting of the same star replaces the earlier one."""
        self.star_observations[observation.name] = (observation.azimuth, observation.elevation)

    def add_observations(self, observations: List[StarObservation]):
        for observation in observations:
            self.add_observation(observation)

    def observations(self) -> List[StarObservation]:
        """Sightings at this patch as StarObservation objects."""
        return [StarObservation(self.latitude, self.longitude, name, az, el)
                for name, (az, el) in self.star_observations.items()]

    def __str__(self) -> str:
        return (f"Sq(c={np.round(self.center, 4)}, n={np.round(self.north, 4)}, "
                f"u={np.round(self.up, 4)}, s={self.size_km}, lat={self.latitude}, "
                f"lng={self.longitude}, rfn={np.round(self.rotation_from_nominal.as_vector(), 4)}, "
                f"parent={self.parent_id})")


class SurfaceMap:
    """
    Flat collection of surface patches keyed by integer id.

    Ids are never reused, so a stale parent_id can not silently point at an
    unrelated patch.
    """

    def __init__(self):
        self._squares: Dict[int, SurfaceSquare] = {}
        self._next_id = 0

    def add(self, square: SurfaceSquare) -> int:
        """Add a patch and return its id."""
        if square.parent_id is not None and square.parent_id not in self._squares:
            raise KeyError(f"Parent square {square.parent_id} is not in the map")

        square_id = self._next_id
        self._next_id += 1
        self._squares[square_id] = square
        logger.debug(f"Added square {square_id}: {square}")
        return square_id

    def derive(self, parent_id: int, center: VectorLike,
               rotation_from_base: AxisAngleRotation,
               latitude: float, longitude: float,
               size_km: Optional[float] = None) -> int:
        """
        Add a new patch positioned relative to an existing one.

        Args:
            parent_id: Id of the patch the new one is built from
            center: Center of the new patch
            rotation_from_base: Orientation of the new patch relative to the parent
            latitude, longitude: Labels for the new patch
            size_km: Side length (defaults to the parent's)

        Returns:
            Id of the new patch
        """
        parent = self[parent_id]
        square = SurfaceSquare.from_rotation(
            center, rotation_from_base, latitude, longitude,
            parent=parent, parent_id=parent_id,
            size_km=parent.size_km if size_km is None else size_km)
        return self.add(square)

    def remove(self, square_id: int) -> SurfaceSquare:
        """
        Remove one patch and clear dangling parent references to it.

        Raises:
            KeyError: If no patch has that id
        """
        square = self._squares.pop(square_id)
        for child_id in self.children_of(square_id):
            self._squares[child_id].parent_id = None
        logger.debug(f"Removed square {square_id}")
        return square

    def children_of(self, square_id: int) -> List[int]:
        return [sid for sid, sq in self._squares.items() if sq.parent_id == square_id]

    def clear(self):
        self._squares.clear()
        logger.info("Cleared all surface squares")

    def ids(self) -> List[int]:
        return list(self._squares)

    def __getitem__(self, square_id: int) -> SurfaceSquare:
        return self._squares[square_id]

    def __contains__(self, square_id: int) -> bool:
        return square_id in self._squares

    def __iter__(self) -> Iterator[SurfaceSquare]:
        return iter(list(self._squares.values()))

    def __len__(self) -> int:
        return len(self._squares)
