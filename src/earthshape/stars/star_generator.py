#!/usr/bin/env python3
"""
Star Generator

Turns the sightings recorded at one reference patch into 3D star positions,
then predicts what those stars look like from any other patch.  A star with
a known distance is placed at that distance along its sighting direction; a
star without one is treated as infinitely far away and kept as a bare
direction (homogeneous weight 0), so it looks the same from every patch with
the same orientation.

Key Functions:
- StarGenerator: Build star positions from a reference patch
- StarGenerator.synthesize: Predicted sightings at another patch
- observations_from_positions: The same prediction for any star map

Usage:
    from earthshape.stars.star_generator import StarGenerator

    generator = StarGenerator(reference_square, distances={"Sirius": 380.0})
    for obs in generator.synthesize(other_square):
        print(obs)
"""

import math
import numpy as np
import logging
from types import MappingProxyType
from typing import TYPE_CHECKING, Dict, List, Mapping, Optional
from dataclasses import dataclass

from ..core.direction import azimuth_of, elevation_of, to_direction
from ..core.rotation import rotate
from ..core.vectors import as_vector3, normalize
from .observations import StarObservation

if TYPE_CHECKING:
    from ..surface.surface_square import SurfaceSquare

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StarPosition:
    """
    Homogeneous star location: a point when weight is 1, a direction when weight is 0.
    """
    name: str
    vector: tuple
    weight: float = 1.0

    def __post_init__(self):
        object.__setattr__(self, "vector", tuple(float(c) for c in as_vector3(self.vector, self.name)))
        if self.weight not in (0.0, 1.0):
            raise ValueError(f"Star weight must be 0 or 1, got {self.weight}")

    @property
    def is_at_infinity(self) -> bool:
        return self.weight == 0.0

    @property
    def position(self) -> np.ndarray:
        return np.array(self.vector)


class StarGenerator:
    """
    Star positions inferred from the sightings at a reference patch.

    Positions are computed once at construction and exposed read-only.
    """

    def __init__(self, reference_square: 'SurfaceSquare',
                 distances: Optional[Mapping[str, float]] = None):
        """
        Args:
            reference_square: Patch whose star_observations seed the positions
            distances: Star name -> distance from the reference center.  Stars
                not listed, or listed as infinite, are placed at infinity.

        Raises:
            ValueError: If a listed distance is NaN, zero or negative
        """
        self.reference_square = reference_square
        distances = dict(distances or {})

        positions: Dict[str, StarPosition] = {}
        orientation = reference_square.rotation_from_nominal
        for name, (azimuth, elevation) in reference_square.star_observations.items():
            direction = rotate(to_direction(azimuth, elevation), orientation)
            distance = float(distances.get(name, math.inf))
            if math.isnan(distance) or distance <= 0.0:
                raise ValueError(f"Distance to {name} must be positive, got {distance}")
            if math.isfinite(distance):
                point = reference_square.center + direction * distance
                positions[name] = StarPosition(name, tuple(point), 1.0)
            else:
                positions[name] = StarPosition(name, tuple(direction), 0.0)
            logger.debug(f"Star {name}: {positions[name]}")

        self._positions = positions
        n_finite = sum(not p.is_at_infinity for p in positions.values())
        logger.info(f"Generated {len(positions)} star positions "
                    f"({n_finite} finite, {len(positions) - n_finite} at infinity)")

    @property
    def positions(self) -> Mapping[str, StarPosition]:
        return MappingProxyType(self._positions)

    def synthesize(self, square: 'SurfaceSquare') -> List[StarObservation]:
        """
        Predicted sightings of every generated star from 'square'.

        Args:
            square: Patch to observe from

        Returns:
            One StarObservation per star, tagged with the patch's latitude and
            longitude
        """
        return observations_from_positions(square, self._positions.values())


def observations_from_positions(square: 'SurfaceSquare',
                                positions) -> List[StarObservation]:
    """
    Sky positions of a set of stars as seen from one patch.

    Args:
        square: Observing patch
        positions: Iterable of StarPosition

    Returns:
        List of StarObservation in the same order as 'positions'

    Notes:
        The world-frame direction (the bare vector for a star at infinity,
        otherwise star minus patch center) is taken into the patch's local
        frame by the inverse of its rotation_from_nominal.
    """
    to_local = square.rotation_from_nominal.inverse()
    observations = []
    for star in positions:
        if star.is_at_infinity:
            world_direction = star.position
        else:
            world_direction = star.position - square.center

        local = normalize(rotate(world_direction, to_local))
        observations.append(StarObservation(
            float(square.latitude), float(square.longitude), star.name,
            azimuth_of(local), elevation_of(local)))
    return observations


__all__ = [
    'StarGenerator',
    'StarPosition',
    'observations_from_positions',
]
