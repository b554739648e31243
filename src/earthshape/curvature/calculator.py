#!/usr/bin/env python3
"""
Curvature Calculator

Infers how the surface bends between two locations from the sky positions
of the same two stars seen at each one.  The end sightings are rotated until
both stars line up with the start sightings; the same rotation applied to
the local surface normal shows how the normal turned during the trip.  The
part of that turn about the travel-left axis is normal curvature, the part
about the travel direction itself is geodesic torsion.

Key Functions:
- CurvatureCalculator.calculate: Curvature from four sightings, heading and distance
- CurvatureCalculator.calculate_between_locations: Same, deriving heading and
  distance from latitude/longitude pairs
- dubhe_sirius_example: Real sightings of Dubhe and Sirius from 38N 122W and 38N 113W

Usage:
    from earthshape.curvature import CurvatureCalculator, dubhe_sirius_example

    calculator = CurvatureCalculator()
    result = calculator.calculate_from(dubhe_sirius_example())
    print(f"Radius of curvature: {1.0 / result.normal_curvature:.0f} km")
"""

import numpy as np
import logging
from typing import List, Optional, Tuple
from dataclasses import dataclass, field

from ..config import CurvatureConfig
from ..core.direction import heading_to_vector, to_direction
from ..core.geodesy import EARTH_RADIUS_KM, travel_between
from ..core.rotation import rotate, rotation_to_become
from ..core.vectors import NOMINAL_UP, normalize, orthogonal_component, separation_angle_degrees

logger = logging.getLogger(__name__)

Sighting = Tuple[float, float]  # (azimuth, elevation) in degrees

REFRACTION_WARNING = ("Warning: At least one elevation is below {limit:g} degrees, which "
                      "makes the measurement unreliable due to atmospheric refraction.")
DISTANCE_WARNING = "Distance should be positive.  Substituting {distance:g} km."
DEVIATION_WARNING = ("Warning: deviation exceeds {limit:g} degrees, star separation "
                     "angles are not the same.")
GEODESIC_CURVATURE_WARNING = ("Warning: Geodesic curvature magnitude exceeds {limit:g} degrees "
                              "per km.  That never happens on the real Earth.  Check the "
                              "travel headings.")
GEODESIC_TORSION_WARNING = ("Warning: Geodesic torsion magnitude exceeds {limit:g} degrees "
                            "per km.  That never happens on the real Earth.  Check the start "
                            "travel heading.")


@dataclass(frozen=True)
class CurvatureInputs:
    """Sightings of stars A and B at both ends of a trip, plus the trip itself."""
    start_a: Sighting
    start_b: Sighting
    end_a: Sighting
    end_b: Sighting
    heading_deg: float
    distance_km: float
    end_heading_deg: Optional[float] = None


@dataclass
class CurvatureResult:
    """Output of one curvature calculation."""
    deviation_b_degrees: float  # Mismatch of star B after aligning star A
    normal_curvature: float     # Radians per km along the travel direction
    geodesic_torsion: float     # Degrees per km, right-handed about the travel direction
    geodesic_curvature: float   # Degrees per km of heading change within the tangent plane
    distance_km: float          # Distance actually used
    warnings: List[str] = field(default_factory=list)
    steps: List[str] = field(default_factory=list)

    @property
    def radius_of_curvature_km(self) -> float:
        if self.normal_curvature == 0.0:
            return float('inf')
        return 1.0 / self.normal_curvature

    def to_dict(self) -> dict:
        return {
            'deviation_b_degrees': self.deviation_b_degrees,
            'normal_curvature': self.normal_curvature,
            'geodesic_torsion': self.geodesic_torsion,
            'geodesic_curvature': self.geodesic_curvature,
            'distance_km': self.distance_km,
            'warnings': list(self.warnings),
        }


class CurvatureCalculator:
    """
    Stateless apart from its configuration; warnings belong to each result.
    """

    def __init__(self, config: Optional[CurvatureConfig] = None):
        self.config = config or CurvatureConfig()

    def calculate(self, start_a: Sighting, start_b: Sighting,
                  end_a: Sighting, end_b: Sighting,
                  heading_deg: float, distance_km: float,
                  end_heading_deg: Optional[float] = None) -> CurvatureResult:
        """
        Infer curvature and torsion along a trip.

        Args:
            start_a, start_b: (azimuth, elevation) of stars A and B at the start
            end_a, end_b: (azimuth, elevation) of stars A and B at the end
            heading_deg: Travel direction at the start, degrees East of North
            distance_km: Length of the trip
            end_heading_deg: Travel direction at the end (default: heading_deg)

        Returns:
            CurvatureResult; reliability problems are reported in its
            warnings, never raised

        Raises:
            ValueError: If any angle is not finite
        """
        cfg = self.config
        warnings: List[str] = []
        steps: List[str] = []
        wide = cfg.wide_angle_alignment

        elevations = [start_a[1], start_b[1], end_a[1], end_b[1]]
        if any(el < cfg.refraction_elevation_limit for el in elevations):
            warnings.append(REFRACTION_WARNING.format(limit=cfg.refraction_elevation_limit))

        if not np.isfinite(distance_km):
            raise ValueError(f"Distance must be finite, got {distance_km}")
        if distance_km <= 0:
            warnings.append(DISTANCE_WARNING.format(distance=cfg.substitute_distance_km))
            distance_km = cfg.substitute_distance_km
        if end_heading_deg is None:
            end_heading_deg = heading_deg

        start_a_vec = to_direction(*start_a)
        start_b_vec = to_direction(*start_b)
        end_a_vec = to_direction(*end_a)
        end_b_vec = to_direction(*end_b)
        steps.append(f"start_A: {start_a_vec}")
        steps.append(f"start_B: {start_b_vec}")
        steps.append(f"end_A: {end_a_vec}")
        steps.append(f"end_B: {end_b_vec}")

        # Align star A
        rot1 = rotation_to_become(end_a_vec, start_a_vec, wide_angle=wide)
        end_b_rot1 = rotate(end_b_vec, rot1)
        up_rot1 = rotate(NOMINAL_UP, rot1)
        steps.append(f"rot1: axis={rot1.axis_vector}, angle={rot1.angle_degrees}")
        steps.append(f"end_B_rot1: {end_b_rot1}")
        steps.append(f"up_rot1: {up_rot1}")

        # Align star B by turning about the now-shared star A direction
        start_b_proj = normalize(orthogonal_component(start_b_vec, start_a_vec))
        end_b_rot1_proj = normalize(orthogonal_component(end_b_rot1, start_a_vec))
        rot2 = rotation_to_become(end_b_rot1_proj, start_b_proj, wide_angle=wide)
        end_b_rot12 = rotate(end_b_rot1, rot2)
        up_rot12 = rotate(up_rot1, rot2)
        steps.append(f"start_B_proj: {start_b_proj}")
        steps.append(f"end_B_rot1_proj: {end_b_rot1_proj}")
        steps.append(f"rot2: axis={rot2.axis_vector}, angle={rot2.angle_degrees}")
        steps.append(f"end_B_rot12: {end_b_rot12}")
        steps.append(f"up_rot12: {up_rot12}")

        deviation = separation_angle_degrees(end_b_rot12, start_b_vec)
        if deviation > cfg.deviation_limit_degrees:
            warnings.append(DEVIATION_WARNING.format(limit=cfg.deviation_limit_degrees))

        start_forward = heading_to_vector(heading_deg)
        end_forward = rotate(rotate(heading_to_vector(end_heading_deg), rot1), rot2)
        steps.append(f"start_forward: {start_forward}")
        steps.append(f"end_forward: {end_forward}")

        # Positive curvature when the normal tips toward the left of travel
        travel_left = normalize(np.cross(NOMINAL_UP, start_forward))
        normal_turn = rotation_to_become(NOMINAL_UP, up_rot12, wide_angle=wide).as_vector()
        curvature_angle = float(np.dot(normal_turn, travel_left))
        twist_angle = float(np.dot(normal_turn, start_forward))
        steps.append(f"travel_left: {travel_left}")
        steps.append(f"normal rotation (deg): {normal_turn}")

        normal_curvature = 2.0 * np.pi * curvature_angle / (360.0 * distance_km)
        geodesic_torsion = twist_angle / distance_km
        heading_change = float(np.degrees(np.arcsin(np.clip(
            np.dot(np.cross(start_forward, end_forward), NOMINAL_UP), -1.0, 1.0))))
        geodesic_curvature = heading_change / distance_km
        steps.append(f"normal curvature: {normal_curvature}")
        steps.append(f"geodesic torsion: {geodesic_torsion}")
        steps.append(f"geodesic curvature: {geodesic_curvature}")

        if cfg.plausibility_checks:
            if abs(geodesic_curvature) > cfg.plausibility_limit:
                warnings.append(GEODESIC_CURVATURE_WARNING.format(limit=cfg.plausibility_limit))
            if abs(geodesic_torsion) > cfg.plausibility_limit:
                warnings.append(GEODESIC_TORSION_WARNING.format(limit=cfg.plausibility_limit))

        for step in steps:
            logger.debug(step)
        for warning in warnings:
            logger.warning(warning)

        return CurvatureResult(
            deviation_b_degrees=deviation,
            normal_curvature=float(normal_curvature),
            geodesic_torsion=float(geodesic_torsion),
            geodesic_curvature=float(geodesic_curvature),
            distance_km=float(distance_km),
            warnings=warnings,
            steps=steps,
        )

    def calculate_from(self, inputs: CurvatureInputs) -> CurvatureResult:
        return self.calculate(inputs.start_a, inputs.start_b, inputs.end_a, inputs.end_b,
                              inputs.heading_deg, inputs.distance_km, inputs.end_heading_deg)

    def calculate_between_locations(self, start_a: Sighting, start_b: Sighting,
                                    end_a: Sighting, end_b: Sighting,
                                    start_lat: float, start_lon: float,
                                    end_lat: float, end_lon: float,
                                    radius_km: float = EARTH_RADIUS_KM) -> CurvatureResult:
        """Like calculate, with heading and distance taken from the shortest route."""
        return self.calculate_from(
            inputs_between_locations(start_a, start_b, end_a, end_b,
                                     start_lat, start_lon, end_lat, end_lon, radius_km))


def inputs_between_locations(start_a: Sighting, start_b: Sighting,
                             end_a: Sighting, end_b: Sighting,
                             start_lat: float, start_lon: float,
                             end_lat: float, end_lon: float,
                             radius_km: float = EARTH_RADIUS_KM) -> CurvatureInputs:
    """Package sightings with the great-circle heading and distance between two locations."""
    travel = travel_between(start_lat, start_lon, end_lat, end_lon, radius_km)
    return CurvatureInputs(
        start_a=start_a,
        start_b=start_b,
        end_a=end_a,
        end_b=end_b,
        heading_deg=travel.start_to_end_heading,
        distance_km=travel.distance_km,
        end_heading_deg=travel.end_heading,
    )


def dubhe_sirius_example() -> CurvatureInputs:
    """
    Dubhe (A) and Sirius (B) from 38N 122W and 38N 113W at 2017-03-05 20:00 -08:00.

    The sightings are accurate to about 0.2 degrees.
    """
    return inputs_between_locations(
        start_a=(36.9, 44.8),
        start_b=(181.1, 35.2),
        end_a=(36.4, 49.1),
        end_b=(191.5, 34.4),
        start_lat=38.0, start_lon=-122.0,
        end_lat=38.0, end_lon=-113.0,
    )
