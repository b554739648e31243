#!/usr/bin/env python3
"""
World Models

A WorldModel bundles the sources a reconstruction needs: star sightings, a
way to measure travel between locations and, optionally, the shape and star
map the sightings were produced from (for comparison only, never used to
infer curvature).

Key Functions:
- real_world: Real sky on a real (spherical) Earth
- close_stars: Spherical Earth whose stars are only a few thousand km away
- azimuthal_equidistant: Flat disk Earth with the same close stars
- bowl / saddle: Curved synthetic surfaces with an arbitrary star map
- make_world_model: Look up one of the above by name

Usage:
    from earthshape.world import make_world_model

    world = make_world_model("bowl")
    sightings = world.star_observations(0.0, 30.0, 45.0)
    trip = world.travel_observation(30.0, 45.0, 30.0, 55.0)
"""

import logging
from functools import partial
from typing import Callable, Dict, List, Mapping, Optional
from dataclasses import dataclass, field

import numpy as np

from ..stars.observations import MANUAL_OBSERVATION_UNIX_TIME, StarObservation
from ..stars.star_generator import StarGenerator, StarPosition
from ..core.geodesy import EARTH_RADIUS_KM, TravelObservation
from ..surface.frame_builder import DEFAULT_STEP_DEGREES, LocalFrameBuilder, PointFunction
from ..surface.surface_square import SurfaceSquare
from .sources import (
    CatalogObservationSource,
    CloseStarObservationSource,
    GreatCircleTravel,
    SurfaceChordTravel,
    SynthesizedObservationSource,
)
from .surfaces import (
    CLOSE_STAR_DISTANCES,
    REFERENCE_LATITUDE,
    REFERENCE_LONGITUDE,
    azimuthal_equidistant_point,
    bowl_point,
    saddle_point,
    spherical_earth_point,
    synthetic_star_map,
)

logger = logging.getLogger(__name__)


@dataclass
class WorldModel:
    """Sightings, travel measurements and an optional reference shape for one world."""
    description: str
    observation_source: object
    travel_source: object
    point_function: Optional[PointFunction] = None
    star_map: Mapping[str, StarPosition] = field(default_factory=dict)
    step_degrees: float = DEFAULT_STEP_DEGREES

    @property
    def has_model_points(self) -> bool:
        return self.point_function is not None

    def model_point(self, latitude: float, longitude: float) -> Optional[np.ndarray]:
        if self.point_function is None:
            return None
        return np.asarray(self.point_function(latitude, longitude), dtype=float)

    def model_square(self, latitude: float, longitude: float) -> Optional[SurfaceSquare]:
        """Patch of the reference shape at a location, or None without one."""
        if self.point_function is None:
            return None
        return LocalFrameBuilder(self.point_function, self.step_degrees).build_patch(
            latitude, longitude)

    def all_stars(self) -> List[str]:
        return self.observation_source.all_stars()

    def star_observations(self, unix_time: float, latitude: float,
                          longitude: float) -> List[StarObservation]:
        return self.observation_source.star_observations(unix_time, latitude, longitude)

    def sun_observation(self, unix_time: float, latitude: float,
                        longitude: float) -> Optional[StarObservation]:
        return self.observation_source.sun_observation(unix_time, latitude, longitude)

    def travel_observation(self, start_lat: float, start_lon: float,
                           end_lat: float, end_lon: float) -> TravelObservation:
        return self.travel_source.travel(start_lat, start_lon, end_lat, end_lon)


def _reference_star_map(frame_builder: LocalFrameBuilder,
                        observations: List[StarObservation],
                        distances: Optional[Mapping[str, float]] = None) -> Mapping[str, StarPosition]:
    reference = frame_builder.build_patch(REFERENCE_LATITUDE, REFERENCE_LONGITUDE)
    reference.add_observations(observations)
    return StarGenerator(reference, distances).positions


def real_world(step_degrees: float = DEFAULT_STEP_DEGREES,
               radius_km: float = EARTH_RADIUS_KM) -> WorldModel:
    """Measured sky, spherical Earth, every star infinitely far away."""
    point_function = partial(spherical_earth_point, radius_km=radius_km)
    builder = LocalFrameBuilder(point_function, step_degrees)
    source = CatalogObservationSource()
    star_map = _reference_star_map(
        builder,
        source.star_observations(MANUAL_OBSERVATION_UNIX_TIME,
                                 REFERENCE_LATITUDE, REFERENCE_LONGITUDE))
    return WorldModel("real world star data", source, GreatCircleTravel(radius_km),
                      point_function, star_map, step_degrees)


def close_stars(step_degrees: float = DEFAULT_STEP_DEGREES,
                radius_km: float = EARTH_RADIUS_KM) -> WorldModel:
    """Spherical Earth with nearby stars that match the real sky at the reference location."""
    point_function = partial(spherical_earth_point, radius_km=radius_km)
    builder = LocalFrameBuilder(point_function, step_degrees)
    source = CloseStarObservationSource(CatalogObservationSource(), builder,
                                        CLOSE_STAR_DISTANCES)
    star_map = source.generator_at(MANUAL_OBSERVATION_UNIX_TIME).positions
    return WorldModel("spherical Earth with close stars", source, GreatCircleTravel(radius_km),
                      point_function, star_map, step_degrees)


def azimuthal_equidistant(step_degrees: float = DEFAULT_STEP_DEGREES,
                          radius_km: float = EARTH_RADIUS_KM) -> WorldModel:
    """Flat disk Earth; the close stars are placed relative to the disk's reference patch."""
    point_function = partial(azimuthal_equidistant_point, radius_km=radius_km)
    builder = LocalFrameBuilder(point_function, step_degrees)
    reference_sightings = CatalogObservationSource().star_observations(
        MANUAL_OBSERVATION_UNIX_TIME, REFERENCE_LATITUDE, REFERENCE_LONGITUDE)
    star_map = _reference_star_map(
        builder,
        [obs for obs in reference_sightings if obs.name in CLOSE_STAR_DISTANCES],
        CLOSE_STAR_DISTANCES)
    return WorldModel("azimuthal equidistant projection flat Earth",
                      SynthesizedObservationSource(builder, star_map),
                      SurfaceChordTravel(builder),
                      point_function, star_map, step_degrees)


def _synthetic(description: str, point_function: PointFunction,
               step_degrees: float, radius_km: float) -> WorldModel:
    point_function = partial(point_function, radius_km=radius_km)
    builder = LocalFrameBuilder(point_function, step_degrees)
    star_map = synthetic_star_map()
    return WorldModel(description, SynthesizedObservationSource(builder, star_map),
                      SurfaceChordTravel(builder), point_function, star_map, step_degrees)


def bowl(step_degrees: float = DEFAULT_STEP_DEGREES,
         radius_km: float = EARTH_RADIUS_KM) -> WorldModel:
    return _synthetic("bowl", bowl_point, step_degrees, radius_km)


def saddle(step_degrees: float = DEFAULT_STEP_DEGREES,
           radius_km: float = EARTH_RADIUS_KM) -> WorldModel:
    return _synthetic("saddle", saddle_point, step_degrees, radius_km)


WORLD_MODELS: Dict[str, Callable[..., WorldModel]] = {
    'real_world': real_world,
    'close_stars': close_stars,
    'azimuthal_equidistant': azimuthal_equidistant,
    'bowl': bowl,
    'saddle': saddle,
}


def make_world_model(name: str, step_degrees: float = DEFAULT_STEP_DEGREES,
                     radius_km: float = EARTH_RADIUS_KM) -> WorldModel:
    """
    Build a world model by name.

    Raises:
        KeyError: If 'name' is not one of WORLD_MODELS
    """
    if name not in WORLD_MODELS:
        raise KeyError(f"Unknown world model {name!r}; known models: {sorted(WORLD_MODELS)}")
    logger.info(f"Building world model: {name}")
    return WORLD_MODELS[name](step_degrees, radius_km)
