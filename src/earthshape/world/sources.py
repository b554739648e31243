"""
Observation and travel sources for world models.

A world model is assembled from independent pieces chosen when it is built:
where star sightings come from, and how travel between two locations is
measured.  Each source is a small class with a fixed set of methods, so any
source can be paired with any other.

Observation sources provide:
    all_stars() -> List[str]
    star_observations(unix_time, latitude, longitude) -> List[StarObservation]
    sun_observation(unix_time, latitude, longitude) -> Optional[StarObservation]

Travel sources provide:
    travel(start_lat, start_lon, end_lat, end_lon) -> TravelObservation
"""

import numpy as np
import logging
from typing import Dict, List, Mapping, Optional

from ..core.direction import azimuth_of
from ..core.geodesy import EARTH_RADIUS_KM, TravelObservation, travel_between
from ..core.rotation import rotate
from ..core.vectors import NOMINAL_UP, orthogonal_component
from ..stars.catalog import CatalogEntry, default_catalog, sun_position
from ..stars.observations import (
    MANUAL_OBSERVATION_UNIX_TIME,
    StarObservation,
    manual_observations,
)
from ..stars.star_generator import StarGenerator, StarPosition, observations_from_positions
from ..surface.frame_builder import LocalFrameBuilder
from .surfaces import MODEL_UNIT_KM, REFERENCE_LATITUDE, REFERENCE_LONGITUDE

logger = logging.getLogger(__name__)


class CatalogObservationSource:
    """
    Real-sky sightings: hand-collected data where it exists, the catalog elsewhere.

    Manual sightings are used only at MANUAL_OBSERVATION_UNIX_TIME and only
    at the exact locations they were taken; every catalog star not covered
    by them is computed from its right ascension and declination.
    """

    def __init__(self, observations: Optional[List[StarObservation]] = None,
                 catalog: Optional[List[CatalogEntry]] = None,
                 sun: Optional[CatalogEntry] = None):
        self.manual = manual_observations() if observations is None else list(observations)
        self.catalog = default_catalog() if catalog is None else list(catalog)
        self.sun = sun_position() if sun is None else sun

    def all_stars(self) -> List[str]:
        return [entry.name for entry in self.catalog]

    def star_observations(self, unix_time: float, latitude: float,
                          longitude: float) -> List[StarObservation]:
        observations = []
        if unix_time == MANUAL_OBSERVATION_UNIX_TIME:
            observations = [obs for obs in self.manual
                            if obs.latitude == latitude and obs.longitude == longitude]

        measured = {obs.name for obs in observations}
        for entry in self.catalog:
            if entry.name not in measured:
                observations.append(entry.make_observation(unix_time, latitude, longitude))

        logger.debug(f"{len(measured)} manual and {len(observations) - len(measured)} "
                     f"catalog sightings at ({latitude}, {longitude})")
        return observations

    def sun_observation(self, unix_time: float, latitude: float,
                        longitude: float) -> Optional[StarObservation]:
        """Sun position, known only on the night of the manual sightings."""
        if unix_time != MANUAL_OBSERVATION_UNIX_TIME:
            return None
        return self.sun.make_observation(unix_time, latitude, longitude)


class CloseStarObservationSource:
    """
    Sightings of a sky whose stars are at finite, fairly small distances.

    At the reference location the sightings match 'base' exactly; elsewhere
    they are what the stars placed at 'distances' along those reference
    sightings would look like.  Stars without a distance are left out.
    """

    def __init__(self, base: CatalogObservationSource,
                 frame_builder: LocalFrameBuilder,
                 distances: Mapping[str, float],
                 reference_latitude: float = REFERENCE_LATITUDE,
                 reference_longitude: float = REFERENCE_LONGITUDE):
        self.base = base
        self.frame_builder = frame_builder
        self.distances = dict(distances)
        self.reference_latitude = reference_latitude
        self.reference_longitude = reference_longitude

    def all_stars(self) -> List[str]:
        return [name for name in self.base.all_stars() if name in self.distances]

    def generator_at(self, unix_time: float) -> StarGenerator:
        """Star positions implied by the reference sightings at 'unix_time'."""
        reference = self.frame_builder.build_patch(self.reference_latitude,
                                                   self.reference_longitude)
        reference.add_observations(
            [obs for obs in self.base.star_observations(
                unix_time, self.reference_latitude, self.reference_longitude)
             if obs.name in self.distances])
        return StarGenerator(reference, self.distances)

    def star_observations(self, unix_time: float, latitude: float,
                          longitude: float) -> List[StarObservation]:
        target = self.frame_builder.build_patch(latitude, longitude)
        return self.generator_at(unix_time).synthesize(target)

    def sun_observation(self, unix_time: float, latitude: float,
                        longitude: float) -> Optional[StarObservation]:
        return self.base.sun_observation(unix_time, latitude, longitude)


class SynthesizedObservationSource:
    """Sightings of a fixed star map from patches of a model surface; time is ignored."""

    def __init__(self, frame_builder: LocalFrameBuilder,
                 star_map: Mapping[str, StarPosition]):
        self.frame_builder = frame_builder
        self.star_map: Dict[str, StarPosition] = dict(star_map)

    def all_stars(self) -> List[str]:
        return list(self.star_map)

    def star_observations(self, unix_time: float, latitude: float,
                          longitude: float) -> List[StarObservation]:
        square = self.frame_builder.build_patch(latitude, longitude)
        return observations_from_positions(square, self.star_map.values())

    def sun_observation(self, unix_time: float, latitude: float,
                        longitude: float) -> Optional[StarObservation]:
        return None


class GreatCircleTravel:
    """Shortest route over a sphere of the given radius."""

    def __init__(self, radius_km: float = EARTH_RADIUS_KM):
        if radius_km <= 0:
            raise ValueError(f"radius_km must be positive, got {radius_km}")
        self.radius_km = radius_km

    def travel(self, start_lat: float, start_lon: float,
               end_lat: float, end_lon: float) -> TravelObservation:
        return travel_between(start_lat, start_lon, end_lat, end_lon, self.radius_km)


class SurfaceChordTravel:
    """
    Straight line between patch centers of a model surface.

    Ignores the ground in between and any shorter route, which is close
    enough for short trips.  Headings are the horizontal part of the chord
    in each endpoint's local frame.
    """

    def __init__(self, frame_builder: LocalFrameBuilder):
        self.frame_builder = frame_builder

    def travel(self, start_lat: float, start_lon: float,
               end_lat: float, end_lon: float) -> TravelObservation:
        start = self.frame_builder.build_patch(start_lat, start_lon)
        end = self.frame_builder.build_patch(end_lat, end_lon)

        start_to_end = end.center - start.center
        start_heading = self._local_heading(start_to_end, start)
        end_heading = self._local_heading(-start_to_end, end)

        return TravelObservation(
            start_latitude=start_lat,
            start_longitude=start_lon,
            end_latitude=end_lat,
            end_longitude=end_lon,
            distance_km=float(np.linalg.norm(start_to_end) * MODEL_UNIT_KM),
            start_to_end_heading=start_heading,
            end_to_start_heading=end_heading,
        )

    @staticmethod
    def _local_heading(world_vector: np.ndarray, square) -> float:
        local = rotate(world_vector, square.rotation_from_nominal.inverse())
        horizontal = orthogonal_component(local, NOMINAL_UP)
        return azimuth_of(horizontal)
