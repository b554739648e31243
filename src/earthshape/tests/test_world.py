#!/usr/bin/env python3
"""
test_world.py - Unit tests for world models and their sources

Run with:
    python -m pytest src/earthshape/tests/test_world.py -v
"""

import numpy as np
import pytest

import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from earthshape.stars.observations import MANUAL_OBSERVATION_UNIX_TIME
from earthshape.surface import LocalFrameBuilder, SurfaceSquare
from earthshape.world import (
    WORLD_MODELS,
    CatalogObservationSource,
    SurfaceChordTravel,
    WorldModel,
    close_stars,
    make_world_model,
    real_world,
)
from earthshape.world.surfaces import (
    azimuthal_equidistant_point,
    bowl_point,
    saddle_point,
    spherical_earth_point,
    synthetic_star_map,
)


def _by_name(observations):
    return {obs.name: obs for obs in observations}


class TestPointFunctions:
    """Test the model surfaces."""

    def test_sphere_radius(self):
        for lat, lon in [(0, 0), (38, -122), (-60, 170), (90, 10)]:
            assert abs(np.linalg.norm(spherical_earth_point(lat, lon)) - 6.371) < 1e-12

    def test_sphere_landmarks(self):
        np.testing.assert_allclose(spherical_earth_point(0, 0), [0, 6.371, 0], atol=1e-12)
        np.testing.assert_allclose(spherical_earth_point(90, 0), [0, 0, -6.371], atol=1e-12)
        np.testing.assert_allclose(spherical_earth_point(0, 90), [6.371, 0, 0], atol=1e-12)

    def test_disk(self):
        np.testing.assert_allclose(azimuthal_equidistant_point(90, 45), [0, 0, 0], atol=1e-12)
        point = azimuthal_equidistant_point(0, 0)
        np.testing.assert_allclose(point, [0, 0, np.radians(90) * 6.371], atol=1e-12)
        assert azimuthal_equidistant_point(-30, 77)[1] == 0.0

    def test_bowl_rim_raised(self):
        assert abs(bowl_point(90, 0)[1]) < 1e-12
        assert bowl_point(0, 0)[1] > bowl_point(45, 0)[1] > 0.0

    def test_saddle_shape(self):
        assert saddle_point(0, 90)[1] > 0.0   # Along X
        assert saddle_point(0, 0)[1] < 0.0    # Along Z

    def test_synthetic_star_map(self):
        stars = synthetic_star_map()
        assert sorted(stars) == list("ABCDEFGH")
        assert stars["G"].is_at_infinity and stars["H"].is_at_infinity
        assert not stars["E"].is_at_infinity


class TestCatalogObservationSource:
    """Test real-sky sightings."""

    def test_manual_data_used_at_manual_time(self):
        source = CatalogObservationSource()
        sirius = _by_name(source.star_observations(MANUAL_OBSERVATION_UNIX_TIME,
                                                   38.0, -122.0))["Sirius"]
        assert (sirius.azimuth, sirius.elevation) == (181.1, 35.2)

    def test_catalog_used_elsewhere(self):
        source = CatalogObservationSource()
        observations = source.star_observations(MANUAL_OBSERVATION_UNIX_TIME, 40.0, -100.0)
        assert len(observations) == 8
        assert all(obs.latitude == 40.0 for obs in observations)

    def test_catalog_used_at_other_times(self):
        source = CatalogObservationSource()
        sirius = _by_name(source.star_observations(MANUAL_OBSERVATION_UNIX_TIME + 3600.0,
                                                   38.0, -122.0))["Sirius"]
        assert sirius.azimuth != 181.1

    def test_sun_only_on_manual_night(self):
        source = CatalogObservationSource()
        assert source.sun_observation(MANUAL_OBSERVATION_UNIX_TIME, 38.0, -122.0) is not None
        assert source.sun_observation(0.0, 38.0, -122.0) is None


class TestWorldModels:
    """Test the built-in world models."""

    def test_unknown_name_raises(self):
        with pytest.raises(KeyError):
            make_world_model("flat_turtle")

    @pytest.mark.parametrize("name", sorted(WORLD_MODELS))
    def test_every_model_builds(self, name):
        world = make_world_model(name)
        assert isinstance(world, WorldModel)
        assert world.description
        assert world.has_model_points
        observations = world.star_observations(MANUAL_OBSERVATION_UNIX_TIME, 30.0, -100.0)
        assert {obs.name for obs in observations} == set(world.all_stars())
        assert isinstance(world.model_square(30.0, -100.0), SurfaceSquare)

    @pytest.mark.parametrize("name", sorted(WORLD_MODELS))
    def test_travel_has_positive_distance(self, name):
        travel = make_world_model(name).travel_observation(38.0, -122.0, 38.0, -113.0)
        assert travel.distance_km > 100.0
        assert 0.0 <= travel.start_to_end_heading < 360.0

    def test_real_world_stars_at_infinity(self):
        world = real_world()
        assert len(world.star_map) == 8
        assert all(star.is_at_infinity for star in world.star_map.values())

    def test_real_world_great_circle(self):
        travel = real_world().travel_observation(0.0, 0.0, 0.0, 10.0)
        assert abs(travel.distance_km - 1111.95) < 0.01

    def test_close_stars_match_reference_location(self):
        """Test the close-star sky is the real sky at 38N 122W."""
        world = close_stars()
        close = _by_name(world.star_observations(MANUAL_OBSERVATION_UNIX_TIME, 38.0, -122.0))
        real = _by_name(CatalogObservationSource().star_observations(
            MANUAL_OBSERVATION_UNIX_TIME, 38.0, -122.0))
        for name, obs in close.items():
            assert abs((obs.azimuth - real[name].azimuth + 180) % 360 - 180) < 1e-3
            assert abs(obs.elevation - real[name].elevation) < 1e-3

    def test_close_stars_differ_elsewhere(self):
        world = close_stars()
        close = _by_name(world.star_observations(MANUAL_OBSERVATION_UNIX_TIME, 38.0, -113.0))
        real = _by_name(CatalogObservationSource().star_observations(
            MANUAL_OBSERVATION_UNIX_TIME, 38.0, -113.0))
        assert abs(close["Procyon"].elevation - real["Procyon"].elevation) > 0.5 or \
            abs(close["Procyon"].azimuth - real["Procyon"].azimuth) > 0.5

    def test_bowl_has_no_sun(self):
        assert make_world_model("bowl").sun_observation(0.0, 10.0, 10.0) is None

    def test_synthetic_sightings_ignore_time(self):
        world = make_world_model("saddle")
        first = world.star_observations(0.0, 20.0, 30.0)
        later = world.star_observations(1e9, 20.0, 30.0)
        assert first == later


class TestSurfaceChordTravel:
    """Test travel measured along a straight chord."""

    def test_flat_disk_chord(self):
        travel = SurfaceChordTravel(LocalFrameBuilder(azimuthal_equidistant_point))
        trip = travel.travel(0.0, 0.0, 0.0, 10.0)
        expected_km = 2 * np.radians(90) * 6.371 * np.sin(np.radians(5)) * 1000
        assert abs(trip.distance_km - expected_km) < 1e-6
        # Chord of a circle centered on the pole leaves 5 degrees poleward of East
        assert abs(trip.start_to_end_heading - 85.0) < 0.1
        assert abs(trip.end_to_start_heading - 275.0) < 0.1
