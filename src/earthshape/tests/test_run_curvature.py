#!/usr/bin/env python3
"""
test_run_curvature.py - Tests for the command line reconstruction script

Run with:
    python -m pytest src/earthshape/tests/test_run_curvature.py -v
"""

import json
import math
import pytest

import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent.parent))
sys.path.insert(0, str(Path(__file__).parent.parent.parent.parent))

from earthshape.curvature import CurvatureCalculator, dubhe_sirius_example
from earthshape.world import make_world_model, real_world

import run_curvature


@pytest.fixture(scope="module")
def world():
    return real_world()


class TestReconstruct:
    """Test one reconstruction between two locations."""

    def test_matches_dubhe_sirius_example(self, world):
        calculator = CurvatureCalculator()
        report = run_curvature.reconstruct(world, calculator, (38.0, -122.0), (38.0, -113.0),
                                           "Dubhe", "Sirius")
        expected = calculator.calculate_from(dubhe_sirius_example())
        assert report['result']['normal_curvature'] == expected.normal_curvature
        assert report['result']['geodesic_torsion'] == expected.geodesic_torsion
        assert report['sightings']['start_b'] == (181.1, 35.2)
        assert report['result']['warnings'] == []

    def test_report_is_json_serializable(self, world):
        report = run_curvature.reconstruct(world, CurvatureCalculator(), (38.0, -122.0),
                                           (38.0, -113.0), "Dubhe", "Sirius")
        data = json.loads(json.dumps(run_curvature._make_json_serializable(report)))
        assert data['stars'] == ["Dubhe", "Sirius"]
        assert data['sightings']['end_a'] == [36.4, 49.1]

    def test_unknown_star_raises(self, world):
        with pytest.raises(ValueError, match="Vega"):
            run_curvature.reconstruct(world, CurvatureCalculator(), (38.0, -122.0),
                                      (38.0, -113.0), "Dubhe", "Vega")

    def test_synthetic_world(self):
        report = run_curvature.reconstruct(make_world_model("bowl"), CurvatureCalculator(),
                                           (30.0, 45.0), (30.0, 55.0), "G", "H")
        assert math.isfinite(report['result']['normal_curvature'])
        assert report['travel']['distance_km'] > 0.0


class TestArguments:
    """Test command line parsing."""

    def test_defaults(self):
        args = run_curvature.parse_arguments([])
        assert args.world is None
        assert args.start is None
        assert not args.dry_run

    def test_locations_and_stars(self):
        args = run_curvature.parse_arguments(['--start', '40,-100', '--end', '35.5,-90',
                                              '--stars', 'A, E', '-w', 'saddle'])
        assert args.start == (40.0, -100.0)
        assert args.end == (35.5, -90.0)
        assert args.stars == ('A', 'E')
        assert args.world == 'saddle'

    @pytest.mark.parametrize("argv", [
        ['--start', '40'],
        ['--stars', 'Dubhe'],
        ['--world', 'flat_turtle'],
    ])
    def test_bad_arguments_exit(self, argv):
        with pytest.raises(SystemExit):
            run_curvature.parse_arguments(argv)


class TestMain:
    """Test the script entry point."""

    def test_dry_run(self, tmp_path):
        assert run_curvature.main(['--dry-run', '--config', str(tmp_path / "absent.yaml")]) == 0

    def test_bad_config(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("curvature: [unclosed\n")
        assert run_curvature.main(['--config', str(path)]) == 1

    def test_unknown_star_fails(self, tmp_path):
        argv = ['--config', str(tmp_path / "absent.yaml"), '--stars', 'Dubhe,Vega']
        assert run_curvature.main(argv) == 1

    def test_full_run(self, tmp_path):
        assert run_curvature.main(['--config', str(tmp_path / "absent.yaml")]) == 0
