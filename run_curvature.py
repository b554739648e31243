#!/usr/bin/env python3
"""
run_curvature.py - Curvature Reconstruction Script

Top-level script for inferring surface curvature between two locations from
the sightings of two stars.  Builds the requested world model, collects the
sightings at both ends of the trip, runs the curvature calculator and reports
the result.

Usage:
    python run_curvature.py --help
    python run_curvature.py --world real_world
    python run_curvature.py --world bowl --start 30,45 --end 30,55 --stars A,E
    python run_curvature.py --config custom_config.yaml --json
"""

import argparse
import json
import sys
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import numpy as np
import yaml

from earthshape.config import DEFAULT_CONFIG_PATH, CurvatureConfig, load_config
from earthshape.curvature import CurvatureCalculator, CurvatureResult
from earthshape.stars.observations import MANUAL_OBSERVATION_UNIX_TIME, StarObservation
from earthshape.world import WORLD_MODELS, WorldModel, make_world_model

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=[
        logging.StreamHandler(sys.stdout)
    ]
)
logger = logging.getLogger(__name__)


def _parse_location(text: str) -> Tuple[float, float]:
    try:
        latitude, longitude = (float(part) for part in text.split(','))
    except ValueError:
        raise argparse.ArgumentTypeError(f"Expected 'latitude,longitude', got {text!r}")
    return latitude, longitude


def _parse_star_pair(text: str) -> Tuple[str, str]:
    names = [name.strip() for name in text.split(',')]
    if len(names) != 2 or not all(names):
        raise argparse.ArgumentTypeError(f"Expected 'starA,starB', got {text!r}")
    return names[0], names[1]


def _find_sighting(observations: List[StarObservation], name: str,
                   latitude: float, longitude: float) -> Tuple[float, float]:
    for obs in observations:
        if obs.name == name:
            return obs.azimuth, obs.elevation
    raise ValueError(f"No sighting of {name} at {latitude}, {longitude}")


def _make_json_serializable(obj):
    """Convert objects for JSON serialization."""
    if isinstance(obj, np.ndarray):
        return obj.tolist()
    elif isinstance(obj, np.number):
        return float(obj)
    elif isinstance(obj, dict):
        return {key: _make_json_serializable(value) for key, value in obj.items()}
    elif isinstance(obj, (list, tuple)):
        return [_make_json_serializable(item) for item in obj]
    elif isinstance(obj, Path):
        return str(obj)
    else:
        return obj


def reconstruct(world: WorldModel, calculator: CurvatureCalculator,
                start: Tuple[float, float], end: Tuple[float, float],
                star_a: str, star_b: str,
                unix_time: float = MANUAL_OBSERVATION_UNIX_TIME) -> Dict[str, Any]:
    """
    Run one curvature reconstruction between two locations.

    Args:
        world: World model supplying sightings and travel measurements
        calculator: Configured curvature calculator
        start: (latitude, longitude) of the start location
        end: (latitude, longitude) of the end location
        star_a, star_b: Names of the two stars to align
        unix_time: Time of the sightings

    Returns:
        Dictionary with the trip, the sightings used and the curvature result

    Raises:
        ValueError: If either star is not visible in the world's sightings
    """
    start_sightings = world.star_observations(unix_time, *start)
    end_sightings = world.star_observations(unix_time, *end)

    start_a = _find_sighting(start_sightings, star_a, *start)
    start_b = _find_sighting(start_sightings, star_b, *start)
    end_a = _find_sighting(end_sightings, star_a, *end)
    end_b = _find_sighting(end_sightings, star_b, *end)

    travel = world.travel_observation(start[0], start[1], end[0], end[1])
    logger.info(f"Travel: {travel.distance_km:.1f} km at heading "
                f"{travel.start_to_end_heading:.2f} deg")

    result: CurvatureResult = calculator.calculate(
        start_a, start_b, end_a, end_b,
        travel.start_to_end_heading, travel.distance_km, travel.end_heading)

    return {
        'world': world.description,
        'unix_time': unix_time,
        'start': list(start),
        'end': list(end),
        'stars': [star_a, star_b],
        'sightings': {
            'start_a': start_a, 'start_b': start_b,
            'end_a': end_a, 'end_b': end_b,
        },
        'travel': {
            'distance_km': travel.distance_km,
            'start_to_end_heading': travel.start_to_end_heading,
            'end_to_start_heading': travel.end_to_start_heading,
        },
        'result': dict(result.to_dict(),
                       radius_of_curvature_km=result.radius_of_curvature_km),
    }


def parse_arguments(argv: Optional[List[str]] = None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description='Surface Curvature from Star Sightings',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s                                   # Dubhe and Sirius, 38N 122W to 38N 113W
  %(prog)s --world close_stars               # Same trip under nearby stars
  %(prog)s --world saddle --stars A,E        # Synthetic saddle surface
  %(prog)s --start 40,-100 --end 35,-90      # Custom trip
  %(prog)s --json                            # Print the result as JSON
        """
    )

    parser.add_argument(
        '--config', '-c',
        type=Path,
        help=f'Path to configuration YAML file (default: {DEFAULT_CONFIG_PATH})'
    )

    parser.add_argument(
        '--world', '-w',
        type=str,
        choices=sorted(WORLD_MODELS),
        help='World model to take sightings from'
    )

    parser.add_argument(
        '--start',
        type=_parse_location,
        help="Start location as 'latitude,longitude'"
    )

    parser.add_argument(
        '--end',
        type=_parse_location,
        help="End location as 'latitude,longitude'"
    )

    parser.add_argument(
        '--stars',
        type=_parse_star_pair,
        help="Star pair as 'starA,starB'"
    )

    parser.add_argument(
        '--time',
        type=float,
        default=MANUAL_OBSERVATION_UNIX_TIME,
        help='Unix time of the sightings (default: the manual observation night)'
    )

    parser.add_argument(
        '--json',
        action='store_true',
        help='Print the result as JSON'
    )

    parser.add_argument(
        '--verbose', '-v',
        action='store_true',
        help='Enable verbose logging, including calculation steps'
    )

    parser.add_argument(
        '--dry-run',
        action='store_true',
        help='Show what would be executed without running the reconstruction'
    )

    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    """Curvature script entry point."""
    args = parse_arguments(argv)

    # Configure logging level
    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    try:
        config = load_config(args.config)
        curvature_config = CurvatureConfig.from_dict(config)
    except (OSError, ValueError, yaml.YAMLError) as e:
        logger.error(f"Invalid configuration: {e}")
        return 1

    run = config['run']
    world_name = args.world or run['world']
    start = args.start or tuple(run['start'])
    end = args.end or tuple(run['end'])
    star_a, star_b = args.stars or (run['star_a'], run['star_b'])

    logger.info("=" * 60)
    logger.info("SURFACE CURVATURE RECONSTRUCTION")
    logger.info("=" * 60)
    logger.info(f"World model: {world_name}")
    logger.info(f"Trip: {start} -> {end}")
    logger.info(f"Stars: {star_a}, {star_b}")
    logger.info(f"Configuration: {args.config or 'default'}")

    if args.dry_run:
        logger.info("DRY RUN - No reconstruction will be executed")
        return 0

    try:
        world = make_world_model(world_name,
                                 step_degrees=config['surface']['frame_step_degrees'],
                                 radius_km=config['surface']['earth_radius_km'])
        calculator = CurvatureCalculator(curvature_config)
        report = reconstruct(world, calculator, start, end, star_a, star_b, args.time)
    except KeyboardInterrupt:
        logger.info("Reconstruction interrupted by user")
        return 130
    except (KeyError, ValueError) as e:
        logger.error(f"Reconstruction failed: {e}")
        return 1

    result = report['result']
    if args.json:
        print(json.dumps(_make_json_serializable(report), indent=2))
    else:
        logger.info("\n" + "=" * 60)
        logger.info("CURVATURE SUMMARY")
        logger.info("=" * 60)
        logger.info(f"Deviation of {star_b}: {result['deviation_b_degrees']:.3f} deg")
        logger.info(f"Normal curvature: {result['normal_curvature']:.3e} rad/km "
                    f"(radius {result['radius_of_curvature_km']:.0f} km)")
        logger.info(f"Geodesic torsion: {result['geodesic_torsion']:.3e} deg/km")
        logger.info(f"Geodesic curvature: {result['geodesic_curvature']:.3e} deg/km")
        logger.info(f"Warnings: {len(result['warnings'])}")

    return 0


if __name__ == '__main__':
    sys.exit(main())
