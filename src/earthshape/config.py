"""
Configuration loading for earthshape.

Configuration is a nested dictionary read from YAML and merged over
DEFAULT_CONFIG, so a file only needs the keys it changes.  The calculator
reads its section through the typed CurvatureConfig dataclass.

Usage:
    from earthshape.config import load_config, CurvatureConfig

    config = load_config(Path("config/earthshape.yaml"))
    calc_config = CurvatureConfig.from_dict(config)
"""

import copy
import logging
import yaml
from pathlib import Path
from typing import Any, Dict, Optional
from dataclasses import dataclass, fields

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path("config/earthshape.yaml")

DEFAULT_CONFIG: Dict[str, Any] = {
    'curvature': {
        'refraction_elevation_limit': 20.0,  # degrees
        'deviation_limit_degrees': 1.0,
        'substitute_distance_km': 1.0,
        'plausibility_checks': False,
        'plausibility_limit': 0.001,         # deg/km
        'wide_angle_alignment': False,
    },
    'surface': {
        'frame_step_degrees': 0.1,
        'earth_radius_km': 6371.0,
    },
    'run': {
        'world': 'real_world',
        'start': [38.0, -122.0],
        'end': [38.0, -113.0],
        'star_a': 'Dubhe',
        'star_b': 'Sirius',
    },
}


def _merge(base: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    merged = copy.deepcopy(base)
    for key, value in overrides.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def get_default_config() -> Dict[str, Any]:
    """Get a fresh copy of the default configuration."""
    return copy.deepcopy(DEFAULT_CONFIG)


def load_config(config_path: Optional[Path] = None) -> Dict[str, Any]:
    """
    Load configuration from a YAML file merged over the defaults.

    Parameters
    ----------
    config_path : Path, optional
        YAML file to read (default: config/earthshape.yaml)

    Returns
    -------
    Dict[str, Any]
        Complete configuration; the defaults when the file does not exist

    Raises
    ------
    yaml.YAMLError
        If the file is not valid YAML
    ValueError
        If the top level of the file is not a mapping
    """
    if config_path is None:
        config_path = DEFAULT_CONFIG_PATH
    config_path = Path(config_path)

    if not config_path.exists():
        logger.warning(f"Config file not found: {config_path}, using defaults")
        return get_default_config()

    with open(config_path, 'r') as f:
        loaded = yaml.safe_load(f)

    if loaded is None:
        loaded = {}
    if not isinstance(loaded, dict):
        raise ValueError(f"Config file {config_path} must contain a mapping, "
                         f"got {type(loaded).__name__}")

    logger.info(f"Loaded configuration from {config_path}")
    return _merge(DEFAULT_CONFIG, loaded)


@dataclass
class CurvatureConfig:
    """Thresholds and switches for the curvature calculator."""
    refraction_elevation_limit: float = 20.0
    deviation_limit_degrees: float = 1.0
    substitute_distance_km: float = 1.0
    plausibility_checks: bool = False
    plausibility_limit: float = 0.001
    wide_angle_alignment: bool = False

    def __post_init__(self):
        if self.substitute_distance_km <= 0:
            raise ValueError("substitute_distance_km must be positive")
        if self.deviation_limit_degrees < 0:
            raise ValueError("deviation_limit_degrees must be non-negative")
        if self.plausibility_limit < 0:
            raise ValueError("plausibility_limit must be non-negative")

    @classmethod
    def from_dict(cls, config: Dict[str, Any]) -> 'CurvatureConfig':
        """Build from a full configuration dictionary (its 'curvature' section)."""
        section = config.get('curvature', {}) or {}
        known = {f.name for f in fields(cls)}
        unknown = set(section) - known
        if unknown:
            logger.warning(f"Ignoring unknown curvature settings: {sorted(unknown)}")
        return cls(**{k: v for k, v in section.items() if k in known})
