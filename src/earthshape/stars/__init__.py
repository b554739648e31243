"""
Star data: sightings, the bright-star catalog and star position synthesis.
"""

from .observations import StarObservation, MANUAL_OBSERVATION_UNIX_TIME, manual_observations
from .catalog import (
    CatalogEntry,
    CatalogFormatError,
    default_catalog,
    greenwich_mean_sidereal_time,
    sun_position,
)
from .star_generator import StarGenerator, StarPosition, observations_from_positions

__all__ = [
    'StarObservation',
    'MANUAL_OBSERVATION_UNIX_TIME',
    'manual_observations',
    'CatalogEntry',
    'CatalogFormatError',
    'default_catalog',
    'greenwich_mean_sidereal_time',
    'sun_position',
    'StarGenerator',
    'StarPosition',
    'observations_from_positions',
]
