"""
World models: hypothetical or real surfaces paired with the sightings they produce.
"""

from .world_model import (
    WORLD_MODELS,
    WorldModel,
    azimuthal_equidistant,
    bowl,
    close_stars,
    make_world_model,
    real_world,
    saddle,
)
from .sources import (
    CatalogObservationSource,
    CloseStarObservationSource,
    GreatCircleTravel,
    SurfaceChordTravel,
    SynthesizedObservationSource,
)

__all__ = [
    'WORLD_MODELS',
    'WorldModel',
    'azimuthal_equidistant',
    'bowl',
    'close_stars',
    'make_world_model',
    'real_world',
    'saddle',
    'CatalogObservationSource',
    'CloseStarObservationSource',
    'GreatCircleTravel',
    'SurfaceChordTravel',
    'SynthesizedObservationSource',
]
