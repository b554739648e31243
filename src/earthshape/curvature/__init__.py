"""
Surface curvature inference from paired star sightings.
"""

from .calculator import (
    CurvatureCalculator,
    CurvatureInputs,
    CurvatureResult,
    dubhe_sirius_example,
    inputs_between_locations,
)

__all__ = [
    'CurvatureCalculator',
    'CurvatureInputs',
    'CurvatureResult',
    'dubhe_sirius_example',
    'inputs_between_locations',
]
