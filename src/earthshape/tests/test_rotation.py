#!/usr/bin/env python3
"""
test_rotation.py - Unit tests for the axis-angle rotation algebra

Covers:
- Canonical form of AxisAngleRotation (identity, negative angles, packing)
- Rotation matrices against the glRotate formula
- Composition against scipy quaternion products
- Composition order and inverse
- rotation_to_become in both narrow and wide-angle modes

Run with:
    python -m pytest src/earthshape/tests/test_rotation.py -v
"""

import numpy as np
import pytest
from scipy.spatial.transform import Rotation

import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from earthshape.core.rotation import (
    AxisAngleRotation,
    compose,
    rotate,
    rotation_matrix,
    rotation_to_become,
)


def _scipy(rotation: AxisAngleRotation) -> Rotation:
    return Rotation.from_rotvec(rotation.axis_vector * rotation.angle_radians)


SAMPLE_ROTATIONS = [
    AxisAngleRotation.about([0, 1, 0], 90.0),
    AxisAngleRotation.about([1, 2, 3], 37.5),
    AxisAngleRotation.about([-0.3, 0.1, 0.9], 170.0),
    AxisAngleRotation.about([1, 0, 0], 0.001),
]


class TestAxisAngleRotation:
    """Test canonical form and conversions."""

    def test_zero_angle_is_identity(self):
        """Test zero angle collapses to the identity."""
        r = AxisAngleRotation.about([1, 0, 0], 0.0)
        assert r.is_identity
        assert r.axis == (0.0, 0.0, 0.0)

    def test_zero_axis_is_identity(self):
        """Test a zero axis with a non-zero angle is still the identity."""
        r = AxisAngleRotation((0.0, 0.0, 0.0), 45.0)
        assert r.is_identity
        assert r.angle_degrees == 0.0

    def test_axis_is_normalized(self):
        r = AxisAngleRotation.about([0, 0, 5], 30.0)
        np.testing.assert_allclose(r.axis_vector, [0, 0, 1])
        assert r.angle_degrees == 30.0

    def test_negative_angle_flips_axis(self):
        """Test negative angles are stored about the flipped axis."""
        r = AxisAngleRotation.about([0, 1, 0], -30.0)
        np.testing.assert_allclose(r.axis_vector, [0, -1, 0])
        assert r.angle_degrees == 30.0

    def test_packed_vector_round_trip(self):
        packed = np.array([3.0, -4.0, 12.0])
        r = AxisAngleRotation.from_vector(packed)
        assert abs(r.angle_degrees - 13.0) < 1e-12
        np.testing.assert_allclose(r.as_vector(), packed, atol=1e-12)

    def test_zero_packed_vector_is_identity(self):
        assert AxisAngleRotation.from_vector([0, 0, 0]).is_identity

    def test_non_finite_angle_raises(self):
        with pytest.raises(ValueError):
            AxisAngleRotation.about([1, 0, 0], float('nan'))

    def test_bad_axis_shape_raises(self):
        with pytest.raises(ValueError):
            AxisAngleRotation.about([1, 0], 10.0)

    def test_immutable(self):
        r = AxisAngleRotation.about([1, 0, 0], 10.0)
        with pytest.raises(AttributeError):
            r.angle_degrees = 20.0


class TestRotate:
    """Test applying rotations to vectors."""

    def test_identity_returns_input(self):
        v = np.array([0.3, -1.2, 4.0])
        np.testing.assert_array_equal(rotate(v, AxisAngleRotation.identity()), v)

    def test_right_hand_rule(self):
        """Test +90 about +Z takes +X to +Y."""
        result = rotate([1, 0, 0], AxisAngleRotation.about([0, 0, 1], 90.0))
        np.testing.assert_allclose(result, [0, 1, 0], atol=1e-12)

    @pytest.mark.parametrize("rotation", SAMPLE_ROTATIONS)
    def test_matrix_matches_glrotate(self, rotation):
        """Test rotation matrices agree with the glRotate formula."""
        x, y, z = rotation.axis
        c, s = np.cos(rotation.angle_radians), np.sin(rotation.angle_radians)
        expected = np.array([
            [x*x*(1-c) + c,   x*y*(1-c) - z*s, x*z*(1-c) + y*s],
            [y*x*(1-c) + z*s, y*y*(1-c) + c,   y*z*(1-c) - x*s],
            [z*x*(1-c) - y*s, z*y*(1-c) + x*s, z*z*(1-c) + c]
        ])
        np.testing.assert_allclose(rotation_matrix(rotation), expected, atol=1e-12)

    def test_identity_matrix(self):
        np.testing.assert_array_equal(rotation_matrix(AxisAngleRotation.identity()), np.eye(3))

    def test_preserves_length(self):
        v = np.array([2.0, -1.0, 0.5])
        r = AxisAngleRotation.about([1, 1, 0], 123.0)
        assert abs(np.linalg.norm(rotate(v, r)) - np.linalg.norm(v)) < 1e-12


class TestCompose:
    """Test rotation composition."""

    @pytest.mark.parametrize("first", SAMPLE_ROTATIONS)
    @pytest.mark.parametrize("second", SAMPLE_ROTATIONS)
    def test_matches_scipy_product(self, first, second):
        """Test compose(first, second) applies first, then second."""
        expected = (_scipy(second) * _scipy(first)).as_matrix()
        np.testing.assert_allclose(compose(first, second).matrix(), expected, atol=1e-9)

    def test_order_matters(self):
        a = AxisAngleRotation.about([1, 0, 0], 90.0)
        b = AxisAngleRotation.about([0, 1, 0], 90.0)
        v = np.array([0.0, 0.0, 1.0])
        np.testing.assert_allclose(rotate(v, compose(a, b)), rotate(rotate(v, a), b), atol=1e-12)
        assert not np.allclose(rotate(v, compose(a, b)), rotate(v, compose(b, a)))

    @pytest.mark.parametrize("rotation", SAMPLE_ROTATIONS)
    def test_compose_with_inverse_is_identity(self, rotation):
        """Test a rotation followed by its negation is (nearly) the identity."""
        combined = compose(rotation, rotation.inverse())
        assert combined.angle_degrees < 1e-6, f"Expected identity, got {combined}"

    def test_identity_is_neutral(self):
        r = AxisAngleRotation.about([1, 2, 3], 40.0)
        for combined in (compose(r, AxisAngleRotation.identity()),
                         compose(AxisAngleRotation.identity(), r)):
            np.testing.assert_allclose(combined.axis_vector, r.axis_vector, atol=1e-12)
            assert abs(combined.angle_degrees - 40.0) < 1e-9

    def test_full_turn_is_identity(self):
        """Test two half turns about the same axis give the identity."""
        half = AxisAngleRotation.about([0, 0, 1], 180.0)
        assert compose(half, half).is_identity

    def test_same_axis_angles_add(self):
        r = compose(AxisAngleRotation.about([0, 1, 0], 20.0),
                    AxisAngleRotation.about([0, 1, 0], 30.0))
        np.testing.assert_allclose(r.axis_vector, [0, 1, 0], atol=1e-12)
        assert abs(r.angle_degrees - 50.0) < 1e-9

    def test_small_angles_keep_precision(self):
        """Test tiny rotations compose without arccos rounding."""
        tiny = AxisAngleRotation.about([1, 0, 0], 1e-4)
        combined = compose(tiny, tiny)
        assert abs(combined.angle_degrees - 2e-4) / 2e-4 < 1e-9
        np.testing.assert_allclose(combined.axis_vector, [1, 0, 0], atol=1e-12)

    def test_then_matches_compose(self):
        a, b = SAMPLE_ROTATIONS[0], SAMPLE_ROTATIONS[1]
        np.testing.assert_allclose(a.then(b).as_vector(), compose(a, b).as_vector())


class TestRotationToBecome:
    """Test rotation between two directions."""

    def test_north_to_east(self):
        """Test turning nominal North into East is a quarter turn about -Y."""
        r = rotation_to_become([0, 0, -1], [1, 0, 0])
        np.testing.assert_allclose(r.axis_vector, [0, -1, 0], atol=1e-12)
        assert abs(r.angle_degrees - 90.0) < 1e-6
        np.testing.assert_allclose(rotate([0, 0, -1], r), [1, 0, 0], atol=1e-6)

    def test_parallel_is_identity(self):
        assert rotation_to_become([1, 2, 3], [2, 4, 6]).is_identity

    def test_zero_vector_is_identity(self):
        assert rotation_to_become([0, 0, 0], [1, 0, 0]).is_identity

    def test_lengths_ignored(self):
        r = rotation_to_become([0, 0, -3], [0, 0.5, 0])
        np.testing.assert_allclose(rotate([0, 0, -1], r), [0, 1, 0], atol=1e-6)

    def test_narrow_angle_folds_obtuse_angles(self):
        """Test the default asin form reports 60 degrees for a 120 degree turn."""
        b = [np.cos(np.radians(120)), np.sin(np.radians(120)), 0.0]
        r = rotation_to_become([1, 0, 0], b)
        assert abs(r.angle_degrees - 60.0) < 1e-9

    def test_wide_angle_obtuse(self):
        b = np.array([np.cos(np.radians(120)), np.sin(np.radians(120)), 0.0])
        r = rotation_to_become([1, 0, 0], b, wide_angle=True)
        assert abs(r.angle_degrees - 120.0) < 1e-9
        np.testing.assert_allclose(rotate([1, 0, 0], r), b, atol=1e-12)

    def test_wide_angle_antiparallel(self):
        """Test opposite vectors get a half turn about a perpendicular axis."""
        a = np.array([0.0, 0.0, -1.0])
        r = rotation_to_become(a, -a, wide_angle=True)
        assert abs(r.angle_degrees - 180.0) < 1e-12
        assert abs(np.dot(r.axis_vector, a)) < 1e-12
        np.testing.assert_allclose(rotate(a, r), -a, atol=1e-12)

    def test_narrow_and_wide_agree_below_90(self):
        a = [0.2, 0.9, -0.1]
        b = [0.5, 0.7, 0.3]
        narrow = rotation_to_become(a, b)
        wide = rotation_to_become(a, b, wide_angle=True)
        np.testing.assert_allclose(narrow.as_vector(), wide.as_vector(), atol=1e-9)
