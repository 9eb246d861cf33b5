"""
Tests for the rigid transform algebra.

The algebraic laws (identity, associativity, inverse, frame alignment) are
checked with Hypothesis over random transforms and points; a few fixed
cases pin down the operand order of ``combine`` and the layout of the
4x3 matrix.
"""

import math
import unittest

import numpy as np
import pytest
from hypothesis import assume, given, settings
from hypothesis import strategies as st

from rna_assembly.geometry import (
    IDENTITY,
    Transform,
    align,
    apply,
    apply_many,
    combine,
    inverse_ortho,
    make_point,
)

coord = st.floats(min_value=-50.0, max_value=50.0, allow_nan=False, allow_infinity=False)
points = st.tuples(coord, coord, coord).map(lambda p: make_point(*p))
components = st.lists(
    st.floats(min_value=-10.0, max_value=10.0, allow_nan=False, allow_infinity=False),
    min_size=12,
    max_size=12,
)
affine = components.map(Transform.from_components)
angle = st.floats(min_value=-math.pi, max_value=math.pi, allow_nan=False)


def rigid(alpha, beta, gamma, translation):
    """Rotation about X, then Y, then Z, followed by a translation."""
    ca, sa = math.cos(alpha), math.sin(alpha)
    cb, sb = math.cos(beta), math.sin(beta)
    cg, sg = math.cos(gamma), math.sin(gamma)
    rx = np.array([[1, 0, 0], [0, ca, sa], [0, -sa, ca]])
    ry = np.array([[cb, 0, -sb], [0, 1, 0], [sb, 0, cb]])
    rz = np.array([[cg, sg, 0], [-sg, cg, 0], [0, 0, 1]])
    rot = rx @ ry @ rz
    return Transform.from_components(list(rot.ravel()) + list(translation))


rigid_transforms = st.builds(rigid, angle, angle, angle, st.tuples(coord, coord, coord))


class TestTransformBasics(unittest.TestCase):
    def test_identity_maps_point_to_itself(self):
        p = make_point(1.5, -2.0, 3.25)
        np.testing.assert_array_equal(apply(IDENTITY, p), p)

    def test_apply_uses_row_vector_convention(self):
        # x' = x*a + y*d + z*g + tx
        t = Transform.from_components((1, 2, 3, 4, 5, 6, 7, 8, 9, 10, 20, 30))
        out = apply(t, make_point(1.0, 0.0, 0.0))
        np.testing.assert_allclose(out, [11.0, 22.0, 33.0])
        out = apply(t, make_point(0.0, 1.0, 0.0))
        np.testing.assert_allclose(out, [14.0, 25.0, 36.0])

    def test_combine_applies_left_operand_first(self):
        shift = Transform.from_components((1, 0, 0, 0, 1, 0, 0, 0, 1, 1, 0, 0))
        quarter_turn_z = Transform.from_components((0, 1, 0, -1, 0, 0, 0, 0, 1, 0, 0, 0))
        p = make_point(0.0, 0.0, 0.0)
        # Shift to (1,0,0), then rotate to (0,1,0).
        np.testing.assert_allclose(apply(combine(shift, quarter_turn_z), p), [0.0, 1.0, 0.0], atol=1e-12)
        # Rotate (no-op at origin), then shift to (1,0,0).
        np.testing.assert_allclose(apply(combine(quarter_turn_z, shift), p), [1.0, 0.0, 0.0], atol=1e-12)

    def test_transform_is_read_only(self):
        t = Transform.from_components(range(12))
        with self.assertRaises(ValueError):
            t.matrix[0, 0] = 5.0

    def test_wrong_component_count_rejected(self):
        with self.assertRaises(ValueError):
            Transform.from_components((1.0, 2.0))

    def test_apply_many_matches_apply(self):
        t = rigid(0.3, -1.1, 2.0, (1.0, -4.0, 2.5))
        block = np.array([[1.0, 2.0, 3.0], [-4.0, 0.5, 9.0], [0.0, 0.0, 0.0]])
        expected = np.stack([apply(t, p) for p in block])
        np.testing.assert_allclose(apply_many(t, block), expected, atol=1e-12)

    def test_components_round_trip(self):
        values = tuple(float(v) for v in range(12))
        self.assertEqual(Transform.from_components(values).components(), values)


@settings(max_examples=100, deadline=None)
@given(t=affine, p=points)
def test_identity_law(t, p):
    np.testing.assert_allclose(apply(combine(t, IDENTITY), p), apply(t, p), atol=1e-9)
    np.testing.assert_allclose(apply(combine(IDENTITY, t), p), apply(t, p), atol=1e-9)


@settings(max_examples=100, deadline=None)
@given(a=affine, b=affine, c=affine, p=points)
def test_combine_is_associative(a, b, c, p):
    left = apply(combine(combine(a, b), c), p)
    right = apply(combine(a, combine(b, c)), p)
    np.testing.assert_allclose(left, right, rtol=1e-9, atol=1e-9)


@settings(max_examples=100, deadline=None)
@given(a=affine, b=affine, p=points)
def test_combine_matches_sequential_application(a, b, p):
    np.testing.assert_allclose(apply(combine(a, b), p), apply(b, apply(a, p)), rtol=1e-9, atol=1e-9)


@settings(max_examples=100, deadline=None)
@given(t=rigid_transforms, p=points)
def test_inverse_law(t, p):
    np.testing.assert_allclose(apply(inverse_ortho(t), apply(t, p)), p, atol=1e-6)
    np.testing.assert_allclose(apply(t, apply(inverse_ortho(t), p)), p, atol=1e-6)


@settings(max_examples=50, deadline=None)
@given(t=rigid_transforms)
def test_inverse_composes_to_identity(t):
    assert combine(t, inverse_ortho(t)).allclose(IDENTITY, atol=1e-9)


@settings(max_examples=150, deadline=None)
@given(p1=points, p2=points, p3=points)
def test_align_frame_self_consistency(p1, p2, p3):
    v12 = np.subtract(p2, p1)
    v13 = np.subtract(p3, p1)
    assume(np.linalg.norm(v12) > 0.5)
    # Keep p3 well away from the p1-p2 line.
    assume(np.linalg.norm(np.cross(v12, v13)) > 0.5 * np.linalg.norm(v12))

    t = align(p1, p2, p3)

    np.testing.assert_allclose(apply(t, p1), [0.0, 0.0, 0.0], atol=1e-6)
    q2 = apply(t, p2)
    assert abs(q2[0]) < 1e-6
    assert abs(q2[2]) < 1e-6
    assert q2[1] > 0.0
    assert q2[1] == pytest.approx(np.linalg.norm(v12), abs=1e-6)
    assert abs(apply(t, p3)[0]) < 1e-6


@settings(max_examples=50, deadline=None)
@given(p1=points, p2=points, p3=points)
def test_align_frame_is_orthonormal(p1, p2, p3):
    assume(np.linalg.norm(np.subtract(p2, p1)) > 0.5)
    rot = align(p1, p2, p3).rotation
    np.testing.assert_allclose(rot @ rot.T, np.eye(3), atol=1e-9)


def test_align_frame_simple_case():
    t = align(make_point(0, 0, 0), make_point(0, 0, 2), make_point(1, 0, 0))
    np.testing.assert_allclose(apply(t, make_point(0, 0, 2)), [0.0, 2.0, 0.0], atol=1e-12)
    np.testing.assert_allclose(apply(t, make_point(1, 0, 0)), [0.0, 0.0, 1.0], atol=1e-12)
