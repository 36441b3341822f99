"""Tests for math_utils module."""

import numpy as np

from skinforge.core.math_utils import (
    vec3, mat4_identity, mat4_from_quaternion, mat4_compose, quat_identity,
)


def _apply(m, p):
    return (m @ np.append(p, 1.0))[:3]


def test_vec3():
    v = vec3(1, 2, 3)
    assert v.shape == (3,)
    np.testing.assert_array_equal(v, [1, 2, 3])


def test_mat4_identity():
    m = mat4_identity()
    np.testing.assert_array_equal(m, np.eye(4))


def test_quat_identity():
    q = quat_identity()
    np.testing.assert_array_equal(q, [0, 0, 0, 1])
    np.testing.assert_array_equal(mat4_from_quaternion(q), np.eye(4))


def test_mat4_from_quaternion_quarter_turn():
    # Quarter turn about Y
    s = np.sqrt(0.5)
    m = mat4_from_quaternion(np.array([0.0, s, 0.0, s]))
    np.testing.assert_array_almost_equal(_apply(m, vec3(0, 0, 1)), [1, 0, 0])


def test_mat4_compose():
    m = mat4_compose(vec3(1, 2, 3), quat_identity(), vec3(2, 2, 2))
    np.testing.assert_array_almost_equal(_apply(m, vec3(1, 0, 0)), [3, 2, 3])


def test_mat4_compose_translation_only():
    m = mat4_compose(vec3(0, -12, 0), quat_identity(), vec3(1, 1, 1))
    np.testing.assert_array_equal(m[:3, :3], np.eye(3))
    np.testing.assert_array_equal(m[:3, 3], [0, -12, 0])
