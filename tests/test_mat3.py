import numpy as np
import pytest
from numpy.testing import assert_allclose

from linmath.core import mat2d, mat3, mat4, quat, vec2, vec3


def as_rows(m):
    return np.asarray(m).reshape(3, 3).T


def test_identity_from_identity_quaternion():
    assert mat3.exact_equals(mat3.from_quat(quat.identity), mat3.identity)


def test_from_quat_is_orthonormal(unit_quats):
    for q in unit_quats:
        r = as_rows(mat3.from_quat(q))
        assert_allclose(r @ r.T, np.eye(3), atol=1e-12)
        assert np.linalg.det(r) == pytest.approx(1)


def test_from_mat4_upper_left_block():
    q = quat.from_axis_angle(vec3.unit_x, 30)
    m = mat4.from_rotation_translation(q, [1, 2, 3])
    assert_allclose(mat3.from_mat4(m), mat3.from_quat(q), atol=1e-12)


def test_invert(rng):
    m = rng.normal(size=9)
    assert_allclose(as_rows(mat3.invert(m)), np.linalg.inv(as_rows(m)), atol=1e-9)
    assert_allclose(mat3.multiply(m, mat3.invert(m)), mat3.identity, atol=1e-9)


def test_invert_singular_returns_none():
    assert mat3.invert(mat3.zero) is None
    assert mat3.invert([1, 2, 3, 2, 4, 6, 0, 1, 0]) is None


def test_determinant_adjoint_transpose(rng):
    m = rng.normal(size=9)
    det = mat3.determinant(m)
    assert det == pytest.approx(np.linalg.det(as_rows(m)))
    assert_allclose(mat3.adjoint(m), mat3.invert(m) * det, atol=1e-9)
    assert_allclose(as_rows(mat3.transpose(m)), as_rows(m).T)


def test_multiply_is_column_major_product(rng):
    a, b = rng.normal(size=(2, 9))
    assert_allclose(as_rows(mat3.multiply(a, b)), as_rows(a) @ as_rows(b))


def test_two_dimensional_transforms():
    m = mat3.translate(mat3.identity, [3, 4])
    assert_allclose(vec2.transform_mat3([1, 1], m), [4, 5])
    m = mat3.rotate(mat3.identity, 90)
    assert_allclose(vec2.transform_mat3([1, 0], m), [0, 1], atol=1e-12)
    assert_allclose(m, mat3.from_rotation(90))
    m = mat3.scale(mat3.identity, [2, 3])
    assert_allclose(m, mat3.from_scaling([2, 3]))
    assert_allclose(vec2.transform_mat3([1, 1], m), [2, 3])


def test_from_mat2d():
    m = mat2d.of(1, 2, 3, 4, 5, 6)
    assert_allclose(mat3.from_mat2d(m), [1, 2, 0, 3, 4, 0, 5, 6, 1])


def test_normal_from_mat4():
    q = quat.from_axis_angle(vec3.unit_y, 40)
    m = mat4.from_rotation_translation(q, [5, 6, 7])
    assert_allclose(mat3.normal_from_mat4(m), mat3.from_quat(q), atol=1e-12)

    scaled = mat4.from_scaling([2, 4, 8])
    assert_allclose(mat3.normal_from_mat4(scaled), [0.5, 0, 0, 0, 0.25, 0, 0, 0, 0.125])


def test_normal_from_singular_mat4_forwards_none():
    assert mat3.normal_from_mat4(mat4.zero) is None


def test_projection():
    m = mat3.projection(200, 100)
    assert_allclose(vec2.transform_mat3([0, 0], m), [-1, 1])
    assert_allclose(vec2.transform_mat3([200, 100], m), [1, -1])


def test_to_string():
    assert mat3.to_string(mat3.identity, fraction_digits=0) == "[1, 0, 0]\n[0, 1, 0]\n[0, 0, 1]"
