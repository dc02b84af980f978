import numpy as np
import pytest
from numpy.testing import assert_allclose

from linmath.core import mat2, mat2d, vec2


def test_mat2_invert():
    m = mat2.of(4, 3, 6, 3)
    assert_allclose(mat2.multiply(m, mat2.invert(m)), mat2.identity, atol=1e-12)
    assert mat2.invert(mat2.of(1, 2, 2, 4)) is None


def test_mat2_basics():
    m = mat2.of(1, 2, 3, 4)
    assert mat2.determinant(m) == pytest.approx(-2)
    assert_allclose(mat2.transpose(m), [1, 3, 2, 4])
    assert_allclose(mat2.adjoint(m), [4, -2, -3, 1])
    assert mat2.frob(m) == pytest.approx(np.sqrt(30))


def test_mat2_rotate_and_scale():
    assert_allclose(mat2.rotate(mat2.identity, 90), mat2.from_rotation(90))
    assert_allclose(mat2.scale(mat2.identity, [2, 3]), mat2.from_scaling([2, 3]))
    assert_allclose(mat2.scale(mat2.identity, 2), [2, 0, 0, 2])


def test_mat2d_invert():
    m = mat2d.multiply(mat2d.from_translation([3, -1]), mat2d.from_rotation(30),
                       mat2d.from_scaling([2, 0.5]))
    inv = mat2d.invert(m)
    assert_allclose(mat2d.multiply(m, inv), mat2d.identity, atol=1e-12)
    p = [0.7, -2.0]
    assert_allclose(vec2.transform_mat2d(vec2.transform_mat2d(p, m), inv), p, atol=1e-12)


def test_mat2d_singular_returns_none():
    assert mat2d.invert(mat2d.zero) is None
    assert mat2d.invert(mat2d.from_scaling([0, 1])) is None


def test_mat2d_transforms():
    m = mat2d.translate(mat2d.identity, [1, 2])
    m = mat2d.rotate(m, 90)
    m = mat2d.scale(m, [2, 2])
    # Сначала масштаб, затем поворот, затем перенос
    assert_allclose(vec2.transform_mat2d([1, 0], m), [1, 4], atol=1e-12)
    assert mat2d.determinant(m) == pytest.approx(4)


def test_mat2d_frob_counts_implicit_row():
    assert mat2d.frob(mat2d.identity) == pytest.approx(np.sqrt(3))


def test_to_string():
    text = mat2d.to_string(mat2d.from_translation([3, 4]))
    assert text == "[1.00, 0.00, 3.00]\n[0.00, 1.00, 4.00]"
    assert mat2.to_string(mat2.identity) == "[1.00, 0.00]\n[0.00, 1.00]"
