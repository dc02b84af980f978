import numpy as np
import pytest
from numpy.testing import assert_allclose
from scipy.spatial.transform import Rotation, Slerp

from linmath.core import quat, vec3


@pytest.fixture
def pair(unit_quats):
    a, b = unit_quats[4], unit_quats[5]
    if quat.dot(a, b) < 0:
        b = -b
    return a, b


def test_slerp_endpoints(pair):
    a, b = pair
    assert_allclose(quat.slerp(a, b, 0), a, atol=1e-12)
    assert quat.approx_equals(quat.slerp(a, b, 1), b)


@pytest.mark.parametrize("t", [0, 0.3, 0.5, 1, 1.7])
def test_slerp_of_equal_quaternions(t):
    q = quat.from_axis_angle(vec3.normalize([1, 2, 3]), 50)
    assert_allclose(quat.slerp(q, q, t), q, atol=1e-12)


def test_slerp_matches_scipy(pair):
    a, b = pair
    times = [0.1, 0.25, 0.5, 0.8]
    expected = Slerp([0, 1], Rotation.from_quat([a, b]))(times).as_quat()
    for t, e in zip(times, expected):
        assert quat.approx_equals(quat.slerp(a, b, t), e)


def test_slerp_midpoint_halves_angle():
    mid = quat.slerp(quat.identity, quat.from_axis_angle(vec3.unit_z, 90), 0.5)
    assert_allclose(mid, quat.from_axis_angle(vec3.unit_z, 45), atol=1e-12)


def test_slerp_takes_shorter_arc():
    a = quat.identity
    b = -quat.from_axis_angle(vec3.unit_z, 60)
    assert quat.dot(a, b) < 0
    assert_allclose(quat.slerp(a, b, 0.5), quat.slerp(a, -b, 0.5), atol=1e-12)
    assert_allclose(quat.slerp(a, b, 0.5), quat.from_axis_angle(vec3.unit_z, 30), atol=1e-12)


def test_slerp_extrapolates():
    q = quat.slerp(quat.identity, quat.from_axis_angle(vec3.unit_z, 45), 2)
    assert_allclose(q, quat.from_axis_angle(vec3.unit_z, 90), atol=1e-12)


def test_slerp_near_parallel_uses_linear_weights():
    a = quat.identity
    b = quat.from_axis_angle(vec3.unit_z, 1e-5)
    result = quat.slerp(a, b, 0.5)
    assert not np.any(np.isnan(result))
    assert_allclose(result, (a + b) / 2)


def test_nlerp_is_normalized_and_short_arc():
    a = quat.from_axis_angle(vec3.unit_x, 20)
    b = -quat.from_axis_angle(vec3.unit_x, 80)
    q = quat.lerp(a, b, 0.5)
    assert quat.length(q) == pytest.approx(1)
    assert quat.approx_equals(q, quat.from_axis_angle(vec3.unit_x, 50))
    assert_allclose(quat.nlerp(a, b, 0.5), q)


def test_sqlerp_endpoints(unit_quats):
    a, b, c, d = unit_quats[:4]
    assert_allclose(quat.sqlerp(a, b, c, d, 0), a, atol=1e-12)
    assert quat.approx_equals(quat.sqlerp(a, b, c, d, 1), d)


def test_sqlerp_of_identical_controls():
    q = quat.from_axis_angle(vec3.unit_y, 35)
    assert_allclose(quat.sqlerp(q, q, q, q, 0.4), q, atol=1e-12)


def test_sqlerp_definition(unit_quats):
    a, b, c, d = unit_quats[:4]
    t = 0.35
    expected = quat.slerp(quat.slerp(a, d, t), quat.slerp(b, c, t), 2 * t * (1 - t))
    assert_allclose(quat.sqlerp(a, b, c, d, t), expected)
