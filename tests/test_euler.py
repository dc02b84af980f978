import numpy as np
import pytest
from numpy.testing import assert_allclose
from scipy.spatial.transform import Rotation

from linmath.core import quat
from linmath.core.common import AngleOrder

ORDERS = ["xyz", "xzy", "yxz", "yzx", "zxy", "zyx"]

ANGLES = [
    (10, 20, 30),
    (-45, 30, 60),
    (70, -80, -20),
    (89, -5, -89),
    (0, 0, 0),
]


def scipy_quat(deg, order):
    """Внутренний порядок 'zyx' у scipy записывается как 'ZYX', углы в порядке поворотов"""
    sequence = [deg["xyz".index(axis)] for axis in order]
    return Rotation.from_euler(order.upper(), sequence, degrees=True).as_quat()


@pytest.mark.parametrize("order", ORDERS)
@pytest.mark.parametrize("deg", ANGLES)
def test_from_euler_matches_scipy(deg, order):
    assert quat.approx_equals(quat.from_euler(deg, order), scipy_quat(deg, order))


@pytest.mark.parametrize("order", ORDERS)
@pytest.mark.parametrize("deg", ANGLES)
def test_euler_round_trip(deg, order):
    q = quat.from_euler(deg, order)
    assert quat.length(q) == pytest.approx(1)
    assert_allclose(quat.to_euler(q, order), deg, atol=1e-6)


@pytest.mark.parametrize("order", ORDERS)
def test_to_euler_reconstructs_random_rotations(order, unit_quats):
    for q in unit_quats:
        angles = quat.to_euler(q, order)
        assert quat.approx_equals(quat.from_euler(angles, order), q)


def test_default_order_is_zyx():
    deg = (15, -25, 35)
    assert_allclose(quat.from_euler(deg), quat.from_euler(deg, "zyx"))
    assert_allclose(quat.to_euler(quat.from_euler(deg)), deg, atol=1e-6)


def test_order_is_case_insensitive():
    deg = (15, -25, 35)
    assert_allclose(quat.from_euler(deg, "YXZ"), quat.from_euler(deg, AngleOrder.YXZ))
    assert_allclose(quat.to_euler(quat.from_euler(deg, "yxz"), "YXZ"), deg, atol=1e-6)


def test_unknown_order_raises():
    with pytest.raises(ValueError, match="Unsupported rotation order"):
        quat.from_euler((0, 0, 0), "xyx")
    with pytest.raises(ValueError, match="Unsupported rotation order"):
        quat.to_euler(quat.identity, "abc")


def test_gimbal_lock_pure_y_rotation():
    q = quat.from_axis_angle([0, 1, 0], 90)
    angles = quat.to_euler(q, "zyx")
    assert not np.any(np.isnan(angles))
    assert angles[1] == pytest.approx(90)
    assert angles[0] + angles[2] == pytest.approx(0, abs=1e-6)


def test_gimbal_lock_zyx_absorbs_combined_rotation():
    q = quat.from_euler((30, 90, 10), "zyx")
    angles = quat.to_euler(q, "zyx")
    assert angles[1] == pytest.approx(90)
    # При y = 90 поворот зависит только от z - x
    assert angles[0] == 0
    assert angles[2] == pytest.approx(10 - 30, abs=1e-6)


# Индекс среднего (опорного) угла для каждого порядка
PIVOT = {order: "xyz".index(order[1]) for order in ORDERS}


@pytest.mark.parametrize("order", ORDERS)
@pytest.mark.parametrize("sign", [1, -1])
def test_gimbal_lock_reconstructs_rotation(order, sign):
    deg = [25.0, -40.0, 15.0]
    deg[PIVOT[order]] = 90.0 * sign
    q = quat.from_euler(deg, order)

    angles = quat.to_euler(q, order)
    assert not np.any(np.isnan(angles))
    assert angles[PIVOT[order]] == pytest.approx(90.0 * sign)
    assert 0.0 in [a for i, a in enumerate(angles) if i != PIVOT[order]]
    assert quat.approx_equals(quat.from_euler(angles, order), q)


def test_gimbal_threshold_override():
    q = quat.from_euler((20, 89.9, 10), "zyx")
    assert quat.to_euler(q, "zyx")[0] != 0
    locked = quat.to_euler(q, "zyx", gimbal_threshold=0.99)
    assert locked[0] == 0
    assert locked[1] == pytest.approx(90)
