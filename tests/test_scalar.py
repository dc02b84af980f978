import numpy as np
import pytest

from linmath.core import scalar


def test_clamp():
    assert scalar.clamp(5, 0, 1) == 1
    assert scalar.clamp(-5, 0, 1) == 0
    assert scalar.clamp(0.25, 0, 1) == 0.25


def test_lerp_is_not_clamped():
    assert scalar.lerp(0, 10, 0.5) == 5
    assert scalar.lerp(0, 10, 2) == 20
    assert scalar.mix(0, 10, -1) == -10


def test_inverse_lerp():
    assert scalar.inverse_lerp(0, 10, 5) == 0.5
    assert scalar.inverse_lerp(3, 3, 100) == 0.5


def test_fit():
    assert scalar.fit(5, 0, 10, 0, 100) == pytest.approx(50)
    assert scalar.fit(0, -1, 1, 10, 20) == pytest.approx(15)


def test_degree_trigonometry():
    assert scalar.sin(30) == pytest.approx(0.5)
    assert scalar.cos(60) == pytest.approx(0.5)
    assert scalar.tan(45) == pytest.approx(1)
    assert scalar.asin(1) == pytest.approx(90)
    assert scalar.acos(0) == pytest.approx(90)
    assert scalar.atan(1) == pytest.approx(45)
    assert scalar.atan2(1, -1) == pytest.approx(135)
    assert scalar.rad(180) == pytest.approx(np.pi)
    assert scalar.deg(np.pi / 2) == pytest.approx(90)


def test_step_and_smoothstep():
    assert scalar.step(0.5, 0.2) == 0
    assert scalar.step(0.5, 0.5) == 1
    assert scalar.smoothstep(0, 1, -1) == 0
    assert scalar.smoothstep(0, 1, 2) == 1
    assert scalar.smoothstep(0, 1, 0.5) == pytest.approx(0.5)


def test_round_half_away_from_zero():
    assert scalar.round(2.5) == 3
    assert scalar.round(-2.5) == -3
    assert scalar.round(1.4) == 1


def test_approx_equals_is_relative():
    assert scalar.approx_equals(1.0, 1.0 + 1e-7)
    assert scalar.approx_equals(1000.0, 1000.0005)
    assert not scalar.approx_equals(0.0, 1e-5)
    assert scalar.exact_equals(2.0, 2.0)
