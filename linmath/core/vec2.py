"""
Двумерные векторы
"""

from functools import reduce
from typing import Optional, Union

import numpy as np

from linmath.core import equality
from linmath.core.common import DEG2RAD, RAD2DEG, ArrayLike, as_array, frozen
from linmath.utils.formatting import vec_to_string

Vec2 = np.ndarray

zero = frozen([0, 0])
one = frozen([1, 1])
unit_x = frozen([1, 0])
unit_y = frozen([0, 1])


def of(x: float, y: Optional[float] = None) -> Vec2:
    """of(2) -> (2, 2)"""
    return np.array([x, x if y is None else y], dtype=np.float64)


def add(*vs: ArrayLike) -> Vec2:
    return reduce(np.add, (as_array(v) for v in vs), np.zeros(2))


def subtract(*vs: ArrayLike) -> Vec2:
    if not vs:
        return np.zeros(2)
    if len(vs) == 1:
        return -as_array(vs[0])
    return reduce(np.subtract, (as_array(v) for v in vs[1:]), as_array(vs[0]).copy())


def delta(a: ArrayLike, b: ArrayLike) -> Vec2:
    """b - a"""
    return as_array(b) - as_array(a)


def multiply(*vs: ArrayLike) -> Vec2:
    return reduce(np.multiply, (as_array(v) for v in vs), np.ones(2))


def divide(*vs: ArrayLike) -> Vec2:
    if not vs:
        return np.ones(2)
    if len(vs) == 1:
        vs = (one,) + vs
    with np.errstate(divide='ignore', invalid='ignore'):
        return reduce(np.divide, (as_array(v) for v in vs[1:]), as_array(vs[0]).copy())


def min(*vs: ArrayLike) -> Vec2:
    return reduce(np.minimum, (as_array(v) for v in vs))


def max(*vs: ArrayLike) -> Vec2:
    return reduce(np.maximum, (as_array(v) for v in vs))


def clamp(v: ArrayLike,
          min_value: Union[ArrayLike, float],
          max_value: Union[ArrayLike, float]) -> Vec2:
    lo = np.broadcast_to(as_array(min_value), 2)
    hi = np.broadcast_to(as_array(max_value), 2)
    return np.minimum(np.maximum(as_array(v), lo), hi)


def scale(a: ArrayLike, s: float) -> Vec2:
    return as_array(a) * s


def scale_and_add(a: ArrayLike, b: ArrayLike, s: float) -> Vec2:
    return as_array(a) + as_array(b) * s


def negate(a: ArrayLike) -> Vec2:
    return -as_array(a)


def inverse(a: ArrayLike) -> Vec2:
    with np.errstate(divide='ignore'):
        return 1.0 / as_array(a)


def length(a: ArrayLike) -> float:
    x, y = as_array(a)
    return float(np.hypot(x, y))


def squared_length(a: ArrayLike) -> float:
    a = as_array(a)
    return float(np.dot(a, a))


def distance(a: ArrayLike, b: ArrayLike) -> float:
    return length(as_array(b) - as_array(a))


def squared_distance(a: ArrayLike, b: ArrayLike) -> float:
    return squared_length(as_array(b) - as_array(a))


def normalize(a: ArrayLike) -> Vec2:
    a = as_array(a)
    hyp = np.dot(a, a)
    return a * (0.0 if hyp == 0 else 1.0 / np.sqrt(hyp))


def dot(a: ArrayLike, b: ArrayLike) -> float:
    return float(np.dot(as_array(a), as_array(b)))


def cross(a: ArrayLike, b: ArrayLike) -> np.ndarray:
    """Векторное произведение в плоскости XY - трехмерный вектор (0, 0, z)."""
    ax, ay = as_array(a)
    bx, by = as_array(b)
    return np.array([0.0, 0.0, ax * by - ay * bx])


def angle(a: ArrayLike, b: ArrayLike) -> float:
    """Угол между векторами в градусах."""
    a = as_array(a)
    b = as_array(b)
    mag = np.sqrt(np.dot(a, a) * np.dot(b, b))
    cosine = np.dot(a, b) / mag if mag else 0.0
    return float(np.arccos(np.clip(cosine, -1.0, 1.0)) * RAD2DEG)


def rotate(a: ArrayLike, origin: ArrayLike, deg: float) -> Vec2:
    """Поворот точки вокруг origin на deg градусов."""
    origin = as_array(origin)
    p0, p1 = as_array(a) - origin
    s, c = np.sin(deg * DEG2RAD), np.cos(deg * DEG2RAD)
    return np.array([p0 * c - p1 * s, p0 * s + p1 * c]) + origin


def lerp(a: ArrayLike, b: ArrayLike, t: Union[ArrayLike, float]) -> Vec2:
    a = as_array(a)
    t = np.broadcast_to(as_array(t), 2)
    return a + t * (as_array(b) - a)


def inverse_lerp(a: ArrayLike, b: ArrayLike, value: ArrayLike) -> Vec2:
    a = as_array(a)
    span = as_array(b) - a
    same = span == 0
    with np.errstate(divide='ignore', invalid='ignore'):
        t = (as_array(value) - a) / np.where(same, 1.0, span)
    return np.where(same, 0.5, t)


def hermite(a: ArrayLike, b: ArrayLike, c: ArrayLike, d: ArrayLike, t: float) -> Vec2:
    """Кривая Эрмита: a, d - концы, b, c - касательные."""
    t2 = t * t
    return (as_array(a) * (t2 * (2 * t - 3) + 1) +
            as_array(b) * (t2 * (t - 2) + t) +
            as_array(c) * (t2 * (t - 1)) +
            as_array(d) * (t2 * (3 - 2 * t)))


def bezier(a: ArrayLike, b: ArrayLike, c: ArrayLike, d: ArrayLike, t: float) -> Vec2:
    u = 1 - t
    return (u * u * u * as_array(a) +
            3 * t * u * u * as_array(b) +
            3 * t * t * u * as_array(c) +
            t * t * t * as_array(d))


def transform_mat2(a: ArrayLike, m: ArrayLike) -> Vec2:
    x, y = as_array(a)
    m = as_array(m)
    return np.array([m[0] * x + m[2] * y, m[1] * x + m[3] * y])


def transform_mat2d(a: ArrayLike, m: ArrayLike) -> Vec2:
    x, y = as_array(a)
    m = as_array(m)
    return np.array([m[0] * x + m[2] * y + m[4], m[1] * x + m[3] * y + m[5]])


def transform_mat3(a: ArrayLike, m: ArrayLike) -> Vec2:
    """Третья компонента неявно равна 1."""
    x, y = as_array(a)
    m = as_array(m)
    return np.array([m[0] * x + m[3] * y + m[6], m[1] * x + m[4] * y + m[7]])


approx_equals = equality.approx_equals
exact_equals = equality.exact_equals


def to_string(v: ArrayLike, fraction_digits: Optional[int] = None) -> str:
    return vec_to_string(v, fraction_digits)


sub = subtract
mul = multiply
div = divide
dist = distance
sqr_len = squared_length
mix = lerp
approx = approx_equals
equals = approx_equals
eq = exact_equals
