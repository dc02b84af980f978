"""
Четырехмерные векторы. Кватернионы используют те же операции (см. quat.py)
"""

from functools import reduce
from typing import Optional, Union

import numpy as np

from linmath.core import equality
from linmath.core.common import ArrayLike, as_array, frozen
from linmath.utils.formatting import vec_to_string

Vec4 = np.ndarray

zero = frozen([0, 0, 0, 0])
one = frozen([1, 1, 1, 1])
unit_x = frozen([1, 0, 0, 0])
unit_y = frozen([0, 1, 0, 0])
unit_z = frozen([0, 0, 1, 0])
unit_w = frozen([0, 0, 0, 1])


def of(x: float, y: Optional[float] = None, z: Optional[float] = None,
       w: Optional[float] = None) -> Vec4:
    """of(1) -> (1, 1, 1, 1), пропущенные компоненты иначе равны 0."""
    if y is None and z is None and w is None:
        return np.full(4, x, dtype=np.float64)
    return np.array([x] + [0.0 if c is None else c for c in (y, z, w)], dtype=np.float64)


def add(*vs: ArrayLike) -> Vec4:
    return reduce(np.add, (as_array(v) for v in vs), np.zeros(4))


def subtract(*vs: ArrayLike) -> Vec4:
    if not vs:
        return np.zeros(4)
    if len(vs) == 1:
        return -as_array(vs[0])
    return reduce(np.subtract, (as_array(v) for v in vs[1:]), as_array(vs[0]).copy())


def delta(a: ArrayLike, b: ArrayLike) -> Vec4:
    return as_array(b) - as_array(a)


def multiply(*vs: ArrayLike) -> Vec4:
    return reduce(np.multiply, (as_array(v) for v in vs), np.ones(4))


def divide(*vs: ArrayLike) -> Vec4:
    if not vs:
        return np.ones(4)
    if len(vs) == 1:
        vs = (one,) + vs
    with np.errstate(divide='ignore', invalid='ignore'):
        return reduce(np.divide, (as_array(v) for v in vs[1:]), as_array(vs[0]).copy())


def min(*vs: ArrayLike) -> Vec4:
    return reduce(np.minimum, (as_array(v) for v in vs))


def max(*vs: ArrayLike) -> Vec4:
    return reduce(np.maximum, (as_array(v) for v in vs))


def clamp(v: ArrayLike,
          min_value: Union[ArrayLike, float],
          max_value: Union[ArrayLike, float]) -> Vec4:
    lo = np.broadcast_to(as_array(min_value), 4)
    hi = np.broadcast_to(as_array(max_value), 4)
    return np.minimum(np.maximum(as_array(v), lo), hi)


def scale(a: ArrayLike, s: float) -> Vec4:
    return as_array(a) * s


def scale_and_add(a: ArrayLike, b: ArrayLike, s: float) -> Vec4:
    return as_array(a) + as_array(b) * s


def negate(a: ArrayLike) -> Vec4:
    return -as_array(a)


def inverse(a: ArrayLike) -> Vec4:
    with np.errstate(divide='ignore'):
        return 1.0 / as_array(a)


def length(a: ArrayLike) -> float:
    a = as_array(a)
    return float(np.sqrt(np.dot(a, a)))


def squared_length(a: ArrayLike) -> float:
    a = as_array(a)
    return float(np.dot(a, a))


def distance(a: ArrayLike, b: ArrayLike) -> float:
    return length(as_array(b) - as_array(a))


def squared_distance(a: ArrayLike, b: ArrayLike) -> float:
    return squared_length(as_array(b) - as_array(a))


def normalize(a: ArrayLike) -> Vec4:
    """Нормализует вектор. Нулевой вектор остается нулевым."""
    a = as_array(a)
    hyp = np.dot(a, a)
    return a * (0.0 if hyp == 0 else 1.0 / np.sqrt(hyp))


def dot(a: ArrayLike, b: ArrayLike) -> float:
    return float(np.dot(as_array(a), as_array(b)))


def cross(u: ArrayLike, v: ArrayLike, w: ArrayLike) -> Vec4:
    """Векторное произведение трех векторов в четырехмерном пространстве."""
    v = as_array(v)
    w = as_array(w)
    a = v[0] * w[1] - v[1] * w[0]
    b = v[0] * w[2] - v[2] * w[0]
    c = v[0] * w[3] - v[3] * w[0]
    d = v[1] * w[2] - v[2] * w[1]
    e = v[1] * w[3] - v[3] * w[1]
    f = v[2] * w[3] - v[3] * w[2]
    g, h, i, j = as_array(u)

    return np.array([
        h * f - i * e + j * d,
        -(g * f) + i * c - j * b,
        g * e - h * c + j * a,
        -(g * d) + h * b - i * a
    ])


def lerp(a: ArrayLike, b: ArrayLike, t: Union[ArrayLike, float]) -> Vec4:
    """Покомпонентная линейная интерполяция; t - число или вектор."""
    a = as_array(a)
    t = np.broadcast_to(as_array(t), 4)
    return a + t * (as_array(b) - a)


def inverse_lerp(a: ArrayLike, b: ArrayLike, value: ArrayLike) -> Vec4:
    """Обратная к lerp; 0.5 в компонентах, где a == b."""
    a = as_array(a)
    span = as_array(b) - a
    same = span == 0
    with np.errstate(divide='ignore', invalid='ignore'):
        t = (as_array(value) - a) / np.where(same, 1.0, span)
    return np.where(same, 0.5, t)


def transform_mat4(a: ArrayLike, m: ArrayLike) -> Vec4:
    """m * a для матрицы, хранящейся по столбцам."""
    return as_array(m).reshape(4, 4).T @ as_array(a)


def transform_quat(a: ArrayLike, q: ArrayLike) -> Vec4:
    """Поворачивает xyz кватернионом, w сохраняется."""
    a = as_array(a)
    x, y, z = a[:3]
    qx, qy, qz, qw = as_array(q)

    ix = qw * x + qy * z - qz * y
    iy = qw * y + qz * x - qx * z
    iz = qw * z + qx * y - qy * x
    iw = -qx * x - qy * y - qz * z

    return np.array([
        ix * qw + iw * -qx + iy * -qz - iz * -qy,
        iy * qw + iw * -qy + iz * -qx - ix * -qz,
        iz * qw + iw * -qz + ix * -qy - iy * -qx,
        a[3]
    ])


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
