"""
Матрицы 2x2 (4 числа по столбцам)
"""

import logging
from functools import reduce
from typing import Optional, Union

import numpy as np

from linmath.core import equality
from linmath.core.common import DEG2RAD, ArrayLike, as_array, frozen
from linmath.utils.formatting import mat_to_string

logger = logging.getLogger(__name__)

Mat2 = np.ndarray

identity = frozen([1, 0, 0, 1])
zero = frozen([0, 0, 0, 0])


def of(m00: float, m01: float, m10: float, m11: float) -> Mat2:
    return np.array([m00, m01, m10, m11], dtype=np.float64)


def transpose(a: ArrayLike) -> Mat2:
    a0, a1, a2, a3 = as_array(a)
    return np.array([a0, a2, a1, a3])


def determinant(a: ArrayLike) -> float:
    a0, a1, a2, a3 = as_array(a)
    return float(a0 * a3 - a2 * a1)


def adjoint(a: ArrayLike) -> Mat2:
    a0, a1, a2, a3 = as_array(a)
    return np.array([a3, -a1, -a2, a0])


def invert(a: ArrayLike) -> Optional[Mat2]:
    """Обратная матрица или None для вырожденной."""
    d = determinant(a)
    if d == 0:
        logger.debug("mat2 is singular, inverse is undefined")
        return None
    return adjoint(a) / d


def multiply(*ms: ArrayLike) -> Mat2:
    """Произведение слева направо. Без аргументов - единичная матрица."""
    return reduce(lambda a, b: (b.reshape(2, 2) @ a.reshape(2, 2)).ravel(),
                  (as_array(m) for m in ms), identity.copy())


def rotate(a: ArrayLike, deg: float) -> Mat2:
    return multiply(a, from_rotation(deg))


def scale(a: ArrayLike, v: Union[ArrayLike, float]) -> Mat2:
    """Масштаб числом или вектором (sx, sy)."""
    sx, sy = np.broadcast_to(as_array(v), 2)
    a0, a1, a2, a3 = as_array(a)
    return np.array([a0 * sx, a1 * sx, a2 * sy, a3 * sy])


def from_rotation(deg: float) -> Mat2:
    s, c = np.sin(deg * DEG2RAD), np.cos(deg * DEG2RAD)
    return np.array([c, s, -s, c])


def from_scaling(v: ArrayLike) -> Mat2:
    x, y = as_array(v)
    return np.array([x, 0.0, 0.0, y])


def frob(a: ArrayLike) -> float:
    return float(np.linalg.norm(as_array(a)))


approx_equals = equality.approx_equals
exact_equals = equality.exact_equals


def to_string(m: ArrayLike, fraction_digits: Optional[int] = None) -> str:
    return mat_to_string(m, 2, 2, fraction_digits)


mul = multiply
det = determinant
inv = invert
rotation = from_rotation
scaling = from_scaling
equals = approx_equals
eq = exact_equals
