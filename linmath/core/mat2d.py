"""
Аффинные матрицы 2x3 [a, b, c, d, tx, ty]

Третья строка [0, 0, 1] подразумевается и не хранится.
"""

import logging
from functools import reduce
from typing import Optional

import numpy as np

from linmath.core import equality
from linmath.core.common import DEG2RAD, ArrayLike, as_array, frozen
from linmath.utils.formatting import mat_to_string

logger = logging.getLogger(__name__)

Mat2d = np.ndarray

identity = frozen([1, 0, 0, 1, 0, 0])
zero = frozen([0, 0, 0, 0, 0, 0])


def of(a: float, b: float, c: float, d: float, tx: float, ty: float) -> Mat2d:
    return np.array([a, b, c, d, tx, ty], dtype=np.float64)


def determinant(m: ArrayLike) -> float:
    a, b, c, d = as_array(m)[:4]
    return float(a * d - b * c)


def invert(m: ArrayLike) -> Optional[Mat2d]:
    """Обратное аффинное преобразование или None для вырожденного."""
    aa, ab, ac, ad, atx, aty = as_array(m)
    det = aa * ad - ab * ac
    if det == 0:
        logger.debug("mat2d is singular, inverse is undefined")
        return None

    return np.array([
        ad, -ab,
        -ac, aa,
        ac * aty - ad * atx,
        ab * atx - aa * aty,
    ]) / det


def _mul2(a: np.ndarray, b: np.ndarray) -> Mat2d:
    a0, a1, a2, a3, a4, a5 = a
    b0, b1, b2, b3, b4, b5 = b
    return np.array([
        a0 * b0 + a2 * b1, a1 * b0 + a3 * b1,
        a0 * b2 + a2 * b3, a1 * b2 + a3 * b3,
        a0 * b4 + a2 * b5 + a4,
        a1 * b4 + a3 * b5 + a5,
    ])


def multiply(*ms: ArrayLike) -> Mat2d:
    return reduce(_mul2, (as_array(m) for m in ms), identity.copy())


def rotate(m: ArrayLike, deg: float) -> Mat2d:
    return _mul2(as_array(m), from_rotation(deg))


def scale(m: ArrayLike, v: ArrayLike) -> Mat2d:
    return _mul2(as_array(m), from_scaling(v))


def translate(m: ArrayLike, v: ArrayLike) -> Mat2d:
    return _mul2(as_array(m), from_translation(v))


def from_rotation(deg: float) -> Mat2d:
    s, c = np.sin(deg * DEG2RAD), np.cos(deg * DEG2RAD)
    return np.array([c, s, -s, c, 0.0, 0.0])


def from_scaling(v: ArrayLike) -> Mat2d:
    x, y = as_array(v)
    return np.array([x, 0.0, 0.0, y, 0.0, 0.0])


def from_translation(v: ArrayLike) -> Mat2d:
    x, y = as_array(v)
    return np.array([1.0, 0.0, 0.0, 1.0, x, y])


def frob(m: ArrayLike) -> float:
    """Норма Фробениуса с учетом неявной единицы."""
    m = as_array(m)
    return float(np.sqrt(np.dot(m, m) + 1))


approx_equals = equality.approx_equals
exact_equals = equality.exact_equals


def to_string(m: ArrayLike, fraction_digits: Optional[int] = None) -> str:
    return mat_to_string(m, 2, 3, fraction_digits)


mul = multiply
det = determinant
inv = invert
equals = approx_equals
eq = exact_equals
