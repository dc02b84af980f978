"""
Матрицы 3x3 (9 чисел по столбцам): повороты и двумерные однородные преобразования
"""

import logging
from functools import reduce
from typing import Optional

import numpy as np

from linmath.core import equality, mat4
from linmath.core.common import DEG2RAD, ArrayLike, as_array, frozen
from linmath.utils.formatting import mat_to_string

logger = logging.getLogger(__name__)

Mat3 = np.ndarray

identity = frozen([1, 0, 0,
                   0, 1, 0,
                   0, 0, 1])
zero = frozen([0] * 9)


def of(*values: float) -> Mat3:
    """Матрица из 9 чисел по столбцам."""
    m = as_array(values)
    if m.size != 9:
        raise ValueError(f"mat3 expects 9 values, got {m.size}")
    return m.copy()


def from_mat4(a: ArrayLike) -> Mat3:
    """Верхний левый блок 3x3."""
    return as_array(a).reshape(4, 4)[:3, :3].ravel()


def from_mat2d(a: ArrayLike) -> Mat3:
    a0, a1, a2, a3, a4, a5 = as_array(a)
    return np.array([a0, a1, 0.0,
                     a2, a3, 0.0,
                     a4, a5, 1.0])


def from_quat(q: ArrayLike) -> Mat3:
    """
    Матрица поворота из кватерниона.

    Кватернион не проверяется на единичную длину: для неединичного
    результат не является матрицей поворота.

    Args:
        q: Кватернион [x, y, z, w]

    Returns:
        np.ndarray: Матрица 3x3 по столбцам
    """
    x, y, z, w = as_array(q)
    x2, y2, z2 = x + x, y + y, z + z

    xx = x * x2
    yx = y * x2
    yy = y * y2
    zx = z * x2
    zy = z * y2
    zz = z * z2
    wx = w * x2
    wy = w * y2
    wz = w * z2

    return np.array([
        1 - yy - zz, yx + wz, zx - wy,
        yx - wz, 1 - xx - zz, zy + wx,
        zx + wy, zy - wx, 1 - xx - yy,
    ])


# ========== БАЗОВЫЕ ОПЕРАЦИИ ==========

def transpose(a: ArrayLike) -> Mat3:
    return as_array(a).reshape(3, 3).T.ravel()


def _cofactors(a: np.ndarray):
    a00, a01, a02, a10, a11, a12, a20, a21, a22 = a
    b01 = a22 * a11 - a12 * a21
    b11 = -a22 * a10 + a12 * a20
    b21 = a21 * a10 - a11 * a20

    adj = np.array([
        b01, -a22 * a01 + a02 * a21, a12 * a01 - a02 * a11,
        b11, a22 * a00 - a02 * a20, -a12 * a00 + a02 * a10,
        b21, -a21 * a00 + a01 * a20, a11 * a00 - a01 * a10,
    ])
    det = a00 * b01 + a01 * b11 + a02 * b21
    return adj, det


def invert(a: ArrayLike) -> Optional[Mat3]:
    """Обратная матрица или None, если определитель равен нулю."""
    adj, det = _cofactors(as_array(a))
    if det == 0:
        logger.debug("mat3 is singular, inverse is undefined")
        return None
    return adj / det


def adjoint(a: ArrayLike) -> Mat3:
    return _cofactors(as_array(a))[0]


def determinant(a: ArrayLike) -> float:
    return float(_cofactors(as_array(a))[1])


def multiply(*ms: ArrayLike) -> Mat3:
    """Произведение слева направо. Без аргументов - единичная матрица."""
    return reduce(lambda a, b: (b.reshape(3, 3) @ a.reshape(3, 3)).ravel(),
                  (as_array(m) for m in ms), identity.copy())


# ========== ДВУМЕРНЫЕ ПРЕОБРАЗОВАНИЯ ==========

def translate(a: ArrayLike, v: ArrayLike) -> Mat3:
    a = as_array(a)
    x, y = as_array(v)[:2]
    out = a.copy()
    out[6:9] = x * a[0:3] + y * a[3:6] + a[6:9]
    return out


def rotate(a: ArrayLike, deg: float) -> Mat3:
    """Поворот в плоскости на deg градусов."""
    a = as_array(a)
    s, c = np.sin(deg * DEG2RAD), np.cos(deg * DEG2RAD)
    out = a.copy()
    out[0:3] = c * a[0:3] + s * a[3:6]
    out[3:6] = c * a[3:6] - s * a[0:3]
    return out


def scale(a: ArrayLike, v: ArrayLike) -> Mat3:
    a = as_array(a)
    x, y = as_array(v)[:2]
    out = a.copy()
    out[0:3] *= x
    out[3:6] *= y
    return out


def from_translation(v: ArrayLike) -> Mat3:
    x, y = as_array(v)[:2]
    return np.array([1.0, 0.0, 0.0,
                     0.0, 1.0, 0.0,
                     x, y, 1.0])


def from_rotation(deg: float) -> Mat3:
    s, c = np.sin(deg * DEG2RAD), np.cos(deg * DEG2RAD)
    return np.array([c, s, 0.0,
                     -s, c, 0.0,
                     0.0, 0.0, 1.0])


def from_scaling(v: ArrayLike) -> Mat3:
    x, y = as_array(v)[:2]
    return np.array([x, 0.0, 0.0,
                     0.0, y, 0.0,
                     0.0, 0.0, 1.0])


def normal_from_mat4(a: ArrayLike) -> Optional[Mat3]:
    """
    Матрица нормалей: транспонированная обратная к блоку 3x3.

    Возвращает None для вырожденной матрицы 4x4.
    """
    inv = mat4.invert(a)
    if inv is None:
        return None
    return from_mat4(mat4.transpose(inv))


def projection(width: float, height: float) -> Mat3:
    """Двумерная проекция: начало координат в левом верхнем углу."""
    return np.array([2.0 / width, 0.0, 0.0,
                     0.0, -2.0 / height, 0.0,
                     -1.0, 1.0, 1.0])


# ========== ПОЭЛЕМЕНТНЫЕ ОПЕРАЦИИ ==========

def frob(a: ArrayLike) -> float:
    """Норма Фробениуса."""
    return float(np.linalg.norm(as_array(a)))


def add(a: ArrayLike, b: ArrayLike) -> Mat3:
    return as_array(a) + as_array(b)


def subtract(a: ArrayLike, b: ArrayLike) -> Mat3:
    return as_array(a) - as_array(b)


def multiply_scalar(a: ArrayLike, s: float) -> Mat3:
    return as_array(a) * s


def multiply_scalar_and_add(a: ArrayLike, b: ArrayLike, s: float) -> Mat3:
    return as_array(a) + as_array(b) * s


approx_equals = equality.approx_equals
exact_equals = equality.exact_equals


def to_string(m: ArrayLike, fraction_digits: Optional[int] = None) -> str:
    return mat_to_string(m, 3, 3, fraction_digits)


# Сокращения
mul = multiply
sub = subtract
det = determinant
inv = invert
approx = approx_equals
equals = approx_equals
eq = exact_equals
