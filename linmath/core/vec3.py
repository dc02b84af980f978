"""
Трехмерные векторы: арифметика, интерполяция и преобразования
"""

from functools import reduce
from typing import Optional, Union

import numpy as np

from linmath.core import equality
from linmath.core.common import DEG2RAD, RAD2DEG, ArrayLike, as_array, frozen
from linmath.utils.formatting import vec_to_string

Vec3 = np.ndarray

zero = frozen([0, 0, 0])
one = frozen([1, 1, 1])
unit_x = frozen([1, 0, 0])
unit_y = frozen([0, 1, 0])
unit_z = frozen([0, 0, 1])


def of(x: float, y: Optional[float] = None, z: Optional[float] = None) -> Vec3:
    """
    Создает вектор. of(2) -> (2, 2, 2), of(2, 3) -> (2, 3, 0).
    """
    if y is None and z is None:
        y = z = x
    return np.array([x, 0.0 if y is None else y, 0.0 if z is None else z], dtype=np.float64)


# ========== ПОКОМПОНЕНТНАЯ АРИФМЕТИКА ==========

def add(*vs: ArrayLike) -> Vec3:
    """Сумма векторов слева направо. Без аргументов - нулевой вектор."""
    return reduce(np.add, (as_array(v) for v in vs), np.zeros(3))


def subtract(*vs: ArrayLike) -> Vec3:
    """Вычитание слева направо. Один аргумент - отрицание."""
    if not vs:
        return np.zeros(3)
    if len(vs) == 1:
        return -as_array(vs[0])
    return reduce(np.subtract, (as_array(v) for v in vs[1:]), as_array(vs[0]).copy())


def delta(a: ArrayLike, b: ArrayLike) -> Vec3:
    """b - a"""
    return as_array(b) - as_array(a)


def multiply(*vs: ArrayLike) -> Vec3:
    return reduce(np.multiply, (as_array(v) for v in vs), np.ones(3))


def divide(*vs: ArrayLike) -> Vec3:
    """Деление слева направо. Один аргумент - обратный вектор."""
    if not vs:
        return np.ones(3)
    if len(vs) == 1:
        return inverse(vs[0])
    with np.errstate(divide='ignore', invalid='ignore'):
        return reduce(np.divide, (as_array(v) for v in vs[1:]), as_array(vs[0]).copy())


def min(*vs: ArrayLike) -> Vec3:
    return reduce(np.minimum, (as_array(v) for v in vs))


def max(*vs: ArrayLike) -> Vec3:
    return reduce(np.maximum, (as_array(v) for v in vs))


def clamp(v: ArrayLike,
          min_value: Union[ArrayLike, float],
          max_value: Union[ArrayLike, float]) -> Vec3:
    """Ограничивает компоненты; границы - число или вектор."""
    lo = np.broadcast_to(as_array(min_value), 3)
    hi = np.broadcast_to(as_array(max_value), 3)
    return np.minimum(np.maximum(as_array(v), lo), hi)


def scale(a: ArrayLike, s: float) -> Vec3:
    return as_array(a) * s


def scale_and_add(a: ArrayLike, b: ArrayLike, s: float) -> Vec3:
    """a + b * s"""
    return as_array(a) + as_array(b) * s


def negate(a: ArrayLike) -> Vec3:
    return -as_array(a)


def inverse(a: ArrayLike) -> Vec3:
    with np.errstate(divide='ignore'):
        return 1.0 / as_array(a)


def round(a: ArrayLike) -> Vec3:
    """Симметричное округление компонентов."""
    a = as_array(a)
    return np.sign(a) * np.floor(np.abs(a) + 0.5)


# ========== МЕТРИКА ==========

def length(a: ArrayLike) -> float:
    x, y, z = as_array(a)
    return float(np.hypot(np.hypot(x, y), z))


def squared_length(a: ArrayLike) -> float:
    a = as_array(a)
    return float(np.dot(a, a))


def distance(a: ArrayLike, b: ArrayLike) -> float:
    return length(as_array(b) - as_array(a))


def squared_distance(a: ArrayLike, b: ArrayLike) -> float:
    return squared_length(as_array(b) - as_array(a))


def normalize(a: ArrayLike) -> Vec3:
    """Нормализует вектор. Нулевой вектор остается нулевым."""
    a = as_array(a)
    hyp = np.dot(a, a)
    inv_len = 0.0 if hyp == 0 else 1.0 / np.sqrt(hyp)
    return a * inv_len


def dot(a: ArrayLike, b: ArrayLike) -> float:
    return float(np.dot(as_array(a), as_array(b)))


def cross(a: ArrayLike, b: ArrayLike) -> Vec3:
    ax, ay, az = as_array(a)
    bx, by, bz = as_array(b)
    return np.array([
        ay * bz - az * by,
        az * bx - ax * bz,
        ax * by - ay * bx
    ])


def angle(a: ArrayLike, b: ArrayLike) -> float:
    """
    Угол между двумя векторами в градусах [0, 180].

    Для нулевого вектора возвращает 90 (косинус принимается равным нулю).
    """
    a = as_array(a)
    b = as_array(b)
    mag = np.sqrt(np.dot(a, a) * np.dot(b, b))
    cosine = np.dot(a, b) / mag if mag else 0.0
    return float(np.arccos(np.clip(cosine, -1.0, 1.0)) * RAD2DEG)


# ========== ИНТЕРПОЛЯЦИЯ ==========

def lerp(a: ArrayLike, b: ArrayLike, t: Union[ArrayLike, float]) -> Vec3:
    """
    Линейная интерполяция a + t * (b - a), как mix в GLSL.

    Args:
        a: Начальный вектор
        b: Конечный вектор
        t: Число или покомпонентный вектор, не ограничивается [0, 1]

    Returns:
        np.ndarray: Интерполированный вектор
    """
    a = as_array(a)
    t = np.broadcast_to(as_array(t), 3)
    return a + t * (as_array(b) - a)


def inverse_lerp(a: ArrayLike, b: ArrayLike, value: ArrayLike) -> Vec3:
    """Обратная к lerp. Там, где a == b, возвращает 0.5."""
    a = as_array(a)
    b = as_array(b)
    value = as_array(value)
    span = b - a
    same = span == 0
    with np.errstate(divide='ignore', invalid='ignore'):
        t = (value - a) / np.where(same, 1.0, span)
    return np.where(same, 0.5, t)


def slerp(a: ArrayLike, b: ArrayLike, t: float) -> Vec3:
    """
    Сферическая интерполяция между единичными векторами.

    Для совпадающих (или противоположных) векторов sin(угла) равен нулю,
    и результат содержит NaN: выбор плоскости поворота неоднозначен.
    """
    a = as_array(a)
    b = as_array(b)
    omega = np.arccos(np.clip(np.dot(a, b), -1.0, 1.0))
    sin_total = np.sin(omega)

    with np.errstate(divide='ignore', invalid='ignore'):
        ratio_a = np.sin((1 - t) * omega) / sin_total
        ratio_b = np.sin(t * omega) / sin_total

    return ratio_a * a + ratio_b * b


def hermite(a: ArrayLike, b: ArrayLike, c: ArrayLike, d: ArrayLike, t: float) -> Vec3:
    """
    Кривая Эрмита по двум точкам и двум касательным.

    Args:
        a: Начальная точка
        b: Касательная в начальной точке
        c: Касательная в конечной точке
        d: Конечная точка
        t: Параметр [0, 1]

    Returns:
        np.ndarray: Точка на кривой
    """
    t2 = t * t
    h1 = t2 * (2 * t - 3) + 1
    h2 = t2 * (t - 2) + t
    h3 = t2 * (t - 1)
    h4 = t2 * (3 - 2 * t)

    return as_array(a) * h1 + as_array(b) * h2 + as_array(c) * h3 + as_array(d) * h4


def bezier(a: ArrayLike, b: ArrayLike, c: ArrayLike, d: ArrayLike, t: float) -> Vec3:
    """
    Кривая Безье 3-го порядка.

    Args:
        a, b, c, d: Контрольные точки
        t: Параметр [0, 1]

    Returns:
        np.ndarray: Точка на кривой
    """
    one_minus_t = 1 - t
    one_minus_t2 = one_minus_t * one_minus_t
    t2 = t * t

    return (one_minus_t2 * one_minus_t * as_array(a) +
            3 * t * one_minus_t2 * as_array(b) +
            3 * t2 * one_minus_t * as_array(c) +
            t2 * t * as_array(d))


# ========== ПРЕОБРАЗОВАНИЯ ==========

def transform_mat3(a: ArrayLike, m: ArrayLike) -> Vec3:
    x, y, z = as_array(a)
    m = as_array(m)
    return np.array([
        x * m[0] + y * m[3] + z * m[6],
        x * m[1] + y * m[4] + z * m[7],
        x * m[2] + y * m[5] + z * m[8]
    ])


def transform_mat4(a: ArrayLike, m: ArrayLike) -> Vec3:
    """Преобразует точку матрицей 4x4 (w = 1) с перспективным делением."""
    x, y, z = as_array(a)
    m = as_array(m)
    w = m[3] * x + m[7] * y + m[11] * z + m[15]
    if w == 0:
        w = 1.0

    return np.array([
        (m[0] * x + m[4] * y + m[8] * z + m[12]) / w,
        (m[1] * x + m[5] * y + m[9] * z + m[13]) / w,
        (m[2] * x + m[6] * y + m[10] * z + m[14]) / w
    ])


def transform_quat(a: ArrayLike, q: ArrayLike) -> Vec3:
    """Поворачивает вектор кватернионом: q * v * q^-1."""
    x, y, z = as_array(a)
    qx, qy, qz, qw = as_array(q)

    # q * v
    ix = qw * x + qy * z - qz * y
    iy = qw * y + qz * x - qx * z
    iz = qw * z + qx * y - qy * x
    iw = -qx * x - qy * y - qz * z

    # (q * v) * conj(q)
    return np.array([
        ix * qw + iw * -qx + iy * -qz - iz * -qy,
        iy * qw + iw * -qy + iz * -qx - ix * -qz,
        iz * qw + iw * -qz + ix * -qy - iy * -qx
    ])


def transform(a: ArrayLike, m: ArrayLike) -> Vec3:
    """Выбирает преобразование по длине m: 9 - mat3, 16 - mat4, 4 - кватернион."""
    m = as_array(m)
    if m.size == 9:
        return transform_mat3(a, m)
    if m.size == 16:
        return transform_mat4(a, m)
    if m.size == 4:
        return transform_quat(a, m)
    raise ValueError(f"Unsupported matrix size: {m.size}")


def rotate_x(a: ArrayLike, origin: ArrayLike, deg: float) -> Vec3:
    """Поворот точки вокруг оси X, проходящей через origin."""
    origin = as_array(origin)
    px, py, pz = as_array(a) - origin
    s, c = np.sin(deg * DEG2RAD), np.cos(deg * DEG2RAD)
    return np.array([px, py * c - pz * s, py * s + pz * c]) + origin


def rotate_y(a: ArrayLike, origin: ArrayLike, deg: float) -> Vec3:
    origin = as_array(origin)
    px, py, pz = as_array(a) - origin
    s, c = np.sin(deg * DEG2RAD), np.cos(deg * DEG2RAD)
    return np.array([pz * s + px * c, py, pz * c - px * s]) + origin


def rotate_z(a: ArrayLike, origin: ArrayLike, deg: float) -> Vec3:
    origin = as_array(origin)
    px, py, pz = as_array(a) - origin
    s, c = np.sin(deg * DEG2RAD), np.cos(deg * DEG2RAD)
    return np.array([px * c - py * s, px * s + py * c, pz]) + origin


# ========== СРАВНЕНИЕ ==========

approx_equals = equality.approx_equals
exact_equals = equality.exact_equals


def to_string(v: ArrayLike, fraction_digits: Optional[int] = None) -> str:
    return vec_to_string(v, fraction_digits)


# Сокращения
sub = subtract
mul = multiply
div = divide
sqr_len = squared_length
dist = distance
sqr_dist = squared_distance
neg = negate
mix = lerp
invlerp = inverse_lerp
approx = approx_equals
equals = approx_equals
eq = exact_equals
