"""
Матрицы 4x4 (16 чисел по столбцам): аффинные преобразования, декомпозиция, проекции
"""

import logging
from dataclasses import dataclass, field
from functools import reduce
from typing import Dict, List, Optional

import numpy as np

from linmath.core import equality, quat, vec3
from linmath.core.common import EPSILON, DEG2RAD, ArrayLike, as_array, frozen
from linmath.utils.formatting import mat_to_string

logger = logging.getLogger(__name__)

Mat4 = np.ndarray

identity = frozen([1, 0, 0, 0,
                   0, 1, 0, 0,
                   0, 0, 1, 0,
                   0, 0, 0, 1])
zero = frozen([0] * 16)


@dataclass(frozen=True, eq=False)
class DecomposedTransform:
    """Трансформация, разложенная на перемещение, поворот и масштаб"""
    translation: np.ndarray = field(default_factory=lambda: np.zeros(3))
    rotation: np.ndarray = field(default_factory=lambda: quat.identity.copy())
    scale: np.ndarray = field(default_factory=lambda: np.ones(3))

    def to_matrix(self) -> Mat4:
        """Собирает матрицу T * R * S."""
        return from_rotation_translation_scale(self.rotation, self.translation, self.scale)

    def to_dict(self) -> Dict[str, List[float]]:
        return {
            "translation": self.translation.tolist(),
            "rotation": self.rotation.tolist(),
            "scale": self.scale.tolist(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, List[float]]) -> 'DecomposedTransform':
        return cls(
            translation=as_array(data.get("translation", vec3.zero)),
            rotation=as_array(data.get("rotation", quat.identity)),
            scale=as_array(data.get("scale", vec3.one)),
        )


def of(*values: float) -> Mat4:
    """Матрица из 16 чисел по столбцам."""
    m = as_array(values)
    if m.size != 16:
        raise ValueError(f"mat4 expects 16 values, got {m.size}")
    return m.copy()


# ========== БАЗОВЫЕ ОПЕРАЦИИ ==========

def transpose(a: ArrayLike) -> Mat4:
    return as_array(a).reshape(4, 4).T.ravel()


def _cofactors(a: np.ndarray):
    """Присоединенная матрица и определитель через миноры 2x2."""
    (a00, a01, a02, a03,
     a10, a11, a12, a13,
     a20, a21, a22, a23,
     a30, a31, a32, a33) = a

    b00 = a00 * a11 - a01 * a10
    b01 = a00 * a12 - a02 * a10
    b02 = a00 * a13 - a03 * a10
    b03 = a01 * a12 - a02 * a11
    b04 = a01 * a13 - a03 * a11
    b05 = a02 * a13 - a03 * a12
    b06 = a20 * a31 - a21 * a30
    b07 = a20 * a32 - a22 * a30
    b08 = a20 * a33 - a23 * a30
    b09 = a21 * a32 - a22 * a31
    b10 = a21 * a33 - a23 * a31
    b11 = a22 * a33 - a23 * a32

    adj = np.array([
        a11 * b11 - a12 * b10 + a13 * b09,
        a02 * b10 - a01 * b11 - a03 * b09,
        a31 * b05 - a32 * b04 + a33 * b03,
        a22 * b04 - a21 * b05 - a23 * b03,
        a12 * b08 - a10 * b11 - a13 * b07,
        a00 * b11 - a02 * b08 + a03 * b07,
        a32 * b02 - a30 * b05 - a33 * b01,
        a20 * b05 - a22 * b02 + a23 * b01,
        a10 * b10 - a11 * b08 + a13 * b06,
        a01 * b08 - a00 * b10 - a03 * b06,
        a30 * b04 - a31 * b02 + a33 * b00,
        a21 * b02 - a20 * b04 - a23 * b00,
        a11 * b07 - a10 * b09 - a12 * b06,
        a00 * b09 - a01 * b07 + a02 * b06,
        a31 * b01 - a30 * b03 - a32 * b00,
        a20 * b03 - a21 * b01 + a22 * b00,
    ])
    det = b00 * b11 - b01 * b10 + b02 * b09 + b03 * b08 - b04 * b07 + b05 * b06
    return adj, det


def invert(a: ArrayLike) -> Optional[Mat4]:
    """
    Обратная матрица.

    Returns:
        Optional[np.ndarray]: Обратная матрица или None, если определитель равен нулю
    """
    adj, det = _cofactors(as_array(a))
    if det == 0:
        logger.debug("mat4 is singular, inverse is undefined")
        return None
    return adj / det


def adjoint(a: ArrayLike) -> Mat4:
    return _cofactors(as_array(a))[0]


def determinant(a: ArrayLike) -> float:
    return float(_cofactors(as_array(a))[1])


def _mul2(a: np.ndarray, b: np.ndarray) -> Mat4:
    return (b.reshape(4, 4) @ a.reshape(4, 4)).ravel()


def multiply(*ms: ArrayLike) -> Mat4:
    """Произведение слева направо: multiply(a, b, c) = a * b * c."""
    return reduce(_mul2, (as_array(m) for m in ms), identity.copy())


# ========== ГЕНЕРАТОРЫ ==========

def from_translation(v: ArrayLike) -> Mat4:
    out = identity.copy()
    out[12:15] = as_array(v)[:3]
    return out


def from_scaling(v: ArrayLike) -> Mat4:
    x, y, z = as_array(v)[:3]
    return np.diag([x, y, z, 1.0]).ravel()


def from_rotation(deg: float, axis: ArrayLike) -> Optional[Mat4]:
    """
    Поворот на deg градусов вокруг произвольной оси.

    Ось нормализуется; для оси короче EPSILON возвращает None.
    """
    x, y, z = as_array(axis)
    length = np.hypot(np.hypot(x, y), z)
    if length < EPSILON:
        logger.debug("Rotation axis is too short, matrix is undefined")
        return None

    x, y, z = x / length, y / length, z / length
    s, c = np.sin(deg * DEG2RAD), np.cos(deg * DEG2RAD)
    t = 1 - c

    return np.array([
        x * x * t + c, y * x * t + z * s, z * x * t - y * s, 0.0,
        x * y * t - z * s, y * y * t + c, z * y * t + x * s, 0.0,
        x * z * t + y * s, y * z * t - x * s, z * z * t + c, 0.0,
        0.0, 0.0, 0.0, 1.0,
    ])


def from_x_rotation(deg: float) -> Mat4:
    s, c = np.sin(deg * DEG2RAD), np.cos(deg * DEG2RAD)
    return np.array([1.0, 0.0, 0.0, 0.0,
                     0.0, c, s, 0.0,
                     0.0, -s, c, 0.0,
                     0.0, 0.0, 0.0, 1.0])


def from_y_rotation(deg: float) -> Mat4:
    s, c = np.sin(deg * DEG2RAD), np.cos(deg * DEG2RAD)
    return np.array([c, 0.0, -s, 0.0,
                     0.0, 1.0, 0.0, 0.0,
                     s, 0.0, c, 0.0,
                     0.0, 0.0, 0.0, 1.0])


def from_z_rotation(deg: float) -> Mat4:
    s, c = np.sin(deg * DEG2RAD), np.cos(deg * DEG2RAD)
    return np.array([c, s, 0.0, 0.0,
                     -s, c, 0.0, 0.0,
                     0.0, 0.0, 1.0, 0.0,
                     0.0, 0.0, 0.0, 1.0])


def from_axes_translation(x_axis: Optional[ArrayLike],
                          y_axis: Optional[ArrayLike],
                          z_axis: Optional[ArrayLike] = None,
                          translation: ArrayLike = vec3.zero) -> Mat4:
    """
    Матрица из осей базиса и перемещения.

    Одна из осей может быть None, тогда она восстанавливается
    векторным произведением двух других.

    Raises:
        ValueError: Задано меньше двух осей
    """
    if x_axis is None and y_axis is not None and z_axis is not None:
        x_axis = vec3.cross(y_axis, z_axis)
    elif y_axis is None and x_axis is not None and z_axis is not None:
        y_axis = vec3.cross(z_axis, x_axis)
    elif z_axis is None and x_axis is not None and y_axis is not None:
        z_axis = vec3.cross(x_axis, y_axis)
    elif x_axis is None or y_axis is None or z_axis is None:
        raise ValueError("from_axes_translation: at least two axes are required")

    return np.concatenate([
        as_array(x_axis), [0.0],
        as_array(y_axis), [0.0],
        as_array(z_axis), [0.0],
        as_array(translation), [1.0],
    ])


def from_quat(q: ArrayLike) -> Mat4:
    """Матрица поворота 4x4 из кватерниона (без проверки длины)."""
    return from_rotation_translation_scale(q, vec3.zero)


def from_rotation_translation(q: ArrayLike, v: ArrayLike) -> Mat4:
    return from_rotation_translation_scale(q, v)


def from_rotation_translation_scale(rotation: ArrayLike,
                                    translation: ArrayLike,
                                    scale: ArrayLike = vec3.one,
                                    origin: Optional[ArrayLike] = None) -> Mat4:
    """
    Собирает матрицу T * R * S из компонентов.

    Args:
        rotation: Кватернион поворота (не нормализуется)
        translation: Перемещение
        scale: Масштаб по осям
        origin: Центр поворота и масштабирования, по умолчанию начало координат

    Returns:
        np.ndarray: Матрица 4x4 по столбцам
    """
    x, y, z, w = as_array(rotation)
    x2, y2, z2 = x + x, y + y, z + z

    xx = x * x2
    xy = x * y2
    xz = x * z2
    yy = y * y2
    yz = y * z2
    zz = z * z2
    wx = w * x2
    wy = w * y2
    wz = w * z2

    # Столбцы базиса, каждый умножен на свой масштаб
    basis = np.array([
        [1 - (yy + zz), xy + wz, xz - wy],
        [xy - wz, 1 - (xx + zz), yz + wx],
        [xz + wy, yz - wx, 1 - (xx + yy)],
    ]) * as_array(scale)[:, None]

    t = as_array(translation).copy()
    if origin is not None:
        o = as_array(origin)
        t = t + o - o @ basis

    out = np.zeros(16)
    out[0:3] = basis[0]
    out[4:7] = basis[1]
    out[8:11] = basis[2]
    out[12:15] = t
    out[15] = 1.0
    return out


def from_rotation_translation_scale_origin(rotation: ArrayLike,
                                           translation: ArrayLike,
                                           scale: ArrayLike = vec3.one,
                                           origin: ArrayLike = vec3.zero) -> Mat4:
    return from_rotation_translation_scale(rotation, translation, scale, origin)


# ========== ДЕКОМПОЗИЦИЯ ==========

def get_translation(m: ArrayLike) -> np.ndarray:
    return as_array(m)[12:15].copy()


def get_scaling(m: ArrayLike) -> np.ndarray:
    """Длины столбцов базиса."""
    basis = as_array(m).reshape(4, 4)[:3, :3]
    return np.array([np.hypot(np.hypot(c[0], c[1]), c[2]) for c in basis])


def get_rotation(m: ArrayLike) -> np.ndarray:
    return quat.from_mat4(m)


def decompose(m: ArrayLike) -> DecomposedTransform:
    """
    Раскладывает матрицу T * R * S на перемещение, поворот и масштаб.

    Матрица должна быть без сдвига (shear), иначе масштаб и поворот
    получатся приближенными. Нулевой масштаб не проверяется: поворот
    будет содержать inf/nan.

    Args:
        m: Матрица 4x4 по столбцам

    Returns:
        DecomposedTransform: Компоненты трансформации, поворот не нормализуется
    """
    m = as_array(m)
    return DecomposedTransform(
        translation=get_translation(m),
        rotation=get_rotation(m),
        scale=get_scaling(m),
    )


# ========== ПРИМЕНЕНИЕ К МАТРИЦЕ ==========

def translate(a: ArrayLike, v: ArrayLike) -> Mat4:
    return _mul2(as_array(a), from_translation(v))


def scale(a: ArrayLike, v: ArrayLike) -> Mat4:
    return _mul2(as_array(a), from_scaling(v))


def rotate(a: ArrayLike, deg: float, axis: ArrayLike) -> Optional[Mat4]:
    """a * R; None, если ось вырождена."""
    r = from_rotation(deg, axis)
    if r is None:
        return None
    return _mul2(as_array(a), r)


def rotate_x(a: ArrayLike, deg: float) -> Mat4:
    return _mul2(as_array(a), from_x_rotation(deg))


def rotate_y(a: ArrayLike, deg: float) -> Mat4:
    return _mul2(as_array(a), from_y_rotation(deg))


def rotate_z(a: ArrayLike, deg: float) -> Mat4:
    return _mul2(as_array(a), from_z_rotation(deg))


# ========== ПРОЕКЦИИ И КАМЕРА ==========

def frustum(left: float, right: float, bottom: float, top: float,
            near: float, far: float) -> Mat4:
    rl = 1 / (right - left)
    tb = 1 / (top - bottom)
    nf = 1 / (near - far)
    return np.array([
        near * 2 * rl, 0.0, 0.0, 0.0,
        0.0, near * 2 * tb, 0.0, 0.0,
        (right + left) * rl, (top + bottom) * tb, (far + near) * nf, -1.0,
        0.0, 0.0, far * near * 2 * nf, 0.0,
    ])


def perspective(fovy: float, aspect: float, near: float,
                far: Optional[float] = None) -> Mat4:
    """
    Перспективная проекция с диапазоном глубины [-1, 1].

    Args:
        fovy: Вертикальный угол обзора в градусах
        aspect: Соотношение сторон (ширина / высота)
        near: Ближняя плоскость
        far: Дальняя плоскость; None или inf - бесконечная проекция
    """
    f = 1 / np.tan(fovy * DEG2RAD / 2)

    if far is not None and far != np.inf:
        nf = 1 / (near - far)
        out10 = (far + near) * nf
        out14 = 2 * far * near * nf
    else:
        out10 = -1.0
        out14 = -2 * near

    return np.array([
        f / aspect, 0.0, 0.0, 0.0,
        0.0, f, 0.0, 0.0,
        0.0, 0.0, out10, -1.0,
        0.0, 0.0, out14, 0.0,
    ])


def ortho(left: float, right: float, bottom: float, top: float,
          near: float, far: float) -> Mat4:
    lr = 1 / (left - right)
    bt = 1 / (bottom - top)
    nf = 1 / (near - far)
    return np.array([
        -2 * lr, 0.0, 0.0, 0.0,
        0.0, -2 * bt, 0.0, 0.0,
        0.0, 0.0, 2 * nf, 0.0,
        (left + right) * lr, (top + bottom) * bt, (far + near) * nf, 1.0,
    ])


def look_at(eye: ArrayLike, center: ArrayLike, up: ArrayLike) -> Mat4:
    """
    Матрица вида: камера в eye смотрит на center.

    Если eye и center совпадают, возвращает единичную матрицу.
    """
    eye = as_array(eye)
    center = as_array(center)
    if np.all(np.abs(eye - center) < EPSILON):
        return identity.copy()

    z_axis = vec3.normalize(eye - center)
    x_axis = vec3.normalize(vec3.cross(up, z_axis))
    y_axis = vec3.normalize(vec3.cross(z_axis, x_axis))

    out = np.zeros(16)
    rows = np.array([x_axis, y_axis, z_axis])
    out.reshape(4, 4)[:3, :3] = rows.T
    out[12:15] = -(rows @ eye)
    out[15] = 1.0
    return out


def target_to(eye: ArrayLike, target: ArrayLike, up: ArrayLike) -> Mat4:
    """Матрица модели, ориентирующая объект в eye на target."""
    eye = as_array(eye)
    z_axis = vec3.normalize(eye - as_array(target))
    x_axis = vec3.normalize(vec3.cross(up, z_axis))
    y_axis = vec3.cross(z_axis, x_axis)
    return from_axes_translation(x_axis, y_axis, z_axis, eye)


# ========== ПОЭЛЕМЕНТНЫЕ ОПЕРАЦИИ ==========

def frob(a: ArrayLike) -> float:
    return float(np.linalg.norm(as_array(a)))


def add(*ms: ArrayLike) -> Mat4:
    return reduce(np.add, (as_array(m) for m in ms), np.zeros(16))


def subtract(*ms: ArrayLike) -> Mat4:
    """Вычитание слева направо. Один аргумент - отрицание."""
    if not ms:
        return np.zeros(16)
    if len(ms) == 1:
        return -as_array(ms[0])
    return reduce(np.subtract, (as_array(m) for m in ms[1:]), as_array(ms[0]).copy())


def delta(a: ArrayLike, b: ArrayLike) -> Mat4:
    return as_array(b) - as_array(a)


def multiply_scalar(a: ArrayLike, s: float) -> Mat4:
    return as_array(a) * s


def multiply_scalar_and_add(a: ArrayLike, b: ArrayLike, s: float) -> Mat4:
    return as_array(a) + as_array(b) * s


approx_equals = equality.approx_equals
exact_equals = equality.exact_equals


def to_string(m: ArrayLike, fraction_digits: Optional[int] = None) -> str:
    return mat_to_string(m, 4, 4, fraction_digits)


# Сокращения
mul = multiply
sub = subtract
inv = invert
det = determinant
translation = from_translation
scaling = from_scaling
rotation = from_rotation
approx = approx_equals
equals = approx_equals
eq = exact_equals
