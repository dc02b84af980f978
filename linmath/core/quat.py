"""
Кватернионы (x, y, z, w): конвертация представлений поворота и интерполяция

Кватернион хранится как np.ndarray из 4 float64, w - последний компонент.
Углы на границе API всегда в градусах.
"""

import logging
from functools import reduce
from typing import Callable, Dict, Optional, Tuple, Union

import numpy as np

from linmath.core import vec3, vec4
from linmath.core.common import (
    EPSILON, GIMBAL_THRESHOLD, DEFAULT_ANGLE_ORDER, DEG2RAD, RAD2DEG,
    AngleOrder, ArrayLike, as_array, frozen
)

logger = logging.getLogger(__name__)

Quat = np.ndarray

identity = frozen([0, 0, 0, 1])
zero = frozen([0, 0, 0, 0])


def of(x: float, y: float, z: float, w: float) -> Quat:
    return np.array([x, y, z, w], dtype=np.float64)


# ========== ОСЬ-УГОЛ ==========

def from_axis_angle(axis: ArrayLike, deg: float) -> Quat:
    """
    Создает кватернион поворота вокруг оси.

    Ось не нормализуется: для неединичной оси результат тоже неединичный.

    Args:
        axis: Ось поворота (единичный вектор)
        deg: Угол в градусах

    Returns:
        np.ndarray: Кватернион [x, y, z, w]
    """
    half = deg * DEG2RAD / 2
    s = np.sin(half)
    x, y, z = as_array(axis)
    return np.array([x * s, y * s, z * s, np.cos(half)])


def axis_angle(q: ArrayLike) -> Tuple[np.ndarray, float]:
    """
    Раскладывает кватернион на ось и угол.

    При угле около нуля ось не определена, возвращается (1, 0, 0).

    Returns:
        Tuple[np.ndarray, float]: (ось, угол в градусах)
    """
    x, y, z, w = as_array(q)
    rad = 2 * np.arccos(np.clip(w, -1.0, 1.0))
    s = np.sin(rad / 2)

    if s > EPSILON:
        axis = np.array([x / s, y / s, z / s])
    else:
        logger.debug("Near-zero rotation angle, axis defaults to unit X")
        axis = np.array([1.0, 0.0, 0.0])

    return axis, float(rad * RAD2DEG)


def angle(a: ArrayLike, b: ArrayLike) -> float:
    """Угол между двумя ориентациями в градусах."""
    d = dot(a, b)
    return float(np.arccos(np.clip(2 * d * d - 1, -1.0, 1.0)) * RAD2DEG)


# ========== АРИФМЕТИКА ==========

def _mul2(a: np.ndarray, b: np.ndarray) -> Quat:
    ax, ay, az, aw = a
    bx, by, bz, bw = b
    return np.array([
        ax * bw + aw * bx + ay * bz - az * by,
        ay * bw + aw * by + az * bx - ax * bz,
        az * bw + aw * bz + ax * by - ay * bx,
        aw * bw - ax * bx - ay * by - az * bz
    ])


def multiply(*qs: ArrayLike) -> Quat:
    """Произведение слева направо. Без аргументов - единичный кватернион."""
    return reduce(_mul2, (as_array(q) for q in qs), identity.copy())


def rotate_x(a: ArrayLike, deg: float) -> Quat:
    """Поворачивает кватернион вокруг оси X."""
    ax, ay, az, aw = as_array(a)
    half = deg * DEG2RAD / 2
    bx, bw = np.sin(half), np.cos(half)
    return np.array([
        ax * bw + aw * bx,
        ay * bw + az * bx,
        az * bw - ay * bx,
        aw * bw - ax * bx
    ])


def rotate_y(a: ArrayLike, deg: float) -> Quat:
    ax, ay, az, aw = as_array(a)
    half = deg * DEG2RAD / 2
    by, bw = np.sin(half), np.cos(half)
    return np.array([
        ax * bw - az * by,
        ay * bw + aw * by,
        az * bw + ax * by,
        aw * bw - ay * by
    ])


def rotate_z(a: ArrayLike, deg: float) -> Quat:
    ax, ay, az, aw = as_array(a)
    half = deg * DEG2RAD / 2
    bz, bw = np.sin(half), np.cos(half)
    return np.array([
        ax * bw + ay * bz,
        ay * bw - ax * bz,
        az * bw + aw * bz,
        aw * bw - az * bz
    ])


def calculate_w(q: ArrayLike) -> Quat:
    """Восстанавливает w по x, y, z (знак w положительный)."""
    x, y, z, _ = as_array(q)
    return np.array([x, y, z, np.sqrt(np.abs(1.0 - x * x - y * y - z * z))])


def invert(q: ArrayLike) -> Quat:
    """Обратный кватернион. Для нулевого возвращает нулевой."""
    q = as_array(q)
    d = np.dot(q, q)
    if d == 0:
        return np.zeros(4)
    x, y, z, w = q
    return np.array([-x, -y, -z, w]) / d


def conjugate(q: ArrayLike) -> Quat:
    x, y, z, w = as_array(q)
    return np.array([-x, -y, -z, w])


add = vec4.add
scale = vec4.scale
dot = vec4.dot
length = vec4.length
squared_length = vec4.squared_length
normalize = vec4.normalize


# ========== ЭКСПОНЕНТА И ЛОГАРИФМ ==========

def exp(q: ArrayLike) -> Quat:
    x, y, z, w = as_array(q)
    r = np.hypot(np.hypot(x, y), z)
    et = np.exp(w)
    s = et * np.sin(r) / r if r > 0 else 0.0
    return np.array([x * s, y * s, z * s, et * np.cos(r)])


def ln(q: ArrayLike) -> Quat:
    x, y, z, w = as_array(q)
    r = np.hypot(np.hypot(x, y), z)
    t = np.arctan2(r, w) / r if r > 0 else 0.0
    with np.errstate(divide='ignore'):
        w_out = 0.5 * np.log(x * x + y * y + z * z + w * w)
    return np.array([x * t, y * t, z * t, w_out])


def pow(q: ArrayLike, t: float) -> Quat:
    """Дробная степень кватерниона: exp(t * ln(q))."""
    return exp(scale(ln(q), t))


# ========== ИНТЕРПОЛЯЦИЯ ==========

def slerp(a: ArrayLike, b: ArrayLike, t: float) -> Quat:
    """
    Сферическая линейная интерполяция между кватернионами.

    Выбирает короткую дугу (при отрицательном скалярном произведении b
    заменяется на -b). Для почти совпадающих кватернионов переходит к
    линейным весам, чтобы не делить на sin(omega) около нуля.

    Args:
        a: Начальный кватернион
        b: Конечный кватернион
        t: Параметр интерполяции, не ограничивается [0, 1]

    Returns:
        np.ndarray: Интерполированный кватернион
    """
    a = as_array(a)
    b = as_array(b)
    cosom = np.dot(a, b)

    if cosom < 0:
        cosom = -cosom
        b = -b

    if 1.0 - cosom > EPSILON:
        omega = np.arccos(np.clip(cosom, -1.0, 1.0))
        sinom = np.sin(omega)
        scale0 = np.sin((1.0 - t) * omega) / sinom
        scale1 = np.sin(t * omega) / sinom
    else:
        scale0 = 1.0 - t
        scale1 = t

    return scale0 * a + scale1 * b


def lerp(a: ArrayLike, b: ArrayLike, t: float) -> Quat:
    """Нормализованная линейная интерполяция (nlerp) по короткой дуге."""
    a = as_array(a)
    b = as_array(b)
    if np.dot(a, b) < 0:
        b = -b
    return normalize(a + (b - a) * t)


def sqlerp(a: ArrayLike, b: ArrayLike, c: ArrayLike, d: ArrayLike, t: float) -> Quat:
    """Двойной slerp по четырем контрольным кватернионам."""
    return slerp(slerp(a, d, t), slerp(b, c, t), 2 * t * (1 - t))


# ========== МАТРИЦЫ ==========

def from_mat3(m: ArrayLike) -> Quat:
    """
    Кватернион из матрицы поворота 3x3 (по столбцам), алгоритм Шумейка.

    При положительном следе w вычисляется напрямую, иначе через
    наибольший диагональный элемент. Результат не нормализуется.

    Args:
        m: Матрица 3x3, 9 чисел по столбцам

    Returns:
        np.ndarray: Кватернион [x, y, z, w]
    """
    m = as_array(m)
    out = np.zeros(4)
    trace = m[0] + m[4] + m[8]

    if trace > 0:
        root = np.sqrt(trace + 1.0)
        out[3] = 0.5 * root
        root = 0.5 / root
        out[0] = (m[5] - m[7]) * root
        out[1] = (m[6] - m[2]) * root
        out[2] = (m[1] - m[3]) * root
    else:
        i = 0
        if m[4] > m[0]:
            i = 1
        if m[8] > m[i * 3 + i]:
            i = 2
        j = (i + 1) % 3
        k = (i + 2) % 3

        root = np.sqrt(m[i * 3 + i] - m[j * 3 + j] - m[k * 3 + k] + 1.0)
        out[i] = 0.5 * root
        root = 0.5 / root
        out[3] = (m[j * 3 + k] - m[k * 3 + j]) * root
        out[j] = (m[j * 3 + i] + m[i * 3 + j]) * root
        out[k] = (m[k * 3 + i] + m[i * 3 + k]) * root

    return out


def from_mat4(m: ArrayLike) -> Quat:
    """
    Поворот из матрицы 4x4: столбцы базиса делятся на свой масштаб.

    Матрица должна быть без сдвига (shear). Нулевой масштаб дает inf/nan.
    """
    m = as_array(m)
    basis = m.reshape(4, 4)[:3, :3]
    scaling = np.sqrt(np.sum(basis * basis, axis=1))
    if not np.all(scaling):
        logger.debug("Zero scale in matrix, rotation is undefined")
    with np.errstate(divide='ignore', invalid='ignore'):
        return from_mat3((basis / scaling[:, None]).ravel())


# ========== ОРИЕНТАЦИЯ ПО ВЕКТОРАМ ==========

def look_at(direction: ArrayLike, up: ArrayLike = vec3.unit_y) -> Quat:
    """
    Поворот, переводящий direction в ось +Z (up остается в плоскости YZ).

    Args:
        direction: Направление взгляда (единичный вектор)
        up: Вектор "вверх"

    Returns:
        np.ndarray: Нормализованный кватернион
    """
    direction = as_array(direction)
    right = vec3.normalize(vec3.cross(up, direction))
    cam_up = vec3.cross(direction, right)

    m = np.array([
        right[0], cam_up[0], direction[0],
        right[1], cam_up[1], direction[1],
        right[2], cam_up[2], direction[2],
    ])
    return normalize(from_mat3(m))


def set_axes(view: ArrayLike, right: ArrayLike, up: ArrayLike) -> Quat:
    """Кватернион по трем осям: направлению взгляда, правой оси и верхней."""
    v = as_array(view)
    r = as_array(right)
    u = as_array(up)

    m = np.array([
        r[0], u[0], -v[0],
        r[1], u[1], -v[1],
        r[2], u[2], -v[2],
    ])
    return normalize(from_mat3(m))


def rotation_to(a: ArrayLike, b: ArrayLike) -> Quat:
    """
    Кратчайший поворот, переводящий единичный вектор a в единичный вектор b.

    Для противоположных векторов - поворот на 180 градусов вокруг оси,
    перпендикулярной a.
    """
    a = as_array(a)
    b = as_array(b)
    d = vec3.dot(a, b)

    if d < -1 + EPSILON:
        tmp = vec3.cross(vec3.unit_x, a)
        if vec3.length(tmp) < 1e-6:
            tmp = vec3.cross(vec3.unit_y, a)
        return from_axis_angle(vec3.normalize(tmp), 180)

    if d > 1 - EPSILON:
        return identity.copy()

    c = vec3.cross(a, b)
    return normalize(np.array([c[0], c[1], c[2], 1 + d]))


# ========== УГЛЫ ЭЙЛЕРА ==========

def _half_angles(deg: ArrayLike) -> Tuple[float, ...]:
    x, y, z = as_array(deg) * (DEG2RAD / 2)
    return np.sin(x), np.cos(x), np.sin(y), np.cos(y), np.sin(z), np.cos(z)


def _euler_xyz(sx, cx, sy, cy, sz, cz):
    return [sx * cy * cz + cx * sy * sz,
            cx * sy * cz - sx * cy * sz,
            cx * cy * sz + sx * sy * cz,
            cx * cy * cz - sx * sy * sz]


def _euler_xzy(sx, cx, sy, cy, sz, cz):
    return [sx * cy * cz - cx * sy * sz,
            cx * sy * cz - sx * cy * sz,
            cx * cy * sz + sx * sy * cz,
            cx * cy * cz + sx * sy * sz]


def _euler_yxz(sx, cx, sy, cy, sz, cz):
    return [sx * cy * cz + cx * sy * sz,
            cx * sy * cz - sx * cy * sz,
            cx * cy * sz - sx * sy * cz,
            cx * cy * cz + sx * sy * sz]


def _euler_yzx(sx, cx, sy, cy, sz, cz):
    return [sx * cy * cz + cx * sy * sz,
            cx * sy * cz + sx * cy * sz,
            cx * cy * sz - sx * sy * cz,
            cx * cy * cz - sx * sy * sz]


def _euler_zxy(sx, cx, sy, cy, sz, cz):
    return [sx * cy * cz - cx * sy * sz,
            cx * sy * cz + sx * cy * sz,
            cx * cy * sz + sx * sy * cz,
            cx * cy * cz - sx * sy * sz]


def _euler_zyx(sx, cx, sy, cy, sz, cz):
    return [sx * cy * cz - cx * sy * sz,
            cx * sy * cz + sx * cy * sz,
            cx * cy * sz - sx * sy * cz,
            cx * cy * cz + sx * sy * sz]


_FROM_EULER: Dict[AngleOrder, Callable[..., list]] = {
    AngleOrder.XYZ: _euler_xyz,
    AngleOrder.XZY: _euler_xzy,
    AngleOrder.YXZ: _euler_yxz,
    AngleOrder.YZX: _euler_yzx,
    AngleOrder.ZXY: _euler_zxy,
    AngleOrder.ZYX: _euler_zyx,
}


def from_euler(deg: ArrayLike,
               order: Union[AngleOrder, str, None] = None) -> Quat:
    """
    Кватернион из углов Эйлера (внутренний порядок поворотов).

    Порядок 'zyx' означает R = Rz * Ry * Rx, то есть сначала поворот
    вокруг Z, затем вокруг новой Y, затем вокруг новой X.

    Args:
        deg: Углы (x, y, z) в градусах
        order: Порядок поворотов, по умолчанию из настроек ('zyx')

    Returns:
        np.ndarray: Кватернион [x, y, z, w]

    Raises:
        ValueError: Неизвестный порядок поворотов
    """
    order = AngleOrder.parse(DEFAULT_ANGLE_ORDER if order is None else order)
    return np.array(_FROM_EULER[order](*_half_angles(deg)))


def _rotation_rows(q: np.ndarray) -> Tuple[float, ...]:
    """Элементы матрицы поворота m[row][col] для кватерниона."""
    x, y, z, w = q
    return (
        w * w + x * x - y * y - z * z, 2 * (x * y - w * z), 2 * (x * z + w * y),
        2 * (x * y + w * z), w * w - x * x + y * y - z * z, 2 * (y * z - w * x),
        2 * (x * z - w * y), 2 * (y * z + w * x), w * w - x * x - y * y + z * z,
    )


# Для каждого порядка: элемент-опора (синус среднего угла) и две ветки
# извлечения углов (x, y, z) в радианах - обычная и при блокировке.
def _to_euler_zyx(m, locked):
    m00, m01, m02, m10, m11, m12, m20, m21, m22 = m
    s = -m20
    if locked(s):
        return 0.0, np.sign(s) * np.pi / 2, np.arctan2(-m01, m11)
    return np.arctan2(m21, m22), np.arcsin(np.clip(s, -1, 1)), np.arctan2(m10, m00)


def _to_euler_xyz(m, locked):
    m00, m01, m02, m10, m11, m12, m20, m21, m22 = m
    s = m02
    if locked(s):
        return np.arctan2(m21, m11), np.sign(s) * np.pi / 2, 0.0
    return np.arctan2(-m12, m22), np.arcsin(np.clip(s, -1, 1)), np.arctan2(-m01, m00)


def _to_euler_yxz(m, locked):
    m00, m01, m02, m10, m11, m12, m20, m21, m22 = m
    s = -m12
    if locked(s):
        return np.sign(s) * np.pi / 2, np.arctan2(-m20, m00), 0.0
    return np.arcsin(np.clip(s, -1, 1)), np.arctan2(m02, m22), np.arctan2(m10, m11)


def _to_euler_yzx(m, locked):
    m00, m01, m02, m10, m11, m12, m20, m21, m22 = m
    s = m10
    if locked(s):
        return 0.0, np.arctan2(m02, m22), np.sign(s) * np.pi / 2
    return np.arctan2(-m12, m11), np.arctan2(-m20, m00), np.arcsin(np.clip(s, -1, 1))


def _to_euler_zxy(m, locked):
    m00, m01, m02, m10, m11, m12, m20, m21, m22 = m
    s = m21
    if locked(s):
        return np.sign(s) * np.pi / 2, 0.0, np.arctan2(m10, m00)
    return np.arcsin(np.clip(s, -1, 1)), np.arctan2(-m20, m22), np.arctan2(-m01, m11)


def _to_euler_xzy(m, locked):
    m00, m01, m02, m10, m11, m12, m20, m21, m22 = m
    s = -m01
    if locked(s):
        return np.arctan2(-m12, m22), 0.0, np.sign(s) * np.pi / 2
    return np.arctan2(m21, m11), np.arctan2(m02, m00), np.arcsin(np.clip(s, -1, 1))


_TO_EULER = {
    AngleOrder.XYZ: _to_euler_xyz,
    AngleOrder.XZY: _to_euler_xzy,
    AngleOrder.YXZ: _to_euler_yxz,
    AngleOrder.YZX: _to_euler_yzx,
    AngleOrder.ZXY: _to_euler_zxy,
    AngleOrder.ZYX: _to_euler_zyx,
}


def to_euler(q: ArrayLike,
             order: Union[AngleOrder, str, None] = None,
             gimbal_threshold: Optional[float] = None) -> np.ndarray:
    """
    Углы Эйлера (x, y, z) в градусах из единичного кватерниона.

    При блокировке осей (|синус среднего угла| >= порога) средний угол
    равен +-90, один из крайних - 0, а второй содержит их суммарный поворот.

    Args:
        q: Кватернион [x, y, z, w]
        order: Порядок поворотов, по умолчанию из настроек ('zyx')
        gimbal_threshold: Порог блокировки, по умолчанию 0.9999999

    Returns:
        np.ndarray: Углы (x, y, z) в градусах

    Raises:
        ValueError: Неизвестный порядок поворотов
    """
    order = AngleOrder.parse(DEFAULT_ANGLE_ORDER if order is None else order)
    threshold = GIMBAL_THRESHOLD if gimbal_threshold is None else gimbal_threshold

    def locked(s: float) -> bool:
        if abs(s) >= threshold:
            logger.debug(f"Gimbal lock in order {order.value}: pivot={s:.9f}")
            return True
        return False

    angles = _TO_EULER[order](_rotation_rows(as_array(q)), locked)
    return np.array(angles, dtype=np.float64) * RAD2DEG


# ========== СРАВНЕНИЕ ==========

def approx_equals(a: ArrayLike, b: ArrayLike, epsilon: float = EPSILON) -> bool:
    """Кватернионы равны как повороты: q и -q считаются одинаковыми."""
    return abs(dot(a, b)) >= 1.0 - epsilon


exact_equals = vec4.exact_equals
to_string = vec4.to_string


# Сокращения
mul = multiply
nlerp = lerp
sqr_len = squared_length
approx = approx_equals
equals = approx_equals
eq = exact_equals
