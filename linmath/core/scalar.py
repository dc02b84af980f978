"""
Скалярные функции: тригонометрия в градусах, clamp, интерполяция
"""

import numpy as np

from linmath.core.common import EPSILON, DEG2RAD, RAD2DEG, round_half


def clamp(s: float, min_value: float, max_value: float) -> float:
    """Ограничивает значение диапазоном [min_value, max_value]."""
    return max(min_value, min(max_value, s))


def lerp(a: float, b: float, t: float) -> float:
    """Линейная интерполяция, t не ограничивается."""
    return a + (b - a) * t


def inverse_lerp(a: float, b: float, value: float) -> float:
    """Обратная к lerp. Если a == b, возвращает 0.5."""
    if a == b:
        return 0.5
    return (value - a) / (b - a)


def fit(value: float,
        from_min: float, from_max: float,
        to_min: float, to_max: float) -> float:
    """
    Преобразует значение из одного диапазона в другой (без ограничения).

    Args:
        value: Исходное значение
        from_min, from_max: Исходный диапазон
        to_min, to_max: Целевой диапазон

    Returns:
        float: Преобразованное значение
    """
    t = np.float64(value - from_min) / (from_max - from_min)
    return lerp(to_min, to_max, t)


def radians(deg: float) -> float:
    return deg * DEG2RAD


def degrees(rad: float) -> float:
    return rad * RAD2DEG


def sin(deg: float) -> float:
    return np.sin(deg * DEG2RAD)


def cos(deg: float) -> float:
    return np.cos(deg * DEG2RAD)


def tan(deg: float) -> float:
    return np.tan(deg * DEG2RAD)


def asin(x: float) -> float:
    """Арксинус в градусах."""
    return np.arcsin(x) * RAD2DEG


def acos(x: float) -> float:
    """Арккосинус в градусах."""
    return np.arccos(x) * RAD2DEG


def atan(y_over_x: float) -> float:
    return np.arctan(y_over_x) * RAD2DEG


def atan2(y: float, x: float) -> float:
    return np.arctan2(y, x) * RAD2DEG


def step(edge: float, x: float) -> float:
    return 0.0 if x < edge else 1.0


def smoothstep(edge0: float, edge1: float, x: float) -> float:
    """Эрмитова ступенька между edge0 и edge1, как в GLSL."""
    t = clamp(np.float64(x - edge0) / (edge1 - edge0), 0.0, 1.0)
    return t * t * (3 - 2 * t)


def round(a: float) -> float:
    """Симметричное округление (половины от нуля)."""
    return round_half(a)


def approx_equals(a: float, b: float, epsilon: float = EPSILON) -> bool:
    return abs(a - b) <= epsilon * max(1.0, abs(a), abs(b))


def exact_equals(a: float, b: float) -> bool:
    return a == b


# Сокращения
rad = radians
deg = degrees
mix = lerp
equals = approx_equals
