"""
Покомпонентное сравнение с допуском EPSILON
"""

import numpy as np

from linmath.core.common import EPSILON, ArrayLike, as_array


def approx_equals(a: ArrayLike, b: ArrayLike, epsilon: float = EPSILON) -> bool:
    """
    Приближенное равенство: |a-b| <= epsilon * max(1, |a|, |b|) для каждого компонента.

    Массивы разной длины не равны. NaN не равен ничему.
    """
    a = as_array(a)
    b = as_array(b)
    if a.shape != b.shape:
        return False

    tolerance = epsilon * np.maximum(1.0, np.maximum(np.abs(a), np.abs(b)))
    return bool(np.all(np.abs(a - b) <= tolerance))


def exact_equals(a: ArrayLike, b: ArrayLike) -> bool:
    """Точное равенство всех компонентов."""
    a = as_array(a)
    b = as_array(b)
    return a.shape == b.shape and bool(np.all(a == b))
