"""
Строковое представление векторов и матриц
"""

from typing import Optional

from linmath.core.common import FRACTION_DIGITS, ArrayLike, as_array


def vec_to_string(v: ArrayLike, fraction_digits: Optional[int] = None) -> str:
    """Вектор в виде "(1.00, 2.00, 3.00)"."""
    digits = FRACTION_DIGITS if fraction_digits is None else fraction_digits
    return "(" + ", ".join(f"{x:.{digits}f}" for x in as_array(v)) + ")"


def mat_to_string(m: ArrayLike, rows: int, cols: int,
                  fraction_digits: Optional[int] = None) -> str:
    """
    Матрица, хранящаяся по столбцам, построчно в квадратных скобках.

    Args:
        m: Элементы матрицы (column-major)
        rows: Количество строк
        cols: Количество столбцов
        fraction_digits: Знаков после запятой

    Returns:
        str: Например "[1.00, 0.00]\n[0.00, 1.00]"
    """
    digits = FRACTION_DIGITS if fraction_digits is None else fraction_digits
    m = as_array(m)
    lines = []
    for r in range(rows):
        row = (m[c * rows + r] for c in range(cols))
        lines.append("[" + ", ".join(f"{x:.{digits}f}" for x in row) + "]")
    return "\n".join(lines)
