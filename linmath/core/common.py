"""
Общие константы, типы и вспомогательные функции linmath
"""

import os
import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Dict, Any, Sequence, Union

import numpy as np

from linmath.config.default_settings import load_settings, create_default_settings

logger = logging.getLogger(__name__)

# Переменная окружения с путем к альтернативному YAML файлу настроек
SETTINGS_ENV = "LINMATH_SETTINGS"

ArrayLike = Union[Sequence[float], np.ndarray]


class AngleOrder(Enum):
    """Внутренний (intrinsic) порядок поворотов для углов Эйлера"""
    XYZ = "xyz"
    XZY = "xzy"
    YXZ = "yxz"
    YZX = "yzx"
    ZXY = "zxy"
    ZYX = "zyx"

    @classmethod
    def parse(cls, order: Union['AngleOrder', str]) -> 'AngleOrder':
        """Принимает AngleOrder или строку в любом регистре ('ZYX', 'zyx')."""
        if isinstance(order, cls):
            return order
        try:
            return cls(str(order).lower())
        except ValueError:
            raise ValueError(f"Unsupported rotation order: {order}") from None


@dataclass(frozen=True)
class MathSettings:
    """Численные настройки, читаются один раз при импорте"""
    epsilon: float = 1e-6
    gimbal_threshold: float = 0.9999999
    default_angle_order: AngleOrder = AngleOrder.ZYX
    fraction_digits: int = 2

    def to_dict(self) -> Dict[str, Any]:
        return {
            "math.epsilon": self.epsilon,
            "math.gimbal_threshold": self.gimbal_threshold,
            "math.default_angle_order": self.default_angle_order.value,
            "formatting.fraction_digits": self.fraction_digits,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'MathSettings':
        kwargs = {}
        if "math.epsilon" in data:
            kwargs["epsilon"] = float(data["math.epsilon"])
        if "math.gimbal_threshold" in data:
            kwargs["gimbal_threshold"] = float(data["math.gimbal_threshold"])
        if "math.default_angle_order" in data:
            kwargs["default_angle_order"] = AngleOrder.parse(data["math.default_angle_order"])
        if "formatting.fraction_digits" in data:
            kwargs["fraction_digits"] = int(data["formatting.fraction_digits"])
        return cls(**kwargs)


def read_math_settings() -> MathSettings:
    """Читает настройки из LINMATH_SETTINGS или из встроенного YAML."""
    path = os.environ.get(SETTINGS_ENV)
    if path:
        flat = load_settings(Path(path))
    else:
        flat = create_default_settings()
    return MathSettings.from_dict(flat)


SETTINGS = read_math_settings()

EPSILON: float = SETTINGS.epsilon
GIMBAL_THRESHOLD: float = SETTINGS.gimbal_threshold
DEFAULT_ANGLE_ORDER: AngleOrder = SETTINGS.default_angle_order
FRACTION_DIGITS: int = SETTINGS.fraction_digits

DEG2RAD: float = np.pi / 180
RAD2DEG: float = 180 / np.pi


def as_array(a: ArrayLike) -> np.ndarray:
    """Приводит последовательность чисел к одномерному массиву float64."""
    return np.asarray(a, dtype=np.float64).ravel()


def frozen(values: ArrayLike) -> np.ndarray:
    """Создает неизменяемый массив для именованных констант (identity, zero...)."""
    arr = np.array(values, dtype=np.float64)
    arr.flags.writeable = False
    return arr


def round_half(a: float) -> float:
    """Симметричное округление: половины округляются от нуля."""
    if a >= 0:
        return float(np.floor(a + 0.5))
    return -float(np.floor(-a + 0.5))
