from .common import AngleOrder, MathSettings, EPSILON, GIMBAL_THRESHOLD, DEFAULT_ANGLE_ORDER
from . import equality, scalar
from . import vec2, vec3, vec4
from . import quat
from . import mat2, mat2d, mat3, mat4
from .mat4 import DecomposedTransform

__all__ = [
    "AngleOrder",
    "MathSettings",
    "DecomposedTransform",
    "EPSILON",
    "GIMBAL_THRESHOLD",
    "DEFAULT_ANGLE_ORDER",
    "equality",
    "scalar",
    "vec2",
    "vec3",
    "vec4",
    "quat",
    "mat2",
    "mat2d",
    "mat3",
    "mat4",
]
