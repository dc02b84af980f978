"""
linmath - векторы, матрицы и кватернионы для графики и анимации
"""

import logging

from .core import *
from .core import __all__ as _core_all
from .utils import configure_logging

__version__ = "1.0.0"

__all__ = _core_all + ["configure_logging"]

logging.getLogger(__name__).addHandler(logging.NullHandler())
