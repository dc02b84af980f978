import logging

import numpy as np
import pytest

from linmath.utils.log import ROOT_LOGGER_NAME


@pytest.fixture
def rng():
    return np.random.default_rng(20240611)


@pytest.fixture
def unit_quats(rng):
    """Набор случайных единичных кватернионов [x, y, z, w]"""
    qs = rng.normal(size=(12, 4))
    return [q / np.linalg.norm(q) for q in qs]


@pytest.fixture
def clean_logger():
    """Снимает хендлеры, добавленные configure_logging во время теста."""
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    level = logger.level
    yield logger
    for handler in list(logger.handlers):
        if getattr(handler, "_linmath_handler", False):
            logger.removeHandler(handler)
            handler.close()
    logger.setLevel(level)
