"""
Настройка логирования linmath
"""

import logging
from pathlib import Path
from typing import Dict, Any, Optional

from linmath.config.default_settings import create_default_settings

ROOT_LOGGER_NAME = "linmath"

# Маркер для хендлеров, установленных configure_logging
_HANDLER_FLAG = "_linmath_handler"


def configure_logging(settings: Optional[Dict[str, Any]] = None,
                      log_file: Optional[Path] = None) -> logging.Logger:
    """
    Настраивает логгер пакета linmath.

    Args:
        settings: Плоские настройки ("logging.log_level", "logging.log_format").
            По умолчанию берутся из default_settings.yaml
        log_file: Путь к файлу лога (необязательно)

    Returns:
        logging.Logger: Настроенный логгер "linmath"
    """
    if settings is None:
        settings = create_default_settings()

    log_format = settings.get("logging.log_format",
                              '%(asctime)s - %(name)s - %(levelname)s - %(message)s')
    log_level = logging.getLevelName(str(settings.get("logging.log_level", "INFO")).upper())
    if not isinstance(log_level, int):
        log_level = logging.INFO

    logger = logging.getLogger(ROOT_LOGGER_NAME)

    # Убираем хендлеры от предыдущего вызова
    for handler in list(logger.handlers):
        if getattr(handler, _HANDLER_FLAG, False):
            logger.removeHandler(handler)
            handler.close()

    handlers = [logging.StreamHandler()]
    if log_file is not None:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file, encoding='utf-8'))

    for handler in handlers:
        handler.setFormatter(logging.Formatter(log_format))
        handler.setLevel(log_level)
        setattr(handler, _HANDLER_FLAG, True)
        logger.addHandler(handler)

    logger.setLevel(log_level)
    logger.debug(f"Логирование настроено: уровень {logging.getLevelName(log_level)}")
    return logger
