"""
Модуль для работы с настройками linmath
"""

import yaml
from pathlib import Path
from typing import Dict, Any
import logging

logger = logging.getLogger(__name__)

DEFAULT_SETTINGS_FILE = Path(__file__).parent / "default_settings.yaml"

# Резервные настройки, если default_settings.yaml не найден
FALLBACK_SETTINGS: Dict[str, Any] = {
    "math.epsilon": 1e-6,
    "math.gimbal_threshold": 0.9999999,
    "math.default_angle_order": "zyx",

    "formatting.fraction_digits": 2,

    "logging.log_level": "INFO",
    "logging.log_format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
}


def load_settings(filepath: Path) -> Dict[str, Any]:
    """
    Загружает настройки из YAML файла.

    Args:
        filepath: Путь к файлу настроек

    Returns:
        Dict: Загруженные настройки в плоском виде ("math.epsilon": ...)
    """
    filepath = Path(filepath)
    if not filepath.exists():
        logger.warning(f"Файл настроек не найден: {filepath}")
        return create_default_settings()

    try:
        with open(filepath, 'r', encoding='utf-8') as f:
            settings = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        logger.error(f"Ошибка загрузки настроек: {e}")
        return create_default_settings()

    if not isinstance(settings, dict):
        logger.error(f"Неверный формат файла настроек: {filepath}")
        return create_default_settings()

    # Преобразуем в плоскую структуру для удобства доступа
    flat_settings = flatten_dict(settings)

    logger.debug(f"Настройки загружены из {filepath}")
    return flat_settings


def save_settings(filepath: Path, settings: Dict[str, Any]):
    """
    Сохраняет настройки в YAML файл.

    Args:
        filepath: Путь к файлу настроек
        settings: Настройки для сохранения (плоский словарь)
    """
    nested_settings = unflatten_dict(settings)

    with open(filepath, 'w', encoding='utf-8') as f:
        yaml.dump(nested_settings, f, default_flow_style=False, allow_unicode=True)

    logger.info(f"Настройки сохранены в {filepath}")


def create_default_settings() -> Dict[str, Any]:
    """
    Создает настройки по умолчанию.

    Returns:
        Dict: Настройки по умолчанию
    """
    if DEFAULT_SETTINGS_FILE.exists():
        try:
            with open(DEFAULT_SETTINGS_FILE, 'r', encoding='utf-8') as f:
                return merge_settings(FALLBACK_SETTINGS, flatten_dict(yaml.safe_load(f) or {}))
        except (OSError, yaml.YAMLError) as e:
            logger.error(f"Ошибка чтения {DEFAULT_SETTINGS_FILE}: {e}")

    return dict(FALLBACK_SETTINGS)


def flatten_dict(d: Dict, parent_key: str = '', sep: str = '.') -> Dict[str, Any]:
    """
    Преобразует вложенный словарь в плоский.

    Args:
        d: Вложенный словарь
        parent_key: Префикс для ключей
        sep: Разделитель для ключей

    Returns:
        Dict: Плоский словарь
    """
    items = []
    for k, v in d.items():
        new_key = f"{parent_key}{sep}{k}" if parent_key else k
        if isinstance(v, dict):
            items.extend(flatten_dict(v, new_key, sep=sep).items())
        else:
            items.append((new_key, v))
    return dict(items)


def unflatten_dict(d: Dict[str, Any], sep: str = '.') -> Dict[str, Any]:
    """Преобразует плоский словарь во вложенный."""
    result = {}
    for key, value in d.items():
        parts = key.split(sep)
        target = result
        for part in parts[:-1]:
            target = target.setdefault(part, {})
        target[parts[-1]] = value
    return result


def get_setting(settings: Dict[str, Any], key: str, default: Any = None) -> Any:
    """Получает значение настройки по ключу."""
    return settings.get(key, default)


def merge_settings(base: Dict[str, Any], overlay: Dict[str, Any]) -> Dict[str, Any]:
    """
    Объединяет две группы настроек.

    Args:
        base: Базовые настройки
        overlay: Настройки для перезаписи

    Returns:
        Dict: Объединенные настройки
    """
    result = base.copy()
    result.update(overlay)
    return result
