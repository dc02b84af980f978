from .default_settings import (
    load_settings,
    save_settings,
    create_default_settings,
    get_setting,
    merge_settings,
)

__all__ = [
    "load_settings",
    "save_settings",
    "create_default_settings",
    "get_setting",
    "merge_settings",
]
