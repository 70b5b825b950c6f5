"""Settings management with global/project hierarchy."""

from .manager import (
    CONFIG_DIR_NAME,
    SettingsManager,
    deep_merge,
    dict_to_settings,
    get_default_config_dir,
    migrate_settings,
    settings_to_dict,
    validate_settings,
)
from .types import (
    DEFAULT_SETTINGS,
    CompletionSettings,
    EditorSettings,
    Settings,
    ThemeSettings,
)

__all__ = [
    # Manager
    "SettingsManager",
    "get_default_config_dir",
    "CONFIG_DIR_NAME",
    "deep_merge",
    "dict_to_settings",
    "settings_to_dict",
    "migrate_settings",
    "validate_settings",
    # Types
    "Settings",
    "DEFAULT_SETTINGS",
    "EditorSettings",
    "CompletionSettings",
    "ThemeSettings",
]
