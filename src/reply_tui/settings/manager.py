"""Settings manager with global/project hierarchy."""

import json
import logging
from dataclasses import asdict, fields
from pathlib import Path

from ..autocomplete import CompletionCallback, CompletionEngine
from ..buffer import ExpressionBuffer, MoveListener
from ..errors import SettingsError
from ..render import CompletionTheme
from ..terminal import TerminalWidth, get_terminal_width
from .types import CompletionSettings, EditorSettings, Settings, ThemeSettings

logger = logging.getLogger(__name__)

CONFIG_DIR_NAME = ".reply"
SETTINGS_FILE_NAME = "settings.json"


def get_default_config_dir() -> Path:
    """Get the default global configuration directory."""
    return Path.home() / CONFIG_DIR_NAME


def deep_merge(base: dict, overrides: dict) -> dict:
    """Deep merge two dictionaries. Overrides take precedence."""
    result = base.copy()

    for key, value in overrides.items():
        if value is None:
            continue

        base_value = result.get(key)

        # For nested dicts, merge recursively
        if isinstance(value, dict) and isinstance(base_value, dict):
            result[key] = deep_merge(base_value, value)
        else:
            result[key] = value

    return result


def _filter_fields(cls, data: dict) -> dict:
    valid_fields = {f.name for f in fields(cls)}
    return {k: v for k, v in data.items() if k in valid_fields}


def dict_to_settings(data: dict) -> Settings:
    """Convert a dictionary to Settings, ignoring unknown keys."""
    sections = {
        "editor": EditorSettings,
        "completion": CompletionSettings,
        "theme": ThemeSettings,
    }
    values = {
        name: cls(**_filter_fields(cls, data[name]))
        for name, cls in sections.items()
        if isinstance(data.get(name), dict)
    }
    return Settings(**values)


def settings_to_dict(settings: Settings) -> dict:
    """Convert Settings to a plain dictionary."""
    return asdict(settings)


def migrate_settings(data: dict) -> dict:
    """Migrate camelCase keys to snake_case."""
    key_migrations = {
        "editor": {
            "promptWidth": "prompt_width",
            "continuationPromptWidth": "continuation_prompt_width",
            "indentWidth": "indent_width",
            "wordDelimiters": "word_delimiters",
        },
        "completion": {
            "maxHeight": "max_height",
            "minHeight": "min_height",
            "selectionMarker": "selection_marker",
        },
    }

    for section, migrations in key_migrations.items():
        values = data.get(section)
        if not isinstance(values, dict):
            continue
        for old_key, new_key in migrations.items():
            if old_key in values and new_key not in values:
                values[new_key] = values.pop(old_key)

    return data


def validate_settings(settings: Settings) -> Settings:
    """Check value ranges, raising SettingsError on the first invalid one."""
    editor = settings.editor
    completion = settings.completion

    if editor.prompt_width < 0:
        raise SettingsError(f"editor.prompt_width must be >= 0, got {editor.prompt_width}")
    if editor.continuation_prompt_width is not None and editor.continuation_prompt_width < 0:
        raise SettingsError(
            "editor.continuation_prompt_width must be >= 0, "
            f"got {editor.continuation_prompt_width}"
        )
    if editor.indent_width < 0:
        raise SettingsError(f"editor.indent_width must be >= 0, got {editor.indent_width}")
    if completion.max_height < 0:
        raise SettingsError(f"completion.max_height must be >= 0, got {completion.max_height}")
    if completion.min_height < 0:
        raise SettingsError(f"completion.min_height must be >= 0, got {completion.min_height}")

    return settings


class SettingsManager:
    """
    Manages settings with global/project hierarchy.

    Settings are loaded from:
    1. Global: ~/.reply/settings.json
    2. Project: <cwd>/.reply/settings.json

    Project settings override global settings.
    """

    def __init__(
        self,
        cwd: str | Path | None = None,
        config_dir: str | Path | None = None,
        load: bool = True,
    ):
        """
        Initialize settings manager.

        Args:
            cwd: Working directory for project settings
            config_dir: Global config directory (default: ~/.reply)
            load: Whether to read the settings files
        """
        self._cwd = Path(cwd) if cwd else Path.cwd()
        self._config_dir = Path(config_dir) if config_dir else get_default_config_dir()

        self._global_settings_path = self._config_dir / SETTINGS_FILE_NAME
        self._project_settings_path = self._cwd / CONFIG_DIR_NAME / SETTINGS_FILE_NAME

        self._settings: Settings = Settings()
        if load:
            self._load()

    @classmethod
    def in_memory(cls, settings: Settings | None = None) -> "SettingsManager":
        """Create a settings manager that reads no file."""
        manager = cls(load=False)
        if settings:
            manager._settings = validate_settings(settings)
        return manager

    def _load(self) -> None:
        """Load settings from files."""
        merged = deep_merge(
            self._load_from_file(self._global_settings_path),
            self._load_from_file(self._project_settings_path),
        )
        self._settings = validate_settings(dict_to_settings(merged))

    def _load_from_file(self, path: Path) -> dict:
        """Load settings from a JSON file."""
        if not path.exists():
            return {}

        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, OSError) as e:
            logger.warning(f"Could not load settings from {path}: {e}")
            return {}

        if not isinstance(data, dict):
            logger.warning(f"Ignoring settings from {path}: expected a JSON object")
            return {}

        logger.debug(f"Loaded settings from {path}")
        return migrate_settings(data)

    # =========================================================================
    # Properties
    # =========================================================================

    @property
    def settings(self) -> Settings:
        """Get the merged settings."""
        return self._settings

    @property
    def cwd(self) -> Path:
        return self._cwd

    @property
    def config_dir(self) -> Path:
        return self._config_dir

    def get_editor_settings(self) -> EditorSettings:
        return self._settings.editor

    def get_completion_settings(self) -> CompletionSettings:
        return self._settings.completion

    # =========================================================================
    # Factories
    # =========================================================================

    def create_theme(self) -> CompletionTheme:
        theme = self._settings.theme
        return CompletionTheme(
            header=theme.header,
            selected=theme.selected,
            prefix=theme.prefix,
            selection_marker=self._settings.completion.selection_marker,
        )

    def create_buffer(
        self,
        terminal_width: TerminalWidth = get_terminal_width,
        on_move: MoveListener | None = None,
    ) -> ExpressionBuffer:
        """Create an expression buffer configured from the editor settings."""
        editor = self._settings.editor
        return ExpressionBuffer(
            terminal_width=terminal_width,
            prompt_width=editor.prompt_width,
            continuation_prompt_width=editor.continuation_prompt_width,
            indent_width=editor.indent_width,
            word_delimiters=editor.word_delimiters,
            on_move=on_move,
        )

    def create_completion_engine(
        self,
        complete: CompletionCallback,
        terminal_width: TerminalWidth = get_terminal_width,
    ) -> CompletionEngine:
        """Create a completion engine themed and sized from the settings."""
        completion = self.get_completion_settings()
        return CompletionEngine(
            complete,
            terminal_width=terminal_width,
            theme=self.create_theme(),
            max_height=completion.max_height,
            min_height=completion.min_height,
            color=completion.color,
        )
