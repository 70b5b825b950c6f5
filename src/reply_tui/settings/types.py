"""Settings types and defaults."""

from dataclasses import dataclass, field

from ..utils import DEFAULT_WORD_DELIMITERS


@dataclass
class EditorSettings:
    """Settings for the expression buffer."""

    prompt_width: int = 0  # Columns taken by the prompt on the first line
    continuation_prompt_width: int | None = None  # Other lines; None = prompt_width
    indent_width: int = 1  # Spaces per indent level
    word_delimiters: str = DEFAULT_WORD_DELIMITERS


@dataclass
class CompletionSettings:
    """Settings for the completion popup."""

    max_height: int = 10  # Header row included
    min_height: int = 0
    color: bool = True  # Without color, selection is marked with selection_marker
    selection_marker: str = ">"


@dataclass
class ThemeSettings:
    """Rich style strings used by the completion popup."""

    header: str = "blue underline"
    selected: str = "bold on bright_black"
    prefix: str = "bold"


@dataclass
class Settings:
    """Application settings with sensible defaults."""

    editor: EditorSettings = field(default_factory=EditorSettings)
    completion: CompletionSettings = field(default_factory=CompletionSettings)
    theme: ThemeSettings = field(default_factory=ThemeSettings)


DEFAULT_SETTINGS = Settings()
