"""
reply-tui - Line-editing core of a REPL front-end.

A multi-line expression buffer with wrapping-aware cursor navigation, and a
completion engine laying candidates out in a terminal-sized column grid.

Example:
    from rich.console import Console
    from reply_tui import CompletionEngine, ExpressionBuffer

    def complete(name, expression_before):
        return [n for n in dir(str) if not n.startswith("_")], "str"

    buffer = ExpressionBuffer(prompt_width=4)
    engine = CompletionEngine(complete)

    buffer.insert("'a'.st")
    root = engine.query(buffer.word_on_cursor(), buffer.expression_before_word())
    if root:
        buffer.replace_word(root)
    engine.open()
    engine.render(Console())

The popup is also available as structured rows (`CompletionEngine.layout`)
for callers compositing it themselves; `plain_rows` flattens those rows to
unstyled strings, which is handy in tests and for plain-text output.
"""

__version__ = "0.1.0"

# Expression buffer
from .buffer import Cursor, ExpressionBuffer, MoveListener

# Coordinate mapping
from .coordinates import (
    ScreenPosition,
    last_row,
    logical_column,
    row_count,
    screen_position,
)

# Completion engine
from .autocomplete import (
    CompletionCallback,
    CompletionEngine,
    Visibility,
    column_width,
    columns_fitting,
    common_root,
    compute_rows,
)

# Rendering
from .render import (
    Cell,
    CellRole,
    CompletionRow,
    CompletionTheme,
    plain_rows,
    row_to_text,
    rows_to_text,
)

# Errors
from .errors import CompletionError, ReplyError, SettingsError

# Terminal
from .terminal import TerminalWidth, get_terminal_width

# Text utilities
from .utils import (
    DEFAULT_WORD_DELIMITERS,
    find_word_boundary_left,
    find_word_boundary_right,
    is_control_char,
    word_bounds,
)

__all__ = [
    # Version
    "__version__",
    # Buffer
    "Cursor",
    "ExpressionBuffer",
    "MoveListener",
    # Coordinates
    "ScreenPosition",
    "last_row",
    "logical_column",
    "row_count",
    "screen_position",
    # Completion
    "CompletionCallback",
    "CompletionEngine",
    "Visibility",
    "column_width",
    "columns_fitting",
    "common_root",
    "compute_rows",
    # Rendering
    "Cell",
    "CellRole",
    "CompletionRow",
    "CompletionTheme",
    "plain_rows",
    "row_to_text",
    "rows_to_text",
    # Errors
    "CompletionError",
    "ReplyError",
    "SettingsError",
    # Terminal
    "TerminalWidth",
    "get_terminal_width",
    # Utils
    "DEFAULT_WORD_DELIMITERS",
    "find_word_boundary_left",
    "find_word_boundary_right",
    "is_control_char",
    "word_bounds",
]
