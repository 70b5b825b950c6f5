"""Terminal size queries."""

import shutil
from typing import Callable

# Zero-argument query returning the current terminal width in columns.
TerminalWidth = Callable[[], int]

DEFAULT_TERMINAL_WIDTH = 80


def get_terminal_width() -> int:
    """Get the current terminal width in columns.

    Queried on every call so a resize between two layouts is picked up.
    Falls back to 80 columns when stdout is not a terminal.
    """
    columns = shutil.get_terminal_size((DEFAULT_TERMINAL_WIDTH, 24)).columns
    return columns if columns > 0 else DEFAULT_TERMINAL_WIDTH
