"""Completion engine: candidate filtering and column-grid popup layout."""

import logging
from enum import Enum
from typing import Callable, Iterable, Sequence

from rich.console import Console
from rich.text import Text

from .errors import CompletionError
from .render import (
    Cell,
    CellRole,
    CompletionRow,
    CompletionTheme,
    row_to_text,
    rows_to_text,
)
from .terminal import TerminalWidth, get_terminal_width

logger = logging.getLogger(__name__)

# complete(name_filter, expression_before_word) -> (candidates, scope_label)
CompletionCallback = Callable[[str, str], tuple[Sequence[str], str]]

SINGLE_COLUMN_LIMIT = 10  # Up to this many entries, prefer a single column
COLUMN_PADDING = 2
TRUNCATION_MARKER = ".."


class Visibility(Enum):
    """Display state of the completion popup."""

    CLOSED = "closed"  # Nothing displayed
    OPEN = "open"  # Entries displayed
    CLEARED = "cleared"  # Blank space displayed


def common_root(entries: Sequence[str]) -> str:
    """Longest prefix shared by all entries.

    Example:
        >>> common_root(["foobar", "foobaz", "foo"])
        'foo'
        >>> common_root([])
        ''
    """
    if not entries:
        return ""
    if len(entries) == 1:
        return entries[0]

    first = entries[0]
    i = 0
    while i < len(first) and all(len(entry) > i and entry[i] == first[i] for entry in entries):
        i += 1

    return first[:i]


def column_width(column: Sequence[str]) -> int:
    """Display width of a column: its longest entry plus padding."""
    return max(len(entry) for entry in column) + COLUMN_PADDING


def compute_rows(entries: Sequence[str], max_rows: int, width: int) -> int:
    """Minimum number of rows letting all entries fit in ``width`` columns.

    - Up to 10 entries, returns ``len(entries)`` (one column reads better),
    - if no row count up to ``max_rows`` fits, returns ``max_rows``.
    Never returns more rows than entries.
    """
    if len(entries) > SINGLE_COLUMN_LIMIT:
        for rows in range(1, max_rows + 1):
            total = sum(
                column_width(entries[i : i + rows]) for i in range(0, len(entries), rows)
            )
            if total < width:
                return rows

    return min(len(entries), max_rows)


def columns_fitting(column_widths: Iterable[int], width: int) -> int:
    """Number of leading columns whose cumulated width fits in ``width``."""
    count = 0
    total = 0
    for col_width in column_widths:
        total += col_width
        if total > width:
            break
        count += 1
    return count


class CompletionEngine:
    """Auto-completion state and popup layout.

    Candidates come from an injected callback
    ``complete(name_filter, expression_before) -> (candidates, scope_label)``.
    The engine keeps every candidate of the last query and exposes the ones
    starting with the current name filter as ``entries``.

    - ``query``: call the callback, store candidates, return their common root.
    - ``name_filter`` / ``set_filter``: narrow entries as the user types.
    - ``select_next`` / ``select_previous``: cycle the highlighted entry.
    - ``open`` / ``close`` / ``clear``: popup visibility.
    - ``layout`` / ``render``: lay entries out in columns sized to the terminal.

    Example:
        engine = CompletionEngine(lambda name, expr: (["foo", "foobar"], "Scope"))
        root = engine.query("f", "")
        engine.open()
        engine.render(Console())
    """

    def __init__(
        self,
        complete: CompletionCallback,
        *,
        terminal_width: TerminalWidth = get_terminal_width,
        theme: CompletionTheme | None = None,
        max_height: int = 10,
        min_height: int = 0,
        color: bool = True,
    ) -> None:
        self._complete = complete
        self.terminal_width = terminal_width
        self.theme = theme or CompletionTheme()

        # Defaults for layout and render
        self.max_height = max_height
        self.min_height = min_height
        self.color = color

        self._visibility = Visibility.CLOSED
        self._scope_label = ""
        self._all_entries: list[str] = []
        self._entries: list[str] = []
        self._name_filter = ""
        self._selection: int | None = None

    # === State ===

    @property
    def visibility(self) -> Visibility:
        return self._visibility

    @property
    def is_open(self) -> bool:
        return self._visibility is Visibility.OPEN

    @property
    def is_cleared(self) -> bool:
        return self._visibility is Visibility.CLEARED

    @property
    def scope_label(self) -> str:
        return self._scope_label

    @property
    def entries(self) -> list[str]:
        """Candidates matching the name filter."""
        return self._entries.copy()

    @property
    def selection(self) -> int | None:
        return self._selection

    @property
    def selected_entry(self) -> str | None:
        if self._selection is None:
            return None
        return self._entries[self._selection]

    @property
    def name_filter(self) -> str:
        return self._name_filter

    @name_filter.setter
    def name_filter(self, value: str) -> None:
        self.set_filter(value)

    # === Querying ===

    def query(self, name_filter: str, expression_before: str) -> str | None:
        """Fetch candidates for ``name_filter`` and return their common root.

        Returns None when no candidate matches. Errors raised by the
        callback propagate unchanged and leave the engine untouched.
        """
        result = self._complete(name_filter, expression_before)

        try:
            candidates, scope_label = result
            if isinstance(candidates, str):
                raise TypeError("candidates must be a sequence of strings, not a string")
            all_entries = list(candidates)
            if not all(isinstance(entry, str) for entry in all_entries):
                raise TypeError("candidates must be strings")
        except (TypeError, ValueError) as e:
            raise CompletionError(
                f"Completion callback must return (candidates, scope_label), got {result!r}"
            ) from e

        self._all_entries = all_entries
        self._scope_label = scope_label or ""
        self.set_filter(name_filter)

        if not self._entries:
            logger.debug(f"No completion for {name_filter!r} ({len(all_entries)} candidates)")
            return None

        root = common_root(self._entries)
        logger.debug(
            f"Completion for {name_filter!r}: {len(self._entries)} entries, root {root!r}"
        )
        return root

    def set_filter(self, name_filter: str) -> None:
        """Keep only candidates starting with ``name_filter``; drop the selection."""
        self._selection = None
        self._name_filter = name_filter
        self._entries = [entry for entry in self._all_entries if entry.startswith(name_filter)]
        logger.debug(f"Filter {name_filter!r}: {len(self._entries)} entries")

    # === Selection ===

    def select_next(self) -> str | None:
        """Select the next entry (wrapping), or the first one if none is selected."""
        return self._move_selection(1)

    def select_previous(self) -> str | None:
        """Select the previous entry (wrapping), or the first one if none is selected."""
        return self._move_selection(-1)

    def _move_selection(self, delta: int) -> str | None:
        if not self._entries:
            return None

        if self._selection is None:
            self._selection = 0
        else:
            self._selection = (self._selection + delta) % len(self._entries)

        return self._entries[self._selection]

    # === Visibility ===

    def open(self) -> None:
        self._visibility = Visibility.OPEN

    def close(self) -> None:
        """Hide the popup and forget all candidates."""
        self._selection = None
        self._entries = []
        self._all_entries = []
        self._visibility = Visibility.CLOSED

    def clear(self) -> None:
        """Like close, but keep blank space where the popup was."""
        self.close()
        self._visibility = Visibility.CLEARED

    # === Layout ===

    def layout(
        self, max_height: int | None = None, min_height: int | None = None
    ) -> list[CompletionRow]:
        """Rows of the popup, at most ``max_height`` and at least ``min_height``.

        Heights left to None use the engine's defaults.

        Entries are laid out column by column using as few rows as
        possible; columns scroll horizontally to keep the selection visible.
        """
        max_height = self.max_height if max_height is None else max_height
        min_height = self.min_height if min_height is None else min_height

        if self._visibility is Visibility.CLEARED:
            return [[] for _ in range(min_height)]
        if self._visibility is Visibility.CLOSED or max_height <= 1:
            return []

        rows: list[CompletionRow] = [
            [Cell(self._scope_label, CellRole.HEADER), Cell(":")]
        ]

        if self._entries:
            rows.extend(self._grid_rows(max_height - len(rows)))

        rows.extend([] for _ in range(min_height - len(rows)))
        return rows

    def _grid_rows(self, max_rows: int) -> list[CompletionRow]:
        width = self.terminal_width()
        nb_rows = compute_rows(self._entries, max_rows, width)

        columns = [self._entries[i : i + nb_rows] for i in range(0, len(self._entries), nb_rows)]
        columns[-1] = columns[-1] + [""] * (nb_rows - len(columns[-1]))
        widths = [column_width(column) for column in columns]

        # A column wider than the terminal is still shown
        nb_cols = max(1, columns_fitting(widths, width))

        col_start = 0
        if self._selection is not None:
            col_end = self._selection // nb_rows
            if col_end >= nb_cols:
                nb_cols = max(1, columns_fitting(reversed(widths[: col_end + 1]), width))
                col_start = col_end - nb_cols + 1

        col_stop = col_start + nb_cols
        grid: list[CompletionRow] = []

        for r in range(nb_rows):
            row: CompletionRow = []
            for c in range(col_start, col_stop):
                entry = columns[c][r]

                if r == nb_rows - 1 and c == col_stop - 1 and c + 1 < len(columns):
                    entry += TRUNCATION_MARKER

                row.extend(self._entry_cells(entry, widths[c], r + c * nb_rows))
            grid.append(row)

        return grid

    def _entry_cells(self, entry: str, col_width: int, index: int) -> list[Cell]:
        entry_str = entry.ljust(col_width)

        if index == self._selection:
            return [Cell(entry_str, CellRole.SELECTED)]
        if not entry:
            return []

        prefix = self._name_filter
        if prefix and entry.startswith(prefix):
            return [Cell(prefix, CellRole.PREFIX), Cell(entry_str[len(prefix) :])]
        return [Cell(entry_str)]

    # === Rendering ===

    def render(
        self,
        console: Console,
        max_height: int | None = None,
        min_height: int | None = None,
        color: bool | None = None,
    ) -> int:
        """Print the popup to ``console`` and return the number of rows printed."""
        color = self.color if color is None else color
        rows = self.layout(max_height, min_height)
        for row in rows:
            console.print(row_to_text(row, self.theme, color), soft_wrap=True)
        return len(rows)

    def render_text(
        self,
        max_height: int | None = None,
        min_height: int | None = None,
        color: bool | None = None,
    ) -> Text:
        """The popup as a single rich Text, for compositing."""
        color = self.color if color is None else color
        return rows_to_text(self.layout(max_height, min_height), self.theme, color)
