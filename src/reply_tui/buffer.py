"""ExpressionBuffer - multi-line expression under edition."""

from dataclasses import dataclass
from typing import Callable, Sequence

from .coordinates import last_row, logical_column, row_count, screen_position
from .terminal import TerminalWidth, get_terminal_width
from .utils import DEFAULT_WORD_DELIMITERS, is_control_char, word_bounds

# Receives (x, y, allow_scrolling) after every cursor move.
MoveListener = Callable[[int, int, bool], None]


@dataclass(frozen=True)
class Cursor:
    """Cursor position: column ``x`` on logical line ``y``.

    ``x`` may equal the line length (one past the last character).
    """

    x: int
    y: int


class ExpressionBuffer:
    """Multi-line text buffer with a wrapping-aware cursor.

    The buffer never holds zero lines and always keeps the cursor inside
    its bounds: out-of-range positions are clamped and edits at the
    boundaries are no-ops.

    Up/down navigation moves by screen row, so it depends on the terminal
    width and on the prompt drawn before each line:

    - ``prompt_width`` is reserved on the first row of line 0,
    - ``continuation_prompt_width`` on the first row of every other line.

    Example:
        buffer = ExpressionBuffer(terminal_width=lambda: 80, prompt_width=5)
        buffer.insert("def foo")
        buffer.insert_new_line(indent=2)
        buffer.insert("42")
        assert buffer.text == "def foo\\n  42"
    """

    def __init__(
        self,
        *,
        terminal_width: TerminalWidth = get_terminal_width,
        prompt_width: int = 0,
        continuation_prompt_width: int | None = None,
        indent_width: int = 1,
        word_delimiters: str = DEFAULT_WORD_DELIMITERS,
        on_move: MoveListener | None = None,
    ) -> None:
        self.terminal_width = terminal_width
        self.prompt_width = prompt_width
        self.continuation_prompt_width = (
            prompt_width if continuation_prompt_width is None else continuation_prompt_width
        )
        self.indent_width = indent_width
        self.word_delimiters = word_delimiters
        self.on_move = on_move

        self._lines: list[str] = [""]
        self._x: int = 0
        self._y: int = 0

    # === Accessors ===

    @property
    def lines(self) -> list[str]:
        """Copy of the logical lines."""
        return self._lines.copy()

    @property
    def text(self) -> str:
        """Full text content."""
        return "\n".join(self._lines)

    @property
    def cursor(self) -> Cursor:
        return Cursor(self._x, self._y)

    @property
    def current_line(self) -> str:
        return self._lines[self._y]

    @current_line.setter
    def current_line(self, value: str) -> None:
        self._lines[self._y] = value
        self._x = min(self._x, len(value))

    @property
    def previous_line(self) -> str | None:
        """Line above the cursor, None on the first line."""
        if self._y == 0:
            return None
        return self._lines[self._y - 1]

    @previous_line.setter
    def previous_line(self, value: str) -> None:
        if self._y > 0:
            self._lines[self._y - 1] = value

    @property
    def next_line(self) -> str | None:
        """Line below the cursor, None on the last line."""
        if self._y + 1 >= len(self._lines):
            return None
        return self._lines[self._y + 1]

    @next_line.setter
    def next_line(self, value: str) -> None:
        if self._y + 1 < len(self._lines):
            self._lines[self._y + 1] = value

    def cursor_on_last_line(self) -> bool:
        return self._y == len(self._lines) - 1

    def expression_before(self, x: int | None = None, y: int | None = None) -> str:
        """Text from the beginning of the buffer up to (x, y), cursor by default."""
        y = self._y if y is None else max(0, min(y, len(self._lines) - 1))
        line = self._lines[y]
        x = self._x if x is None else x
        x = max(0, min(x, len(line)))
        return "\n".join(self._lines[:y] + [line[:x]])

    # === Words ===

    def word_bounds(self) -> tuple[int, int]:
        """(start, end) columns of the word around the cursor."""
        return word_bounds(self.current_line, self._x, self.word_delimiters)

    def word_on_cursor(self) -> str:
        """Part of the word under the cursor typed so far."""
        start, _ = self.word_bounds()
        return self.current_line[start : self._x]

    def expression_before_word(self) -> str:
        """Text preceding the word under the cursor."""
        start, _ = self.word_bounds()
        return self.expression_before(start, self._y)

    def replace_word(self, replacement: str) -> None:
        """Replace the word under the cursor, leaving the cursor after it."""
        start, end = self.word_bounds()
        line = self.current_line
        self._lines[self._y] = line[:start] + replacement + line[end:]
        self._x = start + len(replacement)

    # === Mutation ===

    def insert(self, text: str) -> None:
        """Insert text at the cursor.

        Newlines split the line, other control characters are dropped.
        """
        for char in text:
            if char == "\n":
                self._split_line(0)
            elif not is_control_char(char):
                line = self._lines[self._y]
                self._lines[self._y] = line[: self._x] + char + line[self._x :]
                self._x += 1

    def insert_char(self, char: str) -> None:
        """Insert a single character at the cursor."""
        self.insert(char[:1])

    def insert_new_line(self, indent: int = 0) -> None:
        """Split the current line at the cursor, indenting the new line."""
        self._split_line(max(0, indent) * self.indent_width)

    def _split_line(self, indent: int) -> None:
        line = self._lines[self._y]
        self._lines[self._y] = line[: self._x]
        self._lines.insert(self._y + 1, " " * indent + line[self._x :])
        self._y += 1
        self._x = indent

    def delete_forward(self) -> None:
        """Delete the character under the cursor (delete key).

        At the end of a line, joins the next line onto this one.
        """
        line = self._lines[self._y]
        if self._x < len(line):
            self._lines[self._y] = line[: self._x] + line[self._x + 1 :]
        elif self._y < len(self._lines) - 1:
            self._lines[self._y] = line + self._lines.pop(self._y + 1)

    def delete_backward(self) -> None:
        """Delete the character before the cursor (backspace).

        At the start of a line, joins this line onto the previous one.
        """
        line = self._lines[self._y]
        if self._x > 0:
            self._lines[self._y] = line[: self._x - 1] + line[self._x :]
            self._x -= 1
        elif self._y > 0:
            previous = self._lines[self._y - 1]
            self._lines[self._y - 1] = previous + line
            self._lines.pop(self._y)
            self._y -= 1
            self._x = len(previous)

    def delete_line(self, index: int) -> None:
        """Remove line ``index`` with its line break."""
        if not 0 <= index < len(self._lines):
            return

        self._lines.pop(index)
        if not self._lines:
            self._lines = [""]
        self._clamp()

    def clear(self) -> None:
        """Reset to a single empty line."""
        self._lines = [""]
        self._x = 0
        self._y = 0

    def replace(self, lines: Sequence[str]) -> None:
        """Replace the whole content, keeping the cursor where it was if possible."""
        self._lines = list(lines) or [""]
        self._clamp()

    def _clamp(self) -> None:
        self._y = max(0, min(self._y, len(self._lines) - 1))
        self._x = max(0, min(self._x, len(self._lines[self._y])))

    # === Geometry ===

    def prompt_width_for(self, y: int) -> int:
        """Columns reserved for the prompt on the first row of line ``y``."""
        return self.prompt_width if y == 0 else self.continuation_prompt_width

    def line_height(self, y: int, width: int | None = None) -> int:
        """Screen rows used by line ``y``."""
        width = self.terminal_width() if width is None else width
        return row_count(len(self._lines[y]), self.prompt_width_for(y), width)

    def expression_height(self) -> int:
        """Screen rows needed to display the whole expression."""
        width = self.terminal_width()
        return sum(self.line_height(y, width) for y in range(len(self._lines)))

    # === Cursor Movement ===

    def move_left(self) -> None:
        if self._x > 0:
            self._x -= 1
        elif self._y > 0:
            self._y -= 1
            self._x = len(self._lines[self._y])
        self._notify_move(True)

    def move_right(self) -> None:
        if self._x < len(self._lines[self._y]):
            self._x += 1
        elif self._y < len(self._lines) - 1:
            self._y += 1
            self._x = 0
        self._notify_move(True)

    def move_up(self) -> None:
        """Move one screen row up, keeping the screen column."""
        width = self.terminal_width()
        row, col = screen_position(self._x, self.prompt_width_for(self._y), width)

        if row > 0:
            self._x = self._column_at(self._y, row - 1, col, width)
        elif self._y > 0:
            self._y -= 1
            target = last_row(len(self._lines[self._y]), self.prompt_width_for(self._y), width)
            self._x = self._column_at(self._y, target, col, width)
        self._notify_move(True)

    def move_down(self) -> None:
        """Move one screen row down, keeping the screen column."""
        width = self.terminal_width()
        prompt_width = self.prompt_width_for(self._y)
        row, col = screen_position(self._x, prompt_width, width)

        if row < last_row(len(self._lines[self._y]), prompt_width, width):
            self._x = self._column_at(self._y, row + 1, col, width)
        elif self._y < len(self._lines) - 1:
            self._y += 1
            self._x = self._column_at(self._y, 0, col, width)
        self._notify_move(True)

    def _column_at(self, y: int, row: int, col: int, width: int) -> int:
        return logical_column(row, col, self.prompt_width_for(y), width, len(self._lines[y]))

    def move_to(self, x: int, y: int, allow_scrolling: bool = True) -> None:
        """Place the cursor at (x, y), clamped to the buffer.

        ``allow_scrolling`` is only forwarded to ``on_move``.
        """
        self._y = max(0, min(y, len(self._lines) - 1))
        self._x = max(0, min(x, len(self._lines[self._y])))
        self._notify_move(allow_scrolling)

    def move_to_begin(self, allow_scrolling: bool = True) -> None:
        self.move_to(0, 0, allow_scrolling)

    def move_to_end(self, allow_scrolling: bool = True) -> None:
        y = len(self._lines) - 1
        self.move_to(len(self._lines[y]), y, allow_scrolling)

    def move_to_end_of_line(self, y: int, allow_scrolling: bool = True) -> None:
        y = max(0, min(y, len(self._lines) - 1))
        self.move_to(len(self._lines[y]), y, allow_scrolling)

    def _notify_move(self, allow_scrolling: bool) -> None:
        if self.on_move:
            self.on_move(self._x, self._y, allow_scrolling)
