"""Mapping between logical (line, column) and wrapped screen (row, column).

A logical line is laid out as if its prompt occupied the first columns of
its first screen row: the first row holds ``width - prompt_width``
characters, every continuation row holds ``width`` characters. A line that
exactly fills its last row still takes one more row, so the cursor always
has a free column past the last character.

All functions are pure and take the terminal width explicitly.
"""

from typing import NamedTuple


class ScreenPosition(NamedTuple):
    """Position of a character inside the rows of one logical line.

    ``col`` is the physical terminal column, so on row 0 it includes the
    prompt width.
    """

    row: int
    col: int


def _usable(width: int) -> int:
    return max(1, width)


def row_count(length: int, prompt_width: int, width: int) -> int:
    """Number of screen rows needed by a line of ``length`` characters.

    Example:
        >>> row_count(10, 5, 15)  # exactly fills the first row
        2
    """
    return (prompt_width + length) // _usable(width) + 1


def screen_position(x: int, prompt_width: int, width: int) -> ScreenPosition:
    """Screen position of logical column ``x``."""
    row, col = divmod(prompt_width + x, _usable(width))
    return ScreenPosition(row, col)


def logical_column(
    row: int, col: int, prompt_width: int, width: int, length: int
) -> int:
    """Logical column at screen position (row, col) of a line.

    Positions inside the prompt clamp to 0, positions past the end of the
    line clamp to ``length``.
    """
    x = row * _usable(width) + col - prompt_width
    return max(0, min(x, length))


def last_row(length: int, prompt_width: int, width: int) -> int:
    """Index of the last screen row of a line."""
    return row_count(length, prompt_width, width) - 1
