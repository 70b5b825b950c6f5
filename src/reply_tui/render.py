"""Structured description of the completion popup and its rich rendering."""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Iterable

from rich.text import Text


class CellRole(Enum):
    """What a piece of the popup shows, used to pick its style."""

    HEADER = auto()  # Scope label
    NORMAL = auto()
    SELECTED = auto()  # Highlighted entry
    PREFIX = auto()  # Part of an entry matching the name filter


@dataclass(frozen=True)
class Cell:
    """A run of text with a single role."""

    text: str
    role: CellRole = CellRole.NORMAL


# One screen row; an empty row is a blank line.
CompletionRow = list[Cell]


@dataclass
class CompletionTheme:
    """Styles applied to each cell role (rich style strings)."""

    header: str = "blue underline"
    normal: str = ""
    selected: str = "bold on bright_black"
    prefix: str = "bold"
    selection_marker: str = ">"  # Replaces the highlight without color

    def style_for(self, role: CellRole) -> str:
        match role:
            case CellRole.HEADER:
                return self.header
            case CellRole.SELECTED:
                return self.selected
            case CellRole.PREFIX:
                return self.prefix
            case _:
                return self.normal


def row_to_text(row: CompletionRow, theme: CompletionTheme, color: bool = True) -> Text:
    """Convert a row of cells to rich Text.

    Without color, the selected cell is marked with ``theme.selection_marker``
    and loses as many trailing padding columns, so columns stay aligned.
    """
    text = Text()

    for cell in row:
        if color:
            text.append(cell.text, style=theme.style_for(cell.role))
        elif cell.role is CellRole.SELECTED:
            marker = theme.selection_marker
            text.append(marker + cell.text[: max(0, len(cell.text) - len(marker))])
        else:
            text.append(cell.text)

    return text


def rows_to_text(
    rows: Iterable[CompletionRow], theme: CompletionTheme, color: bool = True
) -> Text:
    """Convert rows to a single newline-separated Text."""
    return Text("\n").join(row_to_text(row, theme, color) for row in rows)


def plain_rows(rows: Iterable[CompletionRow]) -> list[str]:
    """Plain text of each row, without any marker or style."""
    return ["".join(cell.text for cell in row) for row in rows]
