"""Pytest configuration."""

import io

import pytest
from rich.console import Console

from reply_tui import CompletionEngine, ExpressionBuffer

# Narrow terminal with a 5-column prompt ("p:00>") so wrapping shows early.
TERM_WIDTH = 15
PROMPT_WIDTH = 5


class FakeCompleter:
    """Completion callback returning fixed candidates and recording calls."""

    def __init__(self, candidates: list[str], scope_label: str = "Scope") -> None:
        self.candidates = candidates
        self.scope_label = scope_label
        self.calls: list[tuple[str, str]] = []

    def __call__(self, name_filter: str, expression_before: str):
        self.calls.append((name_filter, expression_before))
        return self.candidates, self.scope_label


@pytest.fixture
def buffer():
    """Buffer on a 15-column terminal with a 5-column prompt."""
    return ExpressionBuffer(terminal_width=lambda: TERM_WIDTH, prompt_width=PROMPT_WIDTH)


@pytest.fixture
def wrapped_buffer(buffer):
    """Three lines, the middle one spanning three screen rows.

    - "print :Hello"                       (12 chars, 2 rows)
    - "print :looo...ong"                  (33 chars, 3 rows)
    - ":end"                               (4 chars, 1 row)

    The cursor is left at the end, (4, 2).
    """
    buffer.insert("print :Hello\n")
    buffer.insert("print :loo" "ooooooooooooooo" "oooooong\n")
    buffer.insert(":end")
    return buffer


@pytest.fixture
def make_engine():
    """Factory for engines over fixed candidates on a terminal of ``width`` columns."""

    def factory(candidates: list[str], scope_label: str = "Scope", width: int = 80):
        return CompletionEngine(
            FakeCompleter(candidates, scope_label), terminal_width=lambda: width
        )

    return factory


@pytest.fixture
def console_output():
    """Console writing plain text to a string buffer, with the buffer."""
    output = io.StringIO()
    console = Console(file=output, color_system=None, width=200, highlight=False)
    return console, output
