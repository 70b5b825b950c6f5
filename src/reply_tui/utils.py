"""Text utilities for the expression buffer."""

# Characters that end a word for completion purposes.
DEFAULT_WORD_DELIMITERS = " \n\t+-*/,;@&%<>^\\[](){}|.~"


def is_control_char(char: str) -> bool:
    """Check if character is a control character (newline excluded).

    Control characters are code points below 0x20 and DEL (0x7F).
    """
    if char == "\n":
        return False
    code = ord(char)
    return code < 0x20 or code == 0x7F


def is_word_char(char: str, delimiters: str = DEFAULT_WORD_DELIMITERS) -> bool:
    """Check if character is part of a word."""
    if not char:
        return False
    return char not in delimiters


def find_word_boundary_left(
    text: str, pos: int, delimiters: str = DEFAULT_WORD_DELIMITERS
) -> int:
    """Find the start of the word touching pos from the left.

    Stops at the first delimiter; returns pos itself when the character
    before pos is a delimiter.
    """
    i = max(0, min(pos, len(text)))

    while i > 0 and is_word_char(text[i - 1], delimiters):
        i -= 1

    return i


def find_word_boundary_right(
    text: str, pos: int, delimiters: str = DEFAULT_WORD_DELIMITERS
) -> int:
    """Find the end of the word touching pos from the right."""
    i = max(0, min(pos, len(text)))

    while i < len(text) and is_word_char(text[i], delimiters):
        i += 1

    return i


def word_bounds(
    text: str, pos: int, delimiters: str = DEFAULT_WORD_DELIMITERS
) -> tuple[int, int]:
    """Get (start, end) of the word around pos.

    Example:
        >>> word_bounds("foo.bar_baz + 1", 6)
        (4, 11)
    """
    return (
        find_word_boundary_left(text, pos, delimiters),
        find_word_boundary_right(text, pos, delimiters),
    )
