"""Tests for text utilities."""

from reply_tui import (
    find_word_boundary_left,
    find_word_boundary_right,
    is_control_char,
    word_bounds,
)


class TestIsControlChar:
    def test_printable(self):
        assert not is_control_char("a")
        assert not is_control_char(" ")
        assert not is_control_char("é")

    def test_newline_is_not_control(self):
        assert not is_control_char("\n")

    def test_control(self):
        assert is_control_char("\x00")
        assert is_control_char("\t")
        assert is_control_char("\x1b")
        assert is_control_char("\x7f")


class TestWordBoundaries:
    def test_left_stops_at_delimiter(self):
        assert find_word_boundary_left("foo.bar", 7) == 4

    def test_left_at_start(self):
        assert find_word_boundary_left("foo", 0) == 0

    def test_left_after_delimiter(self):
        assert find_word_boundary_left("foo(", 4) == 4

    def test_right_stops_at_delimiter(self):
        assert find_word_boundary_right("foo bar", 1) == 3

    def test_right_at_end(self):
        assert find_word_boundary_right("foo", 3) == 3

    def test_out_of_range_positions_clamp(self):
        assert find_word_boundary_left("foo", 10) == 0
        assert find_word_boundary_right("foo", -2) == 3

    def test_word_bounds(self):
        assert word_bounds("foo.bar_baz + 1", 6) == (4, 11)

    def test_word_bounds_custom_delimiters(self):
        assert word_bounds("a-b c", 1, delimiters=" ") == (0, 3)
