"""Tests for logical/screen coordinate mapping."""

import pytest
from reply_tui import ScreenPosition, last_row, logical_column, row_count, screen_position


class TestRowCount:
    def test_short_line(self):
        assert row_count(3, 5, 15) == 1

    def test_empty_line(self):
        assert row_count(0, 5, 15) == 1

    def test_exactly_filling_row_wraps(self):
        # 5 + 10 == 15: the cursor needs a free column on the next row
        assert row_count(10, 5, 15) == 2

    def test_one_short_of_filling(self):
        assert row_count(9, 5, 15) == 1

    def test_long_line(self):
        assert row_count(33, 5, 15) == 3
        assert row_count(43, 5, 15) == 4

    def test_exactly_filling_continuation_row(self):
        # 10 on the first row, 15 on the second
        assert row_count(25, 5, 15) == 3

    def test_no_prompt(self):
        assert row_count(15, 0, 15) == 2
        assert row_count(14, 0, 15) == 1

    @pytest.mark.parametrize("width", [0, -4])
    def test_degenerate_width(self, width):
        assert row_count(3, 0, width) == 4


class TestScreenPosition:
    def test_first_row_includes_prompt(self):
        assert screen_position(0, 5, 15) == ScreenPosition(0, 5)
        assert screen_position(9, 5, 15) == ScreenPosition(0, 14)

    def test_continuation_rows(self):
        assert screen_position(10, 5, 15) == ScreenPosition(1, 0)
        assert screen_position(33, 5, 15) == ScreenPosition(2, 8)

    def test_named_fields(self):
        position = screen_position(12, 5, 15)
        assert position.row == 1
        assert position.col == 2


class TestLogicalColumn:
    def test_inverse_of_screen_position(self):
        for x in range(34):
            row, col = screen_position(x, 5, 15)
            assert logical_column(row, col, 5, 15, 33) == x

    def test_inside_prompt_clamps_to_zero(self):
        assert logical_column(0, 2, 5, 15, 12) == 0

    def test_past_end_clamps_to_length(self):
        assert logical_column(1, 8, 5, 15, 12) == 12

    def test_last_row(self):
        assert last_row(12, 5, 15) == 1
        assert last_row(4, 5, 15) == 0
